"""Special-folder token expansion and folder provisioning.

Configured folder paths may embed tokens such as ``{Desktop}``; every
registered token is replaced textually with the OS location it stands for.
Unknown tokens are left as they are.
"""
from __future__ import annotations

import logging
import os
import sys
import tempfile
from typing import Callable, Dict, Iterable, List, Optional

DESKTOP = "{Desktop}"
LOCAL_APPLICATION_DATA = "{LocalApplicationData}"
APPLICATION_DATA = "{ApplicationData}"
USER_PROFILE = "{UserProfile}"
TEMP = "{Temp}"

_default_logger = logging.getLogger("folder_watcher")


def _is_windows() -> bool:
    return sys.platform == "win32"


def desktop_folder() -> str:
    if _is_windows():
        return os.path.join(os.environ.get("USERPROFILE", os.path.expanduser("~")), "Desktop")
    return os.path.join(os.path.expanduser("~"), "Desktop")


def local_application_data_folder() -> str:
    if _is_windows() and os.environ.get("LOCALAPPDATA"):
        return os.environ["LOCALAPPDATA"]
    return os.environ.get("XDG_DATA_HOME") or os.path.join(os.path.expanduser("~"), ".local", "share")


def application_data_folder() -> str:
    if _is_windows() and os.environ.get("APPDATA"):
        return os.environ["APPDATA"]
    return os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")


class SpecialFolderRegistry:
    """Maps token strings to functions returning the folder they stand for.

    Resolvers are called lazily on every :meth:`resolve` so environment
    changes are picked up without rebuilding the registry.
    """

    def __init__(self, resolvers: Optional[Dict[str, Callable[[], str]]] = None) -> None:
        self._resolvers: Dict[str, Callable[[], str]] = dict(resolvers or {})

    def register(self, token: str, resolver: Callable[[], str]) -> None:
        if not token:
            raise ValueError("token must be a non-empty string")
        self._resolvers[token] = resolver

    def unregister(self, token: str) -> None:
        self._resolvers.pop(token, None)

    def tokens(self) -> List[str]:
        return list(self._resolvers)

    def resolve(self, path: str) -> str:
        if path is None:
            raise TypeError("path must not be None")
        for token, resolver in self._resolvers.items():
            if token in path:
                path = path.replace(token, resolver())
        return path


def default_registry() -> SpecialFolderRegistry:
    return SpecialFolderRegistry(
        {
            DESKTOP: desktop_folder,
            LOCAL_APPLICATION_DATA: local_application_data_folder,
            APPLICATION_DATA: application_data_folder,
            USER_PROFILE: lambda: os.path.expanduser("~"),
            TEMP: tempfile.gettempdir,
        }
    )


_registry = default_registry()


def resolve_path(path: str, registry: Optional[SpecialFolderRegistry] = None) -> str:
    """Return ``path`` with every known special-folder token expanded."""
    return (registry or _registry).resolve(path)


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def provision_folders(folders: Iterable[str], logger: Optional[logging.Logger] = None) -> List[str]:
    """Create each folder that does not exist yet.

    Returns the folders that could not be created. A failure is logged and
    the remaining folders are still attempted.
    """
    logger = logger or _default_logger
    failed: List[str] = []

    logger.debug("Checking folder paths")
    for folder in folders:
        if os.path.isdir(folder):
            continue
        logger.info("Creating folder: %s", folder)
        try:
            ensure_dir(folder)
        except OSError:
            logger.exception("Unable to create folder: %s", folder)
            failed.append(folder)
    logger.debug("Checking folder paths completed")

    return failed
