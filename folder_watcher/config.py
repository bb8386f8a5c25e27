"""Configuration providers.

Keys use the service's setting names (``FolderToWatch``, ``ProcessingFolder``
...). :class:`EnvConfig` reads them from the environment as
``FOLDER_TO_WATCH``, ``PROCESSING_FOLDER`` and so on, after loading an
optional ``.env`` file.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from dotenv import load_dotenv

from .outcomes import ConfigurationError

FOLDER_TO_WATCH = "FolderToWatch"
PROCESSING_FOLDER = "ProcessingFolder"
ERROR_FOLDER = "ErrorFolder"
FILE_PATTERN = "FilePattern"
PROCESS_FILES_INTERVAL = "ProcessFilesInterval"
SCAN_ON_FILE_EVENTS = "ScanOnFileEvents"

DEFAULT_FILE_PATTERN = "*.pdf"
DEFAULT_INTERVAL_MINUTES = 1.0

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def env_name(key: str) -> str:
    """``FolderToWatch`` -> ``FOLDER_TO_WATCH``."""
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", key).upper()


class ConfigProvider:
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        raise NotImplementedError


class DictConfig(ConfigProvider):
    def __init__(self, values: Optional[Mapping[str, object]] = None) -> None:
        self.values = dict(values or {})

    def get(self, key, default=None):
        value = self.values.get(key)
        return default if value is None else str(value)


class EnvConfig(ConfigProvider):
    def __init__(self, env_file: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> None:
        if env_file is not None:
            load_dotenv(dotenv_path=env_file, override=False)
        self.environ = environ if environ is not None else os.environ

    def get(self, key, default=None):
        value = self.environ.get(env_name(key))
        return default if value is None else value


class LayeredConfig(ConfigProvider):
    """First provider with a value for the key wins."""

    def __init__(self, providers: Sequence[ConfigProvider]) -> None:
        self.providers = list(providers)

    def get(self, key, default=None):
        for provider in self.providers:
            value = provider.get(key)
            if value is not None:
                return value
        return default


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{key} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    folder_to_watch: str
    processing_folder: str
    error_folder: str
    file_pattern: str = DEFAULT_FILE_PATTERN
    interval_minutes: float = DEFAULT_INTERVAL_MINUTES
    scan_on_events: bool = False

    @property
    def interval_seconds(self) -> float:
        return self.interval_minutes * 60

    @classmethod
    def from_provider(cls, config: ConfigProvider) -> "Settings":
        return cls(
            folder_to_watch=required(config, FOLDER_TO_WATCH),
            processing_folder=required(config, PROCESSING_FOLDER),
            error_folder=required(config, ERROR_FOLDER),
            file_pattern=config.get(FILE_PATTERN) or DEFAULT_FILE_PATTERN,
            interval_minutes=interval_minutes(config),
            scan_on_events=_parse_bool(SCAN_ON_FILE_EVENTS, config.get(SCAN_ON_FILE_EVENTS, "false")),
        )


def required(config: ConfigProvider, key: str) -> str:
    value = config.get(key)
    if value is None or not value.strip():
        raise ConfigurationError(f"Missing required setting: {key}")
    return value.strip()


def interval_minutes(config: ConfigProvider) -> float:
    raw = config.get(PROCESS_FILES_INTERVAL)
    if raw is None or not raw.strip():
        return DEFAULT_INTERVAL_MINUTES
    try:
        minutes = float(raw)
    except ValueError:
        raise ConfigurationError(f"{PROCESS_FILES_INTERVAL} must be a number, got {raw!r}") from None
    if minutes <= 0:
        raise ConfigurationError(f"{PROCESS_FILES_INTERVAL} must be positive, got {raw!r}")
    return minutes
