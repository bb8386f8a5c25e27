"""File name rules: classification and collision-free target names."""
from __future__ import annotations

import os

from .outcomes import Classification, WatchedFile

TEST_FILE_PREFIX = "TEST-FILE"
MIN_NAME_LENGTH = 9
PROCESSED_EXTENSION = ".processed"


def watched_file(path: str) -> WatchedFile:
    name, ext = os.path.splitext(os.path.basename(path))
    return WatchedFile(path=os.path.abspath(path), name=name, ext=ext)


def classify(name: str) -> Classification:
    """Classify a base name (extension already stripped).

    The test-marker prefix wins over the length rule.
    """
    if name[: len(TEST_FILE_PREFIX)].upper() == TEST_FILE_PREFIX:
        return Classification.TEST_MARKER
    if len(name) < MIN_NAME_LENGTH:
        return Classification.MALFORMED
    return Classification.NORMAL


def safe_target_path(path: str, target_dir: str) -> str:
    """Return a path inside ``target_dir`` where no file exists yet.

    The source file name is used as-is when free, otherwise a version tag is
    inserted before the extension: ``name.[001].ext``, ``name.[002].ext``...
    The check is not atomic with the caller's subsequent move.
    """
    file_name = os.path.basename(path)
    if not file_name:
        raise ValueError(f"No file name in path: {path!r}")

    base, ext = os.path.splitext(file_name)
    dest = os.path.join(target_dir, file_name)
    version = 1
    while os.path.exists(dest):
        dest = os.path.join(target_dir, f"{base}.[{version:03d}]{ext}")
        version += 1

    return dest
