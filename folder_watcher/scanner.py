from __future__ import annotations

import fnmatch
import os

from .outcomes import ScanResult


def scan_folder(folder: str, pattern: str = "*.pdf") -> ScanResult:
    """List files directly inside ``folder`` whose names match ``pattern``.

    A missing folder is not an error: the result is empty and flagged so the
    caller can skip the rest of its cycle. Matching is case-insensitive on
    Windows and case-sensitive elsewhere, like the platform's own globbing.
    """
    if not os.path.isdir(folder):
        return ScanResult(files=[], folder_missing=True)

    files = []
    try:
        with os.scandir(folder) as entries:
            for entry in entries:
                if entry.is_file() and fnmatch.fnmatch(entry.name, pattern):
                    files.append(os.path.join(folder, entry.name))
    except FileNotFoundError:
        # Removed between the check and the listing
        return ScanResult(files=[], folder_missing=True)

    files.sort(key=lambda p: os.path.basename(p))
    return ScanResult(files=files)
