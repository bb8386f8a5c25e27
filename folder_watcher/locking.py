"""Detect files that another writer still holds open."""
from __future__ import annotations

import os
import sys

if sys.platform == "win32":
    import ctypes
    from ctypes import wintypes

    _kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    _kernel32.CreateFileW.argtypes = [
        wintypes.LPCWSTR, wintypes.DWORD, wintypes.DWORD, wintypes.LPVOID,
        wintypes.DWORD, wintypes.DWORD, wintypes.HANDLE,
    ]
    _kernel32.CreateFileW.restype = wintypes.HANDLE
    _kernel32.CloseHandle.argtypes = [wintypes.HANDLE]
    _kernel32.CloseHandle.restype = wintypes.BOOL

    GENERIC_READ = 0x80000000
    OPEN_EXISTING = 3
    FILE_ATTRIBUTE_NORMAL = 0x80
    INVALID_HANDLE_VALUE = wintypes.HANDLE(-1).value
else:
    import fcntl


def _is_locked_windows(path: str) -> bool:
    # Share mode 0: any other open handle makes this fail with a sharing violation
    handle = _kernel32.CreateFileW(
        os.path.abspath(path), GENERIC_READ, 0, None, OPEN_EXISTING, FILE_ATTRIBUTE_NORMAL, None
    )
    if handle == INVALID_HANDLE_VALUE:
        return True
    _kernel32.CloseHandle(handle)
    return False


def _is_locked_posix(path: str) -> bool:
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError:
        return True

    try:
        fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        fcntl.flock(fd, fcntl.LOCK_UN)
    except OSError:
        return True
    finally:
        os.close(fd)

    return False


def is_file_locked(path: str) -> bool:
    """Return True if ``path`` cannot be opened for exclusive reading.

    On Windows the file is opened with no sharing, so any other open handle
    counts. On POSIX, where sharing modes do not exist, a conflicting
    ``flock`` held by another handle counts. Any failure to open (sharing
    violation, permission error, the file having vanished) counts as locked
    so the caller retries on a later cycle instead of acting on the file.
    """
    if sys.platform == "win32":
        return _is_locked_windows(path)
    return _is_locked_posix(path)
