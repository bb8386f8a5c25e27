"""FolderWatcher: poll a folder and route each matching file by its name.

Keep file-handling logic (classify, lock-check, move) here so the runner in
``watcher.py`` remains small and testable.
"""

from .file_processor import FileProcessor
from .outcomes import Classification, ConfigurationError, CycleReport, HandlerResult, Outcome

__all__ = [
    "Classification",
    "ConfigurationError",
    "CycleReport",
    "FileProcessor",
    "HandlerResult",
    "Outcome",
]
