"""Wake the ticker early when a matching file lands in the watch folder."""
from __future__ import annotations

import fnmatch
import logging
import os
from typing import Callable, Optional

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer


class NewFileHandler(FileSystemEventHandler):
    def __init__(
        self,
        wake: Callable[[], None],
        pattern: str = "*.pdf",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__()
        self.wake = wake
        self.pattern = pattern
        self.logger = logger or logging.getLogger("folder_watcher")

    def _matches(self, path) -> bool:
        if isinstance(path, bytes):
            path = os.fsdecode(path)
        return fnmatch.fnmatch(os.path.basename(path), self.pattern)

    def on_created(self, event):
        # Ignore directories
        if event.is_directory:
            return
        if self._matches(event.src_path):
            self.logger.debug("New file detected: %s", event.src_path)
            self.wake()

    def on_moved(self, event):
        if event.is_directory:
            return
        if self._matches(event.dest_path):
            self.logger.debug("File moved into watch folder: %s", event.dest_path)
            self.wake()


def start_observer(folder: str, handler: NewFileHandler) -> Observer:
    observer = Observer()
    observer.schedule(handler, folder, recursive=False)
    observer.start()
    return observer
