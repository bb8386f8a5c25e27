"""Periodic scan of the watch folder and routing of each file it finds.

Files whose base name starts with ``TEST-FILE`` are liveness probes: they are
copied in place with a ``.processed`` extension and the original removed.
Names shorter than nine characters are moved to the error folder. Everything
else is moved to the processing folder. Locked files are left for the next
cycle.
"""
from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from . import config as cfg
from .events import NewFileHandler, start_observer
from .locking import is_file_locked
from .naming import PROCESSED_EXTENSION, classify, safe_target_path, watched_file
from .outcomes import Classification, CycleReport, HandlerResult, Outcome
from .paths import SpecialFolderRegistry, provision_folders, resolve_path
from .scanner import scan_folder
from .scheduler import Ticker
from .transfer import copy_no_clobber, move_no_clobber


class FileProcessor:
    def __init__(
        self,
        config: cfg.ConfigProvider,
        logger: Optional[logging.Logger] = None,
        registry: Optional[SpecialFolderRegistry] = None,
        interval_seconds: Optional[float] = None,
        lock_check: Callable[[str], bool] = is_file_locked,
    ) -> None:
        self.config = config
        self.logger = logger or logging.getLogger("folder_watcher")
        self.registry = registry
        self.interval_seconds = interval_seconds
        self.lock_check = lock_check
        self.ticker: Optional[Ticker] = None
        self.observer = None

    # -- configuration -------------------------------------------------

    def folder_path(self, key: str) -> str:
        return resolve_path(cfg.required(self.config, key), self.registry)

    @property
    def watch_folder(self) -> str:
        return self.folder_path(cfg.FOLDER_TO_WATCH)

    @property
    def processing_folder(self) -> str:
        return self.folder_path(cfg.PROCESSING_FOLDER)

    @property
    def error_folder(self) -> str:
        return self.folder_path(cfg.ERROR_FOLDER)

    def check_folders(self) -> list:
        """Create any missing folder; returns those that could not be created."""
        return provision_folders(
            [self.watch_folder, self.processing_folder, self.error_folder], logger=self.logger
        )

    # -- lifecycle -----------------------------------------------------

    @property
    def running(self) -> bool:
        return self.ticker is not None and self.ticker.running

    def start(self) -> None:
        self.logger.info("Starting FileProcessor")

        settings = cfg.Settings.from_provider(self.config)
        interval = self.interval_seconds or settings.interval_seconds

        self.check_folders()

        if self.running and not self.ticker.stopping:
            self.logger.debug("FileProcessor already running")
            return

        self.logger.info("Scheduling process to run every %s seconds", interval)
        if self.ticker is None:
            self.ticker = Ticker(interval, self.run_cycle, logger=self.logger)
        else:
            # Previous ticker still finishing its last cycle
            self.ticker.interval = interval
        self.ticker.start()

        if settings.scan_on_events:
            handler = NewFileHandler(self.ticker.trigger, pattern=settings.file_pattern, logger=self.logger)
            try:
                self.observer = start_observer(self.watch_folder, handler)
                self.logger.info("Watching for file events in: %s", self.watch_folder)
            except OSError:
                self.logger.exception("Unable to watch for file events; relying on the schedule")

    def stop(self, timeout: Optional[float] = None) -> None:
        self.logger.info("Stopping FileProcessor")

        if self.observer is not None:
            self.observer.stop()
            self.observer.join(timeout)
            self.observer = None

        if self.ticker is not None:
            self.ticker.stop(timeout)
            if self.ticker.running:
                self.logger.warning("Scan cycle still in progress; it will finish before the next start")
            else:
                self.ticker = None

    # -- cycle ---------------------------------------------------------

    def run_cycle(self) -> CycleReport:
        self.logger.debug("Processing files in watch folder")

        watch_folder = self.watch_folder
        pattern = self.config.get(cfg.FILE_PATTERN) or cfg.DEFAULT_FILE_PATTERN
        report = CycleReport(watch_folder=watch_folder)

        self.check_folders()

        scan = scan_folder(watch_folder, pattern)
        if scan.folder_missing:
            self.logger.error("Folder To Watch is not found or is inaccessible: %s", watch_folder)
            report.folder_missing = True
            return report

        if not scan.files:
            return report

        self.logger.info("Processing %d files", len(scan.files))
        for path in scan.files:
            report.results.append(self.dispatch(path))

        self.logger.info("Cycle complete: %s", report.summary())
        return report

    def dispatch(self, path: str) -> HandlerResult:
        kind = classify(watched_file(path).name)
        if kind is Classification.TEST_MARKER:
            return self.process_test_file(path)
        if kind is Classification.MALFORMED:
            return self.handle_file_error(path, "Filename length too short")
        return self.process_file(path)

    # -- handlers ------------------------------------------------------

    def process_file(self, path: str) -> HandlerResult:
        self.logger.info("Processing file: %s", path)
        result = HandlerResult(path, Classification.NORMAL, Outcome.FAILED)

        if self.lock_check(path):
            self.logger.warning("File access locked, not ready for move: %s", path)
            result.outcome = Outcome.LOCKED
            return result

        try:
            result.target = safe_target_path(path, self.processing_folder)
            self.logger.info("Moving file to processing folder: %s -> %s", path, result.target)
            move_no_clobber(path, result.target)
            result.outcome = Outcome.MOVED
        except (OSError, ValueError) as exc:
            self.logger.exception("Error processing file: %s", path)
            result.error = exc

        return result

    def process_test_file(self, path: str) -> HandlerResult:
        self.logger.info("Processing TEST file: %s", path)
        result = HandlerResult(path, Classification.TEST_MARKER, Outcome.FAILED)

        if self.lock_check(path):
            self.logger.warning("File access locked, not ready for test: %s", path)
            result.outcome = Outcome.LOCKED
            return result

        try:
            # Change extension as confirmation of file detection
            renamed = os.path.splitext(path)[0] + PROCESSED_EXTENSION
            result.target = safe_target_path(renamed, os.path.dirname(path))
            copy_no_clobber(path, result.target)
            os.remove(path)
            result.outcome = Outcome.COPIED
        except (OSError, ValueError) as exc:
            self.logger.exception("Error processing test file: %s", path)
            result.error = exc

        return result

    def handle_file_error(self, path: str, reason: str) -> HandlerResult:
        self.logger.error("Handling file error: '%s' :: %s", reason, path)
        result = HandlerResult(path, Classification.MALFORMED, Outcome.FAILED)

        if self.lock_check(path):
            self.logger.warning("File access locked, not ready for move: %s", path)
            result.outcome = Outcome.LOCKED
            return result

        try:
            result.target = safe_target_path(path, self.error_folder)
            self.logger.info("Moving file to error folder: %s -> %s", path, result.target)
            move_no_clobber(path, result.target)
            result.outcome = Outcome.MOVED
        except (OSError, ValueError) as exc:
            self.logger.exception("Error handling file error: %s", path)
            result.error = exc

        return result
