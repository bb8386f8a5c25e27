"""Fixed-interval ticker driving the scan cycle on one background thread."""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

_default_logger = logging.getLogger("folder_watcher")


class Ticker:
    """Run ``action`` every ``interval`` seconds until stopped.

    Cycles never overlap: every run of the action, whether from the ticker
    thread or from :meth:`tick`, holds the same cycle lock, and a slow action
    simply delays the next one. :meth:`stop` lets a running action finish;
    a later :meth:`start` waits for it before ticking again.
    """

    def __init__(
        self,
        interval: float,
        action: Callable[[], object],
        logger: Optional[logging.Logger] = None,
        name: str = "folder-watcher-ticker",
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.action = action
        self.logger = logger or _default_logger
        self.name = name
        self._stop_event = threading.Event()
        self._wake_event = threading.Event()
        self._cycle_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def stopping(self) -> bool:
        """Stop was requested but the last cycle is still finishing."""
        return self.running and self._stop_event.is_set()

    def start(self) -> bool:
        if self.stopping:
            self.logger.info("Waiting for the previous cycle to finish")
            self._thread.join()
        elif self.running:
            self.logger.debug("Ticker already running")
            return False

        self._stop_event.clear()
        self._wake_event.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        return True

    def stop(self, timeout: Optional[float] = None) -> bool:
        """Stop ticking; returns False while a cycle is still in flight."""
        if not self.running:
            return False

        self._stop_event.set()
        self._wake_event.set()
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def trigger(self) -> None:
        """Ask for an early cycle; coalesces with any pending request."""
        self._wake_event.set()

    def tick(self) -> object:
        """Run the action once on the calling thread."""
        with self._cycle_lock:
            return self.action()

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self._wake_event.wait(self.interval)
            self._wake_event.clear()
            if self._stop_event.is_set():
                break
            try:
                with self._cycle_lock:
                    self.action()
            except Exception:
                self.logger.exception("Scheduled cycle failed")
