"""Result values and errors shared by the scan-classify-move pipeline.

Expected conditions (a locked file, a missing watch folder, a failed
transfer) are reported as values. Only configuration problems are raised.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional


class FolderWatcherError(Exception):
    """Base error for the project."""


class ConfigurationError(FolderWatcherError):
    pass


class Classification(enum.Enum):
    NORMAL = "normal"
    TEST_MARKER = "test_marker"
    MALFORMED = "malformed"


class Outcome(enum.Enum):
    MOVED = "moved"
    COPIED = "copied"
    LOCKED = "locked"
    FAILED = "failed"


@dataclass(frozen=True)
class WatchedFile:
    path: str
    name: str  # base name without extension
    ext: str   # includes the leading dot, "" when absent


@dataclass
class HandlerResult:
    source: str
    classification: Classification
    outcome: Outcome
    target: Optional[str] = None
    error: Optional[BaseException] = None


@dataclass
class ScanResult:
    files: List[str] = field(default_factory=list)
    folder_missing: bool = False


@dataclass
class CycleReport:
    watch_folder: str
    folder_missing: bool = False
    results: List[HandlerResult] = field(default_factory=list)

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    def summary(self) -> str:
        parts = [f"{len(self.results)} files"]
        parts += [f"{self.count(o)} {o.value}" for o in Outcome if self.count(o)]
        return ", ".join(parts)
