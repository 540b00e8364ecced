# ocr_mover/core/models.py

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from .errors import OcrMoverError


class FileOutcome(Enum):
    """What happened to a single file during a batch run."""
    MOVED = auto()
    SKIPPED_BLANK = auto()
    ERROR = auto()


class Severity(Enum):
    """Console message severity. Each value is the rich color it prints in."""
    INFO = "cyan"
    SUCCESS = "green"
    WARNING = "yellow"
    ERROR = "red"


class RunSummary(Enum):
    """The three mutually exclusive ways a batch run can end."""
    NONE_MOVED = auto()
    PARTIAL = auto()
    ALL_MOVED = auto()


@dataclass
class FileResult:
    source: Path
    destination: Path
    outcome: FileOutcome
    error: OcrMoverError | OSError | None = None


@dataclass
class BatchCounters:
    """
    Running counters for one batch run.

    `blank` files are neither a success nor an error, but they are part of
    `total`, so a run with blank files can only ever be PARTIAL or NONE_MOVED.
    """
    total: int = 0
    moved: int = 0
    errors: int = 0
    blank: int = 0

    @property
    def summary(self) -> RunSummary:
        if self.moved == 0:
            return RunSummary.NONE_MOVED
        if self.moved < self.total:
            return RunSummary.PARTIAL
        return RunSummary.ALL_MOVED
