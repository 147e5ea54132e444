from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class OutcomeStatus(str, Enum):
    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class WorkItem:
    """One discovered input in transit through the work queue."""

    path: Path


@dataclass(frozen=True)
class ProcessingOutcome:
    """Terminal classification of one discovered input."""

    path: Path
    status: OutcomeStatus
    output_path: Optional[Path] = None
    reason: Optional[str] = None

    @classmethod
    def skipped(cls, path: Path, output_path: Path) -> "ProcessingOutcome":
        return cls(path=path, status=OutcomeStatus.SKIPPED, output_path=output_path)

    @classmethod
    def succeeded(cls, path: Path, output_path: Path) -> "ProcessingOutcome":
        return cls(path=path, status=OutcomeStatus.SUCCEEDED, output_path=output_path)

    @classmethod
    def failed(cls, path: Path, reason: str, output_path: Optional[Path] = None) -> "ProcessingOutcome":
        return cls(path=path, status=OutcomeStatus.FAILED, output_path=output_path, reason=reason)


@dataclass
class RunSummary:
    discovered: int = 0
    outcomes: List[ProcessingOutcome] = field(default_factory=list)
    aborted_discovery: bool = False
    discovery_error: Optional[Exception] = None

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def succeeded(self) -> int:
        return self._count(OutcomeStatus.SUCCEEDED)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)

    @property
    def ok(self) -> bool:
        return self.discovery_error is None and self.failed == 0
