"""Step outcomes and run statistics.

Provides Pydantic v2 models for the outcome of a single executed step
(:class:`StepResult`) and the running tally of a whole run (:class:`Stats`).
Both are frozen: ``Stats.fold`` returns a new value instead of mutating, so
the execution loop threads one ``Stats`` through explicitly.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from project_updater.planner.models import StepKind


class StepStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SUCCEEDED_WITH_WARNING = "succeeded_with_warning"


# ---------------------------------------------------------------------------
# Individual step outcome
# ---------------------------------------------------------------------------


class StepResult(BaseModel):
    """Recorded outcome of one executed step."""

    model_config = ConfigDict(frozen=True)

    kind: StepKind
    identifier: str = Field(..., description="Package name, file path or task name")
    status: StepStatus
    duration_seconds: float = Field(default=0.0, ge=0.0)
    error: Optional[str] = Field(default=None, description="First line of the diagnostic")
    changed: bool = Field(
        default=True, description="False when the step succeeded without any effect"
    )

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        """True unless the step failed outright."""
        return self.status is not StepStatus.FAILED


# ---------------------------------------------------------------------------
# Run statistics
# ---------------------------------------------------------------------------


class Stats(BaseModel):
    """Success and failure counters plus the run's wall-clock window."""

    model_config = ConfigDict(frozen=True)

    started_at: float = Field(..., description="Monotonic clock reading at run start")
    finished_at: Optional[float] = None
    succeeded: dict[StepKind, int] = Field(default_factory=dict)
    failed: dict[StepKind, int] = Field(default_factory=dict)
    warnings: int = Field(default=0, ge=0)

    @classmethod
    def start(cls, now: float) -> "Stats":
        return cls(started_at=now)

    def fold(self, result: StepResult) -> "Stats":
        """Return new stats with *result* counted.

        Only a ``SUCCEEDED`` result that changed something increments its
        kind's success counter.
        """
        if result.status is StepStatus.SUCCEEDED:
            if not result.changed:
                return self
            return self.model_copy(update={"succeeded": _bump(self.succeeded, result.kind)})
        if result.status is StepStatus.FAILED:
            return self.model_copy(update={"failed": _bump(self.failed, result.kind)})
        return self.model_copy(update={"warnings": self.warnings + 1})

    def finish(self, now: float) -> "Stats":
        """Freeze the elapsed-time window at *now* (report time)."""
        return self.model_copy(update={"finished_at": now})

    # -- Summary helpers -----------------------------------------------------

    def count(self, kind: StepKind) -> int:
        return self.succeeded.get(kind, 0)

    @property
    def packages_removed(self) -> int:
        return self.count(StepKind.REMOVE_PACKAGE)

    @property
    def packages_added(self) -> int:
        return self.count(StepKind.ADD_PACKAGE)

    @property
    def files_edited(self) -> int:
        return self.count(StepKind.EDIT_CONFIG)

    @property
    def files_created(self) -> int:
        return self.count(StepKind.CREATE_FILE)

    @property
    def failures(self) -> int:
        return sum(self.failed.values())

    @property
    def elapsed_seconds(self) -> float:
        """Wall-clock seconds from start to finish (0.0 until finished)."""
        if self.finished_at is None:
            return 0.0
        return max(0.0, self.finished_at - self.started_at)

    def summary_dict(self) -> dict[str, Any]:
        """Return a condensed summary suitable for logs and reports."""
        return {
            "packages_removed": self.packages_removed,
            "packages_added": self.packages_added,
            "files_edited": self.files_edited,
            "files_created": self.files_created,
            "failures": self.failures,
            "warnings": self.warnings,
            "elapsed_seconds": round(self.elapsed_seconds, 1),
        }


def _bump(counts: dict[StepKind, int], kind: StepKind) -> dict[StepKind, int]:
    updated = dict(counts)
    updated[kind] = updated.get(kind, 0) + 1
    return updated
