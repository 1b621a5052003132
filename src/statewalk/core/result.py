"""CheckResult dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from statewalk.errors import WalkFailure


@dataclass
class CheckResult:
    """The complete output of a check run."""

    exploration_limit: int
    walks_explored: int = 0
    steps_taken: int = 0
    failure: WalkFailure | None = None
    original_failure: WalkFailure | None = None
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        """True if no walk failed within the exploration limit."""
        return self.failure is None

    @property
    def shrink_ratio(self) -> float:
        """Length of the minimized walk relative to the first failing walk.

        1.0 means shrinking removed nothing (or nothing failed).
        """
        if self.failure is None or self.original_failure is None:
            return 1.0
        original = len(self.original_failure.walk)
        if original == 0:
            return 1.0
        return len(self.failure.walk) / original

    def finish(self) -> None:
        """Mark the check as finished."""
        self.finished_at = datetime.now()
        self.duration_ms = (self.finished_at - self.started_at).total_seconds() * 1000

    def raise_for_failure(self) -> None:
        """Raise the minimized failure, if there is one."""
        if self.failure is not None:
            raise self.failure

    def summary(self) -> dict[str, int | float | bool | str | None]:
        """Get a summary of the check."""
        return {
            "success": self.success,
            "walks_explored": self.walks_explored,
            "exploration_limit": self.exploration_limit,
            "steps_taken": self.steps_taken,
            "failing_walk_length": len(self.failure.walk) if self.failure else None,
            "original_walk_length": (
                len(self.original_failure.walk) if self.original_failure else None
            ),
            "error": type(self.failure.root_cause).__name__ if self.failure else None,
            "duration_ms": round(self.duration_ms, 2),
        }
