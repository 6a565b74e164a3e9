"""Progress updates pushed to the UI while a workflow runs."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from creator_studio.core.content import StepContent
from creator_studio.core.workflow.step import StepStatus


def _utc_now() -> datetime:
    """Return current UTC time (helper for default_factory)."""
    return datetime.now(UTC)


@dataclass(frozen=True)
class ProgressUpdate:
    """A single step status transition.

    For every step the orchestrator emits, in order:
        running -> [selecting] -> completed | failed

    ``data`` is the step content for selecting/completed updates and
    None otherwise. ``error`` is set only for failed updates.
    """

    run_id: str
    step_id: str
    status: StepStatus
    data: StepContent | None = None
    error: str | None = None
    timestamp: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "run_id": self.run_id,
            "step_id": self.step_id,
            "status": self.status.value,
            "data": self.data.to_dict() if self.data is not None else None,
            "error": self.error,
            "timestamp": self.timestamp.isoformat(),
        }


# Synchronous callback; exceptions raised inside it are logged and ignored
ProgressSink = Callable[[ProgressUpdate], None]
