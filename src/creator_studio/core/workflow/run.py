"""WorkflowRun - state of a single pipeline execution.

A run owns its ordered list of WorkflowStep objects. Only the
orchestrator task that created the run mutates them.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from creator_studio.core.workflow.step import StepStatus, WorkflowStep

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    """Overall run status, derived from step states."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class WorkflowRunInfo:
    """Serializable run metadata."""

    run_id: str
    workflow: str
    topic: str
    status: RunStatus
    started_at: datetime
    completed_at: datetime | None
    error: str | None
    cancelled: bool
    steps: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "run_id": self.run_id,
            "workflow": self.workflow,
            "topic": self.topic,
            "status": self.status.value,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "error": self.error,
            "cancelled": self.cancelled,
            "steps": self.steps,
        }


class WorkflowRun:
    """A single execution of a pipeline against one topic.

    Created with every step PENDING, so a caller can render placeholders
    before any network activity. The orchestrator attaches the executing
    task; wait() and cancel() operate on it.
    """

    def __init__(self, workflow: str, topic: str, steps: list[WorkflowStep]) -> None:
        self._run_id = str(uuid4())
        self._workflow = workflow
        self._topic = topic
        self._steps = steps
        self._error: str | None = None
        self._cancelled = False
        self._started_at = datetime.now(UTC)
        self._completed_at: datetime | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def run_id(self) -> str:
        """Unique run identifier."""
        return self._run_id

    @property
    def workflow(self) -> str:
        """Name of the pipeline being executed."""
        return self._workflow

    @property
    def topic(self) -> str:
        """The originating topic."""
        return self._topic

    @property
    def steps(self) -> list[WorkflowStep]:
        """Steps in execution order."""
        return self._steps

    @property
    def error(self) -> str | None:
        """Message of the last caught error, for the run-level banner."""
        return self._error

    @property
    def cancelled(self) -> bool:
        """Whether the run was cancelled or superseded by a newer run."""
        return self._cancelled

    @property
    def status(self) -> RunStatus:
        """Failed if any step failed, completed if all completed, else running."""
        if any(step.status is StepStatus.FAILED for step in self._steps):
            return RunStatus.FAILED
        if all(step.status is StepStatus.COMPLETED for step in self._steps):
            return RunStatus.COMPLETED
        return RunStatus.RUNNING

    @property
    def is_complete(self) -> bool:
        """Whether the executing task has finished (or was never attached)."""
        return self._task is None or self._task.done()

    def get_step(self, step_id: str) -> WorkflowStep:
        """Look up a step by ID.

        Raises:
            KeyError: If no step has this ID.
        """
        for step in self._steps:
            if step.id == step_id:
                return step
        raise KeyError(step_id)

    async def wait(self) -> RunStatus:
        """Wait for the run to finish and return its final status.

        Never raises for step failures; those are reported as FAILED.
        A cancelled run returns whatever status its steps reached.
        """
        if self._task is not None:
            try:
                await asyncio.shield(self._task)
            except asyncio.CancelledError:
                if not self._task.cancelled():
                    raise
        return self.status

    async def cancel(self) -> None:
        """Cancel the executing task, if any."""
        self._cancelled = True
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._mark_finished()

    def _attach(self, task: asyncio.Task[None]) -> None:
        self._task = task

    def _record_error(self, message: str) -> None:
        self._error = message

    def _mark_finished(self) -> None:
        if self._completed_at is None:
            self._completed_at = datetime.now(UTC)

    def to_info(self) -> WorkflowRunInfo:
        """Get serializable run info."""
        return WorkflowRunInfo(
            run_id=self._run_id,
            workflow=self._workflow,
            topic=self._topic,
            status=self.status,
            started_at=self._started_at,
            completed_at=self._completed_at,
            error=self._error,
            cancelled=self._cancelled,
            steps=[step.to_dict() for step in self._steps],
        )

    def __repr__(self) -> str:
        return (
            f"WorkflowRun(workflow={self._workflow!r}, topic={self._topic!r}, "
            f"status={self.status.value})"
        )
