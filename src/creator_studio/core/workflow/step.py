"""Workflow steps - descriptors (what to run) and live step state."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from creator_studio.core.content import StepContent


class StepStatus(Enum):
    """Step lifecycle states."""

    PENDING = "pending"  # Created, not started
    RUNNING = "running"  # Backend call in flight
    SELECTING = "selecting"  # Alternatives generated, picking the best one
    COMPLETED = "completed"  # Finished successfully
    FAILED = "failed"  # Backend call or parsing failed

    @property
    def is_terminal(self) -> bool:
        return self in (StepStatus.COMPLETED, StepStatus.FAILED)


StepFn = Callable[[str], Awaitable[StepContent]]


@dataclass(frozen=True)
class StepDescriptor:
    """One entry in a fixed pipeline.

    Attributes:
        id: Step identifier, unique within the pipeline.
        label: Display name.
        run: Async callable receiving the effective input (the topic, or
            the chosen item of an earlier selection step).
        select_purpose: If set, ``run`` must return ListContent and the
            orchestrator picks one item for this purpose; the pick becomes
            the input of every later step.
    """

    id: str
    label: str
    run: StepFn
    select_purpose: str | None = None


@dataclass
class WorkflowStep:
    """Live state of one step in a run. Mutated in place by the orchestrator."""

    id: str
    label: str
    status: StepStatus = StepStatus.PENDING
    content: StepContent | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "status": self.status.value,
            "content": self.content.to_dict() if self.content is not None else None,
            "error": self.error,
        }
