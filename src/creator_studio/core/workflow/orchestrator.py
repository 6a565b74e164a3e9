"""WorkflowOrchestrator - runs a fixed pipeline of steps against a topic.

Steps execute strictly in sequence. Every step emits a RUNNING update,
an optional SELECTING update, and exactly one terminal update before the
next step starts. The first failing step ends the run; nothing after it
executes and the failure never escapes to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from creator_studio.core.content import ListContent, SelectionResult, StepContent
from creator_studio.core.errors import SelectionError
from creator_studio.core.validation import validate_topic
from creator_studio.core.workflow.events import ProgressSink, ProgressUpdate
from creator_studio.core.workflow.run import WorkflowRun
from creator_studio.core.workflow.selection import Chooser, choose_best
from creator_studio.core.workflow.step import StepDescriptor, StepStatus, WorkflowStep

logger = logging.getLogger(__name__)


class WorkflowOrchestrator:
    """Runs one pipeline, one live run at a time.

    Example:
        >>> orchestrator = WorkflowOrchestrator(
        ...     pipeline=youtube_pipeline(backend),
        ...     chooser=backend.choose,
        ...     on_progress=lambda update: print(update.step_id, update.status),
        ... )
        >>> run = orchestrator.start("review of a new laptop")
        >>> [step.status for step in run.steps]  # all PENDING
        >>> await run.wait()
    """

    def __init__(
        self,
        pipeline: Sequence[StepDescriptor],
        chooser: Chooser,
        on_progress: ProgressSink | None = None,
        name: str = "workflow",
    ) -> None:
        """Create an orchestrator.

        Args:
            pipeline: Ordered step descriptors.
            chooser: Secondary pick used by selection steps.
            on_progress: Callback receiving every ProgressUpdate.
            name: Pipeline name used in logs and run info.

        Raises:
            ValueError: If the pipeline is empty or step IDs repeat.
        """
        if not pipeline:
            raise ValueError("Pipeline must contain at least one step")
        ids = [d.id for d in pipeline]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Step IDs must be unique: {ids}")

        self._pipeline = list(pipeline)
        self._chooser = chooser
        self._on_progress = on_progress
        self._name = name
        self._current: WorkflowRun | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def current_run(self) -> WorkflowRun | None:
        """The live (or most recently finished) run."""
        return self._current

    def start(self, topic: str) -> WorkflowRun | None:
        """Validate the topic and start a run in the background.

        Must be called from within a running event loop.

        Args:
            topic: The video topic.

        Returns:
            The new run with every step PENDING, or None if a run for the
            same topic is already in flight.

        Raises:
            ValidationError: If the topic is empty or whitespace-only.
        """
        topic = validate_topic(topic)

        previous = self._current
        if previous is not None and not previous.is_complete:
            if previous.topic == topic:
                logger.debug(
                    "workflow_duplicate_ignored: workflow=%s, run_id=%s",
                    self._name,
                    previous.run_id,
                )
                return None
            self._supersede(previous)

        run = WorkflowRun(
            workflow=self._name,
            topic=topic,
            steps=[WorkflowStep(id=d.id, label=d.label) for d in self._pipeline],
        )
        self._current = run

        logger.info(
            "workflow_run_started: workflow=%s, run_id=%s, topic=%s",
            self._name,
            run.run_id,
            topic,
        )

        run._attach(asyncio.create_task(self._execute(run)))
        return run

    async def run(self, topic: str) -> WorkflowRun | None:
        """Start a run and wait for it to finish.

        Returns:
            The finished run, or None for a duplicate submission.

        Raises:
            ValidationError: If the topic is empty or whitespace-only.
        """
        run = self.start(topic)
        if run is not None:
            await run.wait()
        return run

    def _supersede(self, previous: WorkflowRun) -> None:
        """Discard an in-flight run in favour of a new one."""
        logger.info(
            "workflow_run_superseded: workflow=%s, run_id=%s",
            self._name,
            previous.run_id,
        )
        previous._cancelled = True
        if previous._task is not None:
            previous._task.cancel()
        previous._mark_finished()

    async def _execute(self, run: WorkflowRun) -> None:
        """Run every step in order, stopping at the first failure."""
        effective_input = run.topic

        for descriptor, step in zip(self._pipeline, run.steps, strict=True):
            self._transition(run, step, StepStatus.RUNNING)

            try:
                content = await descriptor.run(effective_input)
                if descriptor.select_purpose is not None:
                    content = await self._select(run, step, descriptor, content)
            except Exception as e:
                step.error = str(e) or type(e).__name__
                run._record_error(step.error)
                logger.exception(
                    "workflow_step_failed: workflow=%s, run_id=%s, step_id=%s, error=%s",
                    self._name,
                    run.run_id,
                    step.id,
                    step.error,
                )
                self._transition(run, step, StepStatus.FAILED, error=step.error)
                break

            self._transition(run, step, StepStatus.COMPLETED, content)

            if isinstance(content, SelectionResult) and content.chosen is not None:
                effective_input = content.chosen

        run._mark_finished()
        logger.info(
            "workflow_run_finished: workflow=%s, run_id=%s, status=%s",
            self._name,
            run.run_id,
            run.status.value,
        )

    async def _select(
        self,
        run: WorkflowRun,
        step: WorkflowStep,
        descriptor: StepDescriptor,
        content: StepContent,
    ) -> SelectionResult:
        """Narrow a list of alternatives down to one."""
        if not isinstance(content, ListContent):
            raise TypeError(
                f"Step '{descriptor.id}' selects a winner but returned {content.kind} content"
            )
        if not content.items:
            raise SelectionError("Cannot select from an empty list")

        pending = SelectionResult(alternatives=content.items)
        self._transition(run, step, StepStatus.SELECTING, pending)

        purpose = descriptor.select_purpose or descriptor.label
        chosen = await choose_best(pending.alternatives, purpose, self._chooser)
        return pending.with_choice(chosen)

    def _transition(
        self,
        run: WorkflowRun,
        step: WorkflowStep,
        status: StepStatus,
        data: StepContent | None = None,
        error: str | None = None,
    ) -> None:
        """Update step state in place and notify the progress sink."""
        step.status = status
        if data is not None:
            step.content = data

        logger.debug(
            "workflow_step_%s: workflow=%s, run_id=%s, step_id=%s",
            status.value,
            self._name,
            run.run_id,
            step.id,
        )

        if self._on_progress is None:
            return

        update = ProgressUpdate(
            run_id=run.run_id,
            step_id=step.id,
            status=status,
            data=data,
            error=error,
        )
        try:
            self._on_progress(update)
        except Exception as e:
            logger.error(
                "Progress callback failed: run_id=%s, step_id=%s, status=%s, error=%s",
                run.run_id,
                step.id,
                status.value,
                e,
            )
