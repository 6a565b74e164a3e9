"""Workflow - fixed, strictly sequential generation pipelines.

A pipeline is an ordered list of StepDescriptor. WorkflowOrchestrator runs
it against one topic, mutating a WorkflowRun in place and pushing a
ProgressUpdate for every step transition.

Example:
    >>> from creator_studio.backend import GeminiClient
    >>> from creator_studio.core.workflow import WorkflowOrchestrator, youtube_pipeline
    >>>
    >>> client = GeminiClient(config)
    >>> orchestrator = WorkflowOrchestrator(
    ...     pipeline=youtube_pipeline(client),
    ...     chooser=client.choose,
    ...     on_progress=print,
    ...     name="youtube",
    ... )
    >>> run = orchestrator.start("review of a new laptop")
    >>> status = await run.wait()
"""

from creator_studio.core.workflow.events import ProgressSink, ProgressUpdate
from creator_studio.core.workflow.orchestrator import WorkflowOrchestrator
from creator_studio.core.workflow.pipelines import PIPELINES, x_pipeline, youtube_pipeline
from creator_studio.core.workflow.run import RunStatus, WorkflowRun, WorkflowRunInfo
from creator_studio.core.workflow.selection import Chooser, choose_best
from creator_studio.core.workflow.step import StepDescriptor, StepStatus, WorkflowStep

__all__ = [
    # Core classes
    "WorkflowOrchestrator",
    "WorkflowRun",
    "WorkflowStep",
    "StepDescriptor",
    # Info classes
    "WorkflowRunInfo",
    # Events
    "ProgressUpdate",
    "ProgressSink",
    # Enums
    "StepStatus",
    "RunStatus",
    # Selection
    "Chooser",
    "choose_best",
    # Pipelines
    "PIPELINES",
    "youtube_pipeline",
    "x_pipeline",
]
