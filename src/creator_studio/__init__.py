"""Creator Studio - AI content-creation assistant for video creators.

Creator Studio turns a single topic into a ready-to-shoot video package by
chaining generation calls against a hosted generative-AI service, and
drives long-running video generation jobs to completion.

Layers:
    core/       Orchestration (workflow pipelines, operation poller)
    backend/    Generative-AI service adapter (Gemini REST API)
    frontends/  User interfaces (CLI)

Quick Start (run the YouTube pipeline):
    >>> from creator_studio import GeminiClient, StudioConfig, WorkflowOrchestrator
    >>> from creator_studio import youtube_pipeline
    >>>
    >>> client = GeminiClient(StudioConfig.from_env())
    >>> orchestrator = WorkflowOrchestrator(
    ...     pipeline=youtube_pipeline(client),
    ...     chooser=client.choose,
    ...     on_progress=lambda u: print(u.step_id, u.status.value),
    ... )
    >>> run = orchestrator.start("review of a new laptop")
    >>> await run.wait()

Generate a video:
    >>> from creator_studio import OperationPoller
    >>>
    >>> poller = OperationPoller(backend=client, on_update=lambda u: print(u.message))
    >>> outcome = await poller.run("a timelapse of a city at night")
    >>> open("video.mp4", "wb").write(outcome.artifact)
"""

from creator_studio.__version__ import __version__
from creator_studio.backend import GeminiClient, GenerationKind
from creator_studio.core import (
    ArtifactMissingError,
    BackendCallError,
    CredentialError,
    ListContent,
    ParseError,
    SelectionResult,
    StudioConfig,
    StudioError,
    TextContent,
    ValidationError,
)
from creator_studio.core.operations import OperationPoller, PollOutcome, PollState, PollUpdate
from creator_studio.core.workflow import (
    ProgressUpdate,
    RunStatus,
    StepStatus,
    WorkflowOrchestrator,
    WorkflowRun,
    choose_best,
    x_pipeline,
    youtube_pipeline,
)

__all__ = [
    "__version__",
    # Backend
    "GeminiClient",
    "GenerationKind",
    "StudioConfig",
    # Workflow
    "WorkflowOrchestrator",
    "WorkflowRun",
    "ProgressUpdate",
    "StepStatus",
    "RunStatus",
    "choose_best",
    "youtube_pipeline",
    "x_pipeline",
    # Operations
    "OperationPoller",
    "PollOutcome",
    "PollState",
    "PollUpdate",
    # Content
    "TextContent",
    "ListContent",
    "SelectionResult",
    # Errors
    "StudioError",
    "ValidationError",
    "BackendCallError",
    "ParseError",
    "CredentialError",
    "ArtifactMissingError",
]
