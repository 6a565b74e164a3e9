"""Backend protocols - the boundary between orchestration and the AI service.

The orchestrator and poller depend only on these protocols. GeminiClient
implements both; tests use in-memory fakes.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from creator_studio.core.operations.operation import PollableOperation


class GenerationKind(Enum):
    """Kinds of one-shot generation calls."""

    # Workflow steps
    TITLES = "titles"
    HOOKS = "hooks"
    SCRIPT = "script"
    DESCRIPTION = "description"
    TAGS = "tags"

    # X (Twitter) workflow steps
    VIRAL_POST = "viral_post"
    THREAD = "thread"
    HASHTAGS = "hashtags"

    # Standalone tools
    CONTENT_IDEAS = "content_ideas"
    CHANNEL_NAMES = "channel_names"
    SHORTS_IDEAS = "shorts_ideas"
    TRENDING_TOPICS = "trending_topics"
    CHAPTERS = "chapters"


class GenerationBackend(Protocol):
    """One-shot text generation."""

    async def generate(self, kind: GenerationKind, input: str) -> Any:
        """Run one generation and return its parsed result.

        Result types by kind:
            TITLES: TitleGenerationResponse
            SCRIPT: ScriptGenerationResponse
            DESCRIPTION: DescriptionGenerationResponse
            SHORTS_IDEAS: ShortsGenerationResponse
            VIRAL_POST, CHAPTERS: str
            everything else: list[str]

        Raises:
            BackendCallError: On network/HTTP/refusal failures.
            ParseError: If the output does not match the expected shape.
        """
        ...

    async def choose(self, candidates: list[str], purpose: str) -> str:
        """Ask the service to pick one candidate. The answer is unvalidated."""
        ...


class VideoBackend(Protocol):
    """Long-running video generation."""

    async def start_long_running_job(self, prompt: str) -> PollableOperation:
        """Begin generation and return the operation handle."""
        ...

    async def poll_job(self, operation: PollableOperation) -> PollableOperation:
        """Re-fetch the status of a started operation."""
        ...

    async def fetch_artifact(self, locator: str) -> bytes:
        """Download the finished artifact."""
        ...
