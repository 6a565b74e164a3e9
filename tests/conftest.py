"""Pytest configuration and fixtures."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any

import pytest

from creator_studio.backend.models import (
    DescriptionGenerationResponse,
    ScriptGenerationResponse,
    TitleGenerationResponse,
)
from creator_studio.backend.protocols import GenerationKind
from creator_studio.core.config import StudioConfig
from creator_studio.core.operations import PollableOperation

OPERATION_NAME = "models/veo-3.1-fast-generate-preview/operations/op-123"
VIDEO_URI = "https://generativelanguage.googleapis.com/v1beta/files/video-1:download"


def make_titles(*texts: str) -> TitleGenerationResponse:
    """Build a title response with the given title texts."""
    return TitleGenerationResponse.model_validate(
        {
            "titles": [{"text": t} for t in texts],
            "best_title": {"text": texts[0], "reason": "first"},
        }
    )


def make_script(*narrations: str) -> ScriptGenerationResponse:
    return ScriptGenerationResponse.model_validate(
        {
            "metadata": {"estimated_duration": "8:00", "tone": "upbeat"},
            "sections": [
                {"id": f"section_{i}", "time_range": "0:00-0:30", "narration": text}
                for i, text in enumerate(narrations, 1)
            ],
        }
    )


def make_description(text: str) -> DescriptionGenerationResponse:
    return DescriptionGenerationResponse.model_validate({"description": text})


def default_responses() -> dict[GenerationKind, Any]:
    """Canned results for every workflow step."""
    return {
        GenerationKind.TITLES: make_titles("Laptop A", "Laptop B", "Laptop C"),
        GenerationKind.HOOKS: ["Hook 1", "Hook 2"],
        GenerationKind.SCRIPT: make_script("Open the lid."),
        GenerationKind.DESCRIPTION: make_description("A full laptop review."),
        GenerationKind.TAGS: ["laptop", "review"],
        GenerationKind.VIRAL_POST: "Remote work is here to stay.",
        GenerationKind.THREAD: ["1/ Start", "2/ Middle", "3/ End"],
        GenerationKind.HASHTAGS: ["#remote", "#work"],
    }


class FakeBackend:
    """In-memory GenerationBackend.

    A response may be a value, an exception instance (raised), or a
    callable taking the input (sync or async).
    """

    def __init__(
        self,
        responses: dict[GenerationKind, Any] | None = None,
        choice: str | Exception | None = None,
    ) -> None:
        self.responses = {**default_responses(), **(responses or {})}
        self.choice = choice
        self.calls: list[tuple[GenerationKind, str]] = []
        self.choose_calls: list[tuple[list[str], str]] = []

    async def generate(self, kind: GenerationKind, input: str) -> Any:
        self.calls.append((kind, input))
        await asyncio.sleep(0)
        response = self.responses[kind]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            response = response(input)
            if inspect.isawaitable(response):
                response = await response
        return response

    async def choose(self, candidates: list[str], purpose: str) -> str:
        self.choose_calls.append((list(candidates), purpose))
        if isinstance(self.choice, Exception):
            raise self.choice
        return self.choice if self.choice is not None else candidates[0]

    @property
    def kinds(self) -> list[GenerationKind]:
        return [kind for kind, _ in self.calls]


class FakeVideoBackend:
    """In-memory VideoBackend.

    ``polls`` is consumed in order, one item per status check; an item is
    either an operation snapshot or an exception to raise. Once exhausted,
    every check reports the job as still running.
    """

    def __init__(
        self,
        polls: list[PollableOperation | Exception] | None = None,
        start_error: Exception | None = None,
        fetch_error: Exception | None = None,
        artifact: bytes = b"mp4-bytes",
    ) -> None:
        self.polls = list(polls or [])
        self.start_error = start_error
        self.fetch_error = fetch_error
        self.artifact = artifact
        self.start_calls: list[str] = []
        self.poll_calls: list[str] = []
        self.fetch_calls: list[str] = []

    async def start_long_running_job(self, prompt: str) -> PollableOperation:
        self.start_calls.append(prompt)
        if self.start_error is not None:
            raise self.start_error
        return PollableOperation(name=OPERATION_NAME)

    async def poll_job(self, operation: PollableOperation) -> PollableOperation:
        self.poll_calls.append(operation.name)
        if not self.polls:
            return PollableOperation(name=operation.name)
        item = self.polls.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def fetch_artifact(self, locator: str) -> bytes:
        self.fetch_calls.append(locator)
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.artifact

    @property
    def total_calls(self) -> int:
        return len(self.start_calls) + len(self.poll_calls) + len(self.fetch_calls)


def done_operation(locator: str | None = VIDEO_URI, error: str | None = None) -> PollableOperation:
    return PollableOperation(name=OPERATION_NAME, done=True, result_locator=locator, error=error)


@pytest.fixture
def backend():
    """A FakeBackend with canned responses for every step."""
    return FakeBackend()


@pytest.fixture
def config():
    """A config pointing at the default base URL with a test key."""
    return StudioConfig(api_key="test-api-key", timeout=5.0)
