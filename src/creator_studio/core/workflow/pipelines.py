"""Built-in pipelines.

Each pipeline is data: an ordered list of StepDescriptor whose ``run``
calls the backend and converts the parsed result into step content.
"""

from __future__ import annotations

from creator_studio.backend.protocols import GenerationBackend, GenerationKind
from creator_studio.core.content import ListContent, StepContent, TextContent
from creator_studio.core.workflow.step import StepDescriptor, StepFn

TITLE_PURPOSE = "a high click-through, non-misleading YouTube video title"


def _titles(backend: GenerationBackend) -> StepFn:
    async def run(topic: str) -> StepContent:
        response = await backend.generate(GenerationKind.TITLES, topic)
        return ListContent(response.texts)

    return run


def _script(backend: GenerationBackend) -> StepFn:
    async def run(title: str) -> StepContent:
        script = await backend.generate(GenerationKind.SCRIPT, title)
        return TextContent(script.to_text())

    return run


def _description(backend: GenerationBackend) -> StepFn:
    async def run(title: str) -> StepContent:
        response = await backend.generate(GenerationKind.DESCRIPTION, title)
        return TextContent(response.description)

    return run


def _text(backend: GenerationBackend, kind: GenerationKind) -> StepFn:
    async def run(value: str) -> StepContent:
        return TextContent(await backend.generate(kind, value))

    return run


def _list(backend: GenerationBackend, kind: GenerationKind) -> StepFn:
    async def run(value: str) -> StepContent:
        return ListContent(await backend.generate(kind, value))

    return run


def youtube_pipeline(backend: GenerationBackend) -> list[StepDescriptor]:
    """titles -> hooks -> script -> description -> tags.

    The title step narrows its alternatives to one winner; every later
    step runs against that title instead of the raw topic.
    """
    return [
        StepDescriptor(
            id="titles",
            label="Generating Viral Titles",
            run=_titles(backend),
            select_purpose=TITLE_PURPOSE,
        ),
        StepDescriptor(
            id="hooks",
            label="Creating Catchy Hooks",
            run=_list(backend, GenerationKind.HOOKS),
        ),
        StepDescriptor(id="script", label="Writing Full Script", run=_script(backend)),
        StepDescriptor(
            id="description",
            label="Drafting Video Description",
            run=_description(backend),
        ),
        StepDescriptor(
            id="tags",
            label="Optimizing SEO Tags",
            run=_list(backend, GenerationKind.TAGS),
        ),
    ]


def x_pipeline(backend: GenerationBackend) -> list[StepDescriptor]:
    """viral_post -> thread -> hashtags, all against the topic."""
    return [
        StepDescriptor(
            id="viral_post",
            label="Writing Viral Post",
            run=_text(backend, GenerationKind.VIRAL_POST),
        ),
        StepDescriptor(
            id="thread",
            label="Drafting Thread",
            run=_list(backend, GenerationKind.THREAD),
        ),
        StepDescriptor(
            id="hashtags",
            label="Finding Hashtags",
            run=_list(backend, GenerationKind.HASHTAGS),
        ),
    ]


PIPELINES = {
    "youtube": youtube_pipeline,
    "x": x_pipeline,
}
