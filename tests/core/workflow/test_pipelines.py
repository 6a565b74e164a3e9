"""Tests for the built-in pipelines."""

import pytest
from conftest import FakeBackend, make_script, make_titles

from creator_studio.backend.protocols import GenerationKind
from creator_studio.core.content import ListContent, TextContent
from creator_studio.core.workflow import PIPELINES, x_pipeline, youtube_pipeline
from creator_studio.core.workflow.pipelines import TITLE_PURPOSE


class TestYoutubePipeline:
    def test_steps(self, backend):
        pipeline = youtube_pipeline(backend)

        assert [(d.id, d.label) for d in pipeline] == [
            ("titles", "Generating Viral Titles"),
            ("hooks", "Creating Catchy Hooks"),
            ("script", "Writing Full Script"),
            ("description", "Drafting Video Description"),
            ("tags", "Optimizing SEO Tags"),
        ]
        assert pipeline[0].select_purpose == TITLE_PURPOSE
        assert all(d.select_purpose is None for d in pipeline[1:])

    @pytest.mark.asyncio
    async def test_titles_step_dedupes(self):
        backend = FakeBackend({GenerationKind.TITLES: make_titles("A", " A ", "B", "")})

        content = await youtube_pipeline(backend)[0].run("topic")

        assert content == ListContent(["A", "B"])

    @pytest.mark.asyncio
    async def test_script_step_renders_text(self):
        backend = FakeBackend({GenerationKind.SCRIPT: make_script("Hello there.", "Bye now.")})

        content = await youtube_pipeline(backend)[2].run("My Title")

        assert isinstance(content, TextContent)
        assert "Estimated duration: 8:00" in content.text
        assert "[section_1 (0:00-0:30)]" in content.text
        assert "Bye now." in content.text
        assert backend.calls == [(GenerationKind.SCRIPT, "My Title")]


class TestXPipeline:
    def test_steps(self, backend):
        assert [(d.id, d.label) for d in x_pipeline(backend)] == [
            ("viral_post", "Writing Viral Post"),
            ("thread", "Drafting Thread"),
            ("hashtags", "Finding Hashtags"),
        ]

    @pytest.mark.asyncio
    async def test_hashtags_step(self, backend):
        content = await x_pipeline(backend)[2].run("remote work")

        assert content == ListContent(["#remote", "#work"])


def test_registry():
    assert PIPELINES == {"youtube": youtube_pipeline, "x": x_pipeline}
