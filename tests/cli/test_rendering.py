"""Tests for CLI rendering helpers."""

from creator_studio.core.content import ListContent, SelectionResult, TextContent
from creator_studio.core.operations import PollState, PollUpdate
from creator_studio.frontends.cli.rendering import (
    PREVIEW_CHARS,
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PENDING,
    get_status_indicator,
    render_content,
    render_poll_update,
)


class TestStatusIndicators:
    def test_known_statuses(self):
        assert get_status_indicator("completed") == STATUS_COMPLETED
        assert get_status_indicator("failed") == STATUS_FAILED

    def test_unknown_defaults_to_pending(self):
        assert get_status_indicator("mystery") == STATUS_PENDING


class TestRenderContent:
    def test_selection_marks_chosen(self):
        text = render_content(SelectionResult(["A", "B"], chosen="B")).plain
        assert text.splitlines() == ["  A", "★ B"]

    def test_list(self):
        assert render_content(ListContent(["x", "y"])).plain == "• x\n• y"

    def test_long_text_truncated(self):
        text = render_content(TextContent("word " * 200)).plain
        assert len(text) <= PREVIEW_CHARS + 1
        assert text.endswith("…")

    def test_dispatches_on_kind(self):
        """Any value carrying a known discriminant renders by that discriminant."""

        class SnapshotList:
            kind = "list"
            items = ("a", "b")

        assert render_content(SnapshotList()).plain == "• a\n• b"

    def test_unknown_kind_falls_back_to_str(self):
        class Other:
            kind = "audio"

            def __str__(self):
                return "audio clip"

        assert render_content(Other()).plain == "audio clip"


class TestRenderPollUpdate:
    def test_styles(self):
        failed = render_poll_update(PollUpdate(state=PollState.FAILED, message="no"))
        retrying = render_poll_update(
            PollUpdate(state=PollState.POLLING, message="again", retrying=True)
        )

        assert failed.plain == "no"
        assert failed.style == "error"
        assert retrying.style == "warning"
