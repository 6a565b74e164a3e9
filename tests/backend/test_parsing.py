"""Tests for JSON extraction and schema validation of model output."""

import pytest

from creator_studio.backend.models import ScriptGenerationResponse, TitleGenerationResponse
from creator_studio.backend.parsing import extract_json_text, parse_json_from_text, parse_result
from creator_studio.core.errors import ParseError


class TestExtractJsonText:
    def test_plain(self):
        assert extract_json_text('  ["a"] ') == '["a"]'

    def test_fenced_with_language(self):
        assert extract_json_text('```json\n["a", "b"]\n```') == '["a", "b"]'

    def test_fenced_without_language(self):
        assert extract_json_text('Here you go:\n```\n{"x": 1}\n```\nEnjoy') == '{"x": 1}'


class TestParseJsonFromText:
    def test_array(self):
        assert parse_json_from_text('["Hook 1", "Hook 2"]') == ["Hook 1", "Hook 2"]

    def test_fenced_object(self):
        assert parse_json_from_text('```json\n{"a": [1, 2]}\n```') == {"a": [1, 2]}

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty(self, text):
        with pytest.raises(ParseError, match="empty"):
            parse_json_from_text(text)

    def test_invalid(self):
        """Invalid JSON raises instead of returning an empty result."""
        with pytest.raises(ParseError, match="not valid JSON") as exc_info:
            parse_json_from_text("Sure! Here are some hooks: 1. ...")
        assert exc_info.value.raw_text.startswith("Sure!")


class TestParseResult:
    def test_list_of_strings(self):
        assert parse_result('["a", "b"]', list[str], "hooks") == ["a", "b"]

    def test_wrong_shape(self):
        with pytest.raises(ParseError, match="Could not generate hooks"):
            parse_result('{"hooks": ["a"]}', list[str], "hooks")

    def test_title_response(self):
        text = """```json
        {
          "titles": [
            {"text": "I Tried 5 Laptops", "scores": {"ctr_score": 8.5}},
            {"text": "Best Laptop of 2026?", "style_tags": ["question"]}
          ],
          "top_picks": [{"text": "I Tried 5 Laptops", "reason": "specific"}],
          "best_title": {"text": "I Tried 5 Laptops", "reason": "curiosity"},
          "extra_field": true
        }
        ```"""

        result = parse_result(text, TitleGenerationResponse, "titles")

        assert result.texts == ["I Tried 5 Laptops", "Best Laptop of 2026?"]
        assert result.titles[0].scores.ctr_score == 8.5
        assert result.best_title.reason == "curiosity"

    def test_title_response_without_titles(self):
        with pytest.raises(ParseError, match="Could not generate titles"):
            parse_result(
                '{"titles": [], "best_title": {"text": "x"}}', TitleGenerationResponse, "titles"
            )

    def test_title_response_without_best_title(self):
        with pytest.raises(ParseError):
            parse_result('{"titles": [{"text": "x"}]}', TitleGenerationResponse, "titles")


class TestScriptToText:
    def test_renders_sections_and_ctas(self):
        script = ScriptGenerationResponse.model_validate(
            {
                "metadata": {"estimated_duration": "6:30"},
                "sections": [
                    {"id": "hook", "time_range": "0:00-0:15", "narration": "Stop scrolling."},
                    {"id": "body", "narration": "Here is why.", "on_screen_text": "WHY"},
                ],
                "midroll_cta": {"narration": "Subscribe!"},
                "final_cta": {"narration": ""},
            }
        )

        text = script.to_text()

        assert text.splitlines()[0] == "Estimated duration: 6:30"
        assert "[hook (0:00-0:15)]\nStop scrolling." in text
        assert "On screen: WHY" in text
        assert "[Mid-roll CTA]\nSubscribe!" in text
        assert "Final CTA" not in text
