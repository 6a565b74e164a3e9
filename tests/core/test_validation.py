"""Tests for topic validation."""

import pytest

from creator_studio.core.errors import ValidationError
from creator_studio.core.validation import validate_topic


class TestValidateTopic:
    """Tests for validate_topic function."""

    def test_returns_stripped_topic(self):
        """Surrounding whitespace is removed."""
        assert validate_topic("  review of a new laptop \n") == "review of a new laptop"

    def test_inner_whitespace_kept(self):
        assert validate_topic("a  b") == "a  b"

    @pytest.mark.parametrize("topic", ["", "   ", "\t\n", None])
    def test_empty_rejected(self, topic):
        """Empty and whitespace-only topics are rejected."""
        with pytest.raises(ValidationError, match="Topic is required"):
            validate_topic(topic)

    def test_entity_in_message(self):
        with pytest.raises(ValidationError, match="Prompt is required"):
            validate_topic("  ", "prompt")

    def test_long_topic_accepted(self):
        """There is no upper bound on length."""
        topic = "x" * 10_000
        assert validate_topic(f"  {topic}  ") == topic

    def test_error_type(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_topic("")
        assert exc_info.value.error_type == "validation_error"
