"""Input validation for workflow topics and generation prompts."""

from __future__ import annotations

from creator_studio.core.errors import ValidationError


def validate_topic(topic: str | None, entity: str = "topic") -> str:
    """Validate a topic (or prompt) and return it stripped.

    The only rule is that the text must not be empty or whitespace-only.

    Args:
        topic: The text to validate.
        entity: What the text is for (used in error messages).

    Returns:
        The stripped text.

    Raises:
        ValidationError: If the text is empty.

    Example:
        >>> validate_topic("  review of a new laptop ")
        'review of a new laptop'
        >>> validate_topic("   ")  # ValidationError
    """
    if topic is None or not topic.strip():
        raise ValidationError(f"{entity.capitalize()} is required")
    return topic.strip()
