"""Parse JSON-ish model output into typed results.

Models often wrap JSON in a markdown fence even when asked not to, so
both raw JSON and ```json fenced blocks are accepted. Anything that is
not valid JSON, or does not match the expected schema, raises ParseError
instead of producing an empty result.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from creator_studio.core.errors import ParseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ```json ... ``` (language tag optional)
_FENCE_PATTERN = re.compile(r"```(?:json)?\s*\n(.*?)\n?\s*```", re.DOTALL)


def extract_json_text(text: str) -> str:
    """Return the JSON payload of ``text``, unwrapping a fenced block if present."""
    match = _FENCE_PATTERN.search(text)
    return match.group(1).strip() if match else text.strip()


def parse_json_from_text(text: str | None) -> Any:
    """Parse model text as JSON.

    Raises:
        ParseError: If the text is empty or not valid JSON.
    """
    if text is None or not text.strip():
        raise ParseError("The response was empty", raw_text=text)

    payload = extract_json_text(text)
    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        logger.debug("json_parse_failed: error=%s, text=%r", e, payload[:200])
        raise ParseError(
            f"The response was not valid JSON ({e.msg} at line {e.lineno})",
            raw_text=text,
        ) from e


def parse_result(text: str | None, schema: type[T] | Any, what: str = "result") -> T:
    """Parse model text and validate it against ``schema``.

    Args:
        text: Raw model output.
        schema: A pydantic model class or any type TypeAdapter accepts
            (e.g. ``list[str]``).
        what: Human-readable name used in the error message.

    Raises:
        ParseError: If the text is not JSON or does not match the schema.
    """
    data = parse_json_from_text(text)
    try:
        return TypeAdapter(schema).validate_python(data)
    except SchemaValidationError as e:
        raise ParseError(
            f"Could not generate {what}. The response was not in the expected format "
            f"({e.error_count()} validation error(s))",
            raw_text=text,
        ) from e
