"""Pick-best-of-N selection.

The chooser is an external call (usually a model) and may answer with
text that is not literally one of the candidates. Only a verbatim match
is accepted; anything else falls back to the first candidate.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence

from creator_studio.core.errors import SelectionError

logger = logging.getLogger(__name__)

Chooser = Callable[[list[str], str], Awaitable[str]]


async def choose_best(candidates: Sequence[str], purpose: str, chooser: Chooser) -> str:
    """Return exactly one of ``candidates``, best for ``purpose``.

    Args:
        candidates: Ordered candidate strings.
        purpose: Short description of what the pick is for.
        chooser: Async callable asked to pick among two or more candidates.

    Returns:
        A member of ``candidates``.

    Raises:
        SelectionError: If ``candidates`` is empty.
    """
    options = list(candidates)
    if not options:
        raise SelectionError("Cannot select from an empty list")
    if len(options) == 1:
        return options[0]

    try:
        choice = await chooser(options, purpose)
    except Exception as e:
        logger.warning(
            "selection_chooser_failed: purpose=%s, candidates=%d, error=%s",
            purpose,
            len(options),
            e,
        )
        return options[0]

    choice = (choice or "").strip()
    if choice in options:
        return choice

    logger.debug(
        "selection_fallback_to_first: purpose=%s, choice=%r",
        purpose,
        choice[:80],
    )
    return options[0]
