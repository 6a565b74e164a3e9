"""Cooperative cancellation for poll loops.

A CancellationToken is checked by the poller before every network call
and before every progress emission. Once cancel() returns, nothing the
loop does afterwards is observable.
"""

from __future__ import annotations

import asyncio


class CancellationToken:
    """Token for cooperative cancellation.

    Example:
        >>> token = CancellationToken()
        >>> task = asyncio.create_task(poll_loop(token))
        >>> token.cancel()
        >>> # poll_loop stops at its next check point
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._event = asyncio.Event()

    def cancel(self) -> None:
        """Request cancellation. Safe to call multiple times."""
        self._cancelled = True
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """True if cancel() has been called."""
        return self._cancelled

    async def sleep(self, delay: float) -> bool:
        """Sleep for ``delay`` seconds or until cancelled.

        Returns:
            True if the full delay elapsed, False if cancelled first.
        """
        if self._cancelled:
            return False
        try:
            await asyncio.wait_for(self._event.wait(), timeout=delay)
        except TimeoutError:
            return True
        return False
