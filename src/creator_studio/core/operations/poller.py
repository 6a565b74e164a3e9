"""OperationPoller - drives a long-running backend job to completion.

State machine:
    STARTING -> POLLING -> SUCCEEDED
                        -> FAILED      (credential rejected, no artifact, download failed)
    STARTING -> FAILED                 (start call failed; polling never begins)
    any      -> CANCELLED              (cancel(); nothing observable afterwards)

Transient status-check errors keep the loop polling on the same fixed
interval, with no attempt ceiling and no backoff.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from creator_studio.core.cancellation import CancellationToken
from creator_studio.core.config import DEFAULT_POLL_INTERVAL
from creator_studio.core.errors import ArtifactMissingError
from creator_studio.core.operations.operation import (
    PollableOperation,
    PollOutcome,
    PollState,
    PollUpdate,
    is_credential_failure,
)
from creator_studio.core.validation import validate_topic

if TYPE_CHECKING:
    from creator_studio.backend.protocols import VideoBackend

logger = logging.getLogger(__name__)

UpdateSink = Callable[[PollUpdate], None]

MSG_STARTING = "Starting video generation..."
MSG_IN_PROGRESS = "Video generation in progress..."
MSG_RETRYING = "Still trying to reach the video service: {error}"
MSG_DOWNLOADING = "Downloading generated video..."
MSG_READY = "Video ready."
MSG_REAUTH = "Your API key was rejected. Please select a valid key and try again."
MSG_NO_ARTIFACT = "Video generation finished, but no video was returned."


class OperationPoller:
    """Runs at most one poll loop at a time.

    Example:
        >>> poller = OperationPoller(backend=client, on_update=lambda u: print(u.message))
        >>> await poller.start("a timelapse of a city at night")
        >>> outcome = await poller.wait()
        >>> if outcome.requires_reauth:
        ...     await poller.start(prompt, backend=client.with_config(new_config))
    """

    def __init__(
        self,
        backend: VideoBackend,
        on_update: UpdateSink | None = None,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._backend = backend
        self._on_update = on_update
        self._interval = interval

        self._state = PollState.IDLE
        self._operation: PollableOperation | None = None
        self._token: CancellationToken | None = None
        self._task: asyncio.Task[PollOutcome] | None = None

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def operation(self) -> PollableOperation | None:
        """Latest snapshot of the active operation."""
        return self._operation

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self, prompt: str, backend: VideoBackend | None = None) -> None:
        """Start a new job, cancelling any loop that is still active.

        Args:
            prompt: Generation prompt.
            backend: Backend to use for this job only (e.g. one built with
                a freshly selected credential). Defaults to the poller's.

        Raises:
            ValidationError: If the prompt is empty or whitespace-only.
        """
        prompt = validate_topic(prompt, "prompt")

        if self.is_active:
            logger.info("poll_loop_replaced: operation=%s", self._operation_name)
            await self.cancel()

        token = CancellationToken()
        self._token = token
        self._operation = None
        self._state = PollState.STARTING
        self._task = asyncio.create_task(self._run(prompt, backend or self._backend, token))

    async def wait(self) -> PollOutcome:
        """Wait for the active loop to reach a terminal state.

        Raises:
            RuntimeError: If start() was never called.
        """
        if self._task is None:
            raise RuntimeError("Poller not started")
        try:
            return await asyncio.shield(self._task)
        except asyncio.CancelledError:
            if self._task.cancelled():
                return PollOutcome(state=PollState.CANCELLED)
            raise

    async def run(self, prompt: str, backend: VideoBackend | None = None) -> PollOutcome:
        """Start a job and wait for its outcome."""
        await self.start(prompt, backend)
        return await self.wait()

    async def cancel(self) -> None:
        """Stop the active loop. No call or update happens after this returns."""
        if self._token is not None:
            self._token.cancel()
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        if not self._state.is_terminal and self._state is not PollState.IDLE:
            self._state = PollState.CANCELLED
            logger.info("poll_loop_cancelled: operation=%s", self._operation_name)

    @property
    def _operation_name(self) -> str | None:
        return self._operation.name if self._operation else None

    async def _run(
        self,
        prompt: str,
        backend: VideoBackend,
        token: CancellationToken,
    ) -> PollOutcome:
        self._emit(token, PollUpdate(state=PollState.STARTING, message=MSG_STARTING))

        try:
            operation = await backend.start_long_running_job(prompt)
        except Exception as e:
            logger.exception("poll_start_failed: error=%s", e)
            if is_credential_failure(e):
                return self._fail(token, e, MSG_REAUTH, requires_reauth=True)
            return self._fail(token, e, str(e))

        if token.is_cancelled:
            return PollOutcome(state=PollState.CANCELLED)

        self._operation = operation
        self._state = PollState.POLLING
        logger.info("poll_loop_started: operation=%s", operation.name)
        self._emit(
            token,
            PollUpdate(state=PollState.POLLING, message=MSG_IN_PROGRESS, operation=operation),
        )

        while True:
            if not await token.sleep(self._interval):
                return PollOutcome(state=PollState.CANCELLED)

            try:
                operation = await backend.poll_job(operation)
            except Exception as e:
                if token.is_cancelled:
                    return PollOutcome(state=PollState.CANCELLED)
                if is_credential_failure(e):
                    logger.warning(
                        "poll_credential_rejected: operation=%s, error=%s", operation.name, e
                    )
                    return self._fail(token, e, MSG_REAUTH, requires_reauth=True)

                logger.warning("poll_check_failed: operation=%s, error=%s", operation.name, e)
                self._emit(
                    token,
                    PollUpdate(
                        state=PollState.POLLING,
                        message=MSG_RETRYING.format(error=e),
                        operation=operation,
                        error=str(e),
                        retrying=True,
                    ),
                )
                continue

            if token.is_cancelled:
                return PollOutcome(state=PollState.CANCELLED)
            self._operation = operation

            if not operation.done:
                logger.debug("poll_tick: operation=%s, done=False", operation.name)
                self._emit(
                    token,
                    PollUpdate(
                        state=PollState.POLLING, message=MSG_IN_PROGRESS, operation=operation
                    ),
                )
                continue

            if not operation.result_locator:
                detail = MSG_NO_ARTIFACT
                if operation.error:
                    detail = f"{MSG_NO_ARTIFACT} ({operation.error})"
                return self._fail(token, ArtifactMissingError(detail), detail)

            return await self._download(operation, operation.result_locator, backend, token)

    async def _download(
        self,
        operation: PollableOperation,
        locator: str,
        backend: VideoBackend,
        token: CancellationToken,
    ) -> PollOutcome:
        self._emit(
            token,
            PollUpdate(state=PollState.POLLING, message=MSG_DOWNLOADING, operation=operation),
        )
        try:
            artifact = await backend.fetch_artifact(locator)
        except Exception as e:
            logger.exception("poll_download_failed: operation=%s, error=%s", operation.name, e)
            return self._fail(token, e, str(e), requires_reauth=is_credential_failure(e))

        if token.is_cancelled:
            return PollOutcome(state=PollState.CANCELLED)

        self._state = PollState.SUCCEEDED
        logger.info(
            "poll_succeeded: operation=%s, bytes=%d", operation.name, len(artifact)
        )
        self._emit(
            token,
            PollUpdate(state=PollState.SUCCEEDED, message=MSG_READY, operation=operation),
        )
        return PollOutcome(state=PollState.SUCCEEDED, locator=locator, artifact=artifact)

    def _fail(
        self,
        token: CancellationToken,
        error: Exception,
        message: str,
        requires_reauth: bool = False,
    ) -> PollOutcome:
        if token.is_cancelled:
            return PollOutcome(state=PollState.CANCELLED)

        self._state = PollState.FAILED
        self._emit(
            token,
            PollUpdate(
                state=PollState.FAILED,
                message=message,
                operation=self._operation,
                error=str(error),
                requires_reauth=requires_reauth,
            ),
        )
        return PollOutcome(
            state=PollState.FAILED,
            locator=self._operation.result_locator if self._operation else None,
            error=error,
            requires_reauth=requires_reauth,
        )

    def _emit(self, token: CancellationToken, update: PollUpdate) -> None:
        """Deliver an update unless the loop has been cancelled."""
        if token.is_cancelled or self._on_update is None:
            return
        try:
            self._on_update(update)
        except Exception as e:
            logger.error(
                "Poll update callback failed: state=%s, error=%s", update.state.value, e
            )
