"""Pollable long-running operations and poll-loop state."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from creator_studio.core.errors import CredentialError


@dataclass(frozen=True)
class PollableOperation:
    """Snapshot of a backend job.

    The client never mutates an operation; each status check returns a
    fresh snapshot.

    Attributes:
        name: Opaque handle issued by the backend.
        done: Whether the backend considers the job finished.
        result_locator: URI of the artifact, once available.
        error: Backend-reported failure message, if any.
    """

    name: str
    done: bool = False
    result_locator: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "done": self.done,
            "result_locator": self.result_locator,
            "error": self.error,
        }


class PollState(Enum):
    """Poll loop states."""

    IDLE = "idle"  # Nothing started yet
    STARTING = "starting"  # Start call in flight
    POLLING = "polling"  # Waiting for the job to finish
    SUCCEEDED = "succeeded"  # Artifact fetched
    FAILED = "failed"  # Terminal failure
    CANCELLED = "cancelled"  # Stopped by the caller

    @property
    def is_terminal(self) -> bool:
        return self in (PollState.SUCCEEDED, PollState.FAILED, PollState.CANCELLED)


@dataclass(frozen=True)
class PollUpdate:
    """Human-readable progress pushed to the caller.

    ``retrying`` marks informational "still trying" messages after a
    transient error; ``requires_reauth`` marks a terminal credential
    failure that needs user action.
    """

    state: PollState
    message: str
    operation: PollableOperation | None = None
    error: str | None = None
    retrying: bool = False
    requires_reauth: bool = False


@dataclass(frozen=True)
class PollOutcome:
    """Final result of a poll loop."""

    state: PollState
    locator: str | None = None
    artifact: bytes | None = None
    error: Exception | None = None
    requires_reauth: bool = False

    @property
    def succeeded(self) -> bool:
        return self.state is PollState.SUCCEEDED


# Messages that mean the credential is invalid, expired or revoked
CREDENTIAL_ERROR_SIGNATURES = (
    "Requested entity was not found",
    "API key not valid",
    "API_KEY_INVALID",
    "API key expired",
    "PERMISSION_DENIED",
    "UNAUTHENTICATED",
)

_CREDENTIAL_PATTERN = re.compile(
    "|".join(re.escape(s) for s in CREDENTIAL_ERROR_SIGNATURES),
    re.IGNORECASE,
)


def is_credential_failure(error: BaseException) -> bool:
    """True if ``error`` means the user must re-authenticate."""
    if isinstance(error, CredentialError):
        return True
    return bool(_CREDENTIAL_PATTERN.search(str(error)))
