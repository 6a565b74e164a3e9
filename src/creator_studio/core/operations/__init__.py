"""Long-running operations - start a backend job and poll it to completion."""

from creator_studio.core.operations.operation import (
    CREDENTIAL_ERROR_SIGNATURES,
    PollableOperation,
    PollOutcome,
    PollState,
    PollUpdate,
    is_credential_failure,
)
from creator_studio.core.operations.poller import OperationPoller

__all__ = [
    "OperationPoller",
    "PollableOperation",
    "PollOutcome",
    "PollState",
    "PollUpdate",
    "CREDENTIAL_ERROR_SIGNATURES",
    "is_credential_failure",
]
