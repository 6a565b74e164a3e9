"""Error taxonomy for Creator Studio.

Every failure inside a workflow run or a poll loop is converted into a
status update. Only ValidationError is raised to the direct caller.
"""

from __future__ import annotations

# Error type mapping based on HTTP status codes
ERROR_TYPE_MAP = {
    400: "invalid_request_error",
    401: "authentication_error",
    403: "permission_error",
    404: "not_found_error",
    429: "rate_limit_error",
}


def error_type_for_status(status_code: int) -> str:
    """Map HTTP status code to error type string."""
    if status_code in ERROR_TYPE_MAP:
        return ERROR_TYPE_MAP[status_code]
    if 500 <= status_code < 600:
        return "api_error"
    return "unknown_error"


class StudioError(Exception):
    """Base class for all Creator Studio errors."""

    error_type = "studio_error"

    def __init__(self, message: str, error_type: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if error_type is not None:
            self.error_type = error_type

    def __str__(self) -> str:
        return self.message


class ValidationError(StudioError):
    """Input was rejected before any work started."""

    error_type = "validation_error"


class ConfigError(StudioError):
    """Configuration is missing or malformed."""

    error_type = "config_error"


class BackendCallError(StudioError):
    """The generation backend failed (network, HTTP, refusal)."""

    error_type = "api_error"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_type: str | None = None,
    ) -> None:
        if error_type is None and status_code is not None:
            error_type = error_type_for_status(status_code)
        super().__init__(message, error_type)
        self.status_code = status_code


class ParseError(BackendCallError):
    """Backend text did not match the expected structured shape."""

    error_type = "parse_error"

    def __init__(self, message: str, raw_text: str | None = None) -> None:
        super().__init__(message)
        self.raw_text = raw_text


class CredentialError(BackendCallError):
    """The credential was rejected; the user must re-authenticate."""

    error_type = "authentication_error"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message, status_code, error_type=self.error_type)


class ArtifactMissingError(StudioError):
    """A long-running job finished without producing an artifact."""

    error_type = "artifact_missing"


class SelectionError(StudioError):
    """choose_best was called without candidates."""

    error_type = "selection_error"
