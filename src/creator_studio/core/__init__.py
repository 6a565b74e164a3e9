"""Core - orchestration logic with no knowledge of HTTP or UI.

Architecture:
    workflow/     Fixed sequential pipelines with step-level progress
    operations/   Poll loop for long-running backend jobs
    content       Tagged step content variants
    errors        Error taxonomy
    config        StudioConfig
    validation    Topic / prompt validation
    cancellation  Cooperative cancellation token
"""

from creator_studio.core.cancellation import CancellationToken
from creator_studio.core.config import StudioConfig
from creator_studio.core.content import ListContent, SelectionResult, StepContent, TextContent
from creator_studio.core.errors import (
    ArtifactMissingError,
    BackendCallError,
    ConfigError,
    CredentialError,
    ParseError,
    SelectionError,
    StudioError,
    ValidationError,
)
from creator_studio.core.validation import validate_topic

__all__ = [
    # Config
    "StudioConfig",
    # Content
    "StepContent",
    "TextContent",
    "ListContent",
    "SelectionResult",
    # Errors
    "StudioError",
    "ValidationError",
    "ConfigError",
    "BackendCallError",
    "ParseError",
    "CredentialError",
    "ArtifactMissingError",
    "SelectionError",
    # Cancellation
    "CancellationToken",
    # Validation
    "validate_topic",
]
