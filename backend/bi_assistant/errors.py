"""Exception hierarchy for the assistant backend.

Every failure a caller can observe is an `AssistantError`. The UI only
ever shows the message, so subclasses exist for logging and tests rather
than for different recovery paths.
"""

from __future__ import annotations

from typing import Any, Dict


class AssistantError(Exception):
    """Base exception for all assistant errors."""

    def __init__(self, message: str, details: Dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(AssistantError):
    """Raised when the API credential is not configured."""


class InputValidationError(AssistantError):
    """Raised when user input does not satisfy the selected task."""


class UnknownTaskError(AssistantError):
    """Raised when a task identifier is not in the catalog."""


# =============================================================================
# GENERATION ERRORS
# =============================================================================


class GenerationError(AssistantError):
    """Raised when a dispatched generation request fails."""


class ServiceError(GenerationError):
    """The external AI service call failed (transport or non-success status)."""


class EmptyResultError(GenerationError):
    """The service answered but returned no usable payload."""


class ResponseParseError(GenerationError):
    """A structured response could not be parsed into the expected shape."""


class MediaEncodingError(GenerationError):
    """An uploaded file could not be turned into an inline media part."""
