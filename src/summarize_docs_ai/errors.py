"""
Exception hierarchy for summarize-docs-ai.

Every failure the core can produce is one of these types. The HTTP layer
renders them as ``{"error": message}`` with the class's ``status_code``.
"""

from __future__ import annotations

from typing import Any


class SummarizerError(Exception):
    """Base exception for all summarize-docs-ai errors."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message, shown to the user verbatim.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Request validation
# =============================================================================


class InvalidMode(SummarizerError):
    """Mode is not one of paragraph, bullet, custom or grammar."""

    status_code = 400

    def __init__(self, mode: Any) -> None:
        super().__init__("Invalid mode specified", {"mode": mode})


class InvalidLengthFactor(SummarizerError):
    """Length factor outside (0, 1]."""

    status_code = 400

    def __init__(self, value: Any) -> None:
        super().__init__(f"Length must be in (0, 1], got {value!r}", {"length": value})


class InvalidQuickAction(SummarizerError):
    status_code = 400

    def __init__(self, action: Any, valid: list[str]) -> None:
        super().__init__(
            f"Unknown quick action: {action}. Valid options: {valid}", {"quick_action": action}
        )


class UnsupportedProvider(SummarizerError):
    """Provider identifier has no registered adapter."""

    status_code = 400

    def __init__(self, provider: Any) -> None:
        super().__init__("Invalid AI provider selected", {"provider": provider})


class MissingCredentials(SummarizerError):
    status_code = 400

    def __init__(self, message: str = "API key is required") -> None:
        super().__init__(message)


class MissingText(SummarizerError):
    status_code = 400

    def __init__(self, message: str = "No text provided") -> None:
        super().__init__(message)


# =============================================================================
# Upstream provider errors
# =============================================================================


class UpstreamError(SummarizerError):
    """Provider answered with a non-success HTTP status."""

    def __init__(self, provider: str, status: int, provider_message: str | None = None) -> None:
        message = f"Failed to get response from {provider}"
        if provider_message:
            message = f"{message}: {provider_message}"
        super().__init__(
            message,
            {"provider": provider, "status": status, "provider_message": provider_message},
        )
        self.provider = provider
        self.status = status
        self.provider_message = provider_message
        # Error statuses are propagated unchanged; anything else is a bad gateway.
        self.status_code = status if status >= 400 else 502


class MalformedUpstreamResponse(SummarizerError):
    """Provider answered 2xx but the body lacks the expected result field."""

    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(
            "Invalid response format from AI provider",
            {"provider": provider, "reason": reason},
        )
        self.provider = provider
        self.reason = reason


class UpstreamTimeout(SummarizerError):
    status_code = 504

    def __init__(self, provider: str, timeout: float) -> None:
        super().__init__(
            f"{provider} did not respond within {timeout:g} seconds",
            {"provider": provider, "timeout": timeout},
        )


class UpstreamUnavailable(SummarizerError):
    """Transport-level failure: DNS, connection refused, TLS, protocol."""

    status_code = 502

    def __init__(self, provider: str, cause: str) -> None:
        super().__init__(f"Could not reach {provider}: {cause}", {"provider": provider})


class RequestCancelled(SummarizerError):
    status_code = 499

    def __init__(self, provider: str) -> None:
        super().__init__(f"Request to {provider} was cancelled", {"provider": provider})


# =============================================================================
# Document extraction errors
# =============================================================================


class ExtractionError(SummarizerError):
    """Base exception for document text extraction."""

    pass


class UnsupportedFileType(ExtractionError):
    def __init__(self, filename: str) -> None:
        super().__init__(f"Unsupported file type: {filename}", {"filename": filename})


class ExtractionFailed(ExtractionError):
    """The parsing library could not read the document."""

    def __init__(self, filename: str, cause: str) -> None:
        super().__init__(cause, {"filename": filename})


class EmptyExtraction(ExtractionError):
    def __init__(self, filename: str) -> None:
        super().__init__(
            "No text could be extracted from the document", {"filename": filename}
        )


class FileTooLarge(ExtractionError):
    status_code = 413

    def __init__(self, filename: str, size: int, max_size: int) -> None:
        super().__init__(
            f"File '{filename}' size ({size} bytes) exceeds maximum ({max_size} bytes)",
            {"filename": filename, "size": size, "max_size": max_size},
        )
