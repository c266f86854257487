"""
Exceptions - Centralized exception hierarchy for issue2case.

Every error raised at an API or file boundary derives from Issue2CaseError,
so the CLI can map any failure to an exit code in one place.

    Issue2CaseError
    ├── ConfigurationError      missing input or credentials (never retried)
    ├── ParseError              malformed local file
    └── UpstreamError           non-success response from a remote API
        └── RateLimitError      throttled; retried with backoff, then fatal
"""

from typing import Optional


__all__ = [
    "Issue2CaseError",
    "ConfigurationError",
    "ParseError",
    "UpstreamError",
    "RateLimitError",
]


class Issue2CaseError(Exception):
    """Base exception for all issue2case errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class ConfigurationError(Issue2CaseError):
    """Required configuration or credentials are missing or unusable."""


class ParseError(Issue2CaseError):
    """A local file could not be parsed."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.path = path


class UpstreamError(Issue2CaseError):
    """
    A remote API answered with a non-success response.

    Carries the HTTP status code and the provider's own error
    classification (e.g. ``rate_limit_error``, ``invalid_request_error``)
    so callers can report exactly what the provider said.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_type: Optional[str] = None,
        provider: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.status_code = status_code
        self.error_type = error_type
        self.provider = provider


class RateLimitError(UpstreamError):
    """The provider asked us to slow down."""

    def __init__(
        self,
        message: str,
        retry_after: Optional[float] = None,
        status_code: Optional[int] = 429,
        error_type: Optional[str] = "rate_limit",
        provider: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            error_type=error_type,
            provider=provider,
            cause=cause,
        )
        self.retry_after = retry_after
        self.attempts: int = 0
