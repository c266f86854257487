"""
Exit Codes - Process exit statuses for the CLI.
"""

from enum import IntEnum

from ..core.exceptions import ConfigurationError, RateLimitError, UpstreamError


class ExitCode(IntEnum):
    """Exit codes returned by ``issue2case``."""

    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    UPSTREAM_ERROR = 3
    RATE_LIMITED = 4
    INTERRUPTED = 130

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExitCode":
        """Map an error to its exit code; most specific class first."""
        if isinstance(exc, KeyboardInterrupt):
            return cls.INTERRUPTED
        if isinstance(exc, ConfigurationError):
            return cls.CONFIG_ERROR
        if isinstance(exc, RateLimitError):
            return cls.RATE_LIMITED
        if isinstance(exc, UpstreamError):
            return cls.UPSTREAM_ERROR
        return cls.ERROR
