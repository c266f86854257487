"""
Issue Tracker Port - Abstract interface for the issue tracker side.

The sync only ever writes to the tracker: posting a comment on an issue
is the whole contract.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import UpstreamError


class IssueTrackerError(UpstreamError):
    """Base exception for issue tracker errors."""

    def __init__(
        self,
        message: str,
        issue_number: Optional[int] = None,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, status_code=status_code, provider="github", cause=cause)
        self.issue_number = issue_number


class AuthenticationError(IssueTrackerError):
    """Authentication failed."""


class NotFoundError(IssueTrackerError):
    """Resource not found."""


@dataclass
class CommentData:
    """A comment as returned by the tracker."""

    id: Optional[int] = None
    body: str = ""
    author: str = ""
    url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CommentData":
        return cls(
            id=data.get("id"),
            body=data.get("body", ""),
            author=(data.get("user") or {}).get("login", ""),
            url=data.get("html_url", ""),
        )


class IssueTrackerPort(ABC):
    """Abstract interface for issue trackers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the tracker name (e.g., 'GitHub')."""
        ...

    @abstractmethod
    def post_comment(self, issue_number: int, body: str) -> CommentData:
        """
        Add a comment to an issue.

        Raises:
            IssueTrackerError: On API errors
            RateLimitError: If throttled after all retries
        """
        ...
