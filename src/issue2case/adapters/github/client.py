"""
GitHub API Client - Low-level HTTP client for the GitHub REST API.

This handles the raw HTTP communication with GitHub.
The GitHubAdapter uses this to implement the IssueTrackerPort.
"""

import logging
import time
from typing import Any, Optional

import requests

from ...core.exceptions import RateLimitError
from ...core.ports.issue_tracker import (
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
)
from ..resilience import RetryingRequestExecutor


class GitHubApiClient:
    """
    Low-level GitHub REST API client.

    Handles authentication, request/response, error handling and
    rate-limit retries.
    """

    USER_AGENT = "issue2case"

    def __init__(
        self,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        executor: Optional[RetryingRequestExecutor] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ):
        """
        Initialize the GitHub client.

        Args:
            token: Personal access or workflow token
            repository: Repository as owner/repo
            base_url: API root (override for GitHub Enterprise)
            executor: Retry policy for rate-limited calls
            session: Optional pre-built requests session
            timeout: Per-request timeout in seconds
        """
        if repository.count("/") != 1:
            raise ValueError(f"Repository must be 'owner/repo', got '{repository}'")

        self.base_url = base_url.rstrip("/")
        self.repository = repository
        self.repo_url = f"{self.base_url}/repos/{repository}"
        self.timeout = timeout
        self.executor = executor or RetryingRequestExecutor()
        self.logger = logging.getLogger("GitHubApiClient")

        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"token {token}",
            "User-Agent": self.USER_AGENT,
        })

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Any:
        """
        Make an authenticated request to the repository API.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            endpoint: Path below /repos/{owner}/{repo} (e.g., 'issues/1/comments')
            **kwargs: Additional arguments for requests

        Returns:
            Decoded JSON response

        Raises:
            IssueTrackerError: On API errors
            RateLimitError: If still throttled after all retries
        """
        url = f"{self.repo_url}/{endpoint}"
        kwargs.setdefault("timeout", self.timeout)

        def send() -> Any:
            try:
                response = self._session.request(method, url, **kwargs)
            except requests.exceptions.ConnectionError as e:
                raise IssueTrackerError(f"Connection failed: {e}", cause=e)
            except requests.exceptions.Timeout as e:
                raise IssueTrackerError(f"Request timed out: {e}", cause=e)
            except requests.exceptions.RequestException as e:
                raise IssueTrackerError(f"Request failed: {e}", cause=e)
            return self._handle_response(response, endpoint)

        return self.executor.execute(send, description=f"GitHub {method} {endpoint}")

    def post(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> Any:
        """POST request."""
        return self.request("POST", endpoint, json=json, **kwargs)

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(
        self,
        response: requests.Response,
        endpoint: str
    ) -> Any:
        """Handle API response and errors."""
        if response.ok:
            if not response.text:
                return {}
            try:
                return response.json()
            except ValueError as e:
                raise IssueTrackerError(
                    f"GitHub returned a non-JSON response for {endpoint}",
                    status_code=response.status_code,
                    cause=e,
                )

        status = response.status_code
        error_body = response.text[:500] if response.text else ""

        if self._is_rate_limited(response):
            raise RateLimitError(
                f"GitHub rate limit exceeded for {endpoint}",
                retry_after=self._retry_after(response),
                status_code=status,
                provider="github",
            )

        if status == 401:
            raise AuthenticationError(
                "Authentication failed. Check GITHUB_TOKEN.",
                status_code=status,
            )

        if status == 404:
            raise NotFoundError(
                f"Not found: {endpoint}",
                status_code=status,
            )

        # Generic error
        raise IssueTrackerError(
            f"GitHub API error: {status} {error_body}",
            status_code=status,
        )

    @staticmethod
    def _is_rate_limited(response: requests.Response) -> bool:
        if response.status_code == 429:
            return True
        if response.status_code != 403:
            return False
        if response.headers.get("X-RateLimit-Remaining") == "0":
            return True
        return "rate limit" in (response.text or "").lower()

    @staticmethod
    def _retry_after(response: requests.Response) -> Optional[float]:
        retry_after = response.headers.get("Retry-After")
        if retry_after and retry_after.strip().isdigit():
            return float(retry_after)

        reset = response.headers.get("X-RateLimit-Reset")
        if reset and reset.strip().isdigit():
            return max(float(reset) - time.time(), 0.0)

        return None

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def create_issue_comment(self, issue_number: int, body: str) -> dict[str, Any]:
        """Post a comment on an issue."""
        return self.post(f"issues/{int(issue_number)}/comments", json={"body": body})
