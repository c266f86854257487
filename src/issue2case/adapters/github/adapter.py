"""
GitHub Adapter - Implements IssueTrackerPort for GitHub Issues.
"""

import logging
from typing import Optional

from ...core.ports.config_provider import TrackerConfig
from ...core.ports.issue_tracker import IssueTrackerPort, CommentData
from ..resilience import RetryingRequestExecutor
from .client import GitHubApiClient


class GitHubAdapter(IssueTrackerPort):
    """
    GitHub implementation of the IssueTrackerPort.
    """

    def __init__(
        self,
        config: TrackerConfig,
        executor: Optional[RetryingRequestExecutor] = None,
        client: Optional[GitHubApiClient] = None,
    ):
        """
        Initialize the GitHub adapter.

        Args:
            config: Tracker configuration
            executor: Retry policy for rate-limited calls
            client: Optional pre-built API client
        """
        self.config = config
        self.logger = logging.getLogger("GitHubAdapter")
        self._client = client or GitHubApiClient(
            token=config.token,
            repository=config.repository,
            base_url=config.api_url,
            executor=executor,
        )

    @property
    def name(self) -> str:
        return "GitHub"

    def post_comment(self, issue_number: int, body: str) -> CommentData:
        data = self._client.create_issue_comment(issue_number, body)
        comment = CommentData.from_api(data)
        self.logger.info(f"Posted comment on issue #{issue_number}")
        return comment
