"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Support service: AWS Support (live), in-memory mock
- Issue tracker: GitHub
- Parsers: issue bodies, reply commands
- State: JSON snapshot file
- AI: OpenAI, Claude
- Config: environment variables, credentials file
"""

from .support import LiveSupportCaseGateway, MockSupportCaseGateway, create_support_gateway
from .github import GitHubAdapter
from .parsers import IssueBodyParser, ReplyExtractor
from .state import JsonFileStateStore
from .formatters import CommentFormatter
from .ai import OpenAIGenerator, ClaudeGenerator, create_text_generator
from .config import EnvironmentConfigProvider, CredentialResolver
from .resilience import RetryingRequestExecutor

__all__ = [
    "LiveSupportCaseGateway",
    "MockSupportCaseGateway",
    "create_support_gateway",
    "GitHubAdapter",
    "IssueBodyParser",
    "ReplyExtractor",
    "JsonFileStateStore",
    "CommentFormatter",
    "OpenAIGenerator",
    "ClaudeGenerator",
    "create_text_generator",
    "EnvironmentConfigProvider",
    "CredentialResolver",
    "RetryingRequestExecutor",
]
