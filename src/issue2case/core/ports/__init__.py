"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .support_case import (
    SupportCasePort,
    SupportCaseError,
    SupportPlanRequiredError,
    CaseFilter,
    CreatedCase,
    CommunicationResult,
)
from .issue_tracker import (
    IssueTrackerPort,
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
    CommentData,
)
from .state_store import StateStorePort
from .text_generator import TextGeneratorPort, TextGenerationError
from .config_provider import (
    ConfigProviderPort,
    AppConfig,
    TrackerConfig,
    SupportConfig,
    AIConfig,
)

__all__ = [
    "SupportCasePort",
    "SupportCaseError",
    "SupportPlanRequiredError",
    "CaseFilter",
    "CreatedCase",
    "CommunicationResult",
    "IssueTrackerPort",
    "IssueTrackerError",
    "AuthenticationError",
    "NotFoundError",
    "CommentData",
    "StateStorePort",
    "TextGeneratorPort",
    "TextGenerationError",
    "ConfigProviderPort",
    "AppConfig",
    "TrackerConfig",
    "SupportConfig",
    "AIConfig",
]
