"""
Support Case Port - Abstract interface over the case lifecycle.

Implementations:
- LiveSupportCaseGateway: the real support service
- MockSupportCaseGateway: deterministic in-memory fixtures
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..domain.entities import Case, CaseData
from ..exceptions import UpstreamError


class SupportCaseError(UpstreamError):
    """The support service rejected a request."""


class SupportPlanRequiredError(SupportCaseError):
    """The account's support plan does not include API access."""


@dataclass(frozen=True)
class CaseFilter:
    """Filter for describe_cases."""

    include_resolved_cases: bool = False
    max_results: int = 100


@dataclass(frozen=True)
class CreatedCase:
    """Identifiers of a newly created case."""

    case_id: str
    display_id: str


@dataclass(frozen=True)
class CommunicationResult:
    """Outcome of add_communication_to_case."""

    result: bool


class SupportCasePort(ABC):
    """
    Abstract interface for the support-case service.

    The live/mock choice is made once, when the gateway is constructed.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the gateway name (e.g., 'AWS Support')."""
        ...

    @abstractmethod
    def create_case(self, case_data: CaseData) -> CreatedCase:
        """
        Open a new case.

        Raises:
            SupportCaseError: If the service refuses the request
            ConfigurationError: If credentials are unavailable
        """
        ...

    @abstractmethod
    def describe_cases(self, case_filter: CaseFilter) -> list[Case]:
        """List cases, most recent first, as the service orders them."""
        ...

    @abstractmethod
    def add_communication_to_case(self, case_id: str, body: str) -> CommunicationResult:
        """Append an outbound message to a case."""
        ...
