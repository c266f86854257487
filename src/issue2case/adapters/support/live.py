"""
Live Support Gateway - SupportCasePort for the real AWS Support API.

The Support API is only available on Business and Enterprise support plans.
Until the account has one, every operation loads credentials (so credential
problems still surface first) and then refuses with a descriptive error.
"""

import logging
from typing import Optional

from ...core.domain.entities import Case, CaseData
from ...core.ports.config_provider import SupportConfig
from ...core.ports.support_case import (
    SupportCasePort,
    SupportPlanRequiredError,
    CaseFilter,
    CreatedCase,
    CommunicationResult,
)
from ..config.credentials import CredentialResolver, Credentials


PLAN_REQUIRED_MESSAGE = (
    "AWS Support API requires a Business or Enterprise support plan.\n"
    "To run without it, enable mock mode (--mock or MOCK_MODE=true)."
)


class LiveSupportCaseGateway(SupportCasePort):
    """
    AWS Support implementation of SupportCasePort.

    Credentials are resolved on first use and kept for the lifetime of the
    gateway.
    """

    def __init__(
        self,
        config: SupportConfig,
        resolver: Optional[CredentialResolver] = None,
    ):
        self.config = config
        self._resolver = resolver or CredentialResolver(
            path=config.credentials_path,
            profile=config.profile,
        )
        self._credentials: Optional[Credentials] = None
        self.logger = logging.getLogger("LiveSupportCaseGateway")

    @property
    def name(self) -> str:
        return "AWS Support"

    @property
    def credentials(self) -> Credentials:
        """Credentials for the configured profile, loaded once."""
        if self._credentials is None:
            self._credentials = self._resolver.resolve()
            self.logger.info(
                f"Using profile '{self.config.profile}' in {self.config.region}"
            )
        return self._credentials

    def create_case(self, case_data: CaseData) -> CreatedCase:
        self._require_plan("CreateCase")

    def describe_cases(self, case_filter: CaseFilter) -> list[Case]:
        self._require_plan("DescribeCases")

    def add_communication_to_case(self, case_id: str, body: str) -> CommunicationResult:
        self._require_plan("AddCommunicationToCase")

    def _require_plan(self, operation: str) -> None:
        # Touch credentials first: a missing profile is the more useful error
        _ = self.credentials
        raise SupportPlanRequiredError(
            PLAN_REQUIRED_MESSAGE,
            status_code=None,
            error_type="SubscriptionRequiredException",
            provider="aws-support",
        )
