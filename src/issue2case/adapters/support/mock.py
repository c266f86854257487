"""
Mock Support Gateway - Deterministic in-memory SupportCasePort.

Used for demos, CI runs and tests where no support plan is available.
"""

import logging
import time
from typing import Callable

from ...core.domain.entities import Case, CaseData, Communication
from ...core.domain.enums import CaseStatus
from ...core.ports.support_case import (
    SupportCasePort,
    CaseFilter,
    CreatedCase,
    CommunicationResult,
)


MOCK_CASE_PREFIX = "case-mock-"

# Fixed timestamps: a fixture that changed every poll would look like a new
# communication on every run.
FIXTURE_CASE = {
    "caseId": "case-mock-12345",
    "displayId": "CASE-12345",
    "subject": "Test EC2 Issue",
    "status": CaseStatus.OPENED.value,
    "timeCreated": "2025-01-01T00:00:00.000Z",
    "recentCommunications": {
        "communications": [
            {
                "body": "This is a test case response from AWS Support.",
                "timeCreated": "2025-01-01T00:05:00.000Z",
                "submittedBy": "AWS Support",
            },
        ],
    },
}


class MockSupportCaseGateway(SupportCasePort):
    """Mock implementation of SupportCasePort."""

    def __init__(self, clock: Callable[[], float] = time.time):
        """
        Args:
            clock: Time source in seconds, used to derive case ids
        """
        self._clock = clock
        self._last_stamp = 0
        self.logger = logging.getLogger("MockSupportCaseGateway")

    @property
    def name(self) -> str:
        return "AWS Support (mock)"

    def create_case(self, case_data: CaseData) -> CreatedCase:
        self.logger.info(f"[MOCK] Creating case: {case_data.subject}")

        # Millisecond stamp, bumped so two calls in the same ms stay unique
        stamp = max(int(self._clock() * 1000), self._last_stamp + 1)
        self._last_stamp = stamp

        case_id = f"{MOCK_CASE_PREFIX}{stamp}"
        return CreatedCase(
            case_id=case_id,
            display_id=f"CASE-{case_id[-8:].upper()}",
        )

    def describe_cases(self, case_filter: CaseFilter) -> list[Case]:
        self.logger.info("[MOCK] Describing cases")
        cases = [Case.from_dict(FIXTURE_CASE)]

        if not case_filter.include_resolved_cases:
            cases = [c for c in cases if c.status != CaseStatus.RESOLVED.value]

        return cases[: case_filter.max_results]

    def add_communication_to_case(self, case_id: str, body: str) -> CommunicationResult:
        self.logger.info(f"[MOCK] Adding communication to case {case_id}")
        return CommunicationResult(result=True)
