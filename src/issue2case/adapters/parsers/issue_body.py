"""
Issue Body Parser - Parse issue-form text into a case creation payload.

Expected format (GitHub issue forms render each field under an h3):

    ### Severity
    Critical（緊急）

    ### Target service
    EC2

    ### Summary
    Instance fails to start

    ### Details
    - Error: InsufficientInstanceCapacity

Labels are matched in English or Japanese; see SECTION_LABELS.
"""

import logging
import re
from typing import Optional

from ...core.domain.entities import (
    CaseData,
    DEFAULT_CATEGORY,
    DEFAULT_SERVICE_CODE,
)
from ...core.domain.enums import Severity


SUMMARY = "summary"
DETAILS = "details"
REPRODUCTION_STEPS = "reproduction steps"
ATTEMPTED_REMEDIES = "attempted remedies"
SEVERITY = "severity"
TARGET_SERVICE = "target service"
CATEGORY = "category"

SECTION_LABELS = {
    SUMMARY: ("Summary", "事象の概要"),
    DETAILS: ("Details", "詳細説明"),
    REPRODUCTION_STEPS: ("Reproduction steps", "再現手順"),
    ATTEMPTED_REMEDIES: ("Attempted remedies", "試した対処方法"),
    SEVERITY: ("Severity", "重要度"),
    TARGET_SERVICE: ("Target service", "対象AWSサービス"),
    CATEGORY: ("Category", "問い合わせカテゴリ"),
}

# Sections copied into the case body, in this order
BODY_SECTIONS = (DETAILS, REPRODUCTION_STEPS, ATTEMPTED_REMEDIES)

SERVICE_CODES = {
    "EC2": "amazon-elastic-compute-cloud-linux",
    "RDS": "amazon-relational-database-service",
    "S3": "amazon-simple-storage-service",
    "Lambda": "aws-lambda",
    "ECS": "amazon-elastic-container-service",
    "CloudFront": "amazon-cloudfront",
    "Route53": "amazon-route53",
    "VPC": "amazon-virtual-private-cloud",
}

SUBJECT_MAX_LENGTH = 100

HEADING_PATTERN = re.compile(r'^###\s*(.*?)\s*$')


def map_service_code(service_name: str) -> str:
    """Map a service display name to its support service code."""
    return SERVICE_CODES.get(service_name.strip(), DEFAULT_SERVICE_CODE)


class IssueBodyParser:
    """
    Parser for heading-delimited issue bodies.

    Every ``###`` heading opens a section; its non-empty lines (trimmed)
    are collected until the next heading. Unknown headings are kept in
    ``split_sections`` output but do not contribute to the payload.
    """

    def __init__(self):
        self.logger = logging.getLogger("IssueBodyParser")
        self._aliases = {
            label.casefold(): key
            for key, labels in SECTION_LABELS.items()
            for label in labels
        }

    @property
    def name(self) -> str:
        return "IssueBody"

    def parse(self, issue_body: str) -> CaseData:
        """Derive the case creation payload from an issue body."""
        sections = self.split_sections(issue_body or "")
        known = self._index_known(sections)

        data = CaseData(
            subject=self._extract_subject(known),
            body=self._extract_body(known),
            severity=self._extract_severity(known),
            category=DEFAULT_CATEGORY,
            service_code=self._extract_service_code(known),
        )

        self.logger.debug(
            f"Parsed {len(sections)} sections: severity={data.severity.value} "
            f"service={data.service_code}"
        )
        return data

    def split_sections(self, content: str) -> dict[str, list[str]]:
        """Split text into ``{heading: [lines]}``, in document order."""
        sections: dict[str, list[str]] = {}
        current: Optional[str] = None

        for line in content.splitlines():
            match = HEADING_PATTERN.match(line)
            if match:
                current = match.group(1)
                sections[current] = []
                continue

            if current is not None and line.strip():
                sections[current].append(line.strip())

        return sections

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _index_known(
        self,
        sections: dict[str, list[str]]
    ) -> dict[str, tuple[str, list[str]]]:
        """Map canonical section keys to (heading as written, lines)."""
        known: dict[str, tuple[str, list[str]]] = {}
        for heading, lines in sections.items():
            key = self._aliases.get(heading.casefold())
            if key and key not in known:
                known[key] = (heading, lines)
        return known

    def _extract_subject(self, known: dict[str, tuple[str, list[str]]]) -> str:
        if SUMMARY not in known:
            return ""
        _, lines = known[SUMMARY]
        return " ".join(lines)[:SUBJECT_MAX_LENGTH]

    def _extract_body(self, known: dict[str, tuple[str, list[str]]]) -> str:
        parts = []
        for key in BODY_SECTIONS:
            if key not in known:
                continue
            heading, lines = known[key]
            parts.append(f"## {heading}\n" + "\n".join(lines))
        return "\n\n".join(parts)

    def _extract_severity(self, known: dict[str, tuple[str, list[str]]]) -> Severity:
        if SEVERITY not in known:
            return Severity.LOW
        _, lines = known[SEVERITY]
        return Severity.from_string(lines[0] if lines else "")

    def _extract_service_code(self, known: dict[str, tuple[str, list[str]]]) -> str:
        if TARGET_SERVICE not in known:
            return DEFAULT_SERVICE_CODE
        _, lines = known[TARGET_SERVICE]
        return map_service_code(lines[0] if lines else "")
