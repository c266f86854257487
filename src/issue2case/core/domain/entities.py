"""
Domain Entities - Objects with identity that flow through a sync run.

Cases and communications are parsed from (and serialized back to) the
camelCase records the support service returns, which is also the format of
the persisted state file.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .enums import Severity


DEFAULT_CATEGORY = "other"
DEFAULT_SERVICE_CODE = "general-info"
DEFAULT_LANGUAGE = "ja"


@dataclass(frozen=True)
class Communication:
    """One message exchanged on a case."""

    body: str
    time_created: str
    submitted_by: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Communication":
        return cls(
            body=data.get("body", ""),
            time_created=data.get("timeCreated", ""),
            submitted_by=data.get("submittedBy", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "body": self.body,
            "timeCreated": self.time_created,
            "submittedBy": self.submitted_by,
        }


@dataclass
class Case:
    """
    A tracked unit of work in the support service.

    ``status`` is kept as the raw upstream string; values outside
    CaseStatus are preserved rather than rejected. ``None`` means the case
    has never been observed by a poll.
    """

    case_id: str
    display_id: str = ""
    subject: str = ""
    status: Optional[str] = None
    time_created: Optional[str] = None
    recent_communications: list[Communication] = field(default_factory=list)

    @property
    def label(self) -> str:
        """Human-facing identifier."""
        return self.display_id or self.case_id

    def communication_times(self) -> set[str]:
        return {c.time_created for c in self.recent_communications}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Case":
        recent = data.get("recentCommunications") or {}
        # The API nests the list; older state files stored it flat.
        if isinstance(recent, dict):
            recent = recent.get("communications") or []

        return cls(
            case_id=data["caseId"],
            display_id=data.get("displayId") or "",
            subject=data.get("subject") or "",
            status=data.get("status"),
            time_created=data.get("timeCreated"),
            recent_communications=[Communication.from_dict(c) for c in recent],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "caseId": self.case_id,
            "displayId": self.display_id,
            "subject": self.subject,
            "status": self.status,
            "timeCreated": self.time_created,
            "recentCommunications": {
                "communications": [c.to_dict() for c in self.recent_communications],
            },
        }


@dataclass
class Snapshot:
    """
    The last persisted observation of a case, used as the diff baseline.

    A snapshot written at case creation time links the case to its issue
    before any poll has observed it; such a snapshot is not ``observed``.
    """

    case: Case
    issue_number: Optional[int] = None

    @property
    def case_id(self) -> str:
        return self.case.case_id

    @property
    def observed(self) -> bool:
        return self.case.status is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Snapshot":
        issue_number = data.get("issueNumber")
        return cls(
            case=Case.from_dict(data),
            issue_number=int(issue_number) if issue_number is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data = self.case.to_dict()
        data["issueNumber"] = self.issue_number
        return data


@dataclass
class CaseData:
    """Payload for creating a case, derived from an issue body."""

    subject: str = ""
    body: str = ""
    severity: Severity = Severity.LOW
    category: str = DEFAULT_CATEGORY
    service_code: str = DEFAULT_SERVICE_CODE
    language: str = DEFAULT_LANGUAGE

    def to_request(self) -> dict[str, Any]:
        """Render as CreateCase request parameters."""
        return {
            "subject": self.subject,
            "communicationBody": self.body,
            "severityCode": self.severity.value,
            "categoryCode": self.category,
            "serviceCode": self.service_code,
            "language": self.language,
        }
