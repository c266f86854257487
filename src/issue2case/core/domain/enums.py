"""
Domain Enums - Closed value sets used by the domain.
"""

from enum import Enum


class CaseStatus(str, Enum):
    """Status values reported by the support service."""

    OPENED = "opened"
    PENDING_CUSTOMER_ACTION = "pending-customer-action"
    REOPENED = "reopened"
    RESOLVED = "resolved"
    UNASSIGNED = "unassigned"

    @classmethod
    def is_known(cls, value: str) -> bool:
        return value in cls._value2member_map_

    @property
    def label(self) -> str:
        return {
            CaseStatus.OPENED: "🟢 Opened",
            CaseStatus.PENDING_CUSTOMER_ACTION: "🟡 Pending customer action",
            CaseStatus.REOPENED: "🔄 Reopened",
            CaseStatus.RESOLVED: "✅ Resolved",
            CaseStatus.UNASSIGNED: "⚪ Unassigned",
        }[self]


class Severity(str, Enum):
    """Case severity codes accepted by the support service."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def from_string(cls, s: str) -> "Severity":
        """
        Map a free-form severity label to a severity code.

        Matching is by substring, checked from most to least severe, so
        "Critical（緊急）" and "High（高）" both resolve as expected.
        Anything unrecognized is LOW.
        """
        if "Critical" in s or "緊急" in s:
            return cls.URGENT
        if "High" in s or "高" in s:
            return cls.HIGH
        if "Normal" in s or "通常" in s:
            return cls.NORMAL
        return cls.LOW


class AIProvider(str, Enum):
    """Text generation backends."""

    OPENAI = "openai"
    CLAUDE = "claude"
