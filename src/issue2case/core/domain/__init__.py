"""
Domain - Entities, enums and events.
"""

from .enums import CaseStatus, Severity, AIProvider
from .entities import (
    Case,
    CaseData,
    Communication,
    Snapshot,
    DEFAULT_CATEGORY,
    DEFAULT_LANGUAGE,
    DEFAULT_SERVICE_CODE,
)
from .events import (
    DomainEvent,
    CaseEvent,
    StatusChanged,
    NewCommunications,
    CaseCreated,
    ReplySent,
    MonitorStarted,
    MonitorCompleted,
    EventBus,
)

__all__ = [
    "CaseStatus",
    "Severity",
    "AIProvider",
    "Case",
    "CaseData",
    "Communication",
    "Snapshot",
    "DEFAULT_CATEGORY",
    "DEFAULT_LANGUAGE",
    "DEFAULT_SERVICE_CODE",
    "DomainEvent",
    "CaseEvent",
    "StatusChanged",
    "NewCommunications",
    "CaseCreated",
    "ReplySent",
    "MonitorStarted",
    "MonitorCompleted",
    "EventBus",
]
