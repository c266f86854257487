"""
Domain Events - Things that happened in the domain.

Events are immutable records of something that occurred.
The change detector emits them; the dispatcher turns them into comments.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional
from uuid import uuid4

from .entities import Case, Communication


@dataclass(frozen=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def event_type(self) -> str:
        """Get the event type name."""
        return self.__class__.__name__


@dataclass(frozen=True)
class CaseEvent(DomainEvent):
    """An event about one polled case."""

    case: Case = None
    issue_number: Optional[int] = None


@dataclass(frozen=True)
class StatusChanged(CaseEvent):
    """Event: A case's status differs from its last snapshot."""

    previous_status: str = ""
    current_status: str = ""


@dataclass(frozen=True)
class NewCommunications(CaseEvent):
    """Event: A case has communications not present in its last snapshot."""

    communications: tuple[Communication, ...] = ()


@dataclass(frozen=True)
class CaseCreated(DomainEvent):
    """Event: A support case was created from an issue."""

    case_id: str = ""
    display_id: str = ""
    issue_number: Optional[int] = None


@dataclass(frozen=True)
class ReplySent(DomainEvent):
    """Event: A reply was relayed to a support case."""

    case_id: str = ""
    issue_number: Optional[int] = None


@dataclass(frozen=True)
class MonitorStarted(DomainEvent):
    """Event: A monitor run started."""

    state_file: str = ""


@dataclass(frozen=True)
class MonitorCompleted(DomainEvent):
    """Event: A monitor run completed."""

    cases_polled: int = 0
    events_detected: int = 0
    notifications_posted: int = 0
    errors: list = field(default_factory=list)


class EventBus:
    """
    Simple event bus for publishing and subscribing to domain events.

    This enables loose coupling between components.
    """

    def __init__(self):
        self._handlers: dict[type, list] = {}
        self._history: list[DomainEvent] = []

    def subscribe(self, event_type: type, handler: Callable[[DomainEvent], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        self._history.append(event)

        # Call specific handlers
        for handler in self._handlers.get(type(event), []):
            handler(event)

        # Call catch-all handlers
        for handler in self._handlers.get(DomainEvent, []):
            handler(event)

    def get_history(self) -> list[DomainEvent]:
        """Get all published events."""
        return self._history.copy()
