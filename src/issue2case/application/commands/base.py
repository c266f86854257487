"""
Command base - Shared result type and interface for use-case commands.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from ...core.domain.events import DomainEvent, EventBus


@dataclass
class CommandResult:
    """Result of executing a command."""

    success: bool = True
    data: Any = None
    error: Optional[str] = None
    skipped: bool = False

    @classmethod
    def ok(cls, data: Any = None) -> "CommandResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "CommandResult":
        return cls(success=False, error=error)

    @classmethod
    def skip(cls, reason: str) -> "CommandResult":
        return cls(success=True, skipped=True, error=reason)


class Command(ABC):
    """
    A single use case run once per invocation.

    Upstream errors raised during ``execute`` propagate to the caller after
    any best-effort error notification has been attempted.
    """

    def __init__(self, event_bus: Optional[EventBus] = None):
        self.event_bus = event_bus or EventBus()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    @abstractmethod
    def name(self) -> str:
        """Command name, for logs."""
        ...

    def validate(self) -> Optional[str]:
        """Return an error message if the inputs are unusable, else None."""
        return None

    @abstractmethod
    def execute(self) -> CommandResult:
        ...

    def _publish(self, event: DomainEvent) -> None:
        self.event_bus.publish(event)
