"""
Application Layer - Use cases and orchestration.

This layer contains:
- commands/: One-shot use cases (create, reply, generate)
- sync/: Case monitoring, change detection and notification
"""

from .sync import CaseMonitor, MonitorResult, ChangeDetector, NotificationDispatcher
from .commands import (
    Command,
    CommandResult,
    CreateCaseCommand,
    ReplyToCaseCommand,
    GenerateSupportRequestCommand,
)

__all__ = [
    "CaseMonitor",
    "MonitorResult",
    "ChangeDetector",
    "NotificationDispatcher",
    "Command",
    "CommandResult",
    "CreateCaseCommand",
    "ReplyToCaseCommand",
    "GenerateSupportRequestCommand",
]
