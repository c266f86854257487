"""
Sync module - Case monitoring and notification.
"""

from .detector import ChangeDetector
from .dispatcher import DispatchResult, FailedNotification, NotificationDispatcher
from .monitor import CaseMonitor, MonitorResult

__all__ = [
    "ChangeDetector",
    "DispatchResult",
    "FailedNotification",
    "NotificationDispatcher",
    "CaseMonitor",
    "MonitorResult",
]
