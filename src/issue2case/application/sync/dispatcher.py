"""
Notification Dispatcher - Post change events as issue comments.
"""

import logging
from dataclasses import dataclass, field

from ...core.domain.events import CaseEvent, NewCommunications, StatusChanged
from ...core.exceptions import Issue2CaseError
from ...core.ports.issue_tracker import IssueTrackerPort
from ...adapters.formatters import CommentFormatter


@dataclass
class FailedNotification:
    """A notification that could not be posted."""

    case_id: str
    issue_number: int
    event_type: str
    error: str


@dataclass
class DispatchResult:
    """Outcome of dispatching a batch of events."""

    posted: int = 0
    skipped: int = 0
    failures: list[FailedNotification] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


class NotificationDispatcher:
    """
    Renders events and posts them on the case's originating issue.

    A failed post is logged and recorded; it never stops the remaining
    events from being posted.
    """

    def __init__(
        self,
        tracker: IssueTrackerPort,
        formatter: CommentFormatter,
    ):
        self.tracker = tracker
        self.formatter = formatter
        self.logger = logging.getLogger("NotificationDispatcher")

    def dispatch(self, events: list[CaseEvent]) -> DispatchResult:
        """Post events in order."""
        result = DispatchResult()

        for event in events:
            if event.issue_number is None:
                self.logger.warning(f"No issue linked to case {event.case.case_id}; skipping {event.event_type}")
                result.skipped += 1
                continue

            for body in self.render(event):
                try:
                    self.tracker.post_comment(event.issue_number, body)
                    result.posted += 1
                except Issue2CaseError as e:
                    self.logger.error(
                        f"Failed to post {event.event_type} for case {event.case.case_id} "
                        f"on issue #{event.issue_number}: {e}"
                    )
                    result.failures.append(FailedNotification(
                        case_id=event.case.case_id,
                        issue_number=event.issue_number,
                        event_type=event.event_type,
                        error=str(e),
                    ))

        return result

    def render(self, event: CaseEvent) -> list[str]:
        """Comment bodies for an event (one per new communication)."""
        if isinstance(event, StatusChanged):
            return [self.formatter.status_changed(event)]
        if isinstance(event, NewCommunications):
            return [
                self.formatter.new_communication(event.case, communication)
                for communication in event.communications
            ]
        raise ValueError(f"Unsupported event: {event.event_type}")
