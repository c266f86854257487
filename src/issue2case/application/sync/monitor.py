"""
Case Monitor - Coordinates one polling run.

Poll the support service, diff every case against its last snapshot,
notify the originating issues, then persist the merged snapshot image.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...core.domain.entities import Case, Snapshot
from ...core.domain.events import CaseEvent, EventBus, MonitorCompleted, MonitorStarted
from ...core.ports.state_store import StateStorePort
from ...core.ports.support_case import CaseFilter, SupportCasePort
from ...adapters.resilience import RetryingRequestExecutor
from .detector import ChangeDetector
from .dispatcher import FailedNotification, NotificationDispatcher


@dataclass
class MonitorResult:
    """Result of a monitor run."""

    cases_polled: int = 0
    new_cases: list[str] = field(default_factory=list)
    events: list[CaseEvent] = field(default_factory=list)
    notifications_posted: int = 0
    notifications_skipped: int = 0
    failures: list[FailedNotification] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures

    @property
    def events_detected(self) -> int:
        return len(self.events)


class CaseMonitor:
    """
    Runs the monitor flow once.

    Phases:
    1. Describe unresolved cases (through the retry executor)
    2. Load the previous snapshots
    3. Detect changes per case, in poll order
    4. Dispatch notifications (only when a tracker is configured)
    5. Save the merged snapshots
    """

    def __init__(
        self,
        gateway: SupportCasePort,
        state_store: StateStorePort,
        dispatcher: Optional[NotificationDispatcher] = None,
        detector: Optional[ChangeDetector] = None,
        executor: Optional[RetryingRequestExecutor] = None,
        event_bus: Optional[EventBus] = None,
        case_filter: Optional[CaseFilter] = None,
        state_label: str = "",
    ):
        """
        Initialize the monitor.

        Args:
            gateway: Support case port
            state_store: Snapshot store
            dispatcher: Notification dispatcher, or None to skip posting
            detector: Change detector
            executor: Retry executor for support calls
            event_bus: Optional event bus
            case_filter: Filter passed to describe_cases
            state_label: State file name reported in MonitorStarted
        """
        self.gateway = gateway
        self.state_store = state_store
        self.dispatcher = dispatcher
        self.detector = detector or ChangeDetector()
        self.executor = executor or RetryingRequestExecutor()
        self.event_bus = event_bus or EventBus()
        self.case_filter = case_filter or CaseFilter(include_resolved_cases=False, max_results=100)
        self.state_label = state_label
        self.logger = logging.getLogger("CaseMonitor")

    def run(self) -> MonitorResult:
        """Poll once and return what changed."""
        result = MonitorResult()
        self.event_bus.publish(MonitorStarted(state_file=self.state_label))

        cases = self.executor.execute(
            lambda: self.gateway.describe_cases(self.case_filter),
            description="describe cases",
        )
        result.cases_polled = len(cases)
        self.logger.info(f"Polled {len(cases)} case(s) from {self.gateway.name}")

        previous = self.state_store.load_all()

        for case in cases:
            snapshot = previous.get(case.case_id)
            if snapshot is None or not snapshot.observed:
                result.new_cases.append(case.case_id)
                self.logger.info(f"New case observed: {case.label}")
            events = self.detector.detect(case, snapshot)
            for event in events:
                self.logger.info(f"{event.event_type}: {case.label}")
            result.events.extend(events)

        if self.dispatcher is None:
            if result.events:
                self.logger.info("No issue tracker configured; skipping notifications")
        elif result.events:
            dispatched = self.dispatcher.dispatch(result.events)
            result.notifications_posted = dispatched.posted
            result.notifications_skipped = dispatched.skipped
            result.failures.extend(dispatched.failures)

        self.state_store.save_all(self.merge(previous, cases))

        self.event_bus.publish(MonitorCompleted(
            cases_polled=result.cases_polled,
            events_detected=result.events_detected,
            notifications_posted=result.notifications_posted,
            errors=[f.error for f in result.failures],
        ))
        return result

    @staticmethod
    def merge(previous: dict[str, Snapshot], cases: list[Case]) -> dict[str, Snapshot]:
        """
        Overlay polled cases on the previous snapshots.

        Polled cases replace their snapshot but keep the linked issue;
        cases not returned by this poll are carried over unchanged.
        """
        merged = dict(previous)
        for case in cases:
            prior = previous.get(case.case_id)
            merged[case.case_id] = Snapshot(
                case=case,
                issue_number=prior.issue_number if prior else None,
            )
        return merged
