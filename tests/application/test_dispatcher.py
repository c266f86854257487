"""Tests for the notification dispatcher."""

import pytest
import requests
from datetime import datetime, timezone
from unittest.mock import Mock

from issue2case.adapters.formatters import CommentFormatter
from issue2case.adapters.github import GitHubAdapter
from issue2case.adapters.github.client import GitHubApiClient
from issue2case.adapters.resilience import RetryingRequestExecutor
from issue2case.application.sync import NotificationDispatcher
from issue2case.core.domain.entities import Case, Communication
from issue2case.core.domain.events import NewCommunications, StatusChanged
from issue2case.core.ports.config_provider import TrackerConfig
from issue2case.core.ports.issue_tracker import IssueTrackerError


def make_case(case_id):
    return Case(case_id=case_id, display_id=case_id.upper(), status="resolved")


@pytest.fixture
def tracker():
    return Mock()


@pytest.fixture
def dispatcher(tracker):
    formatter = CommentFormatter(now=lambda: datetime(2025, 1, 2, tzinfo=timezone.utc))
    return NotificationDispatcher(tracker, formatter)


class TestNotificationDispatcher:
    """Tests for NotificationDispatcher."""

    def test_status_change_posted(self, dispatcher, tracker):
        event = StatusChanged(
            case=make_case("case-1"), issue_number=4,
            previous_status="opened", current_status="resolved",
        )

        result = dispatcher.dispatch([event])

        assert result.posted == 1
        assert result.success
        issue_number, body = tracker.post_comment.call_args.args
        assert issue_number == 4
        assert "🟢 Opened" in body
        assert "✅ Resolved" in body

    def test_one_comment_per_communication(self, dispatcher, tracker):
        event = NewCommunications(
            case=make_case("case-1"), issue_number=4,
            communications=(
                Communication("first", "t1", "AWS Support"),
                Communication("second", "t2", "AWS Support"),
            ),
        )

        result = dispatcher.dispatch([event])

        assert result.posted == 2
        bodies = [call.args[1] for call in tracker.post_comment.call_args_list]
        assert "first" in bodies[0]
        assert "second" in bodies[1]
        assert "/reply" in bodies[0]

    def test_missing_issue_skipped(self, dispatcher, tracker):
        event = StatusChanged(
            case=make_case("case-1"), issue_number=None,
            previous_status="opened", current_status="resolved",
        )

        result = dispatcher.dispatch([event])

        assert result.skipped == 1
        assert result.posted == 0
        tracker.post_comment.assert_not_called()

    def test_failure_does_not_stop_later_cases(self, dispatcher, tracker):
        tracker.post_comment.side_effect = [IssueTrackerError("boom", issue_number=1), Mock()]
        events = [
            StatusChanged(case=make_case("case-1"), issue_number=1,
                          previous_status="opened", current_status="resolved"),
            StatusChanged(case=make_case("case-2"), issue_number=2,
                          previous_status="opened", current_status="resolved"),
        ]

        result = dispatcher.dispatch(events)

        assert result.posted == 1
        assert not result.success
        assert len(result.failures) == 1
        failure = result.failures[0]
        assert (failure.case_id, failure.issue_number, failure.event_type) == (
            "case-1", 1, "StatusChanged",
        )
        assert tracker.post_comment.call_args.args[0] == 2

    def test_transport_error_recorded_and_batch_continues(self):
        created = Mock(status_code=201, ok=True, text="json", headers={})
        created.json.return_value = {"id": 11, "body": "ok"}
        session = Mock()
        session.headers = {}
        session.request.side_effect = [requests.exceptions.ChunkedEncodingError("reset"), created]
        client = GitHubApiClient(
            token="t",
            repository="octo/repo",
            executor=RetryingRequestExecutor(sleep=lambda _: None),
            session=session,
        )
        tracker = GitHubAdapter(TrackerConfig(token="t", repository="octo/repo"), client=client)
        dispatcher = NotificationDispatcher(tracker, CommentFormatter())
        events = [
            StatusChanged(case=make_case("case-1"), issue_number=1,
                          previous_status="opened", current_status="resolved"),
            StatusChanged(case=make_case("case-2"), issue_number=2,
                          previous_status="opened", current_status="resolved"),
        ]

        result = dispatcher.dispatch(events)

        assert result.posted == 1
        assert len(result.failures) == 1
        assert result.failures[0].case_id == "case-1"
        assert "reset" in result.failures[0].error
