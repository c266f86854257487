"""Tests for application commands."""

import pytest
from unittest.mock import Mock

from issue2case.adapters.state import JsonFileStateStore
from issue2case.adapters.support import MockSupportCaseGateway
from issue2case.adapters.resilience import RetryingRequestExecutor
from issue2case.application.commands import (
    CommandResult,
    CreateCaseCommand,
    GenerateSupportRequestCommand,
    ReplyToCaseCommand,
    build_prompt,
)
from issue2case.core.domain.entities import Case, Snapshot
from issue2case.core.domain.events import CaseCreated, EventBus, ReplySent
from issue2case.core.exceptions import ConfigurationError, RateLimitError
from issue2case.core.ports.issue_tracker import IssueTrackerError
from issue2case.core.ports.support_case import (
    CommunicationResult,
    SupportPlanRequiredError,
)
from issue2case.core.ports.text_generator import TextGenerationError


ISSUE_BODY = "### Severity\nHigh\n\n### Target service\nS3\n\n### Summary\nBucket access denied\n"


@pytest.fixture
def store(tmp_path):
    return JsonFileStateStore(tmp_path / "state.json")


@pytest.fixture
def tracker():
    return Mock()


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def executor():
    return RetryingRequestExecutor(sleep=lambda _: None)


def posted_bodies(tracker):
    return [call.args[1] for call in tracker.post_comment.call_args_list]


class TestCommandResult:
    """Tests for CommandResult."""

    def test_ok(self):
        result = CommandResult.ok("data")
        assert result.success
        assert result.data == "data"

    def test_fail(self):
        result = CommandResult.fail("error message")
        assert not result.success
        assert result.error == "error message"

    def test_skip(self):
        result = CommandResult.skip("reason")
        assert result.success
        assert result.skipped


class TestCreateCaseCommand:
    """Tests for CreateCaseCommand."""

    def make(self, store, tracker, executor, event_bus=None, gateway=None, body=ISSUE_BODY):
        return CreateCaseCommand(
            gateway=gateway or MockSupportCaseGateway(),
            state_store=store,
            issue_body=body,
            issue_number=12,
            tracker=tracker,
            executor=executor,
            event_bus=event_bus,
        )

    def test_validate_missing_body(self, store, tracker, executor):
        cmd = self.make(store, tracker, executor, body="  ")
        assert cmd.validate() is not None
        assert not cmd.execute().success

    def test_creates_and_links_case(self, store, tracker, executor, event_bus):
        result = self.make(store, tracker, executor, event_bus).execute()

        assert result.success
        case_id = result.data.case_id
        assert case_id.startswith("case-mock-")

        snapshot = store.load_all()[case_id]
        assert snapshot.issue_number == 12
        assert snapshot.case.subject == "Bucket access denied"
        assert not snapshot.observed

        assert tracker.post_comment.call_args.args[0] == 12
        assert case_id in posted_bodies(tracker)[0]

        created = event_bus.get_history()[-1]
        assert isinstance(created, CaseCreated)
        assert created.case_id == case_id

    def test_passes_parsed_payload(self, store, tracker, executor):
        gateway = Mock()
        gateway.create_case.return_value = Mock(case_id="case-1", display_id="CASE-1")

        self.make(store, tracker, executor, gateway=gateway).execute()

        case_data = gateway.create_case.call_args.args[0]
        assert case_data.severity.value == "high"
        assert case_data.service_code == "amazon-simple-storage-service"

    def test_failure_notifies_and_reraises(self, store, tracker, executor):
        gateway = Mock()
        gateway.create_case.side_effect = SupportPlanRequiredError("Business plan needed")

        with pytest.raises(SupportPlanRequiredError):
            self.make(store, tracker, executor, gateway=gateway).execute()

        body = posted_bodies(tracker)[0]
        assert "creation failed" in body
        assert "Business plan needed" in body
        assert store.load_all() == {}

    def test_notification_failure_does_not_mask_error(self, store, tracker, executor):
        gateway = Mock()
        gateway.create_case.side_effect = SupportPlanRequiredError("plan")
        tracker.post_comment.side_effect = IssueTrackerError("tracker down")

        with pytest.raises(SupportPlanRequiredError):
            self.make(store, tracker, executor, gateway=gateway).execute()

    def test_without_tracker(self, store, executor):
        result = self.make(store, None, executor).execute()
        assert result.success


class TestReplyToCaseCommand:
    """Tests for ReplyToCaseCommand."""

    def make(self, store, tracker, executor, comment="/reply thanks", case_id=None,
             gateway=None, event_bus=None):
        return ReplyToCaseCommand(
            gateway=gateway or MockSupportCaseGateway(),
            state_store=store,
            comment_body=comment,
            issue_number=12,
            case_id=case_id,
            tracker=tracker,
            executor=executor,
            event_bus=event_bus,
        )

    def test_no_command_skips(self, store, tracker, executor):
        result = self.make(store, tracker, executor, comment="just chatting").execute()

        assert result.skipped
        tracker.post_comment.assert_not_called()

    def test_explicit_case_id(self, store, tracker, executor, event_bus):
        gateway = Mock()
        gateway.add_communication_to_case.return_value = CommunicationResult(result=True)

        result = self.make(
            store, tracker, executor, case_id="case-7", gateway=gateway, event_bus=event_bus,
        ).execute()

        assert result.data == "case-7"
        gateway.add_communication_to_case.assert_called_once_with("case-7", "thanks")
        assert "case-7" in posted_bodies(tracker)[0]
        assert isinstance(event_bus.get_history()[-1], ReplySent)

    def test_case_id_looked_up_by_issue(self, store, tracker, executor):
        store.save_all({
            "case-other": Snapshot(Case(case_id="case-other"), issue_number=99),
            "case-linked": Snapshot(Case(case_id="case-linked"), issue_number=12),
        })

        result = self.make(store, tracker, executor).execute()

        assert result.data == "case-linked"

    def test_unlinked_issue(self, store, tracker, executor):
        with pytest.raises(ConfigurationError, match="#12"):
            self.make(store, tracker, executor).execute()

        assert "Reply to AWS Support failed" in posted_bodies(tracker)[0]

    def test_failure_notifies_and_reraises(self, store, tracker, executor):
        gateway = Mock()
        gateway.add_communication_to_case.side_effect = SupportPlanRequiredError("no plan")

        with pytest.raises(SupportPlanRequiredError):
            self.make(store, tracker, executor, case_id="case-7", gateway=gateway).execute()

        body = posted_bodies(tracker)[0]
        assert "case-7" in body
        assert "no plan" in body


class TestGenerateSupportRequestCommand:
    """Tests for GenerateSupportRequestCommand."""

    @pytest.fixture
    def generator(self):
        generator = Mock()
        generator.name = "openai"
        generator.generate.return_value = "## Subject\nBucket access denied"
        return generator

    def make(self, generator, tracker):
        return GenerateSupportRequestCommand(
            generator=generator,
            issue_body=ISSUE_BODY,
            issue_number=12,
            tracker=tracker,
        )

    def test_posts_draft(self, generator, tracker):
        result = self.make(generator, tracker).execute()

        assert result.success
        prompt = generator.generate.call_args.args[0]
        assert "Bucket access denied" in prompt
        body = posted_bodies(tracker)[0]
        assert "## Subject\nBucket access denied" in body
        assert "openai" in body

    def test_rate_limit_notice(self, generator, tracker):
        generator.generate.side_effect = RateLimitError("Too many requests", retry_after=None)

        with pytest.raises(RateLimitError):
            self.make(generator, tracker).execute()

        body = posted_bodies(tracker)[0]
        assert "rate limit" in body
        assert "Status code: 429" in body

    def test_other_error_notice(self, generator, tracker):
        generator.generate.side_effect = TextGenerationError("Incorrect API key", provider="openai")

        with pytest.raises(TextGenerationError):
            self.make(generator, tracker).execute()

        assert "Incorrect API key" in posted_bodies(tracker)[0]

    def test_build_prompt(self):
        prompt = build_prompt("the body", language="English")
        assert "in English" in prompt
        assert prompt.rstrip().endswith("the body")
