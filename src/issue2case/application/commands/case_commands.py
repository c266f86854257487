"""
Case Commands - Create, reply to, and draft support cases from issues.
"""

from typing import Optional

from ...core.domain.entities import Case, Snapshot
from ...core.domain.events import CaseCreated, EventBus, ReplySent
from ...core.exceptions import ConfigurationError, Issue2CaseError, RateLimitError
from ...core.ports.issue_tracker import IssueTrackerPort
from ...core.ports.state_store import StateStorePort
from ...core.ports.support_case import SupportCasePort
from ...core.ports.text_generator import TextGeneratorPort
from ...adapters.formatters import CommentFormatter
from ...adapters.parsers import IssueBodyParser, ReplyExtractor
from ...adapters.resilience import RetryingRequestExecutor
from .base import Command, CommandResult


SUPPORT_REQUEST_PROMPT = """\
You are an expert at writing requests to AWS Support.
From the GitHub issue below, write a clear, structured support request
for the AWS Support team, in {language}.

Include:
- Subject
- Summary of the problem
- Detailed description
- Steps to reproduce (if applicable)
- Workarounds already tried (if applicable)
- Expected result

Format: Markdown.

GitHub issue body:
{issue_body}
"""


def build_prompt(issue_body: str, language: str = "Japanese") -> str:
    return SUPPORT_REQUEST_PROMPT.format(language=language, issue_body=issue_body)


class IssueCommand(Command):
    """A command that reports back on the issue it was triggered from."""

    def __init__(
        self,
        issue_number: Optional[int],
        tracker: Optional[IssueTrackerPort] = None,
        formatter: Optional[CommentFormatter] = None,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(event_bus)
        self.issue_number = issue_number
        self.tracker = tracker
        self.formatter = formatter or CommentFormatter()

    def _post(self, body: str) -> None:
        """Post a comment on the originating issue, if there is one."""
        if self.tracker is None or self.issue_number is None:
            self.logger.info("No issue tracker configured; not posting a comment")
            return
        self.tracker.post_comment(self.issue_number, body)

    def _notify_failure(self, body: str) -> None:
        """Post an error comment; a failure here is logged and dropped."""
        try:
            self._post(body)
        except Issue2CaseError as e:
            self.logger.warning(f"Could not post error notification: {e}")


class CreateCaseCommand(IssueCommand):
    """Create a support case from an issue body and link it to the issue."""

    def __init__(
        self,
        gateway: SupportCasePort,
        state_store: StateStorePort,
        issue_body: str,
        issue_number: Optional[int] = None,
        tracker: Optional[IssueTrackerPort] = None,
        parser: Optional[IssueBodyParser] = None,
        formatter: Optional[CommentFormatter] = None,
        executor: Optional[RetryingRequestExecutor] = None,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(issue_number, tracker, formatter, event_bus)
        self.gateway = gateway
        self.state_store = state_store
        self.issue_body = issue_body
        self.parser = parser or IssueBodyParser()
        self.executor = executor or RetryingRequestExecutor()

    @property
    def name(self) -> str:
        return "create"

    def validate(self) -> Optional[str]:
        if not (self.issue_body or "").strip():
            return "Issue body is required"
        return None

    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return CommandResult.fail(error)

        case_data = self.parser.parse(self.issue_body)
        self.logger.info(
            f"Creating case: subject={case_data.subject!r} "
            f"severity={case_data.severity.value} service={case_data.service_code}"
        )

        try:
            created = self.executor.execute(
                lambda: self.gateway.create_case(case_data),
                description="create case",
            )
        except Issue2CaseError as e:
            self.logger.error(f"Case creation failed: {e}")
            self._notify_failure(self.formatter.case_creation_failed(str(e)))
            raise

        self.logger.info(f"Created case {created.case_id} ({created.display_id})")
        self._record(created.case_id, created.display_id, case_data.subject)
        self._post(self.formatter.case_created(created.case_id, created.display_id))

        self._publish(CaseCreated(
            case_id=created.case_id,
            display_id=created.display_id,
            issue_number=self.issue_number,
        ))
        return CommandResult.ok(created)

    def _record(self, case_id: str, display_id: str, subject: str) -> None:
        """Link the new case to its issue ahead of the first poll."""
        snapshots = self.state_store.load_all()
        if case_id in snapshots:
            return
        snapshots[case_id] = Snapshot(
            case=Case(case_id=case_id, display_id=display_id, subject=subject),
            issue_number=self.issue_number,
        )
        self.state_store.save_all(snapshots)


class ReplyToCaseCommand(IssueCommand):
    """Relay a ``/reply`` comment to the linked support case."""

    def __init__(
        self,
        gateway: SupportCasePort,
        state_store: StateStorePort,
        comment_body: str,
        issue_number: Optional[int] = None,
        case_id: Optional[str] = None,
        tracker: Optional[IssueTrackerPort] = None,
        extractor: Optional[ReplyExtractor] = None,
        formatter: Optional[CommentFormatter] = None,
        executor: Optional[RetryingRequestExecutor] = None,
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(issue_number, tracker, formatter, event_bus)
        self.gateway = gateway
        self.state_store = state_store
        self.comment_body = comment_body
        self.case_id = case_id
        self.extractor = extractor or ReplyExtractor()
        self.executor = executor or RetryingRequestExecutor()

    @property
    def name(self) -> str:
        return "reply"

    def execute(self) -> CommandResult:
        message = self.extractor.extract(self.comment_body)
        if message is None:
            self.logger.info("Comment holds no reply command; nothing to do")
            return CommandResult.skip("No reply command in comment")

        case_id = self.case_id or self.resolve_case_id()
        if not case_id:
            error = ConfigurationError(
                f"No support case is linked to issue #{self.issue_number}; set CASE_ID"
            )
            self._notify_failure(self.formatter.reply_failed(None, str(error)))
            raise error

        try:
            self.executor.execute(
                lambda: self.gateway.add_communication_to_case(case_id, message),
                description="add communication",
            )
        except Issue2CaseError as e:
            self.logger.error(f"Reply to case {case_id} failed: {e}")
            self._notify_failure(self.formatter.reply_failed(case_id, str(e)))
            raise

        self.logger.info(f"Sent reply to case {case_id}")
        self._post(self.formatter.reply_sent(case_id, message, self.issue_number))

        self._publish(ReplySent(case_id=case_id, issue_number=self.issue_number))
        return CommandResult.ok(case_id)

    def resolve_case_id(self) -> Optional[str]:
        """Find the case linked to this command's issue in the state store."""
        if self.issue_number is None:
            return None
        for case_id, snapshot in self.state_store.load_all().items():
            if snapshot.issue_number == self.issue_number:
                return case_id
        return None


class GenerateSupportRequestCommand(IssueCommand):
    """Draft a support request from an issue body with an AI provider."""

    def __init__(
        self,
        generator: TextGeneratorPort,
        issue_body: str,
        issue_number: Optional[int] = None,
        tracker: Optional[IssueTrackerPort] = None,
        formatter: Optional[CommentFormatter] = None,
        language: str = "Japanese",
        event_bus: Optional[EventBus] = None,
    ):
        super().__init__(issue_number, tracker, formatter, event_bus)
        self.generator = generator
        self.issue_body = issue_body
        self.language = language

    @property
    def name(self) -> str:
        return "generate"

    def validate(self) -> Optional[str]:
        if not (self.issue_body or "").strip():
            return "Issue body is required"
        return None

    def execute(self) -> CommandResult:
        error = self.validate()
        if error:
            return CommandResult.fail(error)

        prompt = build_prompt(self.issue_body, self.language)
        self.logger.info(f"Drafting support request with {self.generator.name}")

        try:
            text = self.generator.generate(prompt)
        except RateLimitError as e:
            self.logger.error(f"Rate limited by {self.generator.name}: {e}")
            self._notify_failure(self.formatter.rate_limited(e))
            raise
        except Issue2CaseError as e:
            self.logger.error(f"Drafting failed: {e}")
            self._notify_failure(self.formatter.generation_failed(self.generator.name, str(e)))
            raise

        self._post(self.formatter.generated_request(text, self.generator.name))
        return CommandResult.ok(text)
