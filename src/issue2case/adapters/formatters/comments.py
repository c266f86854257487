"""
Comment Formatter - Render notifications as GitHub-flavored markdown.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from ...core.domain.entities import Case, Communication
from ...core.domain.enums import CaseStatus
from ...core.domain.events import StatusChanged
from ...core.exceptions import UpstreamError
from ..parsers.reply import REPLY_TOKEN


FOOTER = "*This comment was generated automatically.*"

NEXT_STEPS = {
    CaseStatus.OPENED: "- Wait for the first response from AWS Support",
    CaseStatus.PENDING_CUSTOMER_ACTION: (
        "- AWS Support is asking for more information\n"
        f"- Reply by commenting `{REPLY_TOKEN} <message>` on this issue"
    ),
    CaseStatus.REOPENED: (
        "- The case was reopened\n"
        "- Wait for a further response from AWS Support"
    ),
    CaseStatus.RESOLVED: (
        "- The case was resolved\n"
        f"- If the problem persists, `{REPLY_TOKEN}` to reopen it"
    ),
    CaseStatus.UNASSIGNED: (
        "- The case is waiting to be assigned\n"
        "- Please wait"
    ),
}


def format_status(status: Optional[str]) -> str:
    """Status with its badge, or the raw value if unknown."""
    if status and CaseStatus.is_known(status):
        return CaseStatus(status).label
    return status or "unknown"


def next_steps(status: Optional[str]) -> str:
    if status and CaseStatus.is_known(status):
        return NEXT_STEPS[CaseStatus(status)]
    return "- Wait for AWS Support to get in touch"


class CommentFormatter:
    """Builds every comment the tool posts on an issue."""

    def __init__(self, now: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self._now = now

    def _timestamp(self) -> str:
        return self._now().isoformat()

    # -------------------------------------------------------------------------
    # Monitor notifications
    # -------------------------------------------------------------------------

    def status_changed(self, event: StatusChanged) -> str:
        return (
            "## 📊 Support case status changed\n\n"
            f"**Case ID**: `{event.case.label}`\n\n"
            "### Status\n"
            f"- **Previous**: {format_status(event.previous_status)}\n"
            f"- **Current**: {format_status(event.current_status)}\n"
            f"- **Detected at**: {self._timestamp()}\n\n"
            "### Next steps\n"
            f"{next_steps(event.current_status)}\n\n"
            f"---\n\n{FOOTER}\n"
        )

    def new_communication(self, case: Case, communication: Communication) -> str:
        return (
            "## 💬 Response from AWS Support\n\n"
            f"**Case ID**: `{case.label}`\n"
            f"**From**: {communication.submitted_by or 'AWS Support'}\n"
            f"**Date**: {communication.time_created}\n\n"
            "### Message\n\n"
            f"{communication.body}\n\n"
            "---\n\n"
            "### Replying\n"
            f"Comment on this issue with `{REPLY_TOKEN} <your message>`.\n\n"
            f"---\n\n{FOOTER}\n"
        )

    # -------------------------------------------------------------------------
    # Case creation
    # -------------------------------------------------------------------------

    def case_created(self, case_id: str, display_id: str) -> str:
        return (
            "## ✅ Support case created\n\n"
            "### Case\n"
            f"- **Case ID**: `{case_id}`\n"
            f"- **Display ID**: `{display_id or case_id}`\n"
            f"- **Created at**: {self._timestamp()}\n\n"
            "### Next steps\n"
            "1. Follow progress in the AWS Support Center\n"
            "2. Responses from AWS Support are synced to this issue\n"
            f"3. To reply, comment `{REPLY_TOKEN} <message>` on this issue\n\n"
            f"---\n\n{FOOTER}\n"
        )

    def case_creation_failed(self, message: str) -> str:
        return (
            "## ❌ Support case creation failed\n\n"
            "### Error\n"
            f"```\n{message}\n```\n\n"
            "### What to check\n"
            "1. **Credentials**: `~/.aws/credentials` holds the configured profile\n"
            "2. **Support plan**: the API needs a Business or Enterprise plan\n"
            "3. **IAM**: the profile is allowed `support:CreateCase`\n\n"
            f"---\n\n{FOOTER}\n"
            f"*Occurred at: {self._timestamp()}*\n"
        )

    # -------------------------------------------------------------------------
    # Replies
    # -------------------------------------------------------------------------

    def reply_sent(self, case_id: str, message: str, issue_number: Optional[int]) -> str:
        source = f"issue #{issue_number}" if issue_number else "issue comment"
        return (
            "## ✅ Reply sent to AWS Support\n\n"
            f"**Case ID**: `{case_id}`\n\n"
            "### Message\n"
            f"```\n{message}\n```\n\n"
            f"- **Sent at**: {self._timestamp()}\n"
            f"- **Source**: {source}\n\n"
            f"---\n\n{FOOTER}\n"
        )

    def reply_failed(self, case_id: Optional[str], message: str) -> str:
        return (
            "## ❌ Reply to AWS Support failed\n\n"
            f"**Case ID**: `{case_id or 'unknown'}`\n\n"
            "### Error\n"
            f"```\n{message}\n```\n\n"
            "### What to check\n"
            "1. **Credentials**: `~/.aws/credentials` holds the configured profile\n"
            "2. **Case**: the case exists and is not closed\n"
            "3. **IAM**: the profile is allowed `support:AddCommunicationToCase`\n\n"
            f"Try again with another `{REPLY_TOKEN} <message>` comment.\n\n"
            f"---\n\n{FOOTER}\n"
            f"*Occurred at: {self._timestamp()}*\n"
        )

    # -------------------------------------------------------------------------
    # Support request drafts
    # -------------------------------------------------------------------------

    def generated_request(self, text: str, provider: str) -> str:
        return (
            "## 🤖 Drafted AWS Support request\n\n"
            "Review the draft below and edit it as needed before sending it "
            "to AWS Support.\n\n"
            f"---\n\n{text}\n\n---\n\n"
            f"*Generated by {provider} at {self._timestamp()}.*\n"
        )

    def generation_failed(self, provider: str, message: str) -> str:
        return (
            "## ❌ Drafting the support request failed\n\n"
            f"**Provider**: {provider}\n\n"
            "### Error\n"
            f"```\n{message}\n```\n\n"
            "### What to check\n"
            "1. **API key**: `AI_API_KEY` is set for the selected provider\n"
            "2. **Provider**: `AI_PROVIDER` is `openai` or `claude`\n\n"
            f"---\n\n{FOOTER}\n"
            f"*Occurred at: {self._timestamp()}*\n"
        )

    def rate_limited(self, error: UpstreamError) -> str:
        return (
            "## ⏳ API rate limit reached\n\n"
            "The provider's rate limit was hit, so this run stopped.\n\n"
            "### Retrying\n"
            "1. **Edit the issue**: saving any change triggers a new run\n"
            "2. **Re-run the job** from the Actions tab\n\n"
            "### Details\n"
            f"- Error type: {error.error_type or 'rate_limit'}\n"
            f"- Status code: {error.status_code}\n"
            f"- Message: {error.message}\n"
            f"- Occurred at: {self._timestamp()}\n\n"
            f"---\n\n{FOOTER}\n"
        )
