"""
Reply Extractor - Pull the outbound reply out of a tracker comment.

Two forms are accepted:

    /reply Thanks, that fixed it.

    ```
    /reply
    Thanks, that fixed it.
    Closing on our side.
    ```

Fence handling: a command counts when it sits outside any fenced block, or
on the first non-empty line of a fenced block. A token anywhere else inside
a fence is quoted text (e.g. someone pasting an earlier comment) and is
ignored.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional


REPLY_TOKEN = "/reply"
FENCE = "```"


@dataclass(frozen=True)
class _CommandLine:
    index: int
    remainder: str


class ReplyExtractor:
    """Extracts reply text following the reply command token."""

    def __init__(self, token: str = REPLY_TOKEN):
        self.token = token
        self._command = re.compile(rf'^{re.escape(token)}(?:\s+(.*))?$')
        self.logger = logging.getLogger("ReplyExtractor")

    def extract(self, comment_body: str) -> Optional[str]:
        """
        Return the reply text, or None if the comment holds no command.

        The single-line form wins over the block form wherever each appears.
        """
        lines = (comment_body or "").splitlines()
        commands = self._find_commands(lines)

        # Single-line form, first in document order
        for command in commands:
            if command.remainder:
                return command.remainder

        if not commands:
            self.logger.debug("No reply command found")
            return None

        # Block form: text after the first bare token, up to a fence or end of input
        body = []
        for line in lines[commands[0].index + 1:]:
            if line.strip().startswith(FENCE):
                break
            body.append(line)
        return "\n".join(body).strip() or None

    def _find_commands(self, lines: list[str]) -> list[_CommandLine]:
        commands = []
        in_fence = False
        fence_has_content = False

        for index, line in enumerate(lines):
            stripped = line.strip()

            if stripped.startswith(FENCE):
                in_fence = not in_fence
                fence_has_content = False
                continue

            if in_fence:
                leading = not fence_has_content
                if stripped:
                    fence_has_content = True
                if not leading:
                    continue

            match = self._command.match(stripped)
            if match:
                commands.append(_CommandLine(index, (match.group(1) or "").strip()))

        return commands
