"""
Commands - The use cases a single invocation runs.
"""

from .base import Command, CommandResult
from .case_commands import (
    CreateCaseCommand,
    GenerateSupportRequestCommand,
    ReplyToCaseCommand,
    build_prompt,
)

__all__ = [
    "Command",
    "CommandResult",
    "CreateCaseCommand",
    "ReplyToCaseCommand",
    "GenerateSupportRequestCommand",
    "build_prompt",
]
