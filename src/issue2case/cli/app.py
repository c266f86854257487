"""
CLI Application - Entry point for issue2case.

Usage:
    issue2case create   --issue-body "..." --issue-number 12
    issue2case reply    --comment-body "/reply thanks" --issue-number 12
    issue2case monitor  [--state-file .aws-case-state.json]
    issue2case generate --issue-body "..." --issue-number 12 --provider claude

Every option can also be given through environment variables (ISSUE_BODY,
ISSUE_NUMBER, COMMENT_BODY, CASE_ID, GITHUB_TOKEN, GITHUB_REPOSITORY,
AWS_PROFILE, MOCK_MODE, ...), which is how the GitHub workflows call it.
"""

import argparse
import logging
import sys
from typing import Optional

from ..adapters import (
    CommentFormatter,
    EnvironmentConfigProvider,
    GitHubAdapter,
    IssueBodyParser,
    JsonFileStateStore,
    ReplyExtractor,
    RetryingRequestExecutor,
    create_support_gateway,
    create_text_generator,
)
from ..application.commands import (
    Command,
    CreateCaseCommand,
    GenerateSupportRequestCommand,
    ReplyToCaseCommand,
)
from ..application.sync import CaseMonitor, NotificationDispatcher
from ..core.domain.events import (
    CaseCreated,
    DomainEvent,
    EventBus,
    MonitorStarted,
    ReplySent,
)
from ..core.exceptions import Issue2CaseError
from ..core.ports.config_provider import AppConfig
from .exit_codes import ExitCode
from .logging import setup_logging
from .output import Console


COMMANDS = ("create", "reply", "monitor", "generate")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="issue2case",
        description="Bridge GitHub Issues and AWS Support cases",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--mock",
        action="store_true",
        help="Use the in-memory support gateway (or set MOCK_MODE=true)",
    )
    common.add_argument(
        "--profile",
        type=str,
        help="Credentials profile name (or set AWS_PROFILE)",
    )
    common.add_argument(
        "--credentials-file",
        type=str,
        help="Path to the AWS credentials file (default: ~/.aws/credentials)",
    )
    common.add_argument(
        "--state-file",
        type=str,
        help="Case state file (or set CASE_STATE_FILE)",
    )
    common.add_argument(
        "--repository",
        type=str,
        help="GitHub repository as owner/repo (or set GITHUB_REPOSITORY)",
    )
    common.add_argument(
        "--issue-number",
        type=str,
        help="Originating issue number (or set ISSUE_NUMBER)",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    common.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log output format (default: text)",
    )
    common.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    create = subparsers.add_parser(
        "create", parents=[common], help="Create a support case from an issue",
    )
    create.add_argument("--issue-body", type=str, help="Issue body (or set ISSUE_BODY)")

    reply = subparsers.add_parser(
        "reply", parents=[common], help="Relay a /reply comment to a support case",
    )
    reply.add_argument("--comment-body", type=str, help="Comment body (or set COMMENT_BODY)")
    reply.add_argument("--case-id", type=str, help="Target case id (or set CASE_ID)")

    subparsers.add_parser(
        "monitor", parents=[common], help="Poll cases and post changes to their issues",
    )

    generate = subparsers.add_parser(
        "generate", parents=[common], help="Draft a support request with an AI provider",
    )
    generate.add_argument("--issue-body", type=str, help="Issue body (or set ISSUE_BODY)")
    generate.add_argument(
        "--provider",
        choices=["openai", "claude"],
        help="AI provider (or set AI_PROVIDER)",
    )

    return parser


def build_tracker(config: AppConfig, executor: RetryingRequestExecutor) -> Optional[GitHubAdapter]:
    if not config.tracker.configured:
        return None
    return GitHubAdapter(config.tracker, executor=executor)


def build_monitor(config: AppConfig, event_bus: EventBus) -> CaseMonitor:
    """Wire the adapters for a monitor run."""
    executor = RetryingRequestExecutor()
    tracker = build_tracker(config, executor)
    dispatcher = NotificationDispatcher(tracker, CommentFormatter()) if tracker else None
    return CaseMonitor(
        gateway=create_support_gateway(config.support),
        state_store=JsonFileStateStore(config.state_file),
        dispatcher=dispatcher,
        executor=executor,
        event_bus=event_bus,
        state_label=str(config.state_file),
    )


def build_command(config: AppConfig, command: str, event_bus: EventBus) -> Command:
    """Wire the adapters for one of the issue commands."""
    executor = RetryingRequestExecutor()
    formatter = CommentFormatter()
    tracker = build_tracker(config, executor)

    if command == "generate":
        return GenerateSupportRequestCommand(
            generator=create_text_generator(config.ai, executor=executor),
            issue_body=config.issue_body,
            issue_number=config.issue_number,
            tracker=tracker,
            formatter=formatter,
            event_bus=event_bus,
        )

    gateway = create_support_gateway(config.support)
    state_store = JsonFileStateStore(config.state_file)

    if command == "create":
        return CreateCaseCommand(
            gateway=gateway,
            state_store=state_store,
            issue_body=config.issue_body,
            issue_number=config.issue_number,
            tracker=tracker,
            parser=IssueBodyParser(),
            formatter=formatter,
            executor=executor,
            event_bus=event_bus,
        )

    if command == "reply":
        return ReplyToCaseCommand(
            gateway=gateway,
            state_store=state_store,
            comment_body=config.comment_body,
            issue_number=config.issue_number,
            case_id=config.case_id,
            tracker=tracker,
            extractor=ReplyExtractor(),
            formatter=formatter,
            executor=executor,
            event_bus=event_bus,
        )

    raise ValueError(f"Unknown command: {command}")


def subscribe_console(event_bus: EventBus, console: Console) -> None:
    """Report domain events on the console as they are published."""
    logger = logging.getLogger("EventBus")

    def on_any(event: DomainEvent) -> None:
        logger.debug(f"{event.event_type} {event.event_id}")

    def on_case_created(event: CaseCreated) -> None:
        console.info(f"Case {event.display_id or event.case_id} linked to issue #{event.issue_number}")

    def on_reply_sent(event: ReplySent) -> None:
        console.info(f"Reply sent to case {event.case_id}")

    def on_monitor_started(event: MonitorStarted) -> None:
        console.info(f"Polling cases (state: {event.state_file})")

    event_bus.subscribe(DomainEvent, on_any)
    event_bus.subscribe(CaseCreated, on_case_created)
    event_bus.subscribe(ReplySent, on_reply_sent)
    event_bus.subscribe(MonitorStarted, on_monitor_started)


def run_command(console: Console, config: AppConfig, command: str) -> int:
    """Run one command and print its summary."""
    event_bus = EventBus()
    subscribe_console(event_bus, console)

    if command == "monitor":
        monitor = build_monitor(config, event_bus)
        result = monitor.run()
        console.monitor_result(result)
        return ExitCode.SUCCESS if result.success else ExitCode.UPSTREAM_ERROR

    result = build_command(config, command, event_bus).execute()
    console.command_result(command, result)
    return ExitCode.SUCCESS if result.success else ExitCode.ERROR


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_format)
    logger = logging.getLogger("main")

    console = Console(color=not args.no_color, verbose=args.verbose)

    try:
        provider = EnvironmentConfigProvider(cli_overrides=vars(args))
        errors = provider.validate(args.command)
        if errors:
            console.error("Configuration errors:")
            for error in errors:
                console.detail(error)
            return ExitCode.CONFIG_ERROR

        config = provider.load()
        if config.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        console.header(f"issue2case {args.command}")
        if config.support.mock_mode and args.command != "generate":
            console.mock_banner()

        return run_command(console, config, args.command)

    except KeyboardInterrupt:
        console.print()
        console.warning("Interrupted by user")
        return ExitCode.INTERRUPTED

    except Issue2CaseError as e:
        logger.debug("Command failed", exc_info=True)
        console.error(str(e))
        return ExitCode.from_exception(e)

    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        console.error(f"Unexpected error: {e}")
        return ExitCode.ERROR


def run() -> None:
    """Entry point for the console script."""
    sys.exit(main())


if __name__ == "__main__":
    run()
