"""
Output - Console summaries for CLI runs.

Provides colored output when stdout is a terminal.
"""

import sys
from typing import Optional

from ..application.commands import CommandResult
from ..application.sync import MonitorResult


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"


class Symbols:
    """Unicode symbols for output."""

    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    DOT = "•"
    WARN = "⚠"
    INFO = "ℹ"
    BOX_H = "─"


class Console:
    """Console output helper with colors and formatting."""

    def __init__(self, color: bool = True, verbose: bool = False, stream=None):
        self.stream = stream or sys.stdout
        self.color = color and hasattr(self.stream, "isatty") and self.stream.isatty()
        self.verbose = verbose

    def _c(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.color:
            return text
        return "".join(codes) + text + Colors.RESET

    def print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def header(self, text: str) -> None:
        width = max(len(text) + 4, 50)
        border = self._c(Symbols.BOX_H * width, Colors.CYAN) if self.color else "-" * width

        self.print()
        self.print(border)
        self.print(self._c(f"  {text}", Colors.BOLD, Colors.CYAN))
        self.print(border)
        self.print()

    def section(self, text: str) -> None:
        self.print()
        self.print(self._c(f"{Symbols.ARROW} {text}", Colors.BOLD, Colors.BLUE))

    def success(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CHECK} {text}", Colors.GREEN))

    def error(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.CROSS} {text}", Colors.RED))

    def warning(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.WARN} {text}", Colors.YELLOW))

    def info(self, text: str) -> None:
        self.print(self._c(f"  {Symbols.INFO} {text}", Colors.CYAN))

    def detail(self, text: str) -> None:
        """Print detail text (dimmed)."""
        self.print(self._c(f"    {text}", Colors.DIM))

    def item(self, text: str, status: Optional[str] = None) -> None:
        status_str = ""
        if status == "ok":
            status_str = self._c(f" [{Symbols.CHECK}]", Colors.GREEN)
        elif status == "fail":
            status_str = self._c(f" [{Symbols.CROSS}]", Colors.RED)
        elif status:
            status_str = self._c(f" [{status}]", Colors.DIM)

        self.print(f"    {Symbols.DOT} {text}{status_str}")

    def table(self, headers: list[str], rows: list[list[str]]) -> None:
        """Print a simple table."""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(widths):
                    widths[i] = max(widths[i], len(str(cell)))

        header_line = "  " + "  ".join(
            self._c(h.ljust(widths[i]), Colors.BOLD)
            for i, h in enumerate(headers)
        )
        self.print(header_line)
        self.print("  " + "  ".join("-" * w for w in widths))

        for row in rows:
            self.print("  " + "  ".join(
                str(cell).ljust(widths[i]) if i < len(widths) else str(cell)
                for i, cell in enumerate(row)
            ))

    def mock_banner(self) -> None:
        self.print()
        banner = "  MOCK MODE - no request reaches AWS Support"
        if self.color:
            self.print(f"{Colors.YELLOW}{Colors.BOLD}{banner}{Colors.RESET}")
        else:
            self.print(f"*** {banner} ***")
        self.print()

    # -------------------------------------------------------------------------
    # Run summaries
    # -------------------------------------------------------------------------

    def monitor_result(self, result: MonitorResult) -> None:
        self.section("Monitor Summary")
        self.print()

        self.table(["Metric", "Count"], [
            ["Cases Polled", str(result.cases_polled)],
            ["New Cases", str(len(result.new_cases))],
            ["Changes Detected", str(result.events_detected)],
            ["Comments Posted", str(result.notifications_posted)],
            ["Skipped (no issue)", str(result.notifications_skipped)],
        ])

        for event in result.events:
            self.item(f"{event.case.label}: {event.event_type}")

        if result.failures:
            self.print()
            self.error(f"{len(result.failures)} notification(s) failed:")
            for failure in result.failures[:5]:
                self.detail(f"{failure.case_id} (#{failure.issue_number}): {failure.error}")
            if len(result.failures) > 5:
                self.detail(f"... and {len(result.failures) - 5} more")

        self.print()
        if result.success:
            self.success("Monitor completed successfully")
        else:
            self.error("Monitor completed with errors")

    def command_result(self, command: str, result: CommandResult) -> None:
        if result.skipped:
            self.warning(f"{command}: skipped ({result.error})")
        elif result.success:
            detail = f": {result.data}" if self.verbose and result.data is not None else ""
            self.success(f"{command} completed{detail}")
        else:
            self.error(f"{command} failed: {result.error}")
