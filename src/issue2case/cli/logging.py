"""
Logging setup for the CLI.

Text output for people, JSON lines for log collectors. Logs go to stderr so
stdout stays free for the run summary.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional


TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
TEXT_DATEFMT = "%H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


_handler: Optional[logging.Handler] = None


def setup_logging(level: int = logging.INFO, log_format: str = "text") -> logging.Handler:
    """Install (or replace) the CLI's stderr handler on the root logger."""
    global _handler

    handler = logging.StreamHandler(sys.stderr)
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT))

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(level)
    _handler = handler

    # Connection chatter from requests is noise at INFO
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return handler
