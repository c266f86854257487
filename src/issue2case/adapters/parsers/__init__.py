"""
Parsers - Extract structured data from tracker text.
"""

from .issue_body import IssueBodyParser, map_service_code, SERVICE_CODES
from .reply import ReplyExtractor, REPLY_TOKEN

__all__ = [
    "IssueBodyParser",
    "map_service_code",
    "SERVICE_CODES",
    "ReplyExtractor",
    "REPLY_TOKEN",
]
