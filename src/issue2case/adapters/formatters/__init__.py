"""
Formatters - Render notifications for the issue tracker.
"""

from .comments import CommentFormatter, format_status

__all__ = ["CommentFormatter", "format_status"]
