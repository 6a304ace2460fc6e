"""Utility helper functions."""

from app.utils.helpers import get_summary, host, today_str, total_pages, utc_now

__all__ = [
    "get_summary",
    "host",
    "today_str",
    "total_pages",
    "utc_now",
]
