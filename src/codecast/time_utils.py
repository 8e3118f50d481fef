from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime

from dateutil import parser


def now_utc() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def parse_datetime(value: str) -> datetime:
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        dt = parser.parse(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def rfc822(value: str | None) -> str | None:
    """Format an ISO date for RSS ``pubDate``; unparseable input gives None."""
    if not value:
        return None
    try:
        return format_datetime(parse_datetime(value))
    except (ValueError, OverflowError):
        return None
