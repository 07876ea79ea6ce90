"""Date parsing and formatting utilities."""

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional


DATE_FORMAT = "%Y-%m-%d"

# Missing timestamps sort as the oldest possible value
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_utc() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def today() -> str:
    """
    Get today's date as YYYY-MM-DD string.

    Returns:
        Date string in YYYY-MM-DD format
    """
    return datetime.now().strftime(DATE_FORMAT)


def parse_timestamp(value, default: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a feed timestamp into an aware UTC datetime.

    Accepts datetimes, ISO-8601 strings (``2024-05-01T10:00:00Z``) and
    RFC-822 strings (``Wed, 01 May 2024 10:00:00 GMT``).

    Args:
        value: Raw value from a feed or a stored payload
        default: Returned when the value is empty or unparseable

    Returns:
        datetime in UTC, or default
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        dt = _parse_iso(text)
        if dt is None:
            try:
                dt = parsedate_to_datetime(text)
            except (TypeError, ValueError, IndexError):
                return default
    else:
        return default

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _parse_iso(text: str) -> Optional[datetime]:
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None
