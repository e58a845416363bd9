"""Local Datetime Value Object helpers.

The remote store speaks naive local wall-clock timestamps in the form
``YYYY-MM-DDTHH:mm:ss``. These helpers parse and render that form without
ever attaching or converting a timezone.
"""

import re
from datetime import date, datetime, time

LOCAL_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

_STRICT_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}$")
_STRICT_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CLOCK_TIME = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
# Accepted on read: optional seconds and optional fractional seconds, no offset.
_LENIENT_DATETIME = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[T ](\d{2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?$"
)


def is_valid_local_datetime(value: str | None) -> bool:
    """Strict check used before anything is sent to the remote store."""
    if not value or not _STRICT_DATETIME.match(value):
        return False
    try:
        datetime.strptime(value, LOCAL_DATETIME_FORMAT)
    except ValueError:
        return False
    return True


def parse_local_datetime(value: str | None) -> datetime | None:
    """Parse a naive local timestamp as returned by the remote store.

    Returns None for anything that cannot be read, including strings that
    carry a UTC offset or a trailing ``Z``.
    """
    if not value:
        return None
    match = _LENIENT_DATETIME.match(value.strip())
    if not match:
        return None
    year, month, day, hour, minute, second = match.groups()
    try:
        return datetime(int(year), int(month), int(day), int(hour), int(minute), int(second or 0))
    except ValueError:
        return None


def format_local_datetime(value: datetime) -> str:
    """Render a naive datetime in the canonical remote store form."""
    return value.strftime(LOCAL_DATETIME_FORMAT)


def canonical_local_datetime(value: str | None) -> str | None:
    """Canonical ``YYYY-MM-DDTHH:mm:ss`` rendering of a timestamp string, or None."""
    parsed = parse_local_datetime(value)
    return format_local_datetime(parsed) if parsed else None


def parse_local_date(value: str | date | None) -> date | None:
    """Parse a ``YYYY-MM-DD`` calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not _STRICT_DATE.match(value.strip()):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def parse_clock_time(value: str | time | None) -> time | None:
    """Parse a wall-clock time ``HH:MM`` (seconds optional), hours 0-23."""
    if isinstance(value, time):
        return value
    if not value:
        return None
    match = _CLOCK_TIME.match(value.strip())
    if not match:
        return None
    hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    return time(hours, minutes, seconds)


def format_display_time(value: datetime | time) -> str:
    """12-hour clock label, e.g. ``09:30 AM``."""
    return value.strftime("%I:%M %p")
