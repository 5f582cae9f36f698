"""Date/time parsing and formatting at the backend boundary.

The backend reads dates as ``DD-MM-YYYY`` and times as ``HH:MM:SS``, but
expects ``YYYY-MM-DD`` and ``HH:MM`` on writes. Everything inside the engine
works with ``datetime.date`` and ``datetime.time`` at minute resolution.
"""

import re
from datetime import date, datetime, time

STRICT_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
_LOOSE_TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")


def parse_time_of_day(value: str | time | None) -> time | None:
    """Parse "HH:MM" or "HH:MM:SS" truncating seconds.

    Returns None for empty or malformed values.
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str):
        return None
    match = _LOOSE_TIME_PATTERN.match(value)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return time(hour, minute)


def parse_strict_time(value: str | None) -> time | None:
    """Parse a 24-hour "HH:MM" string (two-digit hour). None when it doesn't match."""
    if not value or not STRICT_TIME_PATTERN.match(value):
        return None
    hour, minute = value.split(":")
    return time(int(hour), int(minute))


def format_time_of_day(value: time) -> str:
    return value.strftime("%H:%M")


def parse_backend_date(value: str | date | None) -> date | None:
    """Parse a read-direction date ("18-11-2025").

    ISO dates ("2025-11-18") and ISO datetimes are also accepted.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip()
    for fmt in ("%d-%m-%Y", "%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_request_date(value: date) -> str:
    """Write-direction date ("2025-11-18")."""
    return value.strftime("%Y-%m-%d")


def format_display_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")
