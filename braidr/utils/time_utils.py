"""
Wire-format helpers for booking dates and times.

Times travel as 24-hour "HH:MM" strings and are handled internally as
minutes since midnight. Dates travel as ISO "YYYY-MM-DD" strings. No time
zone conversion is performed anywhere.
"""

import re
from datetime import date, datetime, time, timedelta

from braidr.core.errors import ValidationError

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})")
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_time(value: str, allow_end_of_day: bool = False) -> int:
    """
    Convert "HH:MM" to minutes since midnight.

    Args:
        value: time string, e.g. "09:30"
        allow_end_of_day: accept "24:00" (used for closing times)

    Raises:
        ValidationError: if the value is not a valid time of day
    """
    match = _TIME_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if allow_end_of_day and hours == 24 and minutes == 0:
        return MINUTES_PER_DAY
    if hours > 23 or minutes > 59:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM")

    return hours * 60 + minutes


def format_time(minutes: int) -> str:
    """Convert minutes since midnight to zero-padded "HH:MM"."""
    if minutes < 0:
        raise ValidationError(f"Invalid minute offset {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_date(value: str) -> date:
    """Parse an ISO calendar date ("YYYY-MM-DD")."""
    if not isinstance(value, str) or not _DATE_PATTERN.fullmatch(value):
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD")


def combine(day: str, start_time: str) -> datetime:
    """Naive datetime for a booking's date and start time."""
    return datetime.combine(parse_date(day), time()) + timedelta(minutes=parse_time(start_time))
