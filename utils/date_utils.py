"""
Date utilities shared by the calendar and filter services.

Timestamps arrive as datetimes, dates, or ISO strings from the record
store. Everything is compared by wall-clock value: timezone info is
dropped, not converted.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Union

DateLike = Union[date, datetime, str]

END_OF_DAY = time(23, 59, 59, 999000)


def to_datetime(value: Optional[DateLike]) -> Optional[datetime]:
    """
    Coerce a timestamp-like value to a naive datetime.

    - datetime → same wall-clock time, tzinfo dropped
    - date → midnight of that day
    - "2025-01-05" / "2025-01-05T10:00:00Z" → parsed
    - anything else → None

    Args:
        value: Raw timestamp

    Returns:
        Naive datetime, or None if the value can't be read
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.replace(tzinfo=None)

    if isinstance(value, date):
        return datetime.combine(value, time.min)

    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            try:
                parsed = datetime.strptime(raw[:10], "%Y-%m-%d")
            except ValueError:
                return None
        return parsed.replace(tzinfo=None)

    return None


def to_date(value: Optional[DateLike]) -> Optional[date]:
    """Coerce a timestamp-like value to its calendar day (time stripped)."""
    parsed = to_datetime(value)
    return parsed.date() if parsed is not None else None


def start_of_day(value: date) -> datetime:
    """00:00:00.000 of the given day."""
    return datetime.combine(value, time.min)


def end_of_day(value: date) -> datetime:
    """23:59:59.999 of the given day."""
    return datetime.combine(value, END_OF_DAY)


def day_of_week(value: date) -> int:
    """
    Day of week with Sunday = 0 ... Saturday = 6.

    Python's weekday() is Monday = 0; the calendar settings use the
    Sunday-first convention.
    """
    return (value.weekday() + 1) % 7


def next_weekday_after(value: date, weekday: int) -> date:
    """First date strictly after `value` that falls on `weekday` (Sunday = 0)."""
    offset = (weekday - day_of_week(value)) % 7
    return value + timedelta(days=offset or 7)


def first_weekday_on_or_after(value: date, weekday: int) -> date:
    """First date on or after `value` that falls on `weekday` (Sunday = 0)."""
    offset = (weekday - day_of_week(value)) % 7
    return value + timedelta(days=offset)


def format_short(value: date) -> str:
    """'Jan 5' style label (no zero padding)."""
    return f"{value.strftime('%b')} {value.day}"
