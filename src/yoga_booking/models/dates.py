"""
Date helpers shared by models, views and fixtures.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Union


DateLike = Union[date, datetime]


def to_datetime(value: DateLike) -> datetime:
    """
    Promote a date to midnight of that day.

    Stored dates are naive local time, so an aware datetime is converted
    to local time and its tzinfo dropped; naive datetimes pass through.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    return datetime(value.year, value.month, value.day)


def start_of_day(value: DateLike) -> datetime:
    """
    Normalize a date or datetime to 00:00 of the same day.

    Examples:
        >>> start_of_day(datetime(2025, 1, 10, 15, 30))
        datetime.datetime(2025, 1, 10, 0, 0)
    """
    value = to_datetime(value)
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(value: DateLike) -> datetime:
    """Monday 00:00 of the week containing value."""
    day = start_of_day(value)
    return day - timedelta(days=day.weekday())


def format_datetime(value: Optional[DateLike]) -> Optional[str]:
    if value is None:
        return None
    return to_datetime(value).isoformat()


def parse_datetime(value) -> Optional[datetime]:
    """
    Parse an ISO 8601 string (or pass a date/datetime through).

    Returns:
        datetime, or None when value is None or empty
    """
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return to_datetime(value)
    return datetime.fromisoformat(str(value))
