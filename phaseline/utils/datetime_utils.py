"""
Date utilities.

The timeline works on calendar days. These helpers turn whatever the task
store or the weather feed sends into plain dates and resolve "today" in a
given timezone.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc


def get_user_today(user_timezone: str) -> date:
    """
    Get today's date in the user's timezone.

    Args:
        user_timezone: IANA timezone name (e.g., "America/Toronto", "Asia/Tokyo")

    Returns:
        date: Today's date in the user's timezone

    Example:
        >>> get_user_today("Asia/Tokyo")  # When UTC is 2024-01-19 23:00
        date(2024, 1, 20)  # JST is 2024-01-20 08:00
    """
    tz = ZoneInfo(user_timezone)
    return datetime.now(UTC).astimezone(tz).date()


def to_calendar_date(value: Union[date, datetime, str, None]) -> Optional[date]:
    """
    Reduce a date-like value to its calendar day.

    Handles:
    - date / datetime instances (a datetime keeps the day it was written for)
    - ISO date strings: "2024-06-01"
    - ISO datetime strings, with or without offset: "2024-06-01T09:00:00Z"
    - None / empty string -> None

    Raises:
        ValueError: If a string cannot be parsed
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if len(text) == 10:
            return date.fromisoformat(text)
        # Replace 'Z' with '+00:00' for fromisoformat compatibility
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return value


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative when end is earlier)."""
    return (end - start).days


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)
