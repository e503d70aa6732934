### correspondence_tracker/utils/general.py

# Standard library imports
from datetime import date, datetime, timezone
from typing import Union


def utcnow() -> datetime:
    """Current time as an aware UTC datetime"""
    return datetime.now(timezone.utc)


def as_utc(value: Union[datetime, date, str]) -> datetime:
    """
    Normalise a datetime-like value to an aware UTC datetime.

    Naive datetimes are taken to already be in UTC (SQLite hands back naive
    values), plain dates become midnight UTC and strings are parsed as ISO-8601.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
