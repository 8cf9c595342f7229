"""Datetime helpers. The journal stores naive local wall-clock datetimes."""

from datetime import datetime


def strip_tz(value: datetime | None) -> datetime | None:
    """Drop any UTC offset, keeping the wall-clock time as given."""
    if value is None or value.tzinfo is None:
        return value
    return value.replace(tzinfo=None)
