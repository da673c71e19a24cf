"""
Date helpers shared by validation and aggregation.
All comparisons happen in the server's local time zone.
"""

from datetime import date, datetime
from typing import Union

DateLike = Union[date, datetime, str]


def to_local_naive(value: datetime) -> datetime:
    """Aware datetimes are converted to local time; naive ones are taken as local."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def to_local_day(value: DateLike) -> date:
    """
    Reduce a date, datetime or ISO string to a local calendar day.

    Raises:
        ValueError: If a string is not ISO formatted
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if isinstance(value, datetime):
        return to_local_naive(value).date()
    return value
