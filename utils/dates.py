"""
utils/dates.py
--------------
Helpers for parsing ISO-8601 values and computing calendar windows.
All timestamps handled by the ledger are naive datetimes; values carrying
a UTC offset are converted to UTC and stripped of their tzinfo.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

DateLike = Union[str, date, datetime]


def parse_timestamp(value: DateLike) -> datetime:
    """
    Parse an ISO-8601 string (or date/datetime) into a naive datetime.

    Raises:
        ValueError: If the string is not a valid ISO-8601 timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    else:
        parsed = date_parser.isoparse(str(value).strip())

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_date(value: DateLike) -> date:
    """Parse an ISO-8601 date (a full timestamp is truncated to its date)."""
    if isinstance(value, datetime):
        return parse_timestamp(value).date()
    if isinstance(value, date):
        return value
    return parse_timestamp(value).date()


def month_bounds(now: datetime) -> tuple[datetime, datetime]:
    """
    Return the first and last instants of the calendar month containing `now`.

    Both bounds are inclusive.
    """
    start = datetime(now.year, now.month, 1)
    end = start + relativedelta(months=1) - timedelta(microseconds=1)
    return start, end


def days_until(target: date, today: date) -> int:
    """Whole calendar days from `today` to `target` (negative if in the past)."""
    return (target - today).days


def to_iso(value: Union[date, datetime, None]) -> str | None:
    """Serialize a date/datetime to ISO-8601, passing None through."""
    return value.isoformat() if value is not None else None
