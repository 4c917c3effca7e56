"""
Calendar date helpers.

Maintenance dates are stored as plain "YYYY-MM-DD" strings and always mean a
local calendar day. These helpers never go through timestamps, so the
machine's time zone and daylight-saving rules cannot shift a date.
"""

from datetime import date, datetime
from typing import Union

from dateutil.relativedelta import relativedelta

from .errors import InvalidDateFormat


def parse_local_date(value: str) -> date:
    """Parse "YYYY-MM-DD" into a date built from its components."""
    if not isinstance(value, str):
        raise InvalidDateFormat(f"Expected a YYYY-MM-DD string, got {value!r}")

    parts = value.strip().split("-")
    if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidDateFormat(f"Invalid date '{value}' (expected YYYY-MM-DD)")

    year, month, day = (int(p) for p in parts)
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateFormat(f"Invalid date '{value}': {e}") from e


def format_local_date(value: date) -> str:
    """Format a date as zero-padded YYYY-MM-DD."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def add_days(value: date, days: int) -> date:
    """Add calendar days, rolling over months and years."""
    return value + relativedelta(days=days)


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def compare_dates(a: Union[date, datetime], b: Union[date, datetime]) -> int:
    """Compare two calendar days, ignoring time of day. Returns -1, 0 or 1."""
    a, b = _as_date(a), _as_date(b)
    if a < b:
        return -1
    if a > b:
        return 1
    return 0
