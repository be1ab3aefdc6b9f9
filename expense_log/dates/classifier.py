"""
Date Classifier

Decides whether a canonical date falls in the current week or the
current month. Weeks start on Sunday. All comparisons are on naive local
calendar dates; there is no timezone handling.

"now" is injectable everywhere so callers and tests can pin the
reference instant.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional


_END_OF_DAY = time(23, 59, 59, 999000)


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a YYYY-MM-DD string into a local calendar date.

    Day overflow rolls into the following month the way a calendar
    constructor does, so "2024-02-31" becomes 2024-03-02. Anything that
    is not three integer fields with a real month returns None.
    """
    if not value:
        return None
    parts = str(value).split("-")
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(p) for p in parts)
        return date(year, month, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def sunday_index(d: date) -> int:
    """Weekday index with 0 = Sunday ... 6 = Saturday."""
    return d.isoweekday() % 7


def current_week_bounds(now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """
    Start and end instants of the Sunday-start week containing now.

    Start is Sunday 00:00:00.000, end is Saturday 23:59:59.999.
    """
    now = now or datetime.now()
    today = now.date()
    start_day = today - timedelta(days=sunday_index(today))
    start = datetime.combine(start_day, time.min)
    end = datetime.combine(start_day + timedelta(days=6), _END_OF_DAY)
    return start, end


def in_current_week(value: Optional[str], now: Optional[datetime] = None) -> bool:
    """True if the date falls in the current Sunday-start week."""
    parsed = parse_calendar_date(value)
    if parsed is None:
        return False
    start, end = current_week_bounds(now)
    return start <= datetime.combine(parsed, time.min) <= end


def in_current_month(value: Optional[str], now: Optional[datetime] = None) -> bool:
    """True if the date shares year and month with now."""
    parsed = parse_calendar_date(value)
    if parsed is None:
        return False
    now = now or datetime.now()
    return parsed.year == now.year and parsed.month == now.month
