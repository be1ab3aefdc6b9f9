"""
Date Normalizer

Turns whatever the user typed into the date field into a canonical
YYYY-MM-DD string, or None when no date can be recovered.

Two readings are tried, always in this order:
1. Exactly 8 digits read as YYYYMMDD, if the year is in [1900, 2100]
   and month/day are in range.
2. Otherwise (5+ digits) the LAST four digits are the year, the two
   digits before them are the day and whatever precedes those is the
   month, so "3152024" reads as 2024-03-15.

Several 5-7 digit inputs have more than one plausible reading. The order
above is what users see in the date preview, so it must not change.
Only range checks are applied: 2024-02-31 is accepted.
"""

import re
from typing import Optional


_NON_DIGITS = re.compile(r"[^0-9]")

MIN_FAST_PATH_YEAR = 1900
MAX_FAST_PATH_YEAR = 2100
MIN_DIGITS = 5


def digits_only(value: Optional[str]) -> str:
    """Drop every character that is not 0-9."""
    if not value:
        return ""
    return _NON_DIGITS.sub("", str(value))


def _in_range(month: str, day: str) -> bool:
    return 1 <= int(month) <= 12 and 1 <= int(day) <= 31


def normalize_date(value: Optional[str]) -> Optional[str]:
    """
    Convert loosely formatted numeric date input to YYYY-MM-DD.

    Args:
        value: Raw input; any non-digit characters are ignored

    Returns:
        The canonical date string, or None if the digits cannot be read
        as a date
    """
    s = digits_only(value)
    if not s:
        return None

    if len(s) == 8:
        year, month, day = s[:4], s[4:6], s[6:]
        if MIN_FAST_PATH_YEAR <= int(year) <= MAX_FAST_PATH_YEAR and _in_range(month, day):
            return f"{year}-{month}-{day}"

    if len(s) < MIN_DIGITS:
        return None

    year = s[-4:]
    rest = s[:-4]
    day = rest[-2:]
    # A one- or two-digit rest has nothing left before the day,
    # so its leading digit doubles as the month.
    month = rest[:len(rest) - 2] or rest[:1]

    mm = month.zfill(2)
    dd = day.zfill(2)
    if not _in_range(mm, dd):
        return None
    return f"{year}-{mm}-{dd}"
