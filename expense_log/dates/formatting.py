"""Display helpers for dates typed into, and shown by, the expense form."""

import re
from typing import Optional

from expense_log.dates.normalizer import digits_only, normalize_date


INVALID_DATE_PREVIEW = "Invalid date"
NO_DATE_LABEL = "No date"

_CANONICAL = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_canonical(value: Optional[str]) -> bool:
    return bool(value) and bool(_CANONICAL.match(str(value)))


def date_preview(raw: Optional[str]) -> Optional[str]:
    """
    Preview shown under the date field while typing.

    Returns the canonical date, "Invalid date" when digits were typed but
    cannot be read, or None when nothing was typed.
    """
    clean = digits_only(raw)
    if not clean:
        return None
    return normalize_date(clean) or INVALID_DATE_PREVIEW


def format_date(value: Optional[str]) -> Optional[str]:
    """Canonical form of a stored date, falling back to the raw value."""
    if not value:
        return None
    if is_canonical(value):
        return value
    return normalize_date(value) or value


def format_short_date(value: Optional[str]) -> str:
    """MM/DD label for a chart column."""
    if not value:
        return NO_DATE_LABEL
    if is_canonical(value):
        return f"{value[5:7]}/{value[8:10]}"
    iso = normalize_date(value)
    if iso is None:
        return str(value)
    return f"{iso[5:7]}/{iso[8:10]}"


def edit_digits(value: Optional[str]) -> str:
    """Digits used to prefill the date field when editing a record."""
    return digits_only(value)
