"""Date normalization, classification and display helpers."""

from expense_log.dates.classifier import (
    current_week_bounds,
    in_current_month,
    in_current_week,
    parse_calendar_date,
    sunday_index,
)
from expense_log.dates.formatting import (
    INVALID_DATE_PREVIEW,
    NO_DATE_LABEL,
    date_preview,
    edit_digits,
    format_date,
    format_short_date,
    is_canonical,
)
from expense_log.dates.normalizer import digits_only, normalize_date

__all__ = [
    # Normalizer
    "digits_only",
    "normalize_date",
    # Classifier
    "current_week_bounds",
    "in_current_month",
    "in_current_week",
    "parse_calendar_date",
    "sunday_index",
    # Formatting
    "INVALID_DATE_PREVIEW",
    "NO_DATE_LABEL",
    "date_preview",
    "edit_digits",
    "format_date",
    "format_short_date",
    "is_canonical",
]
