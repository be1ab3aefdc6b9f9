"""
Record Filter

Selects the records that participate in totals for a filter mode.

Records may be Expense models or plain mappings straight from storage;
both are read through record_field().
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Iterable, Optional, Union

from expense_log.dates.classifier import in_current_month, in_current_week
from expense_log.models.expense import FilterMode


FILTER_LABELS = {
    FilterMode.ALL: "All",
    FilterMode.WEEK: "This Week",
    FilterMode.MONTH: "This Month",
}


def record_field(record: Any, name: str) -> Any:
    """Read a field from a model or a mapping, None if missing."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def filter_label(mode: Union[FilterMode, str]) -> str:
    return FILTER_LABELS[FilterMode(mode)]


def matches_filter(record: Any, mode: Union[FilterMode, str], now: Optional[datetime] = None) -> bool:
    """Does a single record belong to the given filter mode?"""
    mode = FilterMode(mode)
    if mode is FilterMode.ALL:
        return True
    date_value = record_field(record, "date")
    if not date_value:
        return False
    if mode is FilterMode.WEEK:
        return in_current_week(date_value, now)
    return in_current_month(date_value, now)


def filter_expenses(
    records: Iterable[Any],
    mode: Union[FilterMode, str],
    now: Optional[datetime] = None,
) -> list:
    """
    Return the records matching mode, in input order.

    "all" keeps everything, undated records included. "week" and "month"
    keep only dated records inside the current week or month.

    Raises:
        ValueError: If mode is not a known filter mode
    """
    mode = FilterMode(mode)
    if mode is FilterMode.ALL:
        return list(records)
    now = now or datetime.now()
    return [r for r in records if matches_filter(r, mode, now)]


def filter_counts(records: Iterable[Any], now: Optional[datetime] = None) -> dict[FilterMode, int]:
    """How many records each filter mode would show."""
    records = list(records)
    now = now or datetime.now()
    return {mode: len(filter_expenses(records, mode, now)) for mode in FilterMode}
