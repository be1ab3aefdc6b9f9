"""
Summary view model.

One call computes everything the list/summary view shows for a filter
mode. Nothing is cached: the summary is rebuilt from the full record list
after every change.
"""

from datetime import datetime
from typing import Any, Iterable, Optional, Union

from expense_log.models.expense import ExpenseSummary, FilterMode
from expense_log.queries.aggregator import daily_totals, filter_sum, totals_by_category
from expense_log.queries.filters import filter_counts, filter_expenses, filter_label


def build_summary(
    records: Iterable[Any],
    mode: Union[FilterMode, str],
    now: Optional[datetime] = None,
    symbol: str = "$",
) -> ExpenseSummary:
    """
    Filter records and compute the sum, category totals and daily totals.

    Args:
        records: Every stored record, newest first
        mode: Filter mode to apply
        now: Reference instant for the week and month filters
        symbol: Currency symbol for the formatted total
    """
    records = list(records)
    now = now or datetime.now()
    mode = FilterMode(mode)

    displayed = filter_expenses(records, mode, now)

    return ExpenseSummary(
        filter=mode,
        filter_label=filter_label(mode),
        expenses=displayed,
        total=filter_sum(displayed, symbol),
        category_totals=totals_by_category(displayed),
        daily_totals=daily_totals(displayed),
        counts=filter_counts(records, now),
    )
