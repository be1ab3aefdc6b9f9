"""Filtering, aggregation and chart layout over expense records."""

from expense_log.queries.aggregator import (
    DAY_NAMES,
    DAY_NAMES_SHORT,
    category_key,
    coerce_amount,
    daily_totals,
    filter_sum,
    format_currency,
    sum_amounts,
    totals_by_category,
    weekday_names,
)
from expense_log.queries.chart import build_chart, category_color
from expense_log.queries.filters import (
    filter_counts,
    filter_expenses,
    filter_label,
    matches_filter,
)
from expense_log.queries.summary import build_summary

__all__ = [
    # Filter
    "filter_counts",
    "filter_expenses",
    "filter_label",
    "matches_filter",
    # Aggregator
    "DAY_NAMES",
    "DAY_NAMES_SHORT",
    "category_key",
    "coerce_amount",
    "daily_totals",
    "filter_sum",
    "format_currency",
    "sum_amounts",
    "totals_by_category",
    "weekday_names",
    # Views
    "build_chart",
    "build_summary",
    "category_color",
]
