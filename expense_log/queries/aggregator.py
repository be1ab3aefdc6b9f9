"""
Aggregation Engine

Computes the derived values behind the summary view and the chart:
- the formatted sum of a filtered set
- totals per category, largest first
- totals per day split by category, oldest day first

All functions are pure. Bad data never raises: a missing or non-finite
amount counts as zero and a missing category counts as "Other".
"""

import math
from datetime import datetime
from typing import Any, Iterable, Optional

from expense_log.models.expense import CategoryTotal, DailyTotal, DEFAULT_CATEGORY
from expense_log.queries.filters import record_field


# Indexed 0 = Sunday
DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
DAY_NAMES_SHORT = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def coerce_amount(value: Any) -> float:
    """Read an amount as a float; missing, unparseable or non-finite is 0."""
    if value is None or value == "":
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def sum_amounts(records: Iterable[Any]) -> float:
    return sum(coerce_amount(record_field(r, "amount")) for r in records)


def format_currency(value: float, symbol: str = "$") -> str:
    """Two decimal places with a leading unit symbol, e.g. '$12.50'."""
    return f"{symbol}{value:.2f}"


def filter_sum(records: Iterable[Any], symbol: str = "$") -> str:
    return format_currency(sum_amounts(records), symbol)


def category_key(raw: Any) -> str:
    """Trimmed category label, or "Other" when absent or blank."""
    if not raw:
        return DEFAULT_CATEGORY
    return str(raw).strip() or DEFAULT_CATEGORY


def totals_by_category(records: Iterable[Any]) -> list[CategoryTotal]:
    """
    Sum amounts per category, sorted by total descending.

    Categories match on exact trimmed text, so "Food" and "food" are two
    entries. Equal totals keep first-seen order.
    """
    totals: dict[str, float] = {}
    for record in records:
        key = category_key(record_field(record, "category"))
        totals[key] = totals.get(key, 0.0) + coerce_amount(record_field(record, "amount"))

    entries = [CategoryTotal(category=k, total=v) for k, v in totals.items()]
    return sorted(entries, key=lambda e: e.total, reverse=True)


def weekday_names(value: str) -> tuple[str, str]:
    """
    Full and short weekday names for a YYYY-MM-DD string.

    Both fall back to the raw string if it is not a real calendar date.
    """
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return value, value
    index = parsed.isoweekday() % 7
    return DAY_NAMES[index], DAY_NAMES_SHORT[index]


def daily_totals(records: Iterable[Any]) -> list[DailyTotal]:
    """
    Group dated records by day, then by category, for a stacked chart.

    Undated records cannot be charted and are skipped. Days are sorted
    ascending by their date string.
    """
    by_day: dict[str, dict[str, float]] = {}
    for record in records:
        day = record_field(record, "date")
        if not day:
            continue
        raw_category = record_field(record, "category")
        category = str(raw_category) if raw_category else DEFAULT_CATEGORY
        categories = by_day.setdefault(str(day), {})
        categories[category] = categories.get(category, 0.0) + coerce_amount(
            record_field(record, "amount")
        )

    result = []
    for day, categories in by_day.items():
        day_name, day_short = weekday_names(day)
        result.append(DailyTotal(
            date=day,
            total=sum(categories.values()),
            day_name=day_name,
            day_short=day_short,
            categories=categories,
        ))
    result.sort(key=lambda d: d.date)
    return result


def max_daily_total(daily: Iterable[DailyTotal], floor: Optional[float] = 1.0) -> float:
    """Largest day total, never below floor."""
    totals = [d.total for d in daily]
    if floor is not None:
        totals.append(floor)
    return max(totals) if totals else 0.0
