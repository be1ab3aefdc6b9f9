"""
Daily chart layout.

Turns the daily breakdown into bar heights, axis ticks and a legend.
Heights are scaled against the largest day so the tallest bar is exactly
bar_max_height.
"""

import math
from typing import Iterable

from expense_log.dates.formatting import format_short_date
from expense_log.models.chart import (
    AxisTick,
    ChartBar,
    ChartModel,
    ChartSegment,
    LegendEntry,
)
from expense_log.models.expense import DailyTotal, DEFAULT_CATEGORY
from expense_log.queries.aggregator import max_daily_total


DEFAULT_BAR_MAX_HEIGHT = 320
MAX_TICKS = 5

CATEGORY_COLORS = {
    "Food": "#10b981",
    "Books": "#3b82f6",
    "Rent": "#f97316",
    "Transport": "#8b5cf6",
    "Entertainment": "#ec4899",
    "Utilities": "#06b6d4",
    DEFAULT_CATEGORY: "#6b7280",
}


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, CATEGORY_COLORS[DEFAULT_CATEGORY])


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def axis_ticks(axis_max: int, bar_max_height: int, symbol: str = "$") -> list[AxisTick]:
    """Zero plus evenly spaced fifths of axis_max, at most MAX_TICKS."""
    if axis_max <= 0:
        return []
    values = [0]
    step = axis_max / MAX_TICKS
    i = 1
    while len(values) < MAX_TICKS and step * i <= axis_max:
        values.append(_round_half_up(step * i))
        i += 1
    return [
        AxisTick(
            value=v,
            label=f"{symbol}{v}",
            offset=_round_half_up((1 - v / axis_max) * bar_max_height),
        )
        for v in values
    ]


def build_chart(
    daily: Iterable[DailyTotal],
    bar_max_height: int = DEFAULT_BAR_MAX_HEIGHT,
    symbol: str = "$",
) -> ChartModel:
    """
    Lay out the stacked daily chart.

    Args:
        daily: Output of daily_totals(), oldest day first
        bar_max_height: Height of the tallest possible bar
        symbol: Currency symbol for tick and value labels

    Returns:
        A ChartModel; with no dated records it has no bars or ticks
    """
    daily = list(daily)
    if not daily:
        return ChartModel(bar_max_height=bar_max_height, max_total=0.0, axis_max=0)

    max_total = max_daily_total(daily)
    axis_max = int(math.ceil(max_total / 10) * 10)

    categories = sorted({cat for d in daily for cat in d.categories})
    legend = [LegendEntry(category=c, color=category_color(c)) for c in categories]

    bars = []
    for d in daily:
        segments = [
            ChartSegment(
                category=cat,
                amount=amount,
                height=max(0, _round_half_up(amount / max_total * bar_max_height)),
                color=category_color(cat),
            )
            for cat, amount in d.categories.items()
        ]
        bars.append(ChartBar(
            date=d.date,
            label=d.day_short,
            short_date=format_short_date(d.date),
            total=d.total,
            value_label=f"{symbol}{d.total:.0f}",
            segments=segments,
        ))

    return ChartModel(
        bar_max_height=bar_max_height,
        max_total=max_total,
        axis_max=axis_max,
        ticks=axis_ticks(axis_max, bar_max_height, symbol),
        legend=legend,
        bars=bars,
    )
