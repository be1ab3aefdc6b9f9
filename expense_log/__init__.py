"""
Expense Log - Source Package

A personal expense log: record dated expenses with a category and an
optional note, then see totals for this week, this month or all time,
broken down by category and by day.

DESIGN PRINCIPLES:
1. Dates are normalized once, before they are stored
2. Totals are pure functions of (records, filter mode, reference time)
3. Bad data degrades to absent / zero / "Other", never to a crash
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Log Team"
