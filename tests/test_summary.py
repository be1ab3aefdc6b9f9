"""Tests for the summary view model."""

from expense_log.models.expense import FilterMode
from expense_log.queries.summary import build_summary


class TestBuildSummary:

    def test_models(self, sample_expenses, now):
        summary = build_summary(sample_expenses, "month", now)
        assert summary.filter is FilterMode.MONTH
        assert summary.total == "$33.00"
        assert summary.expenses == sample_expenses[2:]
        assert [d.date for d in summary.daily_totals] == [
            "2024-03-02", "2024-03-11", "2024-03-13",
        ]

    def test_degenerate_mapping_degrades(self, now):
        """Test a record missing amount and category counts as 0 under Other."""
        rows = [{"id": 1, "amount": None, "category": "", "date": None}]
        summary = build_summary(rows, "all", now)
        assert summary.total == "$0.00"
        assert summary.expenses == rows
        assert [(t.category, t.total) for t in summary.category_totals] == [("Other", 0.0)]
        assert summary.daily_totals == []
        assert summary.counts == {FilterMode.ALL: 1, FilterMode.WEEK: 0, FilterMode.MONTH: 0}

    def test_mixed_records(self, sample_expenses, now):
        rows = sample_expenses + [{"amount": "2.5", "category": "Food", "date": "2024-03-12"}]
        summary = build_summary(rows, FilterMode.WEEK, now)
        assert summary.total == "$28.00"
        assert len(summary.expenses) == 4

    def test_currency_symbol(self, sample_expenses, now):
        assert build_summary(sample_expenses, "all", now, symbol="£").total == "£57.00"
