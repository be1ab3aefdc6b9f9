"""Tests for the record filter."""

import pytest

from expense_log.models.expense import Expense, FilterMode
from expense_log.queries.filters import (
    filter_counts,
    filter_expenses,
    filter_label,
    matches_filter,
)


class TestFilterExpenses:

    def test_all_keeps_everything(self, sample_expenses, now):
        """Test 'all' includes undated records and keeps order."""
        result = filter_expenses(sample_expenses, FilterMode.ALL, now)
        assert result == sample_expenses

    def test_week(self, sample_expenses, now):
        """Test week keeps only dated records in the current week, in order."""
        result = filter_expenses(sample_expenses, "week", now)
        assert [e.id for e in result] == [3, 2, 1]

    def test_month(self, sample_expenses, now):
        result = filter_expenses(sample_expenses, FilterMode.MONTH, now)
        assert [e.id for e in result] == [4, 3, 2, 1]

    def test_undated_excluded_from_week_and_month(self, now):
        undated = [Expense(id=1, amount=5.0, category="Food")]
        assert filter_expenses(undated, "week", now) == []
        assert filter_expenses(undated, "month", now) == []

    @pytest.mark.parametrize("mode", list(FilterMode))
    def test_idempotent(self, sample_expenses, now, mode):
        """Test filtering twice by the same mode changes nothing."""
        once = filter_expenses(sample_expenses, mode, now)
        twice = filter_expenses(once, mode, now)
        assert twice == once

    def test_plain_mappings(self, now):
        """Test records straight from storage as dicts."""
        rows = [
            {"id": 1, "amount": 2, "category": "Food", "date": "2024-03-12"},
            {"id": 2, "amount": 3, "category": "Food"},
        ]
        assert filter_expenses(rows, "week", now) == [rows[0]]

    def test_unknown_mode(self, sample_expenses, now):
        with pytest.raises(ValueError):
            filter_expenses(sample_expenses, "year", now)


class TestFilterHelpers:

    def test_matches_filter(self, now):
        expense = Expense(id=1, amount=1.0, category="Food", date="2024-03-14")
        assert matches_filter(expense, FilterMode.WEEK, now)
        assert matches_filter(expense, FilterMode.MONTH, now)

    def test_counts(self, sample_expenses, now):
        counts = filter_counts(sample_expenses, now)
        assert counts == {FilterMode.ALL: 6, FilterMode.WEEK: 3, FilterMode.MONTH: 4}

    def test_labels(self):
        assert filter_label("all") == "All"
        assert filter_label(FilterMode.WEEK) == "This Week"
        assert filter_label("month") == "This Month"
