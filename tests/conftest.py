"""Shared fixtures for the Expense Log tests."""

from datetime import datetime

import pytest

from expense_log.models.expense import Expense


# Wednesday; its Sunday-start week runs 2024-03-10 .. 2024-03-16
WEDNESDAY = datetime(2024, 3, 13, 15, 30)


@pytest.fixture
def now() -> datetime:
    return WEDNESDAY


@pytest.fixture
def sample_expenses() -> list[Expense]:
    """Newest id first, as storage returns them."""
    return [
        Expense(id=6, amount=4.0, category="Food", date=None),
        Expense(id=5, amount=20.0, category="Rent", date="2024-02-28"),
        Expense(id=4, amount=7.5, category="Books", date="2024-03-02"),
        Expense(id=3, amount=3.0, category="Food", date="2024-03-11"),
        Expense(id=2, amount=12.5, category="Transport", date="2024-03-11"),
        Expense(id=1, amount=10.0, category="Food", note="lunch", date="2024-03-13"),
    ]
