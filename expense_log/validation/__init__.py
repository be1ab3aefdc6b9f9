"""Validation package."""

from expense_log.validation.validator import (
    ExpenseValidator,
    draft_date_digits,
    parse_amount,
)

__all__ = ["ExpenseValidator", "draft_date_digits", "parse_amount"]
