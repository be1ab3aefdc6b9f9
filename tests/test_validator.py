"""Tests for expense draft validation."""

import pytest

from expense_log.models.expense import ExpenseDraft
from expense_log.validation import ExpenseValidator
from expense_log.validation.validator import draft_date_digits, parse_amount


@pytest.fixture
def validator():
    return ExpenseValidator()


class TestParseAmount:

    @pytest.mark.parametrize("raw,expected", [
        ("12.50", 12.5),
        ("  7", 7.0),
        ("12.50abc", 12.5),
        (".5", 0.5),
        ("-3", -3.0),
        ("1e2", 100.0),
    ])
    def test_leading_number(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "$5", "1e999"])
    def test_unreadable(self, raw):
        assert parse_amount(raw) is None


class TestValidate:

    def test_valid_draft(self, validator):
        """Test a complete draft yields parsed values."""
        result = validator.validate(ExpenseDraft(
            amount="12.50", category=" Food ", note=" lunch ", date="20240315",
        ))
        assert result.is_valid
        assert result.amount == 12.5
        assert result.category == "Food"
        assert result.note == "lunch"
        assert result.date == "2024-03-15"
        assert result.issues == []

    def test_missing_amount(self, validator):
        result = validator.validate(ExpenseDraft(category="Food"))
        assert not result.is_valid
        assert result.issues[0].field == "amount"
        assert result.issues[0].issue_type == "missing"
        assert result.amount is None

    def test_non_numeric_amount(self, validator):
        result = validator.validate(ExpenseDraft(amount="abc", category="Food"))
        assert not result.is_valid
        assert result.issues[0].issue_type == "invalid_value"

    @pytest.mark.parametrize("amount", ["0", "-4"])
    def test_non_positive_amount(self, validator, amount):
        result = validator.validate(ExpenseDraft(amount=amount, category="Food"))
        assert not result.is_valid

    def test_blank_category(self, validator):
        result = validator.validate(ExpenseDraft(amount="5", category="   "))
        assert not result.is_valid
        assert [i.field for i in result.issues] == ["category"]

    def test_both_required_missing(self, validator):
        result = validator.validate(ExpenseDraft())
        assert result.error_count == 2

    def test_blank_note_and_date(self, validator):
        result = validator.validate(ExpenseDraft(amount="5", category="Food", note="  "))
        assert result.is_valid
        assert result.note is None
        assert result.date is None

    def test_unparseable_date_is_warning(self, validator):
        """Test an unreadable date still saves, undated."""
        result = validator.validate(ExpenseDraft(amount="5", category="Food", date="123"))
        assert result.is_valid
        assert result.date is None
        assert result.issues[0].issue_type == "unparseable"
        assert result.issues[0].severity == "warning"
        assert len(result.warnings) == 1


class TestSummary:

    def test_clean(self, validator):
        result = validator.validate(ExpenseDraft(amount="5", category="Food"))
        assert validator.get_user_friendly_summary(result) == "Expense looks good."

    def test_errors_listed(self, validator):
        result = validator.validate(ExpenseDraft(amount="5"))
        summary = validator.get_user_friendly_summary(result)
        assert summary.startswith("Please fix the following:")
        assert "Category is required" in summary

    def test_warnings_listed(self, validator):
        result = validator.validate(ExpenseDraft(amount="5", category="Food", date="99"))
        assert validator.get_user_friendly_summary(result).startswith("Note:")


class TestDraftDateDigits:

    def test_digits_capped_at_eight(self):
        assert draft_date_digits("2024-03-15-99") == "20240315"

    def test_strips_separators(self):
        assert draft_date_digits("03/15") == "0315"
