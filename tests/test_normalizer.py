"""Tests for the date normalizer."""

import pytest

from expense_log.dates.normalizer import digits_only, normalize_date


class TestFastPath:
    """Tests for the 8-digit YYYYMMDD reading."""

    def test_yyyymmdd(self):
        """Test a plain 8-digit date."""
        assert normalize_date("20240315") == "2024-03-15"

    def test_separators_are_ignored(self):
        """Test that non-digits are stripped before parsing."""
        assert normalize_date("2024-03-15") == "2024-03-15"
        assert normalize_date("2024/03/15") == "2024-03-15"

    @pytest.mark.parametrize("raw,expected", [
        ("19000101", "1900-01-01"),
        ("21001231", "2100-12-31"),
    ])
    def test_year_bounds_inclusive(self, raw, expected):
        """Test the fast path accepts years 1900 and 2100."""
        assert normalize_date(raw) == expected

    def test_no_month_length_check(self):
        """Test that Feb 31 passes the range checks."""
        assert normalize_date("20240231") == "2024-02-31"

    def test_failed_fast_path_falls_through(self):
        """Test MMDDYYYY input reads via the last-four-digits rule."""
        # 0315 is not a year in range, so 03/15/2024 is used
        assert normalize_date("03152024") == "2024-03-15"

    def test_year_out_of_range_then_general_rule_fails(self):
        """Test 99999999 is rejected by both readings."""
        assert normalize_date("99999999") is None


class TestGeneralRule:
    """Tests for the last-four-digits-as-year reading."""

    def test_seven_digits(self):
        """Test MDDYYYY."""
        assert normalize_date("3152024") == "2024-03-15"

    def test_five_digits_single_leading_digit(self):
        """Test that one digit before the year serves as day and month."""
        assert normalize_date("12024") == "2024-01-01"

    def test_six_digits_uses_leading_digit_as_month(self):
        """Test that two digits before the year are the day, first digit the month."""
        assert normalize_date("152024") == "2024-01-15"

    def test_month_out_of_range(self):
        """Test a 99 month is rejected."""
        assert normalize_date("99132024") is None

    def test_day_out_of_range(self):
        """Test day 32 is rejected."""
        assert normalize_date("1322024") is None

    def test_zero_month_rejected(self):
        """Test month 00 is rejected."""
        assert normalize_date("0152024") is None

    def test_year_not_range_checked(self):
        """Test the general rule accepts any four-digit year."""
        assert normalize_date("3150042") == "0042-03-15"


class TestRejectedInput:
    """Tests for input that never yields a date."""

    @pytest.mark.parametrize("raw", [None, "", "abc", "--/"])
    def test_empty(self, raw):
        """Test no digits means no date."""
        assert normalize_date(raw) is None

    @pytest.mark.parametrize("raw", ["1", "125", "2024"])
    def test_too_short(self, raw):
        """Test fewer than five digits is never a date."""
        assert normalize_date(raw) is None

    def test_deterministic(self):
        """Test the same input gives the same output."""
        assert normalize_date("3152024") == normalize_date("3152024")


class TestDigitsOnly:

    def test_strips_everything_but_digits(self):
        assert digits_only("a1-2 b3") == "123"

    def test_none(self):
        assert digits_only(None) == ""
