"""Tests for DateArithmetic."""

import pytest

from sisyphus.engine.dates import DateArithmetic


class TestDateValidity:
    """Test suite for date string validation."""

    @pytest.mark.parametrize("value", ["2024-01-01", "2024-02-29", "1999-12-31", "2023-06-15"])
    def test_valid_dates(self, value):
        """Test that well-formed real dates are accepted."""
        assert DateArithmetic.is_valid_date(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "2024-1-01",
            "2024/01/01",
            "20240101",
            "2024-01-01T00:00:00Z",
            "2024-01-01\n",
            " 2024-01-01",
            "2024-02-30",
            "2023-02-29",
            "2024-13-01",
            "2024-00-10",
            "0000-01-01",
            "２０２４-01-01",
            "not-a-date",
        ],
    )
    def test_invalid_dates(self, value):
        """Test that malformed or impossible dates are rejected, never corrected."""
        assert DateArithmetic.is_valid_date(value) is False

    def test_non_string_rejected(self):
        """Test that non-string input is invalid."""
        assert DateArithmetic.is_valid_date(None) is False  # type: ignore
        assert DateArithmetic.is_valid_date(20240101) is False  # type: ignore


class TestDateComparisons:
    """Test suite for day comparisons."""

    def test_same_day_is_string_equality(self):
        """Test that same-day is a literal comparison."""
        assert DateArithmetic.is_same_day("2024-01-01", "2024-01-01") is True
        assert DateArithmetic.is_same_day("2024-01-01", "2024-01-02") is False

    def test_consecutive_across_month_end(self):
        """Test consecutive days across a month boundary."""
        assert DateArithmetic.is_consecutive_day("2024-01-31", "2024-02-01") is True

    def test_consecutive_across_year_end(self):
        """Test consecutive days across a year boundary."""
        assert DateArithmetic.is_consecutive_day("2023-12-31", "2024-01-01") is True

    def test_consecutive_end_of_february_depends_on_leap_year(self):
        """Test Feb 28 -> Mar 1 is consecutive only in non-leap years."""
        assert DateArithmetic.is_consecutive_day("2023-02-28", "2023-03-01") is True
        assert DateArithmetic.is_consecutive_day("2024-02-28", "2024-03-01") is False
        assert DateArithmetic.is_consecutive_day("2024-02-28", "2024-02-29") is True
        assert DateArithmetic.is_consecutive_day("2024-02-29", "2024-03-01") is True

    def test_not_consecutive(self):
        """Test same day, gaps and reversed order are not consecutive."""
        assert DateArithmetic.is_consecutive_day("2024-01-01", "2024-01-01") is False
        assert DateArithmetic.is_consecutive_day("2024-01-01", "2024-01-03") is False
        assert DateArithmetic.is_consecutive_day("2024-01-02", "2024-01-01") is False

    def test_consecutive_with_invalid_date(self):
        """Test invalid input is never consecutive."""
        assert DateArithmetic.is_consecutive_day("2024-02-30", "2024-03-01") is False

    def test_days_between_is_signed(self):
        """Test day distance sign follows argument order."""
        assert DateArithmetic.days_between("2024-01-01", "2024-01-04") == 3
        assert DateArithmetic.days_between("2024-01-04", "2024-01-01") == -3
        assert DateArithmetic.days_between("2024-02-28", "2024-03-01") == 2
        assert DateArithmetic.days_between("2024-01-01", "2024-01-01") == 0

    def test_days_between_invalid(self):
        """Test day distance rejects invalid dates."""
        with pytest.raises(ValueError):
            DateArithmetic.days_between("2024-01-01", "garbage")

    def test_is_on_or_before(self):
        """Test calendar ordering."""
        assert DateArithmetic.is_on_or_before("2024-01-01", "2024-01-01") is True
        assert DateArithmetic.is_on_or_before("2023-12-31", "2024-01-01") is True
        assert DateArithmetic.is_on_or_before("2024-01-02", "2024-01-01") is False
