"""Calendar arithmetic over client-supplied ``YYYY-MM-DD`` strings.

Dates are the player's own local date, sent as an opaque string. The server
never converts time zones; it only checks a date against the player's history.
"""

import re
from datetime import date, timedelta
from typing import Optional

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class DateArithmetic:
    """Pure date helpers. No state."""

    @staticmethod
    def parse(value: str) -> Optional[date]:
        """
        Parse a ``YYYY-MM-DD`` string into a calendar date.

        Args:
            value: Candidate date string

        Returns:
            The date, or None if the string is not a real calendar date
        """
        if not isinstance(value, str) or not _DATE_PATTERN.fullmatch(value):
            return None
        try:
            return date.fromisoformat(value)
        except ValueError:
            # e.g. 2023-02-29, 2024-13-01, 0000-01-01
            return None

    @staticmethod
    def is_valid_date(value: str) -> bool:
        """Check the string is a well-formed, real calendar date."""
        return DateArithmetic.parse(value) is not None

    @staticmethod
    def is_same_day(first: str, second: str) -> bool:
        """Dates are opaque identifiers here: plain string equality."""
        return first == second

    @staticmethod
    def is_consecutive_day(earlier: str, later: str) -> bool:
        """
        Check whether ``later`` is exactly one calendar day after ``earlier``.

        Args:
            earlier: The earlier date (YYYY-MM-DD)
            later: The later date (YYYY-MM-DD)

        Returns:
            True if later == earlier + 1 day
        """
        first = DateArithmetic.parse(earlier)
        second = DateArithmetic.parse(later)
        if first is None or second is None:
            return False
        return first + timedelta(days=1) == second

    @staticmethod
    def days_between(earlier: str, later: str) -> int:
        """
        Signed number of days from ``earlier`` to ``later``.

        Raises:
            ValueError: If either string is not a valid date
        """
        first = DateArithmetic.parse(earlier)
        second = DateArithmetic.parse(later)
        if first is None or second is None:
            raise ValueError(f"Invalid date pair: {earlier!r}, {later!r}")
        return (second - first).days

    @staticmethod
    def is_on_or_before(value: str, reference: str) -> bool:
        """True if ``value`` falls on or before ``reference`` in the calendar."""
        first = DateArithmetic.parse(value)
        second = DateArithmetic.parse(reference)
        if first is None or second is None:
            raise ValueError(f"Invalid date pair: {value!r}, {reference!r}")
        return first <= second
