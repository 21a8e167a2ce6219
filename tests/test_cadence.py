"""Tests for cadence date arithmetic."""

from __future__ import annotations

from datetime import date

import pytest

from wealthtrack.domain.accounts import Cadence
from wealthtrack.services.cadence import add_months, advance


class TestAdvance:
    """Tests for advancing a date by one cadence period."""

    def test_weekly_adds_seven_days(self):
        assert advance(date(2025, 3, 3), Cadence.WEEKLY) == date(2025, 3, 10)

    def test_biweekly_adds_fourteen_days(self):
        assert advance(date(2025, 12, 25), Cadence.BIWEEKLY) == date(2026, 1, 8)

    def test_monthly_preserves_day_of_month(self):
        assert advance(date(2025, 4, 15), Cadence.MONTHLY) == date(2025, 5, 15)

    def test_monthly_rolls_over_year_end(self):
        assert advance(date(2025, 12, 10), Cadence.MONTHLY) == date(2026, 1, 10)

    def test_monthly_clamps_to_end_of_february(self):
        """Jan 31 + 1 month lands on the last day of February, not in March."""
        assert advance(date(2025, 1, 31), Cadence.MONTHLY) == date(2025, 2, 28)
        assert advance(date(2024, 1, 31), Cadence.MONTHLY) == date(2024, 2, 29)

    def test_monthly_chain_without_anchor_keeps_clamped_day(self):
        """Chaining from a clamped date without an anchor stays on the 28th."""
        assert advance(date(2025, 2, 28), Cadence.MONTHLY) == date(2025, 3, 28)

    def test_monthly_with_anchor_restores_original_day(self):
        """The anchor day is reapplied after a short month."""
        assert advance(date(2025, 2, 28), Cadence.MONTHLY, anchor_day=31) == date(2025, 3, 31)
        assert advance(date(2025, 3, 31), Cadence.MONTHLY, anchor_day=31) == date(2025, 4, 30)

    def test_anchor_ignored_for_day_based_cadences(self):
        assert advance(date(2025, 2, 28), Cadence.WEEKLY, anchor_day=31) == date(2025, 3, 7)

    def test_accepts_cadence_value_string(self):
        assert advance(date(2025, 1, 1), "biweekly") == date(2025, 1, 15)

    def test_unknown_cadence_raises(self):
        with pytest.raises(ValueError):
            advance(date(2025, 1, 1), "daily")


class TestAddMonths:
    @pytest.mark.parametrize(
        "start, months, expected",
        [
            (date(2025, 1, 31), 1, date(2025, 2, 28)),
            (date(2025, 1, 31), 3, date(2025, 4, 30)),
            (date(2025, 11, 30), 3, date(2026, 2, 28)),
            (date(2025, 6, 15), 12, date(2026, 6, 15)),
            (date(2025, 6, 15), 0, date(2025, 6, 15)),
        ],
    )
    def test_add_months(self, start, months, expected):
        assert add_months(start, months) == expected
