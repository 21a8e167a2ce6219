"""Tests for the full engine pass (catch-up, then projection)."""

from __future__ import annotations

from datetime import date, datetime

from wealthtrack.services.engine import catch_up, run


class TestCatchUp:
    def test_applies_due_occurrences_across_accounts(self, sample_portfolio):
        result = catch_up(sample_portfolio, now=date(2025, 1, 20))

        by_account = {}
        for occurrence in result.occurrences:
            by_account.setdefault(occurrence.account_id, []).append(occurrence.due_on)

        assert by_account == {
            "card": [date(2025, 1, 1)],
            "car": [date(2025, 1, 3), date(2025, 1, 17)],
            "emergency": [date(2025, 1, 6), date(2025, 1, 13), date(2025, 1, 20)],
        }
        card, car = result.portfolio.debts
        assert card.paid_to_date == 200.0
        assert car.paid_to_date == 300.0
        assert result.portfolio.savings[0].current_balance == 75.0

    def test_input_portfolio_untouched(self, sample_portfolio):
        catch_up(sample_portfolio, now=date(2025, 3, 1))

        assert all(d.paid_to_date == 0.0 for d in sample_portfolio.debts)
        assert all(d.rule.last_applied is None for d in sample_portfolio.debts)
        assert sample_portfolio.savings[0].current_balance == 0.0

    def test_second_pass_is_noop(self, sample_portfolio):
        first = catch_up(sample_portfolio, now=datetime(2025, 2, 14, 8, 30))
        second = catch_up(first.portfolio, now=datetime(2025, 2, 14, 22, 0))

        assert first.changed
        assert not second.changed
        assert second.portfolio.debts == first.portfolio.debts
        assert second.portfolio.savings == first.portfolio.savings

    def test_nothing_due_before_start(self, sample_portfolio):
        assert not catch_up(sample_portfolio, now=date(2024, 12, 31)).changed


class TestRun:
    def test_catch_up_only_without_budget(self, sample_portfolio):
        report = run(sample_portfolio, now=date(2025, 1, 20))

        assert report.comparison is None
        assert report.catch_up.changed

    def test_projection_uses_caught_up_balances(self, sample_portfolio):
        report = run(sample_portfolio, now=date(2025, 1, 20), monthly_budget=1000.0)

        comparison = report.comparison
        assert comparison.snowball.ok
        assert comparison.avalanche.ok
        # Card has 1000 left after the Jan 1 payment, car 7700 after two biweekly payments.
        assert comparison.snowball.order == ["card", "car"]
        assert comparison.avalanche.order == ["card", "car"]
        assert comparison.snowball.payoff_date > date(2025, 1, 20)

    def test_budget_failure_is_reported_not_raised(self, sample_portfolio):
        report = run(sample_portfolio, now=date(2025, 1, 20), monthly_budget=100.0)

        assert not report.comparison.snowball.ok
        assert report.comparison.snowball.error_code == "budget_below_minimums"
