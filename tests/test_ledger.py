"""Tests for manual payments and contributions."""

from __future__ import annotations

from datetime import date

import pytest

from wealthtrack.domain.accounts import EntrySource
from wealthtrack.services.ledger import record_contribution, record_debt_payment


class TestDebtPayments:
    def test_payment_reduces_remaining_balance(self, debt_factory):
        debt = debt_factory(principal=1000.0)

        updated = record_debt_payment(debt, 250.0, note="bonus", on=date(2025, 2, 1))

        assert updated.paid_to_date == 250.0
        assert updated.remaining_balance == 750.0
        assert updated.history[-1].source is EntrySource.MANUAL
        assert updated.history[-1].note == "bonus"
        assert updated.history[-1].occurred_on == date(2025, 2, 1)

    def test_overpayment_is_capped(self, debt_factory):
        debt = debt_factory(principal=1000.0, paid_to_date=900.0)

        updated = record_debt_payment(debt, 500.0)

        assert updated.paid_to_date == 1000.0
        assert updated.is_paid_off
        assert updated.history[-1].amount == 100.0
        assert updated.progress == 1.0

    def test_payment_on_paid_off_debt_is_noop(self, debt_factory):
        debt = debt_factory(principal=100.0, paid_to_date=100.0)
        assert record_debt_payment(debt, 10.0) is debt

    def test_negative_payment_rejected(self, debt_factory):
        with pytest.raises(ValueError):
            record_debt_payment(debt_factory(), -1.0)

    def test_original_debt_untouched(self, debt_factory):
        debt = debt_factory(principal=1000.0)
        record_debt_payment(debt, 100.0)
        assert debt.paid_to_date == 0.0
        assert debt.history == []


class TestContributions:
    def test_contribution_grows_balance_past_target(self, savings_factory):
        goal = savings_factory(target_amount=100.0, current_balance=90.0)

        updated = record_contribution(goal, 50.0, on=date(2025, 2, 1))

        assert updated.current_balance == 140.0
        assert len(updated.history) == 1
        assert goal.current_balance == 90.0

    def test_zero_contribution_is_noop(self, savings_factory):
        goal = savings_factory()
        assert record_contribution(goal, 0.0) is goal

    def test_negative_contribution_rejected(self, savings_factory):
        with pytest.raises(ValueError):
            record_contribution(savings_factory(), -10.0)
