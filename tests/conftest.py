"""Pytest configuration and shared fixtures for WealthTrack engine tests.

Factories build domain objects with sensible defaults so each test only
spells out the fields it is actually about.
"""

from __future__ import annotations

from datetime import date

import pytest

from wealthtrack.domain.accounts import (
    Cadence,
    DebtAccount,
    Portfolio,
    RecurringRule,
    SavingsGoal,
)

# =============================================================================
# Domain Factories
# =============================================================================


@pytest.fixture
def rule_factory():
    """Factory for recurring rules.

    Returns:
        Callable: Function that creates RecurringRule instances
    """

    def _create_rule(
        amount: float = 100.0,
        cadence: Cadence | None = Cadence.MONTHLY,
        start_date: date | None = date(2025, 1, 15),
        enabled: bool = True,
        last_applied: date | None = None,
    ) -> RecurringRule:
        return RecurringRule(
            amount=amount,
            cadence=cadence,
            start_date=start_date,
            enabled=enabled,
            last_applied=last_applied,
        )

    return _create_rule


@pytest.fixture
def debt_factory():
    """Factory for debts.

    Returns:
        Callable: Function that creates DebtAccount instances
    """
    counter = {"n": 0}

    def _create_debt(
        principal: float = 1000.0,
        paid_to_date: float = 0.0,
        apr: float = 18.0,
        minimum_payment: float = 25.0,
        rule: RecurringRule | None = None,
        id: str | None = None,
        name: str | None = None,
    ) -> DebtAccount:
        """Create a debt with sensible defaults.

        Args:
            principal: Original amount owed
            paid_to_date: Amount already paid
            apr: Annual percentage rate (e.g., 18.0 for 18%)
            minimum_payment: Minimum monthly payment
            rule: Optional recurring payment rule

        Returns:
            DebtAccount: New debt instance
        """
        counter["n"] += 1
        return DebtAccount(
            id=id or f"debt-{counter['n']}",
            name=name or f"Debt {counter['n']}",
            principal=principal,
            paid_to_date=paid_to_date,
            apr=apr,
            minimum_payment=minimum_payment,
            rule=rule,
        )

    return _create_debt


@pytest.fixture
def savings_factory():
    """Factory for savings goals.

    Returns:
        Callable: Function that creates SavingsGoal instances
    """
    counter = {"n": 0}

    def _create_goal(
        target_amount: float = 5000.0,
        current_balance: float = 0.0,
        rule: RecurringRule | None = None,
        id: str | None = None,
        name: str | None = None,
    ) -> SavingsGoal:
        counter["n"] += 1
        return SavingsGoal(
            id=id or f"goal-{counter['n']}",
            name=name or f"Goal {counter['n']}",
            target_amount=target_amount,
            current_balance=current_balance,
            rule=rule,
        )

    return _create_goal


@pytest.fixture
def sample_portfolio(debt_factory, savings_factory, rule_factory) -> Portfolio:
    """Two debts and one savings goal, each with a weekly or monthly rule."""

    return Portfolio(
        debts=[
            debt_factory(
                id="card",
                name="Credit Card",
                principal=1200.0,
                apr=24.0,
                minimum_payment=50.0,
                rule=rule_factory(amount=200.0, start_date=date(2025, 1, 1)),
            ),
            debt_factory(
                id="car",
                name="Car Loan",
                principal=8000.0,
                apr=6.0,
                minimum_payment=150.0,
                rule=rule_factory(
                    amount=150.0, cadence=Cadence.BIWEEKLY, start_date=date(2025, 1, 3)
                ),
            ),
        ],
        savings=[
            savings_factory(
                id="emergency",
                name="Emergency Fund",
                rule=rule_factory(amount=25.0, cadence=Cadence.WEEKLY, start_date=date(2025, 1, 6)),
            )
        ],
    )


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
