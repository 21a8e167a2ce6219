"""Manual debt payments and savings contributions."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from ..domain.accounts import DebtAccount, EntrySource, LedgerEntry, SavingsGoal


def _check_amount(amount: float) -> float:
    if amount < 0:
        raise ValueError("Payment amounts must be non-negative.")
    return float(amount)


def record_debt_payment(
    debt: DebtAccount, amount: float, *, note: str = "", on: date | None = None
) -> DebtAccount:
    """Return ``debt`` with a manual payment applied.

    The payment is capped at the remaining balance so ``paid_to_date`` never
    exceeds the principal; the history records the amount actually applied.
    """

    applied = min(_check_amount(amount), debt.remaining_balance)
    if applied <= 0:
        return debt
    paid = debt.principal if applied == debt.remaining_balance else debt.paid_to_date + applied
    entry = LedgerEntry(
        amount=applied,
        occurred_on=on or date.today(),
        note=note,
        source=EntrySource.MANUAL,
    )
    return replace(debt, paid_to_date=paid, history=[*debt.history, entry])


def record_contribution(
    goal: SavingsGoal, amount: float, *, note: str = "", on: date | None = None
) -> SavingsGoal:
    """Return ``goal`` with a manual contribution added."""

    applied = _check_amount(amount)
    if applied == 0:
        return goal
    entry = LedgerEntry(
        amount=applied,
        occurred_on=on or date.today(),
        note=note,
        source=EntrySource.MANUAL,
    )
    return replace(
        goal, current_balance=goal.current_balance + applied, history=[*goal.history, entry]
    )


__all__ = ["record_contribution", "record_debt_payment"]
