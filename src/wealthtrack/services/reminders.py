"""Upcoming-occurrence reminders and dashboard insights."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Optional

from ..domain.accounts import AccountKind, DebtAccount, Portfolio, RecurringRule
from .recurrence import next_due_from


@dataclass(slots=True)
class Reminder:
    """A scheduled payment or contribution coming up."""

    kind: AccountKind
    account_id: str
    name: str
    amount: float
    due_on: date


@dataclass(slots=True)
class PortfolioTotals:
    liabilities: float
    savings: float

    @property
    def net_position(self) -> float:
        return self.savings - self.liabilities


@dataclass(slots=True)
class Insights:
    """Headline figures shown above the dashboard tabs."""

    focus_debt: Optional[DebtAccount]
    next_due: Optional[Reminder]
    totals: PortfolioTotals


def portfolio_totals(portfolio: Portfolio) -> PortfolioTotals:
    """Sum remaining debt balances and savings balances."""

    return PortfolioTotals(
        liabilities=sum(debt.remaining_balance for debt in portfolio.debts),
        savings=sum(goal.current_balance for goal in portfolio.savings),
    )


def _scheduled(portfolio: Portfolio) -> Iterator[tuple[AccountKind, str, str, RecurringRule]]:
    for debt in portfolio.debts:
        # Paid-off debts no longer receive automatic payments.
        if debt.rule is not None and not debt.is_paid_off:
            yield AccountKind.DEBT, debt.id, debt.name, debt.rule
    for goal in portfolio.savings:
        if goal.rule is not None:
            yield AccountKind.SAVINGS, goal.id, goal.name, goal.rule


def _next_reminders(portfolio: Portfolio, today: date) -> list[Reminder]:
    reminders = []
    for kind, account_id, name, rule in _scheduled(portfolio):
        if not rule.is_actionable:
            continue
        due = next_due_from(rule, today)
        if due is None:
            continue
        reminders.append(
            Reminder(kind=kind, account_id=account_id, name=name, amount=rule.amount, due_on=due)
        )
    reminders.sort(key=lambda item: item.due_on)
    return reminders


def upcoming_reminders(
    portfolio: Portfolio, *, today: date | None = None, window_days: int = 30
) -> list[Reminder]:
    """Return the next occurrence of every active rule due within ``window_days``."""

    today = today or date.today()
    horizon = today + timedelta(days=window_days)
    return [item for item in _next_reminders(portfolio, today) if item.due_on <= horizon]


def focus_debt(portfolio: Portfolio) -> Optional[DebtAccount]:
    """Highest-APR debt still carrying a balance; ties keep portfolio order."""

    open_debts = [debt for debt in portfolio.debts if not debt.is_paid_off]
    if not open_debts:
        return None
    return sorted(open_debts, key=lambda debt: -debt.apr)[0]


def insights(portfolio: Portfolio, *, today: date | None = None) -> Insights:
    today = today or date.today()
    upcoming = _next_reminders(portfolio, today)
    return Insights(
        focus_debt=focus_debt(portfolio),
        next_due=upcoming[0] if upcoming else None,
        totals=portfolio_totals(portfolio),
    )


__all__ = [
    "Insights",
    "PortfolioTotals",
    "Reminder",
    "focus_debt",
    "insights",
    "portfolio_totals",
    "upcoming_reminders",
]
