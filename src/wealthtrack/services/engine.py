"""One engine pass: catch up recurring rules, then project payoff."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..domain.accounts import Occurrence, Portfolio
from ..logging_config import get_logger
from .debts import StrategyComparison, compare
from .recurrence import apply_due

logger = get_logger(__name__)


@dataclass(slots=True)
class CatchUpResult:
    """Portfolio after catch-up plus every occurrence that was posted."""

    portfolio: Portfolio
    occurrences: list[Occurrence] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.occurrences)


@dataclass(slots=True)
class EngineReport:
    catch_up: CatchUpResult
    comparison: Optional[StrategyComparison] = None


def catch_up(portfolio: Portfolio, *, now: date | datetime) -> CatchUpResult:
    """Apply due occurrences for every debt and savings goal in ``portfolio``.

    Accounts without due occurrences are carried over as the same objects;
    the input portfolio itself is left untouched.
    """

    occurrences: list[Occurrence] = []
    debts = []
    for debt in portfolio.debts:
        outcome = apply_due(debt.rule, debt, now=now)
        debts.append(outcome.account)
        occurrences.extend(outcome.occurrences)

    savings = []
    for goal in portfolio.savings:
        outcome = apply_due(goal.rule, goal, now=now)
        savings.append(outcome.account)
        occurrences.extend(outcome.occurrences)

    if occurrences:
        logger.info(
            "Recurring catch-up applied",
            extra={
                "occurrences": len(occurrences),
                "accounts": len({item.account_id for item in occurrences}),
            },
        )
    return CatchUpResult(
        portfolio=Portfolio(debts=debts, savings=savings), occurrences=occurrences
    )


def run(
    portfolio: Portfolio,
    *,
    now: date | datetime,
    monthly_budget: float | None = None,
) -> EngineReport:
    """Bring ``portfolio`` up to ``now`` and, given a budget, compare payoff strategies."""

    caught_up = catch_up(portfolio, now=now)
    if monthly_budget is None:
        return EngineReport(catch_up=caught_up)

    today = now.date() if isinstance(now, datetime) else now
    comparison = compare(caught_up.portfolio.debts, monthly_budget, today=today)
    return EngineReport(catch_up=caught_up, comparison=comparison)


__all__ = ["CatchUpResult", "EngineReport", "catch_up", "run"]
