"""Debt payoff simulation (snowball and avalanche)."""

from __future__ import annotations

import math
from copy import deepcopy
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Iterable, Sequence

from ..domain.accounts import DebtAccount
from ..logging_config import get_logger
from .cadence import add_months

logger = get_logger(__name__)

# Hard ceiling of 100 years keeps a pathological plan from stalling the caller.
MAX_SIMULATION_MONTHS = 1200
# Sub-cent residue counts as paid off.
PAID_OFF_THRESHOLD = 0.01

BUDGET_BELOW_MINIMUMS = "budget_below_minimums"
NON_CONVERGENT = "non_convergent"


@dataclass(slots=True)
class _SimDebt:
    """Mutable working copy of a debt for one simulation run."""

    id: str
    balance: float
    apr: float
    minimum_payment: float


def _smallest_balance_first(debt: _SimDebt) -> float:
    return debt.balance


def _highest_apr_first(debt: _SimDebt) -> float:
    return -debt.apr


class PayoffStrategy(str, Enum):
    """How surplus budget is ordered across debts each month."""

    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"

    @classmethod
    def parse(cls, value: "PayoffStrategy | str") -> "PayoffStrategy":
        """Return the strategy named by ``value`` or raise ``ValueError``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Invalid debt payoff strategy: {value!r}.") from None

    @property
    def sort_key(self) -> Callable[[_SimDebt], float]:
        return _SORT_KEYS[self]


_SORT_KEYS: dict[PayoffStrategy, Callable[[_SimDebt], float]] = {
    PayoffStrategy.SNOWBALL: _smallest_balance_first,
    PayoffStrategy.AVALANCHE: _highest_apr_first,
}


@dataclass(slots=True)
class PayoffSnapshot:
    """Aggregate balance after one simulated month."""

    month: int
    total_balance: float


@dataclass(slots=True)
class PayoffResult:
    """Outcome of a payoff simulation.

    Failed results only carry ``error`` and ``error_code``; the projection
    fields keep their empty defaults.
    """

    ok: bool
    strategy: PayoffStrategy
    months: int = 0
    total_interest_paid: float = 0.0
    snapshots: list[PayoffSnapshot] = field(default_factory=list)
    payoff_date: date | None = None
    order: list[str] = field(default_factory=list)
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def failure(cls, strategy: PayoffStrategy, *, code: str, message: str) -> "PayoffResult":
        return cls(ok=False, strategy=strategy, error=message, error_code=code)


@dataclass(slots=True)
class StrategyComparison:
    """Snowball and avalanche results computed over the same debts."""

    snowball: PayoffResult
    avalanche: PayoffResult

    @property
    def interest_difference(self) -> float | None:
        """Interest the avalanche plan saves over snowball (None if either failed)."""

        if not (self.snowball.ok and self.avalanche.ok):
            return None
        return round(self.snowball.total_interest_paid - self.avalanche.total_interest_paid, 2)


def _working_copies(debts: Iterable[DebtAccount]) -> list[_SimDebt]:
    """Clone debts with an outstanding balance into simulation rows."""

    rows = [
        _SimDebt(
            id=debt.id,
            balance=debt.remaining_balance,
            apr=max(debt.apr, 0.0),
            minimum_payment=max(debt.minimum_payment, 0.0),
        )
        for debt in debts
    ]
    return [row for row in rows if row.balance > 0]


def _monthly_rate(apr: float) -> float:
    return apr / 100.0 / 12.0


def _total_balance(rows: Sequence[_SimDebt]) -> float:
    return sum(row.balance for row in rows)


def _simulate_month(
    rows: list[_SimDebt], *, monthly_budget: float, strategy: PayoffStrategy
) -> float:
    """Advance every row by one month and return the interest accrued."""

    # Interest accrues before any payment, including on debts cleared this month.
    interest_total = 0.0
    for row in rows:
        if row.balance > 0:
            interest = row.balance * _monthly_rate(row.apr)
            row.balance += interest
            interest_total += interest

    # Minimums come first, in input order.
    budget = monthly_budget
    for row in rows:
        payment = min(row.minimum_payment, row.balance, budget)
        row.balance -= payment
        budget -= payment

    # Surplus follows the strategy; sorted() is stable so ties keep input order.
    open_rows = [row for row in rows if row.balance > PAID_OFF_THRESHOLD]
    for row in sorted(open_rows, key=strategy.sort_key):
        if budget <= 0:
            break
        payment = min(row.balance, budget)
        row.balance -= payment
        budget -= payment

    for row in rows:
        if row.balance <= PAID_OFF_THRESHOLD:
            row.balance = 0.0
    return interest_total


def simulate(
    debts: Iterable[DebtAccount],
    monthly_budget: float,
    strategy: PayoffStrategy | str = PayoffStrategy.SNOWBALL,
    *,
    today: date | None = None,
) -> PayoffResult:
    """Project month-by-month payoff of ``debts`` under ``monthly_budget``.

    Each month interest accrues on every open balance, minimum payments are
    taken from the budget in input order, and whatever remains is spent on
    open debts in strategy order. The caller's debts are never modified.

    Returns a failed result (never raises) when the budget cannot cover the
    minimums or cannot outrun interest within ``MAX_SIMULATION_MONTHS``.
    """

    strategy = PayoffStrategy.parse(strategy)
    start = today or date.today()
    rows = _working_copies(debts)

    total_minimums = sum(row.minimum_payment for row in rows)
    # NaN compares false against everything, so it is rejected explicitly.
    if not math.isfinite(monthly_budget) or monthly_budget < total_minimums:
        logger.warning(
            "Payoff budget below total minimums",
            extra={"budget": monthly_budget, "total_minimums": total_minimums},
        )
        return PayoffResult.failure(
            strategy,
            code=BUDGET_BELOW_MINIMUMS,
            message=(
                f"budget below total minimums: monthly budget ({monthly_budget:.2f}) "
                f"is below total minimums ({total_minimums:.2f})"
            ),
        )

    if not rows:
        return PayoffResult(ok=True, strategy=strategy, payoff_date=start)

    first_month_interest = sum(row.balance * _monthly_rate(row.apr) for row in rows)
    if monthly_budget <= first_month_interest:
        logger.warning(
            "Payoff budget does not cover monthly interest",
            extra={"budget": monthly_budget, "monthly_interest": first_month_interest},
        )
        return PayoffResult.failure(
            strategy,
            code=NON_CONVERGENT,
            message=(
                f"non-convergent: monthly budget ({monthly_budget:.2f}) does not exceed "
                f"monthly interest ({first_month_interest:.2f})"
            ),
        )

    snapshots: list[PayoffSnapshot] = []
    order: list[str] = []
    total_interest = 0.0
    month = 0

    while any(row.balance > PAID_OFF_THRESHOLD for row in rows) and month < MAX_SIMULATION_MONTHS:
        month += 1
        total_interest += _simulate_month(rows, monthly_budget=monthly_budget, strategy=strategy)
        for row in rows:
            if row.balance == 0 and row.id not in order:
                order.append(row.id)
        snapshots.append(PayoffSnapshot(month=month, total_balance=_total_balance(rows)))

    if any(row.balance > PAID_OFF_THRESHOLD for row in rows):
        logger.warning(
            "Payoff simulation hit iteration cap",
            extra={"strategy": strategy.value, "months": month},
        )
        return PayoffResult.failure(
            strategy,
            code=NON_CONVERGENT,
            message=f"non-convergent: debts not paid off within {MAX_SIMULATION_MONTHS} months",
        )

    result = PayoffResult(
        ok=True,
        strategy=strategy,
        months=month,
        total_interest_paid=round(total_interest, 2),
        snapshots=snapshots,
        payoff_date=add_months(start, month),
        order=order,
    )
    logger.debug(
        "Payoff simulation complete",
        extra={
            "strategy": strategy.value,
            "months": result.months,
            "total_interest": result.total_interest_paid,
        },
    )
    return result


def compare(
    debts: Sequence[DebtAccount], monthly_budget: float, *, today: date | None = None
) -> StrategyComparison:
    """Run both strategies over independent copies of ``debts``."""

    return StrategyComparison(
        snowball=simulate(deepcopy(list(debts)), monthly_budget, PayoffStrategy.SNOWBALL, today=today),
        avalanche=simulate(
            deepcopy(list(debts)), monthly_budget, PayoffStrategy.AVALANCHE, today=today
        ),
    )


__all__ = [
    "BUDGET_BELOW_MINIMUMS",
    "MAX_SIMULATION_MONTHS",
    "NON_CONVERGENT",
    "PAID_OFF_THRESHOLD",
    "PayoffResult",
    "PayoffSnapshot",
    "PayoffStrategy",
    "StrategyComparison",
    "compare",
    "simulate",
]
