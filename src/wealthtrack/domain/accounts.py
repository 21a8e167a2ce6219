"""Debt, savings and recurring-rule value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional
from uuid import uuid4


class Cadence(str, Enum):
    """Repeating interval of a recurring rule."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class EntrySource(str, Enum):
    """Origin of a history entry."""

    MANUAL = "manual"
    RECURRING = "recurring"


class AccountKind(str, Enum):
    DEBT = "debt"
    SAVINGS = "savings"


def _new_id() -> str:
    return uuid4().hex


@dataclass(slots=True)
class RecurringRule:
    """Automatic payment or contribution attached to an account.

    ``last_applied`` is the cursor of the most recent occurrence already
    posted. Only the recurrence scheduler moves it.
    """

    amount: float
    cadence: Optional[Cadence]
    start_date: Optional[date]
    enabled: bool = True
    last_applied: Optional[date] = None

    @property
    def is_actionable(self) -> bool:
        """Return True when the rule is enabled and fully specified."""

        return (
            self.enabled
            and self.amount > 0
            and self.cadence is not None
            and self.start_date is not None
        )


@dataclass(slots=True)
class LedgerEntry:
    """One line of a payment or contribution history."""

    amount: float
    occurred_on: date
    note: str = ""
    source: EntrySource = EntrySource.MANUAL
    id: str = field(default_factory=_new_id)


@dataclass(slots=True)
class DebtAccount:
    """A debt being paid down, either manually or by a recurring rule."""

    id: str
    name: str
    principal: float
    paid_to_date: float = 0.0
    apr: float = 0.0
    minimum_payment: float = 0.0
    rule: Optional[RecurringRule] = None
    history: list[LedgerEntry] = field(default_factory=list)

    @property
    def remaining_balance(self) -> float:
        return max(0.0, self.principal - self.paid_to_date)

    @property
    def is_paid_off(self) -> bool:
        return self.remaining_balance == 0

    @property
    def progress(self) -> float:
        """Fraction of the principal paid so far (0..1)."""

        if self.principal <= 0:
            return 0.0
        return min(self.paid_to_date / self.principal, 1.0)


@dataclass(slots=True)
class SavingsGoal:
    """A savings target funded by contributions."""

    id: str
    name: str
    target_amount: float = 0.0
    current_balance: float = 0.0
    rule: Optional[RecurringRule] = None
    history: list[LedgerEntry] = field(default_factory=list)

    @property
    def progress(self) -> float:
        # Contributions are not capped by the target, so progress may exceed 1.
        if self.target_amount <= 0:
            return 0.0
        return self.current_balance / self.target_amount


@dataclass(slots=True)
class Occurrence:
    """A recurring rule instance that was due and has been applied."""

    account_id: str
    due_on: date
    amount: float


@dataclass(slots=True)
class Portfolio:
    """Snapshot of the accounts the engine advances and projects."""

    debts: list[DebtAccount] = field(default_factory=list)
    savings: list[SavingsGoal] = field(default_factory=list)


__all__ = [
    "AccountKind",
    "Cadence",
    "DebtAccount",
    "EntrySource",
    "LedgerEntry",
    "Occurrence",
    "Portfolio",
    "RecurringRule",
    "SavingsGoal",
]
