"""Typed domain objects consumed by the projection engine."""

from .accounts import (
    AccountKind,
    Cadence,
    DebtAccount,
    EntrySource,
    LedgerEntry,
    Occurrence,
    Portfolio,
    RecurringRule,
    SavingsGoal,
)

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
