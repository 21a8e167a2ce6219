"""Service module exports."""

from . import cadence, debts, engine, ledger, recurrence, reminders

__all__ = [
    "cadence",
    "debts",
    "engine",
    "ledger",
    "recurrence",
    "reminders",
]
