"""WealthTrack financial projection engine."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .domain import DebtAccount, Portfolio, RecurringRule, SavingsGoal
from .models import dump_portfolio, load_portfolio
from .services.debts import PayoffStrategy, compare, simulate
from .services.engine import catch_up, run
from .services.recurrence import apply_due

__all__ = [
    "BaseConfig",
    "DebtAccount",
    "DevConfig",
    "PayoffStrategy",
    "Portfolio",
    "RecurringRule",
    "SavingsGoal",
    "apply_due",
    "catch_up",
    "compare",
    "dump_portfolio",
    "load_portfolio",
    "run",
    "simulate",
]
