"""SQLModel schemas for raw portfolio snapshots."""

from .debt import DebtRecord
from .ledger import LedgerRecord
from .portfolio import PortfolioRecord, dump_portfolio, load_portfolio
from .recurring import RecurringRecord
from .savings import SavingsRecord

__all__ = [
    "DebtRecord",
    "LedgerRecord",
    "PortfolioRecord",
    "RecurringRecord",
    "SavingsRecord",
    "dump_portfolio",
    "load_portfolio",
]
