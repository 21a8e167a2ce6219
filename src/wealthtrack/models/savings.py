"""Raw savings goal schema."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional
from uuid import uuid4

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from ..domain.accounts import SavingsGoal
from .fields import coerce_amount, coerce_text
from .ledger import LedgerRecord
from .recurring import RecurringRecord


class SavingsRecord(SQLModel):
    """Savings goal as stored in a snapshot: ``{id, name, target, balance, history, ...}``."""

    id: Optional[str] = None
    name: str = ""
    target: float = 0.0
    balance: float = 0.0
    history: list[LedgerRecord] = Field(default_factory=list)
    recurring: Optional[RecurringRecord] = None

    @field_validator("id", "name", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("target", "balance", mode="before")
    @classmethod
    def _amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("history", mode="before")
    @classmethod
    def _history(cls, value: Any) -> list:
        return value if isinstance(value, list) else []

    def to_domain(self, *, today: date | None = None) -> SavingsGoal:
        fallback = today or date.today()
        return SavingsGoal(
            id=self.id or uuid4().hex,
            name=self.name,
            target_amount=self.target,
            current_balance=self.balance,
            rule=self.recurring.to_domain() if self.recurring else None,
            history=[entry.to_domain(fallback_date=fallback) for entry in self.history],
        )

    @classmethod
    def from_domain(cls, goal: SavingsGoal) -> "SavingsRecord":
        return cls.model_validate(
            {
                "id": goal.id,
                "name": goal.name,
                "target": goal.target_amount,
                "balance": goal.current_balance,
                "history": [LedgerRecord.from_domain(entry) for entry in goal.history],
                "recurring": RecurringRecord.from_domain(goal.rule) if goal.rule else None,
            }
        )
