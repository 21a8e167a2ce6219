"""Raw debt schema."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional
from uuid import uuid4

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from ..domain.accounts import DebtAccount
from .fields import coerce_amount, coerce_text
from .ledger import LedgerRecord
from .recurring import RecurringRecord


class DebtRecord(SQLModel):
    """Debt as stored in a snapshot: ``{id, name, amount, paid, apr, minPayment, ...}``."""

    id: Optional[str] = None
    name: str = ""
    amount: float = 0.0
    paid: float = 0.0
    apr: float = 0.0
    min_payment: float = Field(default=0.0, alias="minPayment")
    payments: list[LedgerRecord] = Field(default_factory=list)
    recurring: Optional[RecurringRecord] = None

    @field_validator("id", "name", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("amount", "paid", "apr", "min_payment", mode="before")
    @classmethod
    def _amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("payments", mode="before")
    @classmethod
    def _payments(cls, value: Any) -> list:
        return value if isinstance(value, list) else []

    def to_domain(self, *, today: date | None = None) -> DebtAccount:
        fallback = today or date.today()
        return DebtAccount(
            id=self.id or uuid4().hex,
            name=self.name,
            principal=self.amount,
            paid_to_date=min(self.paid, self.amount),
            apr=self.apr,
            minimum_payment=self.min_payment,
            rule=self.recurring.to_domain() if self.recurring else None,
            history=[entry.to_domain(fallback_date=fallback) for entry in self.payments],
        )

    @classmethod
    def from_domain(cls, debt: DebtAccount) -> "DebtRecord":
        return cls.model_validate(
            {
                "id": debt.id,
                "name": debt.name,
                "amount": debt.principal,
                "paid": debt.paid_to_date,
                "apr": debt.apr,
                "minPayment": debt.minimum_payment,
                "payments": [LedgerRecord.from_domain(entry) for entry in debt.history],
                "recurring": RecurringRecord.from_domain(debt.rule) if debt.rule else None,
            }
        )
