"""Raw recurring-rule schema."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from ..domain.accounts import Cadence, RecurringRule
from .fields import coerce_amount, coerce_date


class RecurringRecord(SQLModel):
    """Recurring payment/contribution as stored in a snapshot.

    Malformed values never fail validation: an unknown ``freq`` or an
    unparseable ``startDate`` leaves the rule inert rather than raising.
    """

    amount: float = 0.0
    cadence: Optional[Cadence] = Field(default=None, alias="freq")
    start_date: Optional[date] = Field(default=None, alias="startDate")
    enabled: bool = False
    last_applied: Optional[date] = Field(default=None, alias="lastApplied")

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("cadence", mode="before")
    @classmethod
    def _cadence(cls, value: Any) -> Optional[str]:
        if isinstance(value, Cadence):
            return value.value
        text = str(value or "").strip().lower()
        return text if text in {c.value for c in Cadence} else None

    @field_validator("start_date", "last_applied", mode="before")
    @classmethod
    def _dates(cls, value: Any) -> Optional[date]:
        return coerce_date(value)

    @field_validator("enabled", mode="before")
    @classmethod
    def _enabled(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    def to_domain(self) -> RecurringRule:
        return RecurringRule(
            amount=self.amount,
            cadence=self.cadence,
            start_date=self.start_date,
            enabled=self.enabled,
            last_applied=self.last_applied,
        )

    @classmethod
    def from_domain(cls, rule: RecurringRule) -> "RecurringRecord":
        return cls.model_validate(
            {
                "amount": rule.amount,
                "freq": rule.cadence,
                "startDate": rule.start_date,
                "enabled": rule.enabled,
                "lastApplied": rule.last_applied,
            }
        )
