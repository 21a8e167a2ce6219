"""Raw payment/contribution history entry schema."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from ..domain.accounts import EntrySource, LedgerEntry
from .fields import coerce_amount, coerce_date, coerce_text

# Entries written before the source field existed are tagged by note only.
_LEGACY_RECURRING_NOTE = "recurring"


class LedgerRecord(SQLModel):
    id: Optional[str] = None
    amount: float = 0.0
    occurred_on: Optional[date] = Field(default=None, alias="date")
    note: str = ""
    source: Optional[EntrySource] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value: Any) -> Optional[str]:
        return coerce_text(value) or None

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("occurred_on", mode="before")
    @classmethod
    def _occurred_on(cls, value: Any) -> Optional[date]:
        return coerce_date(value)

    @field_validator("note", mode="before")
    @classmethod
    def _note(cls, value: Any) -> str:
        return coerce_text(value)

    @field_validator("source", mode="before")
    @classmethod
    def _source(cls, value: Any) -> Optional[str]:
        if isinstance(value, EntrySource):
            return value.value
        text = coerce_text(value).lower()
        return text if text in {s.value for s in EntrySource} else None

    def to_domain(self, *, fallback_date: date) -> LedgerEntry:
        source = self.source
        if source is None:
            is_recurring = self.note.lower() == _LEGACY_RECURRING_NOTE
            source = EntrySource.RECURRING if is_recurring else EntrySource.MANUAL
        entry = LedgerEntry(
            amount=self.amount,
            occurred_on=self.occurred_on or fallback_date,
            note=self.note,
            source=source,
        )
        if self.id:
            entry.id = self.id
        return entry

    @classmethod
    def from_domain(cls, entry: LedgerEntry) -> "LedgerRecord":
        return cls.model_validate(
            {
                "id": entry.id,
                "amount": entry.amount,
                "date": entry.occurred_on,
                "note": entry.note,
                "source": entry.source,
            }
        )
