"""Top-level snapshot schema and JSON helpers."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from ..domain.accounts import Portfolio
from .debt import DebtRecord
from .savings import SavingsRecord


class PortfolioRecord(SQLModel):
    """The ``debts`` and ``savings`` sections of a stored snapshot.

    Other sections (investments, assets, settings) are ignored here and
    preserved by :meth:`merge_into`.
    """

    debts: list[DebtRecord] = Field(default_factory=list)
    savings: list[SavingsRecord] = Field(default_factory=list)

    @field_validator("debts", "savings", mode="before")
    @classmethod
    def _missing_section(cls, value: Any) -> Any:
        # A missing section is empty; a non-list section is left for validation to reject.
        return [] if value is None else value

    def to_domain(self, *, today: date | None = None) -> Portfolio:
        return Portfolio(
            debts=[record.to_domain(today=today) for record in self.debts],
            savings=[record.to_domain(today=today) for record in self.savings],
        )

    @classmethod
    def from_domain(cls, portfolio: Portfolio) -> "PortfolioRecord":
        return cls(
            debts=[DebtRecord.from_domain(debt) for debt in portfolio.debts],
            savings=[SavingsRecord.from_domain(goal) for goal in portfolio.savings],
        )

    def to_snapshot(self) -> dict[str, Any]:
        """Return the JSON-ready snapshot form (camelCase keys)."""

        return self.model_dump(by_alias=True, mode="json")

    def merge_into(self, document: dict[str, Any]) -> dict[str, Any]:
        """Return ``document`` with its debts and savings updated from this record.

        Records are matched to the stored ones by ``id`` (by position when the
        stored record has none). Keys the schema does not model are kept, and
        a stored value the schema could not read is left as written rather than
        replaced with null.
        """

        snapshot = self.to_snapshot()
        merged = dict(document)
        for section in ("debts", "savings"):
            merged[section] = _merge_list(document.get(section), snapshot[section])
        return merged


def _overlay(stored: dict[str, Any], dumped: dict[str, Any]) -> dict[str, Any]:
    result = dict(stored)
    for key, value in dumped.items():
        current = stored.get(key)
        if value is None and current is not None:
            continue
        if isinstance(value, dict) and isinstance(current, dict):
            result[key] = _overlay(current, value)
        elif isinstance(value, list) and isinstance(current, list):
            result[key] = _merge_list(current, value)
        else:
            result[key] = value
    return result


def _merge_list(stored: Any, dumped: list[Any]) -> list[Any]:
    if not isinstance(stored, list):
        return dumped
    by_id = {
        str(item["id"]): item
        for item in stored
        if isinstance(item, dict) and item.get("id") not in (None, "")
    }
    merged = []
    for index, item in enumerate(dumped):
        if not isinstance(item, dict):
            merged.append(item)
            continue
        source = by_id.get(str(item.get("id")))
        if source is None and index < len(stored):
            positional = stored[index]
            if isinstance(positional, dict) and positional.get("id") in (None, ""):
                source = positional
        merged.append(_overlay(source, item) if source is not None else item)
    return merged


def load_portfolio(document: dict[str, Any], *, today: date | None = None) -> Portfolio:
    """Validate a raw snapshot dict and convert it to domain objects."""

    return PortfolioRecord.model_validate(document).to_domain(today=today)


def dump_portfolio(portfolio: Portfolio, *, into: dict[str, Any] | None = None) -> dict[str, Any]:
    record = PortfolioRecord.from_domain(portfolio)
    return record.merge_into(into or {})
