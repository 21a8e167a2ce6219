"""Catch-up scheduling for recurring debt payments and savings contributions."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Iterator, Optional, Union

from ..domain.accounts import (
    DebtAccount,
    EntrySource,
    LedgerEntry,
    Occurrence,
    RecurringRule,
    SavingsGoal,
)
from ..logging_config import get_logger
from .cadence import advance

logger = get_logger(__name__)

RECURRING_NOTE = "Recurring"

Account = Union[DebtAccount, SavingsGoal]


@dataclass(slots=True)
class RecurrenceOutcome:
    """Result of :func:`apply_due` for a single account."""

    rule: Optional[RecurringRule]
    account: Account
    occurrences: list[Occurrence] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.occurrences)


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _step(rule: RecurringRule, value: date) -> date:
    # Monthly rules stay anchored to the start day so short months do not drift the schedule.
    return advance(value, rule.cadence, anchor_day=rule.start_date.day)


def first_pending(rule: RecurringRule) -> date:
    """Return the earliest occurrence not yet applied for ``rule``."""

    if rule.last_applied is None:
        return rule.start_date
    return _step(rule, rule.last_applied)


def iter_occurrences(rule: RecurringRule) -> Iterator[date]:
    """Yield the rule's occurrence dates from ``start_date`` onwards, forever."""

    if rule.cadence is None or rule.start_date is None:
        return
    current = rule.start_date
    while True:
        yield current
        current = _step(rule, current)


def next_due_from(rule: RecurringRule, from_date: date | datetime) -> date | None:
    """Return the first occurrence on or after ``from_date`` (None for malformed rules)."""

    target = _as_date(from_date)
    for occurrence in iter_occurrences(rule):
        if occurrence >= target:
            return occurrence
    return None


def occurrences_between(
    rule: RecurringRule, start: date | datetime, end: date | datetime
) -> list[date]:
    """Return every occurrence falling inside the inclusive ``[start, end]`` window."""

    lower, upper = _as_date(start), _as_date(end)
    dates: list[date] = []
    for occurrence in iter_occurrences(rule):
        if occurrence > upper:
            break
        if occurrence >= lower:
            dates.append(occurrence)
    return dates


def apply_due(
    rule: Optional[RecurringRule], account: Account, *, now: date | datetime
) -> RecurrenceOutcome:
    """Apply every occurrence of ``rule`` that fell due up to ``now``.

    Neither ``rule`` nor ``account`` is mutated. The returned outcome holds
    a copy of the rule with the advanced ``last_applied`` cursor and a copy
    of the account (carrying that rule) with the new balance and history.
    Disabled or malformed rules are a silent no-op, as is a debt that has
    already been paid off. Calling again with the same ``now`` applies
    nothing.
    """

    if rule is None or not rule.is_actionable:
        return RecurrenceOutcome(rule=rule, account=account)

    today = _as_date(now)
    is_debt = isinstance(account, DebtAccount)
    total = account.paid_to_date if is_debt else account.current_balance
    history = list(account.history)
    occurrences: list[Occurrence] = []
    last_applied = rule.last_applied
    cursor = first_pending(rule)

    while cursor <= today:
        if is_debt:
            remaining = max(0.0, account.principal - total)
            if remaining <= 0:
                break
            amount = min(rule.amount, remaining)
            # Land exactly on the principal so float residue cannot trigger another posting.
            total = account.principal if amount == remaining else total + amount
        else:
            amount = rule.amount
            total += amount

        history.append(
            LedgerEntry(
                amount=amount,
                occurred_on=cursor,
                note=RECURRING_NOTE,
                source=EntrySource.RECURRING,
            )
        )
        occurrences.append(Occurrence(account_id=account.id, due_on=cursor, amount=amount))
        last_applied = cursor
        cursor = _step(rule, cursor)

    if not occurrences:
        return RecurrenceOutcome(rule=rule, account=account)

    updated_rule = replace(rule, last_applied=last_applied)
    if is_debt:
        updated = replace(account, paid_to_date=total, history=history, rule=updated_rule)
    else:
        updated = replace(account, current_balance=total, history=history, rule=updated_rule)

    logger.info(
        "Applied recurring occurrences",
        extra={
            "account_id": account.id,
            "occurrences": len(occurrences),
            "last_applied": last_applied.isoformat(),
        },
    )
    return RecurrenceOutcome(rule=updated_rule, account=updated, occurrences=occurrences)


__all__ = [
    "RECURRING_NOTE",
    "RecurrenceOutcome",
    "apply_due",
    "first_pending",
    "iter_occurrences",
    "next_due_from",
    "occurrences_between",
]
