"""Calendar arithmetic for recurring cadences."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, timedelta

from ..domain.accounts import Cadence

_DAY_STEPS = {
    Cadence.WEEKLY: 7,
    Cadence.BIWEEKLY: 14,
}


def add_months(value: date, months: int, *, anchor_day: int | None = None) -> date:
    """Return ``value`` moved by ``months`` calendar months.

    The day of month is ``anchor_day`` (or ``value.day``) clamped to the
    length of the target month, so Jan 31 + 1 month is Feb 28/29.
    """

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(anchor_day or value.day, monthrange(year, month)[1])
    return date(year, month, day)


def advance(value: date, cadence: Cadence, *, anchor_day: int | None = None) -> date:
    """Return the date one ``cadence`` period after ``value``.

    ``anchor_day`` only affects monthly cadences. Passing the rule's start
    day keeps a Jan 31 schedule on Feb 28 -> Mar 31 instead of drifting to
    the 28th after the first short month.
    """

    cadence = Cadence(cadence)
    if cadence is Cadence.MONTHLY:
        return add_months(value, 1, anchor_day=anchor_day)
    return value + timedelta(days=_DAY_STEPS[cadence])


__all__ = ["add_months", "advance"]
