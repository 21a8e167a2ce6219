"""Permissive coercion for user-entered snapshot values."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Optional


def coerce_amount(value: Any) -> float:
    """Return a finite, non-negative float; anything unusable becomes 0.

    Strings such as ``"1,234.56"`` are accepted.
    """

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.replace(",", "").replace(" ", "")
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(number, 0.0)


def coerce_date(value: Any) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` or ISO datetime strings; invalid input becomes None."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value) >= 10:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
