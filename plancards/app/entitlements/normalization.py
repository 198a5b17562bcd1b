"""Normalization helpers for loosely-typed subscription fields."""
from __future__ import annotations

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import TypeAdapter

_PLAN_SUFFIX = " plan"
_DATETIME_ADAPTER = TypeAdapter(datetime)

CANCELLED_STATUS = "cancelled"


class PlanToken(str, Enum):
    """Closed set of recognized normalized plan labels."""

    PREMIUM = "premium"
    PENDING = "pending"
    SCHEDULED_CANCEL = "scheduled cancel"
    UNRECOGNIZED = "unrecognized"


_PLAN_TOKENS: Dict[str, PlanToken] = {
    PlanToken.PREMIUM.value: PlanToken.PREMIUM,
    PlanToken.PENDING.value: PlanToken.PENDING,
    PlanToken.SCHEDULED_CANCEL.value: PlanToken.SCHEDULED_CANCEL,
}


def normalize_plan_label(label: Optional[str]) -> str:
    """Return the canonical comparison form of a raw plan label.

    The label is trimmed and lower-cased, every ``" plan"`` occurrence is
    removed, and the result is trimmed again. Removal repeats until nothing
    is left to strip, so normalizing an already-normalized label is a no-op.
    """

    normalized = str(label or "").strip().lower()
    while _PLAN_SUFFIX in normalized:
        normalized = normalized.replace(_PLAN_SUFFIX, "")
    return normalized.strip()


def classify_plan(normalized_plan: str) -> PlanToken:
    """Map a normalized plan label onto a recognized token."""

    return _PLAN_TOKENS.get(normalized_plan, PlanToken.UNRECOGNIZED)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a loosely-typed timestamp, returning ``None`` when it is unusable.

    Accepts datetimes, dates (midnight UTC), ISO-8601 strings and epoch
    milliseconds (the unit JavaScript's ``Date`` uses, so ``1800000000`` is
    in January 1970). Missing, empty or unparseable values yield ``None``
    instead of raising.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    try:
        parsed = _DATETIME_ADAPTER.validate_python(value)
    except (ValueError, OverflowError):
        return None
    return ensure_utc(parsed)
