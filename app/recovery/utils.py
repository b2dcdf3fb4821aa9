"""Small numeric helpers shared by the engine modules."""

from __future__ import annotations

import datetime
import math


def clamp(value: float, low: float, high: float) -> float:
    """Clamp *value* into ``[low, high]``."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf (50.5 → 51)."""
    return int(math.floor(value + 0.5))


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def as_aware(value: datetime.datetime) -> datetime.datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value
