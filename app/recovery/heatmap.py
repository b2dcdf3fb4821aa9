"""
Heatmap intensity mapper for the recovery body map.

The palette has ``B + 1`` colours; colour 0 is reserved as padding and
never assigned, leaving usable buckets ``1..B``::

    fatigue_percent = 100 - readiness_percent
    bucket          = clamp(ceil(fatigue_percent / (100 / B)), 1, B)

Muscles with status ``no-data`` are filtered out before mapping; they
get no region at all rather than a special bucket.
"""

from __future__ import annotations

import datetime
import logging
import math
import time
from typing import Callable, Iterable, Optional, Sequence

from app.recovery.policy import DEFAULT_POLICY, RecoveryPolicy
from app.recovery.readiness import readiness_for_muscle
from app.schemas.fatigue import MuscleFatigue
from app.schemas.recovery import HeatmapEntry

logger = logging.getLogger(__name__)

HEATMAP_PALETTE: tuple[str, ...] = (
    "#fef2f2",  # padding (reserved)
    "#fee2e2",  # lightest (fresh)
    "#fecdd3",
    "#fca5a5",
    "#f87171",
    "#ef4444",  # most fatigued
)

# Coarse muscle group → body-map regions.
MUSCLE_SLUGS: dict[str, tuple[str, ...]] = {
    "chest": ("chest",),
    "back": ("upper-back", "trapezius", "lower-back"),
    "shoulders": ("deltoids",),
    "biceps": ("biceps",),
    "triceps": ("triceps",),
    "legs": ("quadriceps", "hamstring", "calves"),
    "glutes": ("gluteal",),
    "core": ("abs", "obliques"),
}

SLUG_TO_MUSCLE: dict[str, str] = {
    slug: muscle for muscle, slugs in MUSCLE_SLUGS.items() for slug in slugs
}


def fatigue_to_intensity(readiness_percent: float, palette_size: int = len(HEATMAP_PALETTE)) -> int:
    """Map a readiness percent to a palette bucket in ``[1, palette_size - 1]``."""
    bucket_count = palette_size - 1
    if bucket_count < 1:
        raise ValueError("palette needs at least one colour besides the padding colour")
    fatigue_percent = 100 - readiness_percent
    bucket_size = 100 / bucket_count
    return max(1, min(bucket_count, math.ceil(fatigue_percent / bucket_size)))


def heatmap_input(items: Iterable[MuscleFatigue]) -> list[MuscleFatigue]:
    """Entries eligible for the body map (drops ``no-data``)."""
    return [m for m in items if m.status != "no-data"]


def build_heatmap(
    items: Sequence[MuscleFatigue],
    *,
    palette_size: int = len(HEATMAP_PALETTE),
    now: Optional[datetime.datetime] = None,
    policy: RecoveryPolicy = DEFAULT_POLICY,
) -> list[HeatmapEntry]:
    """One entry per body-map region of every eligible, mapped muscle."""
    entries: list[HeatmapEntry] = []
    for muscle in heatmap_input(items):
        slugs = MUSCLE_SLUGS.get(muscle.muscle_group)
        if not slugs:
            logger.debug("No body-map region for muscle group %r", muscle.muscle_group)
            continue
        readiness = readiness_for_muscle(muscle, use_history=True, now=now, policy=policy)
        intensity = fatigue_to_intensity(readiness.percent, palette_size)
        entries.extend(
            HeatmapEntry(slug=slug, muscle_group=muscle.muscle_group, intensity=intensity)
            for slug in slugs
        )
    return entries


def slug_to_muscle(slug: Optional[str]) -> Optional[str]:
    """Reverse lookup of a pressed region; unknown slugs pass through."""
    if not slug:
        return None
    return SLUG_TO_MUSCLE.get(slug, slug)


# ======================================================================
# Selection debounce
# ======================================================================


class SelectionDebouncer:
    """Drops repeat muscle selections arriving within the debounce window.

    The gesture source sometimes fires the same press several times.  A
    trigger is accepted only if at least ``window_ms`` have passed since
    the last *accepted* trigger.
    """

    def __init__(
        self,
        window_ms: int = DEFAULT_POLICY.selection_debounce_ms,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.window_ms = window_ms
        self._clock = clock
        self._last_accepted: Optional[float] = None

    def accept(self) -> bool:
        now = self._clock()
        if self._last_accepted is not None and (now - self._last_accepted) * 1000 < self.window_ms:
            return False
        self._last_accepted = now
        return True

    def select(self, slug: Optional[str]) -> Optional[str]:
        """Resolve a region press to its muscle group, or ``None`` if debounced."""
        if not self.accept():
            return None
        return slug_to_muscle(slug)
