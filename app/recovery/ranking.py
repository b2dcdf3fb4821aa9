"""
Muscle status ranker — display order and recovery-view summaries.

Ordering
--------
Primary key is status severity::

    high-fatigue 0 · moderate-fatigue 1 · optimal 2 · under-trained 3 · no-data 4

Within ``under-trained`` the least loaded muscle comes first (ascending
score); within every other status the most loaded comes first
(descending score).

Every function treats an empty input as a defined case and returns
``None`` / ``[]`` rather than raising.
"""

from __future__ import annotations

import datetime
from typing import Iterable, Optional, Sequence

from app.core.exceptions import InvalidSnapshotError
from app.recovery.classifier import FATIGUED_STATUSES, FRESH_STATUSES, hint_for_item
from app.recovery.muscles import format_muscle_group
from app.recovery.policy import DEFAULT_POLICY, RecoveryPolicy
from app.recovery.readiness import AVERAGE_READINESS_BANDS, band_for, readiness_for_muscle
from app.recovery.utils import as_aware, round_half_up, utcnow
from app.schemas.fatigue import MuscleFatigue
from app.schemas.readiness import MuscleReadiness

STATUS_ORDER: dict[str, int] = {
    "high-fatigue": 0,
    "moderate-fatigue": 1,
    "optimal": 2,
    "under-trained": 3,
    "no-data": 4,
}

CALIBRATING_LABEL = "Calibrating"
CALIBRATING_COLOR = "#94a3b8"


# ======================================================================
# Ordering
# ======================================================================


def _sort_key(muscle: MuscleFatigue) -> tuple[int, float]:
    score = muscle.fatigue_score
    if muscle.status == "under-trained":
        return STATUS_ORDER[muscle.status], score
    return STATUS_ORDER[muscle.status], -score


def sort_muscles(items: Iterable[MuscleFatigue]) -> list[MuscleFatigue]:
    """Return a new list in display order.  The input is not modified."""
    return sorted(items, key=_sort_key)


def ensure_unique_keys(items: Sequence[MuscleFatigue]) -> None:
    """Raise :class:`InvalidSnapshotError` if a muscle group appears twice."""
    seen: set[str] = set()
    for item in items:
        if item.muscle_group in seen:
            raise InvalidSnapshotError(
                f"Muscle group '{item.muscle_group}' appears more than once in the snapshot"
            )
        seen.add(item.muscle_group)


# ======================================================================
# Readiness pairing
# ======================================================================


def with_readiness(
    items: Iterable[MuscleFatigue],
    policy: RecoveryPolicy = DEFAULT_POLICY,
) -> list[MuscleReadiness]:
    """Pair each entry with its score-based readiness and row hint."""
    return [
        MuscleReadiness(
            muscle=item,
            readiness=readiness_for_muscle(item, policy=policy),
            hint=hint_for_item(item),
        )
        for item in items
    ]


# ======================================================================
# Summaries
# ======================================================================


def weakest_muscle(items: Sequence[MuscleReadiness]) -> Optional[MuscleReadiness]:
    """Entry with the lowest readiness percent (first one on ties)."""
    if not items:
        return None
    return min(items, key=lambda m: m.readiness.percent)


def fatigued_muscles(items: Sequence[MuscleReadiness], limit: int = 3) -> list[MuscleReadiness]:
    """Moderately or highly fatigued entries, least ready first, capped."""
    matches = [m for m in items if m.muscle.status in FATIGUED_STATUSES]
    return sorted(matches, key=lambda m: m.readiness.percent)[:limit]


def freshest_muscles(items: Sequence[MuscleReadiness], limit: int = 3) -> list[MuscleReadiness]:
    """Optimal or under-trained entries, most ready first, capped."""
    matches = [m for m in items if m.muscle.status in FRESH_STATUSES]
    return sorted(matches, key=lambda m: m.readiness.percent, reverse=True)[:limit]


def average_readiness(items: Sequence[MuscleReadiness]) -> Optional[int]:
    """Rounded mean readiness percent, ``None`` for an empty set."""
    if not items:
        return None
    return round_half_up(sum(m.readiness.percent for m in items) / len(items))


def average_readiness_band(average: Optional[int]) -> tuple[str, str]:
    """``(label, color)`` on the whole-body scale."""
    if average is None:
        return CALIBRATING_LABEL, CALIBRATING_COLOR
    band = band_for(average, AVERAGE_READINESS_BANDS)
    return band.label, band.color


def guidance_copy(
    fatigued: Sequence[MuscleReadiness],
    freshest: Sequence[MuscleReadiness],
) -> str:
    """One-sentence training guidance for the recovery view header."""
    fatigue_list = ", ".join(format_muscle_group(m.muscle_group) for m in fatigued)
    ready_list = ", ".join(format_muscle_group(m.muscle_group) for m in freshest)

    if fatigue_list and ready_list:
        return f"Keep intensity low for {fatigue_list}. Favor {ready_list} if you train today."
    if fatigue_list:
        return f"Dial back load for {fatigue_list}. Mobility or technique work is safest."
    if ready_list:
        return f"You're cleared to push {ready_list}. Keep total volume near your baseline."
    return "Tap a muscle on the map to see per-muscle readiness and recent exercises."


def is_empty_state(items: Sequence[MuscleFatigue]) -> bool:
    """No usable data: nothing tracked, or every muscle is idle."""
    return all(m.status == "no-data" or m.last_7_days_volume == 0 for m in items)


def days_since(
    moment: Optional[datetime.datetime],
    now: Optional[datetime.datetime] = None,
) -> Optional[int]:
    """Whole days elapsed since *moment*, never negative."""
    if moment is None:
        return None
    reference = as_aware(now) if now is not None else utcnow()
    elapsed = (reference - as_aware(moment)).total_seconds() / 86400.0
    return max(0, int(elapsed // 1))
