"""
Fatigue snapshot builder.

Turns the per-muscle volumes produced by the aggregation feed into a
complete :class:`FatigueResult`.  How volume is aggregated from sets,
reps and weight is not this module's concern: it receives

- ``last_7_days``: muscle → volume over the recent window,
- ``baseline_total``: muscle → total volume over the baseline window,

and divides the baseline by ``baseline_weeks`` to get a weekly figure.
"""

from __future__ import annotations

import datetime
import logging
from typing import Mapping, Optional

from app.recovery.classifier import FRESH_SCORE_CEILING, classify_muscle, fatigue_score_from_volumes
from app.recovery.muscles import TRACKED_MUSCLES
from app.recovery.ranking import sort_muscles
from app.recovery.utils import clamp, utcnow
from app.schemas.fatigue import FatigueResult, FatigueTotals, MuscleFatigue

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 7
DEFAULT_BASELINE_WEEKS = 4

# Recent volume below this fraction of baseline flags a deload week.
DELOAD_FRACTION = 0.5

# Whole-body readiness: 150 - total score, clamped to 0-100.
_READINESS_SCORE_OFFSET = 150.0


def _muscle_keys(*maps: Mapping[str, float]) -> list[str]:
    keys: dict[str, None] = dict.fromkeys(TRACKED_MUSCLES)
    for volumes in maps:
        for key in volumes:
            keys.setdefault(key, None)
    return list(keys)


def build_fatigue_result(
    last_7_days: Mapping[str, float],
    baseline_total: Mapping[str, float],
    *,
    baseline_weeks: int = DEFAULT_BASELINE_WEEKS,
    window_days: int = DEFAULT_WINDOW_DAYS,
    last_workout_at: Optional[datetime.datetime] = None,
    generated_at: Optional[datetime.datetime] = None,
) -> FatigueResult:
    """Build a ranked, fully classified snapshot from raw volumes.

    Every tracked muscle appears even without data, plus any extra key
    present in either map.
    """
    per_muscle: list[MuscleFatigue] = []
    last_7_total = 0.0
    baseline_weekly_total = 0.0

    for muscle in _muscle_keys(last_7_days, baseline_total):
        recent = float(last_7_days.get(muscle, 0.0))
        baseline_weekly = float(baseline_total.get(muscle, 0.0)) / baseline_weeks
        per_muscle.append(classify_muscle(muscle, recent, baseline_weekly or None))
        last_7_total += recent
        baseline_weekly_total += baseline_weekly

    totals_baseline = baseline_weekly_total if baseline_weekly_total > 0 else None
    total_score = fatigue_score_from_volumes(last_7_total, totals_baseline)
    readiness_score = clamp(_READINESS_SCORE_OFFSET - total_score, 0.0, 100.0)
    deload = totals_baseline is not None and last_7_total < totals_baseline * DELOAD_FRACTION

    fresh = [
        m.muscle_group for m in per_muscle
        if m.status == "under-trained" or m.fatigue_score <= FRESH_SCORE_CEILING
    ]

    logger.debug(
        "Built fatigue snapshot: %d muscles, total score %.1f, deload=%s",
        len(per_muscle), total_score, deload,
    )

    return FatigueResult(
        generated_at=generated_at or utcnow(),
        window_days=window_days,
        baseline_weeks=baseline_weeks,
        per_muscle=sort_muscles(per_muscle),
        deload_week_detected=deload,
        readiness_score=readiness_score,
        fresh_muscles=fresh,
        last_workout_at=last_workout_at,
        totals=FatigueTotals(
            last_7_days_volume=last_7_total,
            baseline_volume=totals_baseline,
            fatigue_score=total_score,
        ),
    )
