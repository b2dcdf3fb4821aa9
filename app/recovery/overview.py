"""
Recovery overview — the full recovery view for one snapshot.

Combines the ranker summaries with the body-map heatmap.  A snapshot
is received whole and the overview is re-derived from scratch on every
fetch; nothing is cached between snapshots.
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional

from app.recovery.heatmap import build_heatmap
from app.recovery.policy import DEFAULT_POLICY, RecoveryPolicy
from app.recovery.ranking import (
    average_readiness,
    average_readiness_band,
    days_since,
    ensure_unique_keys,
    fatigued_muscles,
    freshest_muscles,
    guidance_copy,
    is_empty_state,
    sort_muscles,
    weakest_muscle,
    with_readiness,
)
from app.schemas.fatigue import FatigueResult
from app.schemas.recovery import RecoveryOverview

logger = logging.getLogger(__name__)


def build_recovery_overview(
    result: FatigueResult,
    now: Optional[datetime.datetime] = None,
    policy: Optional[RecoveryPolicy] = None,
) -> RecoveryOverview:
    """Derive every recovery-view value from *result*.

    Args:
        result: The current fatigue snapshot.
        now: Reference time for recency-based values (defaults to now).
        policy: Optional policy override.

    Returns:
        :class:`RecoveryOverview`.  An empty or idle snapshot yields
        ``empty_state=True`` with null/empty summaries, never an error.
    """
    cfg = policy or DEFAULT_POLICY
    items = result.per_muscle
    ensure_unique_keys(items)

    paired = with_readiness(items, cfg)
    by_group = {m.muscle_group: m for m in paired}
    ranked = [by_group[m.muscle_group] for m in sort_muscles(items)]

    fatigued = fatigued_muscles(paired, cfg.top_muscles_limit)
    freshest = freshest_muscles(paired, cfg.top_muscles_limit)
    average = average_readiness(paired)
    label, color = average_readiness_band(average)
    empty = is_empty_state(items)

    logger.debug(
        "Recovery overview: %d muscles, average=%s, fatigued=%d, empty=%s",
        len(ranked), average, len(fatigued), empty,
    )

    return RecoveryOverview(
        ranked=ranked,
        weakest_muscle=weakest_muscle(paired),
        fatigued_muscles=fatigued,
        freshest_muscles=freshest,
        average_readiness=average,
        average_label=label,
        average_color=color,
        guidance=guidance_copy(fatigued, freshest),
        heatmap=build_heatmap(items, now=now, policy=cfg),
        empty_state=empty,
        deload_week_detected=result.deload_week_detected,
        last_workout_days=days_since(result.last_workout_at, now),
    )
