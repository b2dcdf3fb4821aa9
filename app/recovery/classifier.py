"""
Fatigue classifier — fatigue score + volume context → discrete status.

The fatigue score itself is computed upstream; this module owns the
mapping from score to one of five mutually exclusive statuses, the
derived flags, and the per-row presentation hint.

Status thresholds (score = last-7-day volume as % of weekly baseline):

    no recent volume and no baseline  → no-data
    score <  70                       → under-trained
    score < 110                       → optimal
    score < 130                       → moderate-fatigue
    otherwise                         → high-fatigue

Flags are always derived from the status, never from the raw score, so
``fatigued ⇔ status ∈ {moderate-fatigue, high-fatigue}`` holds by
construction.
"""

from __future__ import annotations

from typing import Optional

from app.schemas.fatigue import FATIGUED_STATUSES, FatigueStatus, MuscleFatigue, StatusColor

# ======================================================================
# Configuration
# ======================================================================

# (exclusive upper bound, status), evaluated top-down.
_STATUS_THRESHOLDS: tuple[tuple[float, FatigueStatus], ...] = (
    (70.0, "under-trained"),
    (110.0, "optimal"),
    (130.0, "moderate-fatigue"),
    (float("inf"), "high-fatigue"),
)

FRESH_STATUSES: frozenset[str] = frozenset({"optimal", "under-trained"})

STATUS_COLORS: dict[str, StatusColor] = {
    "under-trained": "green",
    "optimal": "blue",
    "moderate-fatigue": "yellow",
    "high-fatigue": "red",
    "no-data": "gray",
}

# Scores at or below this count the muscle as fresh in the snapshot summary.
FRESH_SCORE_CEILING = 90.0


# ======================================================================
# Classification
# ======================================================================


def status_from_score(score: float, has_data: bool) -> FatigueStatus:
    """Map a fatigue score to its status."""
    if not has_data:
        return "no-data"
    for upper, status in _STATUS_THRESHOLDS:
        if score < upper:
            return status
    return "high-fatigue"


def fatigue_score_from_volumes(last_7_days_volume: float, baseline_volume: Optional[float]) -> float:
    """Recent volume as a percentage of the weekly baseline.

    Without a baseline any recent training counts as exactly on-baseline
    (100) and no training at all as 0.
    """
    if not baseline_volume:
        return 100.0 if last_7_days_volume > 0 else 0.0
    return last_7_days_volume / baseline_volume * 100.0


def classify_muscle(
    muscle_group: str,
    last_7_days_volume: float,
    baseline_volume: Optional[float],
    fatigue_score: Optional[float] = None,
) -> MuscleFatigue:
    """Build a fully classified :class:`MuscleFatigue` entry.

    *baseline_volume* of ``None`` or ``0`` means the baseline is still
    missing.  When *fatigue_score* is omitted it is derived from the
    volumes with :func:`fatigue_score_from_volumes`.
    """
    baseline_missing = not baseline_volume
    has_data = last_7_days_volume > 0 or not baseline_missing
    score = (
        fatigue_score
        if fatigue_score is not None
        else fatigue_score_from_volumes(last_7_days_volume, baseline_volume)
    )
    status = status_from_score(score, has_data)

    return MuscleFatigue(
        muscle_group=muscle_group,
        last_7_days_volume=last_7_days_volume,
        baseline_volume=None if baseline_missing else baseline_volume,
        fatigue_score=score,
        status=status,
        color=STATUS_COLORS[status],
        fatigued=status in FATIGUED_STATUSES,
        under_trained=status == "under-trained" and score > 0,
        baseline_missing=baseline_missing,
    )


def reclassify(muscle: MuscleFatigue) -> MuscleFatigue:
    """Re-derive status and flags of an upstream entry from its own fields.

    Idempotent: ``reclassify(reclassify(m)) == reclassify(m)``.
    """
    classified = classify_muscle(
        muscle.muscle_group,
        muscle.last_7_days_volume,
        muscle.baseline_volume,
        muscle.fatigue_score,
    )
    return muscle.model_copy(update={
        "status": classified.status,
        "color": classified.color,
        "fatigued": classified.fatigued,
        "under_trained": classified.under_trained,
        "baseline_missing": classified.baseline_missing,
    })


# ======================================================================
# Presentation hint
# ======================================================================


def hint_for_item(muscle: MuscleFatigue) -> Optional[str]:
    """Short list-row hint.  First matching rule wins; order matters."""
    if muscle.fatigued:
        return "Needs rest"
    if muscle.under_trained:
        return "Good to target"
    if muscle.baseline_missing and muscle.last_7_days_volume > 0:
        return "Building baseline"
    return None
