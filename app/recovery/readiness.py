"""
Readiness transform — fatigue score → readiness percent, label, colour.

Model
-----
The upstream fatigue score is 100 when the last 7 days match the
muscle's weekly baseline.  Readiness is a clamped linear inverse of it:

    percent = round(clamp(120 - (score - 70) * 1.2, 0, 100))

so a score of 70 (or below) reads as 100 % rested and every point of
fatigue above 70 costs 1.2 points of readiness.  The constants live in
:class:`~app.recovery.policy.RecoveryPolicy`.

When recency context is available (body-map variant) readiness is taken
instead from a recovery curve anchored at the last session:

    intensity = max(sets intensity, volume intensity)         (0-1)
    initial   = 100 - 100 × intensity
    percent   = initial + (100 - initial) × clamp(hours_since / (12 + 84 × intensity))

Colour
------
A red gradient over four piecewise-linear segments
``[0,25] (25,50] (50,75] (75,100]``.  Each segment interpolates RGB and
alpha between two named stops, so adjacent segments agree exactly at
their shared boundary.
"""

from __future__ import annotations

import datetime
import math
from typing import NamedTuple, Optional

from app.recovery.policy import DEFAULT_POLICY, RecoveryPolicy
from app.recovery.utils import as_aware, clamp, round_half_up, utcnow
from app.schemas.fatigue import MuscleFatigue
from app.schemas.readiness import Readiness, ReadinessBand

# ======================================================================
# Banding tables (evaluated top-down, lower bound inclusive)
# ======================================================================

MUSCLE_READINESS_BANDS: tuple[ReadinessBand, ...] = (
    ReadinessBand(lower_bound=85, label="Fresh", color="#38bdf8"),
    ReadinessBand(lower_bound=65, label="Ready", color="#22c55e"),
    ReadinessBand(lower_bound=45, label="Caution", color="#f97316"),
    ReadinessBand(lower_bound=0, label="Fatigued", color="#ef4444"),
)

# Whole-body average scale.  Deliberately not the per-muscle table.
AVERAGE_READINESS_BANDS: tuple[ReadinessBand, ...] = (
    ReadinessBand(lower_bound=85, label="Fresh", color="#38bdf8"),
    ReadinessBand(lower_bound=65, label="Ready to train", color="#22c55e"),
    ReadinessBand(lower_bound=45, label="Rest recommended", color="#f97316"),
    ReadinessBand(lower_bound=0, label="Needs rest", color="#ef4444"),
)


def band_for(percent: float, bands: tuple[ReadinessBand, ...]) -> ReadinessBand:
    """Return the first band whose lower bound *percent* reaches."""
    for band in bands:
        if percent >= band.lower_bound:
            return band
    return bands[-1]


# ======================================================================
# Colour gradient
# ======================================================================


class ColorStop(NamedTuple):
    percent: float
    red: int
    green: int
    blue: int
    alpha: float


# Bright red (very fatigued) → pale pink (fresh).
GRADIENT_STOPS: tuple[ColorStop, ...] = (
    ColorStop(0.0, 255, 0, 0, 0.90),      # #ff0000
    ColorStop(25.0, 255, 51, 51, 0.85),   # #ff3333
    ColorStop(50.0, 255, 102, 102, 0.75), # #ff6666
    ColorStop(75.0, 255, 179, 179, 0.60), # #ffb3b3
    ColorStop(100.0, 255, 230, 230, 0.40),  # #ffe6e6
)


def _format_rgba(red: int, green: int, blue: int, alpha: float) -> str:
    return f"rgba({red}, {green}, {blue}, {round(alpha, 3):g})"


def _segment_index(percent: float) -> int:
    """Segment owning *percent*: ``[0,25]`` is 0, ``(25,50]`` is 1, ..."""
    if percent <= GRADIENT_STOPS[1].percent:
        return 0
    for index in range(1, len(GRADIENT_STOPS) - 1):
        if percent <= GRADIENT_STOPS[index + 1].percent:
            return index
    return len(GRADIENT_STOPS) - 2


def interpolate_segment(index: int, percent: float) -> str:
    """Evaluate gradient segment *index* at *percent* (no range check)."""
    start, end = GRADIENT_STOPS[index], GRADIENT_STOPS[index + 1]
    ratio = (percent - start.percent) / (end.percent - start.percent)
    return _format_rgba(
        round_half_up(start.red + ratio * (end.red - start.red)),
        round_half_up(start.green + ratio * (end.green - start.green)),
        round_half_up(start.blue + ratio * (end.blue - start.blue)),
        start.alpha + ratio * (end.alpha - start.alpha),
    )


def readiness_color(readiness_percent: float) -> str:
    """Red-gradient colour for a readiness percentage (clamped to 0-100)."""
    percent = clamp(readiness_percent, 0.0, 100.0)
    return interpolate_segment(_segment_index(percent), percent)


# ======================================================================
# Percent computation
# ======================================================================


def percent_from_score(score: float, policy: RecoveryPolicy = DEFAULT_POLICY) -> int:
    """Linear fallback: fatigue score → readiness percent."""
    raw = policy.readiness_offset - (score - policy.readiness_anchor_score) * policy.readiness_slope
    return round_half_up(clamp(raw, 0.0, 100.0))


def percent_from_recovery_load(load: float) -> int:
    """Readiness from a normalised recovery load (0 = none, ≥1 = spent)."""
    bounded = clamp(load, 0.0, 2.0)
    return round_half_up(clamp(100.0 * (1.0 - min(1.0, bounded)), 0.0, 100.0))


def percent_from_history(
    score: float,
    last_trained_at: datetime.datetime,
    *,
    last_session_sets: Optional[int] = None,
    last_session_volume: Optional[float] = None,
    baseline_weekly_volume: Optional[float] = None,
    now: Optional[datetime.datetime] = None,
    policy: RecoveryPolicy = DEFAULT_POLICY,
) -> int:
    """Readiness recovering from the last session toward 100 % over time.

    Falls back to :func:`percent_from_score` when the last session is in
    the future or carried no measurable load (e.g. cardio, missing reps).
    """
    reference = as_aware(now) if now is not None else utcnow()
    hours_since = (reference - as_aware(last_trained_at)).total_seconds() / 3600.0
    if not math.isfinite(hours_since) or hours_since < 0:
        return percent_from_score(score, policy)

    session_sets = max(0, last_session_sets or 0)
    session_volume = max(0.0, last_session_volume or 0.0)
    if session_sets == 0 and session_volume == 0:
        return percent_from_score(score, policy)

    intensity_from_sets = clamp((session_sets - 1) / 5.0, 0.0, 1.0)
    if baseline_weekly_volume and baseline_weekly_volume > 0:
        intensity_from_volume = clamp(session_volume / (baseline_weekly_volume * 0.4), 0.0, 1.0)
    else:
        intensity_from_volume = clamp(session_volume / 8000.0, 0.0, 1.0)
    intensity = max(intensity_from_sets, intensity_from_volume)

    initial = round_half_up(clamp(100.0 - intensity * 100.0, 0.0, 100.0))
    recovery_hours = 12.0 + intensity * 84.0
    progress = clamp(hours_since / recovery_hours, 0.0, 1.0)
    return round_half_up(initial + (100 - initial) * progress)


# ======================================================================
# Public entry points
# ======================================================================


def build_readiness(percent: int) -> Readiness:
    """Wrap a percent into a :class:`Readiness` with per-muscle label and colour."""
    band = band_for(percent, MUSCLE_READINESS_BANDS)
    return Readiness(percent=percent, label=band.label, color=readiness_color(percent))


def readiness_from_fatigue_score(
    score: float,
    last_trained_at: Optional[datetime.datetime] = None,
    *,
    last_session_sets: Optional[int] = None,
    last_session_volume: Optional[float] = None,
    baseline_weekly_volume: Optional[float] = None,
    recovery_load: Optional[float] = None,
    now: Optional[datetime.datetime] = None,
    policy: RecoveryPolicy = DEFAULT_POLICY,
) -> Readiness:
    """Convert a fatigue score into a :class:`Readiness`.

    With only *score* this is the pure linear transform.  A finite
    *recovery_load* takes precedence over everything else; otherwise a
    *last_trained_at* switches to the recovery-curve variant.

    Example::

        >>> readiness_from_fatigue_score(90).percent
        96
    """
    if recovery_load is not None and math.isfinite(recovery_load):
        percent = percent_from_recovery_load(recovery_load)
    elif last_trained_at is not None:
        percent = percent_from_history(
            score,
            last_trained_at,
            last_session_sets=last_session_sets,
            last_session_volume=last_session_volume,
            baseline_weekly_volume=baseline_weekly_volume,
            now=now,
            policy=policy,
        )
    else:
        percent = percent_from_score(score, policy)
    return build_readiness(percent)


def readiness_for_muscle(
    muscle: MuscleFatigue,
    *,
    use_history: bool = False,
    now: Optional[datetime.datetime] = None,
    policy: RecoveryPolicy = DEFAULT_POLICY,
) -> Readiness:
    """Readiness of a snapshot entry.

    The list view uses the score alone; the body map passes
    ``use_history=True`` to take recency context into account.
    """
    if not use_history:
        return readiness_from_fatigue_score(muscle.fatigue_score, policy=policy)
    return readiness_from_fatigue_score(
        muscle.fatigue_score,
        muscle.last_trained_at,
        last_session_sets=muscle.last_session_sets,
        last_session_volume=muscle.last_session_volume,
        baseline_weekly_volume=muscle.baseline_volume,
        recovery_load=muscle.recovery_load,
        now=now,
        policy=policy,
    )
