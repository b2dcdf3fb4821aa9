"""
Muscle-name normalisation.

Exercise catalogs, body-map regions and templates name muscles at
different granularities ("lats", "rear delts", "quadriceps").  Every
name is folded onto one of the coarse tracked groups with a fixed
precedence:

1. exact alias lookup,
2. substring heuristics, in the order of ``_SUBSTRING_RULES``,
3. identity (the cleaned name itself).
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from app.recovery.policy import DEFAULT_POLICY, RecoveryPolicy
from app.recovery.readiness import readiness_for_muscle
from app.schemas.fatigue import FatigueResult

TRACKED_MUSCLES: tuple[str, ...] = (
    "chest",
    "back",
    "shoulders",
    "biceps",
    "triceps",
    "legs",
    "glutes",
    "core",
)

# Keys are already cleaned: lower case, "_"/"-" folded to single spaces.
MUSCLE_ALIASES: dict[str, str] = {
    "upper back": "back",
    "trapezius": "back",
    "traps": "back",
    "lats": "back",
    "latissimus dorsi": "back",
    "lower back": "back",
    "back": "back",
    "chest": "chest",
    "pectorals": "chest",
    "pecs": "chest",
    "deltoids": "shoulders",
    "delts": "shoulders",
    "shoulders": "shoulders",
    "rear delts": "shoulders",
    "biceps": "biceps",
    "triceps": "triceps",
    "quadriceps": "legs",
    "quads": "legs",
    "hamstring": "legs",
    "hamstrings": "legs",
    "calves": "legs",
    "calves both": "legs",
    "adductors": "legs",
    "gluteal": "glutes",
    "glutes": "glutes",
    "abs": "core",
    "abdominals": "core",
    "core": "core",
    "obliques": "core",
}

# First match wins.
_SUBSTRING_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("back", "lat", "trap"), "back"),
    (("shoulder", "delt"), "shoulders"),
    (("chest", "pec"), "chest"),
    (("bicep",), "biceps"),
    (("tricep",), "triceps"),
    (("quad", "ham", "calf", "leg"), "legs"),
    (("glute",), "glutes"),
    (("ab", "core", "oblique"), "core"),
)

_DISPLAY_NAMES: dict[str, str] = {
    "abdominals": "Abs",
    "lats": "Lats",
    "traps": "Traps",
    "calves": "Calves",
    "glutes": "Glutes",
    "quadriceps": "Quads",
    "hamstrings": "Hamstrings",
    "cardio": "Cardio",
}


def _clean(value: str) -> str:
    key = re.sub(r"[_-]+", " ", value.lower())
    return re.sub(r"\s+", " ", key).strip()


def normalize_muscle_group(value: Optional[str]) -> str:
    """Fold any muscle name onto its coarse group key.

    Empty or missing names normalise to ``"other"``.
    """
    key = _clean(value or "")
    if not key:
        return "other"

    if key in MUSCLE_ALIASES:
        return MUSCLE_ALIASES[key]

    for needles, group in _SUBSTRING_RULES:
        if any(needle in key for needle in needles):
            return group

    return key


def format_muscle_group(muscle_group: str) -> str:
    """Human-readable name: "upper_back" → "Upper Back", "quadriceps" → "Quads"."""
    special = _DISPLAY_NAMES.get(muscle_group.lower())
    if special:
        return special
    words = [w for w in re.split(r"[\s_-]+", muscle_group) if w]
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


def build_canonical_muscle_stats(
    fatigue: Optional[FatigueResult],
    policy: RecoveryPolicy = DEFAULT_POLICY,
) -> dict[str, tuple[int, float]]:
    """Collapse a snapshot onto canonical groups.

    Returns ``{group: (readiness_percent, fatigue_score)}`` keeping the
    worst case of each: the lowest readiness and the highest score.
    """
    stats: dict[str, tuple[int, float]] = {}
    if fatigue is None:
        return stats

    for muscle in fatigue.per_muscle:
        canonical = normalize_muscle_group(muscle.muscle_group)
        readiness = readiness_for_muscle(muscle, use_history=True, policy=policy).percent
        existing = stats.get(canonical)
        if existing is None:
            stats[canonical] = (readiness, muscle.fatigue_score)
        else:
            stats[canonical] = (
                min(existing[0], readiness),
                max(existing[1], muscle.fatigue_score),
            )
    return stats


def normalize_all(values: Iterable[str]) -> list[str]:
    """Normalise and de-duplicate, keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(normalize_muscle_group(value), None)
    return list(seen)
