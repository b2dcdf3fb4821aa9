"""
Template matching for the up-next recommendation.

The template store normally supplies ``match_score`` / ``match_reason``
itself.  This module is the default scorer used when it does not, plus
the split-level helpers the recommendation is assembled from.

Scoring
-------
    100  template split type equals the recommended split
     90  template name contains a split keyword ("Pull Day A" → pull)
     85  ≥80 % of the split's muscles covered AND ≥60 % of the template's
         muscles belong to the split
      0  anything else

Only scores at or above the match threshold (85) count as a match.

Training recommendation
-----------------------
Independently of the split, the recovery view suggests which muscles
to prioritise (under-trained, else optimal) and which to avoid
(fatigued), and up to three saved templates that respect both.
"""

from __future__ import annotations

import datetime
import logging
from typing import Optional, Sequence

from app.recovery.muscles import normalize_all, normalize_muscle_group
from app.recovery.policy import DEFAULT_POLICY, RecoveryPolicy
from app.recovery.utils import as_aware
from app.schemas.fatigue import FatigueResult, MuscleFatigue
from app.schemas.up_next import (
    MatchedTemplate,
    RecommendedWorkout,
    SplitFatigueStatus,
    TemplateCandidate,
    TrainingRecommendation,
)

logger = logging.getLogger(__name__)

# ======================================================================
# Split tables
# ======================================================================

SPLIT_LABELS: dict[str, str] = {
    "push": "Push",
    "pull": "Pull",
    "legs": "Legs",
    "upper": "Upper",
    "lower": "Lower",
    "full_body": "Full Body",
    "chest": "Chest",
    "back": "Back",
    "shoulders": "Shoulders",
    "arms": "Arms",
}

SPLIT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "push": ("push",),
    "pull": ("pull",),
    "legs": ("leg", "lower"),
    "lower": ("lower", "leg"),
    "upper": ("upper",),
    "full_body": ("full body", "full-body", "fullbody", "total body"),
    "chest": ("chest",),
    "back": ("back",),
    "shoulders": ("shoulder", "delt"),
    "arms": ("arm", "bicep", "tricep"),
}

_ALL_GROUPS = ("chest", "back", "shoulders", "biceps", "triceps", "legs", "glutes", "core")

SPLIT_MUSCLES: dict[str, tuple[str, ...]] = {
    "push": ("chest", "shoulders", "triceps"),
    "pull": ("back", "biceps"),
    "legs": ("legs", "glutes", "core"),
    "lower": ("legs", "glutes", "core"),
    "upper": ("chest", "back", "shoulders", "biceps", "triceps"),
    "full_body": _ALL_GROUPS,
    "chest": ("chest", "triceps"),
    "back": ("back", "biceps"),
    "shoulders": ("shoulders",),
    "arms": ("biceps", "triceps"),
}

_SPLIT_ALIASES: dict[str, str] = {
    "leg": "legs",
    "fullbody": "full_body",
    "full body": "full_body",
    "full-body": "full_body",
    "total_body": "full_body",
    "shoulder": "shoulders",
    "arm": "arms",
}

_SPLIT_COVERAGE_MIN = 80.0
_TEMPLATE_FOCUS_MIN = 60.0
_MAX_ALTERNATES = 3
_MAX_TARGET_MUSCLES = 3
_MAX_RECOMMENDED_WORKOUTS = 3

FALLBACK_WORKOUT = RecommendedWorkout(
    template_id="fallback-full-body",
    template_name="Full Body / Mobility",
    muscle_groups=["full_body"],
    reason="Light full-body or mobility session recommended while data is limited",
)


def normalize_split_key(value: Optional[str]) -> Optional[str]:
    """Lower-case a split key and fold common spellings ("Full Body" → full_body)."""
    if not value:
        return None
    key = value.strip().lower()
    key = _SPLIT_ALIASES.get(key, key)
    return key.replace(" ", "_").replace("-", "_")


def format_split_label(split_key: Optional[str], fallback: Optional[str] = None) -> str:
    """Display label for a split key."""
    if not split_key:
        return fallback or "Training"
    key = split_key.lower()
    if key in SPLIT_LABELS:
        return SPLIT_LABELS[key]
    return key.replace("_", " ").title()


# ======================================================================
# Scoring
# ======================================================================


def score_template_match(template: TemplateCandidate, split_key: str) -> tuple[float, str]:
    """Score how well *template* fits *split_key*.

    Returns:
        ``(score, reason)``
    """
    if normalize_split_key(template.split_type) == split_key:
        return 100.0, "Perfect match for your split"

    name = template.template_name.lower()
    if any(keyword in name for keyword in SPLIT_KEYWORDS.get(split_key, (split_key,))):
        return 90.0, "Matches your split"

    split_muscles = SPLIT_MUSCLES.get(split_key, ())
    muscles = [normalize_muscle_group(m) for m in template.muscle_groups]
    matching = [m for m in muscles if m in split_muscles]
    coverage = len(set(matching)) / len(split_muscles) * 100 if split_muscles else 0.0
    focus = len(matching) / len(muscles) * 100 if muscles else 0.0
    if coverage >= _SPLIT_COVERAGE_MIN and focus >= _TEMPLATE_FOCUS_MIN:
        return 85.0, "Hits the right muscle groups"

    return 0.0, "Alternative option"


def _usage_key(last_used_at: Optional[datetime.datetime]) -> tuple[int, float]:
    # Never-used templates first, then least recently used.
    if last_used_at is None:
        return 0, 0.0
    return 1, as_aware(last_used_at).timestamp()


def rank_templates(
    templates: Sequence[TemplateCandidate],
    split_key: str,
    policy: RecoveryPolicy = DEFAULT_POLICY,
) -> tuple[Optional[MatchedTemplate], list[MatchedTemplate]]:
    """Score and rank *templates* for *split_key*.

    Returns:
        ``(matched, alternates)`` — the best template at or above the
        match threshold (or ``None``) and up to three further templates
        that also clear it.
    """
    scored: list[tuple[MatchedTemplate, Optional[datetime.datetime]]] = []
    for template in templates:
        score, reason = score_template_match(template, split_key)
        scored.append((
            MatchedTemplate(
                template_id=template.template_id,
                template_name=template.template_name,
                exercise_count=template.exercise_count,
                match_score=score,
                match_reason=reason,
                split_type=template.split_type,
            ),
            template.last_used_at,
        ))

    scored.sort(key=lambda pair: (-pair[0].match_score, _usage_key(pair[1])))
    eligible = [t for t, _ in scored if t.match_score >= policy.template_match_threshold]

    matched = eligible[0] if eligible else None
    logger.debug(
        "Ranked %d templates for split %r: matched=%s",
        len(templates), split_key, matched.template_id if matched else None,
    )
    return matched, eligible[1:1 + _MAX_ALTERNATES]


# ======================================================================
# Split fatigue & reasoning
# ======================================================================


def fatigue_status_for_split(fatigue: Optional[FatigueResult], split_key: str) -> SplitFatigueStatus:
    """Average fatigue of the split's muscles, bucketed for the card header."""
    if fatigue is None:
        return "no-data"
    split_muscles = SPLIT_MUSCLES.get(split_key, ())
    if not split_muscles:
        return "ready"

    scores = [m.fatigue_score for m in fatigue.per_muscle if m.muscle_group in split_muscles]
    if not scores:
        return "no-data"

    average = sum(scores) / len(scores)
    if average > 130:
        return "high-fatigue"
    if average > 110:
        return "moderate-fatigue"
    if average < 70:
        return "fresh"
    return "ready"


def generate_reasoning(
    split_label: str,
    tags: Sequence[str],
    days_since_last_split: Optional[int],
    fatigue_status: SplitFatigueStatus,
    preferred_split: Optional[str] = None,
) -> str:
    """Concise reasoning line.  Template name and fatigue label are shown elsewhere."""
    parts: list[str] = []

    if "On-cycle" in tags:
        preferred_label = format_split_label(preferred_split, split_label)
        if preferred_label == "Ppl":
            preferred_label = "PPL"
        parts.append(f"Next in your {preferred_label} rotation")
    else:
        parts.append(f"{split_label} fits your training balance")

    if days_since_last_split is not None and days_since_last_split >= 3:
        parts.append(f"{days_since_last_split} days since last {split_label.lower()}")

    if fatigue_status in ("moderate-fatigue", "high-fatigue"):
        parts.append("consider lighter volume today")

    return ". ".join(parts) + "."


# ======================================================================
# Training recommendation
# ======================================================================


def select_target_muscles(
    per_muscle: Sequence[MuscleFatigue],
    limit: int = _MAX_TARGET_MUSCLES,
) -> list[str]:
    """Muscles to prioritise next, in snapshot order.

    Under-trained muscles when there are any, otherwise optimal ones
    that are not fatigued.
    """
    under_trained = [m.muscle_group for m in per_muscle if m.under_trained]
    if under_trained:
        return under_trained[:limit]
    return [
        m.muscle_group for m in per_muscle
        if m.status == "optimal" and not m.fatigued
    ][:limit]


def build_training_recommendation(
    fatigue: Optional[FatigueResult],
    templates: Sequence[TemplateCandidate],
) -> TrainingRecommendation:
    """Target / avoid muscles and up to three saved templates that fit them.

    Templates hitting a target and no fatigued muscle come first; when
    none qualify, any template sparing the fatigued muscles is offered.
    With nothing left the built-in full-body / mobility session is
    recommended.
    """
    per_muscle = fatigue.per_muscle if fatigue is not None else []
    targets = select_target_muscles(per_muscle)
    avoid = [m.muscle_group for m in per_muscle if m.fatigued]

    target_set = {normalize_muscle_group(m) for m in targets}
    avoid_set = {normalize_muscle_group(m) for m in avoid}

    flagged: list[tuple[TemplateCandidate, list[str], bool]] = []
    for template in templates:
        groups = normalize_all(template.muscle_groups)
        if any(g in avoid_set for g in groups):
            continue
        flagged.append((template, groups, any(g in target_set for g in groups)))

    actionable = [entry for entry in flagged if entry[2]]
    ranked = actionable or flagged

    workouts = [
        RecommendedWorkout(
            template_id=template.template_id,
            template_name=template.template_name,
            muscle_groups=groups,
            reason=(
                "Targets " + ", ".join(g for g in groups if g in target_set)
                if hits_target
                else "Balanced option while avoiding fatigued muscles"
            ),
        )
        for template, groups, hits_target in ranked[:_MAX_RECOMMENDED_WORKOUTS]
    ]

    logger.debug(
        "Training recommendation: targets=%s avoid=%s workouts=%d",
        targets, avoid, len(workouts),
    )

    return TrainingRecommendation(
        target_muscles=targets,
        avoid_muscles=avoid,
        recommended_workouts=workouts or [FALLBACK_WORKOUT],
    )
