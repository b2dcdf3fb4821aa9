"""
Up-next recommendation schemas.

:class:`UpNextRecommendation` is produced outside the engine (split
rotation policy + template store + entitlement oracle).  The engine only
consumes it and renders one of four mutually exclusive card states:

    loading  →  override  →  empty  →  recommended

A populated ``matched_template`` whose ``match_score`` is below the
match threshold is treated exactly as if it were absent.
"""

from __future__ import annotations

import datetime
from typing import Literal, Optional

from pydantic import Field

from app.schemas.fatigue import FatigueResult, MuscleFatigue, SnapshotModel

SplitFatigueStatus = Literal[
    "fresh",
    "ready",
    "moderate-fatigue",
    "high-fatigue",
    "no-data",
]

CardState = Literal["loading", "override", "empty", "recommended"]

ActionKind = Literal[
    "start",
    "edit",
    "swap",
    "generate",
    "upgrade",
    "create",
    "get_started",
]


class RecommendedSplit(SnapshotModel):
    """The split chosen by the external rotation/recency policy."""

    split_key: str = Field(..., min_length=1, description="e.g. 'push', 'legs'")
    label: str
    reason: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class MatchedTemplate(SnapshotModel):
    """A saved template scored against the recommended split."""

    template_id: str
    template_name: str
    exercise_count: int = Field(0, ge=0)
    match_score: float = Field(..., ge=0.0, le=100.0)
    match_reason: str = ""
    split_type: Optional[str] = None


class UpNextRecommendation(SnapshotModel):
    """External-origin recommendation for the next session."""

    recommended_split: RecommendedSplit
    matched_template: Optional[MatchedTemplate] = None
    alternate_templates: list[MatchedTemplate] = Field(default_factory=list)
    fatigue_status: SplitFatigueStatus = "no-data"
    can_generate_ai: bool = Field(
        False, alias="canGenerateAI",
        description="Server-granted one-time free generation (not a counter)",
    )
    reasoning: str = ""
    days_since_last_split: Optional[int] = Field(None, ge=0)
    readiness_score: Optional[float] = None
    last_workout_at: Optional[datetime.datetime] = None


class OverrideTemplate(SnapshotModel):
    """A template the user picked by hand, shown instead of the recommendation."""

    template_id: str
    template_name: str
    exercise_count: int = Field(0, ge=0)
    split_type: Optional[str] = None


class UpNextCardRequest(SnapshotModel):
    """Everything needed to resolve the up-next card for one render."""

    recommendation: Optional[UpNextRecommendation] = None
    is_loading: bool = False
    is_error: bool = False
    is_pro: bool = False
    override_template: Optional[OverrideTemplate] = None


class CardAction(SnapshotModel):
    """One tappable affordance on the card."""

    kind: ActionKind
    label: str
    primary: bool = False
    template_id: Optional[str] = None
    split_key: Optional[str] = None
    badge: Optional[str] = Field(None, description="'1 FREE' or 'PRO' on the generate button")


class UpNextCard(SnapshotModel):
    """Resolved presentation state of the up-next card."""

    state: CardState
    title: str
    subtitle: Optional[str] = None
    actions: list[CardAction] = Field(default_factory=list)
    template: Optional[MatchedTemplate] = None
    has_matched_template: bool = False
    can_generate: bool = False
    tags: list[str] = Field(default_factory=list)
    fatigue_label: Optional[str] = None
    fatigue_color: Optional[str] = None
    reasoning: Optional[str] = None
    footer: Optional[str] = None


class TemplateCandidate(SnapshotModel):
    """A saved template as the template store describes it."""

    template_id: str
    template_name: str
    split_type: Optional[str] = None
    exercise_count: int = Field(0, ge=0)
    muscle_groups: list[str] = Field(default_factory=list)
    last_used_at: Optional[datetime.datetime] = None


class GenerationRequest(SnapshotModel):
    """Input for building the free-text AI generation instruction."""

    target_muscles: Optional[list[str]] = Field(
        None,
        description="Muscles to prioritise; derived from per_muscle when omitted",
    )
    per_muscle: list[MuscleFatigue] = Field(default_factory=list)


class GenerationInstruction(SnapshotModel):
    """The instruction string sent to the AI generation endpoint."""

    specific_request: str


class RecommendedWorkout(SnapshotModel):
    """A saved template (or the built-in fallback) suggested for today."""

    template_id: str
    template_name: str
    muscle_groups: list[str] = Field(default_factory=list)
    reason: str


class TrainingRecommendation(SnapshotModel):
    """Muscles to prioritise / avoid and up to three workouts that fit."""

    target_muscles: list[str] = Field(default_factory=list)
    avoid_muscles: list[str] = Field(default_factory=list)
    recommended_workouts: list[RecommendedWorkout] = Field(default_factory=list)


class TrainingRecommendationRequest(SnapshotModel):
    """A fatigue snapshot plus the user's saved templates."""

    snapshot: FatigueResult
    templates: list[TemplateCandidate] = Field(default_factory=list)
