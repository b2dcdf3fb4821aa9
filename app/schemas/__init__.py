"""Pydantic schemas for request/response validation."""

from app.schemas.fatigue import (
    FatigueResult,
    FatigueTotals,
    MuscleFatigue,
    VolumeSnapshotRequest,
)
from app.schemas.readiness import MuscleReadiness, Readiness, ReadinessBand
from app.schemas.recovery import HeatmapEntry, RecoveryOverview
from app.schemas.up_next import (
    CardAction,
    GenerationInstruction,
    GenerationRequest,
    MatchedTemplate,
    OverrideTemplate,
    RecommendedSplit,
    RecommendedWorkout,
    TemplateCandidate,
    TrainingRecommendation,
    TrainingRecommendationRequest,
    UpNextCard,
    UpNextCardRequest,
    UpNextRecommendation,
)

__all__ = [
    "FatigueResult",
    "FatigueTotals",
    "MuscleFatigue",
    "VolumeSnapshotRequest",
    "MuscleReadiness",
    "Readiness",
    "ReadinessBand",
    "HeatmapEntry",
    "RecoveryOverview",
    "CardAction",
    "GenerationInstruction",
    "GenerationRequest",
    "MatchedTemplate",
    "OverrideTemplate",
    "RecommendedSplit",
    "RecommendedWorkout",
    "TemplateCandidate",
    "TrainingRecommendation",
    "TrainingRecommendationRequest",
    "UpNextCard",
    "UpNextCardRequest",
    "UpNextRecommendation",
]
