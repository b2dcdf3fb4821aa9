"""
Recovery view schemas — heatmap entries and the ranked overview.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.schemas.fatigue import SnapshotModel
from app.schemas.readiness import MuscleReadiness


class HeatmapEntry(SnapshotModel):
    """One highlighted body-map region."""

    slug: str = Field(..., description="Body-map region, e.g. 'deltoids'")
    muscle_group: str
    intensity: int = Field(..., ge=1, description="Palette bucket (bucket 0 is reserved)")


class RecoveryOverview(SnapshotModel):
    """Everything the recovery view renders for one snapshot."""

    ranked: list[MuscleReadiness] = Field(default_factory=list)
    weakest_muscle: Optional[MuscleReadiness] = None
    fatigued_muscles: list[MuscleReadiness] = Field(default_factory=list)
    freshest_muscles: list[MuscleReadiness] = Field(default_factory=list)
    average_readiness: Optional[int] = Field(None, ge=0, le=100)
    average_label: str
    average_color: str
    guidance: str
    heatmap: list[HeatmapEntry] = Field(default_factory=list)
    empty_state: bool
    deload_week_detected: bool = False
    last_workout_days: Optional[int] = Field(None, ge=0)
