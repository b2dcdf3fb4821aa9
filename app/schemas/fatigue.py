"""
Per-muscle fatigue schemas.

A :class:`FatigueResult` is a snapshot produced wholesale by the upstream
volume aggregation on every fetch.  It is immutable once received and is
replaced in full by the next fetch; nothing in the engine patches it.

Field names are exposed to clients in camelCase (``muscleGroup``,
``last7DaysVolume`` ...) and accepted in either form.
"""

from __future__ import annotations

import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

FatigueStatus = Literal[
    "under-trained",
    "optimal",
    "moderate-fatigue",
    "high-fatigue",
    "no-data",
]

StatusColor = Literal["green", "blue", "yellow", "red", "gray"]

FATIGUED_STATUSES: frozenset[str] = frozenset({"moderate-fatigue", "high-fatigue"})


class SnapshotModel(BaseModel):
    """Frozen, camelCase-aliased base for snapshot value objects."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MuscleFatigue(SnapshotModel):
    """Fatigue state of one muscle group for one evaluation."""

    muscle_group: str = Field(..., min_length=1, description="Stable key, e.g. 'chest'")
    last_7_days_volume: float = Field(
        ..., ge=0.0, alias="last7DaysVolume",
        description="Load total over the last 7 days",
    )
    baseline_volume: Optional[float] = Field(
        None, ge=0.0,
        description="Typical weekly load (None until enough history exists)",
    )
    fatigue_score: float = Field(
        ...,
        description="Upstream training-stress scalar; higher = more fatigued",
    )
    status: FatigueStatus
    color: Optional[StatusColor] = Field(
        None,
        description="Legacy status colour name",
    )
    fatigued: bool = False
    under_trained: bool = False
    baseline_missing: bool = False

    # Optional recency context used by the history-aware readiness variant.
    last_trained_at: Optional[datetime.datetime] = None
    last_session_sets: Optional[int] = Field(None, ge=0)
    last_session_volume: Optional[float] = Field(None, ge=0.0)
    recovery_load: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _derive_flags(cls, data: Any) -> Any:
        """Derive ``fatigued`` / ``under_trained`` from ``status``.

        Caller-supplied values for those two flags are overwritten, so
        ``fatigued ⇔ status ∈ {moderate-fatigue, high-fatigue}`` holds for
        every entry.  ``baseline_missing`` defaults to "no baseline volume"
        when not given.
        """
        if not isinstance(data, dict):
            return data
        score = data.get("fatigue_score", data.get("fatigueScore"))
        try:
            has_load = float(score) > 0
        except (TypeError, ValueError):
            # Left to field validation.
            return data

        status = data.get("status")
        if not isinstance(status, str):
            return data
        derived = {
            key: value for key, value in data.items()
            if key not in ("fatigued", "under_trained", "underTrained")
        }
        derived["fatigued"] = status in FATIGUED_STATUSES
        derived["underTrained"] = status == "under-trained" and has_load
        if "baseline_missing" not in data and "baselineMissing" not in data:
            derived["baselineMissing"] = not data.get("baseline_volume", data.get("baselineVolume"))
        return derived


class FatigueTotals(SnapshotModel):
    """Whole-body aggregate of the per-muscle volumes."""

    last_7_days_volume: float = Field(..., ge=0.0, alias="last7DaysVolume")
    baseline_volume: Optional[float] = Field(None, ge=0.0)
    fatigue_score: float


class FatigueResult(SnapshotModel):
    """Immutable per-muscle fatigue snapshot."""

    generated_at: datetime.datetime
    window_days: int = Field(7, ge=1)
    baseline_weeks: int = Field(4, ge=1)
    per_muscle: list[MuscleFatigue] = Field(default_factory=list)
    deload_week_detected: bool = False
    readiness_score: float = Field(..., ge=0.0, le=100.0)
    fresh_muscles: list[str] = Field(default_factory=list)
    last_workout_at: Optional[datetime.datetime] = None
    totals: FatigueTotals

    @field_validator("per_muscle")
    @classmethod
    def _unique_muscle_keys(cls, value: list[MuscleFatigue]) -> list[MuscleFatigue]:
        seen: set[str] = set()
        for item in value:
            if item.muscle_group in seen:
                raise ValueError(f"duplicate muscleGroup '{item.muscle_group}'")
            seen.add(item.muscle_group)
        return value


class VolumeSnapshotRequest(SnapshotModel):
    """Raw per-muscle volumes from the aggregation feed."""

    last_7_days: dict[str, float] = Field(default_factory=dict, alias="last7Days")
    baseline_total: dict[str, float] = Field(
        default_factory=dict,
        description="Total volume over the baseline window (not per week)",
    )
    baseline_weeks: int = Field(4, ge=1)
    window_days: int = Field(7, ge=1)
    last_workout_at: Optional[datetime.datetime] = None
    generated_at: Optional[datetime.datetime] = None

    @field_validator("last_7_days", "baseline_total")
    @classmethod
    def _non_negative(cls, value: dict[str, float]) -> dict[str, float]:
        for muscle, volume in value.items():
            if volume < 0:
                raise ValueError(f"volume for '{muscle}' must be non-negative")
        return value
