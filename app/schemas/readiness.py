"""
Readiness schemas.

Readiness is the 0-100 display metric derived from a muscle's fatigue
score.  It is never stored: every render recomputes it from the
:class:`~app.schemas.fatigue.MuscleFatigue` it came from.

    100 = fully rested
      0 = fully fatigued

Two labelling scales exist and are intentionally kept apart:

- per muscle:   Fresh / Ready / Caution / Fatigued
- whole body:   Fresh / Ready to train / Rest recommended / Needs rest
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.fatigue import MuscleFatigue, SnapshotModel


class ReadinessBand(BaseModel):
    """One row of a readiness banding table."""

    model_config = ConfigDict(frozen=True)

    lower_bound: int = Field(..., ge=0, le=100, description="Inclusive lower bound")
    label: str
    color: str


class Readiness(SnapshotModel):
    """Derived readiness of one muscle group."""

    percent: int = Field(..., ge=0, le=100)
    label: str = Field(..., description="One of: Fresh, Ready, Caution, Fatigued")
    color: str = Field(..., description="CSS rgba() string from the red gradient")


class MuscleReadiness(SnapshotModel):
    """A muscle entry paired with its derived readiness and list hint."""

    muscle: MuscleFatigue
    readiness: Readiness
    hint: Optional[str] = Field(
        None,
        description="Needs rest / Good to target / Building baseline",
    )

    @property
    def muscle_group(self) -> str:
        return self.muscle.muscle_group
