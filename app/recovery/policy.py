"""
Tunable policy constants for the recovery engine.

The readiness transform constants (120 / 70 / 1.2) and the 85-point
template match threshold are behavioural contracts with no derivation
behind them.  They are kept here, unchanged, as configuration so that a
future change of the fatigue-score scale is a settings change rather
than a code change.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# ======================================================================
# Defaults
# ======================================================================

_READINESS_OFFSET = 120.0
_READINESS_ANCHOR_SCORE = 70.0
_READINESS_SLOPE = 1.2
_TEMPLATE_MATCH_THRESHOLD = 85.0
_MAX_SPLIT_TAGS = 3
_TOP_MUSCLES_LIMIT = 3
_SELECTION_DEBOUNCE_MS = 300


class RecoveryPolicy(BaseModel):
    """Policy knobs shared by every engine component."""

    model_config = ConfigDict(frozen=True)

    readiness_offset: float = Field(default=_READINESS_OFFSET)
    readiness_anchor_score: float = Field(default=_READINESS_ANCHOR_SCORE)
    readiness_slope: float = Field(default=_READINESS_SLOPE, gt=0.0)
    template_match_threshold: float = Field(default=_TEMPLATE_MATCH_THRESHOLD, ge=0.0, le=100.0)
    max_split_tags: int = Field(default=_MAX_SPLIT_TAGS, ge=0)
    top_muscles_limit: int = Field(default=_TOP_MUSCLES_LIMIT, ge=0)
    selection_debounce_ms: int = Field(default=_SELECTION_DEBOUNCE_MS, ge=0)

    @classmethod
    def from_settings(cls) -> RecoveryPolicy:
        """Build a policy from the application settings."""
        from app.core.config import settings

        return cls(
            readiness_offset=settings.READINESS_OFFSET,
            readiness_anchor_score=settings.READINESS_ANCHOR_SCORE,
            readiness_slope=settings.READINESS_SLOPE,
            template_match_threshold=settings.TEMPLATE_MATCH_THRESHOLD,
            max_split_tags=settings.MAX_SPLIT_TAGS,
            top_muscles_limit=settings.TOP_MUSCLES_LIMIT,
            selection_debounce_ms=settings.SELECTION_DEBOUNCE_MS,
        )


DEFAULT_POLICY = RecoveryPolicy()
