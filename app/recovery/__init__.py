"""Recovery engine — readiness, fatigue classification, ranking, up-next matching."""

from app.recovery.overview import build_recovery_overview
from app.recovery.readiness import readiness_from_fatigue_score
from app.recovery.up_next import resolve_up_next_card

__all__ = ["build_recovery_overview", "readiness_from_fatigue_score", "resolve_up_next_card"]
