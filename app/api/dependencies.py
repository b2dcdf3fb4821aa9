"""
Shared API dependencies.

Reusable FastAPI dependencies for the engine policy.
"""

from functools import lru_cache

from app.recovery.policy import RecoveryPolicy


@lru_cache
def get_policy() -> RecoveryPolicy:
    """Engine policy built once from the application settings."""
    return RecoveryPolicy.from_settings()
