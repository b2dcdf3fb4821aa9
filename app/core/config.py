"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "PushPull Recovery & Training-Recommendation Engine"
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["PushPull Team"]
    PROJECT_URL: str = "https://github.com/pushpull/pushpull-recovery"

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Readiness transform: percent = offset - (score - anchor) * slope
    READINESS_OFFSET: float = 120.0
    READINESS_ANCHOR_SCORE: float = 70.0
    READINESS_SLOPE: float = 1.2

    # Up-next matching
    TEMPLATE_MATCH_THRESHOLD: float = 85.0
    MAX_SPLIT_TAGS: int = 3

    # Recovery overview
    TOP_MUSCLES_LIMIT: int = 3

    # Body-map selection debounce
    SELECTION_DEBOUNCE_MS: int = 300

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
