"""
Logging setup shared by the API and the scripts.
"""

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once, using ``LOG_LEVEL`` by default."""
    resolved = (level or settings.LOG_LEVEL).upper()
    if settings.DEBUG and level is None:
        resolved = "DEBUG"
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )
