"""Logging configuration for the fintrack service."""

import logging
import sys

from fintrack.config.settings import get_settings

LOGGER_NAME = "fintrack"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging() -> logging.Logger:
    """Configure the ``fintrack`` logger tree from settings and return its root."""
    settings = get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    # Store SQL is logged only on request
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return logger
