"""Logging setup for dto_persist."""

import logging
from typing import Optional

import structlog

from .config import get_settings


def configure_logging(level: Optional[str] = None) -> None:
    """Drop structlog events below ``level`` (default: ``Settings.log_level``).

    Loggers bound after this call pick up the new level.
    """
    name = (level or get_settings().log_level).upper()
    min_level = logging.getLevelName(name)
    if not isinstance(min_level, int):
        raise ValueError(f"Unknown log level: {name}")
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level))
