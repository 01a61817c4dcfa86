"""Logging configuration shared by the CMS client modules."""

from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_from_env(default: int) -> int:
    name = os.getenv("CMS_LOG_LEVEL", "").upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logging(
    level: int = logging.INFO,
    module_name: str = "cms",
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Calling it twice for the same name returns the already configured
    logger without stacking handlers.

    Args:
        level: Logging level (default INFO). CMS_LOG_LEVEL overrides it.
        module_name: Name for the logger instance.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    level = _level_from_env(level)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    return logger
