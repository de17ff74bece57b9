"""Centralized logging configuration for the grow backend."""

from __future__ import annotations

import logging
import os
from typing import Iterable

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Loggers that follow the backend level
ALIGNED_LOGGERS = ("growsim", "backend", "uvicorn", "uvicorn.error", "uvicorn.access")


def configure_logging(
    *,
    level: str | None = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    extra_loggers: Iterable[str] | None = None,
) -> logging.Logger:
    """Configure the root logger once and align the simulation/server loggers.

    Args:
        level: Explicit log level. Falls back to ``GROW_LOG_LEVEL``, then INFO.
        format: Log format string.
        datefmt: Date format string.
        extra_loggers: Additional logger names to align with the level.

    Returns:
        The backend application logger (``growsim.backend``).
    """
    raw_level = level if level is not None else os.getenv("GROW_LOG_LEVEL")
    resolved_level = (raw_level or "INFO").upper()
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)

    for name in (*ALIGNED_LOGGERS, *(extra_loggers or ())):
        logging.getLogger(name).setLevel(resolved_level)

    app_logger = logging.getLogger("growsim.backend")
    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger
