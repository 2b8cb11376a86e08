"""Structured logging setup.

The library only emits events through ``structlog.get_logger()``. Applications
that want fluentcheck's output formatted call ``configure_logging()`` once at
startup.
"""

import logging
from typing import Optional

import structlog

from fluentcheck.config import get_settings


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """Configure structlog processors and the minimum log level.

    Args:
        level: Level name (``"debug"``, ``"info"``...). Defaults to ``LOG_LEVEL``.
        json_output: Render JSON lines instead of console output. Defaults to ``LOG_JSON``.
    """
    settings = get_settings()
    level_name = (level or settings.LOG_LEVEL).upper()
    use_json = settings.LOG_JSON if json_output is None else json_output

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level_name, logging.WARNING)),
        cache_logger_on_first_use=False,
    )
