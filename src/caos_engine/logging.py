"""Structured logging configuration for the Caos engine."""

import logging
from typing import Any

import structlog
from structlog.stdlib import LoggerFactory

from caos_engine.config import get_settings


def configure_logging(level: str | None = None, json_format: bool | None = None) -> None:
    """Configure structlog and the standard library logger.

    Args:
        level: Logging level name, defaults to the configured ``log_level``
        json_format: Render JSON lines instead of console output, defaults to
            ``log_format == "json"``
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    if json_format is None:
        json_format = settings.log_format == "json"

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=getattr(logging, level),
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )
