"""Structured logging configuration."""

import logging
import sys

import structlog

from planner.core.config import settings

logger = structlog.get_logger()


def setup_logging(level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure structlog for the planner.

    Args:
        level: Log level name, defaults to settings.log_level
        log_format: "console" or "json", defaults to settings.log_format
    """
    level_name = (level or settings.log_level).upper()
    numeric_level = logging.getLevelNamesMapping().get(level_name, logging.INFO)
    renderer_name = log_format or settings.log_format

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    renderer: structlog.typing.Processor
    if renderer_name == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=True,
    )

    logger.info("logging_configured", level=level_name, format=renderer_name)
