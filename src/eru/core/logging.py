"""
Structured logging for eru, built on structlog.

Library code calls ``get_logger(__name__)`` and emits events with keyword
fields. Applications that want to see those events call
``configure_logging()`` once at startup.

Architecture:
    ::

        configure_logging(level="DEBUG", json_format=False, service="eru")
            ↓
        structlog processor chain:
          1. TimeStamper (iso)
          2. merge_contextvars
          3. add_log_level
          4. add_logger_name
          5. add_service_metadata
          6. JSONRenderer (or ConsoleRenderer for a tty)

        logger = get_logger(__name__)
        logger.debug("validation_failed", strategy="harvest_all", messages=2)

Examples:
    >>> from eru.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG", json_format=True)
    >>> get_logger(__name__).debug("event_happened", key="value")

Tags:
    logging, structlog, observability, eru-core

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from eru.core.errors import ConfigError
from eru.core.settings import LOG_LEVELS, get_settings


# Store service name for metadata
_SERVICE_NAME = "eru"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    service: str = "eru",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR); None reads ERU_LOG_LEVEL
        json_format: True for JSON, False for console, None reads ERU_JSON_LOGS
            and falls back to auto-detect (JSON if not a tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs

    Raises:
        ConfigError: If the level is not a standard logging level name
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(
            f"Unknown log level {level!r} (expected one of: {', '.join(LOG_LEVELS)})"
        )
    if json_format is None:
        json_format = settings.json_logs
    if json_format is None:
        json_format = not sys.stdout.isatty()

    global _SERVICE_NAME
    _SERVICE_NAME = service

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``).

    The logger writes through the stdlib logger of the same name, so library
    events stay silent until the application configures logging.
    """
    return structlog.wrap_logger(logging.getLogger(name))


def debug_enabled(name: str | None = None) -> bool:
    """Whether a debug event logged under *name* can reach any output.

    Once structlog is configured its wrapper class does the level filtering.
    Until then the stdlib logger of the same name decides, so unconfigured
    applications skip building the event entirely.
    """
    return structlog.is_configured() or logging.getLogger(name).isEnabledFor(logging.DEBUG)


__all__ = [
    "configure_logging",
    "get_logger",
    "debug_enabled",
]
