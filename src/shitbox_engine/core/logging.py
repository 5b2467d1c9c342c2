"""Structured logging for the Shitbox simulation engine.

Engine modules log through structlog with key/value context instead of
formatted strings. The host application calls ``configure_logging`` (or
``configure_from_settings``) once at startup; until then structlog's
defaults apply, which is what the test suite relies on.

Logging is an observer only: nothing logged here ever feeds back into a
simulated outcome.

Example:
    >>> from shitbox_engine.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Day rolled over", day=4, days_without_food=1)
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor

from shitbox_engine.core.constants import ENGINE_VERSION


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from shitbox_engine.core.config import Settings


_STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def add_engine_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Tag every entry with the engine name and version.

    Args:
        logger: The wrapped logger instance.
        method_name: Name of the logging method called.
        event_dict: The event dictionary to modify.

    Returns:
        The event dictionary with engine context added.
    """
    event_dict.setdefault("app", "shitbox_engine")
    event_dict.setdefault("engine_version", ENGINE_VERSION)
    return event_dict


def build_processors(*, json_format: bool) -> list[Processor]:
    """Assemble the processor chain.

    Context bound with ``bind_context`` (the session binds ``save_id``) is
    merged first so it appears on every entry.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_engine_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure engine-wide logging.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Emit JSON lines instead of console output.
        log_file: Optional path that also receives stdlib log records.

    Example:
        >>> configure_logging(level="DEBUG", json_format=False)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=build_processors(json_format=json_format),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Host applications embedding the engine may still log through stdlib
    logging.basicConfig(format=_STDLIB_FORMAT, level=numeric_level, stream=sys.stdout, force=True)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(_STDLIB_FORMAT))
        logging.getLogger().addHandler(file_handler)


def configure_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from application settings.

    Debug mode forces DEBUG level regardless of ``log_level``.
    """
    if settings is None:
        from shitbox_engine.core.config import get_settings

        settings = get_settings()

    configure_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_format=settings.json_logs,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Activity performed", activity="work_warehouse", hours=4)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context included in every later log entry on this thread or task.

    Example:
        >>> bind_context(save_id="5f0c...")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


__all__ = [
    "add_engine_context",
    "build_processors",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]
