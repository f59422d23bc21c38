"""Structured logging configuration for nodegate.

Prerequisite checks run inside somebody else's scheduler, so every event is a
snake_case name plus keyword context (``node``, ``item``, ``returncode``,
``output``) rather than a formatted sentence.

- Pretty console output by default
- JSON output when NODEGATE_LOG_FORMAT=json
- Level taken from NODEGATE_LOG_LEVEL (default INFO)

Usage:
    from nodegate.logging import configure_logging, get_logger

    configure_logging()

    log = get_logger(__name__).bind(node="agent-7")
    log.warning("prerequisite_script_failed", returncode=3, output="...")
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

__all__ = [
    "get_logger",
    "configure_logging",
    "bind_context",
    "clear_context",
]

LOG_FORMAT_ENV_VAR = "NODEGATE_LOG_FORMAT"

LOG_LEVEL_ENV_VAR = "NODEGATE_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"


def _get_log_level() -> int:
    """Get the log level from environment or default.

    Returns:
        Logging level constant (e.g., logging.INFO).
    """
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, level_name, logging.INFO)


def _is_json_output() -> bool:
    return os.environ.get(LOG_FORMAT_ENV_VAR, "").lower() == "json"


def _get_shared_processors() -> list[Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _get_renderer(use_json: bool) -> Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    force_json: bool = False,
    level: int | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Safe to call more than once; each call replaces the previous handler.

    Args:
        force_json: Force JSON output regardless of NODEGATE_LOG_FORMAT.
        level: Override log level. If None, reads NODEGATE_LOG_LEVEL.
    """
    use_json = force_json or _is_json_output()
    log_level = level if level is not None else _get_log_level()

    structlog.configure(
        processors=[
            *_get_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Script output goes to stdout via the CLI, diagnostics go to stderr
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    processors: list[Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta
    ]
    if use_json:
        processors.append(structlog.processors.dict_tracebacks)
    processors.append(_get_renderer(use_json))
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=processors,
            foreign_pre_chain=_get_shared_processors(),
        )
    )
    root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name, usually ``__name__``.

    Returns:
        A bound structlog logger.
    """
    log: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return log


def bind_context(**context: Any) -> None:
    """Bind context variables included in every subsequent log event.

    Uses structlog's contextvars, so the binding follows the current task.

    Args:
        **context: Key-value pairs to bind to log context.
    """
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
