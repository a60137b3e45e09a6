"""Structured logging configuration using structlog.

Library code only calls ``structlog.get_logger()``; applications call
``configure_logging`` once at startup to choose level and renderer.
"""

from __future__ import annotations

import logging
from typing import IO, TYPE_CHECKING

import structlog
from structlog.contextvars import merge_contextvars

if TYPE_CHECKING:
    from readthrough_core.config.settings import Settings

# Third-party loggers kept at WARNING or above
_QUIET_LOGGERS = ("redis", "asyncio")


def configure_logging(settings: Settings, *, stream: IO[str] | None = None) -> None:
    """Route structlog and stdlib logging through one formatter.

    Args:
        settings: Supplies ``log_level`` and ``log_format`` (console or json).
        stream: Output stream for the root handler; stderr by default.
    """
    shared_processors = _shared_processors()
    level = _resolve_level(settings.log_level)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _build_renderer(settings.log_format),
            ],
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def _shared_processors() -> list[structlog.types.Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _build_renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def _resolve_level(level_name: str) -> int:
    """Convert a level name to a logging level int, defaulting to INFO."""
    return logging.getLevelNamesMapping().get(level_name.upper(), logging.INFO)
