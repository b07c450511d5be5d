"""
calrender.logging_config
------------------------
structlog setup. Library modules only call ``structlog.get_logger()``; the
CLI (or an embedding application) calls ``configure_logging`` once.

Rendered events are handed to the stdlib ``logging`` module, whose handlers
look after the stream. A failed write is reported through
``logging.Handler.handleError`` and never reaches the rendering pipeline.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

from .settings import EngineSettings, get_settings

_configured = False


def configure_logging(settings: Optional[EngineSettings] = None, *, force: bool = False) -> None:
    """
    JSON lines when ``log_format == "json"``, plain console text otherwise.

    Repeated calls are no-ops unless ``force`` is set.
    """
    global _configured
    if _configured and not force:
        return

    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # one stderr handler on the root logger, shared with svglib and reportlab
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    _configured = True
