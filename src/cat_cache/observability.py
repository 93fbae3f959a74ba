"""Logging configuration for the cat cache server.

Events emitted by the service (all through structlog):

- request flow: ``http_request``, ``request_rejected``, ``request_failed``
- read-through: ``cache_hit``, ``cache_miss``, ``cache_entry_vanished``,
  ``cache_populated``, ``cache_populate_failed``
- upstream: ``upstream_not_found``, ``upstream_error``,
  ``upstream_request_failed``, ``upstream_bad_status``
- writes: ``image_replaced``, ``image_removed``
- lifecycle: ``server_started``, ``image_cache_initialized``,
  ``image_cache_shut_down``
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars


def _log_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        numeric = logging.getLevelName(level.strip().upper())
        if isinstance(numeric, int):
            return numeric
    return logging.INFO


def configure_logging(
    service_name: str,
    level: str | int | None = None,
    json_logs: bool | None = None,
) -> None:
    """Configure structlog for the server process.

    Args:
        service_name: Bound to every event as ``service``
        level: Minimum level name or number, INFO when unknown
        json_logs: Render JSON lines. Defaults to JSON unless stderr is a
            terminal, where the console renderer is easier to read.
    """
    numeric_level = _log_level(level)
    if json_logs is None:
        json_logs = not sys.stderr.isatty()

    # uvicorn's own loggers go through the stdlib root handler
    logging.basicConfig(level=numeric_level, format="%(message)s", stream=sys.stderr, force=True)

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        processors.append(structlog.processors.dict_tracebacks)

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )
    bind_contextvars(service=service_name)
