"""
Structured diagnostic logging: timestamp, level, event_type, request_id.

structlog with ISO timestamps and consistent keys. Modules use get_logger()
and log a snake_case event_type plus keyword fields. request_id is merged in
from contextvars while a request is being processed.

Uses only Python stdlib logging and structlog; no echo_mirror imports to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

# Default log level from env
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# JSON output by default (LOG_FORMAT=json); human-readable for local
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def configure_structlog() -> None:
    """Configure structlog once at import: level, UTC ISO timestamp, event_type, renderer."""
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
    ]
    if LOG_FORMAT == "json":
        shared_processors += [
            structlog.processors.EventRenamer("event_type"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        shared_processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# One-time configuration on first import
if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.warning("access_log_write_failed", path=str(path), error=str(e))
    Output (JSON): {"event_type": "access_log_write_failed", "path": "...", "error": "...",
                    "timestamp": "...", "level": "warning", "logger": "module.name"}
    """
    return structlog.get_logger(name).bind(logger=name)
