"""
Structured logging for mayan-utils: timestamp, level, logger name, event_type.

Command output goes to stdout; logs always go to stderr so they never mix
with what a user pipes into another tool. Rendering is human-readable by
default (LOG_FORMAT=console) and JSON on request (LOG_FORMAT=json).

Uses only Python stdlib logging and structlog; no other mayan_cli imports to
avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

# Default log level from env; the CLI is quiet unless asked otherwise
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.WARNING)

LOG_FORMAT = os.getenv("LOG_FORMAT", "console").strip().lower()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type for JSON output."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_logging(level: int | str | None = None, log_format: str | None = None) -> None:
    """
    Configure structlog. Called once at import and again by the CLI once
    .env has been loaded, with LOG_LEVEL / LOG_FORMAT or the -v override.
    """
    if level is None:
        level_value = LOG_LEVEL_VALUE
    elif isinstance(level, str):
        level_value = getattr(logging, level.upper(), logging.WARNING)
    else:
        level_value = level
    fmt = (log_format or LOG_FORMAT).strip().lower()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
    ]
    if fmt == "json":
        processors.append(_normalize_event)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
        )
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


# One-time configuration on first import
if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

    The logger is lazy: every call resolves against the current structlog
    configuration, so configure_logging() after import still applies.

        logger = get_logger(__name__)
        logger.info("account_data_fetched", address=addr, size=137)
    """
    return structlog.get_logger(name, logger=name)
