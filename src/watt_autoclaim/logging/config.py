# -*- coding: utf-8 -*-
"""Logging configuration for structlog + Logfire.

Console and file receive the same audit stream. The default renderer writes
``[ISO timestamp] [LEVEL] event key=value ...`` lines; LOGGING__JSON_FORMAT
switches both outputs to JSON.
"""

from __future__ import annotations

import logging
import logfire
import structlog
from typing import Any
from structlog.types import EventDict, Processor
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from watt_autoclaim.config import Settings, get_settings

# Map standard logging levels to Logfire levels
LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

_AUDIT_SKIP_KEYS = frozenset({"timestamp", "level", "event", "logger", "exception"})


def _add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Attach logger name, app_name, service_version and environment to every log event."""
    stdlib_logger = getattr(logger, "_logger", None)
    event_dict["logger"] = (
        getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
    )
    app_settings = get_settings().app
    event_dict["app_name"] = app_settings.app_name
    if app_settings.service_version:
        event_dict["service_version"] = app_settings.service_version
    event_dict["environment"] = app_settings.environment
    return event_dict


def render_audit_line(logger: Any, method_name: str, event_dict: EventDict) -> str:
    """Render an event as ``[timestamp] [LEVEL] event key=value ...``.

    A formatted traceback (``exception`` key) is appended on the following lines.
    """
    timestamp = event_dict.get("timestamp", "")
    level = str(event_dict.get("level", method_name)).upper()
    parts = [f"[{timestamp}] [{level}] {event_dict.get('event', '')}"]
    for key, value in event_dict.items():
        if key in _AUDIT_SKIP_KEYS:
            continue
        parts.append(f"{key}={value}")
    line = " ".join(parts)
    exception = event_dict.get("exception")
    if exception:
        line = f"{line}\n{exception}"
    return line


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog + Logfire using settings."""
    settings = settings or get_settings()
    app_settings = settings.app
    logging_settings = settings.logging

    handlers: list[logging.Handler] = []
    enabled_levels: list[int] = []

    if logging_settings.log_to_console:
        console_level = getattr(
            logging, logging_settings.console_level.upper(), logging.INFO
        )
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)
        enabled_levels.append(console_level)

    if logging_settings.log_to_file:
        file_level = getattr(logging, logging_settings.file_level.upper(), logging.INFO)
        log_file_path = Path(logging_settings.log_file_path)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = TimedRotatingFileHandler(
            log_file_path,
            when=logging_settings.log_file_when,
            interval=logging_settings.log_file_interval,
            backupCount=logging_settings.log_file_backup_count,
            encoding="utf-8",
            utc=logging_settings.log_file_utc,
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)
        enabled_levels.append(file_level)

    if handlers:
        logging.basicConfig(level=min(enabled_levels), handlers=handlers, force=True)

    # Configure Logfire only if enabled
    if logging_settings.logfire_enabled:
        logfire_min_level = LOG_LEVEL_TO_LOGFIRE.get(
            logging_settings.logfire_level, "info"
        )

        logfire.configure(
            token=logging_settings.logfire_token,
            service_name=app_settings.app_name,
            service_version=app_settings.service_version,
            min_level=logfire_min_level,  # type: ignore[arg-type]
            environment=app_settings.environment,
        )

    structured = logging_settings.json_format or logging_settings.logfire_enabled

    # Build processor chain
    processors: list[Processor] = [
        # Filter by level first (before processing)
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if structured:
        processors.append(_add_service_context)

    # Add Logfire processor only if enabled
    if logging_settings.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]

    processors.append(structlog.processors.format_exc_info)
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if logging_settings.json_format
        else render_audit_line
    )
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
