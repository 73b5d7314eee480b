# -*- coding: utf-8 -*-
"""Logging configuration for structlog + Logfire."""

from __future__ import annotations

import logging
import logfire
import structlog
from typing import Any
from structlog.types import EventDict, Processor
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from p2p_sell_bot.config import Settings, get_settings

LOGFIRE_LEVELS: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}


def _add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag every event with the logger name and the app/service identity."""
    stdlib_logger = getattr(logger, "_logger", None)
    event_dict["logger"] = (
        getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
    )
    app = get_settings().app
    event_dict["app_name"] = app.app_name
    if app.service_name:
        event_dict["service_name"] = app.service_name
    if app.service_version:
        event_dict["service_version"] = app.service_version
    event_dict["environment"] = app.environment
    return event_dict


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _build_handlers(settings: Settings) -> list[logging.Handler]:
    """Stdlib handlers for the enabled targets; structlog renders the message text."""
    cfg = settings.logging
    handlers: list[logging.Handler] = []

    if cfg.log_to_console:
        console = logging.StreamHandler()
        console.setLevel(_level(cfg.console_level))
        handlers.append(console)

    if cfg.log_to_file:
        path = Path(cfg.log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = TimedRotatingFileHandler(
            path,
            when="midnight",
            backupCount=cfg.log_file_backup_count,
            encoding="utf-8",
            utc=True,
        )
        rotating.setLevel(_level(cfg.file_level))
        handlers.append(rotating)

    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def _build_processors(settings: Settings) -> list[Processor]:
    cfg = settings.logging
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_context,
    ]
    if cfg.logfire_enabled:
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]

    # A log file always gets JSON lines; the console alone follows json_format.
    if cfg.log_to_console or cfg.log_to_file:
        if cfg.log_to_file or cfg.json_format:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """Configure stdlib handlers, optional Logfire and structlog (defaults to get_settings())."""
    settings = settings or get_settings()
    app = settings.app
    cfg = settings.logging

    handlers = _build_handlers(settings)
    if handlers:
        logging.basicConfig(
            level=min(h.level for h in handlers), handlers=handlers, force=True
        )

    if cfg.logfire_enabled:
        logfire.configure(
            token=cfg.logfire_token,
            service_name=app.service_name or app.app_name,
            service_version=app.service_version,
            min_level=LOGFIRE_LEVELS.get(cfg.logfire_level, "info"),  # type: ignore[arg-type]
            environment=app.environment,
        )

    structlog.configure(
        processors=_build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
