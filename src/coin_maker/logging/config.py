# -*- coding: utf-8 -*-
"""Logging configuration: structlog over stdlib handlers, optional Logfire export.

configure_logging() is called once by the entry point. Uvicorn's loggers are
routed into the same handlers so server and access logs share one format.
"""

from __future__ import annotations

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Optional

import logfire
import structlog
from structlog.types import EventDict, Processor

from coin_maker.config import Settings, get_settings
from coin_maker.config.config import LoggingSettings
from coin_maker.utils.validation import mask_address

LOGFIRE_LEVELS: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Event keys that may carry a raw wallet address
WALLET_FIELDS = frozenset({"address", "buyer", "seller", "owner", "sender", "receiver"})


def _service_context(settings: Settings) -> Processor:
    """Processor attaching logger name and the static app identity to every event."""
    app = settings.app
    static: dict[str, Any] = {"app_name": app.app_name, "environment": app.environment}
    if app.service_name:
        static["service_name"] = app.service_name
    if app.service_version:
        static["service_version"] = app.service_version

    def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        stdlib_logger = getattr(logger, "_logger", None)
        event_dict["logger"] = (
            getattr(stdlib_logger, "name", None) or getattr(logger, "name", "") or ""
        )
        for key, value in static.items():
            event_dict.setdefault(key, value)
        return event_dict

    return add_service_context


def mask_wallet_fields(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask wallet addresses logged under well-known keys."""
    for key in WALLET_FIELDS.intersection(event_dict):
        value = event_dict[key]
        if isinstance(value, str):
            event_dict[key] = mask_address(value)
    return event_dict


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _build_handlers(cfg: LoggingSettings) -> list[logging.Handler]:
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
            when=cfg.log_file_when,
            interval=cfg.log_file_interval,
            backupCount=cfg.log_file_backup_count,
            encoding="utf-8",
            utc=cfg.log_file_utc,
        )
        rotating.setLevel(_level(cfg.file_level))
        handlers.append(rotating)
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def _route_uvicorn_loggers() -> None:
    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True


def _configure_logfire(settings: Settings) -> None:
    cfg = settings.logging
    logfire.configure(
        token=cfg.logfire_token,
        service_name=settings.app.service_name or settings.app.app_name,
        service_version=settings.app.service_version,
        environment=settings.app.environment,
        min_level=LOGFIRE_LEVELS.get(cfg.logfire_level, "info"),  # type: ignore[arg-type]
    )


def _renderer(cfg: LoggingSettings) -> Processor:
    # File output is always JSON; console follows json_format
    if cfg.log_to_file or cfg.json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure stdlib handlers, structlog processors and (optionally) Logfire."""
    settings = settings or get_settings()
    cfg = settings.logging

    handlers = _build_handlers(cfg)
    if handlers:
        logging.basicConfig(
            level=min(h.level for h in handlers),
            handlers=handlers,
            force=True,
        )
    _route_uvicorn_loggers()

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context(settings),
        mask_wallet_fields,
    ]
    if cfg.logfire_enabled:
        _configure_logfire(settings)
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]
    if handlers:
        processors.append(_renderer(cfg))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
