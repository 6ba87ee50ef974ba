"""Logging configuration for the marketplace.

structlog renders through the standard library so that uvicorn, protean and
marketplace loggers share handlers and levels. Level, renderer and log
directory come from ``Settings`` (``MARKETPLACE_LOG_*``); when unset they
follow the deployment environment.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

from marketplace.config import Settings, get_settings

ENV_LOG_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

JSON_ENVIRONMENTS = ("production", "staging")

# Libraries that are noisy below WARNING
QUIET_LOGGERS = ("asyncio", "protean", "redis")


def current_environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def resolve_log_level(settings: Settings) -> str:
    if settings.log_level:
        return settings.log_level.upper()
    return ENV_LOG_LEVELS.get(current_environment(), "INFO")


def resolve_log_format(settings: Settings) -> str:
    if settings.log_format:
        return settings.log_format
    return "json" if current_environment() in JSON_ENVIRONMENTS else "console"


def _rotating_file(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(level: str, log_dir: Path) -> None:
    """Console plus rotating files; ERROR and above also go to a separate file.

    Settlement failures are logged at ERROR, so ``marketplace_error.log`` is
    the reconciliation feed.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_file(log_dir / "marketplace.log", level),
        _rotating_file(log_dir / "marketplace_error.log", logging.ERROR),
    ]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def build_processors(log_format: str) -> list:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
            )
        )
    return processors


def setup_structlog(log_format: str) -> None:
    structlog.configure(
        processors=build_processors(log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure all logging for the application. Call once at startup."""
    settings = settings or get_settings()
    setup_stdlib_logging(resolve_log_level(settings), Path(settings.log_dir))
    setup_structlog(resolve_log_format(settings))


def add_context(**kwargs: Any) -> None:
    """Bind values into every log line emitted from the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
