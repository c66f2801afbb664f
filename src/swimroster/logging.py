"""Structured logging for swimroster.

Usage:
    from swimroster.logging import get_logger, configure_logging

    # Once, at CLI or API startup
    configure_logging()

    logger = get_logger(__name__)
    logger.info("preset_catalog_ensured", inserted=12)

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
    LOG_FORMAT: json, console (default: console, json in production)
    ENVIRONMENT: local, development, production (default: local)
"""

import logging
import os
import sys
from typing import Any

import structlog

SERVICE_NAME = "swimroster"


def _get_environment() -> str:
    return os.getenv("ENVIRONMENT", "local").lower()


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def _resolve_format(log_format: str | None) -> str:
    explicit = log_format or os.getenv("LOG_FORMAT")
    if explicit:
        return explicit.lower()
    return "json" if _get_environment() == "production" else "console"


def _add_service(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Tag every entry with the service and environment it came from."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict["environment"] = _get_environment()
    return event_dict


def configure_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Log level name; falls back to LOG_LEVEL
        log_format: "json" or "console"; falls back to LOG_FORMAT / environment
    """
    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _add_service,
    ]

    if _resolve_format(log_format) == "json":
        renderer: list[structlog.typing.Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=[*shared_processors, *renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Log to stderr so CLI table output on stdout stays clean
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=_resolve_level(level),
    )

    for noisy in ("httpx", "httpcore", "supabase", "postgrest"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger, typically with __name__ of the calling module."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context (e.g. meet="Dual A") to all subsequent log entries."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear bound context variables."""
    structlog.contextvars.clear_contextvars()
