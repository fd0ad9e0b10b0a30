"""
Structured logging configuration using structlog.

Colored console output in development, JSON lines everywhere else.
Request IDs and batch IDs are carried in structlog contextvars, so a store
call made while handling a request or a batch change logs them without
passing them down explicitly.
"""

import logging
import sys
from contextlib import AbstractContextManager
from typing import Any

import structlog
from structlog.types import Processor

from batchcost.config.settings import get_settings

# Logger name prefix -> layer tag
_LAYERS = {
    "batchcost.api": "api",
    "batchcost.application": "application",
    "batchcost.core.services": "engine",
    "batchcost.infrastructure.events": "feed",
    "batchcost.infrastructure.storage": "storage",
}


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add application context to log events."""
    settings = get_settings()
    event_dict["app"] = settings.app_name
    event_dict["environment"] = settings.environment
    return event_dict


def add_layer(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Tag events with the architectural layer of the emitting module."""
    name = event_dict.get("logger") or ""
    for prefix, layer in _LAYERS.items():
        if name.startswith(prefix):
            event_dict.setdefault("layer", layer)
            break
    return event_dict


def log_context(**values: Any) -> AbstractContextManager:
    """Bind values to every log event emitted inside the block."""
    return structlog.contextvars.bound_contextvars(**values)


def configure_logging() -> None:
    """Configure structlog for the application."""
    settings = get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_layer,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if settings.environment == "development":
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    # request_completed covers access logging
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
