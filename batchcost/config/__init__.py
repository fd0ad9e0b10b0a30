"""Configuration module."""

from batchcost.config.logging import configure_logging, get_logger, log_context
from batchcost.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
    "log_context",
]
