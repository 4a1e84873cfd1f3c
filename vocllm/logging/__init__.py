"""Logging helpers and context utilities."""

from .context import (
    LoggingConfig,
    log_context,
    set_log_context,
    reset_log_context,
    configure_logging,
    install_log_context,
    current_log_context,
)

__all__ = [
    "LoggingConfig",
    "configure_logging",
    "current_log_context",
    "install_log_context",
    "log_context",
    "reset_log_context",
    "set_log_context",
]
