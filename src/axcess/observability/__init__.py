"""Observability for axcess: structured logging."""

from axcess.observability.logging import (
    LoggingConfig,
    LogMode,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    reset_logging,
    set_console_logging,
    unbind_context,
)

__all__ = [
    "LoggingConfig",
    "LogMode",
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "reset_logging",
    "set_console_logging",
]
