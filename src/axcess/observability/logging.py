"""Structured logging configuration for axcess.

Configures structlog for the router and delegate. Development mode renders
human-readable console lines; production mode emits JSON.

Features:
- ISO 8601 timestamps
- Log level in all entries
- contextvars integration so request-scoped keys follow async calls
- Masking of API keys and other secrets
- Optional daily-rotated log file

Standard log keys:
- alias: Routing alias of the candidate
- provider: Backend provider name
- model: Backend model identifier
- attempt: Zero-based candidate index inside the fallback chain

Event naming convention:
- dot.notation, domain.entity.verb_past_tense
  (e.g., "routing.decision.made", "delegate.attempt.failed")

Usage:
    from axcess.observability import configure_logging, get_logger, bind_context

    configure_logging(LoggingConfig(mode=LogMode.DEV))
    log = get_logger(__name__)
    bind_context(request_id="req_123")
    log.info("delegate.attempt.started", alias="fast", attempt=0)
"""

from __future__ import annotations

from enum import Enum
import logging
from logging.handlers import TimedRotatingFileHandler
import os
from pathlib import Path
import sys
from typing import Any

from pydantic import BaseModel, Field
import structlog

from axcess.core.security import is_sensitive_field, is_sensitive_value, mask_api_key


class LogMode(str, Enum):
    """Logging output mode."""

    DEV = "dev"
    PROD = "prod"


class LoggingConfig(BaseModel):
    """Configuration for structured logging.

    Attributes:
        mode: Output mode (dev for human-readable, prod for JSON).
        log_level: Minimum log level to output.
        log_dir: Directory for log files. Defaults to ~/.axcess/logs/.
        max_log_days: Number of days to retain log files.
        enable_file_logging: Whether to also write JSON lines to a file.
    """

    mode: LogMode = Field(default=LogMode.DEV)
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default_factory=lambda: Path.home() / ".axcess" / "logs")
    max_log_days: int = Field(default=7, ge=1, le=365)
    enable_file_logging: bool = Field(default=False)

    model_config = {"frozen": True}


_configured: bool = False
_current_config: LoggingConfig | None = None
_console_logging_enabled: bool = True


def _config_from_env() -> LoggingConfig:
    """Build a LoggingConfig from AXCESS_LOG_MODE / AXCESS_LOG_LEVEL / AXCESS_LOG_FILE."""
    prod = os.environ.get("AXCESS_LOG_MODE", "dev").lower() == "prod"
    mode = LogMode.PROD if prod else LogMode.DEV
    return LoggingConfig(
        mode=mode,
        log_level=os.environ.get("AXCESS_LOG_LEVEL", "INFO"),
        enable_file_logging=os.environ.get("AXCESS_LOG_FILE", "").lower() in ("1", "true", "yes"),
    )


def _get_log_level(level_str: str) -> int:
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(level_str.upper(), logging.INFO)


def _setup_file_handler(config: LoggingConfig) -> TimedRotatingFileHandler | None:
    """Create the midnight-rotating file handler, or None when disabled."""
    if not config.enable_file_logging:
        return None

    config.log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=str(config.log_dir / "axcess.log"),
        when="midnight",
        interval=1,
        backupCount=config.max_log_days,
        encoding="utf-8",
        utc=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(_get_log_level(config.log_level))
    return handler


def _mask_sensitive_data(
    _logger: Any,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor that masks secrets in log entries."""
    for key, value in list(event_dict.items()):
        if key in ("event", "level", "timestamp", "filename", "lineno"):
            continue

        if is_sensitive_field(key):
            event_dict[key] = "<REDACTED>"
        elif isinstance(value, str) and is_sensitive_value(value):
            event_dict[key] = mask_api_key(value)
        elif isinstance(value, dict):
            event_dict[key] = _mask_dict_sensitive_data(value)

    return event_dict


def _mask_dict_sensitive_data(data: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in data.items():
        if is_sensitive_field(key):
            result[key] = "<REDACTED>"
        elif isinstance(value, str) and is_sensitive_value(value):
            result[key] = mask_api_key(value)
        elif isinstance(value, dict):
            result[key] = _mask_dict_sensitive_data(value)
        else:
            result[key] = value
    return result


def _get_processors(mode: LogMode) -> list[Any]:
    """Build the processor chain ending in the mode's renderer."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _mask_sensitive_data,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if mode == LogMode.DEV:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    return processors


def set_console_logging(enabled: bool) -> None:
    """Enable or disable log output on stderr.

    The CLI turns this off while it renders results so logs do not
    interleave with Rich output.
    """
    global _console_logging_enabled
    _console_logging_enabled = enabled


class _StderrFileLogger:
    """Print logger writing to stderr and, optionally, a file handler."""

    def __init__(self, file_handler: TimedRotatingFileHandler | None = None) -> None:
        self._file_handler = file_handler

    def _log(self, message: str, level: int = logging.INFO) -> None:
        if _console_logging_enabled:
            print(message, file=sys.stderr)

        if self._file_handler:
            record = logging.LogRecord(
                name="axcess",
                level=level,
                pathname="",
                lineno=0,
                msg=message,
                args=(),
                exc_info=None,
            )
            self._file_handler.emit(record)

    def msg(self, message: str) -> None:
        self._log(message, logging.INFO)

    def debug(self, message: str) -> None:
        self._log(message, logging.DEBUG)

    def info(self, message: str) -> None:
        self._log(message, logging.INFO)

    def warning(self, message: str) -> None:
        self._log(message, logging.WARNING)

    warn = warning

    def error(self, message: str) -> None:
        self._log(message, logging.ERROR)

    def critical(self, message: str) -> None:
        self._log(message, logging.CRITICAL)

    fatal = critical
    exception = error


class _StderrFileLoggerFactory:
    def __init__(self, file_handler: TimedRotatingFileHandler | None = None) -> None:
        self._file_handler = file_handler

    def __call__(self, *_args: Any) -> _StderrFileLogger:
        return _StderrFileLogger(self._file_handler)


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure structlog for the application.

    Call once at startup. Without a config, settings come from the
    AXCESS_LOG_* environment variables.

    Example:
        configure_logging(LoggingConfig(mode=LogMode.PROD, log_level="DEBUG"))
    """
    global _configured, _current_config

    if config is None:
        config = _config_from_env()

    _current_config = config
    log_level = _get_log_level(config.log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler = _setup_file_handler(config)
    if file_handler:
        root_logger.addHandler(file_handler)

    structlog.configure(
        processors=_get_processors(config.mode),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=_StderrFileLoggerFactory(file_handler),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger, configuring defaults on first use.

    Example:
        log = get_logger(__name__)
        log.info("routing.decision.made", alias="reasoning")
    """
    if not _configured:
        configure_logging()

    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind request-scoped keys to every subsequent log entry.

    IMPORTANT: Never bind API keys or credentials.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove keys from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


def get_current_config() -> LoggingConfig | None:
    """Return the active LoggingConfig, or None before configuration."""
    return _current_config


def is_configured() -> bool:
    """Check if configure_logging has been called."""
    return _configured


def reset_logging() -> None:
    """Reset logging configuration state. Intended for tests."""
    global _configured, _current_config
    _configured = False
    _current_config = None
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
