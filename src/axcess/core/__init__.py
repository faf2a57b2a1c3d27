"""axcess core module - shared types, errors, and security helpers."""

from axcess.core.errors import (
    AxcessError,
    ConfigError,
    DelegationError,
    ErrorKind,
    ProviderError,
    RoutingError,
    ToolOutputError,
    ValidationError,
)
from axcess.core.security import mask_api_key, sanitize_for_logging
from axcess.core.types import Alias, ModelKey, Result, TokenCount

__all__ = [
    # Types
    "Result",
    "Alias",
    "ModelKey",
    "TokenCount",
    # Errors
    "AxcessError",
    "ConfigError",
    "RoutingError",
    "ErrorKind",
    "ProviderError",
    "DelegationError",
    "ValidationError",
    "ToolOutputError",
    # Security utilities
    "mask_api_key",
    "sanitize_for_logging",
]
