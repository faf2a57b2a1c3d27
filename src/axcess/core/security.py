"""Security utilities for axcess.

Masks API keys and other secrets before they reach logs.
"""

from typing import Any

SENSITIVE_FIELD_NAMES = frozenset(
    {
        "password",
        "api_key",
        "apikey",
        "api-key",
        "secret",
        "token",
        "credential",
        "auth",
        "private",
        "bearer",
        "authorization",
    }
)

# Token-count fields carry "token" in their names but are not secrets
_NON_SENSITIVE_FIELDS = frozenset(
    {
        "input_tokens",
        "output_tokens",
        "total_tokens",
        "estimated_input_tokens",
        "max_output_tokens",
        "target_max_output_tokens",
    }
)

SENSITIVE_PREFIXES = (
    "sk-",
    "pk-",
    "bearer ",
    "token ",
    "secret_",
    "AIza",
)


def mask_api_key(api_key: str, visible_chars: int = 4) -> str:
    """Mask an API key for safe logging/display.

    Example:
        >>> mask_api_key("sk-1234567890abcdef")
        'sk-...cdef'
    """
    if not api_key:
        return "<empty>"

    if len(api_key) <= visible_chars + 4:
        return "*" * len(api_key)

    if "-" in api_key[:6]:
        prefix_end = api_key.index("-") + 1
        return f"{api_key[:prefix_end]}...{api_key[-visible_chars:]}"

    return f"...{api_key[-visible_chars:]}"


def is_sensitive_field(field_name: str) -> bool:
    """Check if a field name indicates sensitive data."""
    if not field_name:
        return False

    field_lower = field_name.lower()
    if field_lower in _NON_SENSITIVE_FIELDS:
        return False
    return any(sensitive in field_lower for sensitive in SENSITIVE_FIELD_NAMES)


def is_sensitive_value(value: Any) -> bool:
    """Check if a value looks like a secret (API key, bearer token)."""
    if not isinstance(value, str):
        return False

    value_lower = value.lower()
    return any(value_lower.startswith(prefix.lower()) for prefix in SENSITIVE_PREFIXES)


def sanitize_for_logging(data: dict[str, Any]) -> dict[str, Any]:
    """Create a copy of data with sensitive values masked.

    Example:
        >>> sanitize_for_logging({"api_key": "sk-secret123", "alias": "fast"})
        {'api_key': '<REDACTED>', 'alias': 'fast'}
    """
    result: dict[str, Any] = {}
    for key, value in data.items():
        if is_sensitive_field(key):
            result[key] = "<REDACTED>"
        elif isinstance(value, str) and is_sensitive_value(value):
            result[key] = mask_api_key(value)
        elif isinstance(value, dict):
            result[key] = sanitize_for_logging(value)
        else:
            result[key] = value
    return result
