"""Error hierarchy for axcess.

These exceptions are raised for programming errors and are used as the
error side of Result for expected failures.

Exception Hierarchy:
    AxcessError (base)
    ├── ConfigError       - Malformed models catalog or policy files
    ├── RoutingError      - Absent prompt, unknown alias or model
    ├── ProviderError     - Normalized backend failure, tagged with ErrorKind
    ├── DelegationError   - Every candidate in the fallback chain failed
    └── ValidationError   - Input or output shape checks
        └── ToolOutputError - Delegated text rejected by a tool post-processor
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from axcess.delegate.models import AttemptLog


class AxcessError(Exception):
    """Base exception for all axcess errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dict with additional context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigError(AxcessError):
    """Error from configuration loading or validation.

    Fatal at startup: the router cannot run without a valid catalog and
    policy set.

    Attributes:
        config_key: Dotted path of the field that failed.
        config_file: Path to the offending file if applicable.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        config_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.config_key = config_key
        self.config_file = config_file


class RoutingError(AxcessError):
    """Error raised while routing a single request.

    Attributes:
        target: The alias or model key that could not be resolved, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        target: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.target = target


class ErrorKind(StrEnum):
    """Category of a provider failure."""

    AUTH = "auth"
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    UNKNOWN = "unknown"


class ProviderError(AxcessError):
    """Normalized failure from a provider handler.

    The message is prefixed with the provider name (``"anthropic: ..."``)
    so aggregated delegation errors stay readable without log correlation.

    Attributes:
        provider: Name of the provider (e.g., "openai", "anthropic").
        kind: Failure category.
        status_code: HTTP status code if applicable.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        kind: ErrorKind = ErrorKind.UNKNOWN,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.provider = provider
        self.kind = kind
        self.status_code = status_code

    @classmethod
    def from_exception(
        cls,
        exc: Exception,
        *,
        provider: str | None = None,
        kind: ErrorKind = ErrorKind.UNKNOWN,
    ) -> ProviderError:
        """Wrap an SDK exception, keeping the original as ``__cause__``."""
        prefix = f"{provider}: " if provider else ""
        error = cls(
            f"{prefix}{exc}",
            provider=provider,
            kind=kind,
            status_code=getattr(exc, "status_code", None),
            details={"original_exception": type(exc).__name__},
        )
        error.__cause__ = exc
        return error


class DelegationError(AxcessError):
    """Every candidate in the fallback chain failed.

    Attributes:
        attempts: The attempt log, in the order candidates were tried.
    """

    def __init__(
        self,
        message: str,
        *,
        attempts: tuple[AttemptLog, ...] = (),
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.attempts = attempts

    @classmethod
    def from_attempts(cls, attempts: tuple[AttemptLog, ...]) -> DelegationError:
        """Build the aggregate error embedding every failure message in order."""
        errors = [attempt.error for attempt in attempts if attempt.error]
        message = f"All delegation attempts failed ({'; '.join(errors)})."
        return cls(message, attempts=attempts)


class ValidationError(AxcessError):
    """Error from data validation operations.

    Attributes:
        field: The field that failed validation.
        value: The invalid value if safe to include.

    Security Note:
        Use safe_value instead of value when logging.
    """

    _SENSITIVE_FIELDS = frozenset({
        "password", "api_key", "secret", "token", "credential",
        "auth", "key", "private", "apikey", "api-key",
    })

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.value = value

    @property
    def safe_value(self) -> str:
        """Return a masked or truncated representation of the value."""
        if self.value is None:
            return "<None>"

        if self.field:
            field_lower = self.field.lower()
            if any(sensitive in field_lower for sensitive in self._SENSITIVE_FIELDS):
                return "<REDACTED>"

        if isinstance(self.value, str):
            if len(self.value) > 50:
                return f"{self.value[:20]}...({len(self.value)} chars)"
            return repr(self.value)

        return f"<{type(self.value).__name__}>"

    def __str__(self) -> str:
        base = self.message
        if self.field:
            base = f"{base} (field: {self.field}, value: {self.safe_value})"
        if self.details:
            base = f"{base} (details: {self.details})"
        return base


class ToolOutputError(ValidationError):
    """Delegated output or tool input rejected by a tool.

    Attributes:
        tool: Name of the tool (e.g., "delegate.diff").
    """

    def __init__(
        self,
        message: str,
        *,
        tool: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{tool}: {message}", field=field, value=value, details=details)
        self.tool = tool
