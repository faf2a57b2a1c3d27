"""Unit tests for axcess.core.errors."""

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
from axcess.delegate.models import AttemptLog
from axcess.routing.models import RouteDecision


class TestAxcessError:
    """Test the base error."""

    def test_str_without_details(self) -> None:
        assert str(AxcessError("boom")) == "boom"

    def test_str_with_details(self) -> None:
        assert str(AxcessError("boom", {"a": 1})) == "boom (details: {'a': 1})"

    def test_hierarchy(self) -> None:
        for cls in (ConfigError, RoutingError, ProviderError, DelegationError, ValidationError):
            assert issubclass(cls, AxcessError)
        assert issubclass(ToolOutputError, ValidationError)


class TestProviderError:
    """Test provider error construction."""

    def test_defaults(self) -> None:
        error = ProviderError("openai: failed", provider="openai")

        assert error.kind is ErrorKind.UNKNOWN
        assert error.status_code is None

    def test_from_exception_prefixes_provider(self) -> None:
        cause = RuntimeError("socket closed")

        error = ProviderError.from_exception(cause, provider="google", kind=ErrorKind.NETWORK)

        assert error.message == "google: socket closed"
        assert error.kind is ErrorKind.NETWORK
        assert error.__cause__ is cause
        assert error.details == {"original_exception": "RuntimeError"}

    def test_error_kind_values(self) -> None:
        assert {kind.value for kind in ErrorKind} == {
            "auth",
            "timeout",
            "rate_limit",
            "network",
            "unknown",
        }


class TestDelegationError:
    """Test the aggregate delegation error."""

    def test_from_attempts_joins_messages_in_order(self) -> None:
        decision = RouteDecision(alias="fast", model_key="openai:m", provider="openai", model="m")
        attempts = (
            AttemptLog.failed(decision, "first"),
            AttemptLog.failed(decision, "second", ErrorKind.TIMEOUT),
        )

        error = DelegationError.from_attempts(attempts)

        assert error.message == "All delegation attempts failed (first; second)."
        assert error.attempts == attempts
        assert error.attempts[1].error_kind is ErrorKind.TIMEOUT


class TestValidationErrors:
    """Test validation errors."""

    def test_safe_value_redacts_sensitive_fields(self) -> None:
        error = ValidationError("bad", field="api_key", value="sk-secret")

        assert error.safe_value == "<REDACTED>"
        assert "sk-secret" not in str(error)

    def test_safe_value_truncates_long_strings(self) -> None:
        error = ValidationError("bad", field="prompt", value="x" * 80)

        assert error.safe_value == f"{'x' * 20}...(80 chars)"

    def test_tool_output_error_prefixes_tool(self) -> None:
        error = ToolOutputError("patch has no @@ hunks.", tool="delegate.diff")

        assert error.message == "delegate.diff: patch has no @@ hunks."
        assert error.tool == "delegate.diff"

    def test_config_and_routing_attributes(self) -> None:
        assert ConfigError("x", config_key="caps.default").config_key == "caps.default"
        assert RoutingError("x", target="fast").target == "fast"
