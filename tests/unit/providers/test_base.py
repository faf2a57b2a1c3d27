"""Unit tests for axcess.providers.base."""

from unittest.mock import AsyncMock

from axcess.core.errors import ErrorKind, ProviderError
from axcess.providers.base import ProviderRegistry, ProviderResponse


class TestProviderRegistry:
    """Test handler lookup."""

    def test_get_registered(self) -> None:
        handler = AsyncMock()
        registry = ProviderRegistry({"openai": handler})

        result = registry.get("openai")

        assert result.is_ok
        assert result.value is handler

    def test_get_unregistered_is_explicit_error(self) -> None:
        result = ProviderRegistry().get("openai")

        assert result.is_err
        assert isinstance(result.error, ProviderError)
        assert result.error.message == 'Provider "openai" is not registered.'
        assert result.error.provider == "openai"
        assert result.error.kind is ErrorKind.UNKNOWN

    def test_with_handler_returns_new_registry(self) -> None:
        registry = ProviderRegistry({"openai": AsyncMock()})

        extended = registry.with_handler("google", AsyncMock())

        assert "google" in extended
        assert "google" not in registry
        assert len(extended) == 2
        assert sorted(extended) == ["google", "openai"]


def test_provider_response_defaults() -> None:
    response = ProviderResponse(output_text="hi")

    assert response.usage is None
    assert response.raw is None
