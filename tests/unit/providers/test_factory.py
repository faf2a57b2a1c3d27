"""Unit tests for axcess.providers.factory."""

from unittest.mock import patch

from axcess.providers.anthropic_adapter import AnthropicHandler
from axcess.providers.factory import build_registry_from_env
from axcess.providers.litellm_adapter import LiteLLMHandler


class TestBuildRegistryFromEnv:
    """Test registry construction."""

    def test_registers_default_providers(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            registry = build_registry_from_env()

        assert sorted(registry) == ["anthropic", "google", "openai"]
        assert isinstance(registry.get("anthropic").value, AnthropicHandler)
        assert isinstance(registry.get("google").value, LiteLLMHandler)

    def test_keys_from_environment(self) -> None:
        env = {
            "OPENAI_API_KEY": "sk-openai",
            "ANTHROPIC_API_KEY": "sk-ant",
            "GOOGLE_AI_API_KEY": "AIza-google",
        }
        with patch.dict("os.environ", env, clear=True):
            registry = build_registry_from_env()

        assert registry.get("openai").value._get_api_key() == "sk-openai"
        assert registry.get("anthropic").value._api_key == "sk-ant"
        assert registry.get("google").value._get_api_key() == "AIza-google"

    def test_explicit_keys_win(self) -> None:
        with patch.dict("os.environ", {"OPENAI_API_KEY": "env"}, clear=True):
            registry = build_registry_from_env(openai_api_key="explicit", timeout=5.0)

        handler = registry.get("openai").value
        assert handler._get_api_key() == "explicit"
        assert handler._timeout == 5.0
