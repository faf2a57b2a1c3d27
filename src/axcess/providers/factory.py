"""Registry construction from environment credentials."""

import os

from axcess.providers.anthropic_adapter import AnthropicHandler
from axcess.providers.base import ProviderRegistry
from axcess.providers.litellm_adapter import LiteLLMHandler


def build_registry_from_env(
    *,
    openai_api_key: str | None = None,
    anthropic_api_key: str | None = None,
    google_api_key: str | None = None,
    timeout: float = 60.0,
) -> ProviderRegistry:
    """Register the openai, anthropic and google handlers.

    Explicit keys win over OPENAI_API_KEY, ANTHROPIC_API_KEY and
    GOOGLE_API_KEY / GOOGLE_AI_API_KEY. Handlers are registered even without
    a key; they fail with an auth ProviderError when called.
    """
    google_key = (
        google_api_key
        or os.environ.get("GOOGLE_API_KEY")
        or os.environ.get("GOOGLE_AI_API_KEY")
    )
    return ProviderRegistry(
        {
            "openai": LiteLLMHandler(
                "openai",
                api_key=openai_api_key or os.environ.get("OPENAI_API_KEY"),
                timeout=timeout,
            ),
            "anthropic": AnthropicHandler(
                api_key=anthropic_api_key or os.environ.get("ANTHROPIC_API_KEY"),
                timeout=timeout,
            ),
            "google": LiteLLMHandler("google", api_key=google_key, timeout=timeout),
        }
    )
