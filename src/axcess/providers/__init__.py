"""Provider handlers for axcess.

Handlers implement the ProviderHandler protocol: one awaitable call per
routed attempt. AnthropicHandler talks to Claude through the Anthropic SDK;
LiteLLMHandler covers OpenAI, Google and other LiteLLM routes.
"""

from axcess.providers.anthropic_adapter import AnthropicHandler
from axcess.providers.base import (
    ProviderHandler,
    ProviderRegistry,
    ProviderResponse,
    ProviderUsage,
)
from axcess.providers.factory import build_registry_from_env
from axcess.providers.litellm_adapter import LiteLLMHandler

__all__ = [
    # Protocol and registry
    "ProviderHandler",
    "ProviderRegistry",
    # Models
    "ProviderResponse",
    "ProviderUsage",
    # Implementations
    "AnthropicHandler",
    "LiteLLMHandler",
    "build_registry_from_env",
]
