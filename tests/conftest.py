"""Shared fixtures: an in-memory RouterConfig and handler doubles."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from axcess.config.models import (
    CapsPolicy,
    LanguageHeuristic,
    ModelCap,
    ModelPricing,
    ModelsCatalog,
    ModelSpec,
    PolicySet,
    RouterConfig,
    RoutingPolicy,
    TemperaturesPolicy,
    TokenBucket,
)
from axcess.providers.base import ProviderResponse, ProviderUsage


@pytest.fixture
def catalog() -> ModelsCatalog:
    return ModelsCatalog(
        aliases={
            "fast": "openai:gpt-4o-mini",
            "reasoning": "anthropic:claude-3-5-sonnet",
            "long-context": "google:gemini-1.5-pro",
        },
        models={
            "openai:gpt-4o-mini": ModelSpec(
                provider="openai",
                model="gpt-4o-mini",
                max_output_tokens=16384,
                cap=ModelCap(default=4096),
                pricing=ModelPricing(input=0.00000015, output=0.0000006),
            ),
            "anthropic:claude-3-5-sonnet": ModelSpec(
                provider="anthropic",
                model="claude-3-5-sonnet",
                max_output_tokens=8192,
                cap=ModelCap(default=4096, hard=8192),
                pricing=ModelPricing(input=0.000003, output=0.000015),
            ),
            "google:gemini-1.5-pro": ModelSpec(
                provider="google",
                model="gemini-1.5-pro",
                max_output_tokens=1000,
                temperature=0.4,
                cap=ModelCap(default=4096),
                pricing=ModelPricing(input=0.00000125, output=0.000005, currency="EUR"),
            ),
        },
    )


@pytest.fixture
def policies() -> PolicySet:
    return PolicySet(
        routing=RoutingPolicy(
            default_alias="fast",
            language_heuristics={
                "pt": LanguageHeuristic(temperature=0.6),
                "es": LanguageHeuristic(alias="reasoning"),
            },
            token_buckets=[
                TokenBucket(alias="fast", max_prompt_tokens=2000),
                TokenBucket(alias="reasoning", min_prompt_tokens=2000, max_prompt_tokens=30000),
                TokenBucket(alias="long-context", min_prompt_tokens=30000),
            ],
            fallbacks={
                "fast": ["reasoning", "long-context"],
                "reasoning": ["fast"],
            },
        ),
        caps=CapsPolicy(default=2048, tiers={"free": 1024, "pro": 3000}),
        temperatures=TemperaturesPolicy(default=0.7, per_domain={"code": 0.2}),
    )


@pytest.fixture
def router_config(catalog: ModelsCatalog, policies: PolicySet) -> RouterConfig:
    return RouterConfig(catalog=catalog, policies=policies)


def _response(text: str = "ok", **usage: Any) -> ProviderResponse:
    return ProviderResponse(
        output_text=text,
        usage=ProviderUsage(**usage) if usage else None,
        raw={"text": text},
    )


@pytest.fixture
def make_response() -> Callable[..., ProviderResponse]:
    """Build a ProviderResponse; keyword arguments become ProviderUsage fields."""
    return _response


@pytest.fixture
def succeeding_handler() -> AsyncMock:
    """Handler double answering "ok" with 12 input / 34 output tokens."""
    return AsyncMock(return_value=_response("ok", input_tokens=12, output_tokens=34))
