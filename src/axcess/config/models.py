"""Pydantic models for axcess configuration.

This module defines the models catalog and policy set schema using
Pydantic v2. All shape validation happens here; the router only checks
cross-references (alias -> model) when it resolves a target.

Classes:
    ModelCap: Output-token caps of a single model
    ModelPricing: Per-token prices of a single model
    ModelSpec: One backend model in the catalog
    ModelsCatalog: Alias table plus model specs
    LanguageHeuristic: Alias/temperature override for a language
    TokenBucket: Prompt-size range mapped to an alias
    RoutingPolicy: Default alias, heuristics, buckets and fallbacks
    CapsPolicy: Default and per-tier output caps
    TemperaturesPolicy: Default and per-domain temperatures
    PolicySet: Routing, caps and temperatures together
    RouterConfig: Catalog and policy set injected into Router and Delegate
"""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, PositiveInt, field_validator, model_validator


class ModelCap(BaseModel, frozen=True):
    """Output-token caps declared for a model.

    Attributes:
        default: Cap applied when nothing tighter is requested
        hard: Absolute ceiling, if the vendor enforces one
    """

    default: PositiveInt
    hard: PositiveInt | None = None


class ModelPricing(BaseModel, frozen=True):
    """Per-token prices for a model.

    Attributes:
        input: Price of one input token
        output: Price of one output token
        currency: ISO currency code; USD when omitted
    """

    input: float = Field(ge=0.0)
    output: float = Field(ge=0.0)
    currency: str | None = Field(default=None, min_length=1)


class ModelSpec(BaseModel, frozen=True):
    """A backend model in the catalog.

    Attributes:
        provider: Provider name used to find the handler (openai, anthropic, google)
        model: Vendor model identifier
        max_output_tokens: Largest completion the model accepts
        temperature: Model-specific base temperature, if any
        cap: Output caps
        pricing: Token prices
    """

    provider: str = Field(min_length=1)
    model: str = Field(min_length=1)
    max_output_tokens: PositiveInt
    temperature: float | None = None
    cap: ModelCap
    pricing: ModelPricing


class ModelsCatalog(BaseModel, frozen=True):
    """Alias table and model specs.

    Attributes:
        aliases: Dict mapping alias to model key
        models: Dict mapping model key (``provider:model``) to its spec
    """

    aliases: dict[str, str] = Field(default_factory=dict)
    models: dict[str, ModelSpec]

    @field_validator("aliases")
    @classmethod
    def validate_alias_names(cls, v: dict[str, str]) -> dict[str, str]:
        """Reject blank alias names and blank targets."""
        for alias, model_key in v.items():
            if not alias.strip():
                msg = f'invalid alias name "{alias}"'
                raise ValueError(msg)
            if not model_key.strip():
                msg = f'alias "{alias}" has an empty target'
                raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_alias_targets(self) -> "ModelsCatalog":
        """Every alias must point at a model present in the catalog."""
        for alias, model_key in self.aliases.items():
            if model_key not in self.models:
                msg = f'alias "{alias}" points at unknown model "{model_key}"'
                raise ValueError(msg)
        return self


class LanguageHeuristic(BaseModel, frozen=True):
    """Routing overrides applied when a prompt is in a given language."""

    alias: str | None = Field(default=None, min_length=1)
    temperature: float | None = None


class TokenBucket(BaseModel, frozen=True):
    """Prompt-size range selecting an alias.

    The range is half-open: ``min_prompt_tokens <= estimate < max_prompt_tokens``.
    A missing bound means 0 or unbounded respectively.
    """

    alias: str = Field(min_length=1)
    min_prompt_tokens: int | None = Field(default=None, ge=0)
    max_prompt_tokens: int | None = Field(default=None, ge=0)

    def contains(self, estimated_tokens: int) -> bool:
        """Return True if the estimate falls inside this bucket."""
        lower = self.min_prompt_tokens if self.min_prompt_tokens is not None else 0
        if estimated_tokens < lower:
            return False
        return self.max_prompt_tokens is None or estimated_tokens < self.max_prompt_tokens


class RoutingPolicy(BaseModel, frozen=True):
    """Alias selection policy.

    Attributes:
        default_alias: Alias used when no bucket or heuristic applies
        language_heuristics: Dict mapping language code to overrides
        token_buckets: Buckets checked in declared order; first match wins
        fallbacks: Dict mapping alias to its ordered fallback aliases
    """

    default_alias: str = Field(min_length=1)
    language_heuristics: dict[str, LanguageHeuristic] = Field(default_factory=dict)
    token_buckets: list[TokenBucket] = Field(default_factory=list)
    fallbacks: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("fallbacks")
    @classmethod
    def drop_blank_fallbacks(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Blank entries in a fallback chain are ignored."""
        return {alias: [item for item in chain if item.strip()] for alias, chain in v.items()}


class CapsPolicy(BaseModel, frozen=True):
    """Output-token caps by caller tier.

    Attributes:
        default: Cap for requests without a configured tier
        tiers: Dict mapping tier name (e.g. "free", "pro") to its cap
    """

    default: PositiveInt
    tiers: dict[str, PositiveInt] = Field(default_factory=dict)


class TemperaturesPolicy(BaseModel, frozen=True):
    """Sampling temperatures.

    Domains are an open set. Flat keys next to ``default`` (``code: 0.2``)
    are accepted and folded into ``per_domain``.
    """

    default: float
    per_domain: dict[str, float] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def fold_flat_domains(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = {"default", "per_domain"}
        flat = {key: value for key, value in data.items() if key not in known}
        if not flat:
            return data
        folded = dict(data.get("per_domain") or {})
        folded.update(flat)
        return {"default": data.get("default"), "per_domain": folded}

    def for_domain(self, domain: str) -> float | None:
        """Return the configured temperature for ``domain``, if any.

        The ``"default"`` domain maps to the policy default unless it is
        configured explicitly.
        """
        if domain in self.per_domain:
            return self.per_domain[domain]
        if domain == "default":
            return self.default
        return None


class PolicySet(BaseModel, frozen=True):
    """Routing, caps and temperature policies."""

    routing: RoutingPolicy
    caps: CapsPolicy
    temperatures: TemperaturesPolicy


class RouterConfig(BaseModel, frozen=True):
    """Everything the Router and Delegate read, built once per process.

    Attributes:
        catalog: Models catalog
        policies: Policy set
    """

    catalog: ModelsCatalog
    policies: PolicySet


def get_default_catalog() -> ModelsCatalog:
    """Get the default models catalog.

    Prices are per token in USD.
    """
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
                max_output_tokens=8192,
                temperature=0.4,
                cap=ModelCap(default=4096),
                pricing=ModelPricing(input=0.00000125, output=0.000005),
            ),
        },
    )


def get_default_policies() -> PolicySet:
    """Get the default policy set."""
    return PolicySet(
        routing=RoutingPolicy(
            default_alias="fast",
            language_heuristics={
                "pt": LanguageHeuristic(temperature=0.6),
                "es": LanguageHeuristic(temperature=0.6),
            },
            token_buckets=[
                TokenBucket(alias="fast", max_prompt_tokens=2000),
                TokenBucket(alias="reasoning", min_prompt_tokens=2000, max_prompt_tokens=30000),
                TokenBucket(alias="long-context", min_prompt_tokens=30000),
            ],
            fallbacks={
                "fast": ["reasoning", "long-context"],
                "reasoning": ["fast", "long-context"],
                "long-context": ["reasoning"],
            },
        ),
        caps=CapsPolicy(default=2048, tiers={"free": 1024, "pro": 4096}),
        temperatures=TemperaturesPolicy(
            default=0.7,
            per_domain={"code": 0.2, "creative": 1.0},
        ),
    )


def get_default_router_config() -> RouterConfig:
    """Get the built-in catalog and policies as one RouterConfig."""
    return RouterConfig(catalog=get_default_catalog(), policies=get_default_policies())


def get_config_dir() -> Path:
    """Get the axcess configuration directory.

    Returns:
        $AXCESS_CONFIG_DIR if set, otherwise ~/.axcess/
    """
    override = os.environ.get("AXCESS_CONFIG_DIR", "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / ".axcess"
