"""Unit tests for axcess.config.models."""

from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError
import pytest

from axcess.config.models import (
    CapsPolicy,
    ModelsCatalog,
    RoutingPolicy,
    TemperaturesPolicy,
    TokenBucket,
    get_config_dir,
    get_default_router_config,
)


def _spec(**overrides: object) -> dict[str, object]:
    spec: dict[str, object] = {
        "provider": "openai",
        "model": "gpt-4o-mini",
        "max_output_tokens": 1000,
        "cap": {"default": 500},
        "pricing": {"input": 0.1, "output": 0.2},
    }
    spec.update(overrides)
    return spec


class TestModelsCatalog:
    """Test catalog validation."""

    def test_valid_catalog(self) -> None:
        catalog = ModelsCatalog.model_validate(
            {"aliases": {"fast": "openai:gpt-4o-mini"}, "models": {"openai:gpt-4o-mini": _spec()}}
        )

        assert catalog.models["openai:gpt-4o-mini"].cap.hard is None
        assert catalog.models["openai:gpt-4o-mini"].pricing.currency is None

    def test_alias_to_unknown_model_rejected(self) -> None:
        with pytest.raises(ValidationError, match='alias "fast" points at unknown model'):
            ModelsCatalog.model_validate(
                {"aliases": {"fast": "openai:nope"}, "models": {"openai:gpt-4o-mini": _spec()}}
            )

    def test_blank_alias_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ModelsCatalog.model_validate(
                {"aliases": {" ": "openai:gpt-4o-mini"}, "models": {"openai:gpt-4o-mini": _spec()}}
            )

    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_output_tokens": 0},
            {"cap": {"default": 0}},
            {"cap": {"default": 10, "hard": -1}},
            {"pricing": {"input": -0.1, "output": 0.0}},
            {"provider": ""},
        ],
    )
    def test_invalid_model_spec_rejected(self, overrides: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            ModelsCatalog.model_validate({"models": {"m": _spec(**overrides)}})

    def test_catalog_is_frozen(self) -> None:
        catalog = ModelsCatalog.model_validate({"models": {"m": _spec()}})

        with pytest.raises(ValidationError):
            catalog.aliases = {}  # type: ignore[misc]


class TestPolicies:
    """Test policy models."""

    def test_token_bucket_defaults(self) -> None:
        bucket = TokenBucket(alias="fast")

        assert bucket.contains(0)
        assert bucket.contains(10**9)

    def test_token_bucket_is_half_open(self) -> None:
        bucket = TokenBucket(alias="mid", min_prompt_tokens=10, max_prompt_tokens=20)

        assert not bucket.contains(9)
        assert bucket.contains(10)
        assert not bucket.contains(20)

    def test_blank_fallbacks_dropped(self) -> None:
        policy = RoutingPolicy(default_alias="fast", fallbacks={"fast": ["", "reasoning", "  "]})

        assert policy.fallbacks == {"fast": ["reasoning"]}

    def test_tier_caps_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            CapsPolicy(default=100, tiers={"free": 0})

    def test_flat_domains_are_folded(self) -> None:
        temperatures = TemperaturesPolicy.model_validate(
            {"default": 0.7, "code": 0.2, "per_domain": {"creative": 1.0}}
        )

        assert temperatures.per_domain == {"creative": 1.0, "code": 0.2}

    def test_for_domain(self) -> None:
        temperatures = TemperaturesPolicy(default=0.7, per_domain={"code": 0.2})

        assert temperatures.for_domain("code") == 0.2
        assert temperatures.for_domain("default") == 0.7
        assert temperatures.for_domain("poetry") is None


class TestDefaults:
    """Test built-in defaults."""

    def test_default_config_is_consistent(self) -> None:
        config = get_default_router_config()

        for alias, key in config.catalog.aliases.items():
            assert key in config.catalog.models, alias
        assert config.policies.routing.default_alias in config.catalog.aliases

    def test_config_dir_from_env(self, tmp_path: Path) -> None:
        with patch.dict("os.environ", {"AXCESS_CONFIG_DIR": str(tmp_path)}):
            assert get_config_dir() == tmp_path

    def test_config_dir_default(self) -> None:
        with patch.dict("os.environ", {"AXCESS_CONFIG_DIR": ""}):
            assert get_config_dir() == Path.home() / ".axcess"
