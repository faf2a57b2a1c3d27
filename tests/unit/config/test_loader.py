"""Unit tests for axcess.config.loader."""

import json
from pathlib import Path

import pytest
import yaml

from axcess.config.loader import (
    config_exists,
    create_default_config,
    find_config_file,
    load_models_catalog,
    load_policies,
    load_router_config,
)
from axcess.config.models import get_default_catalog, get_default_policies
from axcess.core.errors import ConfigError

MODELS_YAML = """
aliases:
  reasoning: anthropic:claude-3-5-sonnet
models:
  anthropic:claude-3-5-sonnet:
    provider: anthropic
    model: claude-3-5-sonnet
    max_output_tokens: 8192
    cap:
      default: 4096
      hard: 8192
    pricing:
      input: 0.000003
      output: 0.000015
"""

POLICIES_YAML = """
routing:
  default_alias: reasoning
  fallbacks:
    reasoning: []
caps:
  default: 2048
  tiers:
    pro: 3000
temperatures:
  default: 0.7
  code: 0.2
"""


class TestLoadModelsCatalog:
    """Test catalog loading."""

    def test_loads_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "models.yaml"
        path.write_text(MODELS_YAML)

        catalog = load_models_catalog(path)

        assert catalog.aliases == {"reasoning": "anthropic:claude-3-5-sonnet"}
        assert catalog.models["anthropic:claude-3-5-sonnet"].cap.hard == 8192

    def test_loads_json(self, tmp_path: Path) -> None:
        path = tmp_path / "models.json"
        path.write_text(json.dumps(yaml.safe_load(MODELS_YAML)))

        assert load_models_catalog(path).models["anthropic:claude-3-5-sonnet"].model == (
            "claude-3-5-sonnet"
        )

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found") as exc_info:
            load_models_catalog(tmp_path / "models.yaml")

        assert exc_info.value.config_file == str(tmp_path / "models.yaml")

    def test_unparseable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "models.yaml"
        path.write_text("models: [unclosed")

        with pytest.raises(ConfigError, match="Failed to parse"):
            load_models_catalog(path)

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "models.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="must be a mapping"):
            load_models_catalog(path)

    def test_error_lists_field_paths(self, tmp_path: Path) -> None:
        document = yaml.safe_load(MODELS_YAML)
        spec = document["models"]["anthropic:claude-3-5-sonnet"]
        spec["cap"]["default"] = 0
        del spec["pricing"]
        path = tmp_path / "models.yaml"
        path.write_text(yaml.safe_dump(document))

        with pytest.raises(ConfigError) as exc_info:
            load_models_catalog(path)

        message = exc_info.value.message
        assert "models.models.anthropic:claude-3-5-sonnet.cap.default" in message
        assert "models.models.anthropic:claude-3-5-sonnet.pricing" in message
        assert exc_info.value.config_key is not None
        assert exc_info.value.config_key.startswith("models.models.anthropic:claude-3-5-sonnet")


class TestLoadPolicies:
    """Test policy loading."""

    def test_loads_flat_temperatures(self, tmp_path: Path) -> None:
        path = tmp_path / "policies.yaml"
        path.write_text(POLICIES_YAML)

        policies = load_policies(path)

        assert policies.routing.default_alias == "reasoning"
        assert policies.caps.tiers == {"pro": 3000}
        assert policies.temperatures.per_domain == {"code": 0.2}

    def test_missing_section(self, tmp_path: Path) -> None:
        path = tmp_path / "policies.yaml"
        path.write_text("routing:\n  default_alias: fast\n")

        with pytest.raises(ConfigError) as exc_info:
            load_policies(path)

        assert "policies.caps" in exc_info.value.message
        assert "policies.temperatures" in exc_info.value.message


class TestRouterConfigFiles:
    """Test directory-level helpers."""

    def test_load_router_config(self, tmp_path: Path) -> None:
        (tmp_path / "models.yaml").write_text(MODELS_YAML)
        (tmp_path / "policies.yml").write_text(POLICIES_YAML)

        config = load_router_config(tmp_path)

        assert config.policies.caps.default == 2048
        assert "anthropic:claude-3-5-sonnet" in config.catalog.models

    def test_find_config_file_prefers_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "models.json").write_text("{}")
        (tmp_path / "models.yaml").write_text("{}")

        assert find_config_file(tmp_path, "models") == tmp_path / "models.yaml"
        assert find_config_file(tmp_path, "policies") is None

    def test_create_default_config_round_trips(self, tmp_path: Path) -> None:
        models_path, policies_path = create_default_config(tmp_path)

        assert models_path.exists()
        assert policies_path.exists()
        assert config_exists(tmp_path)
        config = load_router_config(tmp_path)
        assert config.catalog == get_default_catalog()
        assert config.policies == get_default_policies()

    def test_create_default_config_refuses_overwrite(self, tmp_path: Path) -> None:
        create_default_config(tmp_path)

        with pytest.raises(ConfigError, match="already exists"):
            create_default_config(tmp_path)

        create_default_config(tmp_path, overwrite=True)

    def test_config_exists_requires_both_files(self, tmp_path: Path) -> None:
        (tmp_path / "models.yaml").write_text(MODELS_YAML)

        assert not config_exists(tmp_path)
