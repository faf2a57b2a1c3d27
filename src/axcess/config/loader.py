"""Configuration loading and management for axcess.

Functions:
    load_models_catalog: Load and validate models.yaml (or .yml/.json)
    load_policies: Load and validate policies.yaml (or .yml/.json)
    load_router_config: Load both files from a config directory
    create_default_config: Write default catalog and policies
    config_exists: Check whether both files are present
"""

from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
import yaml

from axcess.config.models import (
    ModelsCatalog,
    PolicySet,
    RouterConfig,
    get_config_dir,
    get_default_catalog,
    get_default_policies,
)
from axcess.core.errors import ConfigError
from axcess.observability.logging import get_logger

# Provider API keys usually live in .env files
load_dotenv()
load_dotenv(Path.home() / ".axcess" / ".env")

log = get_logger(__name__)

MODELS_STEM = "models"
POLICIES_STEM = "policies"
_SUFFIXES = (".yaml", ".yml", ".json")


def find_config_file(config_dir: Path, stem: str) -> Path | None:
    """Return the first existing ``<stem>.yaml|.yml|.json`` in config_dir."""
    for suffix in _SUFFIXES:
        candidate = config_dir / f"{stem}{suffix}"
        if candidate.exists():
            return candidate
    return None


def _read_document(path: Path) -> dict[str, Any]:
    """Parse a YAML or JSON file into a dict.

    JSON is a subset of YAML, so one parser covers both.
    """
    if not path.exists():
        raise ConfigError(
            f"Configuration file not found: {path}. "
            "Run `axcess config init` to create default configuration.",
            config_file=str(path),
        )

    try:
        with path.open(encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Failed to parse configuration file: {e}",
            config_file=str(path),
            details={"yaml_error": str(e)},
        ) from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError(
            f"{path.name}: top-level document must be a mapping",
            config_file=str(path),
        )
    return document


def _validate[M: BaseModel](model: type[M], document: dict[str, Any], path: Path, root: str) -> M:
    """Validate a document, turning pydantic errors into a field-path ConfigError."""
    try:
        return model.model_validate(document)
    except PydanticValidationError as e:
        error_messages = []
        for error in e.errors():
            loc = ".".join(str(x) for x in (root, *error["loc"]))
            error_messages.append(f"  - {loc}: {error['msg']}")

        first_loc = e.errors()[0]["loc"] if e.errors() else ()
        raise ConfigError(
            f"{path.name}: validation failed:\n" + "\n".join(error_messages),
            config_key=".".join(str(x) for x in (root, *first_loc)),
            config_file=str(path),
            details={"validation_errors": e.errors()},
        ) from e


def load_models_catalog(models_path: Path | None = None) -> ModelsCatalog:
    """Load the models catalog.

    Args:
        models_path: Path to the catalog. Defaults to models.yaml in the
            config directory.

    Raises:
        ConfigError: If the file is missing, malformed, or fails validation.
    """
    if models_path is None:
        config_dir = get_config_dir()
        models_path = find_config_file(config_dir, MODELS_STEM) or config_dir / "models.yaml"

    catalog = _validate(ModelsCatalog, _read_document(models_path), models_path, MODELS_STEM)
    log.debug(
        "config.models.loaded",
        path=str(models_path),
        alias_count=len(catalog.aliases),
        model_count=len(catalog.models),
    )
    return catalog


def load_policies(policies_path: Path | None = None) -> PolicySet:
    """Load the policy set.

    Args:
        policies_path: Path to the policies. Defaults to policies.yaml in the
            config directory.

    Raises:
        ConfigError: If the file is missing, malformed, or fails validation.
    """
    if policies_path is None:
        config_dir = get_config_dir()
        policies_path = (
            find_config_file(config_dir, POLICIES_STEM) or config_dir / "policies.yaml"
        )

    policies = _validate(PolicySet, _read_document(policies_path), policies_path, POLICIES_STEM)
    log.debug(
        "config.policies.loaded",
        path=str(policies_path),
        default_alias=policies.routing.default_alias,
        bucket_count=len(policies.routing.token_buckets),
    )
    return policies


def load_router_config(config_dir: Path | None = None) -> RouterConfig:
    """Load catalog and policies from one directory.

    Build the result once at startup and pass it to Router and Delegate.

    Example:
        config = load_router_config()
        router = Router(config)
    """
    if config_dir is None:
        config_dir = get_config_dir()

    models_path = find_config_file(config_dir, MODELS_STEM) or config_dir / "models.yaml"
    policies_path = find_config_file(config_dir, POLICIES_STEM) or config_dir / "policies.yaml"

    return RouterConfig(
        catalog=load_models_catalog(models_path),
        policies=load_policies(policies_path),
    )


def create_default_config(
    config_dir: Path | None = None,
    *,
    overwrite: bool = False,
) -> tuple[Path, Path]:
    """Write models.yaml and policies.yaml with the built-in defaults.

    Returns:
        Tuple of (models_path, policies_path).

    Raises:
        ConfigError: If a file exists and overwrite=False.
    """
    if config_dir is None:
        config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    models_path = config_dir / "models.yaml"
    policies_path = config_dir / "policies.yaml"

    if not overwrite:
        for path in (models_path, policies_path):
            if path.exists():
                raise ConfigError(
                    f"Configuration file already exists: {path}",
                    config_file=str(path),
                )

    for path, model in (
        (models_path, get_default_catalog()),
        (policies_path, get_default_policies()),
    ):
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(
                model.model_dump(mode="json", exclude_none=True),
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

    log.info("config.defaults.created", config_dir=str(config_dir))
    return models_path, policies_path


def config_exists(config_dir: Path | None = None) -> bool:
    """Check if both the catalog and the policies exist."""
    if config_dir is None:
        config_dir = get_config_dir()
    return (
        find_config_file(config_dir, MODELS_STEM) is not None
        and find_config_file(config_dir, POLICIES_STEM) is not None
    )
