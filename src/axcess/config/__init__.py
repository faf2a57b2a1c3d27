"""Configuration module for axcess.

Loads and validates the models catalog and policy set. Files live in
~/.axcess/ (or $AXCESS_CONFIG_DIR).

Usage:
    from axcess.config import load_router_config

    config = load_router_config()
    print(config.policies.routing.default_alias)
"""

from axcess.config.loader import (
    config_exists,
    create_default_config,
    find_config_file,
    load_models_catalog,
    load_policies,
    load_router_config,
)
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
    get_config_dir,
    get_default_catalog,
    get_default_policies,
    get_default_router_config,
)

__all__ = [
    # Models
    "ModelCap",
    "ModelPricing",
    "ModelSpec",
    "ModelsCatalog",
    "LanguageHeuristic",
    "TokenBucket",
    "RoutingPolicy",
    "CapsPolicy",
    "TemperaturesPolicy",
    "PolicySet",
    "RouterConfig",
    # Loader functions
    "load_models_catalog",
    "load_policies",
    "load_router_config",
    "create_default_config",
    "config_exists",
    "find_config_file",
    # Model helpers
    "get_config_dir",
    "get_default_catalog",
    "get_default_policies",
    "get_default_router_config",
]
