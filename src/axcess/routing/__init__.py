"""Routing module for axcess.

This module decides, for each request, which model to call, with which
generation parameters, and in which fallback order:
- Request/decision types
- Prompt heuristics (token estimate, language detection, token buckets)
- Cap and temperature cascades
- The Router itself
"""

from axcess.routing.heuristics import (
    detect_language,
    estimate_tokens,
    normalize_language_code,
    select_bucket_alias,
)
from axcess.routing.models import (
    RouteCaps,
    RouteDecision,
    RouteMetadata,
    RouteParameters,
    RouteRequest,
    RouteResult,
)
from axcess.routing.parameters import (
    MAX_TEMPERATURE,
    MIN_TEMPERATURE,
    apply_model_caps,
    apply_request_cap,
    resolve_policy_cap,
    resolve_temperature,
)
from axcess.routing.router import ResolvedModel, Router, route_request

__all__ = [
    # Types
    "RouteCaps",
    "RouteMetadata",
    "RouteRequest",
    "RouteDecision",
    "RouteParameters",
    "RouteResult",
    # Heuristics
    "estimate_tokens",
    "normalize_language_code",
    "detect_language",
    "select_bucket_alias",
    # Parameters
    "MIN_TEMPERATURE",
    "MAX_TEMPERATURE",
    "resolve_policy_cap",
    "apply_request_cap",
    "apply_model_caps",
    "resolve_temperature",
    # Router
    "Router",
    "ResolvedModel",
    "route_request",
]
