"""Output cap and temperature resolution.

Caps cascade toward the most restrictive value; temperatures cascade with
the last writer winning and are clamped at the end. Each function appends
the lines it contributes to the caller's rationale trail.
"""

import math

from axcess.config.models import CapsPolicy, ModelSpec, TemperaturesPolicy
from axcess.routing.models import RouteCaps, RouteMetadata

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


def clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)


def resolve_policy_cap(caps: CapsPolicy, tier: str | None, rationale: list[str]) -> int:
    """Pick the tier cap if one is configured, else the policy default.

    An unconfigured tier is not an error; it falls back to the default.
    """
    limit = caps.default
    normalized_tier = tier.strip().lower() if tier else ""
    if not normalized_tier:
        rationale.append(f"Default cap applied: {limit}.")
        return limit

    tier_cap = caps.tiers.get(normalized_tier)
    if tier_cap:
        rationale.append(f'Tier "{normalized_tier}" cap: {tier_cap}.')
        return tier_cap

    rationale.append(f'Tier "{normalized_tier}" has no specific cap, using default {limit}.')
    return limit


def apply_request_cap(policy_cap: int, caps: RouteCaps | None, rationale: list[str]) -> int:
    """Lower the policy cap to the caller's requested cap when that is tighter."""
    requested = caps.max_output_tokens if caps else None
    if requested and requested > 0:
        rationale.append(f"Request cap: {requested}.")
        return min(policy_cap, requested)
    return policy_cap


def apply_model_caps(target_cap: float, spec: ModelSpec) -> int:
    """Bound a target cap by the model's own limits.

    Takes the minimum over every finite positive candidate among the target,
    ``cap.default``, ``max_output_tokens`` and ``cap.hard``, floored, never
    below 1.
    """
    values: list[float] = [target_cap, spec.cap.default, spec.max_output_tokens]
    if spec.cap.hard is not None:
        values.append(spec.cap.hard)

    candidates = [value for value in values if math.isfinite(value) and value > 0]
    if not candidates:
        return 1
    return max(1, math.floor(min(candidates)))


def resolve_temperature(
    temperatures: TemperaturesPolicy,
    metadata: RouteMetadata,
    spec: ModelSpec,
    rationale: list[str],
    language_override: float | None = None,
) -> float:
    """Resolve the sampling temperature.

    Order (later wins): model temperature or policy default, language
    override, domain temperature, explicit request temperature. The result
    is clamped to [0, 2].
    """
    temperature = spec.temperature if spec.temperature is not None else temperatures.default
    rationale.append(f"Base temperature from model/policy: {temperature}.")

    if language_override is not None:
        temperature = language_override
        rationale.append(f"Temperature adjusted by language heuristic: {temperature}.")

    if metadata.domain:
        domain_temperature = temperatures.for_domain(metadata.domain)
        if domain_temperature is not None:
            temperature = domain_temperature
            rationale.append(f'Temperature adjusted by domain "{metadata.domain}": {temperature}.')

    if metadata.temperature is not None:
        if math.isnan(metadata.temperature):
            rationale.append("Ignoring NaN request temperature.")
        else:
            temperature = metadata.temperature
            rationale.append(f"Temperature explicitly set by request: {temperature}.")

    temperature = clamp(temperature, MIN_TEMPERATURE, MAX_TEMPERATURE)
    rationale.append(f"Final temperature after clamp: {temperature}.")
    return temperature
