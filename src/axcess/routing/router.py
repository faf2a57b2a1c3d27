"""Policy router: maps a request to a model, parameters and fallback chain.

Routing steps, each recorded in the rationale trail:
1. Estimate input tokens from prompt length
2. Determine the language (declared, else detected)
3. Select an alias: forced, or default -> token bucket -> language heuristic
4. Resolve the alias (or direct model key) against the catalog
5. Resolve the output cap (policy/tier, request, then model limits)
6. Resolve the temperature (model/policy, language, domain, request, clamp)
7. Resolve the fallback chain

Design Principles:
- Pure: the router performs no I/O and holds only the injected,
  immutable RouterConfig. The same request always yields the same result.
- Result type: expected failures (absent prompt, unknown alias) come back
  as Result.err(RoutingError); nothing is raised for them.

Usage:
    router = Router(load_router_config())
    result = router.decide(RouteRequest(prompt="Summarize this release note"))
    if result.is_ok:
        print(result.value.decision.model)
"""

from dataclasses import dataclass

from axcess.config.models import ModelSpec, RouterConfig
from axcess.core.errors import RoutingError
from axcess.core.types import Result
from axcess.observability.logging import get_logger
from axcess.routing.heuristics import (
    detect_language,
    estimate_tokens,
    normalize_language_code,
    select_bucket_alias,
)
from axcess.routing.models import RouteDecision, RouteParameters, RouteRequest, RouteResult
from axcess.routing.parameters import (
    apply_model_caps,
    apply_request_cap,
    resolve_policy_cap,
    resolve_temperature,
)

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedModel:
    """A decision together with the catalog spec it points at."""

    decision: RouteDecision
    spec: ModelSpec


class Router:
    """Stateless policy router over an injected configuration.

    Example:
        router = Router(config)
        result = router.decide(RouteRequest(prompt="...", force_model="reasoning"))
        decision = result.unwrap().decision
        # RouteDecision(alias="reasoning", provider="anthropic", ...)
    """

    __slots__ = ("_config",)

    def __init__(self, config: RouterConfig) -> None:
        self._config = config

    @property
    def config(self) -> RouterConfig:
        return self._config

    def resolve(self, target: str, rationale: list[str]) -> Result[ResolvedModel, RoutingError]:
        """Resolve a target as an alias first, then as a model key."""
        catalog = self._config.catalog

        model_key = catalog.aliases.get(target)
        if model_key:
            spec = catalog.models.get(model_key)
            if spec is None:
                return Result.err(
                    RoutingError(
                        f'Alias "{target}" points at missing model "{model_key}"',
                        target=target,
                    )
                )
            rationale.append(f'Alias "{target}" resolves to {spec.provider}/{spec.model}.')
            return Result.ok(
                ResolvedModel(
                    decision=RouteDecision(
                        alias=target,
                        model_key=model_key,
                        provider=spec.provider,
                        model=spec.model,
                    ),
                    spec=spec,
                )
            )

        spec = catalog.models.get(target)
        if spec is not None:
            alias = next(
                (name for name, key in catalog.aliases.items() if key == target),
                target,
            )
            rationale.append(
                f'Model "{target}" used directly ({spec.provider}/{spec.model}).'
            )
            return Result.ok(
                ResolvedModel(
                    decision=RouteDecision(
                        alias=alias,
                        model_key=target,
                        provider=spec.provider,
                        model=spec.model,
                    ),
                    spec=spec,
                )
            )

        return Result.err(RoutingError(f"Unknown model or alias: {target}", target=target))

    def compute_max_tokens_for_model(
        self,
        target_cap: int,
        model_key: str,
    ) -> Result[int, RoutingError]:
        """Bound ``target_cap`` by one catalog model's own limits.

        Every fallback candidate gets its own cap; a primary's tighter model
        cap is never inherited.
        """
        spec = self._config.catalog.models.get(model_key)
        if spec is None:
            return Result.err(RoutingError(f"Unknown model: {model_key}", target=model_key))
        return Result.ok(apply_model_caps(target_cap, spec))

    def model_spec(self, model_key: str) -> ModelSpec | None:
        """Return the catalog spec for a model key, if present."""
        return self._config.catalog.models.get(model_key)

    def decide(self, request: RouteRequest) -> Result[RouteResult, RoutingError]:
        """Route a request.

        Returns:
            Result containing the RouteResult, or a RoutingError when the
            prompt is absent or the selected target cannot be resolved.
        """
        if request is None or not isinstance(request.prompt, str):
            return Result.err(RoutingError("decide: prompt is required"))

        policies = self._config.policies
        rationale: list[str] = []

        estimated_tokens = estimate_tokens(request.prompt)
        rationale.append(f"Estimated input tokens: ~{estimated_tokens}.")

        metadata = request.metadata
        language = normalize_language_code(metadata.language) or detect_language(request.prompt)
        if language:
            rationale.append(f"Language considered: {language}.")

        selected_alias = policies.routing.default_alias
        rationale.append(f"Policy default alias: {selected_alias}.")

        language_temperature: float | None = None
        if request.force_model:
            rationale.append(f"forceModel received: {request.force_model}.")
            target = request.force_model
        else:
            bucket_alias = select_bucket_alias(policies.routing.token_buckets, estimated_tokens)
            if bucket_alias:
                selected_alias = bucket_alias
                rationale.append(f"Token bucket selected alias {bucket_alias}.")

            heuristic = policies.routing.language_heuristics.get(language) if language else None
            if heuristic is not None:
                if heuristic.alias and heuristic.alias != selected_alias:
                    selected_alias = heuristic.alias
                    rationale.append(f"Language heuristic adjusted alias to {selected_alias}.")
                if heuristic.temperature is not None:
                    language_temperature = heuristic.temperature
                    rationale.append(
                        f"Language heuristic suggested temperature {heuristic.temperature}."
                    )
            target = selected_alias

        resolved_result = self.resolve(target, rationale)
        if resolved_result.is_err:
            log.warning(
                "routing.target.unresolved",
                target=target,
                forced=bool(request.force_model),
            )
            return Result.err(resolved_result.error)
        resolved = resolved_result.value

        policy_cap = resolve_policy_cap(policies.caps, metadata.tier, rationale)
        target_cap = apply_request_cap(policy_cap, request.caps, rationale)
        max_output_tokens = apply_model_caps(target_cap, resolved.spec)

        # Language temperature applies to the policy path only.
        temperature = resolve_temperature(
            policies.temperatures,
            metadata,
            resolved.spec,
            rationale,
            language_override=None if request.force_model else language_temperature,
        )

        fallbacks = self._resolve_fallbacks(resolved.decision.alias, rationale)

        log.info(
            "routing.decision.made",
            alias=resolved.decision.alias,
            provider=resolved.decision.provider,
            model=resolved.decision.model,
            forced=bool(request.force_model),
            language=language,
            estimated_input_tokens=estimated_tokens,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
            fallback_count=len(fallbacks),
        )

        return Result.ok(
            RouteResult(
                decision=resolved.decision,
                parameters=RouteParameters(
                    max_output_tokens=max_output_tokens,
                    temperature=temperature,
                ),
                rationale=tuple(rationale),
                fallbacks=fallbacks,
                estimated_input_tokens=estimated_tokens,
                target_max_output_tokens=target_cap,
            )
        )

    def _resolve_fallbacks(
        self,
        primary_alias: str,
        rationale: list[str],
    ) -> tuple[RouteDecision, ...]:
        """Resolve the fallback chain of the primary alias.

        The primary alias and repeated aliases are skipped. An alias that does
        not resolve is dropped with a rationale note.
        """
        chain = self._config.policies.routing.fallbacks.get(primary_alias, [])
        decisions: list[RouteDecision] = []
        seen = {primary_alias}

        for alias in chain:
            if alias in seen:
                continue
            resolved = self.resolve(alias, rationale)
            if resolved.is_err:
                rationale.append(f'Fallback skipped "{alias}": {resolved.error.message}.')
                continue
            decision = resolved.value.decision
            if decision.alias in seen:
                rationale.append(
                    f'Fallback skipped "{alias}": alias "{decision.alias}" already listed.'
                )
                continue
            decisions.append(decision)
            seen.update((alias, decision.alias))

        if decisions:
            rationale.append(
                f"Available fallbacks: {', '.join(item.alias for item in decisions)}."
            )
        else:
            rationale.append("No fallback configured for the selected alias.")

        return tuple(decisions)


def route_request(
    request: RouteRequest,
    config: RouterConfig,
) -> Result[RouteResult, RoutingError]:
    """Convenience wrapper around ``Router(config).decide(request)``."""
    return Router(config).decide(request)
