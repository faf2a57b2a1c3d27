"""Delegate: executes a routing decision with sequential fallback.

Candidates (primary first, then fallbacks) are tried strictly one at a
time; the first success wins and no later candidate is called.

Failure handling:
- Unregistered provider: recorded as a failed attempt, next candidate.
- Handler raises: recorded with its message (and ErrorKind for a
  ProviderError), next candidate.
- Every candidate failed: Result.err(DelegationError) whose message joins
  every failure in attempt order.

No timeout or cancellation is applied here: a handler that never returns
stalls the request. Timeouts belong to the handlers.

Usage:
    delegate = Delegate(config, registry)
    result = await delegate.execute(RouteRequest(prompt="Explain CRDTs"))
    if result.is_ok:
        print(result.value.text, result.value.cost.total)
"""

from axcess.config.models import RouterConfig
from axcess.core.errors import AxcessError, DelegationError, ProviderError
from axcess.core.types import Result
from axcess.delegate.accounting import compute_cost, normalize_usage
from axcess.delegate.models import AttemptLog, DelegateMeta, DelegateResult
from axcess.observability.logging import get_logger
from axcess.providers.base import ProviderRegistry
from axcess.routing.models import RouteParameters, RouteRequest, RouteResult
from axcess.routing.router import Router

log = get_logger(__name__)


class Delegate:
    """Runs routed requests against registered provider handlers.

    Holds only the immutable configuration and the registry, so a single
    instance can serve concurrent requests as long as the handlers are
    reentrant.
    """

    def __init__(
        self,
        config: RouterConfig,
        registry: ProviderRegistry,
        *,
        router: Router | None = None,
    ) -> None:
        self._config = config
        self._registry = registry
        self._router = router or Router(config)

    @property
    def router(self) -> Router:
        return self._router

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    async def execute(
        self,
        request: RouteRequest,
        route: RouteResult | None = None,
    ) -> Result[DelegateResult, AxcessError]:
        """Execute a request, routing it first when no RouteResult is given.

        Returns:
            Result containing the DelegateResult of the first successful
            candidate, a RoutingError if routing failed, or a DelegationError
            once every candidate has failed.
        """
        if route is None:
            routed = self._router.decide(request)
            if routed.is_err:
                return Result.err(routed.error)
            route = routed.value

        attempts: list[AttemptLog] = []

        for index, decision in enumerate(route.candidates):
            found = self._registry.get(decision.provider)
            if found.is_err:
                attempts.append(AttemptLog.failed(decision, found.error.message))
                log.warning(
                    "delegate.provider.unregistered",
                    alias=decision.alias,
                    provider=decision.provider,
                    attempt=index,
                )
                continue
            handler = found.value

            capped = self._router.compute_max_tokens_for_model(
                route.target_max_output_tokens, decision.model_key
            )
            spec = self._router.model_spec(decision.model_key)
            if capped.is_err or spec is None:
                message = f"Model {decision.model_key} not found in configuration."
                attempts.append(AttemptLog.failed(decision, message))
                log.error("delegate.model.missing", model_key=decision.model_key, attempt=index)
                continue

            parameters = RouteParameters(
                max_output_tokens=capped.value,
                temperature=route.parameters.temperature,
            )

            log.debug(
                "delegate.attempt.started",
                alias=decision.alias,
                provider=decision.provider,
                model=decision.model,
                attempt=index,
                max_output_tokens=parameters.max_output_tokens,
            )

            try:
                response = await handler(request.prompt, decision, parameters)
            except ProviderError as e:
                attempts.append(AttemptLog.failed(decision, e.message, e.kind))
                log.warning(
                    "delegate.attempt.failed",
                    alias=decision.alias,
                    provider=decision.provider,
                    model=decision.model,
                    attempt=index,
                    error=e.message,
                    error_kind=e.kind.value,
                )
                continue
            except Exception as e:
                attempts.append(AttemptLog.failed(decision, str(e)))
                log.warning(
                    "delegate.attempt.failed",
                    alias=decision.alias,
                    provider=decision.provider,
                    model=decision.model,
                    attempt=index,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue

            normalized = normalize_usage(response.usage, route.estimated_input_tokens)
            if normalized.notes:
                log.debug(
                    "delegate.usage.only_total",
                    alias=decision.alias,
                    input_tokens=normalized.usage.input_tokens,
                    output_tokens=normalized.usage.output_tokens,
                )
            cost = compute_cost(normalized.usage, spec.pricing)

            attempts.append(AttemptLog.succeeded(decision))
            fallback_used = index > 0
            rationale = [*route.rationale, *normalized.notes]
            if fallback_used:
                rationale.append(f"Fallback used: {decision.alias}.")

            log.info(
                "delegate.attempt.succeeded",
                alias=decision.alias,
                provider=decision.provider,
                model=decision.model,
                attempt=index,
                fallback_used=fallback_used,
                input_tokens=normalized.usage.input_tokens,
                output_tokens=normalized.usage.output_tokens,
                cost_total=cost.total,
                currency=cost.currency,
            )

            return Result.ok(
                DelegateResult(
                    text=response.output_text,
                    decision=decision,
                    parameters=parameters,
                    rationale=tuple(rationale),
                    usage=normalized.usage,
                    cost=cost,
                    meta=DelegateMeta(
                        fallback_used=fallback_used,
                        attempts=tuple(attempts),
                        raw_response=response.raw,
                    ),
                )
            )

        error = DelegationError.from_attempts(tuple(attempts))
        log.error(
            "delegate.candidates.exhausted",
            attempt_count=len(attempts),
            error=error.message,
        )
        return Result.err(error)


async def execute_request(
    request: RouteRequest,
    config: RouterConfig,
    registry: ProviderRegistry,
) -> Result[DelegateResult, AxcessError]:
    """Convenience wrapper around ``Delegate(config, registry).execute(request)``."""
    return await Delegate(config, registry).execute(request)

