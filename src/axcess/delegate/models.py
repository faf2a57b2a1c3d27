"""Result types produced by the Delegate."""

from dataclasses import dataclass
from typing import Any

from axcess.core.errors import ErrorKind
from axcess.routing.models import RouteDecision, RouteParameters


@dataclass(frozen=True, slots=True)
class AttemptLog:
    """One candidate tried by the Delegate.

    Attributes:
        alias: Alias of the candidate.
        provider: Provider name.
        model: Vendor model identifier.
        success: Whether the handler returned a response.
        error: Failure message, for failed attempts.
        error_kind: Failure category when the handler raised a ProviderError.
    """

    alias: str
    provider: str
    model: str
    success: bool
    error: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def succeeded(cls, decision: RouteDecision) -> "AttemptLog":
        return cls(
            alias=decision.alias,
            provider=decision.provider,
            model=decision.model,
            success=True,
        )

    @classmethod
    def failed(
        cls,
        decision: RouteDecision,
        error: str,
        kind: ErrorKind | None = None,
    ) -> "AttemptLog":
        return cls(
            alias=decision.alias,
            provider=decision.provider,
            model=decision.model,
            success=False,
            error=error,
            error_kind=kind,
        )


@dataclass(frozen=True, slots=True)
class TokenUsage:
    """Normalized token accounting for a successful call."""

    estimated_input_tokens: int
    input_tokens: int
    output_tokens: int
    total_tokens: int


@dataclass(frozen=True, slots=True)
class CostBreakdown:
    """Cost of a successful call in the model's pricing currency."""

    currency: str
    input: float
    output: float
    total: float


@dataclass(frozen=True, slots=True)
class DelegateMeta:
    """Execution metadata.

    Attributes:
        fallback_used: True when a candidate other than the primary answered.
        attempts: Every attempt, in order, ending with the successful one.
        raw_response: Raw vendor response of the successful call.
    """

    fallback_used: bool
    attempts: tuple[AttemptLog, ...]
    raw_response: Any = None


@dataclass(frozen=True, slots=True)
class DelegateResult:
    """Outcome of a delegated request."""

    text: str
    decision: RouteDecision
    parameters: RouteParameters
    rationale: tuple[str, ...]
    usage: TokenUsage
    cost: CostBreakdown
    meta: DelegateMeta
