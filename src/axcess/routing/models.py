"""Request and decision types for the router.

All types are frozen: a RouteResult handed to the Delegate cannot be
altered by it, and nothing is shared between requests.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class RouteCaps:
    """Caller-requested limits.

    Attributes:
        max_output_tokens: Upper bound on generated tokens; ignored unless positive.
    """

    max_output_tokens: int | None = None


@dataclass(frozen=True, slots=True)
class RouteMetadata:
    """Optional routing hints supplied by the caller.

    Attributes:
        language: Language code of the prompt (e.g. "pt-BR"); detected when absent.
        tier: Caller class used to pick an output cap (e.g. "free", "pro").
        domain: Open-ended task domain used to pick a temperature (e.g. "code").
        temperature: Explicit temperature; wins over every policy value.
    """

    language: str | None = None
    tier: str | None = None
    domain: str | None = None
    temperature: float | None = None


@dataclass(frozen=True, slots=True)
class RouteRequest:
    """A text-generation request to be routed.

    Attributes:
        prompt: The prompt text.
        force_model: Alias or model key that bypasses bucket and language selection.
        caps: Caller-requested limits.
        metadata: Routing hints.
    """

    prompt: str
    force_model: str | None = None
    caps: RouteCaps | None = None
    metadata: RouteMetadata = field(default_factory=RouteMetadata)


@dataclass(frozen=True, slots=True)
class RouteDecision:
    """A resolved pointer to one backend target.

    Attributes:
        alias: Alias the target was reached through (or the model key itself).
        model_key: Catalog key of the model.
        provider: Provider name used to look up the handler.
        model: Vendor model identifier.
    """

    alias: str
    model_key: str
    provider: str
    model: str


@dataclass(frozen=True, slots=True)
class RouteParameters:
    """Generation parameters sent to a provider handler."""

    max_output_tokens: int
    temperature: float


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Complete routing decision for one request.

    Attributes:
        decision: Primary backend target.
        parameters: Parameters for the primary target.
        rationale: Every decision point consulted, in evaluation order.
        fallbacks: Alternate targets to try, in order.
        estimated_input_tokens: Length-based prompt size estimate.
        target_max_output_tokens: Policy/request cap before per-model limits.
            The Delegate recomputes each candidate's cap from this value.
    """

    decision: RouteDecision
    parameters: RouteParameters
    rationale: tuple[str, ...]
    fallbacks: tuple[RouteDecision, ...]
    estimated_input_tokens: int
    target_max_output_tokens: int

    @property
    def candidates(self) -> tuple[RouteDecision, ...]:
        """Primary decision followed by the fallbacks."""
        return (self.decision, *self.fallbacks)
