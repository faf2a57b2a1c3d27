"""Usage normalization and cost computation.

Providers report usage inconsistently: some omit a side, some report only
a total, some send garbage. These helpers turn whatever arrived into
integer counts and a cost breakdown.
"""

from dataclasses import dataclass
import math
from typing import Any

from axcess.config.models import ModelPricing
from axcess.delegate.models import CostBreakdown, TokenUsage
from axcess.providers.base import ProviderUsage

DEFAULT_CURRENCY = "USD"

ONLY_TOTAL_NOTE = (
    "Provider reported only totalTokens; treating total as input_tokens and output_tokens=0."
)


def sanitize_tokens(value: Any) -> int | None:
    """Coerce a reported token count.

    Non-numeric, boolean, NaN or infinite values are treated as missing;
    negatives clamp to 0; everything else is rounded.
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return max(0, round(value))


@dataclass(frozen=True, slots=True)
class NormalizedUsage:
    """Usage plus the rationale notes produced while normalizing it."""

    usage: TokenUsage
    notes: tuple[str, ...] = ()


def normalize_usage(reported: ProviderUsage | None, estimated_input_tokens: int) -> NormalizedUsage:
    """Reconcile provider-reported usage.

    - Only a total reported: input = total, output = 0 (an explicit
      simplification, not an estimate of the real split).
    - Otherwise input defaults to the estimate and output to 0, and a
      missing side is derived from ``total - other`` floored at 0.
    - Total is the reported total, else input + output.
    """
    reported = reported or ProviderUsage()
    input_tokens = sanitize_tokens(reported.input_tokens)
    output_tokens = sanitize_tokens(reported.output_tokens)
    total_tokens = sanitize_tokens(reported.total_tokens)

    notes: list[str] = []
    resolved_input = input_tokens if input_tokens is not None else estimated_input_tokens
    resolved_output = output_tokens if output_tokens is not None else 0

    if total_tokens is not None and input_tokens is None and output_tokens is None:
        resolved_input = total_tokens
        resolved_output = 0
        notes.append(ONLY_TOTAL_NOTE)
    elif total_tokens is not None:
        if input_tokens is None:
            resolved_input = max(total_tokens - resolved_output, 0)
        if output_tokens is None:
            resolved_output = max(total_tokens - resolved_input, 0)

    return NormalizedUsage(
        usage=TokenUsage(
            estimated_input_tokens=estimated_input_tokens,
            input_tokens=resolved_input,
            output_tokens=resolved_output,
            total_tokens=(
                total_tokens if total_tokens is not None else resolved_input + resolved_output
            ),
        ),
        notes=tuple(notes),
    )


def compute_cost(usage: TokenUsage, pricing: ModelPricing) -> CostBreakdown:
    """Price a call from normalized usage."""
    input_cost = usage.input_tokens * pricing.input
    output_cost = usage.output_tokens * pricing.output
    return CostBreakdown(
        currency=pricing.currency or DEFAULT_CURRENCY,
        input=input_cost,
        output=output_cost,
        total=input_cost + output_cost,
    )
