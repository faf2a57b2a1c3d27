"""Delegated execution with sequential fallback and cost accounting."""

from axcess.delegate.accounting import (
    DEFAULT_CURRENCY,
    NormalizedUsage,
    compute_cost,
    normalize_usage,
    sanitize_tokens,
)
from axcess.delegate.engine import Delegate, execute_request
from axcess.delegate.models import (
    AttemptLog,
    CostBreakdown,
    DelegateMeta,
    DelegateResult,
    TokenUsage,
)

__all__ = [
    # Engine
    "Delegate",
    "execute_request",
    # Models
    "AttemptLog",
    "TokenUsage",
    "CostBreakdown",
    "DelegateMeta",
    "DelegateResult",
    # Accounting
    "DEFAULT_CURRENCY",
    "NormalizedUsage",
    "sanitize_tokens",
    "normalize_usage",
    "compute_cost",
]
