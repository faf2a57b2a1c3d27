"""Unit tests for axcess.delegate.accounting."""

import math

import pytest

from axcess.config.models import ModelPricing
from axcess.delegate.accounting import (
    ONLY_TOTAL_NOTE,
    compute_cost,
    normalize_usage,
    sanitize_tokens,
)
from axcess.delegate.models import TokenUsage
from axcess.providers.base import ProviderUsage


class TestSanitizeTokens:
    """Test coercion of reported token counts."""

    @pytest.mark.parametrize("value", [None, True, False, "12", math.nan, math.inf, [3]])
    def test_garbage_is_missing(self, value: object) -> None:
        assert sanitize_tokens(value) is None

    def test_negative_clamps_to_zero(self) -> None:
        assert sanitize_tokens(-5) == 0

    def test_rounds_floats(self) -> None:
        assert sanitize_tokens(12.6) == 13

    def test_keeps_integers(self) -> None:
        assert sanitize_tokens(7) == 7


class TestNormalizeUsage:
    """Test reconciliation of reported usage."""

    def test_only_total_reported(self) -> None:
        normalized = normalize_usage(ProviderUsage(total_tokens=150), estimated_input_tokens=40)

        assert normalized.usage == TokenUsage(
            estimated_input_tokens=40,
            input_tokens=150,
            output_tokens=0,
            total_tokens=150,
        )
        assert normalized.notes == (ONLY_TOTAL_NOTE,)

    def test_garbage_sides_with_total_count_as_only_total(self) -> None:
        reported = ProviderUsage(input_tokens="abc", output_tokens=math.nan, total_tokens=90)

        normalized = normalize_usage(reported, estimated_input_tokens=10)

        assert normalized.usage.input_tokens == 90
        assert normalized.usage.output_tokens == 0
        assert normalized.notes == (ONLY_TOTAL_NOTE,)

    def test_no_usage_uses_estimate(self) -> None:
        normalized = normalize_usage(None, estimated_input_tokens=25)

        assert normalized.usage.input_tokens == 25
        assert normalized.usage.output_tokens == 0
        assert normalized.usage.total_tokens == 25
        assert normalized.notes == ()

    def test_missing_output_derived_from_total(self) -> None:
        normalized = normalize_usage(ProviderUsage(input_tokens=30, total_tokens=100), 10)

        assert normalized.usage.output_tokens == 70
        assert normalized.usage.total_tokens == 100

    def test_missing_input_derived_from_total(self) -> None:
        normalized = normalize_usage(ProviderUsage(output_tokens=30, total_tokens=100), 10)

        assert normalized.usage.input_tokens == 70

    def test_derived_side_floors_at_zero(self) -> None:
        normalized = normalize_usage(ProviderUsage(input_tokens=30, total_tokens=20), 10)

        assert normalized.usage.output_tokens == 0
        assert normalized.usage.total_tokens == 20

    def test_total_defaults_to_sum(self) -> None:
        normalized = normalize_usage(ProviderUsage(input_tokens=10, output_tokens=5), 99)

        assert normalized.usage.total_tokens == 15
        assert normalized.usage.estimated_input_tokens == 99

    def test_negative_counts_clamp(self) -> None:
        normalized = normalize_usage(ProviderUsage(input_tokens=-3, output_tokens=4), 10)

        assert normalized.usage.input_tokens == 0
        assert normalized.usage.total_tokens == 4


class TestComputeCost:
    """Test cost computation."""

    def test_prices_each_side(self) -> None:
        usage = TokenUsage(
            estimated_input_tokens=0, input_tokens=100, output_tokens=50, total_tokens=150
        )

        cost = compute_cost(usage, ModelPricing(input=0.001, output=0.002))

        assert cost.input == pytest.approx(0.1)
        assert cost.output == pytest.approx(0.1)
        assert cost.total == pytest.approx(0.2)
        assert cost.currency == "USD"

    def test_keeps_configured_currency(self) -> None:
        usage = TokenUsage(
            estimated_input_tokens=0, input_tokens=1, output_tokens=1, total_tokens=2
        )

        cost = compute_cost(usage, ModelPricing(input=0.0, output=0.0, currency="EUR"))

        assert cost.currency == "EUR"
        assert cost.total == 0.0
