"""Tests for the execution-mode cost model."""

import math

import pytest

from tokenbudget.contracts.enums import ExecutionMode
from tokenbudget.core.budget import InvalidAmount, InvalidMode
from tokenbudget.core.costs import (
    COST_MULTIPLIERS,
    FALLBACK_ORDER,
    estimate_cost,
    find_fallback,
    multiplier_for,
)


class TestMultiplierTable:
    """Test the multiplier table is total and immutable."""

    def test_table_covers_every_mode(self) -> None:
        """Test every ExecutionMode has a positive integer multiplier."""
        assert set(COST_MULTIPLIERS) == set(ExecutionMode)
        for value in COST_MULTIPLIERS.values():
            assert isinstance(value, int)
            assert value > 0

    def test_multiplier_values(self) -> None:
        assert COST_MULTIPLIERS[ExecutionMode.CHAT] == 1
        assert COST_MULTIPLIERS[ExecutionMode.SINGLE_AGENT] == 4
        assert COST_MULTIPLIERS[ExecutionMode.MULTI_AGENT] == 15

    def test_table_is_read_only(self) -> None:
        """Test the table cannot be mutated at runtime."""
        with pytest.raises(TypeError):
            COST_MULTIPLIERS[ExecutionMode.CHAT] = 2  # type: ignore[index]
        assert COST_MULTIPLIERS[ExecutionMode.CHAT] == 1

    def test_multiplier_for_accepts_string_value(self) -> None:
        assert multiplier_for("multi") == 15
        assert multiplier_for(ExecutionMode.SINGLE_AGENT) == 4


class TestEstimateCost:
    """Test estimate_cost helper."""

    @pytest.mark.parametrize("n", [0, 1, 7, 1000, 123456])
    def test_cost_is_amount_times_multiplier(self, n: int) -> None:
        assert estimate_cost(n, ExecutionMode.CHAT) == n
        assert estimate_cost(n, ExecutionMode.SINGLE_AGENT) == 4 * n
        assert estimate_cost(n, ExecutionMode.MULTI_AGENT) == 15 * n

    def test_fractional_amount(self) -> None:
        assert estimate_cost(2.5, ExecutionMode.SINGLE_AGENT) == 10.0

    def test_negative_amount_raises(self) -> None:
        with pytest.raises(InvalidAmount, match=">= 0"):
            estimate_cost(-1, ExecutionMode.CHAT)

    @pytest.mark.parametrize("amount", [math.nan, math.inf, -math.inf])
    def test_non_finite_amount_raises(self, amount: float) -> None:
        with pytest.raises(InvalidAmount, match="finite"):
            estimate_cost(amount, ExecutionMode.CHAT)

    @pytest.mark.parametrize("amount", ["100", None, True, [1]])
    def test_non_numeric_amount_raises(self, amount: object) -> None:
        with pytest.raises(InvalidAmount, match="number"):
            estimate_cost(amount, ExecutionMode.CHAT)  # type: ignore[arg-type]

    @pytest.mark.parametrize("mode", ["turbo", None, 4, "CHAT"])
    def test_unknown_mode_raises(self, mode: object) -> None:
        with pytest.raises(InvalidMode, match="unknown execution mode"):
            estimate_cost(10, mode)  # type: ignore[arg-type]

    def test_overflowing_cost_raises(self) -> None:
        """Test a finite amount whose cost overflows is rejected."""
        with pytest.raises(InvalidAmount, match="not finite"):
            estimate_cost(1e308, ExecutionMode.MULTI_AGENT)

    def test_largest_finite_cost_allowed(self) -> None:
        assert estimate_cost(1e307, ExecutionMode.MULTI_AGENT) == 1e307 * 15

    def test_invalid_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            estimate_cost(-5, ExecutionMode.CHAT)
        with pytest.raises(ValueError):
            estimate_cost(5, "bogus")


class TestFindFallback:
    """Test the cheapest-first fallback search."""

    def test_order_is_chat_then_single(self) -> None:
        assert FALLBACK_ORDER == (ExecutionMode.CHAT, ExecutionMode.SINGLE_AGENT)
        assert ExecutionMode.MULTI_AGENT not in FALLBACK_ORDER

    def test_chat_preferred_when_it_fits(self) -> None:
        assert find_fallback(5000, 10000) == ExecutionMode.CHAT

    def test_exact_fit_qualifies(self) -> None:
        assert find_fallback(100, 100) == ExecutionMode.CHAT

    def test_none_when_nothing_fits(self) -> None:
        assert find_fallback(101, 100) is None

    def test_none_when_remaining_negative(self) -> None:
        assert find_fallback(0.5, -10) is None

    def test_zero_amount_fits_zero_remaining(self) -> None:
        assert find_fallback(0, 0) == ExecutionMode.CHAT
