"""Execution-mode cost model."""

import math
from types import MappingProxyType
from typing import Mapping

from tokenbudget.contracts.enums import ExecutionMode
from tokenbudget.core.budget import InvalidAmount, coerce_mode, validate_amount

COST_MULTIPLIERS: Mapping[ExecutionMode, int] = MappingProxyType(
    {
        ExecutionMode.CHAT: 1,
        ExecutionMode.SINGLE_AGENT: 4,
        ExecutionMode.MULTI_AGENT: 15,
    }
)

# Cheapest first. MULTI_AGENT is never suggested as a fallback.
FALLBACK_ORDER: tuple[ExecutionMode, ...] = (ExecutionMode.CHAT, ExecutionMode.SINGLE_AGENT)


def multiplier_for(mode: ExecutionMode | str) -> int:
    """Return the cost multiplier for mode."""
    return COST_MULTIPLIERS[coerce_mode(mode)]


def estimate_cost(amount: float, mode: ExecutionMode | str) -> float:
    """Compute cost of amount raw tokens under mode.

    Raises InvalidAmount when the product overflows to a non-finite value.
    """
    cost = validate_amount(amount) * multiplier_for(mode)
    if not math.isfinite(cost):
        raise InvalidAmount(f"cost of {amount!r} tokens under {coerce_mode(mode).value} is not finite")
    return cost


def find_fallback(amount: float, remaining: float) -> ExecutionMode | None:
    """Return the first mode in FALLBACK_ORDER whose cost fits remaining, else None."""
    value = validate_amount(amount)
    for mode in FALLBACK_ORDER:
        if value * COST_MULTIPLIERS[mode] <= remaining:
            return mode
    return None
