"""Stable reason codes for admission decisions."""

from enum import Enum


class ReasonCode(str, Enum):
    """Stable machine-readable codes carried by ExecutionDecision."""

    # Admission reason codes
    WITHIN_BUDGET = "within_budget"
    FALLBACK_SUGGESTED = "fallback_suggested"
    BUDGET_EXCEEDED = "budget_exceeded"
