"""Canonical contracts shared by the ledger and its callers."""

from tokenbudget.contracts.enums import AlertLevel, ExecutionMode, UsageOperation
from tokenbudget.contracts.models import (
    BUDGET_EXCEEDED_REASON,
    BudgetAlert,
    BudgetStatus,
    ExecutionDecision,
    fallback_reason,
)
from tokenbudget.contracts.reasons import ReasonCode

__all__ = [
    "AlertLevel",
    "BUDGET_EXCEEDED_REASON",
    "BudgetAlert",
    "BudgetStatus",
    "ExecutionDecision",
    "ExecutionMode",
    "ReasonCode",
    "UsageOperation",
    "fallback_reason",
]
