"""Core budget accounting: config, cost model, usage recording, ledger."""

from tokenbudget.core.budget import (
    BudgetConfig,
    BudgetConfigError,
    BudgetExceeded,
    InvalidAmount,
    InvalidMode,
    alert_level_for,
    budget_guard,
)
from tokenbudget.core.costs import COST_MULTIPLIERS, FALLBACK_ORDER, estimate_cost, find_fallback
from tokenbudget.core.ledger import BudgetLedger
from tokenbudget.core.usage import (
    InMemoryUsageLog,
    JsonLogUsageLog,
    UsageEntry,
    UsageRecorder,
)

__all__ = [
    "BudgetConfig",
    "BudgetConfigError",
    "BudgetExceeded",
    "BudgetLedger",
    "COST_MULTIPLIERS",
    "FALLBACK_ORDER",
    "InMemoryUsageLog",
    "InvalidAmount",
    "InvalidMode",
    "JsonLogUsageLog",
    "UsageEntry",
    "UsageRecorder",
    "alert_level_for",
    "budget_guard",
    "estimate_cost",
    "find_fallback",
]
