"""Canonical enum definitions for execution modes and alert severities."""

from enum import Enum


class ExecutionMode(str, Enum):
    """Strategy an operation runs under; determines its cost multiplier."""

    CHAT = "chat"
    SINGLE_AGENT = "single"
    MULTI_AGENT = "multi"


class AlertLevel(str, Enum):
    """How close consumption is to the budget limit."""

    WARNING = "warning"
    CRITICAL = "critical"
    # Declared for callers; threshold evaluation never produces it.
    EXCEEDED = "exceeded"


class UsageOperation(str, Enum):
    """Ledger mutation that produced a usage entry."""

    RESERVE = "reserve"
    CONSUME = "consume"
