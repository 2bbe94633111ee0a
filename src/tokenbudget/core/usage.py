"""Usage recording for ledger reserve/consume calls."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Protocol

from pydantic import BaseModel, Field

from tokenbudget.contracts.enums import ExecutionMode, UsageOperation

USAGE_LOGGER_NAME = "tokenbudget.usage"


class UsageRecorder(Protocol):
    """Protocol for recording usage entries."""

    def record(self, entry: "UsageEntry") -> None:
        """Record a usage entry."""
        ...


class UsageEntry(BaseModel):
    """Single reserve or consume applied to a ledger."""

    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    operation: UsageOperation
    mode: ExecutionMode
    amount: float = Field(ge=0)
    multiplier: int = Field(gt=0)
    cost: float = Field(ge=0)
    used_after: float = Field(ge=0)
    reservation_id: str | None = None

    model_config = {"extra": "forbid"}


class InMemoryUsageLog:
    """Recorder that keeps UsageEntry list and supports aggregation."""

    def __init__(self) -> None:
        self.entries: list[UsageEntry] = []

    def record(self, entry: UsageEntry) -> None:
        """Record a usage entry."""
        self.entries.append(entry)

    def total_cost(self, mode: ExecutionMode | None = None) -> float:
        """Sum cost for all entries, optionally filtered by mode."""
        if mode is None:
            return sum(e.cost for e in self.entries)
        return sum(e.cost for e in self.entries if e.mode == mode)

    def summary(self) -> dict[str, Any]:
        """Aggregate cost by mode and by operation."""
        by_mode: dict[str, float] = {}
        by_operation: dict[str, float] = {}
        for e in self.entries:
            by_mode[e.mode.value] = by_mode.get(e.mode.value, 0.0) + e.cost
            by_operation[e.operation.value] = by_operation.get(e.operation.value, 0.0) + e.cost
        return {"by_mode": by_mode, "by_operation": by_operation}

    def clear(self) -> None:
        """Drop all recorded entries."""
        self.entries.clear()


class JsonLogUsageLog:
    """Recorder that writes one JSON line per entry to logger tokenbudget.usage."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(USAGE_LOGGER_NAME)

    def record(self, entry: UsageEntry) -> None:
        """Record entry as a single JSON line to the usage logger."""
        payload = {
            "occurred_at": entry.occurred_at.isoformat(),
            "operation": entry.operation.value,
            "mode": entry.mode.value,
            "amount": entry.amount,
            "multiplier": entry.multiplier,
            "cost": entry.cost,
            "used_after": entry.used_after,
            "reservation_id": entry.reservation_id,
        }
        self._logger.info(json.dumps(payload))
