"""Budget configuration, errors, and guard for token budget limits."""

import math
from numbers import Real
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from tokenbudget.contracts.enums import AlertLevel, ExecutionMode


class BudgetConfigError(ValueError):
    """Raised when a budget configuration is invalid."""


class InvalidAmount(ValueError):
    """Raised when a token amount is negative, non-finite, or not a number."""


class InvalidMode(ValueError):
    """Raised when a mode is outside ExecutionMode."""


class BudgetExceeded(ValueError):
    """Raised when a budget limit would be exceeded."""

    def __init__(self, message: str, limit_type: str) -> None:
        super().__init__(message)
        self.limit_type = limit_type


class BudgetConfig(BaseModel):
    """Budget limit, alert thresholds and fallback policy for one period."""

    limit: float = Field(gt=0, allow_inf_nan=False)
    warning_threshold: float = Field(default=0.7, gt=0, le=1)
    critical_threshold: float = Field(default=0.9, gt=0, le=1)
    auto_fallback_enabled: bool = True
    enforce_limit: bool = False

    model_config = {"extra": "forbid", "frozen": True}

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise BudgetConfigError(f"Invalid budget configuration: {exc}") from exc

    @model_validator(mode="after")
    def check_threshold_order(self) -> "BudgetConfig":
        """Critical threshold must not be below the warning threshold."""
        if self.critical_threshold < self.warning_threshold:
            raise ValueError(
                f"critical_threshold {self.critical_threshold} < "
                f"warning_threshold {self.warning_threshold}"
            )
        return self

    @classmethod
    def build(cls, **values: Any) -> "BudgetConfig":
        """Validate values into a BudgetConfig, raising BudgetConfigError on failure."""
        return cls(**values)


def validate_amount(amount: object) -> float:
    """Return amount as float or raise InvalidAmount.

    Bools are rejected even though they are ints.
    """
    if isinstance(amount, bool) or not isinstance(amount, Real):
        raise InvalidAmount(f"amount must be a number, got {type(amount).__name__}")
    value = float(amount)
    if not math.isfinite(value):
        raise InvalidAmount(f"amount must be finite, got {amount!r}")
    if value < 0:
        raise InvalidAmount(f"amount must be >= 0, got {amount!r}")
    return value


def coerce_mode(mode: object) -> ExecutionMode:
    """Return mode as an ExecutionMode or raise InvalidMode."""
    if isinstance(mode, ExecutionMode):
        return mode
    try:
        return ExecutionMode(mode)
    except (ValueError, TypeError) as exc:
        raise InvalidMode(f"unknown execution mode: {mode!r}") from exc


def alert_level_for(used: float, config: BudgetConfig) -> AlertLevel | None:
    """Evaluate the alert level on the unclamped used/limit ratio.

    Ratios above 1 stay CRITICAL; EXCEEDED is never returned.
    """
    ratio = used / config.limit
    if ratio >= config.critical_threshold:
        return AlertLevel.CRITICAL
    if ratio >= config.warning_threshold:
        return AlertLevel.WARNING
    return None


def budget_guard(config: BudgetConfig, used: float, cost_delta: float = 0) -> None:
    """Check that adding cost_delta to used would not exceed the limit.

    Raises BudgetExceeded if the limit would be exceeded. Spending exactly
    the limit is allowed. Exported for callers that gate costs
    computed outside the ledger, so cost_delta is checked here too.

    Args:
        config: Budget configuration
        used: Current consumption
        cost_delta: Additional cost to apply
    """
    if cost_delta < 0:
        raise ValueError("cost_delta must be >= 0")

    new_used = used + cost_delta
    if new_used > config.limit:
        raise BudgetExceeded(
            f"Budget exceeded: {new_used:g} > {config.limit:g} limit",
            limit_type="limit",
        )
