"""Pydantic v2 models returned by the budget ledger."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, model_validator

from tokenbudget.contracts.enums import AlertLevel, ExecutionMode
from tokenbudget.contracts.reasons import ReasonCode

BUDGET_EXCEEDED_REASON = "Budget exceeded"


def fallback_reason(mode: ExecutionMode) -> str:
    """Human-readable reason suggesting a fallback mode, e.g. "Use chat mode"."""
    return f"Use {mode.value} mode"


class BaseContractModel(BaseModel):
    """Base model for all contracts with common config."""

    model_config = {"extra": "forbid", "frozen": True}


class BudgetStatus(BaseContractModel):
    """Snapshot of ledger consumption."""

    used: float = Field(ge=0)
    remaining: float = Field(ge=0)
    percentage: float = Field(ge=0, le=1)
    alert_level: AlertLevel | None = None


class ExecutionDecision(BaseContractModel):
    """Admission decision for a proposed operation.

    ``allowed`` is True only when the requested mode fits. A denied decision
    carries either a ``fallback`` mode (FALLBACK_SUGGESTED) or none
    (BUDGET_EXCEEDED).
    """

    allowed: bool
    estimated_cost: float = Field(ge=0)
    fallback: ExecutionMode | None = None
    reason: str | None = None
    reason_code: ReasonCode = ReasonCode.WITHIN_BUDGET

    @model_validator(mode="after")
    def check_consistency(self) -> "ExecutionDecision":
        """Allowed decisions never carry a fallback or denial reason."""
        if self.allowed and (self.fallback is not None or self.reason is not None):
            raise ValueError("allowed decision cannot carry fallback or reason")
        if not self.allowed and self.reason is None:
            raise ValueError("denied decision requires a reason")
        return self


class BudgetAlert(BaseContractModel):
    """Alert recorded when consumption crosses a threshold."""

    level: AlertLevel
    message: str
    used: float = Field(ge=0)
    limit: float = Field(gt=0)
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
