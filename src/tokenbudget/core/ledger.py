"""Budget ledger: accounting, alerting and admission for a token budget."""

import itertools
import logging
import math
from typing import TYPE_CHECKING
from uuid import uuid4

from tokenbudget.contracts.enums import AlertLevel, ExecutionMode, UsageOperation
from tokenbudget.contracts.models import (
    BUDGET_EXCEEDED_REASON,
    BudgetAlert,
    BudgetStatus,
    ExecutionDecision,
    fallback_reason,
)
from tokenbudget.contracts.reasons import ReasonCode
from tokenbudget.core.budget import (
    BudgetConfig,
    InvalidAmount,
    alert_level_for,
    budget_guard,
    coerce_mode,
)
from tokenbudget.core.costs import COST_MULTIPLIERS, estimate_cost, find_fallback
from tokenbudget.core.usage import UsageEntry, UsageRecorder

if TYPE_CHECKING:
    from tokenbudget.settings import Settings

LEDGER_LOGGER_NAME = "tokenbudget.ledger"

logger = logging.getLogger(LEDGER_LOGGER_NAME)


class BudgetLedger:
    """Tracks consumption against a fixed token budget.

    Not thread-safe: share across threads only behind an external lock.

    Args:
        config: Budget limit, thresholds and fallback policy
        recorder: Optional recorder receiving a UsageEntry per reserve/consume
    """

    def __init__(self, config: BudgetConfig, recorder: UsageRecorder | None = None) -> None:
        self.config = config
        self.recorder = recorder
        self.used: float = 0.0
        self._alerts: list[BudgetAlert] = []
        self._sequence = itertools.count(1)

    @classmethod
    def from_options(
        cls,
        default_budget: float,
        warning_threshold: float | None = None,
        critical_threshold: float | None = None,
        enable_auto_fallback: bool | None = None,
        recorder: UsageRecorder | None = None,
    ) -> "BudgetLedger":
        """Build a ledger from option names; None means use the default."""
        values: dict[str, object] = {"limit": default_budget}
        if warning_threshold is not None:
            values["warning_threshold"] = warning_threshold
        if critical_threshold is not None:
            values["critical_threshold"] = critical_threshold
        if enable_auto_fallback is not None:
            values["auto_fallback_enabled"] = enable_auto_fallback
        return cls(BudgetConfig.build(**values), recorder=recorder)

    @classmethod
    def from_settings(
        cls,
        settings: "Settings | None" = None,
        recorder: UsageRecorder | None = None,
    ) -> "BudgetLedger":
        """Build a ledger from application settings (cached settings by default)."""
        from tokenbudget.settings import get_settings

        settings = settings or get_settings()
        return cls(settings.to_budget_config(), recorder=recorder)

    @property
    def limit(self) -> float:
        return self.config.limit

    @property
    def alerts(self) -> tuple[BudgetAlert, ...]:
        """Recorded alerts, oldest first."""
        return tuple(self._alerts)

    def estimate_cost(self, amount: float, mode: ExecutionMode | str) -> float:
        """Return amount times the multiplier for mode. No side effects."""
        return estimate_cost(amount, mode)

    def get_status(self) -> BudgetStatus:
        """Return a snapshot of consumption. Does not record alerts."""
        return BudgetStatus(
            used=self.used,
            remaining=max(0.0, self.config.limit - self.used),
            percentage=min(1.0, self.used / self.config.limit),
            alert_level=alert_level_for(self.used, self.config),
        )

    def can_execute(self, amount: float, mode: ExecutionMode | str) -> ExecutionDecision:
        """Decide whether amount tokens under mode fit the remaining budget.

        When they do not and auto fallback is enabled, the decision names the
        cheapest mode (CHAT, then SINGLE_AGENT) that fits. Ledger state is
        not changed.
        """
        mode = coerce_mode(mode)
        estimated = estimate_cost(amount, mode)
        if self.used + estimated <= self.config.limit:
            decision = ExecutionDecision(allowed=True, estimated_cost=estimated)
        else:
            fallback = None
            if self.config.auto_fallback_enabled:
                fallback = find_fallback(amount, self.config.limit - self.used)
            if fallback is not None:
                decision = ExecutionDecision(
                    allowed=False,
                    estimated_cost=estimated,
                    fallback=fallback,
                    reason=fallback_reason(fallback),
                    reason_code=ReasonCode.FALLBACK_SUGGESTED,
                )
            else:
                decision = ExecutionDecision(
                    allowed=False,
                    estimated_cost=estimated,
                    reason=BUDGET_EXCEEDED_REASON,
                    reason_code=ReasonCode.BUDGET_EXCEEDED,
                )
        logger.debug(
            "can_execute mode=%s cost=%g used=%g limit=%g -> %s",
            mode.value,
            estimated,
            self.used,
            self.config.limit,
            decision.reason_code.value,
        )
        return decision

    def reserve(self, amount: float, mode: ExecutionMode | str) -> str:
        """Commit the estimated cost and return a unique reservation id.

        The id identifies the reservation only; there is no release or
        commit step.
        """
        reservation_id = f"reserve_{next(self._sequence)}_{uuid4().hex[:12]}"
        self._apply(UsageOperation.RESERVE, amount, mode, reservation_id)
        return reservation_id

    def consume(self, amount: float, mode: ExecutionMode | str) -> None:
        """Commit the estimated cost."""
        self._apply(UsageOperation.CONSUME, amount, mode, None)

    def reset(self) -> None:
        """Start a new period: zero consumption and clear alert history."""
        logger.info("Resetting budget ledger (used=%g, alerts=%d)", self.used, len(self._alerts))
        self.used = 0.0
        self._alerts.clear()

    def _apply(
        self,
        operation: UsageOperation,
        amount: float,
        mode: ExecutionMode | str,
        reservation_id: str | None,
    ) -> None:
        mode = coerce_mode(mode)
        cost = estimate_cost(amount, mode)
        if self.config.enforce_limit:
            budget_guard(self.config, self.used, cost_delta=cost)
        if not math.isfinite(self.used + cost):
            raise InvalidAmount(f"adding {cost:g} to {self.used:g} used overflows")

        self.used += cost

        if self.recorder is not None:
            self.recorder.record(
                UsageEntry(
                    operation=operation,
                    mode=mode,
                    amount=float(amount),
                    multiplier=COST_MULTIPLIERS[mode],
                    cost=cost,
                    used_after=self.used,
                    reservation_id=reservation_id,
                )
            )
        self._record_alert()

    def _record_alert(self) -> None:
        """Append an alert when the level changed since the last recorded one."""
        level = alert_level_for(self.used, self.config)
        if level is None:
            return
        if self._alerts and self._alerts[-1].level == level:
            return
        alert = BudgetAlert(
            level=level,
            message=_alert_message(level, self.used, self.config.limit),
            used=self.used,
            limit=self.config.limit,
        )
        self._alerts.append(alert)
        logger.warning(alert.message)


def _alert_message(level: AlertLevel, used: float, limit: float) -> str:
    return f"Token budget {level.value}: {used:g} of {limit:g} used ({used / limit:.0%})"
