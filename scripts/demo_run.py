#!/usr/bin/env python3
"""Demo runner for the token budget ledger.

Usage:
    python scripts/demo_run.py
"""

import logging
import sys

from tokenbudget.contracts.enums import ExecutionMode
from tokenbudget.contracts.models import BudgetStatus
from tokenbudget.core import BudgetLedger, JsonLogUsageLog
from tokenbudget.settings import get_settings

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

usage_logger = logging.getLogger("tokenbudget.usage")
usage_logger.setLevel(logging.INFO)

logger = logging.getLogger(__name__)


def print_status(label: str, status: BudgetStatus) -> None:
    level = status.alert_level.value if status.alert_level else "-"
    print(
        f"{label:<16} used={status.used:g} remaining={status.remaining:g} "
        f"percentage={status.percentage:.2f} alert={level}"
    )


def main() -> BudgetStatus:
    """Run the demo: check, reserve, consume, and return the final status."""
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} demo with budget 10000")

    ledger = BudgetLedger.from_options(default_budget=10_000, recorder=JsonLogUsageLog())
    print_status("Initial:", ledger.get_status())

    decision = ledger.can_execute(5000, ExecutionMode.MULTI_AGENT)
    print(
        f"Can execute multi-agent? allowed={decision.allowed} "
        f"estimated_cost={decision.estimated_cost:g} "
        f"fallback={decision.fallback.value if decision.fallback else '-'} "
        f"reason={decision.reason}"
    )

    reservation_id = ledger.reserve(1000, ExecutionMode.SINGLE_AGENT)
    print(f"Reservation:     {reservation_id}")
    print_status("After reserve:", ledger.get_status())

    ledger.consume(800, ExecutionMode.SINGLE_AGENT)
    status = ledger.get_status()
    print_status("After consume:", status)

    for alert in ledger.alerts:
        print(f"Alert:           {alert.level.value} - {alert.message}")

    return status


if __name__ == "__main__":
    final = main()
    sys.exit(0 if final.used <= 10_000 else 1)
