"""Pytest configuration and fixtures."""

import pytest

from tokenbudget.core import BudgetConfig, BudgetLedger, InMemoryUsageLog
from tokenbudget.settings import get_settings


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Clear cached settings before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ledger() -> BudgetLedger:
    """Ledger with a 10000 token budget and default thresholds."""
    return BudgetLedger(BudgetConfig(limit=10_000))


@pytest.fixture
def usage_log() -> InMemoryUsageLog:
    return InMemoryUsageLog()
