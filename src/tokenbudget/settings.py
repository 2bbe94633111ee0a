"""Application settings using pydantic-settings."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from tokenbudget.core.budget import BudgetConfig, BudgetConfigError

_SETTINGS_LOGGER = logging.getLogger("tokenbudget.settings")


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "tokenbudget"
    log_level: str = "INFO"

    # Budget defaults
    default_budget: float = 100_000
    warning_threshold: float = 0.7
    critical_threshold: float = 0.9
    enable_auto_fallback: bool = True
    enforce_limit: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def to_budget_config(self) -> BudgetConfig:
        """Build a BudgetConfig from the budget defaults.

        Logs a warning and re-raises BudgetConfigError when they are invalid.
        """
        try:
            return BudgetConfig.build(
                limit=self.default_budget,
                warning_threshold=self.warning_threshold,
                critical_threshold=self.critical_threshold,
                auto_fallback_enabled=self.enable_auto_fallback,
                enforce_limit=self.enforce_limit,
            )
        except BudgetConfigError:
            _SETTINGS_LOGGER.warning(
                "Invalid budget settings: default_budget=%s warning_threshold=%s critical_threshold=%s",
                self.default_budget,
                self.warning_threshold,
                self.critical_threshold,
            )
            raise


@lru_cache()
def get_settings() -> Settings:
    """Get settings instance (cached)."""
    return Settings()
