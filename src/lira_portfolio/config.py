"""
Runtime configuration (data directory, exchange-rate endpoint).
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from lira_portfolio.constants import DEFAULT_FX_BASE_URL, DEFAULT_USD_TRY_RATE
from lira_portfolio.paths import (
    DEFAULT_DATA_DIR,
    PRICES_FILENAME,
    SETTINGS_FILENAME,
    TRANSACTIONS_FILENAME,
)

DATA_DIR_ENV_VAR = "LIRA_DATA_DIR"
FX_BASE_URL_ENV_VAR = "LIRA_FX_BASE_URL"


class Settings(BaseModel):
    """Configuration shared by the store, the FX client and the CLI."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = DEFAULT_DATA_DIR
    fx_base_url: str = DEFAULT_FX_BASE_URL
    default_usd_try_rate: float = Field(default=DEFAULT_USD_TRY_RATE, gt=0)

    @property
    def transactions_path(self) -> Path:
        return self.data_dir / TRANSACTIONS_FILENAME

    @property
    def prices_path(self) -> Path:
        return self.data_dir / PRICES_FILENAME

    @property
    def settings_path(self) -> Path:
        return self.data_dir / SETTINGS_FILENAME


def settings_from_env(*, data_dir: Path | None = None) -> Settings:
    """
    Build settings from the environment.

    Priority for the data directory: explicit argument > `LIRA_DATA_DIR` > `data/`.
    """
    env_data_dir = os.getenv(DATA_DIR_ENV_VAR)
    resolved_dir = data_dir or (Path(env_data_dir) if env_data_dir else DEFAULT_DATA_DIR)
    fx_base_url = os.getenv(FX_BASE_URL_ENV_VAR) or DEFAULT_FX_BASE_URL
    return Settings(data_dir=resolved_dir, fx_base_url=fx_base_url.rstrip("/"))


# Singleton for global access
_settings = Settings()


def get_settings() -> Settings:
    """Get the current global settings."""
    return _settings


def set_settings(settings: Settings) -> None:
    """Replace the global settings (CLI callback, tests)."""
    global _settings  # noqa: PLW0603 - intentional singleton for CLI state
    _settings = settings


def reset_settings() -> None:
    """Restore default settings."""
    set_settings(Settings())
