"""
Centralized path defaults for Lira Portfolio.

All paths are expressed relative to the current working directory. Every default can be
overridden via `--data-dir` or `LIRA_DATA_DIR`.
"""

from pathlib import Path

DEFAULT_DATA_DIR = Path("data")
TRANSACTIONS_FILENAME = "transactions.json"
PRICES_FILENAME = "prices.json"
SETTINGS_FILENAME = "settings.json"

__all__ = [
    "DEFAULT_DATA_DIR",
    "PRICES_FILENAME",
    "SETTINGS_FILENAME",
    "TRANSACTIONS_FILENAME",
]
