"""JSON file store for the ledger, price table and current exchange rate.

Layout under the data directory:
- transactions.json: {"transactions": [...]}
- prices.json: {"prices": {"<ticker>": [{"date": ..., "price": ...}, ...]}}
- settings.json: {"currentUsdTryRate": 32.5}

Missing files read as empty. Writes are atomic (temp file + fsync + rename); there is no
locking or multi-file transaction.
"""

from __future__ import annotations

import json
import os
import uuid
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from lira_portfolio.config import get_settings
from lira_portfolio.exceptions import LedgerValidationError, StorageError
from lira_portfolio.ledger.json_codec import prices_to_records
from lira_portfolio.ledger.validation import normalize_prices
from lira_portfolio.models import PriceHistoryItem, Transaction

if TYPE_CHECKING:
    import datetime as dt
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from lira_portfolio.config import Settings
    from lira_portfolio.models import PriceTable

logger = structlog.get_logger()

RATE_KEY = "currentUsdTryRate"


def atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    """Write JSON atomically (temp file + fsync + rename)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp.{uuid.uuid4().hex}")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


def _read_json_object(path: Path, *, kind: str, required_key: str) -> dict[str, Any] | None:
    """Read a store file; `None` if it does not exist."""
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise StorageError(
            f"{kind} file is not valid JSON: {path}. Fix the file or restore from backup."
        ) from e

    if not isinstance(raw, dict) or required_key not in raw:
        raise StorageError(
            f"{kind} file has an unexpected schema: {path} (expected key '{required_key}')"
        )
    return raw


class PortfolioStore:
    """
    Persist and reload everything the engine needs between CLI invocations.

    The store keeps no state in memory; every call reads or writes the files directly.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @property
    def data_dir(self) -> Path:
        return self.settings.data_dir

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------
    def load_transactions(self) -> list[Transaction]:
        """Load the ledger (empty if nothing has been saved yet)."""
        path = self.settings.transactions_path
        raw = _read_json_object(path, kind="Transactions", required_key="transactions")
        if raw is None:
            return []

        items = raw["transactions"]
        if not isinstance(items, list):
            raise StorageError(f"Transactions file has an unexpected schema: {path}")

        transactions: list[Transaction] = []
        for i, item in enumerate(items):
            try:
                transactions.append(Transaction.model_validate(item))
            except ValidationError as e:
                raise StorageError(
                    f"Transactions file contains an invalid transaction at index {i}: {path}"
                ) from e
        return transactions

    def save_transactions(self, transactions: Sequence[Transaction]) -> None:
        atomic_write_json(
            self.settings.transactions_path,
            {"transactions": [t.to_record() for t in transactions]},
        )
        logger.debug("Saved transactions", count=len(transactions))

    def add_transaction(self, transaction: Transaction) -> None:
        """Append a transaction to the ledger."""
        transactions = self.load_transactions()
        transactions.append(transaction)
        self.save_transactions(transactions)

    def remove_transaction(self, transaction_id: str) -> bool:
        """Delete a transaction by id. Returns False if no such id exists."""
        transactions = self.load_transactions()
        kept = [t for t in transactions if t.id != transaction_id]
        if len(kept) == len(transactions):
            return False
        self.save_transactions(kept)
        return True

    # -------------------------------------------------------------------------
    # Prices
    # -------------------------------------------------------------------------
    def load_prices(self) -> PriceTable:
        """Load the price table; histories are re-sorted by date on load."""
        path = self.settings.prices_path
        raw = _read_json_object(path, kind="Prices", required_key="prices")
        if raw is None:
            return {}
        try:
            return normalize_prices(raw["prices"])
        except LedgerValidationError as e:
            raise StorageError(f"Prices file contains invalid data: {path} ({e})") from e

    def save_prices(self, prices: Mapping[str, Sequence[PriceHistoryItem]]) -> None:
        atomic_write_json(self.settings.prices_path, {"prices": prices_to_records(prices)})
        logger.debug("Saved prices", tickers=len(prices))

    def add_price(self, ticker: str, date: dt.date, price: float) -> None:
        """Record a price, replacing any existing entry for the same date."""
        prices = self.load_prices()
        history = [p for p in prices.get(ticker, []) if p.date != date]
        history.append(PriceHistoryItem(date=date, price=price))
        history.sort(key=lambda p: p.date)
        prices[ticker] = history
        self.save_prices(prices)

    # -------------------------------------------------------------------------
    # Exchange rate
    # -------------------------------------------------------------------------
    def load_usd_try_rate(self) -> float:
        """Current USD/TRY rate, or the configured default if none is stored."""
        path = self.settings.settings_path
        raw = _read_json_object(path, kind="Settings", required_key=RATE_KEY)
        if raw is None:
            return self.settings.default_usd_try_rate

        rate = raw[RATE_KEY]
        if isinstance(rate, bool) or not isinstance(rate, int | float) or rate <= 0:
            raise StorageError(f"Settings file has an invalid {RATE_KEY}: {path}")
        return float(rate)

    def save_usd_try_rate(self, rate: float) -> None:
        if rate <= 0:
            raise ValueError(f"USD/TRY rate must be positive (got {rate})")
        atomic_write_json(self.settings.settings_path, {RATE_KEY: rate})
        logger.debug("Saved USD/TRY rate", rate=rate)

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------
    def clear(self) -> None:
        """Delete all stored data."""
        for path in (
            self.settings.transactions_path,
            self.settings.prices_path,
            self.settings.settings_path,
        ):
            path.unlink(missing_ok=True)
        logger.info("Cleared portfolio data", data_dir=str(self.data_dir))
