"""JSON encoding for ledgers, price tables and full backups."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from lira_portfolio.exceptions import LedgerValidationError
from lira_portfolio.ledger.validation import normalize_prices, normalize_transactions

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from lira_portfolio.models import PriceHistoryItem, PriceTable, Transaction

BACKUP_TRANSACTIONS_KEY = "transactions"
BACKUP_PRICES_KEY = "stockPrices"


def prices_to_records(
    prices: Mapping[str, Sequence[PriceHistoryItem]],
) -> dict[str, list[dict[str, object]]]:
    return {ticker: [p.to_record() for p in history] for ticker, history in prices.items()}


def dump_transactions_json(transactions: Sequence[Transaction]) -> str:
    """Encode transactions as a JSON array of camelCase records."""
    return json.dumps([t.to_record() for t in transactions], indent=2)


def dump_prices_json(prices: Mapping[str, Sequence[PriceHistoryItem]]) -> str:
    """Encode a price table as a JSON object of ticker -> [{date, price}]."""
    return json.dumps(prices_to_records(prices), indent=2)


def dump_backup_json(
    transactions: Sequence[Transaction], prices: Mapping[str, Sequence[PriceHistoryItem]]
) -> str:
    """Encode a full backup (`{"transactions": [...], "stockPrices": {...}}`)."""
    return json.dumps(
        {
            BACKUP_TRANSACTIONS_KEY: [t.to_record() for t in transactions],
            BACKUP_PRICES_KEY: prices_to_records(prices),
        },
        indent=2,
    )


def load_json_document(path: Path) -> Any:
    """
    Read and parse a JSON file.

    Raises:
        LedgerValidationError: If the file is missing or is not valid JSON.
    """
    if not path.exists():
        raise LedgerValidationError(f"File not found: {path}")
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError:
        raise LedgerValidationError(
            f"Failed to parse JSON file {path}. Please ensure it has the correct format."
        ) from None


def parse_backup(data: object) -> tuple[list[Transaction], PriceTable]:
    """
    Validate a decoded backup document.

    Both halves must be valid; a backup is never partially applied.

    Raises:
        LedgerValidationError: If the shape is wrong or either half is invalid.
    """
    if (
        not isinstance(data, dict)
        or BACKUP_TRANSACTIONS_KEY not in data
        or BACKUP_PRICES_KEY not in data
    ):
        raise LedgerValidationError(
            'Invalid backup file format. Expected a JSON object with "transactions" and '
            '"stockPrices" properties.'
        )

    errors: list[str] = []
    transactions: list[Transaction] = []
    prices: PriceTable = {}
    try:
        transactions = normalize_transactions(data[BACKUP_TRANSACTIONS_KEY])
    except LedgerValidationError as e:
        errors.append(f"Transactions data is invalid: {e}.")
    try:
        prices = normalize_prices(data[BACKUP_PRICES_KEY])
    except LedgerValidationError as e:
        errors.append(f"Stock prices data is invalid: {e}.")

    if errors:
        raise LedgerValidationError("The backup file contains invalid data. " + " ".join(errors))
    return transactions, prices
