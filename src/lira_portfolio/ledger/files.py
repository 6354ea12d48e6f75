"""File import/export for ledgers and price tables (JSON or CSV, chosen by extension)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from lira_portfolio.exceptions import LedgerValidationError
from lira_portfolio.ledger.csv_codec import (
    csv_to_prices,
    csv_to_transactions,
    prices_to_csv,
    transactions_to_csv,
)
from lira_portfolio.ledger.json_codec import (
    dump_backup_json,
    dump_prices_json,
    dump_transactions_json,
    load_json_document,
    parse_backup,
)
from lira_portfolio.ledger.validation import normalize_prices, normalize_transactions

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from lira_portfolio.models import PriceHistoryItem, PriceTable, Transaction

logger = structlog.get_logger()

SUPPORTED_SUFFIXES = frozenset({".json", ".csv"})


def _file_format(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise LedgerValidationError(
            f"Unsupported file type '{path.suffix or path.name}'. Use a .json or .csv file."
        )
    return suffix


def _read_text(path: Path) -> str:
    if not path.exists():
        raise LedgerValidationError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def import_transactions(path: Path) -> list[Transaction]:
    """
    Read and validate a transaction file.

    Raises:
        LedgerValidationError: Unsupported extension, unreadable content, or invalid records.
    """
    if _file_format(path) == ".csv":
        raw: object = csv_to_transactions(_read_text(path))
    else:
        raw = load_json_document(path)
    transactions = normalize_transactions(raw)
    logger.info("Imported transactions", path=str(path), count=len(transactions))
    return transactions


def import_prices(path: Path) -> PriceTable:
    """
    Read and validate a price file. Histories come back sorted by date.

    Raises:
        LedgerValidationError: Unsupported extension, unreadable content, or invalid entries.
    """
    if _file_format(path) == ".csv":
        raw: object = csv_to_prices(_read_text(path))
    else:
        raw = load_json_document(path)
    prices = normalize_prices(raw)
    logger.info("Imported prices", path=str(path), tickers=len(prices))
    return prices


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the CSV's CRLF endings intact on every platform.
    path.write_text(text, encoding="utf-8", newline="")


def export_transactions(path: Path, transactions: Sequence[Transaction]) -> None:
    """Write transactions as JSON or CSV depending on the extension."""
    if _file_format(path) == ".csv":
        _write_text(path, transactions_to_csv(transactions))
    else:
        _write_text(path, dump_transactions_json(transactions))
    logger.info("Exported transactions", path=str(path), count=len(transactions))


def export_prices(path: Path, prices: Mapping[str, Sequence[PriceHistoryItem]]) -> None:
    """Write a price table as JSON or CSV depending on the extension."""
    if _file_format(path) == ".csv":
        _write_text(path, prices_to_csv(prices))
    else:
        _write_text(path, dump_prices_json(prices))
    logger.info("Exported prices", path=str(path), tickers=len(prices))


def _require_json(path: Path) -> None:
    if path.suffix.lower() != ".json":
        raise LedgerValidationError(
            f"Unsupported backup file type '{path.suffix or path.name}'. Use a .json file."
        )


def export_backup(
    path: Path,
    transactions: Sequence[Transaction],
    prices: Mapping[str, Sequence[PriceHistoryItem]],
) -> None:
    """Write transactions and prices to a single JSON backup file."""
    _require_json(path)
    _write_text(path, dump_backup_json(transactions, prices))
    logger.info(
        "Exported backup", path=str(path), transactions=len(transactions), tickers=len(prices)
    )


def import_backup(path: Path) -> tuple[list[Transaction], PriceTable]:
    """
    Read and validate a backup file. Nothing is returned unless both halves are valid.

    Raises:
        LedgerValidationError: Wrong extension, unreadable content, or invalid data.
    """
    _require_json(path)
    transactions, prices = parse_backup(load_json_document(path))
    logger.info(
        "Imported backup", path=str(path), transactions=len(transactions), tickers=len(prices)
    )
    return transactions, prices
