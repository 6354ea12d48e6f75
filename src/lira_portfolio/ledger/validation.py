"""Validation and normalization of imported ledger and price data.

The accounting engine trusts its inputs. Everything read from a file or typed by a user goes
through here first: records are normalized into `Transaction` / `PriceHistoryItem` models,
and any record with an unusable shape rejects the whole batch.
"""

from __future__ import annotations

import datetime as dt
import math
from collections.abc import Mapping
from typing import Any

from lira_portfolio.exceptions import LedgerValidationError
from lira_portfolio.models import PriceHistoryItem, PriceTable, Transaction, TransactionType

# Accepted input spellings -> model field names.
_FIELD_ALIASES: dict[str, str] = {
    "usdTryRate": "usd_try_rate",
    "commissionRate": "commission_rate",
}


def parse_date(value: object) -> dt.date:
    """
    Parse a calendar date from a date, datetime, or ISO 8601 string.

    Timestamps (e.g. `2024-03-01T10:15:00Z`) are truncated to their date.

    Raises:
        ValueError: If the value is not a recognizable date.
    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Not a date: {value!r}")

    text = value.strip()
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        pass
    return dt.datetime.fromisoformat(text.replace("Z", "+00:00")).date()


def _to_float(value: object) -> float:
    """Convert a number or numeric string to float (NaN when not numeric)."""
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def _optional_rate(value: object) -> float | None:
    """Optional numeric field: empty, zero or non-numeric values mean "not provided"."""
    if value is None or value == "":
        return None
    number = _to_float(value)
    if not math.isfinite(number) or number == 0:
        return None
    return number


def _canonical_keys(record: Mapping[str, Any]) -> dict[str, Any]:
    return {_FIELD_ALIASES.get(key, key): value for key, value in record.items()}


def normalize_transaction(
    raw: Mapping[str, Any], *, index: int = 0, generated_id: str | None = None
) -> Transaction:
    """
    Normalize a single raw transaction record.

    Rules:
    - `id` missing: `generated_id` (or `<utc timestamp>-<index>`) is used.
    - `type` is case-insensitive; anything other than SELL is a BUY.
    - `quantity` and `price` must be finite numbers (numeric strings are accepted).
    - `date` must parse as a calendar date.
    - `usdTryRate` / `commissionRate` are optional; empty values become `None`.

    Raises:
        LedgerValidationError: If a required field is missing or malformed.
    """
    if not isinstance(raw, Mapping):
        raise LedgerValidationError("Transaction must be an object", index=index)

    record = _canonical_keys(raw)

    ticker = record.get("ticker")
    if not isinstance(ticker, str) or not ticker.strip():
        raise LedgerValidationError("Transaction is missing a ticker", index=index)

    quantity = _to_float(record.get("quantity"))
    price = _to_float(record.get("price"))
    if not math.isfinite(quantity) or not math.isfinite(price):
        raise LedgerValidationError(
            "Transaction quantity and price must be numbers", index=index
        )

    try:
        trade_date = parse_date(record.get("date"))
    except ValueError:
        raise LedgerValidationError(
            f"Transaction has an invalid date: {record.get('date')!r}", index=index
        ) from None

    raw_type = str(record.get("type") or "").strip().upper()
    tx_type = TransactionType.SELL if raw_type == "SELL" else TransactionType.BUY

    tx_id = record.get("id")
    if not tx_id:
        tx_id = generated_id or f"{dt.datetime.now(dt.UTC).isoformat()}-{index}"

    return Transaction(
        id=str(tx_id),
        ticker=ticker.strip(),
        type=tx_type,
        quantity=quantity,
        price=price,
        date=trade_date,
        usd_try_rate=_optional_rate(record.get("usd_try_rate")),
        commission_rate=_optional_rate(record.get("commission_rate")),
    )


def normalize_transactions(raw: object) -> list[Transaction]:
    """
    Validate and normalize a list of raw transaction records.

    The batch is all-or-nothing: one bad record rejects the import.

    Raises:
        LedgerValidationError: If `raw` is not a list or any record is invalid.
    """
    if not isinstance(raw, list):
        raise LedgerValidationError("Transactions must be a list of objects")
    return [normalize_transaction(item, index=i) for i, item in enumerate(raw)]


def normalize_prices(raw: object) -> PriceTable:
    """
    Validate a ticker -> price history mapping and sort each history by date.

    Each history entry must be an object with a parseable `date` and a numeric `price`
    (strings are rejected). The input is not mutated; a new table is returned.

    Raises:
        LedgerValidationError: If the shape or any entry is invalid.
    """
    if not isinstance(raw, Mapping):
        raise LedgerValidationError(
            "Prices must be an object mapping tickers to lists of {date, price}"
        )

    table: PriceTable = {}
    for ticker, history in raw.items():
        if not isinstance(history, list):
            raise LedgerValidationError(f"Price history for {ticker!r} must be a list")

        items: list[PriceHistoryItem] = []
        for i, point in enumerate(history):
            if not isinstance(point, Mapping):
                raise LedgerValidationError(
                    f"Price entry for {ticker!r} must be an object", index=i
                )
            price = point.get("price")
            if isinstance(price, bool) or not isinstance(price, int | float):
                raise LedgerValidationError(
                    f"Price entry for {ticker!r} has a non-numeric price", index=i
                )
            if not math.isfinite(price):
                raise LedgerValidationError(
                    f"Price entry for {ticker!r} has a non-finite price", index=i
                )
            try:
                point_date = parse_date(point.get("date"))
            except ValueError:
                raise LedgerValidationError(
                    f"Price entry for {ticker!r} has an invalid date", index=i
                ) from None
            items.append(PriceHistoryItem(date=point_date, price=float(price)))

        items.sort(key=lambda p: p.date)
        table[str(ticker)] = items

    return table
