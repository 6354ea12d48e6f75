"""CSV encoding for transaction ledgers and price tables.

Decoders return raw records; pass them through `ledger.validation` before use.
"""

from __future__ import annotations

import csv
import io
import math
from typing import TYPE_CHECKING, Any

from lira_portfolio.exceptions import LedgerValidationError
from lira_portfolio.models import Transaction, TransactionType

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from lira_portfolio.models import PriceHistoryItem

# Column order for exported ledgers; unknown columns follow alphabetically.
TRANSACTION_COLUMNS: tuple[str, ...] = (
    "id",
    "ticker",
    "type",
    "quantity",
    "price",
    "date",
    "usdTryRate",
    "commissionRate",
)
PRICE_COLUMNS: tuple[str, ...] = ("ticker", "date", "price")

_NUMERIC_COLUMNS = frozenset({"quantity", "price", "usdTryRate", "commissionRate"})

CRLF = "\r\n"


def _format_cell(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _column_order(keys: set[str]) -> list[str]:
    preferred = [c for c in TRANSACTION_COLUMNS if c in keys]
    extra = sorted(keys.difference(TRANSACTION_COLUMNS))
    return preferred + extra


def _write_rows(rows: Iterable[Sequence[object]], *, quoting: int) -> str:
    """Encode rows with CRLF separators and no trailing line break."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator=CRLF, quoting=quoting)
    writer.writerows(rows)
    return buffer.getvalue().removesuffix(CRLF)


def _read_rows(text: str) -> list[list[str]]:
    """Decode CSV text into stripped rows, dropping blank lines."""
    rows = csv.reader(io.StringIO(text, newline=""))
    return [[field.strip() for field in row] for row in rows if any(f.strip() for f in row)]


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line, honoring double quotes and `""` escapes."""
    rows = _read_rows(line)
    return rows[0] if rows else []


def transactions_to_csv(transactions: Sequence[Transaction | Mapping[str, Any]]) -> str:
    """
    Encode transactions as CSV (CRLF line endings).

    Every key present in any record becomes a column. Missing or `None` values are written
    as empty cells; fields containing commas, quotes or line breaks are quoted.
    """
    if not transactions:
        return ""

    rows = [t.to_record() if isinstance(t, Transaction) else dict(t) for t in transactions]
    keys: set[str] = set()
    for row in rows:
        keys.update(row)
    headers = _column_order(keys)

    lines: list[list[object]] = [list(headers)]
    lines.extend([_format_cell(row.get(h)) for h in headers] for row in rows)
    return _write_rows(lines, quoting=csv.QUOTE_MINIMAL)


def csv_to_transactions(text: str) -> list[dict[str, Any]]:
    """
    Decode a transaction CSV into raw records.

    Numeric columns become floats (empty -> `None`, unparseable -> NaN so validation rejects
    them). Known transaction types are upper-cased.
    """
    rows = _read_rows(text)
    if len(rows) < 2:
        return []

    headers = rows[0]
    records: list[dict[str, Any]] = []
    for values in rows[1:]:
        record: dict[str, Any] = {}
        for i, header in enumerate(headers):
            value: Any = values[i] if i < len(values) else None
            if header in _NUMERIC_COLUMNS:
                value = _parse_number(value)
            elif header == "type" and value:
                upper = value.upper()
                if upper in {t.value for t in TransactionType}:
                    value = upper
            record[header] = value
        records.append(record)
    return records


def _parse_number(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return math.nan


def prices_to_csv(prices: Mapping[str, Sequence[PriceHistoryItem]]) -> str:
    """Encode a price table as `ticker,date,price` rows, tickers sorted."""
    rows = [
        [ticker, point.date.isoformat(), _format_cell(point.price)]
        for ticker in sorted(prices)
        for point in prices[ticker]
    ]
    # Bare header; data rows quote ticker and date but not the price.
    header = ",".join(PRICE_COLUMNS)
    body = _write_rows(rows, quoting=csv.QUOTE_NONNUMERIC)
    return f"{header}{CRLF}{body}" if body else header


def csv_to_prices(text: str) -> dict[str, list[dict[str, Any]]]:
    """
    Decode a `ticker,date,price` CSV into a raw ticker -> history mapping.

    Rows with a missing ticker/date or a non-numeric price are skipped.

    Raises:
        LedgerValidationError: If the header is not exactly `ticker,date,price`.
    """
    rows = _read_rows(text)
    if len(rows) < 2:
        return {}

    if tuple(rows[0][:3]) != PRICE_COLUMNS:
        raise LedgerValidationError(
            'Invalid CSV headers for prices. Expected "ticker,date,price".'
        )

    prices: dict[str, list[dict[str, Any]]] = {}
    for values in rows[1:]:
        if len(values) < 3:
            continue
        ticker, date, price_text = values[0], values[1], values[2]
        price = _parse_number(price_text)
        if not ticker or not date or price is None or math.isnan(price):
            continue
        prices.setdefault(ticker, []).append({"date": date, "price": price})
    return prices
