"""Pydantic models for ledger input records (transactions, price history)."""

from __future__ import annotations

import datetime as dt
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TransactionType(str, Enum):
    """Ledger transaction types."""

    BUY = "BUY"
    SELL = "SELL"


class Transaction(BaseModel):
    """Single buy or sell in the ledger.

    Field names serialize as camelCase (`usdTryRate`, `commissionRate`) to stay compatible
    with exported ledgers; both spellings are accepted on input.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    """Unique transaction identifier."""

    ticker: str
    """Ticker symbol, e.g. THYAO."""

    type: TransactionType

    quantity: float
    """Number of shares (positive)."""

    price: float
    """Unit price in TRY."""

    date: dt.date
    """Trade date."""

    usd_try_rate: float | None = Field(default=None, alias="usdTryRate")
    """TRY per USD at trade time, if known."""

    commission_rate: float | None = Field(default=None, alias="commissionRate")
    """Commission as a fraction of the trade value (0.002 = 0.2%)."""

    def to_record(self) -> dict[str, object]:
        """Serialize to the camelCase JSON shape used by exports and the store."""
        return self.model_dump(mode="json", by_alias=True)


class PriceHistoryItem(BaseModel):
    """Observed closing price for a ticker on a date."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    price: float

    def to_record(self) -> dict[str, object]:
        return self.model_dump(mode="json")


# Ticker -> price history, ascending by date.
PriceTable = dict[str, list[PriceHistoryItem]]
