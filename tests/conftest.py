"""
Shared test fixtures.

PHILOSOPHY: Use REAL objects wherever possible. Only mock at system boundaries.
- Real Pydantic models (not dicts pretending to be models)
- Real JSON files under tmp_path for store tests
- respx ONLY for HTTP boundary
"""

from __future__ import annotations

import datetime as dt
from typing import TYPE_CHECKING

import pytest

from lira_portfolio.config import Settings, reset_settings, set_settings
from lira_portfolio.models import PriceHistoryItem, Transaction, TransactionType

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def _reset_settings() -> Iterator[None]:
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at an empty temporary data directory."""
    settings = Settings(data_dir=tmp_path / "data")
    set_settings(settings)
    return settings


# ============================================================================
# Domain Object Builders (create REAL objects, not dicts)
# ============================================================================
@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory for ledger transactions with sensible defaults."""
    counter = {"n": 0}

    def _make(
        ticker: str = "THYAO",
        type: TransactionType | str = TransactionType.BUY,
        quantity: float = 10,
        price: float = 100,
        date: str | dt.date = "2024-01-01",
        usd_try_rate: float | None = None,
        commission_rate: float | None = None,
        id: str | None = None,
    ) -> Transaction:
        counter["n"] += 1
        return Transaction(
            id=id or f"tx-{counter['n']}",
            ticker=ticker,
            type=TransactionType(type),
            quantity=quantity,
            price=price,
            date=dt.date.fromisoformat(date) if isinstance(date, str) else date,
            usd_try_rate=usd_try_rate,
            commission_rate=commission_rate,
        )

    return _make


@pytest.fixture
def make_prices() -> Callable[..., dict[str, list[PriceHistoryItem]]]:
    """Factory for price tables: make_prices(THYAO=[("2024-01-01", 100.0), ...])."""

    def _make(**histories: list[tuple[str, float]]) -> dict[str, list[PriceHistoryItem]]:
        return {
            ticker: [
                PriceHistoryItem(date=dt.date.fromisoformat(d), price=p) for d, p in points
            ]
            for ticker, points in histories.items()
        }

    return _make
