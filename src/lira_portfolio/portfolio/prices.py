"""Latest-price resolution over per-ticker price histories."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from lira_portfolio.models import PriceHistoryItem


def latest_price(
    ticker: str, prices: Mapping[str, Sequence[PriceHistoryItem]]
) -> float | None:
    """
    Return the most recent price for a ticker, or `None` if there is no history.

    The history must already be sorted ascending by date (the store and the import validator
    guarantee this). No sorting happens here: an unsorted history yields whatever price was
    appended last.
    """
    history = prices.get(ticker)
    if not history:
        return None
    return history[-1].price
