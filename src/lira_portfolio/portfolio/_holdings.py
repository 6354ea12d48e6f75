"""Holding aggregation and portfolio totals.

Turns the lots left over after FIFO replay into valued holdings, then rolls them up.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lira_portfolio.constants import QUANTITY_EPSILON
from lira_portfolio.portfolio._models import Portfolio, StockHolding
from lira_portfolio.portfolio.prices import latest_price

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from lira_portfolio.models import PriceHistoryItem
    from lira_portfolio.portfolio._models import BuyLot


def build_holding(
    ticker: str,
    lots: Iterable[BuyLot],
    prices: Mapping[str, Sequence[PriceHistoryItem]],
    current_usd_try_rate: float,
) -> StockHolding | None:
    """
    Aggregate a ticker's remaining lots into a holding.

    USD cost is best effort: lots with a rate contribute, lots without one are left out
    (unlike realized gains, where one missing rate makes the whole USD figure unknown).
    `total_cost_usd` is `None` only when no remaining lot carries a rate.

    Returns:
        The holding, or `None` if the remaining quantity is effectively zero.
    """
    total_quantity = 0.0
    total_cost = 0.0
    total_cost_usd = 0.0
    has_rated_lot = False

    for lot in lots:
        lot_cost = lot.remaining_quantity * lot.cost_per_share
        total_quantity += lot.remaining_quantity
        total_cost += lot_cost
        if lot.usd_try_rate:
            total_cost_usd += lot_cost / lot.usd_try_rate
            has_rated_lot = True

    if total_quantity <= QUANTITY_EPSILON:
        return None

    current_price = latest_price(ticker, prices)
    market_value: float | None = None
    unrealized_gain_loss: float | None = None
    unrealized_gain_loss_percent: float | None = None
    if current_price is not None:
        market_value = total_quantity * current_price
        unrealized_gain_loss = market_value - total_cost
        if total_cost > 0:
            unrealized_gain_loss_percent = unrealized_gain_loss / total_cost * 100

    average_cost_usd = total_cost_usd / total_quantity if total_cost_usd > 0 else None
    market_value_usd = (
        market_value / current_usd_try_rate
        if market_value is not None and current_usd_try_rate > 0
        else None
    )
    unrealized_gain_loss_usd = (
        market_value_usd - total_cost_usd
        if market_value_usd is not None and total_cost_usd > 0
        else None
    )

    return StockHolding(
        ticker=ticker,
        quantity=total_quantity,
        average_cost=total_cost / total_quantity,
        total_cost=total_cost,
        current_price=current_price,
        market_value=market_value,
        unrealized_gain_loss=unrealized_gain_loss,
        unrealized_gain_loss_percent=unrealized_gain_loss_percent,
        average_cost_usd=average_cost_usd,
        total_cost_usd=total_cost_usd if has_rated_lot else None,
        market_value_usd=market_value_usd,
        unrealized_gain_loss_usd=unrealized_gain_loss_usd,
    )


def summarize_holdings(holdings: list[StockHolding]) -> Portfolio:
    """Roll holdings up into portfolio totals. Unknown values count as zero."""
    total_market_value = sum(h.market_value or 0 for h in holdings)
    total_cost = sum(h.total_cost for h in holdings)
    total_unrealized = total_market_value - total_cost
    total_unrealized_percent = total_unrealized / total_cost * 100 if total_cost > 0 else 0.0

    total_market_value_usd = sum(h.market_value_usd or 0 for h in holdings)
    total_cost_usd = sum(h.total_cost_usd or 0 for h in holdings)

    return Portfolio(
        holdings=holdings,
        total_market_value=total_market_value,
        total_cost=total_cost,
        total_unrealized_gain_loss=total_unrealized,
        total_unrealized_gain_loss_percent=total_unrealized_percent,
        total_market_value_usd=total_market_value_usd,
        total_cost_usd=total_cost_usd,
        total_unrealized_gain_loss_usd=total_market_value_usd - total_cost_usd,
    )
