"""Portfolio accounting: FIFO lot matching, holdings and realized gains."""

from lira_portfolio.portfolio._models import (
    BuyLot,
    Portfolio,
    PortfolioResult,
    RealizedGainLoss,
    RealizedSummary,
    StockHolding,
)
from lira_portfolio.portfolio.calculator import (
    PortfolioCalculator,
    compute_portfolio,
    summarize_realized,
)
from lira_portfolio.portfolio.prices import latest_price

__all__ = [
    "BuyLot",
    "Portfolio",
    "PortfolioCalculator",
    "PortfolioResult",
    "RealizedGainLoss",
    "RealizedSummary",
    "StockHolding",
    "compute_portfolio",
    "latest_price",
    "summarize_realized",
]
