"""Portfolio accounting engine.

Combines FIFO replay, holding aggregation and totals into a single pure computation:

    transactions + price table + current USD/TRY rate -> holdings, totals, realized gains

Realized USD figures use the rate stored on each transaction (rate at trade time); only
unrealized USD market values use the current rate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from lira_portfolio.portfolio._fifo import replay_transactions
from lira_portfolio.portfolio._holdings import build_holding, summarize_holdings
from lira_portfolio.portfolio._models import PortfolioResult, RealizedSummary, StockHolding

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from lira_portfolio.models import PriceHistoryItem, Transaction
    from lira_portfolio.portfolio._models import RealizedGainLoss

logger = structlog.get_logger()


class PortfolioCalculator:
    """Compute holdings and realized gains from a ledger."""

    def compute(
        self,
        transactions: Iterable[Transaction],
        prices: Mapping[str, Sequence[PriceHistoryItem]],
        current_usd_try_rate: float,
    ) -> PortfolioResult:
        """
        Run the full computation from scratch.

        Never raises for economic edge cases: orphan sells are logged and skipped, oversells
        match what is available, and missing prices or rates leave the dependent fields as
        `None`. Input shape is the caller's responsibility (see `ledger.validation`).

        Args:
            transactions: Ledger in any order.
            prices: Ticker -> price history sorted ascending by date.
            current_usd_try_rate: TRY per USD used to revalue open positions.

        Returns:
            PortfolioResult with the portfolio and realized records in replay order.
        """
        fifo_result = replay_transactions(transactions)

        holdings: list[StockHolding] = []
        for ticker, lots in fifo_result.open_lots.items():
            holding = build_holding(ticker, lots, prices, current_usd_try_rate)
            if holding is not None:
                holdings.append(holding)

        portfolio = summarize_holdings(holdings)
        logger.debug(
            "Computed portfolio",
            holdings=len(holdings),
            realized=len(fifo_result.realized_gains),
            unmatched_sells=len(fifo_result.unmatched_sell_ids),
        )

        return PortfolioResult(
            portfolio=portfolio,
            realized_gains=fifo_result.realized_gains,
            unmatched_sell_ids=tuple(fifo_result.unmatched_sell_ids),
        )

    def summarize_realized(self, realized_gains: Sequence[RealizedGainLoss]) -> RealizedSummary:
        """
        Total realized gains and order records newest sell first.

        Records with an unknown USD gain contribute zero to the USD total and are counted in
        `usd_unknown_count` so callers can flag the total as partial.
        """
        records = sorted(realized_gains, key=lambda g: g.sell_date, reverse=True)
        known_usd = [g.realized_gain_usd for g in records if g.realized_gain_usd is not None]
        return RealizedSummary(
            records=records,
            total_realized_gain=sum(g.realized_gain for g in records),
            total_realized_gain_usd=sum(known_usd),
            usd_unknown_count=len(records) - len(known_usd),
        )


def compute_portfolio(
    transactions: Iterable[Transaction],
    prices: Mapping[str, Sequence[PriceHistoryItem]],
    current_usd_try_rate: float,
) -> PortfolioResult:
    """Compute holdings and realized gains (see `PortfolioCalculator.compute`)."""
    return PortfolioCalculator().compute(transactions, prices, current_usd_try_rate)


def summarize_realized(realized_gains: Sequence[RealizedGainLoss]) -> RealizedSummary:
    """Total realized gains (see `PortfolioCalculator.summarize_realized`)."""
    return PortfolioCalculator().summarize_realized(realized_gains)
