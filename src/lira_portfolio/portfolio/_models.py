"""Data models for the portfolio accounting engine.

These dataclasses represent:
- FIFO lot tracking (BuyLot)
- Engine output records (RealizedGainLoss, StockHolding, Portfolio)
- Combined engine results (FifoResult, PortfolioResult, RealizedSummary)

All monetary fields are TRY unless suffixed `_usd`. Optional fields are `None` when the
value cannot be known from the inputs (missing price or missing exchange rate).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections import deque
    from datetime import date


@dataclass
class BuyLot:
    """FIFO lot for tracking cost basis.

    Created by a buy and consumed in place by later sells.
    """

    remaining_quantity: float
    unit_price: float
    date: date
    usd_try_rate: float | None = None
    commission_rate: float | None = None

    @property
    def cost_per_share(self) -> float:
        """Unit price including the buy commission."""
        return self.unit_price * (1 + (self.commission_rate or 0))


@dataclass(frozen=True)
class RealizedGainLoss:
    """Realized result of one sell matched against FIFO lots.

    The three USD fields are either all set or all `None`.
    """

    id: str
    ticker: str
    quantity: float
    sell_date: date
    sell_price: float
    cost_basis: float
    realized_gain: float
    net_sell_proceeds: float
    cost_basis_usd: float | None = None
    net_sell_proceeds_usd: float | None = None
    realized_gain_usd: float | None = None


@dataclass(frozen=True)
class StockHolding:
    """Open position in one ticker, valued at the latest known price."""

    ticker: str
    quantity: float
    average_cost: float
    total_cost: float
    current_price: float | None = None
    market_value: float | None = None
    unrealized_gain_loss: float | None = None
    unrealized_gain_loss_percent: float | None = None
    average_cost_usd: float | None = None
    total_cost_usd: float | None = None
    market_value_usd: float | None = None
    unrealized_gain_loss_usd: float | None = None


@dataclass(frozen=True)
class Portfolio:
    """Holdings plus portfolio-level totals (unknown per-holding values count as zero)."""

    holdings: list[StockHolding]
    total_market_value: float
    total_cost: float
    total_unrealized_gain_loss: float
    total_unrealized_gain_loss_percent: float
    total_market_value_usd: float
    total_cost_usd: float
    total_unrealized_gain_loss_usd: float


@dataclass
class FifoResult:
    """Result of replaying a ledger through FIFO lot matching.

    Contains per-sell realized records, remaining lots per ticker, and the ids of sells that
    found no lots at all.
    """

    realized_gains: list[RealizedGainLoss]
    open_lots: dict[str, deque[BuyLot]]
    unmatched_sell_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PortfolioResult:
    """Output of one engine run."""

    portfolio: Portfolio
    realized_gains: list[RealizedGainLoss]
    unmatched_sell_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class RealizedSummary:
    """Realized gain totals for reporting."""

    records: list[RealizedGainLoss]
    """Realized records, newest sell first."""

    total_realized_gain: float
    total_realized_gain_usd: float
    """Sum of known USD gains only."""

    usd_unknown_count: int
    """Number of records whose USD gain is unknown."""
