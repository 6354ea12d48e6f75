"""FIFO (First-In-First-Out) lot matching.

This module replays a ledger chronologically into per-ticker lot queues and produces one
realized gain/loss record per matched sell.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

import structlog

from lira_portfolio.constants import QUANTITY_EPSILON
from lira_portfolio.models import TransactionType
from lira_portfolio.portfolio._models import BuyLot, FifoResult, RealizedGainLoss

if TYPE_CHECKING:
    from collections.abc import Iterable

    from lira_portfolio.models import Transaction

logger = structlog.get_logger()


def _match_sell(sell: Transaction, lots: deque[BuyLot]) -> RealizedGainLoss:
    """
    Consume lots from the front of the queue for one sell.

    Buy commissions are part of each lot's cost; the sell commission reduces proceeds.
    If the queue runs out first, the unmatched remainder is dropped: proceeds still use the
    full sell quantity while cost covers only the matched part.

    USD figures need the sell's rate and a rate on every consumed lot. One missing rate
    leaves all three USD fields unknown.

    Matching stops once the amount left to sell is within `QUANTITY_EPSILON`, so float dust
    from earlier subtractions never reaches into the next lot (and an unrated next lot does
    not void the USD figures).
    """
    remaining_to_sell = sell.quantity
    cost_basis = 0.0
    cost_basis_usd = 0.0
    usd_incomplete = False

    while remaining_to_sell > QUANTITY_EPSILON and lots:
        lot = lots[0]
        consumed = min(remaining_to_sell, lot.remaining_quantity)

        portion_cost = consumed * lot.cost_per_share
        cost_basis += portion_cost
        if lot.usd_try_rate:
            cost_basis_usd += portion_cost / lot.usd_try_rate
        else:
            usd_incomplete = True

        lot.remaining_quantity -= consumed
        remaining_to_sell -= consumed

        if lot.remaining_quantity <= QUANTITY_EPSILON:
            lots.popleft()

    gross_proceeds = sell.quantity * sell.price
    net_proceeds = gross_proceeds * (1 - (sell.commission_rate or 0))
    realized_gain = net_proceeds - cost_basis

    net_proceeds_usd = net_proceeds / sell.usd_try_rate if sell.usd_try_rate else None
    if net_proceeds_usd is None or usd_incomplete:
        return RealizedGainLoss(
            id=sell.id,
            ticker=sell.ticker,
            quantity=sell.quantity,
            sell_date=sell.date,
            sell_price=sell.price,
            cost_basis=cost_basis,
            realized_gain=realized_gain,
            net_sell_proceeds=net_proceeds,
        )

    return RealizedGainLoss(
        id=sell.id,
        ticker=sell.ticker,
        quantity=sell.quantity,
        sell_date=sell.date,
        sell_price=sell.price,
        cost_basis=cost_basis,
        realized_gain=realized_gain,
        net_sell_proceeds=net_proceeds,
        cost_basis_usd=cost_basis_usd,
        net_sell_proceeds_usd=net_proceeds_usd,
        realized_gain_usd=net_proceeds_usd - cost_basis_usd,
    )


def replay_transactions(transactions: Iterable[Transaction]) -> FifoResult:
    """
    Replay a ledger in date order through per-ticker FIFO lot queues.

    Transactions are stable-sorted by date, so same-day transactions keep their input order.
    The input is never mutated; lots are fresh objects owned by this call.

    Sells are handled as:
    - quantity at or below the epsilon: ignored entirely.
    - no open lots for the ticker: logged as a warning and skipped (no short positions).
    - otherwise: matched FIFO, emitting one `RealizedGainLoss`.

    Args:
        transactions: Ledger in any order.

    Returns:
        FifoResult with realized records (in replay order), remaining lots per ticker, and
        the ids of sells that had nothing to match.
    """
    ordered = sorted(transactions, key=lambda t: t.date)

    open_lots: dict[str, deque[BuyLot]] = {}
    realized_gains: list[RealizedGainLoss] = []
    unmatched_sell_ids: list[str] = []

    for trade in ordered:
        if trade.type == TransactionType.BUY:
            open_lots.setdefault(trade.ticker, deque()).append(
                BuyLot(
                    remaining_quantity=trade.quantity,
                    unit_price=trade.price,
                    date=trade.date,
                    usd_try_rate=trade.usd_try_rate,
                    commission_rate=trade.commission_rate,
                )
            )
            continue

        if trade.quantity <= QUANTITY_EPSILON:
            continue

        lots = open_lots.get(trade.ticker)
        if not lots:
            logger.warning(
                "Sell has no matching buy lots; skipping",
                ticker=trade.ticker,
                transaction_id=trade.id,
                quantity=trade.quantity,
            )
            unmatched_sell_ids.append(trade.id)
            continue

        realized_gains.append(_match_sell(trade, lots))

    return FifoResult(
        realized_gains=realized_gains,
        open_lots=open_lots,
        unmatched_sell_ids=unmatched_sell_ids,
    )
