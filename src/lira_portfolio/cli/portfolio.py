"""Typer CLI commands for holdings and realized gains."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

import typer
from rich.table import Table

from lira_portfolio.cli.utils import cli_errors, console, open_store, signed_style
from lira_portfolio.formatting import (
    Currency,
    format_currency,
    format_percentage,
    format_quantity,
)

if TYPE_CHECKING:
    from lira_portfolio.portfolio import PortfolioResult, StockHolding

app = typer.Typer(help="Holdings and realized gain reports.")

CurrencyOption = Annotated[
    Currency,
    typer.Option("--currency", "-c", case_sensitive=False, help="Display currency."),
]


def _compute() -> tuple[PortfolioResult, float]:
    from lira_portfolio.portfolio import compute_portfolio

    store = open_store()
    rate = store.load_usd_try_rate()
    result = compute_portfolio(store.load_transactions(), store.load_prices(), rate)
    return result, rate


def _money(value: float | None, currency: Currency) -> str:
    return "N/A" if value is None else format_currency(value, currency)


def _holding_row(holding: StockHolding, currency: Currency) -> list[str]:
    if currency is Currency.USD:
        unrealized = holding.unrealized_gain_loss_usd
        return [
            holding.ticker,
            format_quantity(holding.quantity),
            _money(holding.average_cost_usd, currency),
            _money(holding.total_cost_usd, currency),
            _money(holding.market_value_usd, currency),
            signed_style(unrealized, _money(unrealized, currency)),
        ]

    unrealized = holding.unrealized_gain_loss
    percent = holding.unrealized_gain_loss_percent
    return [
        holding.ticker,
        format_quantity(holding.quantity),
        _money(holding.average_cost, currency),
        _money(holding.total_cost, currency),
        _money(holding.current_price, currency),
        _money(holding.market_value, currency),
        signed_style(unrealized, _money(unrealized, currency)),
        signed_style(percent, "N/A" if percent is None else format_percentage(percent)),
    ]


@app.command("holdings")
def portfolio_holdings(currency: CurrencyOption = Currency.TRY) -> None:
    """Show open positions valued at the latest known prices."""
    with cli_errors():
        result, rate = _compute()

    portfolio = result.portfolio
    if not portfolio.holdings:
        console.print("[yellow]No open holdings[/yellow]")
        return

    table = Table(title=f"Holdings ({currency.value})", show_header=True)
    table.add_column("Ticker", style="cyan", no_wrap=True)
    table.add_column("Quantity", justify="right")
    table.add_column("Avg. Cost", justify="right")
    table.add_column("Total Cost", justify="right")
    if currency is Currency.TRY:
        table.add_column("Latest Price", justify="right")
    table.add_column("Market Value", justify="right")
    table.add_column("Unrealized P/L", justify="right")
    if currency is Currency.TRY:
        table.add_column("Unrealized P/L %", justify="right")

    for holding in portfolio.holdings:
        table.add_row(*_holding_row(holding, currency))
    console.print(table)

    if currency is Currency.USD:
        market_value = portfolio.total_market_value_usd
        cost = portfolio.total_cost_usd
        unrealized = portfolio.total_unrealized_gain_loss_usd
    else:
        market_value = portfolio.total_market_value
        cost = portfolio.total_cost
        unrealized = portfolio.total_unrealized_gain_loss

    console.print(f"Market value: {format_currency(market_value, currency)}")
    console.print(f"Total cost: {format_currency(cost, currency)}")
    console.print(
        "Unrealized P/L: "
        + signed_style(unrealized, format_currency(unrealized, currency, sign="except_zero"))
    )
    if currency is Currency.TRY:
        console.print(
            f"Unrealized P/L %: {format_percentage(portfolio.total_unrealized_gain_loss_percent)}"
        )
    else:
        console.print(f"[dim]Open positions valued at USD/TRY {rate}[/dim]")

    if result.unmatched_sell_ids:
        console.print(
            f"[yellow]Warning:[/yellow] {len(result.unmatched_sell_ids)} sell(s) had no "
            "matching buys and were ignored."
        )


@app.command("realized")
def portfolio_realized(currency: CurrencyOption = Currency.TRY) -> None:
    """Show realized gains from closed lots, newest sell first."""
    from lira_portfolio.portfolio import summarize_realized

    with cli_errors():
        result, _ = _compute()

    summary = summarize_realized(result.realized_gains)
    if not summary.records:
        console.print("[yellow]No realized gains yet[/yellow]")
        return

    table = Table(title=f"Realized Gains ({currency.value})", show_header=True)
    table.add_column("Date", style="dim", no_wrap=True)
    table.add_column("Ticker", style="cyan", no_wrap=True)
    table.add_column("Quantity", justify="right")
    table.add_column("Proceeds", justify="right")
    table.add_column("Cost Basis", justify="right")
    table.add_column("Realized P/L", justify="right")

    for record in summary.records:
        if currency is Currency.USD:
            proceeds = record.net_sell_proceeds_usd
            cost_basis = record.cost_basis_usd
            gain = record.realized_gain_usd
        else:
            proceeds = record.net_sell_proceeds
            cost_basis = record.cost_basis
            gain = record.realized_gain
        table.add_row(
            record.sell_date.isoformat(),
            record.ticker,
            format_quantity(record.quantity),
            _money(proceeds, currency),
            _money(cost_basis, currency),
            signed_style(gain, _money(gain, currency)),
        )
    console.print(table)

    total = (
        summary.total_realized_gain_usd
        if currency is Currency.USD
        else summary.total_realized_gain
    )
    console.print(
        "Total realized P/L: "
        + signed_style(total, format_currency(total, currency, sign="except_zero"))
    )
    if currency is Currency.USD and summary.usd_unknown_count:
        console.print(
            f"[dim]{summary.usd_unknown_count} record(s) without an exchange rate "
            "are excluded from the USD total.[/dim]"
        )

    if result.unmatched_sell_ids:
        console.print(
            f"[yellow]Warning:[/yellow] {len(result.unmatched_sell_ids)} sell(s) had no "
            "matching buys and were ignored."
        )
