"""Typer CLI commands for the price table."""

from __future__ import annotations

import datetime as dt
from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import Annotated

import typer
from rich.table import Table

from lira_portfolio.cli.utils import cli_errors, console, exit_with_error, open_store
from lira_portfolio.formatting import format_currency

app = typer.Typer(help="Price history commands.")


@app.command("add")
def prices_add(
    ticker: Annotated[str, typer.Argument(help="Ticker symbol (stored upper-case).")],
    price: Annotated[float, typer.Argument(help="Closing price in TRY.")],
    date: Annotated[
        str | None,
        typer.Option("--date", "-d", help="Price date (YYYY-MM-DD). Defaults to today."),
    ] = None,
) -> None:
    """Record a price, replacing any existing price on the same date."""
    symbol = ticker.strip().upper()
    if not symbol:
        raise exit_with_error("Ticker must not be empty.")
    if price < 0:
        raise exit_with_error("Price must not be negative.")
    try:
        price_date = dt.date.fromisoformat(date) if date else dt.date.today()
    except ValueError:
        raise exit_with_error(f"Invalid date '{date}'. Expected YYYY-MM-DD.") from None

    with cli_errors():
        open_store().add_price(symbol, price_date, price)
    console.print(
        f"[green]✓[/green] {symbol} {price_date.isoformat()}: {format_currency(price)}"
    )


@app.command("list")
def prices_list(
    ticker: Annotated[
        str | None,
        typer.Option("--ticker", "-t", help="Show the full history for this ticker."),
    ] = None,
) -> None:
    """Show the latest price per ticker, or one ticker's full history."""
    with cli_errors():
        prices = open_store().load_prices()

    if ticker:
        symbol = ticker.strip().upper()
        history = prices.get(symbol, [])
        if not history:
            console.print(f"[yellow]No prices for {symbol}[/yellow]")
            return
        table = Table(title=f"{symbol} Price History", show_header=True)
        table.add_column("Date", no_wrap=True)
        table.add_column("Price", justify="right")
        for item in reversed(history):
            table.add_row(item.date.isoformat(), format_currency(item.price))
        console.print(table)
        return

    tickers = [t for t in sorted(prices) if prices[t]]
    if not tickers:
        console.print("[yellow]No prices recorded[/yellow]")
        return

    table = Table(title="Latest Prices", show_header=True)
    table.add_column("Ticker", style="cyan", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Price", justify="right")
    table.add_column("Entries", justify="right")
    for symbol in tickers:
        latest = prices[symbol][-1]
        table.add_row(
            symbol,
            latest.date.isoformat(),
            format_currency(latest.price),
            str(len(prices[symbol])),
        )
    console.print(table)


@app.command("import")
def prices_import(
    path: Annotated[Path, typer.Argument(help="JSON or CSV file to import.")],
) -> None:
    """Replace the price table with the contents of a file."""
    from lira_portfolio.ledger import import_prices

    with cli_errors():
        prices = import_prices(path)
        open_store().save_prices(prices)
    console.print(f"[green]✓[/green] Imported prices for {len(prices)} ticker(s) from {path}")


@app.command("export")
def prices_export(
    path: Annotated[Path, typer.Argument(help="Destination .json or .csv file.")],
) -> None:
    """Write the price table to a file."""
    from lira_portfolio.ledger import export_prices

    with cli_errors():
        prices = open_store().load_prices()
        if not any(prices.values()):
            raise exit_with_error("No prices to export.")
        export_prices(path, prices)
    console.print(f"[green]✓[/green] Exported prices for {len(prices)} ticker(s) to {path}")
