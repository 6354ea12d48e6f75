"""Typer CLI commands for managing the transaction ledger."""

from __future__ import annotations

import datetime as dt
from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import Annotated

import typer
from rich.table import Table

from lira_portfolio.cli.utils import cli_errors, console, exit_with_error, open_store
from lira_portfolio.formatting import format_currency, format_quantity
from lira_portfolio.models import TransactionType

app = typer.Typer(help="Transaction ledger commands.")


def _parse_cli_date(value: str | None) -> dt.date:
    if value is None:
        return dt.date.today()
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise exit_with_error(f"Invalid date '{value}'. Expected YYYY-MM-DD.") from None


@app.command("add")
def tx_add(
    ticker: Annotated[str, typer.Argument(help="Ticker symbol (stored upper-case).")],
    side: Annotated[
        TransactionType,
        typer.Argument(case_sensitive=False, help="BUY or SELL."),
    ],
    quantity: Annotated[float, typer.Argument(help="Number of shares.")],
    price: Annotated[float, typer.Argument(help="Unit price in TRY.")],
    date: Annotated[
        str | None,
        typer.Option("--date", "-d", help="Trade date (YYYY-MM-DD). Defaults to today."),
    ] = None,
    rate: Annotated[
        float | None,
        typer.Option("--rate", "-r", help="USD/TRY rate at trade time. Defaults to current."),
    ] = None,
    commission: Annotated[
        float | None,
        typer.Option("--commission", help="Commission as a fraction (0.002 = 0.2%)."),
    ] = None,
) -> None:
    """Record a buy or sell."""
    from uuid import uuid4

    from lira_portfolio.models import Transaction

    symbol = ticker.strip().upper()
    if not symbol:
        raise exit_with_error("Ticker must not be empty.")
    if quantity <= 0:
        raise exit_with_error("Quantity must be greater than zero.")
    if price < 0:
        raise exit_with_error("Price must not be negative.")
    if rate is not None and rate <= 0:
        raise exit_with_error("USD/TRY rate must be greater than zero.")
    if commission is not None and commission < 0:
        raise exit_with_error("Commission must not be negative.")
    trade_date = _parse_cli_date(date)

    with cli_errors():
        store = open_store()
        transaction = Transaction(
            id=uuid4().hex,
            ticker=symbol,
            type=side,
            quantity=quantity,
            price=price,
            date=trade_date,
            usd_try_rate=rate if rate is not None else store.load_usd_try_rate(),
            commission_rate=commission or None,
        )
        store.add_transaction(transaction)

    console.print(
        f"[green]✓[/green] Recorded {side.value} {format_quantity(quantity)} {symbol} @ "
        f"{format_currency(price)} on {trade_date.isoformat()} (id: {transaction.id})"
    )


@app.command("list")
def tx_list(
    ticker: Annotated[
        str | None,
        typer.Option("--ticker", "-t", help="Only show this ticker."),
    ] = None,
) -> None:
    """List transactions, newest first."""
    with cli_errors():
        transactions = open_store().load_transactions()

    if ticker:
        transactions = [t for t in transactions if t.ticker == ticker.strip().upper()]
    if not transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    table = Table(title="Transactions", show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Date", no_wrap=True)
    table.add_column("Ticker", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Quantity", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("USD/TRY", justify="right")
    table.add_column("Commission", justify="right")

    for t in sorted(transactions, key=lambda t: t.date, reverse=True):
        side_style = "green" if t.type is TransactionType.BUY else "red"
        table.add_row(
            t.id,
            t.date.isoformat(),
            t.ticker,
            f"[{side_style}]{t.type.value}[/{side_style}]",
            format_quantity(t.quantity),
            format_currency(t.price),
            "-" if t.usd_try_rate is None else f"{t.usd_try_rate:g}",
            "-" if t.commission_rate is None else f"{t.commission_rate * 100:g}%",
        )
    console.print(table)


@app.command("remove")
def tx_remove(
    transaction_id: Annotated[str, typer.Argument(help="Transaction id to delete.")],
) -> None:
    """Delete a transaction."""
    with cli_errors():
        removed = open_store().remove_transaction(transaction_id)
    if not removed:
        raise exit_with_error(f"Transaction not found: {transaction_id}")
    console.print(f"[green]✓[/green] Removed transaction {transaction_id}")


@app.command("import")
def tx_import(
    path: Annotated[Path, typer.Argument(help="JSON or CSV file to import.")],
) -> None:
    """Replace the ledger with the contents of a file."""
    from lira_portfolio.ledger import import_transactions

    with cli_errors():
        transactions = import_transactions(path)
        open_store().save_transactions(transactions)
    console.print(f"[green]✓[/green] Imported {len(transactions)} transaction(s) from {path}")


@app.command("export")
def tx_export(
    path: Annotated[Path, typer.Argument(help="Destination .json or .csv file.")],
) -> None:
    """Write the ledger to a file."""
    from lira_portfolio.ledger import export_transactions

    with cli_errors():
        transactions = open_store().load_transactions()
        if not transactions:
            raise exit_with_error("No transactions to export.")
        export_transactions(path, transactions)
    console.print(f"[green]✓[/green] Exported {len(transactions)} transaction(s) to {path}")
