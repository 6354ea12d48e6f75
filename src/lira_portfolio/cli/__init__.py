"""
CLI application for the lira portfolio tracker.

Provides commands for recording trades and prices, and for reporting holdings and
realized gains in TRY or USD.
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import Annotated

import typer
from dotenv import find_dotenv, load_dotenv

from lira_portfolio.cli.backup import app as backup_app
from lira_portfolio.cli.fx import app as fx_app
from lira_portfolio.cli.portfolio import app as portfolio_app
from lira_portfolio.cli.prices import app as prices_app
from lira_portfolio.cli.transactions import app as tx_app
from lira_portfolio.cli.utils import cli_errors, console, open_store

app = typer.Typer(
    name="lira",
    help="Lira portfolio tracker - FIFO cost basis and P/L in TRY and USD.",
    add_completion=False,
)

app.add_typer(portfolio_app, name="portfolio")
app.add_typer(tx_app, name="tx")
app.add_typer(prices_app, name="prices")
app.add_typer(fx_app, name="fx")
app.add_typer(backup_app, name="backup")


@app.callback()
def main(
    data_dir: Annotated[
        Path | None,
        typer.Option(
            "--data-dir",
            help="Directory for portfolio data. Defaults to LIRA_DATA_DIR or ./data.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Lira portfolio tracker CLI."""
    from lira_portfolio.config import set_settings, settings_from_env

    load_dotenv(find_dotenv(usecwd=True))

    # Priority: CLI flag > LIRA_DATA_DIR env var > default "data/"
    set_settings(settings_from_env(data_dir=data_dir))


@app.command()
def version() -> None:
    """Show version information."""
    from lira_portfolio import __version__

    console.print(f"lira-portfolio v{__version__}")


@app.command()
def reset(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Confirm deletion of all stored data."),
    ] = False,
) -> None:
    """Delete all transactions, prices and the stored exchange rate."""
    if not yes:
        console.print("[yellow]This deletes all portfolio data. Re-run with --yes.[/yellow]")
        raise typer.Exit(1)

    with cli_errors():
        open_store().clear()
    console.print("[green]✓[/green] All portfolio data cleared")
