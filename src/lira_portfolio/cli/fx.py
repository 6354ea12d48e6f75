"""Typer CLI commands for the current USD/TRY exchange rate."""

from __future__ import annotations

from typing import Annotated

import typer

from lira_portfolio.cli.utils import cli_errors, console, exit_with_error, open_store, run_async

app = typer.Typer(help="USD/TRY exchange rate commands.")


@app.command("show")
def fx_show() -> None:
    """Show the stored USD/TRY rate."""
    with cli_errors():
        rate = open_store().load_usd_try_rate()
    console.print(f"USD/TRY: [bold]{rate}[/bold]")


@app.command("set")
def fx_set(
    rate: Annotated[float, typer.Argument(help="TRY per USD.")],
) -> None:
    """Store a USD/TRY rate manually."""
    if rate <= 0:
        raise exit_with_error("USD/TRY rate must be greater than zero.")
    with cli_errors():
        open_store().save_usd_try_rate(rate)
    console.print(f"[green]✓[/green] USD/TRY set to {rate}")


@app.command("fetch")
def fx_fetch(
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the fetched rate without storing it."),
    ] = False,
) -> None:
    """Fetch the latest USD/TRY rate and store it."""
    from lira_portfolio.fx import ExchangeRateClient

    async def _fetch() -> float:
        async with ExchangeRateClient() as client:
            return await client.get_usd_try_rate()

    with cli_errors():
        with console.status("[bold green]Fetching USD/TRY rate..."):
            rate = run_async(_fetch())
        if not dry_run:
            open_store().save_usd_try_rate(rate)

    suffix = " (not saved)" if dry_run else ""
    console.print(f"[green]✓[/green] USD/TRY: {rate}{suffix}")
