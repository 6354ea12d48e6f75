"""Typer CLI commands for full backups (ledger and price table in one JSON file)."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - Required at runtime for Typer introspection
from typing import Annotated

import typer

from lira_portfolio.cli.utils import cli_errors, console, exit_with_error, open_store

app = typer.Typer(help="Backup and restore commands.")


@app.command("export")
def backup_export(
    path: Annotated[Path, typer.Argument(help="Destination .json file.")],
) -> None:
    """Write transactions and prices to a single backup file."""
    from lira_portfolio.ledger import export_backup

    with cli_errors():
        store = open_store()
        transactions = store.load_transactions()
        prices = store.load_prices()
        if not transactions and not any(prices.values()):
            raise exit_with_error("No data to back up.")
        export_backup(path, transactions, prices)

    console.print(
        f"[green]✓[/green] Backed up {len(transactions)} transaction(s) and prices for "
        f"{len(prices)} ticker(s) to {path}"
    )


@app.command("import")
def backup_import(
    path: Annotated[Path, typer.Argument(help="Backup .json file.")],
) -> None:
    """Restore transactions and prices from a backup, replacing current data."""
    from lira_portfolio.ledger import import_backup

    with cli_errors():
        transactions, prices = import_backup(path)
        store = open_store()
        store.save_transactions(transactions)
        store.save_prices(prices)

    console.print(
        f"[green]✓[/green] Restored {len(transactions)} transaction(s) and prices for "
        f"{len(prices)} ticker(s) from {path}"
    )
