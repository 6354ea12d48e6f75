"""Shared utilities for CLI commands (console output, error handling, async helpers)."""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeVar

import typer
from rich.console import Console

from lira_portfolio.exceptions import LiraError

if TYPE_CHECKING:
    from collections.abc import Coroutine, Iterator

    from lira_portfolio.ledger.store import PortfolioStore

console = Console()

T = TypeVar("T")


def run_async(coro: Coroutine[object, object, T]) -> T:
    """Run a coroutine from a sync CLI command.

    Raises:
        typer.Exit: With code 130 on KeyboardInterrupt (standard SIGINT exit code).
    """
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(130) from None


def exit_with_error(message: str) -> typer.Exit:
    """Print a standardized error line and return the exit to raise."""
    console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(1)


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn domain errors (validation, storage, FX) into a clean exit code 1."""
    try:
        yield
    except LiraError as e:
        raise exit_with_error(str(e)) from None


def open_store() -> PortfolioStore:
    """Store bound to the current global settings."""
    from lira_portfolio.ledger.store import PortfolioStore

    return PortfolioStore()


def signed_style(value: float | None, text: str) -> str:
    """Color a rendered amount green/red by sign; unknown values stay dim."""
    if value is None:
        return "[dim]N/A[/dim]"
    if value > 0:
        return f"[green]{text}[/green]"
    if value < 0:
        return f"[red]{text}[/red]"
    return text
