from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from lira_portfolio.cli import app
from lira_portfolio.cli.utils import console
from lira_portfolio.config import Settings
from lira_portfolio.ledger.store import PortfolioStore

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from click.testing import Result

runner = CliRunner()


@pytest.fixture(autouse=True)
def _wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    # Rich falls back to 80 columns off a TTY, which truncates the wider tables.
    monkeypatch.setattr(console, "_width", 200)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def invoke(data_dir: Path) -> Callable[..., Result]:
    """Run the CLI against an isolated data directory."""

    def _invoke(*args: str) -> Result:
        return runner.invoke(app, ["--data-dir", str(data_dir), *args])

    return _invoke


@pytest.fixture
def store(data_dir: Path) -> PortfolioStore:
    """Store reading the same directory the CLI writes to."""
    return PortfolioStore(Settings(data_dir=data_dir))
