"""
Lira Portfolio.

Personal equity portfolio tracker for TRY-denominated ledgers with USD reporting.
"""

__version__ = "0.1.0"

# Configure structlog once at import time (quiet by default).
from lira_portfolio.logging import configure_structlog
from lira_portfolio.models import PriceHistoryItem, Transaction, TransactionType
from lira_portfolio.portfolio import PortfolioCalculator, compute_portfolio, latest_price

configure_structlog()

__all__ = [
    "PortfolioCalculator",
    "PriceHistoryItem",
    "Transaction",
    "TransactionType",
    "__version__",
    "compute_portfolio",
    "latest_price",
]
