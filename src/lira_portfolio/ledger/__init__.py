"""Ledger I/O: validation, persistence, and JSON/CSV import/export."""

from lira_portfolio.ledger.files import (
    export_backup,
    export_prices,
    export_transactions,
    import_backup,
    import_prices,
    import_transactions,
)
from lira_portfolio.ledger.store import PortfolioStore
from lira_portfolio.ledger.validation import (
    normalize_prices,
    normalize_transaction,
    normalize_transactions,
    parse_date,
)

__all__ = [
    "PortfolioStore",
    "export_backup",
    "export_prices",
    "export_transactions",
    "import_backup",
    "import_prices",
    "import_transactions",
    "normalize_prices",
    "normalize_transaction",
    "normalize_transactions",
    "parse_date",
]
