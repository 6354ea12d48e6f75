"""Centralized policy constants for Lira Portfolio.

Named constants for the literals that encode accounting and I/O policy. Keeping them here
prevents the same tolerance or default from drifting between the engine, the store and the CLI.
"""

from __future__ import annotations

# =============================================================================
# Accounting
# =============================================================================

# Tolerance for "is this quantity effectively zero".
#
# Used by:
# - portfolio/_fifo.py: zero-quantity sells, exhausted lot removal
# - portfolio/_holdings.py: fully divested tickers
#
# Repeated float subtraction leaves residual dust (e.g. 1e-15 shares); every zero check
# goes through this tolerance instead of exact equality.
QUANTITY_EPSILON: float = 1e-9

# =============================================================================
# Exchange Rates
# =============================================================================

# USD/TRY rate used when no rate has been stored or fetched yet.
DEFAULT_USD_TRY_RATE: float = 32.5

# open.er-api.com free endpoint (no API key). `/latest/USD` returns TRY per USD.
DEFAULT_FX_BASE_URL: str = "https://open.er-api.com/v6"

# Retry policy for the exchange-rate fetch (network errors and timeouts only).
FX_MAX_RETRIES: int = 3
FX_TIMEOUT_SECONDS: float = 10.0

# =============================================================================
# Display
# =============================================================================

# Fraction digit bounds per display currency (minimum, maximum).
CURRENCY_FRACTION_DIGITS: dict[str, tuple[int, int]] = {
    "TRY": (2, 6),
    "USD": (2, 4),
}
