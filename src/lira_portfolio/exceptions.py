"""Custom exceptions for Lira Portfolio.

The accounting engine never raises these; they belong to the collaborators around it
(validation, storage, exchange-rate fetch).
"""

from __future__ import annotations


class LiraError(Exception):
    """Base exception for Lira Portfolio errors."""


class LedgerValidationError(LiraError, ValueError):
    """Imported ledger or price data has an invalid shape."""

    def __init__(self, message: str, *, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f"{message} (record {index})"
        super().__init__(message)


class StorageError(LiraError):
    """A data file exists but cannot be read back."""


class ExchangeRateError(LiraError):
    """Exchange-rate fetch failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        self.message = message
        if status_code is not None:
            super().__init__(f"Exchange rate API error {status_code}: {message}")
        else:
            super().__init__(message)
