"""Display formatting for TRY/USD amounts, percentages and share quantities."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from lira_portfolio.constants import CURRENCY_FRACTION_DIGITS

SignDisplay = Literal["auto", "always", "never", "except_zero"]


class Currency(str, Enum):
    """Display currencies."""

    TRY = "TRY"
    USD = "USD"


_SYMBOLS: dict[Currency, str] = {Currency.TRY: "₺", Currency.USD: "$"}

# (thousands separator, decimal separator); TRY follows Turkish conventions.
_SEPARATORS: dict[Currency, tuple[str, str]] = {
    Currency.TRY: (".", ","),
    Currency.USD: (",", "."),
}


def format_currency(
    value: float,
    currency: Currency | str = Currency.TRY,
    sign: SignDisplay = "auto",
) -> str:
    """
    Format an amount, e.g. `₺1.234,56` or `$1,234.5678`.

    TRY shows 2-6 fraction digits, USD 2-4 (trailing zeros beyond the minimum are dropped).

    Args:
        value: Amount to format.
        currency: `TRY` or `USD`.
        sign: `auto` (minus only), `always` (+/-), `never`, or `except_zero` (+/- unless the
            rounded value is zero).
    """
    code = Currency(currency)
    min_digits, max_digits = CURRENCY_FRACTION_DIGITS[code.value]

    text = f"{abs(value):,.{max_digits}f}"
    integer, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0").ljust(min_digits, "0")

    group, decimal = _SEPARATORS[code]
    body = f"{_SYMBOLS[code]}{integer.replace(',', group)}{decimal}{fraction}"

    is_zero = not any(ch in "123456789" for ch in text)
    negative = value < 0 and not is_zero

    if sign == "never":
        prefix = ""
    elif negative:
        prefix = "-"
    elif sign == "always" or (sign == "except_zero" and not is_zero):
        prefix = "+"
    else:
        prefix = ""
    return f"{prefix}{body}"


def format_percentage(value: float) -> str:
    """Format a percentage with four decimals, e.g. `12.3400%`."""
    return f"{value:.4f}%"


def format_quantity(value: float) -> str:
    """Format a share quantity without float noise, e.g. `1,250` or `0.5`."""
    text = f"{value:,.6f}".rstrip("0").rstrip(".")
    return "0" if text in {"-0", ""} else text
