"""Unit tests for display formatting."""

from __future__ import annotations

import pytest

from lira_portfolio.formatting import (
    Currency,
    format_currency,
    format_percentage,
    format_quantity,
)


class TestFormatCurrency:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1234.56, "₺1.234,56"),
            (1234567.123456, "₺1.234.567,123456"),
            (0.5, "₺0,50"),
            (0, "₺0,00"),
            (-42.1, "-₺42,10"),
            (1.23456789, "₺1,234568"),
        ],
    )
    def test_try(self, value, expected):
        assert format_currency(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1234.5, "$1,234.50"),
            (0.123456, "$0.1235"),
            (-10, "-$10.00"),
        ],
    )
    def test_usd(self, value, expected):
        assert format_currency(value, Currency.USD) == expected

    def test_accepts_currency_code_string(self):
        assert format_currency(1, "USD") == "$1.00"

    @pytest.mark.parametrize(
        ("value", "sign", "expected"),
        [
            (5, "always", "+₺5,00"),
            (0, "always", "+₺0,00"),
            (-5, "never", "₺5,00"),
            (5, "except_zero", "+₺5,00"),
            (0, "except_zero", "₺0,00"),
            (-0.0000001, "except_zero", "₺0,00"),
            (-5, "except_zero", "-₺5,00"),
        ],
    )
    def test_sign_display(self, value, sign, expected):
        assert format_currency(value, sign=sign) == expected

    def test_unknown_currency(self):
        with pytest.raises(ValueError):
            format_currency(1, "EUR")


@pytest.mark.parametrize(
    ("value", "expected"),
    [(12.34, "12.3400%"), (-0.5, "-0.5000%"), (0, "0.0000%")],
)
def test_format_percentage(value, expected) -> None:
    assert format_percentage(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1250.0, "1,250"), (0.5, "0.5"), (0.1 + 0.2, "0.3"), (0, "0"), (100, "100")],
)
def test_format_quantity(value, expected) -> None:
    assert format_quantity(value) == expected
