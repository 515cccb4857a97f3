from __future__ import annotations

import pytest

from trip_board.money.currency import (
    CurrencyConverter,
    UnsupportedCurrencyError,
    format_money,
    require_supported,
)


@pytest.fixture
def converter() -> CurrencyConverter:
    return CurrencyConverter(0.92)


@pytest.mark.parametrize("code", ["USD", "EUR"])
def test_convert_same_currency_is_identity(converter, code):
    assert converter.convert(123.45, code, code) == 123.45


def test_convert_uses_single_rate(converter):
    assert converter.convert(100, "USD", "EUR") == pytest.approx(92.0)
    assert converter.convert(92, "EUR", "USD") == pytest.approx(100.0)


def test_convert_round_trip_is_stable(converter):
    for amount in (0.01, 1, 99.99, 1234.56, 1_000_000):
        there = converter.convert(amount, "USD", "EUR")
        assert converter.convert(there, "EUR", "USD") == pytest.approx(amount)


def test_convert_returns_none_without_numeric_amount(converter):
    assert converter.convert(None, "USD", "EUR") is None
    assert converter.convert("abc", "USD", "EUR") is None
    assert converter.convert(float("nan"), "USD", "EUR") is None
    assert converter.convert(float("inf"), "USD", "EUR") is None
    assert converter.convert(float("-inf"), "EUR", "USD") is None


def test_unsupported_pair_passes_amount_through(converter):
    # Unknown codes are treated as if already in the target currency.
    assert converter.convert(50, "GBP", "USD") == 50
    assert converter.convert(50, "USD", "GBP") == 50
    assert converter.convert(50, "", "EUR") == 50


def test_converter_rejects_unusable_rate():
    with pytest.raises(ValueError):
        CurrencyConverter(0)
    with pytest.raises(ValueError):
        CurrencyConverter(float("nan"))


def test_format_money():
    assert format_money(1234.5, "USD") == "$1,234.50"
    assert format_money(1234.5, "EUR") == "€1,234.50"
    assert format_money(-5, "USD") == "-$5.00"
    assert format_money(12.3, "GBP") == "12.30 GBP"
    assert format_money(None, "USD") == "—"
    assert format_money(float("nan"), "EUR") == "—"
    assert format_money(float("inf"), "USD") == "—"
    assert format_money(float("-inf"), "EUR") == "—"


def test_require_supported_normalises_and_rejects():
    assert require_supported(" eur ") == "EUR"
    with pytest.raises(UnsupportedCurrencyError):
        require_supported("GBP")
