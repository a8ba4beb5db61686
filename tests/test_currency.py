"""Tests for locale-aware currency and number formatting."""

from __future__ import annotations

from decimal import Decimal

import pytest

from l10ncatalog.currency import NBSP, NNBSP, CurrencyFormatter, format_currency
from l10ncatalog.errors import InvalidAmount, UnsupportedLocale


@pytest.fixture
def formatter(registry) -> CurrencyFormatter:
    return CurrencyFormatter(registry)


class TestCurrencyFormatting:
    """Digits follow the locale, symbol and position follow the currency."""

    @pytest.mark.parametrize(
        "amount, currency, locale, expected",
        [
            (1234.56, "USD", "en", "$1,234.56"),
            (1234.56, "USD", "de", "$1.234,56"),
            (1234.56, "USD", "fr", f"$1{NNBSP}234,56"),
            (1234.56, "USD", "de-AT", f"$1{NBSP}234,56"),
            (1234.56, "USD", "de-CH", "$1\u2019234.56"),
            (1234.56, "EUR", "de", f"1.234,56{NBSP}€"),
            (1234.56, "EUR", "en", f"1,234.56{NBSP}€"),
            (1234.56, "EUR", "es", f"1234,56{NBSP}€"),
            (12345.67, "EUR", "es", f"12.345,67{NBSP}€"),
            (1234567.5, "INR", "en-IN", "₹12,34,567.50"),
            (1234.5, "JPY", "ja", "¥1,235"),
            (1234.56, "USD", "ar", "$\u0661\u066c\u0662\u0663\u0664\u066b\u0665\u0666"),
            (29.99, "USD", "tr", "$29,99"),
            (0, "GBP", "en-GB", "£0.00"),
            (1.5, "KWD", "en", f"1.500{NBSP}د.ك."),
        ],
    )
    def test_format(self, formatter, amount, currency, locale, expected):
        assert formatter.format(amount, currency, locale).formatted == expected

    def test_same_amount_in_two_locales_keeps_value_and_currency(self, formatter):
        en = formatter.format(1234.56, "USD", "en")
        de = formatter.format(1234.56, "USD", "de")
        assert en.value == de.value == Decimal("1234.56")
        assert en.currency == de.currency == "USD"
        assert en.parts["symbol"] == de.parts["symbol"] == "$"
        digits = lambda text: "".join(c for c in text if c.isdigit())
        assert digits(en.formatted) == digits(de.formatted) == "123456"

    @pytest.mark.parametrize(
        "currency, locale, expected",
        [
            ("USD", "en", "-$5.00"),
            ("USD", "de-CH", "$-5.00"),
            ("EUR", "fr", f"-5,00{NBSP}€"),
            ("SEK", "sv", f"\u22125,00{NBSP}kr"),
            ("ILS", "he", f"\u200e-5.00{NBSP}₪"),
        ],
    )
    def test_negative_amounts(self, formatter, currency, locale, expected):
        assert formatter.format(-5, currency, locale).formatted == expected

    def test_rounding_half_up(self, formatter):
        result = formatter.format(2.345, "USD", "en")
        assert result.value == Decimal("2.35")
        assert result.formatted == "$2.35"

    def test_decimal_input(self, formatter):
        assert formatter.format(Decimal("1000"), "USD", "en").formatted == "$1,000.00"

    def test_currency_code_is_case_insensitive(self, formatter):
        assert formatter.format(1, "usd", "en").formatted == "$1.00"

    def test_unknown_currency_uses_code(self, formatter):
        result = formatter.format(1, "XYZ", "en")
        assert result.formatted == f"XYZ{NBSP}1.00"
        assert result.known_currency is False

    def test_global_helper(self):
        assert format_currency(1234.56, "EUR", "de") == f"1.234,56{NBSP}€"


class TestInvalidAmounts:
    """Tests for InvalidAmount failures."""

    @pytest.mark.parametrize(
        "amount",
        [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), True, "12", None],
    )
    def test_rejected(self, formatter, amount):
        with pytest.raises(InvalidAmount):
            formatter.format(amount, "USD", "en")

    def test_disallowed_negative(self, formatter):
        with pytest.raises(InvalidAmount) as exc_info:
            formatter.format(-1, "USD", "en", allow_negative=False)
        assert exc_info.value.amount == -1

    def test_invalid_amount_is_value_error(self, formatter):
        with pytest.raises(ValueError):
            formatter.format(float("nan"), "USD", "en")

    @pytest.mark.parametrize("amount", [1e30, -1e30, Decimal("1e40"), 10**40])
    def test_out_of_range(self, formatter, amount):
        with pytest.raises(InvalidAmount) as exc_info:
            formatter.format(amount, "USD", "en")
        assert exc_info.value.reason == "out of range"

    def test_out_of_range_plain_number(self, formatter):
        with pytest.raises(InvalidAmount):
            formatter.format_decimal(Decimal("1e40"), "en", fraction_digits=2)

    @pytest.mark.parametrize("code", ["US", "USDX", "12$", ""])
    def test_malformed_currency_code(self, formatter, code):
        with pytest.raises(InvalidAmount):
            formatter.format(1, code, "en")

    def test_unsupported_locale(self, formatter):
        with pytest.raises(UnsupportedLocale):
            formatter.format(1, "USD", "xx")


class TestFormatDecimal:
    """Tests for plain number formatting."""

    @pytest.mark.parametrize(
        "value, locale, expected",
        [
            (1234, "en", "1,234"),
            (1234, "de", "1.234"),
            (1234, "pl", "1234"),
            (12345, "pl", f"12{NBSP}345"),
            (1234.5, "de", "1.234,5"),
            (-7, "sv", "\u22127"),
            (15, "ar", "\u0661\u0665"),
        ],
    )
    def test_format_decimal(self, formatter, value, locale, expected):
        assert formatter.format_decimal(value, locale) == expected

    def test_fraction_digits(self, formatter):
        assert formatter.format_decimal(2, "en", fraction_digits=2) == "2.00"

    def test_without_grouping(self, formatter):
        assert formatter.format_decimal(1234567, "en", use_grouping=False) == "1234567"
