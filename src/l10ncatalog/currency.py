"""Locale-Aware Currency and Number Formatting.

Digit grouping, the decimal separator, the digits themselves and the minus
convention follow the display locale. The currency symbol, its position and
the number of fraction digits follow the currency code, so an amount keeps
its true currency whatever locale it is shown in.

Usage:
    from l10ncatalog.currency import format_currency

    format_currency(1234.56, "USD", "en")   # "$1,234.56"
    format_currency(1234.56, "USD", "de")   # "$1.234,56"
    format_currency(1234.56, "EUR", "de")   # "1.234,56 €"
    format_currency(1234.5, "JPY", "ja")    # "¥1,235"
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any

from l10ncatalog.errors import InvalidAmount
from l10ncatalog.locales import LocaleRegistry, get_locale_registry
from l10ncatalog.protocols import FormattedPrice, LocaleInfo

logger = logging.getLogger(__name__)


NBSP = "\u00a0"
NNBSP = "\u202f"


# ==============================================================================
# Locale Data: Number Symbols
# ==============================================================================

class Grouping(str, Enum):
    """Digit grouping scheme."""
    STANDARD = "standard"  # 1,234,567
    INDIAN = "indian"      # 12,34,567


@dataclass(frozen=True)
class NumberSymbols:
    """Locale-specific number symbols.

    Based on CLDR number symbols data.

    Attributes:
        decimal: Decimal separator
        group: Grouping separator
        minus: Minus sign (may include a directional mark)
        digits: Native digits 0-9, or None for ASCII digits
        grouping: Grouping scheme
        min_grouping_digits: Grouping only applies when the integer part
            has at least 3 + this many digits (CLDR minimumGroupingDigits)
        minus_before_symbol: Whether the minus precedes a prefixed currency
            symbol ("-$5") or follows it ("$-5")
    """
    decimal: str = "."
    group: str = ","
    minus: str = "-"
    digits: str | None = None
    grouping: Grouping = Grouping.STANDARD
    min_grouping_digits: int = 1
    minus_before_symbol: bool = True


_NUMBER_SYMBOLS: dict[str, NumberSymbols] = {
    # Default (English)
    "en": NumberSymbols(),
    "en-IN": NumberSymbols(grouping=Grouping.INDIAN),

    # German, Austrian and Swiss German
    "de": NumberSymbols(decimal=",", group="."),
    "de-AT": NumberSymbols(decimal=",", group=NBSP),
    "de-CH": NumberSymbols(decimal=".", group="’", minus_before_symbol=False),

    "fr": NumberSymbols(decimal=",", group=NNBSP),
    "es": NumberSymbols(decimal=",", group=".", min_grouping_digits=2),
    "tr": NumberSymbols(decimal=",", group="."),
    "sv": NumberSymbols(decimal=",", group=NBSP, minus="\u2212"),
    "da": NumberSymbols(decimal=",", group="."),
    "pl": NumberSymbols(decimal=",", group=NBSP, min_grouping_digits=2),
    "cs": NumberSymbols(decimal=",", group=NBSP),
    "ru": NumberSymbols(decimal=",", group=NBSP),

    # Arabic uses Arabic-Indic digits and an Arabic letter mark before the minus
    "ar": NumberSymbols(decimal="٫", group="٬", minus="\u061c-", digits="٠١٢٣٤٥٦٧٨٩"),
    "he": NumberSymbols(minus="\u200e-"),

    "ja": NumberSymbols(),
    "zh": NumberSymbols(),
}


# ==============================================================================
# Currency Data
# ==============================================================================

class SymbolPosition(str, Enum):
    PREFIX = "prefix"
    SUFFIX = "suffix"


@dataclass(frozen=True)
class CurrencyInfo:
    """Currency formatting information.

    Attributes:
        code: ISO 4217 code
        symbol: Display symbol
        decimal_digits: Minor unit digits
        position: Where the symbol goes relative to the number
        spacing: Text between symbol and number
    """
    code: str
    symbol: str
    name: str = ""
    decimal_digits: int = 2
    position: SymbolPosition = SymbolPosition.PREFIX
    spacing: str = ""


_P, _S = SymbolPosition.PREFIX, SymbolPosition.SUFFIX

_CURRENCIES: dict[str, CurrencyInfo] = {
    "USD": CurrencyInfo("USD", "$", "US Dollar"),
    "EUR": CurrencyInfo("EUR", "€", "Euro", position=_S, spacing=NBSP),
    "GBP": CurrencyInfo("GBP", "£", "British Pound"),
    "JPY": CurrencyInfo("JPY", "¥", "Japanese Yen", decimal_digits=0),
    "CNY": CurrencyInfo("CNY", "¥", "Chinese Yuan"),
    "KRW": CurrencyInfo("KRW", "₩", "Korean Won", decimal_digits=0),
    "INR": CurrencyInfo("INR", "₹", "Indian Rupee"),
    "CHF": CurrencyInfo("CHF", "CHF", "Swiss Franc", spacing=NBSP),
    "CAD": CurrencyInfo("CAD", "CA$", "Canadian Dollar"),
    "AUD": CurrencyInfo("AUD", "A$", "Australian Dollar"),
    "MXN": CurrencyInfo("MXN", "MX$", "Mexican Peso"),
    "BRL": CurrencyInfo("BRL", "R$", "Brazilian Real", spacing=NBSP),
    "TRY": CurrencyInfo("TRY", "₺", "Turkish Lira"),
    "SEK": CurrencyInfo("SEK", "kr", "Swedish Krona", position=_S, spacing=NBSP),
    "NOK": CurrencyInfo("NOK", "kr", "Norwegian Krone", position=_S, spacing=NBSP),
    "DKK": CurrencyInfo("DKK", "kr.", "Danish Krone", position=_S, spacing=NBSP),
    "PLN": CurrencyInfo("PLN", "zł", "Polish Zloty", position=_S, spacing=NBSP),
    "CZK": CurrencyInfo("CZK", "Kč", "Czech Koruna", position=_S, spacing=NBSP),
    "RUB": CurrencyInfo("RUB", "₽", "Russian Ruble", position=_S, spacing=NBSP),
    "ILS": CurrencyInfo("ILS", "₪", "Israeli Shekel", position=_S, spacing=NBSP),
    "SAR": CurrencyInfo("SAR", "ر.س.", "Saudi Riyal", position=_S, spacing=NBSP),
    "AED": CurrencyInfo("AED", "د.إ.", "UAE Dirham", position=_S, spacing=NBSP),
    "KWD": CurrencyInfo("KWD", "د.ك.", "Kuwaiti Dinar", decimal_digits=3, position=_S, spacing=NBSP),
}

_CURRENCY_CODE = re.compile(r"[A-Za-z]{3}")


def get_currency_info(code: str) -> CurrencyInfo | None:
    """Get currency information, or None for codes missing from the table."""
    return _CURRENCIES.get(code.upper())


def _to_decimal(amount: Any) -> Decimal:
    """Convert an amount to a finite Decimal or raise InvalidAmount."""
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        raise InvalidAmount(amount, "not a number")
    if isinstance(amount, float):
        if not math.isfinite(amount):
            raise InvalidAmount(amount, "not finite")
        return Decimal(repr(amount))
    if isinstance(amount, Decimal):
        if not amount.is_finite():
            raise InvalidAmount(amount, "not finite")
        return amount
    return Decimal(amount)


def _round(value: Decimal, fraction_digits: int, amount: Any) -> Decimal:
    """Round half-up to a number of fraction digits or raise InvalidAmount."""
    try:
        return value.quantize(Decimal(1).scaleb(-fraction_digits), rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise InvalidAmount(amount, "out of range") from e


class CurrencyFormatter:
    """Locale-aware money and number formatter.

    Example:
        formatter = CurrencyFormatter()

        formatter.format(1234.56, "USD", "en").formatted   # "$1,234.56"
        formatter.format(1234.56, "USD", "de").formatted   # "$1.234,56"
        formatter.format(-5, "EUR", "fr").formatted        # "-5,00 €"
        formatter.format(float("nan"), "USD", "en")        # raises InvalidAmount
    """

    def __init__(self, registry: LocaleRegistry | None = None) -> None:
        self._registry = registry or get_locale_registry()

    def symbols(self, locale: str) -> NumberSymbols:
        """Get number symbols for a registered locale.

        Tries the exact tag, then the base language, then the default locale.

        Raises:
            UnsupportedLocale: If the locale is not registered.
        """
        for candidate in self._registry.fallback_chain(locale):
            if candidate in _NUMBER_SYMBOLS:
                return _NUMBER_SYMBOLS[candidate]
        return _NUMBER_SYMBOLS["en"]

    def format(
        self,
        amount: float | int | Decimal,
        currency_code: str,
        locale: str,
        allow_negative: bool = True,
    ) -> FormattedPrice:
        """Format an amount of money.

        Args:
            amount: Amount in major units
            currency_code: ISO 4217 currency code
            locale: Display locale (controls digits and punctuation only)
            allow_negative: If False, negative amounts raise InvalidAmount

        Returns:
            Formatted price

        Raises:
            InvalidAmount: Non-finite, non-numeric or disallowed negative
                amount, or a malformed currency code.
            UnsupportedLocale: If the locale is not registered.
        """
        symbols = self.symbols(locale)
        value = _to_decimal(amount)
        if value < 0 and not allow_negative:
            raise InvalidAmount(amount, "negative amounts are not allowed")

        if not isinstance(currency_code, str) or not _CURRENCY_CODE.fullmatch(currency_code):
            raise InvalidAmount(amount, f"invalid currency code {currency_code!r}")

        code = currency_code.upper()
        info = get_currency_info(code)
        known = info is not None
        if info is None:
            logger.debug(f"Currency {code} not in currency table, using code as symbol")
            info = CurrencyInfo(code, code, spacing=NBSP)

        rounded = _round(value, info.decimal_digits, amount)
        number = self._format_number(abs(rounded), info.decimal_digits, symbols)
        sign = symbols.minus if rounded < 0 else ""

        if info.position == SymbolPosition.SUFFIX:
            formatted = f"{sign}{number}{info.spacing}{info.symbol}"
        elif symbols.minus_before_symbol:
            formatted = f"{sign}{info.symbol}{info.spacing}{number}"
        else:
            formatted = f"{info.symbol}{info.spacing}{sign}{number}"

        return FormattedPrice(
            value=rounded,
            formatted=formatted,
            currency=code,
            known_currency=known,
            parts={"sign": sign, "symbol": info.symbol, "number": number},
        )

    def format_decimal(
        self,
        value: float | int | Decimal,
        locale: str,
        fraction_digits: int | None = None,
        use_grouping: bool = True,
    ) -> str:
        """Format a plain number with the locale's punctuation.

        With ``fraction_digits=None`` integers get no fraction and other
        numbers keep their visible fraction digits.
        """
        symbols = self.symbols(locale)
        number = _to_decimal(value)
        if fraction_digits is None:
            exponent = number.as_tuple().exponent
            fraction_digits = -exponent if isinstance(exponent, int) and exponent < 0 else 0
        rounded = _round(number, fraction_digits, value)
        text = self._format_number(abs(rounded), fraction_digits, symbols, use_grouping)
        return f"{symbols.minus}{text}" if rounded < 0 else text

    def _format_number(
        self,
        value: Decimal,
        fraction_digits: int,
        symbols: NumberSymbols,
        use_grouping: bool = True,
    ) -> str:
        try:
            text = format(value, f".{fraction_digits}f")
        except (InvalidOperation, ValueError) as e:
            raise InvalidAmount(value, str(e)) from e

        int_part, _, frac_part = text.partition(".")
        if use_grouping:
            int_part = self._apply_grouping(int_part, symbols)

        formatted = f"{int_part}{symbols.decimal}{frac_part}" if frac_part else int_part
        if symbols.digits:
            formatted = formatted.translate(str.maketrans("0123456789", symbols.digits))
        return formatted

    def _apply_grouping(self, int_part: str, symbols: NumberSymbols) -> str:
        """Apply grouping separators to integer part."""
        if len(int_part) < 3 + symbols.min_grouping_digits:
            return int_part

        # Indian numbering system uses 2,2,3 grouping
        if symbols.grouping == Grouping.INDIAN:
            result = int_part[-3:]
            remaining = int_part[:-3]
            while remaining:
                result = remaining[-2:] + symbols.group + result
                remaining = remaining[:-2]
            return result

        groups = []
        while len(int_part) > 3:
            groups.insert(0, int_part[-3:])
            int_part = int_part[:-3]
        groups.insert(0, int_part)
        return symbols.group.join(groups)


_currency_formatter = CurrencyFormatter()


def format_currency(
    amount: float | int | Decimal,
    currency_code: str,
    locale: str | LocaleInfo,
) -> str:
    """Format money with the built-in locales.

    Example:
        format_currency(1234.56, "USD", "en")  # "$1,234.56"
        format_currency(1234.56, "EUR", "de")  # "1.234,56 €"
    """
    return _currency_formatter.format(amount, currency_code, str(locale)).formatted
