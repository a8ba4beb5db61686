"""CLDR Plural Rules.

Each locale names a plural rule set in the locale registry; a rule set
declares its categories (2 to 6 of zero/one/two/few/many/other) and the
numeric rule that picks one of them.

Usage:
    from l10ncatalog.plural import PluralRuleEngine

    engine = PluralRuleEngine(resolver)
    engine.select(5, "ru")        # PluralCategory.MANY
    engine.select(2, "ar")        # PluralCategory.TWO
    engine.pluralize(3, "en", "catalog.items_found").message
    # -> "3 items found"
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from l10ncatalog.currency import CurrencyFormatter
from l10ncatalog.locales import LocaleRegistry, get_locale_registry
from l10ncatalog.messages import TranslationResolver, substitute
from l10ncatalog.protocols import PluralCategory, PluralizedMessage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PluralOperands:
    """CLDR plural operands for a number.

    See: https://unicode.org/reports/tr35/tr35-numbers.html#Operands

    Attributes:
        n: Absolute value of the source number
        i: Integer digits of n
        v: Number of visible fraction digits with trailing zeros
        w: Number of visible fraction digits without trailing zeros
        f: Visible fraction digits with trailing zeros
        t: Visible fraction digits without trailing zeros
        e: Compact decimal exponent (always 0, compact notation is not used)
    """
    n: Decimal
    i: int
    v: int
    w: int
    f: int
    t: int
    e: int = 0

    @property
    def is_integer(self) -> bool:
        return self.v == 0

    @classmethod
    def from_number(cls, number: float | int | Decimal) -> "PluralOperands":
        """Create operands from a number.

        Floats are read through their shortest repr, so 1.5 has one visible
        fraction digit. Decimals keep their exponent, so Decimal("1.50") has
        two.
        """
        if isinstance(number, int):
            n = Decimal(abs(number))
            return cls(n=n, i=abs(number), v=0, w=0, f=0, t=0)

        value = number if isinstance(number, Decimal) else Decimal(repr(float(number)))
        value = abs(value)
        text = format(value, "f")

        if "." in text:
            int_str, fraction_str = text.split(".", 1)
        else:
            int_str, fraction_str = text, ""

        t_str = fraction_str.rstrip("0")
        return cls(
            n=value,
            i=int(int_str),
            v=len(fraction_str),
            w=len(t_str),
            f=int(fraction_str) if fraction_str else 0,
            t=int(t_str) if t_str else 0,
        )


PluralRuleFunc = Callable[[PluralOperands], PluralCategory]


@dataclass(frozen=True)
class PluralRuleSet:
    """A named plural rule and the categories it can produce."""
    id: str
    categories: tuple[PluralCategory, ...]
    rule: PluralRuleFunc


# ==========================================
# CARDINAL RULES
# ==========================================

def _one_other(op: PluralOperands) -> PluralCategory:
    # English, German, Swedish, Danish, Turkish...
    # One: i = 1 and v = 0
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    return PluralCategory.OTHER


def _no_plural(op: PluralOperands) -> PluralCategory:
    return PluralCategory.OTHER


def _is_million_multiple(op: PluralOperands) -> bool:
    return op.e == 0 and op.i != 0 and op.i % 1_000_000 == 0 and op.v == 0


def _french(op: PluralOperands) -> PluralCategory:
    # One: i = 0,1
    # Many: e = 0 and i != 0 and i % 1000000 = 0 and v = 0
    if op.i in (0, 1):
        return PluralCategory.ONE
    if _is_million_multiple(op):
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _spanish(op: PluralOperands) -> PluralCategory:
    # One: n = 1
    # Many: e = 0 and i != 0 and i % 1000000 = 0 and v = 0
    if op.n == 1:
        return PluralCategory.ONE
    if _is_million_multiple(op):
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _east_slavic(op: PluralOperands) -> PluralCategory:
    # One: v = 0 and i % 10 = 1 and i % 100 != 11
    # Few: v = 0 and i % 10 = 2..4 and i % 100 != 12..14
    # Many: v = 0 and (i % 10 = 0 or i % 10 = 5..9 or i % 100 = 11..14)
    i10 = op.i % 10
    i100 = op.i % 100

    if op.v == 0 and i10 == 1 and i100 != 11:
        return PluralCategory.ONE
    if op.v == 0 and 2 <= i10 <= 4 and not (12 <= i100 <= 14):
        return PluralCategory.FEW
    if op.v == 0 and (i10 == 0 or 5 <= i10 <= 9 or 11 <= i100 <= 14):
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _polish(op: PluralOperands) -> PluralCategory:
    # One: i = 1 and v = 0
    # Few: v = 0 and i % 10 = 2..4 and i % 100 != 12..14
    # Many: v = 0 and (i != 1 and i % 10 = 0..1 or i % 10 = 5..9 or i % 100 = 12..14)
    i10 = op.i % 10
    i100 = op.i % 100

    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    if op.v == 0 and 2 <= i10 <= 4 and not (12 <= i100 <= 14):
        return PluralCategory.FEW
    if op.v == 0 and ((op.i != 1 and i10 in (0, 1)) or 5 <= i10 <= 9 or 12 <= i100 <= 14):
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _czech(op: PluralOperands) -> PluralCategory:
    # One: i = 1 and v = 0
    # Few: i = 2..4 and v = 0
    # Many: v != 0
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    if 2 <= op.i <= 4 and op.v == 0:
        return PluralCategory.FEW
    if op.v != 0:
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _arabic(op: PluralOperands) -> PluralCategory:
    # Zero: n = 0
    # One: n = 1
    # Two: n = 2
    # Few: n % 100 = 3..10
    # Many: n % 100 = 11..99
    if op.n == 0:
        return PluralCategory.ZERO
    if op.n == 1:
        return PluralCategory.ONE
    if op.n == 2:
        return PluralCategory.TWO
    if op.is_integer:
        n100 = op.i % 100
        if 3 <= n100 <= 10:
            return PluralCategory.FEW
        if 11 <= n100 <= 99:
            return PluralCategory.MANY
    return PluralCategory.OTHER


def _hebrew(op: PluralOperands) -> PluralCategory:
    # One: i = 1 and v = 0 or i = 0 and v != 0
    # Two: i = 2 and v = 0
    if (op.i == 1 and op.v == 0) or (op.i == 0 and op.v != 0):
        return PluralCategory.ONE
    if op.i == 2 and op.v == 0:
        return PluralCategory.TWO
    return PluralCategory.OTHER


def _welsh(op: PluralOperands) -> PluralCategory:
    # Zero: n = 0, One: n = 1, Two: n = 2, Few: n = 3, Many: n = 6
    mapping = {
        0: PluralCategory.ZERO,
        1: PluralCategory.ONE,
        2: PluralCategory.TWO,
        3: PluralCategory.FEW,
        6: PluralCategory.MANY,
    }
    if op.is_integer:
        return mapping.get(op.i, PluralCategory.OTHER)
    return PluralCategory.OTHER


def _irish(op: PluralOperands) -> PluralCategory:
    # One: n = 1, Two: n = 2, Few: n = 3..6, Many: n = 7..10
    if not op.is_integer:
        return PluralCategory.OTHER
    if op.i == 1:
        return PluralCategory.ONE
    if op.i == 2:
        return PluralCategory.TWO
    if 3 <= op.i <= 6:
        return PluralCategory.FEW
    if 7 <= op.i <= 10:
        return PluralCategory.MANY
    return PluralCategory.OTHER


def _latvian(op: PluralOperands) -> PluralCategory:
    # Zero: n % 10 = 0 or n % 100 = 11..19 or v = 2 and f % 100 = 11..19
    # One: n % 10 = 1 and n % 100 != 11 or v = 2 and f % 10 = 1 and f % 100 != 11
    #      or v != 2 and f % 10 = 1
    n10 = op.i % 10 if op.is_integer else -1
    n100 = op.i % 100 if op.is_integer else -1
    f10 = op.f % 10
    f100 = op.f % 100

    if n10 == 0 or 11 <= n100 <= 19 or (op.v == 2 and 11 <= f100 <= 19):
        return PluralCategory.ZERO
    if (n10 == 1 and n100 != 11) or (op.v == 2 and f10 == 1 and f100 != 11) or (op.v != 2 and f10 == 1):
        return PluralCategory.ONE
    return PluralCategory.OTHER


def _lithuanian(op: PluralOperands) -> PluralCategory:
    # One: n % 10 = 1 and n % 100 != 11..19
    # Few: n % 10 = 2..9 and n % 100 != 11..19
    # Many: f != 0
    if op.f != 0:
        return PluralCategory.MANY
    n10 = op.i % 10
    n100 = op.i % 100
    if n10 == 1 and not (11 <= n100 <= 19):
        return PluralCategory.ONE
    if 2 <= n10 <= 9 and not (11 <= n100 <= 19):
        return PluralCategory.FEW
    return PluralCategory.OTHER


def _romanian(op: PluralOperands) -> PluralCategory:
    # One: i = 1 and v = 0
    # Few: v != 0 or n = 0 or n != 1 and n % 100 = 1..19
    if op.i == 1 and op.v == 0:
        return PluralCategory.ONE
    if op.v != 0 or op.n == 0 or 1 <= op.i % 100 <= 19:
        return PluralCategory.FEW
    return PluralCategory.OTHER


def _slovenian(op: PluralOperands) -> PluralCategory:
    # One: v = 0 and i % 100 = 1
    # Two: v = 0 and i % 100 = 2
    # Few: v = 0 and i % 100 = 3..4 or v != 0
    i100 = op.i % 100
    if op.v == 0 and i100 == 1:
        return PluralCategory.ONE
    if op.v == 0 and i100 == 2:
        return PluralCategory.TWO
    if (op.v == 0 and 3 <= i100 <= 4) or op.v != 0:
        return PluralCategory.FEW
    return PluralCategory.OTHER


def _maltese(op: PluralOperands) -> PluralCategory:
    # One: n = 1
    # Two: n = 2
    # Few: n = 0 or n % 100 = 3..10
    # Many: n % 100 = 11..19
    if op.n == 1:
        return PluralCategory.ONE
    if op.n == 2:
        return PluralCategory.TWO
    if op.is_integer:
        n100 = op.i % 100
        if op.i == 0 or 3 <= n100 <= 10:
            return PluralCategory.FEW
        if 11 <= n100 <= 19:
            return PluralCategory.MANY
    return PluralCategory.OTHER


_Z, _O, _T, _F, _M, _X = (
    PluralCategory.ZERO,
    PluralCategory.ONE,
    PluralCategory.TWO,
    PluralCategory.FEW,
    PluralCategory.MANY,
    PluralCategory.OTHER,
)

BUILTIN_RULE_SETS: tuple[PluralRuleSet, ...] = (
    PluralRuleSet("one_other", (_O, _X), _one_other),
    PluralRuleSet("none", (_X,), _no_plural),
    PluralRuleSet("french", (_O, _M, _X), _french),
    PluralRuleSet("spanish", (_O, _M, _X), _spanish),
    PluralRuleSet("east_slavic", (_O, _F, _M, _X), _east_slavic),
    PluralRuleSet("polish", (_O, _F, _M, _X), _polish),
    PluralRuleSet("czech", (_O, _F, _M, _X), _czech),
    PluralRuleSet("arabic", (_Z, _O, _T, _F, _M, _X), _arabic),
    PluralRuleSet("hebrew", (_O, _T, _X), _hebrew),
    PluralRuleSet("welsh", (_Z, _O, _T, _F, _M, _X), _welsh),
    PluralRuleSet("irish", (_O, _T, _F, _M, _X), _irish),
    PluralRuleSet("latvian", (_Z, _O, _X), _latvian),
    PluralRuleSet("lithuanian", (_O, _F, _M, _X), _lithuanian),
    PluralRuleSet("romanian", (_O, _F, _X), _romanian),
    PluralRuleSet("slovenian", (_O, _T, _F, _X), _slovenian),
    PluralRuleSet("maltese", (_O, _T, _F, _M, _X), _maltese),
)


def _check_count(count: Any) -> None:
    if isinstance(count, bool) or not isinstance(count, (int, float, Decimal)):
        raise TypeError(f"Plural count must be a number, got {type(count).__name__}")
    if isinstance(count, Decimal):
        if not count.is_finite():
            raise ValueError(f"Plural count must be finite, got {count}")
    elif isinstance(count, float) and not math.isfinite(count):
        raise ValueError(f"Plural count must be finite, got {count}")


class PluralRuleEngine:
    """Maps counts to plural categories and selects message templates.

    Locale support is validated upfront: an unregistered locale raises
    UnsupportedLocale instead of silently guessing a one/other split.

    Example:
        engine = PluralRuleEngine(resolver)
        engine.select(1, "ar")       # ONE
        engine.select(11, "ar")      # MANY
        engine.select(1_000_000, "fr")  # MANY
        engine.select_template(2, "pl", "catalog.items_found")
        # -> "Znaleziono {{count}} produkty"
    """

    def __init__(
        self,
        resolver: TranslationResolver | None = None,
        registry: LocaleRegistry | None = None,
        number_formatter: CurrencyFormatter | None = None,
    ) -> None:
        self._resolver = resolver
        self._registry = registry or (resolver.registry if resolver else get_locale_registry())
        self._number_formatter = number_formatter or CurrencyFormatter(self._registry)
        self._rule_sets: dict[str, PluralRuleSet] = {}
        for rule_set in BUILTIN_RULE_SETS:
            self.register_rule_set(rule_set)

    def register_rule_set(self, rule_set: PluralRuleSet) -> None:
        """Register or replace a plural rule set."""
        if PluralCategory.OTHER not in rule_set.categories:
            raise ValueError(f"Plural rule set {rule_set.id!r} must declare 'other'")
        self._rule_sets[rule_set.id] = rule_set

    def rule_set(self, locale: str) -> PluralRuleSet:
        """Get the plural rule set of a registered locale.

        Raises:
            UnsupportedLocale: If the locale is not registered.
            LookupError: If the locale names an unknown rule set.
        """
        definition = self._registry.require(locale)
        try:
            return self._rule_sets[definition.plural_rule_set]
        except KeyError:
            raise LookupError(
                f"Locale {definition.code!r} uses unknown plural rule set "
                f"{definition.plural_rule_set!r}"
            ) from None

    def categories(self, locale: str) -> tuple[PluralCategory, ...]:
        return self.rule_set(locale).categories

    def select(self, count: float | int | Decimal, locale: str) -> PluralCategory:
        """Get the plural category for a count.

        Args:
            count: The number to categorize (sign is ignored)
            locale: Registered locale code

        Returns:
            A category from the locale's declared set
        """
        _check_count(count)
        rule_set = self.rule_set(locale)
        return rule_set.rule(PluralOperands.from_number(count))

    def select_template(
        self,
        count: float | int | Decimal,
        locale: str,
        key_prefix: str,
    ) -> str:
        """Select the message template for a count.

        Looks up ``{key_prefix}.{category}``; when the table has no template
        for that category, falls back to ``{key_prefix}.other``.
        """
        if self._resolver is None:
            raise RuntimeError("PluralRuleEngine needs a TranslationResolver to select templates")

        category = self.select(count, locale)
        key = f"{key_prefix}.{category.value}"
        found = self._resolver.lookup(key, locale)
        if found is not None:
            return found[1]

        other_key = f"{key_prefix}.{PluralCategory.OTHER.value}"
        found = self._resolver.lookup(other_key, locale)
        if found is not None:
            logger.debug(f"No template {key} for {locale}, using {other_key}")
            return found[1]

        return self._resolver.resolve(key, locale)

    def pluralize(
        self,
        count: float | int | Decimal,
        locale: str,
        key_prefix: str,
        **params: Any,
    ) -> PluralizedMessage:
        """Select and fill the template for a count.

        ``{{count}}`` is replaced by the count formatted with the locale's
        digit punctuation.
        """
        template = self.select_template(count, locale, key_prefix)
        formatted_count = self._number_formatter.format_decimal(count, locale)
        message = substitute(template, {**params, "count": formatted_count})
        return PluralizedMessage(
            message=message,
            count=count,
            category=self.select(count, locale),
        )

    def get_supported_rule_sets(self) -> list[str]:
        return list(self._rule_sets)


_plural_engine: PluralRuleEngine | None = None


def get_plural_category(count: float | int | Decimal, locale: str) -> PluralCategory:
    """Get the plural category for a count with the built-in locales.

    Example:
        get_plural_category(1, "en")  # ONE
        get_plural_category(2, "en")  # OTHER
        get_plural_category(5, "ru")  # MANY
    """
    global _plural_engine
    if _plural_engine is None:
        _plural_engine = PluralRuleEngine()
    return _plural_engine.select(count, locale)
