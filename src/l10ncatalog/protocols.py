"""Core value types and protocol definitions.

This module defines the enums, result dataclasses and protocols shared by the
formatters, so that each component can be swapped without touching its
callers.

Types:
- PluralCategory: CLDR plural categories
- TextDirection: ltr/rtl
- LocaleInfo: parsed BCP 47 tag
- ResolvedMessage, PluralizedMessage: translation results
- FormattedPrice, FormattedAddress, TruncatedText: formatter results

Protocols:
- MessageResolver: key + locale + params -> message
- PluralRuleProvider: count + locale -> plural category
- TextCollator: locale-aware ordering and search folding
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Protocol, runtime_checkable


# ==============================================================================
# Enums
# ==============================================================================

class PluralCategory(str, Enum):
    """CLDR plural categories.

    Based on Unicode CLDR plural rules:
    https://cldr.unicode.org/index/cldr-spec/plural-rules
    """
    ZERO = "zero"
    ONE = "one"
    TWO = "two"
    FEW = "few"
    MANY = "many"
    OTHER = "other"


class TextDirection(str, Enum):
    """Text direction of a locale."""
    LTR = "ltr"
    RTL = "rtl"


# ==============================================================================
# Locale tag
# ==============================================================================

@dataclass(frozen=True)
class LocaleInfo:
    """Parsed locale tag.

    Attributes:
        language: ISO 639-1 language code (e.g., "en", "de")
        region: ISO 3166-1 region code (e.g., "US", "GB")
        script: ISO 15924 script code (e.g., "Latn", "Hans")
    """
    language: str
    region: str | None = None
    script: str | None = None

    @property
    def tag(self) -> str:
        """Get the normalized BCP 47 language tag."""
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        return "-".join(parts)

    @property
    def base(self) -> "LocaleInfo":
        """The bare language, without script or region."""
        return LocaleInfo(language=self.language)

    @classmethod
    def parse(cls, tag: str) -> "LocaleInfo":
        """Parse a locale tag.

        Supports formats:
        - Simple: "en", "de"
        - With region: "en-GB", "en_GB", "de-at"
        - With script: "zh-Hans", "zh-Hant-TW"

        Args:
            tag: Locale tag string

        Returns:
            Parsed LocaleInfo

        Raises:
            ValueError: If the tag is empty, the language subtag is not
                alphabetic, or a later subtag is not a single script or
                region.
        """
        parts = [p for p in tag.strip().replace("_", "-").split("-") if p]
        if not parts or not parts[0].isalpha():
            raise ValueError(f"Invalid locale tag: {tag!r}")

        language = parts[0].lower()
        region = None
        script = None

        for part in parts[1:]:
            if len(part) == 4 and part.isalpha() and script is None and region is None:
                script = part.capitalize()
            elif len(part) == 2 and part.isalpha() and region is None:
                region = part.upper()
            elif len(part) == 3 and part.isdigit() and region is None:
                region = part
            else:
                raise ValueError(f"Invalid locale tag: {tag!r} (unrecognized subtag {part!r})")

        return cls(language=language, region=region, script=script)

    def __str__(self) -> str:
        return self.tag


# ==============================================================================
# Result types
# ==============================================================================

@dataclass
class ResolvedMessage:
    """Result of message resolution.

    Attributes:
        key: Requested message key
        message: Resolved and substituted message
        locale: Locale whose table supplied the template (None if missing)
        fallback: True if a locale other than the requested one was used
        missing: True if no table had the key and the key itself was returned
    """
    key: str
    message: str
    locale: str | None
    fallback: bool = False
    missing: bool = False

    def __str__(self) -> str:
        return self.message


@dataclass
class PluralizedMessage:
    """Result of message pluralization."""
    message: str
    count: float | int | Decimal
    category: PluralCategory

    def __str__(self) -> str:
        return self.message


@dataclass
class FormattedPrice:
    """Result of currency formatting.

    Attributes:
        value: Amount after rounding to the currency's fraction digits
        formatted: Final string
        currency: ISO 4217 code
        known_currency: False if the code is missing from the currency table
        parts: Component parts ("sign", "symbol", "number")
    """
    value: Decimal
    formatted: str
    currency: str
    known_currency: bool = True
    parts: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.formatted


@dataclass
class FormattedAddress:
    """Result of address formatting.

    Attributes:
        text: Formatted address
        country_code: Country whose format table row was used
        verified: False if the generic fallback order was used
        order: Component names in emitted order
    """
    text: str
    country_code: str
    verified: bool
    order: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.text


@dataclass
class TruncatedText:
    """Result of grapheme-safe truncation.

    Attributes:
        text: Possibly shortened text (ellipsis-terminated if shortened)
        truncated: Whether anything was removed
        word_unsplittable: True if no whole word fit and the cut fell
            inside a word
        length: Length of ``text`` in grapheme clusters
    """
    text: str
    truncated: bool = False
    word_unsplittable: bool = False
    length: int = 0

    def __str__(self) -> str:
        return self.text


# ==============================================================================
# Protocols
# ==============================================================================

@runtime_checkable
class MessageResolver(Protocol):
    """Protocol for resolving message keys to localized strings."""

    def resolve(
        self,
        key: str,
        locale: str,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """Resolve a key for a locale, substituting parameters."""
        ...

    def has_template(self, key: str, locale: str) -> bool:
        """Whether any locale in the fallback chain defines the key."""
        ...


@runtime_checkable
class PluralRuleProvider(Protocol):
    """Protocol for plural rule handling."""

    def select(self, count: float | int | Decimal, locale: str) -> PluralCategory:
        """Get the plural category for a count in a locale."""
        ...

    def categories(self, locale: str) -> tuple[PluralCategory, ...]:
        """Get the plural categories a locale declares."""
        ...


@runtime_checkable
class TextCollator(Protocol):
    """Protocol for locale-aware string ordering and matching."""

    def sort_key(self, text: str) -> str:
        """Return a key whose ordinal order is the collation order."""
        ...

    def fold(self, text: str) -> str:
        """Return a case- and diacritic-folded form for matching."""
        ...
