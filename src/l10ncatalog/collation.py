"""Locale-aware collation and search folding.

Collation keys are multi-level, in the manner of the Unicode Collation
Algorithm:

1. primary: base letters (accents and case ignored)
2. secondary: combining marks
3. tertiary: case (lowercase first)

A collation table row tailors the root order for one language: letters that
the language treats as separate letters of its alphabet are ranked after a
base letter (Swedish "å" after "z", Turkish "ı" between "h" and "i") instead
of being an accented variant of it.

Keys are hex strings, so their plain ordinal order is the collation order and
they can be sorted by any engine that compares strings byte-wise.

Usage:
    from l10ncatalog.collation import get_collator

    sorted(["Zebra", "Äpfel", "Apfel"], key=get_collator("de").sort_key)
    # -> ["Apfel", "Äpfel", "Zebra"]
    sorted(["Zebra", "Äpfel", "Apfel"], key=get_collator("sv").sort_key)
    # -> ["Apfel", "Zebra", "Äpfel"]
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from functools import lru_cache

from l10ncatalog import casing
from l10ncatalog.locales import LocaleRegistry, get_locale_registry
from l10ncatalog.segmentation import graphemes

_WEIGHT_WIDTH = 6
_LEVEL_SEPARATOR = "0" * _WEIGHT_WIDTH
_RANKS_PER_LETTER = 8

# Level weights start at 1 so that no weight encodes like the separator.
_NO_MARK = 1
_LOWER, _UPPER = 1, 2

# Letters without a canonical decomposition that sort as expansions of
# plain letters in the root order.
_ROOT_EXPANSIONS: dict[str, str] = {
    "ß": "ss",
    "æ": "ae",
    "œ": "oe",
    "ø": "o",
    "đ": "d",
    "ð": "d",
    "ł": "l",
    "ı": "i",
    "ŀ": "l",
}


@dataclass(frozen=True)
class CollationRules:
    """One row of the collation table.

    Attributes:
        id: Collation identifier referenced by the locale registry
        tailoring: Letter -> (base letter, rank after the base letter)
    """
    id: str
    tailoring: dict[str, tuple[str, int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tailoring", {
            unicodedata.normalize("NFC", letter): rank
            for letter, rank in self.tailoring.items()
        })

    def is_distinct_letter(self, cluster: str) -> bool:
        return cluster in self.tailoring


_COLLATIONS: dict[str, CollationRules] = {
    "root": CollationRules("root"),
    # DIN 5007-1: umlauts sort as their base vowel, secondary difference
    "de": CollationRules("de"),
    "tr": CollationRules("tr", {
        "ç": ("c", 1),
        "ğ": ("g", 1),
        "ı": ("h", 1),
        "ö": ("o", 1),
        "ş": ("s", 1),
        "ü": ("u", 1),
    }),
    "sv": CollationRules("sv", {
        "å": ("z", 1),
        "ä": ("z", 2),
        "æ": ("z", 2),
        "ö": ("z", 3),
        "ø": ("z", 3),
    }),
    "da": CollationRules("da", {
        "æ": ("z", 1),
        "ø": ("z", 2),
        "å": ("z", 3),
    }),
    "es": CollationRules("es", {
        "ñ": ("n", 1),
    }),
    "pl": CollationRules("pl", {
        "ą": ("a", 1),
        "ć": ("c", 1),
        "ę": ("e", 1),
        "ł": ("l", 1),
        "ń": ("n", 1),
        "ó": ("o", 1),
        "ś": ("s", 1),
        "ź": ("z", 1),
        "ż": ("z", 2),
    }),
    # TODO: the "ch" digraph (sorted after "h") needs contraction support
    "cs": CollationRules("cs", {
        "č": ("c", 1),
        "ř": ("r", 1),
        "š": ("s", 1),
        "ž": ("z", 1),
    }),
}


def register_collation(rules: CollationRules) -> None:
    """Add or replace a collation table row."""
    for letter, (base, rank) in rules.tailoring.items():
        if not 0 < rank < _RANKS_PER_LETTER:
            raise ValueError(f"Tailoring rank for {letter!r} must be 1..{_RANKS_PER_LETTER - 1}")
        if len(base) != 1:
            raise ValueError(f"Tailoring base for {letter!r} must be a single letter")
    _COLLATIONS[rules.id] = rules
    _collator.cache_clear()


def get_collation_rules(collation_id: str) -> CollationRules:
    try:
        return _COLLATIONS[collation_id]
    except KeyError:
        raise LookupError(f"Unknown collation: {collation_id!r}") from None


def _weight(value: int) -> str:
    return format(value, f"0{_WEIGHT_WIDTH}x")


def _primary(letter: str, rank: int = 0) -> int:
    return ord(letter) * _RANKS_PER_LETTER + rank


def _is_ignorable(cluster: str) -> bool:
    return unicodedata.category(cluster[0]).startswith("C")


class Collator:
    """Locale-aware string comparison.

    Example:
        collator = Collator(get_collation_rules("tr"), "tr")
        collator.compare("ılık", "ikinci")   # -1, ı sorts before i
        collator.fold("İSTANBUL")             # "istanbul"
    """

    def __init__(self, rules: CollationRules, language: str) -> None:
        self.rules = rules
        self.language = language

    def _normalize(self, cluster: str) -> str:
        return unicodedata.normalize("NFC", casing.lower(cluster, self.language))

    def sort_key(self, text: str) -> str:
        """Hex-encoded collation key; compare keys with plain string order."""
        primaries: list[int] = []
        secondaries: list[int] = []
        tertiaries: list[int] = []

        for cluster in graphemes(text):
            if _is_ignorable(cluster):
                continue
            lowered = self._normalize(cluster)
            tertiaries.append(_LOWER if lowered == unicodedata.normalize("NFC", cluster) else _UPPER)

            tailored = self.rules.tailoring.get(lowered)
            if tailored is not None:
                primaries.append(_primary(*tailored))
                secondaries.append(_NO_MARK)
                continue

            decomposed = unicodedata.normalize("NFD", lowered)
            marks = [c for c in decomposed if unicodedata.combining(c)]
            for char in decomposed:
                if unicodedata.combining(char):
                    continue
                expansion = _ROOT_EXPANSIONS.get(char)
                if expansion is not None:
                    primaries.extend(_primary(c) for c in expansion)
                    marks.append(char)
                else:
                    primaries.append(_primary(char))
            if marks:
                secondaries.extend(ord(m) for m in marks)
            else:
                secondaries.append(_NO_MARK)

        return _LEVEL_SEPARATOR.join(
            "".join(_weight(w) for w in level)
            for level in (primaries, secondaries, tertiaries)
        )

    def compare(self, left: str, right: str) -> int:
        """Three-way comparison: -1, 0 or 1."""
        a, b = self.sort_key(left), self.sort_key(right)
        return (a > b) - (a < b)

    def fold(self, text: str) -> str:
        """Case- and diacritic-folded form for substring matching.

        Letters the locale treats as distinct letters keep their identity, so
        Turkish "ı" does not match "i" and Swedish "å" does not match "a".
        """
        folded: list[str] = []
        for cluster in graphemes(text):
            lowered = self._normalize(cluster)
            if self.rules.is_distinct_letter(lowered):
                folded.append(lowered)
                continue
            for char in unicodedata.normalize("NFD", lowered):
                if not unicodedata.combining(char):
                    folded.append(_ROOT_EXPANSIONS.get(char, char))
        return "".join(folded)

    def contains(self, haystack: str, needle: str) -> bool:
        return self.fold(needle) in self.fold(haystack)


@lru_cache(maxsize=64)
def _collator(collation_id: str, language: str) -> Collator:
    return Collator(get_collation_rules(collation_id), language)


def get_collator(locale: str, registry: LocaleRegistry | None = None) -> Collator:
    """Get the collator for a registered locale.

    Raises:
        UnsupportedLocale: If the locale is not registered.
    """
    definition = (registry or get_locale_registry()).require(locale)
    return _collator(definition.collation, definition.language)
