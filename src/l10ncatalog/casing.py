"""Locale-aware case mapping.

Unicode default case mapping is wrong for Turkish and Azeri, where dotted
and dotless i are separate letters: "I".lower() must be "ı" and "i".upper()
must be "İ". Those locales get a special-casing table applied before the
default mapping.

Usage:
    from l10ncatalog.casing import capitalize, lower

    lower("DİYARBAKIR", "tr")          # "diyarbakır"
    capitalize("istanbul", "tr")       # "İstanbul"
    capitalize("istanbul", "en")       # "Istanbul"
"""

from __future__ import annotations

from l10ncatalog.protocols import LocaleInfo
from l10ncatalog.segmentation import graphemes

# language -> (lower mapping, upper mapping)
_SPECIAL_CASING: dict[str, tuple[dict[str, str], dict[str, str]]] = {
    "tr": ({"I": "ı", "İ": "i"}, {"i": "İ", "ı": "I"}),
    "az": ({"I": "ı", "İ": "i"}, {"i": "İ", "ı": "I"}),
}


def _language(locale: str | LocaleInfo) -> str:
    if isinstance(locale, LocaleInfo):
        return locale.language
    return LocaleInfo.parse(locale).language


def lower(text: str, locale: str | LocaleInfo) -> str:
    """Lowercase text using the locale's case mapping."""
    special = _SPECIAL_CASING.get(_language(locale))
    if special:
        text = text.translate(str.maketrans(special[0]))
    return text.lower()


def upper(text: str, locale: str | LocaleInfo) -> str:
    """Uppercase text using the locale's case mapping."""
    special = _SPECIAL_CASING.get(_language(locale))
    if special:
        text = text.translate(str.maketrans(special[1]))
    return text.upper()


def capitalize(text: str, locale: str | LocaleInfo) -> str:
    """Uppercase the first grapheme cluster and lowercase the rest."""
    clusters = graphemes(text)
    if not clusters:
        return text
    return upper(clusters[0], locale) + lower("".join(clusters[1:]), locale)
