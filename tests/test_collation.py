"""Tests for locale collation, casing and search folding."""

from __future__ import annotations

import pytest

from l10ncatalog.casing import capitalize, lower, upper
from l10ncatalog.collation import (
    CollationRules,
    get_collation_rules,
    get_collator,
    register_collation,
)
from l10ncatalog.errors import UnsupportedLocale
from l10ncatalog.protocols import TextCollator


def collate(words: list[str], locale: str) -> list[str]:
    return sorted(words, key=get_collator(locale).sort_key)


class TestCasing:
    """Tests for locale-aware case mapping."""

    def test_turkish_dotted_i(self):
        assert upper("istanbul", "tr") == "İSTANBUL"
        assert lower("DİYARBAKIR", "tr") == "diyarbakır"

    def test_default_casing(self):
        assert upper("istanbul", "en") == "ISTANBUL"
        assert lower("ISTANBUL", "de") == "istanbul"

    def test_capitalize(self):
        assert capitalize("istanbul", "tr") == "İstanbul"
        assert capitalize("istanbul", "en") == "Istanbul"
        assert capitalize("ELECTRONICS", "en") == "Electronics"
        assert capitalize("", "en") == ""

    def test_capitalize_first_grapheme(self):
        assert capitalize("\u00e9cole", "fr") == "\u00c9cole"
        assert capitalize("e\u0301cole", "fr") == "E\u0301cole"


class TestCollationOrder:
    """Tests for sort keys under different tailorings."""

    def test_root_ignores_case_and_accents_at_primary_level(self):
        assert collate(["b", "A", "á", "a", "B"], "en") == ["a", "A", "á", "b", "B"]

    def test_unaccented_before_accented(self):
        assert collate(["résumé", "resume", "Resume"], "en") == ["resume", "Resume", "résumé"]

    def test_ordinal_order_is_not_used(self):
        """Ordinal order would put every capital and accented letter elsewhere."""
        assert collate(["zebra", "Äpfel", "apple", "Zoo"], "en") == ["Äpfel", "apple", "zebra", "Zoo"]

    def test_german_umlaut_sorts_with_base_vowel(self):
        assert collate(["Zebra", "Äpfel", "Apfel", "Bär"], "de") == ["Apfel", "Äpfel", "Bär", "Zebra"]

    def test_swedish_letters_after_z(self):
        words = ["Öl", "Zebra", "Äpple", "Ål", "Apple"]
        assert collate(words, "sv") == ["Apple", "Zebra", "Ål", "Äpple", "Öl"]

    def test_danish_letters_after_z(self):
        assert collate(["Å", "Ø", "Æ", "Z"], "da") == ["Z", "Æ", "Ø", "Å"]

    def test_turkish_dotless_i(self):
        words = ["ikinci", "ılık", "hoş", "İstanbul", "Işık"]
        assert collate(words, "tr") == ["hoş", "ılık", "Işık", "ikinci", "İstanbul"]

    def test_spanish_enye(self):
        assert collate(["oso", "ñu", "nube"], "es") == ["nube", "ñu", "oso"]

    def test_polish_letters(self):
        assert collate(["łza", "lody", "mama"], "pl") == ["lody", "łza", "mama"]

    def test_sharp_s_expands(self):
        collator = get_collator("de")
        assert collator.compare("Strasse", "Straße") == -1
        assert collator.compare("Straße", "Strasze") == -1

    def test_prefix_sorts_first(self):
        assert collate(["abc", "ab"], "en") == ["ab", "abc"]

    def test_compare(self):
        collator = get_collator("en")
        assert collator.compare("a", "b") == -1
        assert collator.compare("b", "a") == 1
        assert collator.compare("a", "a") == 0

    def test_keys_are_hex_strings(self):
        key = get_collator("tr").sort_key("Işık")
        assert key
        assert set(key) <= set("0123456789abcdef")

    def test_regional_locale_uses_language_tailoring(self):
        assert get_collator("de-AT").rules.id == "de"

    def test_unsupported_locale(self):
        with pytest.raises(UnsupportedLocale):
            get_collator("xx")

    def test_unknown_collation_id(self):
        with pytest.raises(LookupError):
            get_collation_rules("klingon")

    def test_satisfies_protocol(self):
        assert isinstance(get_collator("en"), TextCollator)


class TestFold:
    """Tests for search folding."""

    @pytest.mark.parametrize(
        "locale, text, expected",
        [
            ("en", "CAFÉ", "cafe"),
            ("de", "Straße", "strasse"),
            ("en", "Île-de-France", "ile-de-france"),
            ("tr", "İSTANBUL", "istanbul"),
            ("tr", "ISPARTA", "ısparta"),
            ("en", "İstanbul", "istanbul"),
            ("sv", "Åre", "åre"),
            ("en", "Åre", "are"),
            ("es", "Ñandú", "ñandu"),
        ],
    )
    def test_fold(self, locale, text, expected):
        assert get_collator(locale).fold(text) == expected

    def test_turkish_keeps_dotless_i_distinct(self):
        collator = get_collator("tr")
        assert collator.fold("ılık") != collator.fold("ilik")
        assert not collator.contains("Işık", "isik")
        assert get_collator("en").contains("Işık", "isik")

    def test_contains(self):
        assert get_collator("en").contains("Crème Brûlée", "creme")


class TestRegisterCollation:
    """Adding a tailoring is a table row."""

    def test_invalid_rank(self):
        with pytest.raises(ValueError):
            register_collation(CollationRules("bad", {"x": ("a", 8)}))

    def test_invalid_base(self):
        with pytest.raises(ValueError):
            register_collation(CollationRules("bad", {"x": ("ab", 1)}))
