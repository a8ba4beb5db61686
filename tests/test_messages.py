"""Tests for locales and translation resolution.

Tests cover:
- Locale tag parsing and registry lookups
- Fallback chains
- Placeholder substitution
- Missing translations
"""

from __future__ import annotations

import logging

import pytest

from l10ncatalog.catalogs import BUILTIN_TRANSLATIONS, MESSAGE_KEYS, builtin_resolver
from l10ncatalog.errors import UnsupportedLocale
from l10ncatalog.locales import BUILTIN_LOCALES, LocaleDefinition, LocaleRegistry
from l10ncatalog.messages import TranslationResolver, placeholders, substitute
from l10ncatalog.protocols import LocaleInfo, MessageResolver, TextDirection


# ==============================================================================
# LocaleInfo / LocaleRegistry
# ==============================================================================

class TestLocaleInfo:
    """Tests for locale tag parsing."""

    def test_parse_region_with_underscore(self):
        info = LocaleInfo.parse("de_at")
        assert info.language == "de"
        assert info.region == "AT"
        assert info.tag == "de-AT"

    def test_parse_script(self):
        info = LocaleInfo.parse("zh-hant-tw")
        assert info.script == "Hant"
        assert info.region == "TW"
        assert info.tag == "zh-Hant-TW"
        assert info.base.tag == "zh"

    @pytest.mark.parametrize(
        "tag", ["", "  ", "12", "-", "en-QQQQQ", "en-abc", "en-GB-US", "zh-TW-Hant", "de-1996"]
    )
    def test_parse_invalid(self, tag):
        with pytest.raises(ValueError):
            LocaleInfo.parse(tag)


class TestLocaleRegistry:
    """Tests for the locale table."""

    def test_builtin_metadata(self, registry):
        assert registry.require("ar").direction == TextDirection.RTL
        assert registry.require("he").direction == TextDirection.RTL
        assert registry.require("ru").plural_rule_set == "east_slavic"
        assert registry.require("tr").collation == "tr"
        assert registry.require("ja").whitespace_segmented is False
        assert registry.require("de").whitespace_segmented is True

    def test_lookup_is_normalized(self, registry):
        assert registry.require("DE_at").code == "de-AT"
        assert "en-gb" in registry
        assert "xx" not in registry

    def test_unregistered_locale_raises(self, registry):
        with pytest.raises(UnsupportedLocale) as exc_info:
            registry.require("xx")
        assert exc_info.value.locale == "xx"
        assert "en" in exc_info.value.supported

    def test_unsupported_locale_is_lookup_error(self, registry):
        with pytest.raises(LookupError):
            registry.require("pt-BR")

    def test_region_of_unregistered_language_is_unsupported(self, registry):
        """A region of a supported language is not itself supported."""
        assert not registry.is_supported("de-LU")

    @pytest.mark.parametrize("tag", ["en-QQQQQ", "en-variant", "de-AT-XX", "de-abc"])
    def test_unrecognized_subtags_are_unsupported(self, registry, tag):
        """Extra subtags never collapse a tag onto a registered locale."""
        assert not registry.is_supported(tag)
        with pytest.raises(UnsupportedLocale):
            registry.require(tag)

    def test_fallback_chain(self, registry):
        assert registry.fallback_chain("de-AT") == ["de-AT", "de", "en"]
        assert registry.fallback_chain("de") == ["de", "en"]
        assert registry.fallback_chain("en-GB") == ["en-GB", "en"]
        assert registry.fallback_chain("en") == ["en"]

    def test_every_locale_chain_ends_at_default(self, registry):
        for definition in registry:
            assert registry.fallback_chain(definition.code)[-1] == "en"

    def test_custom_default_locale(self):
        registry = LocaleRegistry(BUILTIN_LOCALES, default_locale="de")
        assert registry.fallback_chain("fr") == ["fr", "de"]

    def test_default_locale_must_be_registered(self):
        with pytest.raises(UnsupportedLocale):
            LocaleRegistry([LocaleDefinition("de", "Deutsch")], default_locale="en")

    def test_register_rejects_unnormalized_code(self, registry):
        with pytest.raises(ValueError):
            registry.register(LocaleDefinition("pt_br", "Português"))

    def test_register_new_locale(self, registry):
        registry.register(LocaleDefinition("pt-BR", "Português (Brasil)", plural_rule_set="french"))
        assert registry.fallback_chain("pt-br") == ["pt-BR", "pt", "en"]


# ==============================================================================
# Placeholder substitution
# ==============================================================================

class TestSubstitute:
    """Tests for {{name}} placeholder handling."""

    def test_substitutes_named_placeholders(self):
        assert substitute("Hello, {{name}}!", {"name": "Ada"}) == "Hello, Ada!"

    def test_missing_parameter_left_verbatim(self):
        assert substitute("{{count}} of {{total}}", {"count": 3}) == "3 of {{total}}"

    def test_falsy_parameters_are_substituted(self):
        assert substitute("{{count}} items{{suffix}}", {"count": 0, "suffix": ""}) == "0 items"

    def test_no_params_returns_template(self):
        assert substitute("{{x}}", None) == "{{x}}"

    def test_inner_whitespace(self):
        assert substitute("{{ name }}", {"name": "Ada"}) == "Ada"

    def test_placeholders(self):
        assert placeholders("{{a}} and {{ b }}") == ["a", "b"]


# ==============================================================================
# TranslationResolver
# ==============================================================================

class TestTranslationResolver:
    """Tests for key resolution with the fallback chain."""

    @pytest.fixture
    def tables(self):
        return {
            "en": {"greeting": "Hello, {{name}}!", "only_en": "English only"},
            "de": {"greeting": "Hallo, {{name}}!"},
            "de-AT": {"greeting": "Servus, {{name}}!"},
        }

    def test_exact_locale(self, tables):
        resolver = TranslationResolver(tables)
        assert resolver.resolve("greeting", "de-AT", {"name": "Ada"}) == "Servus, Ada!"

    def test_base_language_fallback(self, tables):
        resolver = TranslationResolver(tables)
        result = resolver.resolve_message("greeting", "de-CH", {"name": "Ada"})
        assert result.message == "Hallo, Ada!"
        assert result.locale == "de"
        assert result.fallback is True
        assert result.missing is False

    def test_default_locale_fallback(self, tables):
        resolver = TranslationResolver(tables)
        result = resolver.resolve_message("only_en", "de-AT")
        assert result.message == "English only"
        assert result.locale == "en"

    def test_missing_key_returns_key(self, tables, caplog):
        resolver = TranslationResolver(tables)
        with caplog.at_level(logging.WARNING, logger="l10ncatalog.messages"):
            result = resolver.resolve_message("nope", "de")
        assert result.message == "nope"
        assert result.missing is True
        assert result.locale is None
        assert "nope" in caplog.text

    def test_unsupported_locale_raises(self, tables):
        resolver = TranslationResolver(tables)
        with pytest.raises(UnsupportedLocale):
            resolver.resolve("greeting", "xx")

    def test_has_template(self, tables):
        resolver = TranslationResolver(tables)
        assert resolver.has_template("only_en", "de")
        assert not resolver.has_template("nope", "de")

    def test_table_codes_are_normalized(self):
        resolver = TranslationResolver({"de_at": {"k": "v"}, "en": {}})
        assert resolver.resolve("k", "de-AT") == "v"
        assert sorted(resolver.locales()) == ["de-AT", "en"]

    def test_tables_are_not_modified(self, tables):
        snapshot = {k: dict(v) for k, v in tables.items()}
        TranslationResolver(tables).resolve("greeting", "de", {"name": "Ada"})
        assert tables == snapshot

    def test_satisfies_protocol(self, resolver):
        assert isinstance(resolver, MessageResolver)


class TestBuiltinTranslations:
    """Tests for the built-in message tables."""

    def test_every_language_has_every_key(self):
        for locale, table in BUILTIN_TRANSLATIONS.items():
            for key in MESSAGE_KEYS:
                assert key in table, f"{locale} is missing {key}"

    def test_every_registered_locale_resolves_every_key(self, registry):
        resolver = builtin_resolver(registry)
        for definition in registry:
            for key in MESSAGE_KEYS:
                assert not resolver.resolve_message(key, definition.code).missing

    def test_regional_locale_uses_base_table(self):
        resolver = builtin_resolver()
        assert resolver.resolve("catalog.title", "de-CH") == "Produktkatalog"
