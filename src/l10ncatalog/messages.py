"""Translation resolution with fallback chain and placeholder substitution.

Templates use ``{{name}}`` placeholders. A placeholder without a matching
parameter is left as-is, so a partially parameterized message stays legible.

Usage:
    from l10ncatalog.messages import TranslationResolver

    resolver = TranslationResolver({
        "en": {"catalog.greeting": "Hello, {{name}}!"},
        "de": {"catalog.greeting": "Hallo, {{name}}!"},
    })
    resolver.resolve("catalog.greeting", "de-AT", {"name": "Ada"})
    # -> "Hallo, Ada!"  (de-AT -> de)
    resolver.resolve("catalog.unknown", "de")
    # -> "catalog.unknown"  (logged as missing)
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from l10ncatalog.locales import LocaleRegistry, get_locale_registry
from l10ncatalog.protocols import ResolvedMessage

logger = logging.getLogger(__name__)


TranslationTable = Mapping[str, Mapping[str, str]]

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def substitute(template: str, params: Mapping[str, Any] | None) -> str:
    """Replace ``{{name}}`` placeholders with parameter values.

    Placeholders with no matching parameter are kept verbatim.

    Example:
        substitute("{{count}} of {{total}}", {"count": 0})
        # -> "0 of {{total}}"
    """
    if not params:
        return template

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in params:
            return str(params[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, template)


def placeholders(template: str) -> list[str]:
    """List placeholder names in a template, in order of appearance."""
    return PLACEHOLDER_PATTERN.findall(template)


class TranslationResolver:
    """Resolves message keys against per-locale translation tables.

    Fallback order: exact locale, base language, default locale, and finally
    the literal key. The tables are read, never modified.
    """

    def __init__(
        self,
        tables: TranslationTable,
        registry: LocaleRegistry | None = None,
    ) -> None:
        self._registry = registry or get_locale_registry()
        self._tables: dict[str, Mapping[str, str]] = {
            self._registry.normalize(code): table for code, table in tables.items()
        }

    @property
    def registry(self) -> LocaleRegistry:
        return self._registry

    def fallback_chain(self, locale: str) -> list[str]:
        """Locales tried for ``locale``, most specific first."""
        return self._registry.fallback_chain(locale)

    def lookup(self, key: str, locale: str) -> tuple[str, str] | None:
        """Find the raw template for a key.

        Returns:
            (locale that supplied the template, template), or None if no
            locale in the chain has the key.

        Raises:
            UnsupportedLocale: If the locale is not registered.
        """
        for candidate in self.fallback_chain(locale):
            table = self._tables.get(candidate)
            if table is not None and key in table:
                return candidate, table[key]
        return None

    def has_template(self, key: str, locale: str) -> bool:
        return self.lookup(key, locale) is not None

    def resolve_message(
        self,
        key: str,
        locale: str,
        params: Mapping[str, Any] | None = None,
    ) -> ResolvedMessage:
        """Resolve a key and report how it was resolved."""
        requested = self._registry.normalize(locale)
        found = self.lookup(key, locale)

        if found is None:
            logger.warning(f"Message not found: {key} (locale: {requested})")
            return ResolvedMessage(
                key=key,
                message=key,
                locale=None,
                fallback=True,
                missing=True,
            )

        used, template = found
        if used != requested:
            logger.debug(f"Message {key} for {requested} resolved from {used}")
        return ResolvedMessage(
            key=key,
            message=substitute(template, params),
            locale=used,
            fallback=used != requested,
        )

    def resolve(
        self,
        key: str,
        locale: str,
        params: Mapping[str, Any] | None = None,
    ) -> str:
        """Resolve a key to a substituted message string."""
        return self.resolve_message(key, locale, params).message

    def locales(self) -> list[str]:
        """Locales that have a translation table."""
        return list(self._tables)
