"""Registry of supported locales and their metadata.

Each locale is a table row naming its display name, text direction, plural
rule set, collation and script. Adding a locale means adding a row here (and
its translation table), never a code branch in a formatter.

Usage:
    from l10ncatalog.locales import get_locale_registry

    registry = get_locale_registry()
    registry.require("de").plural_rule_set    # "one_other"
    registry.fallback_chain("de-AT")          # ["de-AT", "de", "en"]
    registry.require("xx")                    # raises UnsupportedLocale
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from l10ncatalog.errors import UnsupportedLocale
from l10ncatalog.protocols import LocaleInfo, TextDirection

logger = logging.getLogger(__name__)


DEFAULT_LOCALE = "en"

# Scripts written without spaces between words.
UNSEGMENTED_SCRIPTS: frozenset[str] = frozenset({
    "Jpan", "Hani", "Hans", "Hant", "Thai", "Laoo", "Khmr", "Mymr", "Tibt",
})


@dataclass(frozen=True)
class LocaleDefinition:
    """Metadata for one supported locale.

    Attributes:
        code: Normalized BCP 47 tag (e.g., "de", "en-GB")
        display_name: Name of the locale in its own language
        direction: Text direction
        plural_rule_set: Identifier of the plural rule set (see plural.py)
        collation: Identifier of the collation tailoring (see collation.py)
        script: ISO 15924 script code of the locale's writing system
    """
    code: str
    display_name: str
    direction: TextDirection = TextDirection.LTR
    plural_rule_set: str = "one_other"
    collation: str = "root"
    script: str = "Latn"

    @property
    def info(self) -> LocaleInfo:
        return LocaleInfo.parse(self.code)

    @property
    def language(self) -> str:
        return self.info.language

    @property
    def whitespace_segmented(self) -> bool:
        """Whether words in this locale's script are separated by whitespace."""
        return self.script not in UNSEGMENTED_SCRIPTS


BUILTIN_LOCALES: tuple[LocaleDefinition, ...] = (
    LocaleDefinition("en", "English"),
    LocaleDefinition("en-GB", "English (United Kingdom)"),
    LocaleDefinition("en-IN", "English (India)"),
    LocaleDefinition("de", "Deutsch", collation="de"),
    LocaleDefinition("de-AT", "Deutsch (Österreich)", collation="de"),
    LocaleDefinition("de-CH", "Deutsch (Schweiz)", collation="de"),
    LocaleDefinition("fr", "Français", plural_rule_set="french"),
    LocaleDefinition("es", "Español", plural_rule_set="spanish", collation="es"),
    LocaleDefinition("tr", "Türkçe", collation="tr"),
    LocaleDefinition("sv", "Svenska", collation="sv"),
    LocaleDefinition("da", "Dansk", collation="da"),
    LocaleDefinition("pl", "Polski", plural_rule_set="polish", collation="pl"),
    LocaleDefinition("cs", "Čeština", plural_rule_set="czech", collation="cs"),
    LocaleDefinition("ru", "Русский", plural_rule_set="east_slavic", script="Cyrl"),
    LocaleDefinition(
        "ar", "العربية", direction=TextDirection.RTL,
        plural_rule_set="arabic", script="Arab",
    ),
    LocaleDefinition(
        "he", "עברית", direction=TextDirection.RTL,
        plural_rule_set="hebrew", script="Hebr",
    ),
    LocaleDefinition("ja", "日本語", plural_rule_set="none", script="Jpan"),
    LocaleDefinition("zh", "中文", plural_rule_set="none", script="Hans"),
)


class LocaleRegistry:
    """Static table of supported locales.

    Lookups are by normalized tag, so "de_at", "de-AT" and "DE-at" all find
    the same row. A locale is supported only if its exact tag is registered.
    """

    def __init__(
        self,
        locales: Iterable[LocaleDefinition] = BUILTIN_LOCALES,
        default_locale: str = DEFAULT_LOCALE,
    ) -> None:
        self._locales: dict[str, LocaleDefinition] = {}
        for definition in locales:
            self.register(definition)

        default = self.normalize(default_locale)
        if default not in self._locales:
            raise UnsupportedLocale(default_locale, self.codes())
        self._default = default

    @staticmethod
    def normalize(locale: str | LocaleInfo) -> str:
        """Normalize a locale code or LocaleInfo to its BCP 47 tag."""
        if isinstance(locale, LocaleInfo):
            return locale.tag
        try:
            return LocaleInfo.parse(locale).tag
        except (ValueError, AttributeError):
            return str(locale)

    def register(self, definition: LocaleDefinition) -> None:
        """Add or replace a locale row."""
        code = self.normalize(definition.code)
        if code != definition.code:
            raise ValueError(
                f"Locale code {definition.code!r} is not normalized (expected {code!r})"
            )
        self._locales[code] = definition

    @property
    def default_locale(self) -> str:
        return self._default

    def get(self, locale: str | LocaleInfo) -> LocaleDefinition | None:
        return self._locales.get(self.normalize(locale))

    def require(self, locale: str | LocaleInfo) -> LocaleDefinition:
        """Get a locale row or fail.

        Raises:
            UnsupportedLocale: If the locale is not registered.
        """
        definition = self.get(locale)
        if definition is None:
            raise UnsupportedLocale(str(locale), self.codes())
        return definition

    def is_supported(self, locale: str | LocaleInfo) -> bool:
        return self.get(locale) is not None

    def codes(self) -> list[str]:
        return list(self._locales)

    def fallback_chain(self, locale: str | LocaleInfo) -> list[str]:
        """Get the ordered locales tried when resolving a message.

        The chain is exact locale, then its base language, then the default
        locale, without duplicates.

        Raises:
            UnsupportedLocale: If the locale is not registered.
        """
        definition = self.require(locale)
        chain = [definition.code]
        base = definition.language
        if base not in chain:
            chain.append(base)
        if self._default not in chain:
            chain.append(self._default)
        return chain

    def __contains__(self, locale: object) -> bool:
        return isinstance(locale, (str, LocaleInfo)) and self.is_supported(locale)

    def __iter__(self) -> Iterator[LocaleDefinition]:
        return iter(self._locales.values())

    def __len__(self) -> int:
        return len(self._locales)


_locale_registry = LocaleRegistry()


def get_locale_registry() -> LocaleRegistry:
    """Get the global registry of built-in locales."""
    return _locale_registry
