"""Locale-aware formatting core for a product catalog.

Turns a locale-invariant catalog into localized view values:

- Translation resolution with fallback chain (exact -> base language -> "en")
- CLDR plural rules (2 to 6 categories per locale)
- Country-driven postal address layout
- Currency formatting (locale punctuation, currency symbol placement)
- Grapheme-safe, word-aware truncation
- Collation-aware search and stable sorting

Example:
    from l10ncatalog import CatalogPresenter, Query

    presenter = CatalogPresenter()
    view = presenter.present(items, Query("lamp", "price", "de"))
    view.result_count                 # "1 Artikel gefunden"
    view.items[0].formatted_price     # "$44,99"
"""

from l10ncatalog.address import (
    Address,
    AddressFormat,
    AddressFormatter,
    component_order,
    format_address,
    register_address_format,
)
from l10ncatalog.casing import capitalize, lower, upper
from l10ncatalog.catalogs import BUILTIN_TRANSLATIONS, ITEMS_FOUND, builtin_resolver
from l10ncatalog.collation import Collator, CollationRules, get_collator, register_collation
from l10ncatalog.config import L10nConfig, load_config
from l10ncatalog.currency import CurrencyFormatter, format_currency
from l10ncatalog.errors import (
    ConfigError,
    InvalidAmount,
    InvalidLength,
    L10nError,
    TranslationLoadError,
    UnsupportedLocale,
)
from l10ncatalog.loader import load_translation_file, load_translations, merge_translations
from l10ncatalog.locales import (
    BUILTIN_LOCALES,
    DEFAULT_LOCALE,
    LocaleDefinition,
    LocaleRegistry,
    get_locale_registry,
)
from l10ncatalog.messages import TranslationResolver
from l10ncatalog.models import CatalogItem, Price, Query, SortKey
from l10ncatalog.plural import PluralRuleEngine, get_plural_category
from l10ncatalog.protocols import (
    FormattedAddress,
    FormattedPrice,
    LocaleInfo,
    PluralCategory,
    PluralizedMessage,
    ResolvedMessage,
    TextDirection,
    TruncatedText,
)
from l10ncatalog.query import CatalogQueryEngine
from l10ncatalog.segmentation import grapheme_length, graphemes
from l10ncatalog.truncation import TextTruncator, truncate
from l10ncatalog.views import CatalogPresenter, CatalogView, ItemView

__version__ = "0.1.0"

__all__ = [
    # Errors
    "L10nError",
    "UnsupportedLocale",
    "InvalidAmount",
    "InvalidLength",
    "ConfigError",
    "TranslationLoadError",
    # Types
    "LocaleInfo",
    "PluralCategory",
    "TextDirection",
    "ResolvedMessage",
    "PluralizedMessage",
    "FormattedPrice",
    "FormattedAddress",
    "TruncatedText",
    # Config
    "L10nConfig",
    "load_config",
    # Locales
    "BUILTIN_LOCALES",
    "DEFAULT_LOCALE",
    "LocaleDefinition",
    "LocaleRegistry",
    "get_locale_registry",
    # Messages
    "TranslationResolver",
    "BUILTIN_TRANSLATIONS",
    "ITEMS_FOUND",
    "builtin_resolver",
    "load_translation_file",
    "load_translations",
    "merge_translations",
    # Plurals
    "PluralRuleEngine",
    "get_plural_category",
    # Formatters
    "Address",
    "AddressFormat",
    "AddressFormatter",
    "component_order",
    "format_address",
    "register_address_format",
    "CurrencyFormatter",
    "format_currency",
    "TextTruncator",
    "truncate",
    "graphemes",
    "grapheme_length",
    "capitalize",
    "lower",
    "upper",
    # Collation & query
    "Collator",
    "CollationRules",
    "get_collator",
    "register_collation",
    "CatalogQueryEngine",
    # Model & views
    "CatalogItem",
    "Price",
    "Query",
    "SortKey",
    "CatalogPresenter",
    "CatalogView",
    "ItemView",
]
