"""View models consumed by the presentation shell.

``CatalogPresenter.present`` is the single entry point of the core: given a
catalog and a query it runs the query engine, formats every visible item for
the query's locale and pluralizes the result count. The shell renders the
returned values as-is.

Views are pure functions of (catalog, search term, sort key, locale) and are
memoized in a small LRU cache keyed by exactly those four values.

Usage:
    from l10ncatalog.views import CatalogPresenter

    presenter = CatalogPresenter()
    view = presenter.present(items, Query(search_term="", sort_key="price", locale="de"))
    view.result_count          # "8 Artikel gefunden"
    view.items[0].formatted_price
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Hashable, Mapping, Sequence

from l10ncatalog import casing
from l10ncatalog.address import AddressFormatter
from l10ncatalog.catalogs import BUILTIN_TRANSLATIONS, ITEMS_FOUND
from l10ncatalog.config import L10nConfig
from l10ncatalog.currency import CurrencyFormatter
from l10ncatalog.locales import BUILTIN_LOCALES, LocaleRegistry
from l10ncatalog.messages import TranslationResolver
from l10ncatalog.models import CatalogItem, Query
from l10ncatalog.plural import PluralRuleEngine
from l10ncatalog.protocols import TextDirection
from l10ncatalog.query import CatalogQueryEngine
from l10ncatalog.truncation import TextTruncator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemView:
    """Formatted fields of one visible catalog item."""
    item_id: int
    formatted_name: str
    formatted_price: str
    formatted_address: str
    formatted_description: str
    address_verified: bool
    formatted_category: str
    recommended_label: str
    description_truncated: bool = False
    description_word_unsplittable: bool = False


@dataclass(frozen=True)
class CatalogView:
    """Everything the shell needs to render one catalog page."""
    items: tuple[ItemView, ...]
    result_count: str
    locale: str
    direction: TextDirection

    def __len__(self) -> int:
        return len(self.items)


class _ViewCache:
    """LRU cache of catalog views."""

    def __init__(self, max_size: int) -> None:
        self.max_size = max_size
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[Hashable, CatalogView] = OrderedDict()
        self._lock = threading.RLock()

    def get(self, key: Hashable) -> CatalogView | None:
        with self._lock:
            view = self._entries.get(key)
            if view is None:
                self.misses += 1
                return None
            self.hits += 1
            self._entries.move_to_end(key)
            return view

    def set(self, key: Hashable, view: CatalogView) -> None:
        if self.max_size <= 0:
            return
        with self._lock:
            self._entries[key] = view
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)


class CatalogPresenter:
    """Turns (catalog, query) into a CatalogView.

    Args:
        config: Presentation settings (defaults to L10nConfig())
        registry: Locale registry (defaults to the built-in locales with the
            config's default locale)
        translations: Translation tables (defaults to the built-in tables)
    """

    def __init__(
        self,
        config: L10nConfig | None = None,
        registry: LocaleRegistry | None = None,
        translations: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        self.config = config or L10nConfig()
        self.registry = registry or LocaleRegistry(BUILTIN_LOCALES, self.config.default_locale)
        self.resolver = TranslationResolver(
            BUILTIN_TRANSLATIONS if translations is None else translations,
            self.registry,
        )
        self.currency = CurrencyFormatter(self.registry)
        self.plural = PluralRuleEngine(self.resolver, self.registry, self.currency)
        self.addresses = AddressFormatter(self.registry)
        self.truncator = TextTruncator(self.registry, self.config.ellipsis)
        self.engine = CatalogQueryEngine(self.registry)
        self._cache = _ViewCache(self.config.cache_size)

    @property
    def cache_info(self) -> dict[str, int]:
        return {
            "hits": self._cache.hits,
            "misses": self._cache.misses,
            "size": len(self._cache),
            "max_size": self._cache.max_size,
        }

    def clear_cache(self) -> None:
        self._cache.clear()

    def item_view(self, item: CatalogItem, locale: str) -> ItemView:
        """Format one item for a locale.

        Raises:
            UnsupportedLocale: If the locale is not registered.
            InvalidAmount: If the price cannot be formatted.
        """
        definition = self.registry.require(locale)
        price = self.currency.format(
            item.price.amount,
            item.price.currency,
            definition.code,
            allow_negative=self.config.allow_negative_prices,
        )
        address = self.addresses.format(item.address, definition.code)
        description = self.truncator.truncate(
            item.description_for(definition.code),
            self.config.description_max_length,
            definition.code,
        )
        label_key = "catalog.recommended" if item.recommended else "catalog.not_recommended"

        return ItemView(
            item_id=item.id,
            formatted_name=item.name,
            formatted_price=price.formatted,
            formatted_address=address.text,
            formatted_description=description.text,
            address_verified=address.verified,
            formatted_category=casing.capitalize(item.category, definition.language),
            recommended_label=self.resolver.resolve(label_key, definition.code),
            description_truncated=description.truncated,
            description_word_unsplittable=description.word_unsplittable,
        )

    def present(self, catalog: Sequence[CatalogItem], query: Query) -> CatalogView:
        """Filter, sort and format a catalog for a query.

        Raises:
            UnsupportedLocale: If the query locale is not registered.
            InvalidAmount: If an item's price cannot be formatted.
            ValueError: If two items share an id.
        """
        definition = self.registry.require(query.locale)
        locale = definition.code
        key = (tuple(catalog), query.search_term, query.sort_key, locale)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Catalog view cache hit for {locale} ({query.sort_key.value})")
            return cached

        visible = self.engine.run(catalog, Query(query.search_term, query.sort_key, locale))
        view = CatalogView(
            items=tuple(self.item_view(item, locale) for item in visible),
            result_count=self.plural.pluralize(len(visible), locale, ITEMS_FOUND).message,
            locale=locale,
            direction=definition.direction,
        )
        self._cache.set(key, view)
        return view
