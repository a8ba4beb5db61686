"""Locale-aware catalog filtering and sorting.

The engine loads the items of one call into a Polars frame holding, per item,
its original position, its collation keys and its folded search text. Keys
are hex strings (see collation.py), so Polars' ordinal string sort yields
the locale's collation order, and ``maintain_order=True`` makes every sort
stable.

The engine keeps no state between calls.

Usage:
    from l10ncatalog.query import CatalogQueryEngine

    engine = CatalogQueryEngine()
    visible = engine.run(items, Query("kamera", SortKey.PRICE, "de"))
"""

from __future__ import annotations

import logging
from typing import Sequence

import polars as pl

from l10ncatalog.collation import Collator, get_collator
from l10ncatalog.locales import LocaleRegistry, get_locale_registry
from l10ncatalog.models import CatalogItem, Query, SortKey

logger = logging.getLogger(__name__)


# Joins searchable fields so a term cannot match across two of them.
_FIELD_SEPARATOR = "\x00"


class CatalogQueryEngine:
    """Filters and sorts catalog items for a locale."""

    def __init__(self, registry: LocaleRegistry | None = None) -> None:
        self._registry = registry or get_locale_registry()

    def collator(self, locale: str) -> Collator:
        return get_collator(locale, self._registry)

    def _frame(self, items: Sequence[CatalogItem], locale: str) -> pl.DataFrame:
        collator = self.collator(locale)
        return pl.DataFrame(
            {
                "position": list(range(len(items))),
                "name_key": [collator.sort_key(item.name) for item in items],
                "category_key": [collator.sort_key(item.category) for item in items],
                "price": [float(item.price.amount) for item in items],
                "recommended": [item.recommended for item in items],
                "search_text": [
                    _FIELD_SEPARATOR.join(
                        collator.fold(text)
                        for text in (item.name, item.category, item.description_for(locale))
                    )
                    for item in items
                ],
            },
            schema={
                "position": pl.Int64,
                "name_key": pl.Utf8,
                "category_key": pl.Utf8,
                "price": pl.Float64,
                "recommended": pl.Boolean,
                "search_text": pl.Utf8,
            },
        )

    @staticmethod
    def _select(items: Sequence[CatalogItem], frame: pl.DataFrame) -> list[CatalogItem]:
        return [items[position] for position in frame.get_column("position").to_list()]

    def _filter_frame(self, frame: pl.DataFrame, search_term: str, locale: str) -> pl.DataFrame:
        term = self.collator(locale).fold(search_term.strip()).replace(_FIELD_SEPARATOR, "")
        if not term:
            return frame
        return frame.filter(pl.col("search_text").str.contains(term, literal=True))

    @staticmethod
    def _sort_frame(frame: pl.DataFrame, sort_key: SortKey) -> pl.DataFrame:
        if sort_key is SortKey.NAME:
            return frame.sort("name_key", maintain_order=True)
        if sort_key is SortKey.CATEGORY:
            return frame.sort("category_key", maintain_order=True)
        if sort_key is SortKey.PRICE:
            return frame.sort("price", maintain_order=True)
        return frame.sort("recommended", descending=True, maintain_order=True)

    def filter(
        self,
        items: Sequence[CatalogItem],
        search_term: str,
        locale: str,
    ) -> list[CatalogItem]:
        """Items whose name, category or description contains the term.

        Matching is case- and diacritic-insensitive under the locale's
        folding rules. An empty term matches everything. Catalog order is
        preserved.

        Raises:
            UnsupportedLocale: If the locale is not registered.
        """
        frame = self._filter_frame(self._frame(items, locale), search_term, locale)
        return self._select(items, frame)

    def sort(
        self,
        items: Sequence[CatalogItem],
        sort_key: SortKey | str,
        locale: str,
    ) -> list[CatalogItem]:
        """Stable sort by name or category (collation), price or recommended-first.

        Raises:
            UnsupportedLocale: If the locale is not registered.
        """
        frame = self._sort_frame(self._frame(items, locale), SortKey.parse(sort_key))
        return self._select(items, frame)

    def run(self, items: Sequence[CatalogItem], query: Query) -> list[CatalogItem]:
        """Filter then sort the items for a query.

        Raises:
            UnsupportedLocale: If the query locale is not registered.
            ValueError: If two items share an id.
        """
        _check_unique_ids(items)
        frame = self._frame(items, query.locale)
        frame = self._filter_frame(frame, query.search_term, query.locale)
        frame = self._sort_frame(frame, query.sort_key)
        logger.debug(
            f"Query {query.search_term!r} sorted by {query.sort_key.value} in "
            f"{query.locale}: {frame.height}/{len(items)} items"
        )
        return self._select(items, frame)


def _check_unique_ids(items: Sequence[CatalogItem]) -> None:
    seen: set[object] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate catalog item id: {item.id!r}")
        seen.add(item.id)
