"""Catalog domain model.

Catalog items are locale-invariant: one canonical name, price, category and
description, plus optional per-locale description overrides. All types are
frozen and hashable, so a catalog (a tuple of items) can key a cache.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from l10ncatalog.address import Address
from l10ncatalog.locales import DEFAULT_LOCALE, LocaleRegistry
from l10ncatalog.protocols import LocaleInfo


class SortKey(str, Enum):
    """Sort orders offered by the catalog."""
    NAME = "name"
    CATEGORY = "category"
    PRICE = "price"
    RECOMMENDED = "recommended"

    @classmethod
    def parse(cls, value: "str | SortKey") -> "SortKey":
        """Parse a sort key, accepting "liked" for recommended-first."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized == "liked":
            return cls.RECOMMENDED
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(k.value for k in cls)
            raise ValueError(f"Unknown sort key {value!r} (valid: {valid})") from None


@dataclass(frozen=True)
class Price:
    """An amount in an ISO 4217 currency.

    Floats are converted through their shortest repr, so 29.99 is stored as
    Decimal("29.99") rather than its binary approximation.
    """
    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        amount = self.amount
        if isinstance(amount, (int, float)) and not isinstance(amount, bool):
            object.__setattr__(self, "amount", Decimal(repr(amount)))
        elif isinstance(amount, str):
            object.__setattr__(self, "amount", Decimal(amount))
        object.__setattr__(self, "currency", self.currency.strip().upper())


@dataclass(frozen=True)
class CatalogItem:
    """One product of the catalog.

    Attributes:
        id: Unique, immutable identifier
        name: Product name
        price: Price with currency
        category: Category name
        recommended: Whether the item is recommended
        address: Address the item ships from
        description: Canonical description, always present
        description_overrides: Locale tag -> description, stored as sorted pairs
    """
    id: int
    name: str
    price: Price
    category: str
    address: Address
    description: str
    recommended: bool = False
    description_overrides: tuple[tuple[str, str], ...] = field(default=())

    def __post_init__(self) -> None:
        overrides = self.description_overrides
        if isinstance(overrides, Mapping):
            overrides = overrides.items()
        normalized = {LocaleRegistry.normalize(tag): text for tag, text in overrides}
        object.__setattr__(self, "description_overrides", tuple(sorted(normalized.items())))

    @property
    def overrides(self) -> dict[str, str]:
        return dict(self.description_overrides)

    def description_for(self, locale: str | LocaleInfo) -> str:
        """Description for a locale.

        Uses the override for the exact locale, then for its base language,
        then the canonical description.
        """
        overrides = self.overrides
        if not overrides:
            return self.description
        info = locale if isinstance(locale, LocaleInfo) else LocaleInfo.parse(locale)
        for tag in (info.tag, info.language):
            if tag in overrides:
                return overrides[tag]
        return self.description

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CatalogItem":
        """Build an item from plain data (e.g., parsed JSON).

        Expected keys: id, name, price, currency (default "USD"), category,
        recommended, address (mapping), description, description_overrides.
        """
        address = data.get("address") or {}
        return cls(
            id=data["id"],
            name=data["name"],
            price=Price(data["price"], data.get("currency", "USD")),
            category=data["category"],
            recommended=bool(data.get("recommended", False)),
            address=Address(
                country_code=address["country_code"],
                region=address.get("region", ""),
                locality=address.get("locality", ""),
                street=address.get("street", ""),
                postal_code=address.get("postal_code", ""),
            ),
            description=data["description"],
            description_overrides=data.get("description_overrides") or {},
        )


@dataclass(frozen=True)
class Query:
    """Search term, sort order and display locale of one catalog view."""
    search_term: str = ""
    sort_key: SortKey = SortKey.NAME
    locale: str = DEFAULT_LOCALE

    def __post_init__(self) -> None:
        object.__setattr__(self, "sort_key", SortKey.parse(self.sort_key))
