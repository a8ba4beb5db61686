"""Shared fixtures: the eight-item sample catalog and core components."""

from __future__ import annotations

import pytest

from l10ncatalog.address import Address
from l10ncatalog.catalogs import BUILTIN_TRANSLATIONS
from l10ncatalog.locales import LocaleRegistry
from l10ncatalog.messages import TranslationResolver
from l10ncatalog.models import CatalogItem, Price
from l10ncatalog.plural import PluralRuleEngine

HEADPHONES_DE = (
    "Over-ear noise-cancelling headphones. Die "
    "Geschwindigkeitsbegrenzungsüberwachungskamera ist ein Beispiel für "
    "lange deutsche Wörter."
)


def _make_item(
    item_id: int,
    name: str,
    price: float = 10.0,
    category: str = "Electronics",
    recommended: bool = False,
    country: str = "US",
    description: str = "",
    overrides: dict[str, str] | None = None,
) -> CatalogItem:
    return CatalogItem(
        id=item_id,
        name=name,
        price=Price(price, "USD"),
        category=category,
        recommended=recommended,
        address=Address(country, "CA", "San Francisco", "200 Commerce St", "94108"),
        description=description or f"{name} description.",
        description_overrides=overrides or {},
    )


@pytest.fixture
def catalog() -> tuple[CatalogItem, ...]:
    return (
        CatalogItem(
            id=1,
            name="Wireless Mouse",
            price=Price(29.99, "USD"),
            category="Electronics",
            recommended=True,
            address=Address("US", "TX", "Austin", "123 Tech Blvd", "78701"),
            description="Ergonomic wireless mouse with long battery life.",
        ),
        CatalogItem(
            id=2,
            name="Mechanical Keyboard",
            price=Price(89.99, "USD"),
            category="Electronics",
            recommended=True,
            address=Address("DE", "Bavaria", "Munich", "45 Innovation Way", "80331"),
            description="Cherry MX switches. Sturdy build.",
        ),
        CatalogItem(
            id=3,
            name="Desk Lamp",
            price=Price(44.99, "USD"),
            category="Office",
            address=Address("JP", "Tokyo", "Shibuya-ku", "1-2-3 Shibuya", "150-0002"),
            description="LED desk lamp with adjustable brightness. Saves energy.",
        ),
        CatalogItem(
            id=4,
            name="Notebook Set",
            price=Price(12.99, "USD"),
            category="Office",
            address=Address("GB", "England", "London", "78 Station Road", "EC1A 1BB"),
            description="Set of 3 A4 notebooks. Recycled paper.",
        ),
        CatalogItem(
            id=5,
            name="Monitor Stand",
            price=Price(59.99, "USD"),
            category="Office",
            recommended=True,
            address=Address("JP", "東京都", "千代田区", "千代田1-1", "100-0001"),
            description="Height-adjustable monitor stand. Reduces neck strain.",
        ),
        CatalogItem(
            id=6,
            name="USB-C Hub",
            price=Price(49.99, "USD"),
            category="Electronics",
            address=Address("US", "CA", "San Francisco", "200 Commerce St", "94108"),
            description="7-in-1 USB-C hub with HDMI and SD card.",
        ),
        CatalogItem(
            id=7,
            name="Headphones",
            price=Price(129.99, "USD"),
            category="Electronics",
            recommended=True,
            address=Address("DE", "Berlin", "Berlin", "Kurfürstendamm 101", "10711"),
            description="Over-ear noise-cancelling headphones. Sturdy build.",
            description_overrides={"de": HEADPHONES_DE},
        ),
        CatalogItem(
            id=8,
            name="Webcam",
            price=Price(79.99, "USD"),
            category="Electronics",
            address=Address("FR", "Île-de-France", "Paris", "15 Rue de la Paix", "75002"),
            description="1080p webcam with built-in microphone.",
        ),
    )


@pytest.fixture
def registry() -> LocaleRegistry:
    return LocaleRegistry()


@pytest.fixture
def resolver(registry: LocaleRegistry) -> TranslationResolver:
    return TranslationResolver(BUILTIN_TRANSLATIONS, registry)


@pytest.fixture
def plural_engine(resolver: TranslationResolver) -> PluralRuleEngine:
    return PluralRuleEngine(resolver)


@pytest.fixture
def make_item():
    """Factory for ad-hoc catalog items."""
    return _make_item
