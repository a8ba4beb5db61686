"""Built-in translation tables for the catalog's UI messages.

One table per registered language. Regional locales (en-GB, de-AT, ...) have
no table of their own and resolve through their base language.

Every table defines ``catalog.items_found.<category>`` for each plural
category its locale's rule set can produce.
"""

from __future__ import annotations

from typing import Mapping

from l10ncatalog.messages import TranslationResolver
from l10ncatalog.locales import LocaleRegistry

ITEMS_FOUND = "catalog.items_found"

MESSAGE_KEYS: tuple[str, ...] = (
    "catalog.title",
    "catalog.language",
    "catalog.search",
    "catalog.sort.name",
    "catalog.sort.category",
    "catalog.sort.price",
    "catalog.sort.recommended",
    "catalog.recommended",
    "catalog.not_recommended",
    "catalog.field.category",
    "catalog.field.ships_from",
    "catalog.field.description",
)


def _table(
    title: str,
    language: str,
    search: str,
    sort: tuple[str, str, str, str],
    recommended: tuple[str, str],
    fields: tuple[str, str, str],
    items_found: Mapping[str, str],
) -> dict[str, str]:
    values = (title, language, search, *sort, *recommended, *fields)
    table = dict(zip(MESSAGE_KEYS, values))
    table.update({f"{ITEMS_FOUND}.{category}": text for category, text in items_found.items()})
    return table


BUILTIN_TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": _table(
        "Product Catalog", "Language", "Search products...",
        ("Sort by name", "Sort by category", "Sort by price", "Recommended first"),
        ("Recommended", "Not recommended"),
        ("Category", "Ships from", "Description"),
        {"one": "{{count}} item found", "other": "{{count}} items found"},
    ),
    "de": _table(
        "Produktkatalog", "Sprache", "Produkte suchen...",
        ("Nach Name sortieren", "Nach Kategorie sortieren", "Nach Preis sortieren",
         "Empfohlene zuerst"),
        ("Empfohlen", "Nicht empfohlen"),
        ("Kategorie", "Versand aus", "Beschreibung"),
        {"one": "{{count}} Artikel gefunden", "other": "{{count}} Artikel gefunden"},
    ),
    "fr": _table(
        "Catalogue de produits", "Langue", "Rechercher des produits...",
        ("Trier par nom", "Trier par catégorie", "Trier par prix", "Recommandés d’abord"),
        ("Recommandé", "Non recommandé"),
        ("Catégorie", "Expédié depuis", "Description"),
        {
            "one": "{{count}} article trouvé",
            "many": "{{count}} d’articles trouvés",
            "other": "{{count}} articles trouvés",
        },
    ),
    "es": _table(
        "Catálogo de productos", "Idioma", "Buscar productos...",
        ("Ordenar por nombre", "Ordenar por categoría", "Ordenar por precio",
         "Recomendados primero"),
        ("Recomendado", "No recomendado"),
        ("Categoría", "Enviado desde", "Descripción"),
        {
            "one": "{{count}} artículo encontrado",
            "many": "{{count}} de artículos encontrados",
            "other": "{{count}} artículos encontrados",
        },
    ),
    "tr": _table(
        "Ürün Kataloğu", "Dil", "Ürün ara...",
        ("Ada göre sırala", "Kategoriye göre sırala", "Fiyata göre sırala",
         "Önerilenler önce"),
        ("Önerilen", "Önerilmeyen"),
        ("Kategori", "Gönderim yeri", "Açıklama"),
        {"one": "{{count}} ürün bulundu", "other": "{{count}} ürün bulundu"},
    ),
    "sv": _table(
        "Produktkatalog", "Språk", "Sök produkter...",
        ("Sortera efter namn", "Sortera efter kategori", "Sortera efter pris",
         "Rekommenderade först"),
        ("Rekommenderad", "Inte rekommenderad"),
        ("Kategori", "Skickas från", "Beskrivning"),
        {"one": "{{count}} artikel hittades", "other": "{{count}} artiklar hittades"},
    ),
    "da": _table(
        "Produktkatalog", "Sprog", "Søg efter produkter...",
        ("Sortér efter navn", "Sortér efter kategori", "Sortér efter pris",
         "Anbefalede først"),
        ("Anbefalet", "Ikke anbefalet"),
        ("Kategori", "Sendes fra", "Beskrivelse"),
        {"one": "{{count}} vare fundet", "other": "{{count}} varer fundet"},
    ),
    "pl": _table(
        "Katalog produktów", "Język", "Szukaj produktów...",
        ("Sortuj według nazwy", "Sortuj według kategorii", "Sortuj według ceny",
         "Najpierw polecane"),
        ("Polecane", "Niepolecane"),
        ("Kategoria", "Wysyłka z", "Opis"),
        {
            "one": "Znaleziono {{count}} produkt",
            "few": "Znaleziono {{count}} produkty",
            "many": "Znaleziono {{count}} produktów",
            "other": "Znaleziono {{count}} produktu",
        },
    ),
    "cs": _table(
        "Katalog produktů", "Jazyk", "Hledat produkty...",
        ("Řadit podle názvu", "Řadit podle kategorie", "Řadit podle ceny",
         "Doporučené nejdříve"),
        ("Doporučeno", "Nedoporučeno"),
        ("Kategorie", "Odesláno z", "Popis"),
        {
            "one": "Nalezena {{count}} položka",
            "few": "Nalezeny {{count}} položky",
            "many": "Nalezeno {{count}} položky",
            "other": "Nalezeno {{count}} položek",
        },
    ),
    "ru": _table(
        "Каталог товаров", "Язык", "Поиск товаров...",
        ("По названию", "По категории", "По цене", "Сначала рекомендуемые"),
        ("Рекомендуется", "Не рекомендуется"),
        ("Категория", "Отправка из", "Описание"),
        {
            "one": "Найден {{count}} товар",
            "few": "Найдено {{count}} товара",
            "many": "Найдено {{count}} товаров",
            "other": "Найдено {{count}} товара",
        },
    ),
    "ar": _table(
        "كتالوج المنتجات", "اللغة", "ابحث عن المنتجات...",
        ("الترتيب حسب الاسم", "الترتيب حسب الفئة", "الترتيب حسب السعر",
         "الموصى بها أولاً"),
        ("موصى به", "غير موصى به"),
        ("الفئة", "يُشحن من", "الوصف"),
        {
            "zero": "لم يتم العثور على أي منتج",
            "one": "تم العثور على منتج واحد",
            "two": "تم العثور على منتجين",
            "few": "تم العثور على {{count}} منتجات",
            "many": "تم العثور على {{count}} منتجًا",
            "other": "تم العثور على {{count}} منتج",
        },
    ),
    "he": _table(
        "קטלוג מוצרים", "שפה", "חיפוש מוצרים...",
        ("מיון לפי שם", "מיון לפי קטגוריה", "מיון לפי מחיר", "מומלצים תחילה"),
        ("מומלץ", "לא מומלץ"),
        ("קטגוריה", "נשלח מ", "תיאור"),
        {
            "one": "נמצא פריט אחד",
            "two": "נמצאו שני פריטים",
            "other": "נמצאו {{count}} פריטים",
        },
    ),
    "ja": _table(
        "製品カタログ", "言語", "製品を検索...",
        ("名前順", "カテゴリ順", "価格順", "おすすめ順"),
        ("おすすめ", "おすすめではない"),
        ("カテゴリ", "発送元", "説明"),
        {"other": "{{count}} 件の商品が見つかりました"},
    ),
    "zh": _table(
        "产品目录", "语言", "搜索产品...",
        ("按名称排序", "按类别排序", "按价格排序", "推荐优先"),
        ("推荐", "不推荐"),
        ("类别", "发货地", "描述"),
        {"other": "找到 {{count}} 件商品"},
    ),
}


def builtin_resolver(registry: LocaleRegistry | None = None) -> TranslationResolver:
    """Resolver over the built-in tables."""
    return TranslationResolver(BUILTIN_TRANSLATIONS, registry)
