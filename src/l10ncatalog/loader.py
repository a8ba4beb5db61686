"""Loading translation tables supplied by the shell.

Translation files are JSON or YAML, one locale per file. A file is either a
flat mapping of message keys to templates, or a document of the form
``{"locale": "de", "messages": {...}}``. Nested mappings are flattened into
dotted keys, so these are equivalent:

    {"catalog": {"title": "Produktkatalog"}}
    {"catalog.title": "Produktkatalog"}

Without a "locale" entry the locale is taken from the file name
(``de_AT.yaml`` -> ``de-AT``).

Usage:
    from l10ncatalog.catalogs import BUILTIN_TRANSLATIONS
    from l10ncatalog.loader import load_translations, merge_translations

    tables = merge_translations(BUILTIN_TRANSLATIONS, load_translations("locales"))
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from l10ncatalog.errors import TranslationLoadError
from l10ncatalog.locales import LocaleRegistry, get_locale_registry

logger = logging.getLogger(__name__)


TRANSLATION_SUFFIXES = (".json", ".yaml", ".yml")


def _flatten(data: Mapping[str, Any], path: str, prefix: str = "") -> dict[str, str]:
    messages: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            messages.update(_flatten(value, path, full_key))
        elif isinstance(value, str):
            messages[full_key] = value
        else:
            raise TranslationLoadError(
                path, f"value of {full_key!r} must be a string, got {type(value).__name__}"
            )
    return messages


def _parse(path: Path) -> Any:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TranslationLoadError(str(path), str(e)) from e

    try:
        if path.suffix == ".json":
            return json.loads(content)
        return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise TranslationLoadError(str(path), str(e)) from e


def load_translation_file(path: str | Path) -> tuple[str, dict[str, str]]:
    """Load one translation file.

    Returns:
        (normalized locale tag, flat key -> template mapping)

    Raises:
        TranslationLoadError: If the file cannot be read or parsed, or holds
            non-string templates.
    """
    path = Path(path)
    if path.suffix not in TRANSLATION_SUFFIXES:
        raise TranslationLoadError(str(path), f"unsupported file type {path.suffix!r}")

    data = _parse(path)
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise TranslationLoadError(str(path), "top level must be a mapping")

    locale = path.stem
    if "messages" in data:
        locale = data.get("locale") or locale
        data = data["messages"] or {}
        if not isinstance(data, Mapping):
            raise TranslationLoadError(str(path), "'messages' must be a mapping")

    return LocaleRegistry.normalize(str(locale)), _flatten(data, str(path))


def load_translations(
    directory: str | Path,
    registry: LocaleRegistry | None = None,
) -> dict[str, dict[str, str]]:
    """Load every translation file in a directory.

    Files for locales missing from the registry are skipped with a warning.
    Two files for the same locale are merged in file name order.

    Raises:
        TranslationLoadError: If the directory does not exist or a file is
            invalid.
    """
    registry = registry or get_locale_registry()
    directory = Path(directory)
    if not directory.is_dir():
        raise TranslationLoadError(str(directory), "not a directory")

    tables: dict[str, dict[str, str]] = {}
    for path in sorted(directory.iterdir()):
        if path.suffix not in TRANSLATION_SUFFIXES or not path.is_file():
            continue
        locale, messages = load_translation_file(path)
        if not registry.is_supported(locale):
            logger.warning(f"Skipping translations for unsupported locale {locale!r}: {path}")
            continue
        tables.setdefault(locale, {}).update(messages)
        logger.debug(f"Loaded {len(messages)} messages for {locale} from {path}")
    return tables


def merge_translations(
    *tables: Mapping[str, Mapping[str, str]],
) -> dict[str, dict[str, str]]:
    """Merge translation tables; later tables win key by key.

    The inputs are not modified.
    """
    merged: dict[str, dict[str, str]] = {}
    for table in tables:
        for locale, messages in table.items():
            merged.setdefault(LocaleRegistry.normalize(locale), {}).update(messages)
    return merged
