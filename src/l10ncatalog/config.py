"""Configuration for the localization core.

Settings are merged from ordered sources, lowest priority first:

    defaults
       |
       +---> FileConfigSource (YAML or JSON)
       +---> EnvConfigSource (L10NCATALOG_* environment variables)
       |
       v
    L10nConfig (validated, typed)

Usage:
    >>> from l10ncatalog.config import load_config
    >>> config = load_config("l10n.yaml")
    >>> config.description_max_length
    55

Environment variables use the field name upper-cased after the prefix, e.g.
``L10NCATALOG_DEFAULT_LOCALE=de`` or ``L10NCATALOG_CACHE_SIZE=64``.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from l10ncatalog.errors import ConfigError

logger = logging.getLogger(__name__)


class ConfigValidationError(ConfigError):
    """Configuration validation error."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration validation failed: {', '.join(errors)}")


class ConfigSourceError(ConfigError):
    """Configuration source error."""

    pass


# =============================================================================
# Configuration Sources
# =============================================================================


class ConfigSource(ABC):
    """Abstract base class for configuration sources."""

    def __init__(self, priority: int = 0) -> None:
        self._priority = priority

    @property
    def priority(self) -> int:
        """Source priority (higher overrides lower)."""
        return self._priority

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Load configuration from the source."""
        pass


class EnvConfigSource(ConfigSource):
    """Environment variable configuration source.

    Example:
        L10NCATALOG_DEFAULT_LOCALE=de
        L10NCATALOG_DESCRIPTION_MAX_LENGTH=80

        Will produce:
        {"default_locale": "de", "description_max_length": 80}
    """

    def __init__(
        self,
        prefix: str = "L10NCATALOG",
        priority: int = 100,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(priority)
        self._prefix = f"{prefix}_"
        self._environ = environ

    def load(self) -> dict[str, Any]:
        environ = os.environ if self._environ is None else self._environ
        result: dict[str, Any] = {}
        for key, value in environ.items():
            if key.startswith(self._prefix):
                result[key[len(self._prefix):].lower()] = self._parse_value(value)
        return result

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        return value


class FileConfigSource(ConfigSource):
    """File-based configuration source (YAML or JSON)."""

    def __init__(
        self,
        path: str | Path,
        *,
        required: bool = False,
        priority: int = 50,
    ) -> None:
        super().__init__(priority)
        self._path = Path(path)
        self._required = required

    def load(self) -> dict[str, Any]:
        if not self._path.exists():
            if self._required:
                raise ConfigSourceError(f"Configuration file not found: {self._path}")
            logger.debug(f"Optional config file {self._path} not found")
            return {}

        suffix = self._path.suffix.lower()
        content = self._path.read_text(encoding="utf-8")

        try:
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(content) or {}
            elif suffix == ".json":
                data = json.loads(content)
            else:
                raise ConfigSourceError(f"Unsupported file format: {suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigSourceError(f"Failed to parse {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigSourceError(f"Top level of {self._path} must be a mapping")

        # A file may nest the settings under an "l10n" section.
        section = data.get("l10n", data)
        return dict(section)


# =============================================================================
# Typed configuration
# =============================================================================


@dataclass(frozen=True)
class L10nConfig:
    """Settings consumed by the presenter and formatters.

    Attributes:
        default_locale: Final locale of every fallback chain.
        description_max_length: Grapheme budget for item descriptions.
        ellipsis: Marker appended to truncated text.
        cache_size: Number of memoized catalog views (0 disables caching).
        allow_negative_prices: Whether negative catalog prices are formatted
            or rejected with InvalidAmount.
    """

    default_locale: str = "en"
    description_max_length: int = 55
    ellipsis: str = "…"
    cache_size: int = 32
    allow_negative_prices: bool = False

    def validate(self) -> None:
        """Raise ConfigValidationError listing every invalid field."""
        errors = []
        if not isinstance(self.default_locale, str) or not self.default_locale:
            errors.append("default_locale must be a non-empty string")
        if not isinstance(self.description_max_length, int) or self.description_max_length <= 0:
            errors.append("description_max_length must be a positive integer")
        if not isinstance(self.ellipsis, str):
            errors.append("ellipsis must be a string")
        if not isinstance(self.cache_size, int) or self.cache_size < 0:
            errors.append("cache_size must be a non-negative integer")
        if not isinstance(self.allow_negative_prices, bool):
            errors.append("allow_negative_prices must be a boolean")
        if errors:
            raise ConfigValidationError(errors)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "L10nConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")
        config = cls(**{k: v for k, v in data.items() if k in known})
        config.validate()
        return config

    def with_overrides(self, **overrides: Any) -> "L10nConfig":
        """Return a validated copy with some fields replaced."""
        config = replace(self, **overrides)
        config.validate()
        return config


def load_config(
    path: str | Path | None = None,
    *,
    env_prefix: str = "L10NCATALOG",
    environ: Mapping[str, str] | None = None,
) -> L10nConfig:
    """Load configuration from defaults, an optional file and the environment.

    Args:
        path: Optional YAML/JSON file. A missing file is an error when a path
            is given explicitly.
        env_prefix: Prefix of environment variables to read.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Validated L10nConfig.
    """
    sources: list[ConfigSource] = [EnvConfigSource(env_prefix, environ=environ)]
    if path is not None:
        sources.append(FileConfigSource(path, required=True))

    merged: dict[str, Any] = {}
    for source in sorted(sources, key=lambda s: s.priority):
        merged.update(source.load())

    return L10nConfig.from_dict(merged)
