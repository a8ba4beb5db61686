"""Exceptions raised by the localization core.

Every degraded path in the core is either one of these typed failures or an
explicit flag on a result object; nothing is swallowed silently.
"""

from __future__ import annotations


class L10nError(Exception):
    """Base exception for all l10ncatalog errors."""

    pass


class UnsupportedLocale(L10nError, LookupError):
    """Raised when a locale code is not present in the locale registry.

    Callers must pick a fallback locale explicitly; the core never
    substitutes one on their behalf.
    """

    def __init__(self, locale: str, supported: list[str] | None = None) -> None:
        self.locale = locale
        self.supported = supported or []
        message = f"Unsupported locale: {locale!r}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class InvalidAmount(L10nError, ValueError):
    """Raised when an amount cannot be formatted as money."""

    def __init__(self, amount: object, reason: str) -> None:
        self.amount = amount
        self.reason = reason
        super().__init__(f"Invalid amount {amount!r}: {reason}")


class InvalidLength(L10nError, ValueError):
    """Raised when a truncation length is zero or negative."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"Truncation length must be positive, got {length}")


class ConfigError(L10nError):
    """Base configuration error."""

    pass


class TranslationLoadError(ConfigError):
    """Raised when a translation file cannot be read or parsed."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to load translations from {path}: {message}")
