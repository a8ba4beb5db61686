"""Grapheme-safe, word-aware text truncation.

Lengths are counted in extended grapheme clusters, so a cut never falls
inside a user-perceived character (combining accents, emoji with skin tone
modifiers, flags, ZWJ sequences).

For locales whose script separates words with whitespace, a cut that would
fall strictly inside a word backs off to the end of the previous word. When
not even the first word fits, the text is cut at a grapheme boundary and the
result is flagged ``word_unsplittable`` so callers can tell a fragment from
a clean word break. Scripts written without spaces (Japanese, Chinese, Thai)
are cut at the grapheme boundary directly.

The ellipsis counts toward the maximum length, so a truncated result is
never longer than ``max_length`` and truncating it again is a no-op.

Usage:
    from l10ncatalog.truncation import truncate

    truncate("Fresh apples from the orchard", 15, "en").text
    # "Fresh apples…"
"""

from __future__ import annotations

import logging

from l10ncatalog.errors import InvalidLength
from l10ncatalog.locales import LocaleRegistry, get_locale_registry
from l10ncatalog.protocols import TruncatedText
from l10ncatalog.segmentation import graphemes, is_whitespace_cluster, words

logger = logging.getLogger(__name__)


DEFAULT_ELLIPSIS = "…"


class TextTruncator:
    """Shortens text to a maximum number of grapheme clusters.

    Example:
        truncator = TextTruncator()
        result = truncator.truncate("x" * 80, 55, "en")
        result.word_unsplittable   # True
        result.length              # 55
    """

    def __init__(
        self,
        registry: LocaleRegistry | None = None,
        ellipsis: str = DEFAULT_ELLIPSIS,
    ) -> None:
        self._registry = registry or get_locale_registry()
        self.ellipsis = ellipsis
        self._ellipsis_clusters = graphemes(ellipsis)

    def truncate(self, text: str, max_length: int, locale: str) -> TruncatedText:
        """Truncate text for display in a locale.

        Args:
            text: Text to shorten
            max_length: Maximum length in grapheme clusters, ellipsis included
            locale: Locale whose script decides word back-off

        Returns:
            TruncatedText with the result and its flags

        Raises:
            InvalidLength: If max_length is zero or negative
            UnsupportedLocale: If the locale is not registered
        """
        if max_length <= 0:
            raise InvalidLength(max_length)
        definition = self._registry.require(locale)

        clusters = graphemes(text)
        if len(clusters) <= max_length:
            return TruncatedText(text, length=len(clusters))

        budget = max_length - len(self._ellipsis_clusters)
        if budget <= 0:
            marker = self._ellipsis_clusters[:max_length]
            return TruncatedText("".join(marker), truncated=True, length=len(marker))

        head = clusters[:budget]
        unsplittable = False
        if definition.whitespace_segmented:
            head, unsplittable = self._back_off(clusters, budget)

        result = "".join(head) + self.ellipsis
        if unsplittable:
            logger.debug(f"No whole word fits in {max_length} graphemes; cutting inside a word")
        return TruncatedText(
            result,
            truncated=True,
            word_unsplittable=unsplittable,
            length=len(head) + len(self._ellipsis_clusters),
        )

    @staticmethod
    def _back_off(clusters: list[str], cut: int) -> tuple[list[str], bool]:
        """Move a cut inside a word back to the end of the previous word."""
        previous = None
        for word in words(clusters):
            if word.end >= cut:
                if word.start < cut < word.end:
                    if previous is None:
                        return clusters[:cut], True
                    return clusters[:previous.end], False
                break
            previous = word
        return _rstrip(clusters[:cut]), False


def _rstrip(clusters: list[str]) -> list[str]:
    end = len(clusters)
    while end and is_whitespace_cluster(clusters[end - 1]):
        end -= 1
    return clusters[:end]


_truncator: TextTruncator | None = None


def truncate(text: str, max_length: int, locale: str) -> TruncatedText:
    """Truncate text with the global truncator.

    Example:
        truncate("Anpassbare Komponenten", 12, "de").text   # "Anpassbare…"
    """
    global _truncator
    if _truncator is None:
        _truncator = TextTruncator()
    return _truncator.truncate(text, max_length, locale)
