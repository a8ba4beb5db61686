"""Text segmentation into grapheme clusters and whitespace-delimited words.

Grapheme clusters follow Unicode extended grapheme cluster rules (UAX #29)
via the ``regex`` module's ``\\X``, so combining marks, emoji ZWJ sequences,
flags and Hangul syllable jamo stay together.
"""

from __future__ import annotations

from dataclasses import dataclass

import regex

_GRAPHEME = regex.compile(r"\X")


def graphemes(text: str) -> list[str]:
    """Split text into extended grapheme clusters.

    Example:
        graphemes("Cafe\u0301")  # ["C", "a", "f", "e\u0301"]
        graphemes("ok\U0001F44D\U0001F3FD")  # ["o", "k", "\U0001F44D\U0001F3FD"]
    """
    return _GRAPHEME.findall(text)


def grapheme_length(text: str) -> int:
    """Number of user-perceived characters in text."""
    return len(graphemes(text))


def grapheme_boundaries(text: str) -> list[int]:
    """Code point offsets where a cut does not split a grapheme cluster.

    Always includes 0 and len(text).
    """
    boundaries = [0]
    for match in _GRAPHEME.finditer(text):
        boundaries.append(match.end())
    return boundaries


def is_whitespace_cluster(cluster: str) -> bool:
    return cluster[:1].isspace()


@dataclass(frozen=True)
class Word:
    """A whitespace-delimited word, located in grapheme cluster units."""
    text: str
    start: int
    end: int


def words(clusters: list[str]) -> list[Word]:
    """Group grapheme clusters into whitespace-delimited words."""
    result: list[Word] = []
    start: int | None = None
    for index, cluster in enumerate(clusters):
        if is_whitespace_cluster(cluster):
            if start is not None:
                result.append(Word("".join(clusters[start:index]), start, index))
                start = None
        elif start is None:
            start = index
    if start is not None:
        result.append(Word("".join(clusters[start:]), start, len(clusters)))
    return result
