"""Text helpers for queries and path segments."""

from __future__ import annotations

from typing import Tuple

SEPARATOR = "/"
WORD_DELIMITERS = frozenset("_-. ")


def fold_case(text: str) -> str:
    """Lowercase ``text`` without changing its length.

    Characters whose lowercase form is longer than one code point (``İ``)
    are kept as they are, so offsets into the folded text stay valid for
    the original.
    """
    return "".join(char if len(char.lower()) != 1 else char.lower() for char in text)


def normalize_query(query: str) -> str:
    """Strip surrounding whitespace and case fold a raw query line."""
    return fold_case(query.strip())


def split_segments(path: str) -> Tuple[Tuple[str, ...], Tuple[int, ...]]:
    """Split a ``/`` separated path into segments and their start offsets."""
    segments = tuple(path.split(SEPARATOR))
    boundaries = []
    offset = 0
    for segment in segments:
        boundaries.append(offset)
        offset += len(segment) + len(SEPARATOR)
    return segments, tuple(boundaries)


def is_subsequence(needle: str, haystack: str) -> bool:
    """Return True if every character of ``needle`` appears in order in ``haystack``."""
    position = 0
    for char in needle:
        position = haystack.find(char, position)
        if position < 0:
            return False
        position += 1
    return True
