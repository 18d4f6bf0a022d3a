"""
Natural ordering of strings.

Digit runs compare by numeric value, so that "Item 2" sorts before
"Item 10". The case-insensitive variant folds case before comparing.
"""

from __future__ import annotations

import re

_CHUNK_PATTERN = re.compile(r"(\d+)")

NaturalKey = tuple[tuple[int, int, str], ...]


def natural_key(text: str) -> NaturalKey:
    """
    Build a sort key that orders digit runs numerically.

    Each chunk is encoded as ``(kind, number, text)`` so that numeric and
    textual chunks can always be compared with each other.

    Args:
        text: The string to build the key for

    Returns:
        Tuple usable as a sort key
    """
    chunks: list[tuple[int, int, str]] = []
    for index, chunk in enumerate(_CHUNK_PATTERN.split(text)):
        if not chunk:
            continue
        if index % 2:
            chunks.append((0, int(chunk), chunk))
        else:
            chunks.append((1, 0, chunk))
    return tuple(chunks)


def natural_case_key(text: str) -> NaturalKey:
    """Case-insensitive variant of :func:`natural_key`."""
    return natural_key(text.casefold())
