"""
Content hashing of translatable strings.

The hash of a string depends on its text alone, so that identical text
anywhere in a source tree maps to one registry entry and one translation.
MD5 is used because the client runtime computes the same digest in the
browser to look up translations.
"""

from __future__ import annotations

import hashlib


def string_hash(text: str) -> str:
    """
    Compute the stable identifier of a translatable text.

    No normalization is applied: texts that differ only by whitespace or
    case get different hashes.

    Args:
        text: The exact text as written in the source

    Returns:
        Lowercase hexadecimal MD5 digest of the UTF-8 encoded text
    """
    return hashlib.md5(text.encode("utf-8"), usedforsecurity=False).hexdigest()
