"""
Character classes used to build tokenizer patterns.

A single flag chooses between ASCII-only classes and their broader unicode
equivalents. Profiles build all of their patterns from these fragments, so
no profile carries its own unicode handling.
"""

from __future__ import annotations

from typing import NamedTuple


class CharacterClasses(NamedTuple):
    """Regular expression fragments for the character-class dependent tokens."""

    identifier_start: str
    identifier_part: str
    whitespace: str
    line_break: str
    line_break_chars: str
    line_break_sequence: str
    not_line_break: str


_ASCII = CharacterClasses(
    identifier_start=r"[$_A-Za-z]",
    identifier_part=r"[$_A-Za-z0-9]",
    whitespace=r"[\x20\x09\x0B\x0C\xA0]",
    line_break=r"[\r\n]",
    line_break_chars=r"\r\n",
    line_break_sequence=r"\r\n|\r|\n",
    not_line_break=r"[^\r\n]",
)

# Zs plus the JavaScript specific format characters
_UNICODE_SPACES = r"\x20\x09\x0B\x0C\xA0\u1680\u2000-\u200A\u202F\u205F\u3000\uFEFF"
_UNICODE_BREAKS = r"\r\n\u2028\u2029"

_UNICODE = CharacterClasses(
    identifier_start=r"(?:\\u[0-9A-Fa-f]{4}|[$_]|[^\W\d_])",
    identifier_part=r"(?:\\u[0-9A-Fa-f]{4}|[$\w\u200C\u200D])",
    whitespace=f"[{_UNICODE_SPACES}]",
    line_break=f"[{_UNICODE_BREAKS}]",
    line_break_chars=_UNICODE_BREAKS,
    line_break_sequence=rf"\r\n|[{_UNICODE_BREAKS}]",
    not_line_break=f"[^{_UNICODE_BREAKS}]",
)


def character_classes(unicode_mode: bool) -> CharacterClasses:
    """
    Get the character classes for the requested mode.

    Args:
        unicode_mode: Whether to use the unicode classes

    Returns:
        The matching set of pattern fragments
    """
    return _UNICODE if unicode_mode else _ASCII
