"""
Deterministic writer for translation files.

Translation files are flat ``HASH= "TEXT"`` files preceded by a comment
header. Entries are ordered by translated text (natural, case-insensitive)
and then by hash, so regenerating a file only changes the lines whose
translation actually changed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path

from ..utils.io.atomic import atomic_write_text
from ..utils.text.natural import natural_case_key

logger = logging.getLogger(__name__)

_RULE = "; -------------------------------------------------------"


class FileType(Enum):
    """The two kinds of translation files kept per source and locale."""

    SERVER = "server"
    CLIENT = "client"


def escape_value(text: str) -> str:
    """Escape a translation so that it fits on one line between quotes."""
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\r", "\\r")
        .replace("\n", "\\n")
    )


def sort_entries(hashes: Mapping[str, str]) -> list[tuple[str, str]]:
    """
    Order translation entries for output.

    Args:
        hashes: Mapping of hash to translated text

    Returns:
        (hash, text) pairs ordered by text, ties broken by hash
    """
    return sorted(
        hashes.items(),
        key=lambda item: (natural_case_key(item[1]), item[0]),
    )


def render_header(file_type: FileType, locale_label: str, editable: bool) -> str:
    """
    Render the comment block at the top of a translation file.

    Args:
        file_type: Kind of file
        locale_label: Human readable locale name
        editable: Whether people may edit the file by hand

    Returns:
        The header, ending with an empty line
    """
    title = f"{file_type.value.upper()} TRANSLATION FILE FOR {locale_label.upper()}"
    lines = [_RULE, f"; {title}", _RULE, "; "]

    if editable:
        lines.extend(
            [
                "; You may edit text directly in this file under the following conditions:",
                "; ",
                "; 1) Do not to modify the keys (left hand side of the = sign)",
                "; 2) Save the file as UTF-8 without BOM",
            ]
        )
    else:
        lines.extend(
            [
                "; Do NOT edit this file directly! It depends on the main translation file",
                "; and any changes will be lost. Edit the main file instead.",
            ]
        )

    return "\n".join(lines) + "\n\n"


def render_translation_file(
    file_type: FileType,
    locale_label: str,
    hashes: Mapping[str, str],
    editable: bool = False,
) -> str:
    """
    Render a complete translation file.

    Args:
        file_type: Kind of file
        locale_label: Human readable locale name
        hashes: Mapping of hash to translated text
        editable: Whether people may edit the file by hand

    Returns:
        File content with ``\\n`` line endings
    """
    lines = [f'{key}= "{escape_value(text)}"' for key, text in sort_entries(hashes)]
    body = "\n".join(lines) + "\n" if lines else ""
    return render_header(file_type, locale_label, editable) + body


def write_translation_file(
    path: Path,
    file_type: FileType,
    locale_label: str,
    hashes: Mapping[str, str] | Iterable[tuple[str, str]],
    editable: bool = False,
) -> None:
    """
    Write a translation file atomically.

    Raises:
        OSError: If the file cannot be written
    """
    mapping = dict(hashes)
    atomic_write_text(path, render_translation_file(file_type, locale_label, mapping, editable))
    logger.debug(f"Wrote {len(mapping)} translations to {path}")
