"""
Translation tables and their storage.

A TranslationTable maps string hashes to the translated text for one
source and one locale. Tables are read from the editable server file and
saved as two files: the server file with every translation, and the
client file with only the strings used by client-side code.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from types import MappingProxyType

from ..scanning.registry import StringRegistry
from ..scanning.source import Source
from ..utils.core.exceptions import TranslationFileError
from .writer import FileType, write_translation_file

logger = logging.getLogger(__name__)

_ENTRY_PATTERN = re.compile(r'^(?P<hash>[0-9A-Za-z]+)\s*=\s*"(?P<text>(?:[^"\\]|\\.)*)"\s*$')
_ESCAPE_PATTERN = re.compile(r"\\(.)")
_UNESCAPES = {"n": "\n", "r": "\r"}


def unescape_value(value: str) -> str:
    """Reverse the escaping applied by the writer."""
    return _ESCAPE_PATTERN.sub(lambda match: _UNESCAPES.get(match.group(1), match.group(1)), value)


class TranslationTable:
    """
    Translations of one source into one locale.

    Attributes:
        source: Source the translations belong to
        locale_name: Locale code, e.g. ``de_DE``
        locale_label: Human readable locale name used in file headers
    """

    def __init__(self, source: Source, locale_name: str, locale_label: str) -> None:
        self.source: Source = source
        self.locale_name: str = locale_name
        self.locale_label: str = locale_label
        self._translations: dict[str, str] = {}
        self._loaded: bool = False

    @property
    def translations(self) -> MappingProxyType[str, str]:
        return MappingProxyType(self._translations)

    def __contains__(self, hash_value: object) -> bool:
        return hash_value in self._translations

    def __len__(self) -> int:
        return len(self._translations)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._translations))

    def get(self, hash_value: str) -> str | None:
        return self._translations.get(hash_value)

    def has_translation(self, hash_value: str) -> bool:
        return hash_value in self._translations

    def set_translation(self, hash_value: str, text: str) -> None:
        """
        Set or remove a translation.

        Empty or whitespace-only text removes the translation, so a blanked
        entry is indistinguishable from an untranslated one.

        Args:
            hash_value: Hash of the source text
            text: Translated text
        """
        if not text.strip():
            self.remove_translation(hash_value)
            return
        self._translations[hash_value] = text

    def remove_translation(self, hash_value: str) -> None:
        _ = self._translations.pop(hash_value, None)

    def load(self) -> TranslationTable:
        """
        Read the translations from the server file.

        A missing file leaves the table empty.

        Returns:
            This table, for chaining

        Raises:
            TranslationFileError: If a line of the file cannot be parsed
        """
        path = self.source.server_file(self.locale_name)
        self._translations = {}
        self._loaded = True

        if not path.exists():
            logger.debug(f"No translation file {path}")
            return self

        for number, line in enumerate(path.read_text(encoding="utf-8-sig").split("\n"), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith(";"):
                continue

            match = _ENTRY_PATTERN.match(stripped)
            if match is None:
                logger.error(f"Invalid line {number} in translation file {path}")
                raise TranslationFileError(
                    f"Cannot parse line {number} of translation file '{path}'.",
                    details=f"Expected HASH= \"TEXT\", got: {stripped[:80]}",
                )
            self.set_translation(match.group("hash"), unescape_value(match.group("text")))

        logger.debug(f"Loaded {len(self._translations)} translations from {path}")
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def save(self, registry: StringRegistry) -> None:
        """
        Write the server and client files for this table.

        Translations whose hash is no longer part of the registry are
        dropped before writing.

        Args:
            registry: Current registry of the source

        Raises:
            OSError: If a file cannot be written
        """
        stale = [key for key in self._translations if key not in registry]
        for key in stale:
            del self._translations[key]
        if stale:
            logger.debug(f"Dropped {len(stale)} stale translations for {self.locale_name}")

        client_hashes = registry.client_hashes()
        client = {key: text for key, text in self._translations.items() if key in client_hashes}

        write_translation_file(
            self.source.server_file(self.locale_name),
            FileType.SERVER,
            self.locale_label,
            self._translations,
            editable=True,
        )
        write_translation_file(
            self.source.client_file(self.locale_name),
            FileType.CLIENT,
            self.locale_label,
            client,
        )
        logger.info(
            f"Saved {len(self._translations)} translations of source '{self.source.alias}' for {self.locale_name}"
        )


class TranslationStore:
    """Loads and caches translation tables per (source, locale)."""

    def __init__(self) -> None:
        self._tables: dict[tuple[str, str], TranslationTable] = {}

    def get_table(self, source: Source, locale_name: str, locale_label: str) -> TranslationTable:
        """
        Get the table for a source and locale, loading it on first access.

        Raises:
            TranslationFileError: If the server file cannot be parsed
        """
        key = (source.id, locale_name)
        table = self._tables.get(key)
        if table is None:
            table = TranslationTable(source, locale_name, locale_label).load()
            self._tables[key] = table
        return table

    def tables(self) -> list[TranslationTable]:
        return list(self._tables.values())

    def clear(self) -> None:
        """Forget every cached table, so that the next access reloads from disk."""
        self._tables.clear()
