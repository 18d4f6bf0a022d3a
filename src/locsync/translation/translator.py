"""
Runtime translation lookup.

The Translator resolves a source text to its translation in one target
locale by hashing the text and looking the hash up in the translation
tables of every source. Untranslated texts fall back to the source text.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..locales.locale import Locale
from ..scanning.hashing import string_hash
from ..utils.text.formatting import format_placeholders
from .store import TranslationTable

logger = logging.getLogger(__name__)


class Translator:
    """
    Translates texts into one locale.

    Attributes:
        locale: Target locale
    """

    def __init__(self, locale: Locale, tables: Sequence[TranslationTable]) -> None:
        """
        Initialize the translator.

        Args:
            locale: Target locale
            tables: Translation tables of every source for the locale
        """
        self.locale: Locale = locale
        self._tables: tuple[TranslationTable, ...] = tuple(tables)

    def lookup(self, text: str) -> str | None:
        """Get the translation of a text, or None if it is untranslated."""
        if self.locale.is_native:
            return None

        hash_value = string_hash(text)
        for table in self._tables:
            translation = table.get(hash_value)
            if translation is not None:
                return translation
        return None

    def translate(self, text: str, *args: object) -> str:
        """
        Translate a text and fill its placeholders.

        Args:
            text: Source text
            *args: Placeholder values

        Returns:
            The translation, or the source text if there is none
        """
        translation = self.lookup(text)
        if translation is None:
            logger.debug(f"No {self.locale.name} translation for {text!r}")
            translation = text
        return format_placeholders(translation, *args)

    def t(self, text: str, *args: object) -> str:
        return self.translate(text, *args)

    def pt(self, text: str, *args: object) -> None:
        """Translate a text and print it."""
        print(self.translate(text, *args), end="")

    def td(self, text: str, *args: object) -> str:
        """Same as t(), for calls whose arguments are filled in at runtime."""
        return self.translate(text, *args)

    def ptd(self, text: str, *args: object) -> None:
        print(self.td(text, *args), end="")
