"""
Query API for translation editors.

LocalizationService is the narrow interface through which an editor lists
locales and sources, inspects translation progress, edits translations,
and triggers scans and client library regeneration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .context import NAMESPACE_APPLICATION, LocalizationContext
from .locales.locale import Locale
from .parsing.extractor import LanguageFamily
from .scanning.registry import StringRegistry
from .scanning.scanner import Scanner, ScanReport
from .scanning.source import Source
from .translation.store import TranslationTable
from .utils.text.natural import natural_case_key

logger = logging.getLogger(__name__)


class StatusFilter(Enum):
    """Which entries get_entries() returns."""

    ALL = "all"
    TRANSLATED = "translated"
    UNTRANSLATED = "untranslated"


@dataclass(frozen=True)
class EntryStatus:
    """
    A registry entry together with its translation in one locale.

    Attributes:
        hash: Content hash of the text
        text: Source text
        translation: Translated text, or None if untranslated
        locations: (file, line) pairs where the text is used
        families: Language families the text was found in
        call_count: Number of marker calls using the text
    """

    hash: str
    text: str
    translation: str | None
    locations: tuple[tuple[str, int], ...]
    families: frozenset[LanguageFamily]
    call_count: int

    @property
    def is_translated(self) -> bool:
        return self.translation is not None


class LocalizationService:
    """Editor-facing operations on a LocalizationContext."""

    def __init__(self, context: LocalizationContext) -> None:
        self.context: LocalizationContext = context

    def list_locales(self, namespace: str = NAMESPACE_APPLICATION) -> list[Locale]:
        """Locales of a namespace, sorted by label."""
        return self.context.get_locales(namespace)

    def list_sources(self) -> list[Source]:
        """Sources, sorted by label."""
        return self.context.get_sources()

    def is_scan_available(self, source_id: str) -> bool:
        """Check whether a source has a registry to work with."""
        return self.context.get_source(source_id).is_scan_available()

    def _resolve(self, source_id: str, locale_name: str) -> tuple[StringRegistry, TranslationTable]:
        source = self.context.get_source(source_id)
        return self.context.get_registry(source), self.context.get_table(source, locale_name)

    def count_untranslated(self, source_id: str, locale_name: str) -> int:
        """
        Number of strings of a source without translation in a locale.

        Raises:
            UnknownSourceError: If the source does not exist
            UnknownLocaleError: If the locale is not an application locale
        """
        registry, table = self._resolve(source_id, locale_name)
        return registry.count_untranslated(table)

    def get_entries(
        self,
        source_id: str,
        locale_name: str,
        status: StatusFilter = StatusFilter.ALL,
        search: str | None = None,
    ) -> list[EntryStatus]:
        """
        Get the strings of a source with their translation status.

        Args:
            source_id: Source ID or alias
            locale_name: Application locale
            status: Restrict to translated or untranslated entries
            search: Case-insensitive filter on source text and translation

        Returns:
            Matching entries sorted by source text
        """
        registry, table = self._resolve(source_id, locale_name)
        needle = search.casefold() if search else None

        entries: list[EntryStatus] = []
        for entry in registry:
            translation = table.get(entry.hash)
            if status is StatusFilter.TRANSLATED and translation is None:
                continue
            if status is StatusFilter.UNTRANSLATED and translation is not None:
                continue
            if needle is not None:
                haystack = entry.text.casefold() + "\n" + (translation or "").casefold()
                if needle not in haystack:
                    continue

            entries.append(
                EntryStatus(
                    hash=entry.hash,
                    text=entry.text,
                    translation=translation,
                    locations=tuple(entry.locations),
                    families=frozenset(entry.families),
                    call_count=entry.call_count,
                )
            )

        entries.sort(key=lambda item: (natural_case_key(item.text), item.hash))
        return entries

    def set_translation(self, source_id: str, locale_name: str, hash_value: str, text: str) -> None:
        """
        Set the translation of a string; empty text removes it.

        The change is kept in memory until save_translations() is called.
        """
        _, table = self._resolve(source_id, locale_name)
        table.set_translation(hash_value, text)

    def save_translations(self, source_id: str, locale_name: str) -> None:
        """
        Write the translation files of a source and regenerate the client files.

        Raises:
            OSError: If a file cannot be written
        """
        registry, table = self._resolve(source_id, locale_name)
        table.save(registry)
        _ = self.context.create_generator().write_files(force=True)

    def scan(self, source_id: str | None = None) -> list[ScanReport]:
        """
        Scan one source, or every source when no ID is given.

        Raises:
            NotConfiguredError, NoStorageLocationError, NoSourcesError:
                If the context is not ready
        """
        scanner = Scanner(self.context)
        if source_id is None:
            return scanner.scan()

        self.context.require_configuration()
        report = scanner.scan_source(self.context.get_source(source_id))
        _ = self.context.create_generator().write_files(force=True)
        return [report]

    def publish(self, force: bool = False) -> list[Path]:
        """Regenerate the client library files."""
        return self.context.create_generator().write_files(force=force)

    def untranslated_summary(self) -> dict[str, dict[str, int]]:
        """
        Untranslated counts for every source and non-native application locale.

        Returns:
            Mapping of source alias to a mapping of locale name to count
        """
        summary: dict[str, dict[str, int]] = {}
        locales = [locale for locale in self.context.get_app_locales() if not locale.is_native]
        for source in self.context.get_sources():
            summary[source.alias] = {
                locale.name: self.count_untranslated(source.id, locale.name)
                for locale in sorted(locales, key=lambda locale: locale.name)
            }
        return summary
