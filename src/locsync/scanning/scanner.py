"""
Scan orchestration.

A scan walks a source, merges the discovered strings into a fresh
registry, persists it and reconciles the translation files of every
application locale with the new registry.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

from .registry import StringRegistry
from .source import Source
from .walker import FileScanError, TreeWalker

if TYPE_CHECKING:
    from ..context import LocalizationContext

logger = logging.getLogger(__name__)


class ScanReport(NamedTuple):
    """Summary of the scan of one source."""

    source: Source
    strings: int
    files_scanned: int
    failed_files: list[FileScanError]
    diagnostics: int


class Scanner:
    """Scans the sources of a context."""

    def __init__(self, context: LocalizationContext) -> None:
        self.context: LocalizationContext = context

    def scan_source(self, source: Source) -> ScanReport:
        """
        Scan one source and save its registry and translation files.

        Args:
            source: The source to scan

        Returns:
            ScanReport for the source

        Raises:
            SourceFolderError: If a root folder of the source is missing
            OSError: If the registry or a translation file cannot be written
        """
        result = TreeWalker(source).walk()

        registry = StringRegistry(source.registry_path).merge(result.strings)
        registry.persist()
        self.context.set_registry(source, registry)

        for locale in self.context.get_app_locales():
            if locale.is_native:
                continue
            self.context.get_table(source, locale.name).save(registry)

        return ScanReport(
            source=source,
            strings=len(registry),
            files_scanned=result.files_scanned,
            failed_files=result.failed_files,
            diagnostics=sum(len(items) for items in result.diagnostics.values()),
        )

    def scan(self) -> list[ScanReport]:
        """
        Scan every source of the context and regenerate the client files.

        Returns:
            One ScanReport per source, in source order

        Raises:
            NotConfiguredError, NoStorageLocationError, NoSourcesError:
                If the context is not ready
        """
        self.context.require_configuration()

        reports = [self.scan_source(source) for source in self.context.get_sources()]
        _ = self.context.create_generator().write_files(force=True)

        logger.info(
            f"Scan complete: {sum(r.strings for r in reports)} strings in {len(reports)} sources"
        )
        return reports
