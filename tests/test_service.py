"""
Tests for the LocalizationService editor API.

This module tests scanning through the service, translation progress
queries, editing and saving translations, and client library publishing.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from locsync.context import LocalizationContext
from locsync.parsing.extractor import LanguageFamily
from locsync.scanning.hashing import string_hash
from locsync.scanning.source import Source
from locsync.service import LocalizationService, StatusFilter
from locsync.utils.core.exceptions import NotConfiguredError, UnknownSourceError
from tests.utils import SourceTreeFactory, read_ini_entries

HELLO = string_hash("Hello")
GOODBYE = string_hash("Goodbye %1$s")
CLIENT_ONLY = string_hash("Only in client")


@pytest.fixture
def service(configured_context: LocalizationContext) -> LocalizationService:
    """Service over the configured sample context."""
    return LocalizationService(configured_context)


@pytest.fixture
def scanned_service(service: LocalizationService) -> LocalizationService:
    """Service whose sample source has been scanned."""
    _ = service.scan()
    return service


class TestScanning:
    """Test scanning through the service."""

    def test_scan_all_sources(self, service: LocalizationService, sample_source: Source) -> None:
        """Test the report of a full scan."""
        assert not service.is_scan_available("main")

        reports = service.scan()

        assert len(reports) == 1
        assert reports[0].source is sample_source
        assert reports[0].strings == 3
        assert reports[0].files_scanned == 2
        assert reports[0].failed_files == []
        assert service.is_scan_available("main")

    def test_scan_one_source(self, service: LocalizationService, sample_source: Source) -> None:
        """Test scanning a single source by ID."""
        reports = service.scan(sample_source.id)

        assert [report.source for report in reports] == [sample_source]

    def test_scan_writes_translation_files(self, scanned_service: LocalizationService, sample_source: Source) -> None:
        """Test that a scan creates empty translation files for every target locale."""
        for locale_name in ("de_DE", "fr_FR"):
            assert read_ini_entries(sample_source.server_file(locale_name)) == {}
            assert sample_source.client_file(locale_name).exists()
        assert not sample_source.server_file("en_UK").exists()

    def test_scan_unpaired_surrogate_escapes(
        self, configured_context: LocalizationContext, make_tree: SourceTreeFactory
    ) -> None:
        """Test that strings with unpaired surrogate escapes do not abort the scan."""
        folder = make_tree({"odd/a.js": 't("\\uD800");\n', "odd/b.php": '<?php t("\\u{DC00}");\n'})
        _ = configured_context.add_folder_source("odd", "Odd escapes", "Core", [folder / "odd"])
        service = LocalizationService(configured_context)

        reports = service.scan("odd")

        assert reports[0].failed_files == []
        assert sorted(entry.text for entry in service.get_entries("odd", "de_DE")) == ["\\ud800", "\\u{DC00}"]

    def test_scan_requires_configuration(self, context: LocalizationContext) -> None:
        """Test that scanning an unconfigured context fails."""
        with pytest.raises(NotConfiguredError):
            _ = LocalizationService(context).scan()

    def test_scan_unknown_source(self, service: LocalizationService) -> None:
        """Test scanning a source that does not exist."""
        with pytest.raises(UnknownSourceError):
            _ = service.scan("missing")


class TestEntries:
    """Test translation progress queries."""

    def test_entries_sorted_by_text(self, scanned_service: LocalizationService) -> None:
        """Test that all strings are listed in natural text order."""
        entries = scanned_service.get_entries("main", "de_DE")

        assert [entry.text for entry in entries] == ["Goodbye %1$s", "Hello", "Only in client"]

    def test_entry_metadata(self, scanned_service: LocalizationService) -> None:
        """Test the usage data of the shared string."""
        hello = next(e for e in scanned_service.get_entries("main", "de_DE") if e.hash == HELLO)

        assert hello.call_count == 4
        assert hello.families == frozenset({LanguageFamily.SERVER, LanguageFamily.CLIENT})
        assert hello.locations == (
            ("project1/js/app.js", 1),
            ("project1/src/page.php", 2),
            ("project1/src/page.php", 3),
            ("project1/src/page.php", 4),
        )
        assert not hello.is_translated

    def test_status_filters(self, scanned_service: LocalizationService) -> None:
        """Test restricting entries to translated or untranslated strings."""
        scanned_service.set_translation("main", "de_DE", HELLO, "Hallo")

        translated = scanned_service.get_entries("main", "de_DE", StatusFilter.TRANSLATED)
        untranslated = scanned_service.get_entries("main", "de_DE", StatusFilter.UNTRANSLATED)

        assert [e.hash for e in translated] == [HELLO]
        assert translated[0].translation == "Hallo"
        assert {e.hash for e in untranslated} == {GOODBYE, CLIENT_ONLY}

    def test_search_matches_text_and_translation(self, scanned_service: LocalizationService) -> None:
        """Test the case-insensitive search."""
        scanned_service.set_translation("main", "de_DE", GOODBYE, "Auf Wiedersehen %1$s")

        assert [e.hash for e in scanned_service.get_entries("main", "de_DE", search="HELLO")] == [HELLO]
        assert [e.hash for e in scanned_service.get_entries("main", "de_DE", search="wiedersehen")] == [GOODBYE]
        assert scanned_service.get_entries("main", "de_DE", search="nothing") == []

    def test_count_untranslated(self, scanned_service: LocalizationService) -> None:
        """Test progress counting and the blank-removes rule."""
        assert scanned_service.count_untranslated("main", "de_DE") == 3

        scanned_service.set_translation("main", "de_DE", HELLO, "Hallo")
        assert scanned_service.count_untranslated("main", "de_DE") == 2

        scanned_service.set_translation("main", "de_DE", HELLO, "  ")
        assert scanned_service.count_untranslated("main", "de_DE") == 3

    def test_untranslated_summary(self, scanned_service: LocalizationService) -> None:
        """Test the per-source, per-locale overview."""
        scanned_service.set_translation("main", "fr_FR", HELLO, "Bonjour")

        assert scanned_service.untranslated_summary() == {"main": {"de_DE": 3, "fr_FR": 2}}

    def test_list_locales_and_sources(self, service: LocalizationService) -> None:
        """Test the listing helpers."""
        assert [locale.name for locale in service.list_locales()] == ["en_UK", "fr_FR", "de_DE"]
        assert [source.alias for source in service.list_sources()] == ["main"]


class TestSaving:
    """Test saving translations and publishing client files."""

    def test_save_translations(self, scanned_service: LocalizationService, sample_source: Source) -> None:
        """Test that saved translations reach the server and client files."""
        scanned_service.set_translation("main", "de_DE", HELLO, "Hallo")
        scanned_service.set_translation("main", "de_DE", GOODBYE, "Auf Wiedersehen %1$s")

        scanned_service.save_translations("main", "de_DE")

        assert read_ini_entries(sample_source.server_file("de_DE")) == {
            GOODBYE: "Auf Wiedersehen %1$s",
            HELLO: "Hallo",
        }
        assert read_ini_entries(sample_source.client_file("de_DE")) == {HELLO: "Hallo"}

    def test_saved_translations_survive_a_new_context(
        self, scanned_service: LocalizationService, sample_tree: Path, storage_folder: Path
    ) -> None:
        """Test that a fresh context reads the saved files."""
        scanned_service.set_translation("main", "de_DE", HELLO, "Hallo")
        scanned_service.save_translations("main", "de_DE")

        context = LocalizationContext()
        _ = context.add_app_locale("de_DE")
        context.configure(storage_folder)
        _ = context.add_folder_source("main", "Main application", "Core", [sample_tree])

        assert LocalizationService(context).count_untranslated("main", "de_DE") == 2

    def test_save_regenerates_client_files(
        self, scanned_service: LocalizationService, configured_context: LocalizationContext, tmp_path: Path
    ) -> None:
        """Test that saving refreshes the client libraries."""
        folder = tmp_path / "js"
        configured_context.set_client_libraries_folder(str(folder))
        scanned_service.set_translation("main", "de_DE", HELLO, "Hallo")

        scanned_service.save_translations("main", "de_DE")

        assert '"Hallo"' in (folder / "locale-de_DE.js").read_text(encoding="utf-8")

    def test_publish(self, scanned_service: LocalizationService, configured_context: LocalizationContext, tmp_path: Path) -> None:
        """Test publishing with and without a client folder."""
        assert scanned_service.publish() == []

        configured_context.set_client_libraries_folder(str(tmp_path / "js"))

        assert len(scanned_service.publish()) == 4
        assert scanned_service.publish() == []
        assert len(scanned_service.publish(force=True)) == 4
