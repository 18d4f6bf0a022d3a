"""
Localization context.

The LocalizationContext holds everything a localization run needs: the
locales of both namespaces and their selection, the sources with their
registries and translation tables, the storage and client library
settings, and the event bus. It is constructed explicitly and passed to
every operation; reset() brings it back to its initial state.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .events import CacheKeyChanged, ClientFolderChanged, EventBus, LocaleChanged
from .generator.client_generator import ClientGenerator
from .locales.catalog import NATIVE_LOCALE_NAME
from .locales.locale import Locale
from .scanning.registry import StringRegistry
from .scanning.source import Source
from .translation.store import TranslationStore, TranslationTable
from .translation.translator import Translator
from .utils.core.exceptions import (
    DuplicateSourceError,
    ErrorCode,
    NoLocaleSelectedError,
    NoSourcesError,
    NoStorageLocationError,
    NotConfiguredError,
    UnknownLocaleError,
    UnknownNamespaceError,
    UnknownSourceError,
)
from .utils.text.natural import natural_case_key

logger = logging.getLogger(__name__)

NAMESPACE_APPLICATION = "application"
NAMESPACE_CONTENT = "content"
NAMESPACES: tuple[str, ...] = (NAMESPACE_APPLICATION, NAMESPACE_CONTENT)


class LocalizationContext:
    """
    Explicit state of the localization engine.

    Attributes:
        events: Listener registry for change notifications
        translations: Cache of loaded translation tables
    """

    def __init__(self) -> None:
        self.events: EventBus = EventBus()
        self.translations: TranslationStore = TranslationStore()
        self._locales: dict[str, dict[str, Locale]] = {}
        self._selected: dict[str, Locale | None] = {}
        self._sources: dict[str, Source] = {}
        self._registries: dict[str, StringRegistry] = {}
        self._translator: Translator | None = None
        self._configured: bool = False
        self._storage_folder: Path | None = None
        self._client_libraries_folder: str = ""
        self._client_cache_key: str = ""
        self.reset()

    def reset(self) -> None:
        """
        Return to the initial state.

        Listeners, sources, settings and loaded translations are discarded.
        Both namespaces contain only the native locale, which is selected.
        """
        self.events = EventBus()
        self.translations = TranslationStore()
        self._locales = {namespace: {} for namespace in NAMESPACES}
        self._selected = {namespace: None for namespace in NAMESPACES}
        self._sources = {}
        self._registries = {}
        self._translator = None
        self._configured = False
        self._storage_folder = None
        self._client_libraries_folder = ""
        self._client_cache_key = ""

        for namespace in NAMESPACES:
            _ = self.add_locale(namespace, NATIVE_LOCALE_NAME)
            _ = self.select_locale(namespace, NATIVE_LOCALE_NAME)

    # == NAMESPACES & LOCALES ==

    def _namespace_locales(self, namespace: str) -> dict[str, Locale]:
        locales = self._locales.get(namespace)
        if locales is None:
            raise UnknownNamespaceError(
                f"Unknown locale namespace '{namespace}'.",
                details=f"Available namespaces: {', '.join(NAMESPACES)}",
            )
        return locales

    def add_locale(self, namespace: str, name: str) -> Locale:
        """
        Add a locale to a namespace.

        Adding a locale that is already present returns the existing one.

        Raises:
            UnknownNamespaceError: If the namespace does not exist
            LocaleNotFoundError: If the locale is not supported
        """
        locales = self._namespace_locales(namespace)
        if name not in locales:
            locales[name] = Locale(name)
            logger.debug(f"Added locale {name} to namespace {namespace}")
        return locales[name]

    def add_app_locale(self, name: str) -> Locale:
        return self.add_locale(NAMESPACE_APPLICATION, name)

    def add_content_locale(self, name: str) -> Locale:
        return self.add_locale(NAMESPACE_CONTENT, name)

    def get_locales(self, namespace: str) -> list[Locale]:
        """Get the locales of a namespace, sorted by label."""
        locales = self._namespace_locales(namespace)
        return sorted(locales.values(), key=lambda locale: natural_case_key(locale.label))

    def get_app_locales(self) -> list[Locale]:
        return self.get_locales(NAMESPACE_APPLICATION)

    def get_content_locales(self) -> list[Locale]:
        return self.get_locales(NAMESPACE_CONTENT)

    def get_locale_names(self, namespace: str) -> list[str]:
        return sorted(self._namespace_locales(namespace))

    def locale_exists(self, namespace: str, name: str) -> bool:
        return name in self._namespace_locales(namespace)

    def get_locale(self, namespace: str, name: str) -> Locale:
        """
        Get a locale that has been added to a namespace.

        Raises:
            UnknownNamespaceError: If the namespace does not exist
            UnknownLocaleError: If the locale has not been added
        """
        locales = self._namespace_locales(namespace)
        locale = locales.get(name)
        if locale is None:
            code = (
                ErrorCode.UNKNOWN_APPLICATION_LOCALE
                if namespace == NAMESPACE_APPLICATION
                else ErrorCode.UNKNOWN_CONTENT_LOCALE
            )
            raise UnknownLocaleError(
                f"The locale '{name}' has not been added to the {namespace} namespace.",
                details=f"Available locales: {', '.join(sorted(locales))}",
                code=code,
            )
        return locale

    def select_locale(self, namespace: str, name: str) -> Locale:
        """
        Select the active locale of a namespace.

        A LocaleChanged event is published when the selection actually
        changes; selecting the current locale again is a no-op.

        Raises:
            UnknownNamespaceError: If the namespace does not exist
            UnknownLocaleError: If the locale has not been added
        """
        locale = self.get_locale(namespace, name)
        previous = self._selected[namespace]
        if previous is not None and previous.name == locale.name:
            return locale

        self._selected[namespace] = locale
        if namespace == NAMESPACE_APPLICATION:
            self._translator = None

        logger.debug(f"Selected locale {name} in namespace {namespace}")
        self.events.publish(LocaleChanged(namespace, previous, locale))
        return locale

    def select_app_locale(self, name: str) -> Locale:
        return self.select_locale(NAMESPACE_APPLICATION, name)

    def select_content_locale(self, name: str) -> Locale:
        return self.select_locale(NAMESPACE_CONTENT, name)

    def get_selected_locale(self, namespace: str) -> Locale:
        """
        Get the selected locale of a namespace.

        Raises:
            UnknownNamespaceError: If the namespace does not exist
            NoLocaleSelectedError: If no locale is selected
        """
        _ = self._namespace_locales(namespace)
        locale = self._selected[namespace]
        if locale is None:
            raise NoLocaleSelectedError(f"No locale selected in the {namespace} namespace.")
        return locale

    def get_app_locale(self) -> Locale:
        return self.get_selected_locale(NAMESPACE_APPLICATION)

    def get_content_locale(self) -> Locale:
        return self.get_selected_locale(NAMESPACE_CONTENT)

    # == CONFIGURATION ==

    def configure(self, storage_folder: str | Path, client_libraries_folder: str | Path = "") -> None:
        """
        Set the storage location and the client libraries folder.

        When a client libraries folder is given, the client files are
        written immediately.

        Args:
            storage_folder: Default folder for registries and translation files
            client_libraries_folder: Output folder of the client files, empty
                to disable their generation
        """
        self._storage_folder = Path(storage_folder)
        self._configured = True
        self.set_client_libraries_folder(str(client_libraries_folder))

        if self._client_libraries_folder:
            _ = self.create_generator().write_files()

    @property
    def is_configured(self) -> bool:
        return self._configured

    @property
    def storage_folder(self) -> Path | None:
        return self._storage_folder

    def require_configuration(self) -> None:
        """
        Make sure the context is ready for scanning and saving.

        Raises:
            NotConfiguredError: If configure() has not been called
            NoStorageLocationError: If no storage folder is set
            NoSourcesError: If no source has been added
        """
        if not self._configured:
            raise NotConfiguredError(
                "The localization has not been configured.",
                details="Call configure() before scanning or saving.",
            )
        if self._storage_folder is None or not str(self._storage_folder):
            raise NoStorageLocationError("No storage folder has been set.")
        if not self._sources:
            raise NoSourcesError(
                "No source folders have been added.",
                details="Add at least one source to scan.",
            )

    @property
    def client_libraries_folder(self) -> str:
        return self._client_libraries_folder

    def set_client_libraries_folder(self, folder: str) -> None:
        """Set the client libraries folder, notifying listeners on change."""
        if folder == self._client_libraries_folder:
            return
        self._client_libraries_folder = folder
        logger.debug(f"Client libraries folder set to '{folder}'")
        self.events.publish(ClientFolderChanged(folder))

    @property
    def client_cache_key(self) -> str:
        return self._client_cache_key

    def set_client_cache_key(self, key: str) -> None:
        """Set the cache-busting key, notifying listeners on change."""
        if key == self._client_cache_key:
            return
        self._client_cache_key = key
        logger.debug(f"Client cache key set to '{key}'")
        self.events.publish(CacheKeyChanged(key))

    # == SOURCES ==

    def add_source(self, source: Source) -> Source:
        """
        Register a source.

        A source with the same alias and root folders replaces the
        registered one.

        Raises:
            DuplicateSourceError: If another source already uses the alias
                or the root folders
        """
        for existing in self._sources.values():
            same_folders = existing.id == source.id
            same_alias = existing.alias == source.alias
            if same_folders != same_alias:
                raise DuplicateSourceError(
                    f"Source '{source.alias}' conflicts with source '{existing.alias}'.",
                    details=f"Sources need a unique alias and unique root folders, '{existing.alias}' scans "
                    + ", ".join(str(folder) for folder in existing.folders),
                )
        self._sources[source.id] = source
        _ = self._registries.pop(source.id, None)
        logger.debug(f"Added source '{source.alias}' ({source.id})")
        return source

    def add_folder_source(
        self,
        alias: str,
        label: str,
        group: str,
        folders: Sequence[str | Path],
        storage_folder: str | Path | None = None,
    ) -> Source:
        """
        Create and register a folder source.

        Args:
            alias: Short unique name
            label: Human readable name
            group: Group name
            folders: Root folders to scan
            storage_folder: Storage folder, defaults to the configured one

        Raises:
            NoStorageLocationError: If no storage folder is available
        """
        storage = Path(storage_folder) if storage_folder else self._storage_folder
        if storage is None:
            raise NoStorageLocationError(
                f"No storage folder available for source '{alias}'.",
                details="Pass a storage folder or call configure() first.",
            )
        return self.add_source(Source(alias, label, group, storage, [Path(f) for f in folders]))

    def get_sources(self) -> list[Source]:
        """Get all sources, sorted by label."""
        return sorted(self._sources.values(), key=lambda source: natural_case_key(source.label))

    def get_sources_grouped(self) -> dict[str, list[Source]]:
        """Get the sources by group name, groups sorted by name."""
        groups: dict[str, list[Source]] = {}
        for source in self.get_sources():
            groups.setdefault(source.group, []).append(source)
        return {name: groups[name] for name in sorted(groups, key=natural_case_key)}

    def source_exists(self, id_or_alias: str) -> bool:
        return self._find_source(id_or_alias) is not None

    def _find_source(self, id_or_alias: str) -> Source | None:
        source = self._sources.get(id_or_alias)
        if source is not None:
            return source
        for candidate in self._sources.values():
            if candidate.alias == id_or_alias:
                return candidate
        return None

    def get_source(self, id_or_alias: str) -> Source:
        """
        Get a source by ID or alias.

        Raises:
            UnknownSourceError: If no such source exists
        """
        source = self._find_source(id_or_alias)
        if source is None:
            available = ", ".join(f"{s.alias} ({s.id})" for s in self.get_sources())
            raise UnknownSourceError(
                f"Unknown source '{id_or_alias}'.",
                details=f"Available sources: {available or 'none'}",
            )
        return source

    def get_registry(self, source: Source) -> StringRegistry:
        """
        Get the registry of a source, loading it from disk on first access.

        Raises:
            RegistryCorruptedError: If the registry file is damaged
        """
        registry = self._registries.get(source.id)
        if registry is None:
            registry = StringRegistry.load(source.registry_path)
            self._registries[source.id] = registry
        return registry

    def set_registry(self, source: Source, registry: StringRegistry) -> None:
        """Replace the registry of a source in a single step."""
        self._registries[source.id] = registry

    # == TRANSLATIONS ==

    def get_table(self, source: Source, locale_name: str) -> TranslationTable:
        """
        Get the translation table of a source for an application locale.

        Raises:
            UnknownLocaleError: If the locale is not an application locale
        """
        locale = self.get_locale(NAMESPACE_APPLICATION, locale_name)
        return self.translations.get_table(source, locale.name, locale.label)

    def get_translator(self, locale_name: str | None = None) -> Translator:
        """
        Get a translator.

        Without a locale name, the translator of the selected application
        locale is returned; it is cached until the selection changes.
        """
        if locale_name is None:
            if self._translator is None:
                self._translator = self._build_translator(self.get_app_locale())
            return self._translator
        return self._build_translator(self.get_locale(NAMESPACE_APPLICATION, locale_name))

    def _build_translator(self, locale: Locale) -> Translator:
        if locale.is_native:
            return Translator(locale, [])
        tables = [self.get_table(source, locale.name) for source in self.get_sources()]
        return Translator(locale, tables)

    def create_generator(self) -> ClientGenerator:
        return ClientGenerator(self)

