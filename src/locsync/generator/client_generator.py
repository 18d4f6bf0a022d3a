"""
Client library generator.

Renders the translations of the client-side strings into JavaScript files
that a browser can load: one file per application locale plus the support
libraries that compute string hashes and perform the lookup. An empty
output folder disables the generation without error.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING

from ..utils.io.atomic import atomic_write_text

if TYPE_CHECKING:
    from ..context import LocalizationContext
    from ..locales.locale import Locale

logger = logging.getLogger(__name__)

# Support files shipped with the package, in loading order
LIBRARY_FILES: tuple[str, ...] = ("md5.min.js", "translator.js")

CACHE_KEY_FILE = "cachekey.txt"

# Name of the global object defined by translator.js
TRANSLATOR_GLOBAL = "AppLocalize_Translator"

GENERATOR_VERSION = "1"


class ClientGenerator:
    """Writes the client libraries for the state of a context."""

    def __init__(self, context: LocalizationContext) -> None:
        self.context: LocalizationContext = context

    @property
    def folder(self) -> Path | None:
        """Output folder, or None if the generation is disabled."""
        folder = self.context.client_libraries_folder
        return Path(folder) if folder else None

    @property
    def is_enabled(self) -> bool:
        return self.folder is not None

    def get_target_locales(self) -> list[Locale]:
        """Application locales that need a file, sorted by name."""
        locales = [locale for locale in self.context.get_app_locales() if not locale.is_native]
        return sorted(locales, key=lambda locale: locale.name)

    def get_artifact_list(self) -> list[Path]:
        """
        Get the files that write_files() produces, without writing anything.

        Returns:
            Locale files sorted by locale name followed by the support
            files; empty when the generation is disabled
        """
        folder = self.folder
        if folder is None:
            return []
        files = [folder / f"locale-{locale.name}.js" for locale in self.get_target_locales()]
        files.extend(folder / name for name in LIBRARY_FILES)
        return files

    def get_cache_key(self) -> str:
        """Key identifying the current output settings."""
        locales = ",".join(locale.name for locale in self.get_target_locales())
        return f"{GENERATOR_VERSION}|{self.context.client_cache_key}|{locales}"

    def is_up_to_date(self) -> bool:
        """Check whether every artifact exists and was written with the current key."""
        folder = self.folder
        if folder is None:
            return True
        key_file = folder / CACHE_KEY_FILE
        if not key_file.exists() or key_file.read_text(encoding="utf-8") != self.get_cache_key():
            return False
        return all(path.exists() for path in self.get_artifact_list())

    def render_locale_file(self, locale: Locale) -> str:
        """
        Render the translation file of one locale.

        Every client-side string of every source is included; untranslated
        strings map to their source text.
        """
        strings: dict[str, str] = {}
        for source in self.context.get_sources():
            registry = self.context.get_registry(source)
            table = self.context.get_table(source, locale.name)
            for entry in registry:
                if not entry.is_client:
                    continue
                translation = table.get(entry.hash)
                strings[entry.hash] = translation if translation is not None else entry.text

        payload = json.dumps(strings, sort_keys=True, ensure_ascii=False)
        return f"/* {locale.label} */\n{TRANSLATOR_GLOBAL}.a({payload});\n"

    def write_files(self, force: bool = False) -> list[Path]:
        """
        Write the client libraries.

        Args:
            force: Write even if the files are up to date

        Returns:
            The files that were written

        Raises:
            OSError: If a file cannot be written
        """
        folder = self.folder
        if folder is None:
            logger.debug("Client libraries folder not set, skipping generation")
            return []

        if not force and self.is_up_to_date():
            logger.debug(f"Client libraries in {folder} are up to date")
            return []

        written: list[Path] = []
        for locale in self.get_target_locales():
            path = folder / f"locale-{locale.name}.js"
            atomic_write_text(path, self.render_locale_file(locale))
            written.append(path)

        assets = resources.files("locsync.generator") / "assets"
        for name in LIBRARY_FILES:
            path = folder / name
            atomic_write_text(path, (assets / name).read_text(encoding="utf-8"))
            written.append(path)

        atomic_write_text(folder / CACHE_KEY_FILE, self.get_cache_key())
        logger.info(f"Wrote {len(written)} client library files to {folder}")
        return written
