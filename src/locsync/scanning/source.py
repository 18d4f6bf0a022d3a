"""
Sources: named, independently configured trees of files to scan.

A source knows its root folders, its exclusion rules and where its
registry and translation files live. Folder exclusion matches directory
names exactly; file exclusion matches any case-insensitive substring of
the file name.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import override


class Source:
    """
    A folder based scanning unit.

    Attributes:
        alias: Short unique name, used in storage file names
        label: Human readable name
        group: Name of the group the source is listed under
        storage_folder: Folder holding the registry and translation files
        folders: Root folders to scan
    """

    def __init__(
        self,
        alias: str,
        label: str,
        group: str,
        storage_folder: Path,
        folders: Sequence[Path],
    ) -> None:
        """
        Initialize the source.

        Args:
            alias: Short unique name, used in storage file names
            label: Human readable name
            group: Name of the group the source is listed under
            storage_folder: Folder holding the registry and translation files
            folders: Root folders to scan, at least one

        Raises:
            ValueError: If no root folder is given
        """
        if not folders:
            raise ValueError(f"Source '{alias}' needs at least one folder to scan")

        self.alias: str = alias
        self.label: str = label
        self.group: str = group
        self.storage_folder: Path = Path(storage_folder)
        self.folders: tuple[Path, ...] = tuple(Path(folder) for folder in folders)
        self._excluded_folders: set[str] = set()
        self._excluded_files: set[str] = set()

    @property
    def id(self) -> str:
        """Stable identifier derived from the root folders."""
        joined = "\n".join(str(folder) for folder in self.folders)
        return hashlib.md5(joined.encode("utf-8"), usedforsecurity=False).hexdigest()

    @property
    def excluded_folders(self) -> frozenset[str]:
        return frozenset(self._excluded_folders)

    @property
    def excluded_files(self) -> frozenset[str]:
        return frozenset(self._excluded_files)

    def exclude_folder(self, name: str) -> Source:
        """Exclude every directory with exactly this name."""
        self._excluded_folders.add(name)
        return self

    def exclude_folders(self, names: Iterable[str]) -> Source:
        """Exclude every directory whose name is in the list."""
        for name in names:
            _ = self.exclude_folder(name)
        return self

    def exclude_files(self, fragments: Iterable[str]) -> Source:
        """Exclude every file whose name contains one of the fragments."""
        for fragment in fragments:
            if fragment:
                self._excluded_files.add(fragment.casefold())
        return self

    def is_folder_excluded(self, name: str) -> bool:
        """Check a directory name against the exact-name exclusions."""
        return name in self._excluded_folders

    def is_file_excluded(self, name: str) -> bool:
        """Check a file name against the case-insensitive substring exclusions."""
        folded = name.casefold()
        return any(fragment in folded for fragment in self._excluded_files)

    @property
    def registry_path(self) -> Path:
        """Path of the persisted string registry."""
        return self.storage_folder / f"{self.alias}-strings.json"

    def server_file(self, locale_name: str) -> Path:
        """Path of the editable translation file for a locale."""
        return self.storage_folder / f"{locale_name}-{self.alias}-server.ini"

    def client_file(self, locale_name: str) -> Path:
        """Path of the generated client translation file for a locale."""
        return self.storage_folder / f"{locale_name}-{self.alias}-client.ini"

    def is_scan_available(self) -> bool:
        """Check whether the source has been scanned at least once."""
        return self.registry_path.exists()

    @override
    def __repr__(self) -> str:
        return f"Source(alias={self.alias!r}, label={self.label!r}, folders={[str(f) for f in self.folders]!r})"
