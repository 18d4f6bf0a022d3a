"""
Content-addressed string registry.

The registry of a source maps the hash of every unique discovered text to
its metadata. It is rebuilt by merging the results of a scan and persisted
as JSON next to the source's translation files, so hashes and texts stay
available between runs.

A merge builds the new state completely before swapping it in. Readers
see either the old or the new snapshot, never a mix of both.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Container, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import override

from ..parsing.extractor import DiscoveredString, LanguageFamily
from ..utils.core.exceptions import RegistryCorruptedError
from ..utils.io.atomic import atomic_write_text
from .hashing import string_hash

logger = logging.getLogger(__name__)

REGISTRY_FORMAT_VERSION = 1


@dataclass
class StringEntry:
    """
    One unique translatable text.

    Attributes:
        hash: Content hash of the text
        text: The text as written in the source (unescaped)
        locations: Sorted, deduplicated (file, line) pairs
        families: Language families the text was found in
        call_count: Number of marker calls using the text
    """

    hash: str
    text: str
    locations: list[tuple[str, int]] = field(default_factory=list)
    families: set[LanguageFamily] = field(default_factory=set)
    call_count: int = 0

    def has_family(self, family: LanguageFamily) -> bool:
        return family in self.families

    @property
    def is_client(self) -> bool:
        return LanguageFamily.CLIENT in self.families

    def to_dict(self) -> dict[str, object]:
        return {
            "hash": self.hash,
            "text": self.text,
            "locations": [[file, line] for file, line in self.locations],
            "families": sorted(family.value for family in self.families),
            "call_count": self.call_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> StringEntry:
        """
        Build an entry from its persisted form.

        Raises:
            KeyError, TypeError, ValueError: If the data is malformed
        """
        text = data["text"]
        hash_value = data["hash"]
        if not isinstance(text, str) or not isinstance(hash_value, str):
            raise TypeError("hash and text must be strings")

        raw_locations = data.get("locations", [])
        raw_families = data.get("families", [])
        call_count = data.get("call_count", 0)
        if not isinstance(raw_locations, list) or not isinstance(raw_families, list):
            raise TypeError("locations and families must be lists")
        if not isinstance(call_count, int):
            raise TypeError("call_count must be an integer")

        locations: list[tuple[str, int]] = []
        for item in raw_locations:  # pyright: ignore[reportUnknownVariableType]
            file, line = item  # pyright: ignore[reportUnknownVariableType]
            locations.append((str(file), int(line)))  # pyright: ignore[reportUnknownArgumentType]

        return cls(
            hash=hash_value,
            text=text,
            locations=locations,
            families={LanguageFamily(value) for value in raw_families},  # pyright: ignore[reportUnknownVariableType]
            call_count=call_count,
        )


class StringRegistry:
    """
    The unique strings of one source.

    Iteration yields entries ordered by hash.
    """

    def __init__(self, path: Path | None = None) -> None:
        """
        Initialize an empty registry.

        Args:
            path: File the registry is persisted to
        """
        self.path: Path | None = path
        self._entries: dict[str, StringEntry] = {}

    @property
    def entries(self) -> MappingProxyType[str, StringEntry]:
        return MappingProxyType(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[StringEntry]:
        return iter(self._entries[key] for key in sorted(self._entries))

    def __contains__(self, hash_value: object) -> bool:
        return hash_value in self._entries

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StringRegistry):
            return NotImplemented
        return self._entries == other._entries

    def get(self, hash_value: str) -> StringEntry | None:
        return self._entries.get(hash_value)

    def get_text(self, hash_value: str) -> str | None:
        entry = self._entries.get(hash_value)
        return entry.text if entry is not None else None

    def hashes(self) -> frozenset[str]:
        return frozenset(self._entries)

    def client_hashes(self) -> frozenset[str]:
        """Hashes of the strings used by client-side code."""
        return frozenset(key for key, entry in self._entries.items() if entry.is_client)

    def merge(self, discovered: Iterable[DiscoveredString]) -> StringRegistry:
        """
        Replace the registry content with the strings of a scan.

        Occurrences with identical text collapse into one entry. The result
        does not depend on the order of the discovered strings.

        Args:
            discovered: Every string found by the scan

        Returns:
            This registry, for chaining
        """
        merged: dict[str, StringEntry] = {}
        seen_locations: dict[str, set[tuple[str, int]]] = {}

        for found in discovered:
            hash_value = string_hash(found.text)
            entry = merged.get(hash_value)
            if entry is None:
                entry = StringEntry(hash=hash_value, text=found.text)
                merged[hash_value] = entry
                seen_locations[hash_value] = set()

            entry.call_count += 1
            entry.families.add(found.family)
            seen_locations[hash_value].add((found.file, found.line))

        for hash_value, entry in merged.items():
            entry.locations = sorted(seen_locations[hash_value])

        removed = len(self._entries.keys() - merged.keys())
        self._entries = merged
        logger.debug(f"Registry merged: {len(merged)} strings, {removed} no longer found")
        return self

    def count_untranslated(self, translations: Container[str]) -> int:
        """
        Count the entries that have no translation.

        Args:
            translations: Anything that tells whether a hash is translated,
                such as a TranslationTable

        Returns:
            Number of untranslated entries
        """
        return sum(1 for key in self._entries if key not in translations)

    def to_json(self) -> str:
        """Serialize the registry deterministically."""
        data = {
            "version": REGISTRY_FORMAT_VERSION,
            "strings": [entry.to_dict() for entry in self],
        }
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    def persist(self) -> None:
        """
        Write the registry to its file.

        Raises:
            ValueError: If the registry has no file path
            OSError: If the file cannot be written
        """
        if self.path is None:
            raise ValueError("Registry has no storage path")
        atomic_write_text(self.path, self.to_json())
        logger.debug(f"Registry saved to {self.path} ({len(self)} strings)")

    @classmethod
    def load(cls, path: Path) -> StringRegistry:
        """
        Load a persisted registry.

        A missing file yields an empty registry.

        Args:
            path: Registry file

        Returns:
            The loaded registry, bound to the path

        Raises:
            RegistryCorruptedError: If the file cannot be read or parsed
        """
        registry = cls(path)
        if not path.exists():
            logger.debug(f"No registry file at {path}, starting empty")
            return registry

        try:
            data: object = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise TypeError("root element must be an object")
            raw_strings = data["strings"]  # pyright: ignore[reportUnknownVariableType]
            if not isinstance(raw_strings, list):
                raise TypeError("'strings' must be a list")
            entries = [StringEntry.from_dict(item) for item in raw_strings]  # pyright: ignore[reportUnknownArgumentType, reportUnknownVariableType]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"Registry file {path} is corrupted: {e}")
            raise RegistryCorruptedError(
                f"The string registry file '{path}' cannot be read.",
                details=str(e),
                user_message="The string registry is damaged. Delete it and run a new scan.",
            ) from e

        registry._entries = {entry.hash: entry for entry in entries}
        return registry
