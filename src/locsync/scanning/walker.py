"""
Source tree walker.

Enumerates the files of a source depth-first, applies the source's
exclusion rules and runs the matching extractor on every supported file.
Files that cannot be read or parsed are recorded and skipped so that one
bad file never aborts the scan of a whole project.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple

from ..parsing.extractor import DiscoveredString
from ..parsing.languages import get_extractor
from ..parsing.tokens import LexicalDiagnostic
from ..utils.core.exceptions import SourceFolderError
from .source import Source

logger = logging.getLogger(__name__)


class FileScanError(NamedTuple):
    """A file that was skipped because it could not be processed."""

    path: str
    reason: str


@dataclass
class ScanResult:
    """Everything found while walking a source."""

    strings: list[DiscoveredString] = field(default_factory=list)
    files_scanned: int = 0
    failed_files: list[FileScanError] = field(default_factory=list)
    diagnostics: dict[str, list[LexicalDiagnostic]] = field(default_factory=dict)


class TreeWalker:
    """
    Walks the root folders of a source.

    Locations are recorded relative to the scanned root, prefixed with the
    root's folder name, so registries do not depend on where the project
    is checked out.
    """

    def __init__(self, source: Source) -> None:
        self.source: Source = source

    def walk(self) -> ScanResult:
        """
        Scan every root folder of the source.

        Returns:
            ScanResult with all discovered strings

        Raises:
            SourceFolderError: If a root folder is missing or not a directory
        """
        result = ScanResult()
        visited: set[Path] = set()

        for root in self.source.folders:
            if not root.is_dir():
                logger.error(f"Source folder does not exist: {root}")
                raise SourceFolderError(
                    f"Source folder '{root}' of source '{self.source.alias}' does not exist or is not a directory."
                )
            self._walk_folder(root, root, result, visited)

        logger.info(
            f"Scanned {result.files_scanned} files in source '{self.source.alias}': "
            + f"{len(result.strings)} strings, {len(result.failed_files)} failed files"
        )
        return result

    def _walk_folder(
        self, root: Path, folder: Path, result: ScanResult, visited: set[Path]
    ) -> None:
        resolved = folder.resolve()
        if resolved in visited:
            logger.debug(f"Skipping already visited folder {folder}")
            return
        visited.add(resolved)

        try:
            entries = sorted(folder.iterdir(), key=lambda entry: entry.name)
        except OSError as e:
            logger.warning(f"Cannot list folder {folder}: {e}")
            result.failed_files.append(FileScanError(str(folder), str(e)))
            return

        for entry in entries:
            if entry.is_dir():
                if self.source.is_folder_excluded(entry.name):
                    logger.debug(f"Skipping excluded folder {entry}")
                    continue
                self._walk_folder(root, entry, result, visited)
            elif entry.is_file():
                if self.source.is_file_excluded(entry.name):
                    logger.debug(f"Skipping excluded file {entry}")
                    continue
                self._scan_file(root, entry, result)

    def _scan_file(self, root: Path, path: Path, result: ScanResult) -> None:
        extractor = get_extractor(path)
        if extractor is None:
            return

        location = (Path(root.name) / path.relative_to(root)).as_posix()
        try:
            text = path.read_text(encoding="utf-8")
            extraction = extractor.extract(text, location)
        except (OSError, UnicodeDecodeError, SyntaxError, ValueError) as e:
            logger.warning(f"Skipping file {path}: {e}")
            result.failed_files.append(FileScanError(location, str(e)))
            return

        result.files_scanned += 1
        result.strings.extend(extraction.strings)
        if extraction.diagnostics:
            result.diagnostics[location] = extraction.diagnostics
