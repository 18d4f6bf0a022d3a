"""
Registry of the supported source languages.

Maps file extensions to the extractor that understands them. The table is
static; unsupported extensions simply have no entry.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .extractor import CallSiteExtractor, ExtractionResult, LanguageFamily
from .profiles import JAVASCRIPT_PROFILE, PHP_PROFILE
from .python_extractor import PythonExtractor


class LanguageExtractor(Protocol):
    """Anything that turns a source buffer into discovered strings."""

    family: LanguageFamily

    def extract(self, text: str, file: str | Path) -> ExtractionResult: ...


_JAVASCRIPT = CallSiteExtractor(JAVASCRIPT_PROFILE, LanguageFamily.CLIENT)
_PHP = CallSiteExtractor(PHP_PROFILE, LanguageFamily.SERVER)
_PYTHON = PythonExtractor()

EXTRACTORS: dict[str, LanguageExtractor] = {
    ".js": _JAVASCRIPT,
    ".mjs": _JAVASCRIPT,
    ".cjs": _JAVASCRIPT,
    ".php": _PHP,
    ".py": _PYTHON,
}


def get_extractor(path: str | Path) -> LanguageExtractor | None:
    """
    Get the extractor for a file.

    Args:
        path: File path, only the extension is used

    Returns:
        The extractor, or None if the file type is not supported
    """
    return EXTRACTORS.get(Path(path).suffix.lower())


def is_file_supported(path: str | Path) -> bool:
    """Check whether a file can be scanned."""
    return get_extractor(path) is not None


def get_supported_extensions() -> list[str]:
    """Get the sorted list of supported file extensions."""
    return sorted(EXTRACTORS)
