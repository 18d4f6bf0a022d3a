"""
Global test configuration fixtures for locsync tests.

This module provides reusable pytest fixtures for building localization
contexts and small sample source trees. Every fixture creates fresh state,
so tests never share a context.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from locsync.context import LocalizationContext
from locsync.scanning.source import Source
from tests.utils import SourceTreeFactory, write_tree


# == SOURCE TREE FIXTURES ==


@pytest.fixture
def make_tree(tmp_path: Path) -> SourceTreeFactory:
    """
    Create a factory writing files below a fresh ``project`` folder.

    The factory takes a mapping of relative path to file content and
    returns the root folder.
    """
    counter = 0

    def factory(files: dict[str, str]) -> Path:
        nonlocal counter
        counter += 1
        return write_tree(tmp_path / f"project{counter}", files)

    return factory


@pytest.fixture
def sample_tree(make_tree: SourceTreeFactory) -> Path:
    """A mixed PHP/JavaScript project using the same text on both sides."""
    return make_tree(
        {
            "src/page.php": (
                "<html><?php\n"
                "echo t('Hello');\n"
                "echo t(\"Hello\");\n"
                "pt('Hello');\n"
                "echo t('Goodbye %1$s', $name);\n"
                "?></html>\n"
            ),
            "js/app.js": "var label = t('Hello');\nvar other = t('Only in client');\n",
            "css/theme.js": "t('Excluded by folder');\n",
            "src/jtokenizer.php": "<?php t('Excluded by file');\n",
            "README.txt": "t('Unsupported extension')\n",
        }
    )


# == CONTEXT FIXTURES ==


@pytest.fixture
def context() -> LocalizationContext:
    """A fresh, unconfigured localization context."""
    return LocalizationContext()


@pytest.fixture
def storage_folder(tmp_path: Path) -> Path:
    """Folder for registries and translation files."""
    folder = tmp_path / "storage"
    _ = folder.mkdir()
    return folder


@pytest.fixture
def configured_context(
    context: LocalizationContext, storage_folder: Path, sample_tree: Path
) -> LocalizationContext:
    """Context with de_DE and fr_FR locales and the sample source."""
    _ = context.add_app_locale("de_DE")
    _ = context.add_app_locale("fr_FR")
    context.configure(storage_folder)
    source = context.add_folder_source("main", "Main application", "Core", [sample_tree])
    _ = source.exclude_folders(["css"]).exclude_files(["JTokenizer"])
    return context


@pytest.fixture
def sample_source(configured_context: LocalizationContext) -> Source:
    """The sample source registered in the configured context."""
    return configured_context.get_source("main")
