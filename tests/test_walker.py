"""
Tests for the source tree walker.

This module tests file enumeration, exclusion handling and the recovery
from files that cannot be read or parsed.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from locsync.parsing.extractor import LanguageFamily
from locsync.scanning.source import Source
from locsync.scanning.walker import TreeWalker
from locsync.utils.core.exceptions import ErrorCode, SourceFolderError
from tests.utils import SourceTreeFactory


class TestTreeWalker:
    """Test the TreeWalker class."""

    def test_walk_sample_tree(self, sample_source: Source) -> None:
        """Test that supported, non-excluded files are scanned."""
        result = TreeWalker(sample_source).walk()

        assert result.files_scanned == 2
        assert result.failed_files == []
        assert sorted({found.file for found in result.strings}) == [
            "project1/js/app.js",
            "project1/src/page.php",
        ]
        assert len(result.strings) == 6

    def test_families_follow_file_type(self, sample_source: Source) -> None:
        """Test that JavaScript strings are client strings, PHP strings server strings."""
        result = TreeWalker(sample_source).walk()

        families = {found.file: found.family for found in result.strings}
        assert families["project1/js/app.js"] is LanguageFamily.CLIENT
        assert families["project1/src/page.php"] is LanguageFamily.SERVER

    def test_exclusions(self, sample_source: Source) -> None:
        """Test that excluded folders and files are never read."""
        result = TreeWalker(sample_source).walk()

        found = {s.text for s in result.strings}
        assert "Excluded by folder" not in found
        assert "Excluded by file" not in found
        assert "Unsupported extension" not in found

    def test_without_exclusions(self, sample_tree: Path, tmp_path: Path) -> None:
        """Test that the same tree without exclusions finds more files."""
        source = Source("all", "All", "", tmp_path / "storage", [sample_tree])

        result = TreeWalker(source).walk()

        assert result.files_scanned == 4
        assert {"Excluded by folder", "Excluded by file"} <= {s.text for s in result.strings}

    def test_unreadable_files_are_skipped(self, make_tree: SourceTreeFactory, tmp_path: Path) -> None:
        """Test that decode and syntax errors are recorded and scanning continues."""
        root = make_tree({"good.js": "t('Fine');\n", "broken.py": "def broken(:\n"})
        _ = (root / "binary.js").write_bytes(b"t('\xff\xfe');\n")
        source = Source("main", "Main", "", tmp_path / "storage", [root])

        result = TreeWalker(source).walk()

        assert [s.text for s in result.strings] == ["Fine"]
        assert result.files_scanned == 1
        assert sorted(failed.path for failed in result.failed_files) == [
            f"{root.name}/binary.js",
            f"{root.name}/broken.py",
        ]

    def test_lexical_diagnostics_are_collected(self, make_tree: SourceTreeFactory, tmp_path: Path) -> None:
        """Test that diagnostics are reported per file."""
        root = make_tree({"app.js": "var s = 'broken\nt('after');\n"})
        source = Source("main", "Main", "", tmp_path / "storage", [root])

        result = TreeWalker(source).walk()

        assert [s.text for s in result.strings] == ["after"]
        assert list(result.diagnostics) == [f"{root.name}/app.js"]

    def test_multiple_roots(self, make_tree: SourceTreeFactory, tmp_path: Path) -> None:
        """Test that every root folder is scanned, named by its folder name."""
        first = make_tree({"a.js": "t('A');\n"})
        second = make_tree({"b.js": "t('B');\n"})
        source = Source("main", "Main", "", tmp_path / "storage", [first, second])

        result = TreeWalker(source).walk()

        assert [(s.text, s.file) for s in result.strings] == [
            ("A", "project1/a.js"),
            ("B", "project2/b.js"),
        ]

    def test_symlink_loops_are_visited_once(self, make_tree: SourceTreeFactory, tmp_path: Path) -> None:
        """Test that a directory reached twice is only scanned once."""
        root = make_tree({"sub/a.js": "t('A');\n"})
        (root / "sub" / "loop").symlink_to(root, target_is_directory=True)
        source = Source("main", "Main", "", tmp_path / "storage", [root])

        result = TreeWalker(source).walk()

        assert [s.text for s in result.strings] == ["A"]

    def test_missing_root(self, tmp_path: Path) -> None:
        """Test that a missing root folder is a configuration error."""
        source = Source("main", "Main", "", tmp_path / "storage", [tmp_path / "missing"])

        with pytest.raises(SourceFolderError) as exc_info:
            _ = TreeWalker(source).walk()

        assert exc_info.value.code == ErrorCode.SOURCE_FOLDER_INVALID
