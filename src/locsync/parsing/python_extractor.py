"""
Extraction of translatable strings from Python source code.

Python files are parsed with the ``ast`` module instead of the token based
extractor: the interpreter's own parser already knows every string prefix
and escape rule.
"""

from __future__ import annotations

import ast
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import override

from .extractor import MARKERS, DiscoveredString, ExtractionResult, LanguageFamily
from .profiles import escape_lone_surrogates

logger = logging.getLogger(__name__)


class StringExtractor(ast.NodeVisitor):
    """AST visitor collecting the literal first argument of marker calls."""

    def __init__(self, filename: str, markers: Iterable[str] = MARKERS) -> None:
        """
        Initialize the string extractor.

        Args:
            filename: Name of the file being processed (for locations)
            markers: Names of the translation functions
        """
        self.filename: str = filename
        self.markers: frozenset[str] = frozenset(markers)
        self.strings: list[DiscoveredString] = []

    @override
    def visit_Call(self, node: ast.Call) -> None:
        """
        Visit function call nodes to find translation function calls.

        Args:
            node: AST Call node to examine
        """
        if isinstance(node.func, ast.Name) and node.func.id in self.markers:
            first = node.args[0] if node.args else None
            # f-strings are JoinedStr nodes and never match here
            if isinstance(first, ast.Constant) and isinstance(first.value, str):
                self.strings.append(
                    DiscoveredString(
                        text=escape_lone_surrogates(first.value),
                        file=self.filename,
                        line=node.lineno,
                        family=LanguageFamily.SERVER,
                    )
                )
            else:
                logger.debug(
                    f"{self.filename}:{node.lineno}: skipping {node.func.id}() call without a literal argument"
                )

        self.generic_visit(node)


class PythonExtractor:
    """Extractor for Python files with the same interface as CallSiteExtractor."""

    family: LanguageFamily = LanguageFamily.SERVER

    def __init__(self, markers: Iterable[str] = MARKERS) -> None:
        self.markers: frozenset[str] = frozenset(markers)

    def extract(self, text: str, file: str | Path) -> ExtractionResult:
        """
        Extract the translatable strings of a Python module.

        Args:
            text: Module source code
            file: Path recorded as the location of every string

        Returns:
            ExtractionResult with the strings in source order

        Raises:
            SyntaxError: If the source is not valid Python
        """
        tree = ast.parse(text, filename=str(file))
        visitor = StringExtractor(str(file), self.markers)
        visitor.visit(tree)
        visitor.strings.sort(key=lambda found: found.line)
        return ExtractionResult(visitor.strings, [])
