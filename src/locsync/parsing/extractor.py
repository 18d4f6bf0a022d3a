"""
Call-site extractor.

Walks a token stream looking for calls to the translation marker functions
and yields the literal text of their first argument. A call is recognized
as ``marker ( "literal" ,`` or ``marker ( "literal" )``; any other first
argument (variables, concatenations, interpolated strings) is not a
translatable literal and is skipped without error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from .profiles import LexerProfile
from .tokenizer import Tokenizer
from .tokens import TRIVIA_KINDS, LexicalDiagnostic, Token, TokenizerOptions, TokenKind

logger = logging.getLogger(__name__)

# Primary, echo, dynamic and echo-dynamic translation markers
MARKERS: frozenset[str] = frozenset({"t", "pt", "td", "ptd"})

# Punctuators that make the following name a member, not a marker function
_MEMBER_ACCESS = frozenset({".", "->", "?->", "::", "?."})


class LanguageFamily(Enum):
    """Where a discovered string is used at runtime."""

    SERVER = "server"
    CLIENT = "client"


class DiscoveredString(NamedTuple):
    """A literal string argument found at a marker call site."""

    text: str
    file: str
    line: int
    family: LanguageFamily


class ExtractionResult(NamedTuple):
    """Strings found in one file plus the lexical problems met on the way."""

    strings: list[DiscoveredString]
    diagnostics: list[LexicalDiagnostic]


class CallSiteExtractor:
    """
    Token based extractor for one language.

    Attributes:
        profile: Lexer profile of the language
        family: Language family assigned to every discovered string
        markers: Names of the translation functions
    """

    def __init__(
        self,
        profile: LexerProfile,
        family: LanguageFamily,
        markers: Iterable[str] = MARKERS,
        options: TokenizerOptions | None = None,
    ) -> None:
        self.profile: LexerProfile = profile
        self.family: LanguageFamily = family
        self.options: TokenizerOptions = options or TokenizerOptions()
        if profile.calls_case_insensitive:
            self.markers: frozenset[str] = frozenset(m.lower() for m in markers)
        else:
            self.markers = frozenset(markers)

    def extract(self, text: str, file: str | Path) -> ExtractionResult:
        """
        Extract the translatable strings of a source buffer.

        Args:
            text: Source code
            file: Path recorded as the location of every string

        Returns:
            ExtractionResult with the strings in source order
        """
        tokenizer = Tokenizer(text, self.profile, self.options, origin=str(file))
        significant = [
            token for token in tokenizer.tokens() if token.kind not in TRIVIA_KINDS
        ]

        strings: list[DiscoveredString] = []
        for index, token in enumerate(significant):
            if not self._is_call_site(significant, index):
                continue

            literal = self._first_argument(significant, index + 2)
            if literal is None:
                logger.debug(
                    f"{file}:{token.line}: skipping {token.lexeme}() call without a literal argument"
                )
                continue

            strings.append(
                DiscoveredString(
                    text=self.profile.unescape(literal.lexeme),
                    file=str(file),
                    line=token.line,
                    family=self.family,
                )
            )

        return ExtractionResult(strings, tokenizer.diagnostics)

    def _is_marker(self, name: str) -> bool:
        if self.profile.calls_case_insensitive:
            name = name.lower()
        return name in self.markers

    def _is_call_site(self, tokens: list[Token], index: int) -> bool:
        token = tokens[index]
        if token.kind is not TokenKind.IDENTIFIER or not self._is_marker(token.lexeme):
            return False
        if index + 1 >= len(tokens) or not tokens[index + 1].is_punctuator("("):
            return False

        if index > 0:
            previous = tokens[index - 1]
            # Declarations of the marker functions themselves
            if previous.kind is TokenKind.KEYWORD and previous.lexeme.lower() == "function":
                return False
            if previous.kind is TokenKind.PUNCTUATOR and previous.lexeme in _MEMBER_ACCESS:
                return False
        return True

    def _first_argument(self, tokens: list[Token], index: int) -> Token | None:
        """Return the literal first argument starting at index, if it is one."""
        if index + 1 >= len(tokens):
            return None

        literal = tokens[index]
        if literal.kind is not TokenKind.STRING_LITERAL:
            return None
        if self.profile.is_interpolated(literal.lexeme):
            return None

        following = tokens[index + 1]
        if following.is_punctuator(",") or following.is_punctuator(")"):
            return literal
        return None
