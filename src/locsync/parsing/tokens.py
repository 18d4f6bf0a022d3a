"""
Token model shared by all tokenizer profiles.

Tokens are immutable ``(kind, lexeme, line, column)`` tuples. Lines and
columns are 1-based.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class TokenKind(Enum):
    """Kinds of tokens produced by the tokenizer."""

    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    VARIABLE = "variable"
    STRING_LITERAL = "string_literal"
    TEMPLATE_LITERAL = "template_literal"
    NUMERIC_LITERAL = "numeric_literal"
    PATTERN_LITERAL = "pattern_literal"
    PUNCTUATOR = "punctuator"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    LINE_TERMINATOR = "line_terminator"
    OPEN_TAG = "open_tag"
    CLOSE_TAG = "close_tag"
    INLINE_TEXT = "inline_text"
    GARBAGE = "garbage"
    END_OF_INPUT = "end_of_input"


# Tokens that carry no meaning for call-site detection
TRIVIA_KINDS = frozenset(
    {
        TokenKind.WHITESPACE,
        TokenKind.COMMENT,
        TokenKind.LINE_TERMINATOR,
    }
)


class Token(NamedTuple):
    """A single lexical token."""

    kind: TokenKind
    lexeme: str
    line: int
    column: int

    def is_punctuator(self, value: str) -> bool:
        """Check whether this token is the given punctuator."""
        return self.kind is TokenKind.PUNCTUATOR and self.lexeme == value


class LexicalDiagnostic(NamedTuple):
    """A recoverable lexical problem found while tokenizing."""

    message: str
    line: int
    column: int


@dataclass(frozen=True)
class TokenizerOptions:
    """
    Tokenizer behavior switches.

    Attributes:
        emit_whitespace: Emit WHITESPACE tokens instead of dropping them
        emit_comments: Emit COMMENT tokens instead of dropping them
        unicode_mode: Use unicode character classes for identifiers,
            whitespace and line breaks instead of ASCII-only classes
    """

    emit_whitespace: bool = False
    emit_comments: bool = False
    unicode_mode: bool = True
