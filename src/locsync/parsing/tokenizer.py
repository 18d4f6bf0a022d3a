"""
Profile-driven tokenizer.

Turns a source buffer into a stream of tokens in a single pass, without
building a syntax tree. One implementation serves every language: the
keywords, punctuators and literal syntax come from a LexerProfile, the
character classes come from the unicode mode flag.

The ``/`` character is ambiguous between division and the start of a
pattern literal. The tokenizer tracks whether the previous significant
token produced a value: after identifiers, numbers, literals and closing
brackets ``/`` is division, elsewhere it starts a pattern literal.

Lexical problems never abort tokenization. A best-effort token is emitted,
a LexicalDiagnostic is recorded and scanning continues.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from functools import lru_cache
from typing import NamedTuple

from .charclasses import character_classes
from .profiles import LexerProfile
from .tokens import LexicalDiagnostic, Token, TokenizerOptions, TokenKind

logger = logging.getLogger(__name__)

_NUMBER = (
    r"0[xX][0-9A-Fa-f_]+n?"
    r"|0[bB][01_]+n?"
    r"|0[oO][0-7_]+n?"
    r"|(?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d[\d_]*)?n?"
)

# Tokens after which "/" is a division operator
_VALUE_KINDS = frozenset(
    {
        TokenKind.IDENTIFIER,
        TokenKind.VARIABLE,
        TokenKind.NUMERIC_LITERAL,
        TokenKind.STRING_LITERAL,
        TokenKind.TEMPLATE_LITERAL,
        TokenKind.PATTERN_LITERAL,
    }
)

# Tokens that leave the division state untouched
_NEUTRAL_KINDS = frozenset(
    {
        TokenKind.WHITESPACE,
        TokenKind.COMMENT,
        TokenKind.GARBAGE,
        TokenKind.END_OF_INPUT,
    }
)


class CompiledPatterns(NamedTuple):
    """Compiled regular expressions for one profile and unicode mode."""

    whitespace: re.Pattern[str]
    line_terminator: re.Pattern[str]
    line_break: re.Pattern[str]
    block_comment: re.Pattern[str]
    line_comment: re.Pattern[str] | None
    identifier: re.Pattern[str]
    variable: re.Pattern[str] | None
    number: re.Pattern[str]
    strings: dict[str, re.Pattern[str]]
    rest_of_line: re.Pattern[str]
    template: re.Pattern[str] | None
    heredoc_open: re.Pattern[str] | None
    pattern_literal: re.Pattern[str] | None
    punctuator: re.Pattern[str]
    open_tag: re.Pattern[str] | None
    close_tag: re.Pattern[str] | None


@lru_cache(maxsize=None)
def compile_patterns(profile: LexerProfile, unicode_mode: bool) -> CompiledPatterns:
    """
    Build the regular expressions for a profile.

    Results are cached, so every tokenizer for the same profile and mode
    shares one set of compiled patterns.

    Args:
        profile: Language profile to compile
        unicode_mode: Whether to use the unicode character classes

    Returns:
        The compiled patterns
    """
    classes = character_classes(unicode_mode)
    flags = 0 if unicode_mode else re.ASCII
    breaks = classes.line_break_chars

    start = classes.identifier_start
    part = classes.identifier_part
    if profile.variable_prefix == "$":
        # "$" introduces a variable in this language, it is not a name character
        start = rf"(?!\$){start}"
        part = rf"(?!\$){part}"
    identifier = rf"{start}(?:{part})*"

    variable = None
    if profile.variable_prefix is not None:
        prefix = re.escape(profile.variable_prefix)
        variable = re.compile(rf"{prefix}+{identifier}", flags)

    line_comment = None
    if profile.line_comment_starts:
        starts = "|".join(
            re.escape(lead) + (r"(?!\[)" if lead == "#" else "")
            for lead in profile.line_comment_starts
        )
        if profile.close_tag is not None:
            # A close tag ends a line comment
            body = rf"(?:(?!{re.escape(profile.close_tag)})[^{breaks}])*"
        else:
            body = rf"[^{breaks}]*"
        line_comment = re.compile(rf"(?:{starts}){body}", flags)

    strings: dict[str, re.Pattern[str]] = {}
    for quote in profile.string_quotes:
        escaped = re.escape(quote)
        if profile.multiline_strings:
            body = rf"(?:[^{escaped}\\]|\\[\s\S])*"
        else:
            body = rf"(?:[^{escaped}\\{breaks}]|\\(?:\r\n|[\s\S]))*"
        strings[quote] = re.compile(rf"{escaped}{body}{escaped}", flags)

    template = None
    if profile.template_quote is not None:
        quote = re.escape(profile.template_quote)
        template = re.compile(rf"{quote}(?:[^{quote}\\]|\\[\s\S])*{quote}", flags)

    heredoc_open = None
    if profile.heredoc:
        heredoc_open = re.compile(
            r"<<<[ \t]*(?P<quote>[\"']?)(?P<label>[A-Za-z_][A-Za-z0-9_]*)(?P=quote)\r?\n",
            flags,
        )

    pattern_literal = None
    if profile.has_pattern_literals:
        pattern_literal = re.compile(
            rf"/(?![*/])"
            rf"(?:[^\\/\[{breaks}]|\\[^{breaks}]|\[(?:[^\]\\{breaks}]|\\[^{breaks}])*\])+"
            rf"/(?:{part})*",
            flags,
        )

    punctuators = sorted(profile.punctuators, key=len, reverse=True)
    punctuator = re.compile("|".join(re.escape(p) for p in punctuators), flags)

    open_tag = None
    close_tag = None
    if profile.open_tag_pattern is not None:
        open_tag = re.compile(profile.open_tag_pattern, flags)
    if profile.close_tag is not None:
        close_tag = re.compile(rf"{re.escape(profile.close_tag)}(?:\r?\n)?", flags)

    return CompiledPatterns(
        whitespace=re.compile(rf"{classes.whitespace}+", flags),
        line_terminator=re.compile(classes.line_break_sequence, flags),
        line_break=re.compile(classes.line_break_sequence, flags),
        block_comment=re.compile(r"/\*[\s\S]*?\*/", flags),
        line_comment=line_comment,
        identifier=re.compile(identifier, flags),
        variable=variable,
        number=re.compile(_NUMBER, flags),
        strings=strings,
        rest_of_line=re.compile(rf"[^{breaks}]*", flags),
        template=template,
        heredoc_open=heredoc_open,
        pattern_literal=pattern_literal,
        punctuator=punctuator,
        open_tag=open_tag,
        close_tag=close_tag,
    )


class Tokenizer:
    """
    One-shot tokenizer for a single source buffer.

    A tokenizer instance consumes its buffer once. Create a new instance
    for every input.

    Attributes:
        diagnostics: Recoverable lexical problems found so far
    """

    def __init__(
        self,
        text: str,
        profile: LexerProfile,
        options: TokenizerOptions | None = None,
        origin: str = "<buffer>",
    ) -> None:
        """
        Initialize the tokenizer.

        Args:
            text: Source text to tokenize
            profile: Lexical description of the source language
            options: Behavior switches, defaults to TokenizerOptions()
            origin: Name of the input used in log messages
        """
        self.text: str = text
        self.profile: LexerProfile = profile
        self.options: TokenizerOptions = options or TokenizerOptions()
        self.origin: str = origin
        self.diagnostics: list[LexicalDiagnostic] = []

        self._patterns: CompiledPatterns = compile_patterns(
            profile, self.options.unicode_mode
        )
        self._pos: int = 0
        self._line: int = 1
        self._column: int = 1
        # True: "/" is division; False or None: "/" starts a pattern literal
        self._division_allowed: bool | None = False
        self._in_code: bool = profile.open_tag_pattern is None
        self._consumed: bool = False

    def tokens(self) -> Iterator[Token]:
        """
        Tokenize the buffer.

        Whitespace, line terminator and comment tokens are only yielded when
        the options ask for them. The last token is always END_OF_INPUT.

        Yields:
            Tokens in source order

        Raises:
            RuntimeError: If the tokenizer has already been used
        """
        if self._consumed:
            raise RuntimeError("Tokenizer instances cannot be reused")
        self._consumed = True

        length = len(self.text)
        while self._pos < length:
            if self._in_code:
                token = self._next_code_token()
            else:
                token = self._next_inline_token()
            if self._should_emit(token.kind):
                yield token

        yield self._emit(TokenKind.END_OF_INPUT, "")

    def _should_emit(self, kind: TokenKind) -> bool:
        if kind in (TokenKind.WHITESPACE, TokenKind.LINE_TERMINATOR):
            return self.options.emit_whitespace
        if kind is TokenKind.COMMENT:
            return self.options.emit_comments
        return True

    def _emit(self, kind: TokenKind, lexeme: str) -> Token:
        """Create a token at the current position and advance past it."""
        token = Token(kind, lexeme, self._line, self._column)
        self._pos += len(lexeme)

        breaks = list(self._patterns.line_break.finditer(lexeme))
        if breaks:
            self._line += len(breaks)
            self._column = len(lexeme) - breaks[-1].end() + 1
        else:
            self._column += len(lexeme)

        self._update_division_state(token)
        return token

    def _update_division_state(self, token: Token) -> None:
        if token.kind in _NEUTRAL_KINDS:
            return
        if token.kind in _VALUE_KINDS:
            self._division_allowed = True
        elif token.kind is TokenKind.KEYWORD:
            self._division_allowed = (
                True if self.profile.is_value_keyword(token.lexeme) else None
            )
        elif token.kind is TokenKind.PUNCTUATOR and token.lexeme in (")", "]"):
            self._division_allowed = True
        else:
            self._division_allowed = False

    def _diagnose(self, message: str) -> None:
        diagnostic = LexicalDiagnostic(message, self._line, self._column)
        self.diagnostics.append(diagnostic)
        logger.warning(
            f"{self.origin}:{diagnostic.line}:{diagnostic.column}: {message}"
        )

    def _match(self, pattern: re.Pattern[str] | None) -> str | None:
        if pattern is None:
            return None
        match = pattern.match(self.text, self._pos)
        if match is None or not match.group(0):
            return None
        return match.group(0)

    def _next_inline_token(self) -> Token:
        """Consume text outside of code tags, or the open tag itself."""
        open_tag = self._patterns.open_tag
        assert open_tag is not None

        match = open_tag.search(self.text, self._pos)
        if match is None:
            return self._emit(TokenKind.INLINE_TEXT, self.text[self._pos:])
        if match.start() > self._pos:
            return self._emit(
                TokenKind.INLINE_TEXT, self.text[self._pos:match.start()]
            )

        self._in_code = True
        return self._emit(TokenKind.OPEN_TAG, match.group(0))

    def _next_code_token(self) -> Token:
        patterns = self._patterns
        text = self.text
        char = text[self._pos]

        if lexeme := self._match(patterns.line_terminator):
            return self._emit(TokenKind.LINE_TERMINATOR, lexeme)

        if lexeme := self._match(patterns.whitespace):
            return self._emit(TokenKind.WHITESPACE, lexeme)

        if text.startswith("/*", self._pos):
            if lexeme := self._match(patterns.block_comment):
                return self._emit(TokenKind.COMMENT, lexeme)
            self._diagnose("Unterminated block comment")
            return self._emit(TokenKind.COMMENT, text[self._pos:])

        if lexeme := self._match(patterns.line_comment):
            return self._emit(TokenKind.COMMENT, lexeme)

        if lexeme := self._match(patterns.close_tag):
            if self.profile.open_tag_pattern is not None:
                self._in_code = False
            return self._emit(TokenKind.CLOSE_TAG, lexeme)

        if lexeme := self._match(patterns.variable):
            return self._emit(TokenKind.VARIABLE, lexeme)

        if lexeme := self._match(patterns.identifier):
            if self.profile.is_keyword(lexeme):
                return self._emit(TokenKind.KEYWORD, lexeme)
            return self._emit(TokenKind.IDENTIFIER, lexeme)

        if char.isdigit() or (char == "." and text[self._pos + 1:self._pos + 2].isdigit()):
            if lexeme := self._match(patterns.number):
                return self._emit(TokenKind.NUMERIC_LITERAL, lexeme)

        if char in patterns.strings:
            return self._string_token(char)

        if char == self.profile.template_quote:
            if lexeme := self._match(patterns.template):
                return self._emit(TokenKind.TEMPLATE_LITERAL, lexeme)
            self._diagnose("Unterminated template literal")
            return self._emit(TokenKind.GARBAGE, text[self._pos:])

        if patterns.heredoc_open is not None and text.startswith("<<<", self._pos):
            if token := self._heredoc_token():
                return token

        if char == "/" and patterns.pattern_literal is not None and not self._division_allowed:
            if lexeme := self._match(patterns.pattern_literal):
                return self._emit(TokenKind.PATTERN_LITERAL, lexeme)
            if not text.startswith("/=", self._pos):
                self._diagnose("Malformed pattern literal, treated as division")
                return self._emit(TokenKind.PUNCTUATOR, "/")

        if lexeme := self._match(patterns.punctuator):
            return self._emit(TokenKind.PUNCTUATOR, lexeme)

        self._diagnose(f"Unrecognized character {char!r}")
        return self._emit(TokenKind.GARBAGE, char)

    def _string_token(self, quote: str) -> Token:
        if lexeme := self._match(self._patterns.strings[quote]):
            return self._emit(TokenKind.STRING_LITERAL, lexeme)

        self._diagnose("Unterminated string literal")
        if self.profile.multiline_strings:
            return self._emit(TokenKind.GARBAGE, self.text[self._pos:])
        rest = self._patterns.rest_of_line.match(self.text, self._pos)
        assert rest is not None
        return self._emit(TokenKind.GARBAGE, rest.group(0))

    def _heredoc_token(self) -> Token | None:
        """Consume a heredoc or nowdoc literal, or return None if there is none."""
        heredoc_open = self._patterns.heredoc_open
        assert heredoc_open is not None

        opener = heredoc_open.match(self.text, self._pos)
        if opener is None:
            return None

        label = re.escape(opener.group("label"))
        closing = re.compile(rf"(?m)^[ \t]*{label}(?![A-Za-z0-9_])").search(
            self.text, opener.end()
        )
        if closing is None:
            self._diagnose(f"Unterminated heredoc {opener.group('label')}")
            return self._emit(TokenKind.GARBAGE, self.text[self._pos:])

        return self._emit(TokenKind.STRING_LITERAL, self.text[self._pos:closing.end()])


def tokenize(
    text: str,
    profile: LexerProfile,
    options: TokenizerOptions | None = None,
) -> list[Token]:
    """
    Tokenize a buffer in one call.

    Args:
        text: Source text
        profile: Lexical description of the source language
        options: Behavior switches

    Returns:
        All tokens, ending with END_OF_INPUT
    """
    return list(Tokenizer(text, profile, options).tokens())
