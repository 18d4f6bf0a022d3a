"""
Tests for the profile-driven tokenizer.

This module covers the division/pattern literal disambiguation, recovery
from malformed input, line and column tracking, the unicode mode switch,
and the PHP specific constructs (tags, variables, heredocs).
"""

from __future__ import annotations

import pytest

from locsync.parsing.profiles import JAVASCRIPT_PROFILE, PHP_PROFILE
from locsync.parsing.tokenizer import Tokenizer, tokenize
from locsync.parsing.tokens import Token, TokenizerOptions, TokenKind


def kinds_and_lexemes(tokens: list[Token]) -> list[tuple[TokenKind, str]]:
    return [(token.kind, token.lexeme) for token in tokens]


class TestDivisionDisambiguation:
    """Test the choice between division and pattern literals."""

    def test_division_after_identifiers(self) -> None:
        """Test that '/' after a value is a division operator."""
        tokens = tokenize("a / b / c", JAVASCRIPT_PROFILE)

        assert kinds_and_lexemes(tokens) == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.PUNCTUATOR, "/"),
            (TokenKind.IDENTIFIER, "b"),
            (TokenKind.PUNCTUATOR, "/"),
            (TokenKind.IDENTIFIER, "c"),
            (TokenKind.END_OF_INPUT, ""),
        ]

    def test_pattern_literal_after_operator(self) -> None:
        """Test that '/' after an operator starts a pattern literal."""
        tokens = tokenize("x = /ab+c/gi;", JAVASCRIPT_PROFILE)

        assert (TokenKind.PATTERN_LITERAL, "/ab+c/gi") in kinds_and_lexemes(tokens)

    def test_pattern_literal_after_keyword(self) -> None:
        """Test that '/' after a keyword starts a pattern literal."""
        tokens = tokenize("return /x/;", JAVASCRIPT_PROFILE)

        assert tokens[1].kind is TokenKind.PATTERN_LITERAL
        assert tokens[1].lexeme == "/x/"

    def test_division_after_value_keyword(self) -> None:
        """Test that 'this' produces a value, so '/' divides."""
        tokens = tokenize("this / 2", JAVASCRIPT_PROFILE)

        assert tokens[1].kind is TokenKind.PUNCTUATOR
        assert tokens[1].lexeme == "/"

    def test_division_after_closing_brackets(self) -> None:
        """Test that ')' and ']' put the tokenizer in division mode."""
        tokens = tokenize("(a) / 2; b[0] / 3", JAVASCRIPT_PROFILE)

        slashes = [token for token in tokens if token.lexeme == "/"]
        assert len(slashes) == 2
        assert all(token.kind is TokenKind.PUNCTUATOR for token in slashes)

    def test_division_after_number(self) -> None:
        """Test that numbers are values."""
        tokens = tokenize("10 / 2 / 5", JAVASCRIPT_PROFILE)

        assert [token.kind for token in tokens] == [
            TokenKind.NUMERIC_LITERAL,
            TokenKind.PUNCTUATOR,
            TokenKind.NUMERIC_LITERAL,
            TokenKind.PUNCTUATOR,
            TokenKind.NUMERIC_LITERAL,
            TokenKind.END_OF_INPUT,
        ]

    def test_pattern_with_slash_in_class(self) -> None:
        """Test that a '/' inside a character class does not end the pattern."""
        tokens = tokenize("s.split(/[/\\\\]/)", JAVASCRIPT_PROFILE)

        patterns = [token for token in tokens if token.kind is TokenKind.PATTERN_LITERAL]
        assert [token.lexeme for token in patterns] == ["/[/\\\\]/"]

    def test_malformed_pattern_degrades_to_punctuator(self) -> None:
        """Test recovery when a pattern literal cannot be matched."""
        tokenizer = Tokenizer("x = / unterminated\ny", JAVASCRIPT_PROFILE)
        tokens = list(tokenizer.tokens())

        assert kinds_and_lexemes(tokens)[:4] == [
            (TokenKind.IDENTIFIER, "x"),
            (TokenKind.PUNCTUATOR, "="),
            (TokenKind.PUNCTUATOR, "/"),
            (TokenKind.IDENTIFIER, "unterminated"),
        ]
        assert tokens[-1].kind is TokenKind.END_OF_INPUT
        assert len(tokenizer.diagnostics) == 1
        assert tokenizer.diagnostics[0].line == 1
        assert tokenizer.diagnostics[0].column == 5

    def test_php_has_no_pattern_literals(self) -> None:
        """Test that '/' is always division in PHP."""
        tokens = tokenize("<?php $x = /a/;", PHP_PROFILE)

        slashes = [token for token in tokens if token.lexeme == "/"]
        assert len(slashes) == 2
        assert all(token.kind is TokenKind.PUNCTUATOR for token in slashes)


class TestLiterals:
    """Test string, template and numeric literals."""

    def test_escaped_quote_is_consumed(self) -> None:
        """Test that an escaped quote does not end a string."""
        tokens = tokenize(r"t('It\'s')", JAVASCRIPT_PROFILE)

        assert tokens[2] == Token(TokenKind.STRING_LITERAL, r"'It\'s'", 1, 3)

    def test_unterminated_javascript_string_stops_at_line_end(self) -> None:
        """Test best-effort recovery from an unterminated string."""
        tokenizer = Tokenizer("var s = 'abc\nnext", JAVASCRIPT_PROFILE)
        tokens = list(tokenizer.tokens())

        assert (TokenKind.GARBAGE, "'abc") in kinds_and_lexemes(tokens)
        assert tokens[-2] == Token(TokenKind.IDENTIFIER, "next", 2, 1)
        assert len(tokenizer.diagnostics) == 1

    def test_unterminated_php_string_runs_to_end_of_buffer(self) -> None:
        """Test that languages with multi-line strings consume the rest of the buffer."""
        tokenizer = Tokenizer("<?php t('abc\nmore", PHP_PROFILE)
        tokens = list(tokenizer.tokens())

        assert tokens[-2].kind is TokenKind.GARBAGE
        assert tokens[-2].lexeme == "'abc\nmore"
        assert tokenizer.diagnostics

    def test_php_multiline_string(self) -> None:
        """Test that PHP strings may contain line breaks."""
        tokens = tokenize("<?php $a = 'one\ntwo'; $b;", PHP_PROFILE)

        assert (TokenKind.STRING_LITERAL, "'one\ntwo'") in kinds_and_lexemes(tokens)
        assert tokens[-3] == Token(TokenKind.VARIABLE, "$b", 2, 7)

    def test_template_literal(self) -> None:
        """Test that template literals are a separate token kind."""
        tokens = tokenize("t(`Hello ${name}`)", JAVASCRIPT_PROFILE)

        assert tokens[2].kind is TokenKind.TEMPLATE_LITERAL

    @pytest.mark.parametrize("number", ["0x1F", "0b101", "0o17", "1.5e3", ".5", "10n", "1_000"])
    def test_numeric_literals(self, number: str) -> None:
        """Test the supported numeric literal forms."""
        tokens = tokenize(number, JAVASCRIPT_PROFILE)

        assert tokens[0] == Token(TokenKind.NUMERIC_LITERAL, number, 1, 1)

    def test_longest_punctuator_wins(self) -> None:
        """Test that multi-character operators are single tokens."""
        tokens = tokenize("a >>>= b === c ?. d", JAVASCRIPT_PROFILE)

        punctuators = [t.lexeme for t in tokens if t.kind is TokenKind.PUNCTUATOR]
        assert punctuators == [">>>=", "===", "?."]

    def test_unrecognized_character(self) -> None:
        """Test that unknown characters become garbage tokens."""
        tokenizer = Tokenizer("a \x01 b", JAVASCRIPT_PROFILE)
        tokens = list(tokenizer.tokens())

        assert (TokenKind.GARBAGE, "\x01") in kinds_and_lexemes(tokens)
        assert tokens[-2].lexeme == "b"
        assert len(tokenizer.diagnostics) == 1


class TestPositions:
    """Test line and column tracking."""

    def test_line_and_column_after_line_break(self) -> None:
        """Test that columns restart after a line break."""
        tokens = tokenize("a\n  b", JAVASCRIPT_PROFILE)

        assert tokens[0] == Token(TokenKind.IDENTIFIER, "a", 1, 1)
        assert tokens[1] == Token(TokenKind.IDENTIFIER, "b", 2, 3)

    def test_column_after_multiline_comment(self) -> None:
        """Test that columns are relative to the last break inside a comment."""
        tokens = tokenize("/* x\ny */ z", JAVASCRIPT_PROFILE)

        assert tokens[0] == Token(TokenKind.IDENTIFIER, "z", 2, 6)

    def test_crlf_counts_as_one_line(self) -> None:
        """Test that CRLF is a single line terminator."""
        tokens = tokenize("a\r\nb\rc\nd", JAVASCRIPT_PROFILE)

        assert [(t.lexeme, t.line) for t in tokens[:-1]] == [("a", 1), ("b", 2), ("c", 3), ("d", 4)]

    def test_end_of_input_position(self) -> None:
        """Test that END_OF_INPUT is always the last token."""
        assert tokenize("", JAVASCRIPT_PROFILE) == [Token(TokenKind.END_OF_INPUT, "", 1, 1)]

        tokens = tokenize("ab\n", JAVASCRIPT_PROFILE)
        assert tokens[-1] == Token(TokenKind.END_OF_INPUT, "", 2, 1)


class TestOptions:
    """Test the tokenizer options."""

    def test_trivia_dropped_by_default(self) -> None:
        """Test that whitespace and comments are not emitted by default."""
        tokens = tokenize("a // note\n b", JAVASCRIPT_PROFILE)

        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER,
            TokenKind.IDENTIFIER,
            TokenKind.END_OF_INPUT,
        ]

    def test_emit_whitespace_and_comments(self) -> None:
        """Test that trivia is emitted on request."""
        options = TokenizerOptions(emit_whitespace=True, emit_comments=True)
        tokens = tokenize("a // note\n b", JAVASCRIPT_PROFILE, options)

        assert kinds_and_lexemes(tokens) == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.WHITESPACE, " "),
            (TokenKind.COMMENT, "// note"),
            (TokenKind.LINE_TERMINATOR, "\n"),
            (TokenKind.WHITESPACE, " "),
            (TokenKind.IDENTIFIER, "b"),
            (TokenKind.END_OF_INPUT, ""),
        ]

    def test_comments_do_not_change_division_mode(self) -> None:
        """Test that a comment between a value and '/' keeps division mode."""
        tokens = tokenize("a /* c */ / b", JAVASCRIPT_PROFILE)

        assert tokens[1] == Token(TokenKind.PUNCTUATOR, "/", 1, 11)

    def test_unicode_identifiers(self) -> None:
        """Test that unicode mode accepts non-ASCII identifiers."""
        tokens = tokenize("caf\u00e9 = 1", JAVASCRIPT_PROFILE)

        assert tokens[0] == Token(TokenKind.IDENTIFIER, "caf\u00e9", 1, 1)

    def test_ascii_mode_rejects_non_ascii_identifiers(self) -> None:
        """Test that ASCII mode only knows ASCII identifier characters."""
        tokenizer = Tokenizer("caf\u00e9", JAVASCRIPT_PROFILE, TokenizerOptions(unicode_mode=False))
        tokens = list(tokenizer.tokens())

        assert kinds_and_lexemes(tokens) == [
            (TokenKind.IDENTIFIER, "caf"),
            (TokenKind.GARBAGE, "\u00e9"),
            (TokenKind.END_OF_INPUT, ""),
        ]
        assert tokenizer.diagnostics

    def test_unicode_whitespace_and_line_breaks(self) -> None:
        """Test the unicode whitespace and line separator classes."""
        tokens = tokenize("a\u3000b\u2028c", JAVASCRIPT_PROFILE)

        assert [(t.lexeme, t.line, t.column) for t in tokens[:-1]] == [
            ("a", 1, 1),
            ("b", 1, 3),
            ("c", 2, 1),
        ]

    def test_tokenizer_is_single_use(self) -> None:
        """Test that a tokenizer instance cannot be restarted."""
        tokenizer = Tokenizer("a", JAVASCRIPT_PROFILE)
        _ = list(tokenizer.tokens())

        with pytest.raises(RuntimeError):
            _ = list(tokenizer.tokens())


class TestPhpProfile:
    """Test the PHP specific constructs."""

    def test_inline_text_and_tags(self) -> None:
        """Test switching between inline text and code."""
        tokens = tokenize("Hello <?php echo t('x'); ?> bye", PHP_PROFILE)

        assert kinds_and_lexemes(tokens) == [
            (TokenKind.INLINE_TEXT, "Hello "),
            (TokenKind.OPEN_TAG, "<?php"),
            (TokenKind.KEYWORD, "echo"),
            (TokenKind.IDENTIFIER, "t"),
            (TokenKind.PUNCTUATOR, "("),
            (TokenKind.STRING_LITERAL, "'x'"),
            (TokenKind.PUNCTUATOR, ")"),
            (TokenKind.PUNCTUATOR, ";"),
            (TokenKind.CLOSE_TAG, "?>"),
            (TokenKind.INLINE_TEXT, " bye"),
            (TokenKind.END_OF_INPUT, ""),
        ]

    def test_line_comment_ends_at_close_tag(self) -> None:
        """Test that '?>' terminates a line comment."""
        tokens = tokenize("<?php $a; // note ?>html", PHP_PROFILE)

        assert kinds_and_lexemes(tokens)[-3:] == [
            (TokenKind.CLOSE_TAG, "?>"),
            (TokenKind.INLINE_TEXT, "html"),
            (TokenKind.END_OF_INPUT, ""),
        ]

    def test_hash_comment_and_attribute(self) -> None:
        """Test that '#' starts a comment but '#[' does not."""
        tokens = tokenize("<?php # comment\n#[Attr]\nfunction f() {}", PHP_PROFILE)

        assert tokens[1] == Token(TokenKind.PUNCTUATOR, "#[", 2, 1)
        assert tokens[2].lexeme == "Attr"

    def test_variables_and_case_insensitive_keywords(self) -> None:
        """Test variables and upper case keywords."""
        tokens = tokenize("<?php ECHO $name;", PHP_PROFILE)

        assert kinds_and_lexemes(tokens)[1:3] == [
            (TokenKind.KEYWORD, "ECHO"),
            (TokenKind.VARIABLE, "$name"),
        ]

    def test_heredoc(self) -> None:
        """Test that a heredoc is one string literal token."""
        source = "<?php\n$s = <<<EOT\n    Hello\n    EOT;\n$t;"
        tokens = tokenize(source, PHP_PROFILE)

        assert (TokenKind.STRING_LITERAL, "<<<EOT\n    Hello\n    EOT") in kinds_and_lexemes(tokens)
        assert tokens[-3] == Token(TokenKind.VARIABLE, "$t", 5, 1)

    def test_unterminated_heredoc(self) -> None:
        """Test recovery from a heredoc without closing label."""
        tokenizer = Tokenizer("<?php $s = <<<EOT\nHello\n", PHP_PROFILE)
        tokens = list(tokenizer.tokens())

        assert tokens[-2].kind is TokenKind.GARBAGE
        assert tokenizer.diagnostics

    def test_code_without_close_tag(self) -> None:
        """Test a file that stays in code mode until the end."""
        tokens = tokenize("<?php\nt('a');\n", PHP_PROFILE)

        assert tokens[0].kind is TokenKind.OPEN_TAG
        assert tokens[-1].kind is TokenKind.END_OF_INPUT
        assert tokens[1] == Token(TokenKind.IDENTIFIER, "t", 2, 1)
