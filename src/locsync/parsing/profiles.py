"""
Lexer profiles for the supported source languages.

A profile is pure data: the keywords, punctuators and literal syntax of one
language, plus the rules to turn a string literal lexeme back into the text
it denotes. The tokenizer has a single code path that is driven entirely by
the active profile.

Usage Examples:
    Tokenize a JavaScript buffer:
        >>> from locsync.parsing.tokenizer import Tokenizer
        >>> tokens = list(Tokenizer('t("Hello")', JAVASCRIPT_PROFILE).tokens())

    Decode a PHP literal:
        >>> PHP_PROFILE.unescape("'It\\\\'s'")
        "It's"
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LexerProfile:
    """
    Lexical description of one source language.

    Attributes:
        name: Human-readable language name
        keywords: Reserved words, emitted as KEYWORD tokens
        value_keywords: Keywords that produce a value (division may follow)
        punctuators: Operator and delimiter lexemes
        keywords_case_insensitive: Whether keyword lookup ignores case
        calls_case_insensitive: Whether function names ignore case
        has_pattern_literals: Whether ``/`` may start a pattern literal
        multiline_strings: Whether quoted strings may contain raw line breaks
        line_comment_starts: Lexemes that open a comment running to end of line
        variable_prefix: Sigil that starts a variable name, if any
        template_quote: Quote character of template literals, if any
        heredoc: Whether ``<<<LABEL`` heredoc/nowdoc literals exist
        open_tag_pattern: Pattern of the tag that switches into code mode;
            None when the whole buffer is code
        close_tag: Lexeme that switches back to inline text mode
        unescape: Decodes a string literal lexeme into its text
        is_interpolated: Tells whether a string literal embeds expressions
    """

    name: str
    keywords: frozenset[str]
    value_keywords: frozenset[str]
    punctuators: tuple[str, ...]
    unescape: Callable[[str], str]
    is_interpolated: Callable[[str], bool]
    keywords_case_insensitive: bool = False
    calls_case_insensitive: bool = False
    has_pattern_literals: bool = False
    multiline_strings: bool = False
    line_comment_starts: tuple[str, ...] = ("//",)
    variable_prefix: str | None = None
    template_quote: str | None = None
    heredoc: bool = False
    open_tag_pattern: str | None = None
    close_tag: str | None = None
    string_quotes: tuple[str, ...] = field(default=('"', "'"))

    def is_keyword(self, word: str) -> bool:
        """Check whether a word is a reserved word of the language."""
        if self.keywords_case_insensitive:
            return word.lower() in self.keywords
        return word in self.keywords

    def is_value_keyword(self, word: str) -> bool:
        """Check whether a keyword produces a value."""
        if self.keywords_case_insensitive:
            return word.lower() in self.value_keywords
        return word in self.value_keywords


# == JAVASCRIPT ==

_JS_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

_JS_ESCAPE_PATTERN = re.compile(
    r"\\(?:"
    r"u\{(?P<codepoint>[0-9A-Fa-f]+)\}"
    r"|u(?P<unicode>[0-9A-Fa-f]{4})"
    r"|x(?P<hex>[0-9A-Fa-f]{2})"
    r"|(?P<octal>[0-7]{1,3})"
    r"|(?P<continuation>\r\n|[\r\n\u2028\u2029])"
    r"|(?P<char>[\s\S])"
    r")"
)


_LONE_SURROGATE_PATTERN = re.compile(r"[\ud800-\udfff]")


def escape_lone_surrogates(text: str) -> str:
    """
    Replace unpaired surrogates with their ``\\uXXXX`` escape text.

    A lone surrogate cannot be encoded as UTF-8, so it could neither be
    hashed nor written to a registry or translation file.

    Args:
        text: Decoded literal text

    Returns:
        Text that is safe to encode as UTF-8
    """
    return _LONE_SURROGATE_PATTERN.sub(lambda match: f"\\u{ord(match.group(0)):04x}", text)


def _join_surrogates(text: str) -> str:
    """Combine UTF-16 surrogate pairs produced by ``\\uXXXX`` escapes."""
    if not any(0xD800 <= ord(char) <= 0xDFFF for char in text):
        return text
    joined = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")
    return escape_lone_surrogates(joined)


def unescape_javascript(lexeme: str) -> str:
    """
    Decode a JavaScript string literal lexeme.

    Args:
        lexeme: The literal including its surrounding quotes

    Returns:
        The text the literal denotes
    """
    body = lexeme[1:-1]
    if "\\" not in body:
        return body

    def replace(match: re.Match[str]) -> str:
        groups = match.groupdict()
        if groups["codepoint"] is not None:
            value = int(groups["codepoint"], 16)
            return chr(value) if value <= 0x10FFFF else ""
        if groups["unicode"] is not None:
            return chr(int(groups["unicode"], 16))
        if groups["hex"] is not None:
            return chr(int(groups["hex"], 16))
        if groups["octal"] is not None:
            return chr(int(groups["octal"], 8) & 0xFF)
        if groups["continuation"] is not None:
            return ""
        char = groups["char"]
        return _JS_SIMPLE_ESCAPES.get(char, char)

    return _join_surrogates(_JS_ESCAPE_PATTERN.sub(replace, body))


def _never_interpolated(_lexeme: str) -> bool:
    return False


JAVASCRIPT_PROFILE = LexerProfile(
    name="JavaScript",
    keywords=frozenset(
        {
            "await", "break", "case", "catch", "class", "const", "continue",
            "debugger", "default", "delete", "do", "else", "enum", "export",
            "extends", "false", "finally", "for", "function", "if", "implements",
            "import", "in", "instanceof", "interface", "let", "new", "null",
            "package", "private", "protected", "public", "return", "static",
            "super", "switch", "this", "throw", "true", "try", "typeof", "var",
            "void", "while", "with", "yield",
        }
    ),
    value_keywords=frozenset({"this", "super", "true", "false", "null"}),
    punctuators=(
        ">>>=", "...", "===", "!==", "**=", "<<=", ">>=", ">>>", "??=", "&&=",
        "||=", "=>", "**", "??", "?.", "++", "--", "+=", "-=", "*=", "%=", "&=",
        "|=", "^=", "==", "!=", "<=", ">=", "&&", "||", "<<", ">>", ";", ",",
        "<", ">", ".", "]", "}", "(", ")", "[", "=", ":", "|", "&", "-", "{",
        "^", "!", "?", "*", "/=", "/", "%", "~", "+", "@", "#",
    ),
    unescape=unescape_javascript,
    is_interpolated=_never_interpolated,
    has_pattern_literals=True,
    template_quote="`",
)


# == PHP ==

_PHP_DOUBLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}

_PHP_DOUBLE_ESCAPE_PATTERN = re.compile(
    r"\\(?:"
    r"(?P<simple>[nrtvef\\$\"])"
    r"|(?P<octal>[0-7]{1,3})"
    r"|x(?P<hex>[0-9A-Fa-f]{1,2})"
    r"|u\{(?P<codepoint>[0-9A-Fa-f]+)\}"
    r")"
)

_PHP_SINGLE_ESCAPE_PATTERN = re.compile(r"\\([\\'])")

_PHP_INTERPOLATION_PATTERN = re.compile(r"(?:^|[^\\])(?:\\\\)*\$(?:[^\W\d]|\{)")

_PHP_HEREDOC_OPEN_PATTERN = re.compile(
    r"<<<[ \t]*(?P<quote>[\"']?)(?P<label>[A-Za-z_][A-Za-z0-9_]*)(?P=quote)\r?\n"
)


def _unescape_php_double(body: str, quote_escape: bool = True) -> str:
    def replace(match: re.Match[str]) -> str:
        groups = match.groupdict()
        if groups["simple"] is not None:
            char = groups["simple"]
            if char == '"' and not quote_escape:
                return match.group(0)
            return _PHP_DOUBLE_ESCAPES[char]
        if groups["octal"] is not None:
            return chr(int(groups["octal"], 8) & 0xFF)
        if groups["hex"] is not None:
            return chr(int(groups["hex"], 16))
        value = int(groups["codepoint"], 16)
        if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
            return match.group(0)
        return chr(value)

    return _PHP_DOUBLE_ESCAPE_PATTERN.sub(replace, body)


def split_heredoc(lexeme: str) -> tuple[bool, str]:
    """
    Split a heredoc or nowdoc lexeme into its kind and raw body.

    The indentation of the closing label is removed from every body line.

    Args:
        lexeme: The complete ``<<<LABEL ... LABEL`` lexeme

    Returns:
        Tuple of (is_nowdoc, body)
    """
    opener = _PHP_HEREDOC_OPEN_PATTERN.match(lexeme)
    if opener is None:
        return False, lexeme

    label = opener.group("label")
    rest = lexeme[opener.end():]
    closing = rest.rfind(label)
    body_and_indent = rest[:closing]

    # Whatever follows the last line break is the closing label's indentation
    last_break = max(body_and_indent.rfind("\n"), body_and_indent.rfind("\r"))
    if last_break == -1:
        indent = body_and_indent
        body = ""
    else:
        indent = body_and_indent[last_break + 1:]
        body = body_and_indent[:last_break]
        if body.endswith("\r"):
            body = body[:-1]

    if indent:
        lines = body.splitlines(keepends=True)
        body = "".join(
            line[len(indent):] if line.startswith(indent) else line.lstrip(" \t")
            for line in lines
        )

    return opener.group("quote") == "'", body


def unescape_php(lexeme: str) -> str:
    """
    Decode a PHP string literal lexeme.

    Handles single-quoted, double-quoted, heredoc and nowdoc literals.

    Args:
        lexeme: The complete literal lexeme

    Returns:
        The text the literal denotes
    """
    if lexeme.startswith("<<<"):
        is_nowdoc, body = split_heredoc(lexeme)
        if is_nowdoc:
            return body
        return _unescape_php_double(body, quote_escape=False)

    body = lexeme[1:-1]
    if lexeme[0] == "'":
        return _PHP_SINGLE_ESCAPE_PATTERN.sub(r"\1", body)
    return _unescape_php_double(body)


def is_php_interpolated(lexeme: str) -> bool:
    """
    Check whether a PHP string literal embeds variables.

    Single-quoted strings and nowdocs never interpolate.

    Args:
        lexeme: The complete literal lexeme

    Returns:
        True if the literal contains an unescaped variable reference
    """
    if lexeme.startswith("<<<"):
        is_nowdoc, body = split_heredoc(lexeme)
        if is_nowdoc:
            return False
    elif lexeme.startswith('"'):
        body = lexeme[1:-1]
    else:
        return False
    return _PHP_INTERPOLATION_PATTERN.search(body) is not None


PHP_PROFILE = LexerProfile(
    name="PHP",
    keywords=frozenset(
        {
            "abstract", "and", "array", "as", "break", "callable", "case",
            "catch", "class", "clone", "const", "continue", "declare",
            "default", "do", "echo", "else", "elseif", "empty", "enddeclare",
            "endfor", "endforeach", "endif", "endswitch", "endwhile", "enum",
            "extends", "final", "finally", "fn", "for", "foreach", "function",
            "global", "goto", "if", "implements", "include", "include_once",
            "instanceof", "insteadof", "interface", "isset", "list", "match",
            "namespace", "new", "or", "print", "private", "protected",
            "public", "readonly", "require", "require_once", "return",
            "static", "switch", "throw", "trait", "try", "unset", "use", "var",
            "while", "xor", "yield",
        }
    ),
    value_keywords=frozenset(),
    punctuators=(
        "<=>", "===", "!==", "**=", "...", "?->", "<<=", ">>=", "??=", "->",
        "=>", "::", "++", "--", "+=", "-=", "*=", "/=", ".=", "%=", "&=", "|=",
        "^=", "==", "!=", "<>", "<=", ">=", "&&", "||", "<<", ">>", "??", "**",
        ";", ",", "<", ">", ".", "]", "}", "(", ")", "[", "=", ":", "|", "&",
        "-", "{", "^", "!", "?", "*", "/", "%", "~", "+", "@", "\\", "$", "#[",
    ),
    unescape=unescape_php,
    is_interpolated=is_php_interpolated,
    keywords_case_insensitive=True,
    calls_case_insensitive=True,
    multiline_strings=True,
    line_comment_starts=("//", "#"),
    variable_prefix="$",
    template_quote="`",
    heredoc=True,
    open_tag_pattern=r"<\?php(?![A-Za-z0-9_])|<\?=|<\?(?!xml)",
    close_tag="?>",
)
