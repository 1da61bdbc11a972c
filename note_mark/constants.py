"""Constants used across the note-mark package."""

from __future__ import annotations

from .models import TokenKind

# Lexer tables
PUNCTUATION = {
    "#": TokenKind.POUND,
    "*": TokenKind.STAR,
    ":": TokenKind.COLON,
    "`": TokenKind.BACKQUOTE,
    ">": TokenKind.GT,
    "-": TokenKind.HYPHEN,
    "|": TokenKind.VERTICAL_BAR,
    ".": TokenKind.DOT,
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    "{": TokenKind.OPEN_BRACE,
    "}": TokenKind.CLOSE_BRACE,
    "[": TokenKind.OPEN_BRACKET,
    "]": TokenKind.CLOSE_BRACKET,
}
WHITESPACE = {" ": TokenKind.SPACE, "\t": TokenKind.TAB}
ESCAPABLE = frozenset(PUNCTUATION) | {"\\"}
WHITESPACE_KINDS = frozenset(WHITESPACE.values())

# Grammar limits
MAX_HEADLINE_LEVEL = 6
DEFAULT_MAX_NESTING_DEPTH = 32

# Table of contents
DEFAULT_TOC_DEPTH = 3

# Stringifier
DEFAULT_WIDTH = 20
FORMAT_INDENT = "    "

# File handling
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".txt")
