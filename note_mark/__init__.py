"""
note-mark: a configurable Markdown to HTML converter.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    note-mark README.md --toc

Library Usage:
    from note_mark import Markdown, parse

    html = Markdown().execute("# Hello, world!")
    tree = parse("- item\\n  - nested")
    html, toc = Markdown().execute_with_toc(text)
"""

from .config import (
    DEFAULT_PARSER_CONFIG,
    ConfigError,
    HeadlineEnding,
    IndentRule,
    IndentStyle,
    NoteMarkConfig,
    ParagraphEnding,
    ParserConfig,
)
from .elements import DocumentNode, ElementNode, ElementTag, TextNode, get_text
from .exceptions import ConvertError, ConvertFileError, FileTooLargeError
from .lexer import lex
from .markdown import Markdown
from .models import MarkdownTree, Token, TokenKind
from .parser import parse, parse_tokens
from .stringifier import Stringifier
from .toc import TocMaker, allocate_anchor_id
from .transformer import transform

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "lex",
    "parse",
    "parse_tokens",
    "transform",
    "Markdown",
    "Stringifier",
    "TocMaker",
    "allocate_anchor_id",
    # Configuration
    "DEFAULT_PARSER_CONFIG",
    "HeadlineEnding",
    "IndentRule",
    "IndentStyle",
    "NoteMarkConfig",
    "ParagraphEnding",
    "ParserConfig",
    # Data models
    "DocumentNode",
    "ElementNode",
    "ElementTag",
    "MarkdownTree",
    "TextNode",
    "Token",
    "TokenKind",
    "get_text",
    # Exceptions
    "ConfigError",
    "ConvertError",
    "ConvertFileError",
    "FileTooLargeError",
    # Version
    "__version__",
]
