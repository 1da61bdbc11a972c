"""Lexer for the Markdown syntax.

The text is first split into one token per character (or per line break),
then adjacent text tokens are joined, and finally whitespace-only lines are
cut so that they behave like empty lines.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .constants import ESCAPABLE, PUNCTUATION, WHITESPACE, WHITESPACE_KINDS
from .models import Token, TokenKind

logger = logging.getLogger(__name__)


def tokenize(text: str) -> Iterator[Token]:
    r"""Split `text` into raw tokens in a single forward scan.

    Recognized punctuation, spaces and tabs become tokens of their own kind.
    ``"\n"`` and ``"\r\n"`` become one ``BREAK`` token, while a lone ``"\r"`` is
    text. A backslash before a recognized punctuation mark or another backslash
    yields a ``TEXT`` token covering only the escaped character. Every other
    character yields a one-character ``TEXT`` token.

    Args:
        text: The Markdown source.

    Yields:
        Token: Tokens in source order.

    Examples:
        [token.kind for token in tokenize("# A")]  # [POUND, SPACE, TEXT]
        list(tokenize(r"\#"))  # [Token(TEXT, 1, 1)]
    """
    index = 0
    length = len(text)

    while index < length:
        char = text[index]
        kind = PUNCTUATION.get(char) or WHITESPACE.get(char)

        if kind is not None:
            yield Token(kind, index, 1)
            index += 1
        elif char == "\n":
            yield Token(TokenKind.BREAK, index, 1)
            index += 1
        elif char == "\r" and text.startswith("\n", index + 1):
            yield Token(TokenKind.BREAK, index, 2)
            index += 2
        elif char == "\\" and index + 1 < length and text[index + 1] in ESCAPABLE:
            # The backslash is dropped; only the escaped character is kept
            yield Token(TokenKind.TEXT, index + 1, 1)
            index += 2
        else:
            yield Token(TokenKind.TEXT, index, 1)
            index += 1


def join_text(tokens: Iterable[Token]) -> Iterator[Token]:
    """Merge runs of adjacent ``TEXT`` tokens into single tokens.

    Only tokens that touch in the source are merged, so an escaped character
    (whose backslash has been dropped) starts a new run. Other tokens pass
    through unchanged and in order.

    Args:
        tokens: Tokens, typically from `tokenize`.

    Yields:
        Token: Tokens with text runs joined.
    """
    pending: Token | None = None

    for token in tokens:
        if pending is not None:
            if token.kind is TokenKind.TEXT and token.start == pending.end:
                pending = Token(TokenKind.TEXT, pending.start, pending.length + token.length)
                continue
            yield pending
            pending = None

        if token.kind is TokenKind.TEXT:
            pending = token
        else:
            yield token

    if pending is not None:
        yield pending


def cut_blank_lines(tokens: Iterable[Token]) -> Iterator[Token]:
    """Drop the whitespace of lines that contain nothing but spaces and tabs.

    After a ``BREAK`` that is not directly followed by another ``BREAK``, a run
    of ``SPACE``/``TAB`` tokens is skipped when it ends with a ``BREAK`` or with
    the end of the stream. A whitespace-only line therefore produces two
    consecutive breaks, exactly like an empty line.

    Args:
        tokens: Tokens, typically from `join_text`.

    Yields:
        Token: Tokens with blank-line whitespace removed.

    Examples:
        # "ABC\\n  \\nDEF" -> TEXT BREAK BREAK TEXT
    """
    buffered = list(tokens)
    index = 0

    while index < len(buffered):
        token = buffered[index]
        yield token
        index += 1

        if token.kind is not TokenKind.BREAK or index >= len(buffered):
            continue
        if buffered[index].kind is TokenKind.BREAK:
            continue

        ahead = index
        while ahead < len(buffered) and buffered[ahead].kind in WHITESPACE_KINDS:
            ahead += 1
        if ahead == len(buffered) or buffered[ahead].kind is TokenKind.BREAK:
            index = ahead


def lex(text: str) -> list[Token]:
    """Run the full lexer pipeline over `text`.

    Args:
        text: The Markdown source.

    Returns:
        list[Token]: Normalized tokens ready for the parser.

    Examples:
        tokens = lex("# Hello\\n\\nWorld")
    """
    tokens = list(cut_blank_lines(join_text(tokenize(text))))
    logger.debug("Lexed %d characters into %d tokens", len(text), len(tokens))
    return tokens
