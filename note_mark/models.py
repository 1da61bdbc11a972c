"""Data models for note-mark: tokens and the syntax tree."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union, overload


class TokenKind(Enum):
    """Kinds of tokens produced by the lexer.

    One member exists per recognized punctuation mark, plus whitespace, line
    breaks, and generic text runs.

    Attributes:
        TEXT: Any other character, or a run of them once joined.
        SPACE: ``" "``.
        TAB: ``"\\t"``.
        BREAK: A line terminator; ``"\\r\\n"`` is a single break.
    """

    TEXT = auto()
    SPACE = auto()
    TAB = auto()
    BREAK = auto()
    POUND = auto()
    STAR = auto()
    COLON = auto()
    BACKQUOTE = auto()
    GT = auto()
    HYPHEN = auto()
    VERTICAL_BAR = auto()
    DOT = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()
    OPEN_BRACKET = auto()
    CLOSE_BRACKET = auto()


@dataclass(frozen=True)
class Token:
    """A reference into the source text.

    Tokens never copy characters; `start` and `length` are code-point offsets
    into the string that was lexed.

    Attributes:
        kind: Kind of the token.
        start: Offset of the first character.
        length: Number of characters covered.
    """

    kind: TokenKind
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def text(self, source: str) -> str:
        """Return the characters this token covers in `source`."""
        return source[self.start : self.end]


class TokenSlice(Sequence[Token]):
    """A read-only window over a shared token list.

    Slicing a window returns another window over the same list, so splitting
    off a prefix or a remainder never copies tokens. `start` is the cursor of
    the window in the shared list.

    Examples:
        window = TokenSlice(lex("- a\\n- b"))
        rest = window[4:]  # no copy; rest.start == 4
    """

    __slots__ = ("tokens", "start", "stop")

    def __init__(self, tokens: list[Token], start: int = 0, stop: int | None = None):
        self.tokens = tokens
        self.start = start
        self.stop = len(tokens) if stop is None else stop

    @classmethod
    def of(cls, tokens: Sequence[Token]) -> TokenSlice:
        """Return `tokens` as a window, wrapping other sequences once."""
        if isinstance(tokens, cls):
            return tokens
        return cls(list(tokens))

    def __len__(self) -> int:
        return self.stop - self.start

    @overload
    def __getitem__(self, index: int) -> Token: ...

    @overload
    def __getitem__(self, index: slice) -> TokenSlice: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            if index.step not in (None, 1):
                raise NotImplementedError("TokenSlice does not support extended slicing")
            start, stop, _ = index.indices(len(self))
            return TokenSlice(self.tokens, self.start + start, self.start + max(start, stop))
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError(index)
        return self.tokens[self.start + index]

    def __iter__(self) -> Iterator[Token]:
        for index in range(self.start, self.stop):
            yield self.tokens[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (TokenSlice, list, tuple)):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)!r}, start={self.start})"


# Inline tree


@dataclass(frozen=True)
class InlineTree:
    """Ordered inline content of a block."""

    items: tuple[InlineItem, ...] = ()


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Italic:
    content: InlineTree


@dataclass(frozen=True)
class Strong:
    content: InlineTree


@dataclass(frozen=True)
class Break:
    """An explicit line break inside inline content."""


InlineItem = Union[Text, Italic, Strong, Break]


# Block tree


@dataclass(frozen=True)
class BlockTree:
    """Ordered sequence of block items."""

    items: tuple[BlockItem, ...] = ()


@dataclass(frozen=True)
class Paragraph:
    content: InlineTree


@dataclass(frozen=True)
class Headline:
    """A heading.

    Attributes:
        level: Heading level, from 1 to 6.
        content: Inline content of the heading.
    """

    level: int
    content: InlineTree


@dataclass(frozen=True)
class ListItem:
    """A single list entry.

    Attributes:
        label: Inline content of the unindented lines following the marker.
        children: Blocks parsed from the indented lines of the entry.
    """

    label: InlineTree
    children: tuple[BlockItem, ...] = ()


@dataclass(frozen=True)
class ListTree:
    items: tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class BulletList:
    tree: ListTree


@dataclass(frozen=True)
class OrderedList:
    tree: ListTree


@dataclass(frozen=True)
class BlockQuote:
    tree: BlockTree


BlockItem = Union[Paragraph, Headline, BulletList, OrderedList, BlockQuote]


@dataclass(frozen=True)
class MarkdownTree:
    """Root of a parsed document.

    Text leaves hold copies of the source characters, so the tree does not
    depend on the lifetime of the input string.
    """

    root: BlockTree
