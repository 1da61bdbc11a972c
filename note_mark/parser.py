"""Recursive descent parser turning tokens into a Markdown syntax tree.

Block productions are tried in a fixed priority order: headline, bullet list,
ordered list, blockquote, and finally paragraph, which always succeeds. Each
production works on a window over the shared token list and either returns the
built item with the remaining window or ``None`` without consuming anything.
Slicing a window never copies tokens, so a failed attempt costs nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Callable, NamedTuple

from .config import (
    DEFAULT_PARSER_CONFIG,
    HeadlineEnding,
    IndentRule,
    IndentStyle,
    ParagraphEnding,
    ParserConfig,
)
from .constants import MAX_HEADLINE_LEVEL, WHITESPACE_KINDS
from .lexer import lex
from .models import (
    BlockItem,
    BlockQuote,
    BlockTree,
    Break,
    BulletList,
    Headline,
    InlineItem,
    InlineTree,
    Italic,
    ListItem,
    ListTree,
    MarkdownTree,
    OrderedList,
    Paragraph,
    Strong,
    Text,
    Token,
    TokenKind,
    TokenSlice,
)

logger = logging.getLogger(__name__)

Tokens = Sequence[Token]

# Blockquote content is re-aligned with a fixed two-space loose rule so that
# nested markers written as "> - item" line up with "- item".
QUOTE_INDENT_STYLE = IndentStyle.space(2)


class Production(NamedTuple):
    """Successful result of a block production.

    `rest` is a window over the same token list as the input, starting right
    after the consumed tokens.
    """

    item: BlockItem
    rest: Tokens


def trim_start(tokens: Tokens, kind: TokenKind) -> Tokens:
    """Remove leading tokens of `kind`.

    Examples:
        trim_start(lex("\\n\\nA"), TokenKind.BREAK)  # [TEXT]
    """
    index = 0
    while index < len(tokens) and tokens[index].kind is kind:
        index += 1
    return tokens[index:]


def trim_end(tokens: Tokens, kind: TokenKind) -> Tokens:
    """Remove trailing tokens of `kind`."""
    index = len(tokens)
    while index > 0 and tokens[index - 1].kind is kind:
        index -= 1
    return tokens[:index]


def trim(tokens: Tokens, kind: TokenKind) -> Tokens:
    """Remove tokens of `kind` from both ends."""
    return trim_start(trim_end(tokens, kind), kind)


def trim_whitespace(tokens: Tokens) -> Tokens:
    """Remove any leading mix of spaces and tabs."""
    index = 0
    while index < len(tokens) and tokens[index].kind in WHITESPACE_KINDS:
        index += 1
    return tokens[index:]


def split_line(tokens: Tokens, trim_breaks: bool = False) -> tuple[Tokens, Tokens]:
    """Split off the first line.

    Args:
        tokens: Tokens to split.
        trim_breaks: When True, also drop line breaks at the start of the rest.

    Returns:
        tuple[Tokens, Tokens]: The tokens before the first ``BREAK``
            and the tokens after it. Without any break, the whole input is the
            line and the rest is empty.
    """
    for index, token in enumerate(tokens):
        if token.kind is TokenKind.BREAK:
            rest = tokens[index + 1 :]
            if trim_breaks:
                rest = trim_start(rest, TokenKind.BREAK)
            return tokens[:index], rest
    return trim_end(tokens, TokenKind.BREAK), []


def split_paragraph(tokens: Tokens) -> tuple[Tokens, Tokens]:
    """Split off everything up to the first blank line.

    Returns:
        tuple[Tokens, Tokens]: The tokens before the first pair of
            consecutive breaks, and the tokens after it with leading breaks
            removed. Without a blank line, the whole input (minus trailing
            breaks) is returned with an empty rest.
    """
    for index in range(len(tokens) - 1):
        if tokens[index].kind is TokenKind.BREAK and tokens[index + 1].kind is TokenKind.BREAK:
            return tokens[:index], trim_start(tokens[index + 2 :], TokenKind.BREAK)
    return trim_end(tokens, TokenKind.BREAK), []


def indent_level(tokens: Tokens, style: IndentStyle) -> tuple[int, int]:
    """Measure the indentation at the start of a line.

    Leading whitespace is counted in columns according to `style` (a tab counts
    two columns under ``both``), then divided by the width of one unit.

    Args:
        tokens: Tokens of the line.
        style: Indentation style.

    Returns:
        tuple[int, int]: Number of whole indent units and the remaining columns.

    Examples:
        indent_level(lex("     - x"), IndentStyle.space(2))  # (2, 1)
        indent_level(lex("\\t - x"), IndentStyle.both())  # (1, 1)
    """
    columns = 0
    for token in tokens:
        width = style.columns(token.kind)
        if not width:
            break
        columns += width
    return divmod(columns, style.unit)


def _strip_columns(line: Tokens, style: IndentStyle, columns: int) -> Tokens:
    index = 0
    removed = 0
    while index < len(line) and removed < columns:
        width = style.columns(line[index].kind)
        if not width:
            break
        removed += width
        index += 1
    return line[index:]


def reduce_indent(tokens: Tokens, style: IndentStyle, drop_remainder: bool = False) -> list[Token]:
    """Remove one indent unit from every line.

    Lines that are not indented by at least one unit are kept as they are.

    Args:
        tokens: Tokens spanning one or more lines.
        style: Indentation style defining the unit.
        drop_remainder: When True, also remove columns left over after the
            whole units, so ragged indentation is normalized away.

    Returns:
        list[Token]: The re-indented tokens, line breaks preserved.

    Examples:
        reduce_indent(lex("  # Hello\\n\\nparagraph"), IndentStyle.space(2))
    """
    output: list[Token] = []
    rest = TokenSlice.of(tokens)

    while rest:
        line, new_rest = split_line(rest)
        level, remainder = indent_level(line, style)

        if level == 0:
            output.extend(line)
        else:
            columns = style.unit + (remainder if drop_remainder else 0)
            output.extend(_strip_columns(line, style, columns))

        if len(line) < len(rest):
            output.append(rest[len(line)])

        rest = new_rest

    return output


def align_indent(tokens: Tokens, style: IndentStyle, rule: IndentRule) -> Tokens:
    """Strip the indentation remainder before a marker test.

    Under ``STRICT`` the tokens are returned unchanged. Under ``LOOSE`` as many
    leading tokens as the remainder of `indent_level` are dropped, so a line
    indented by a partial unit lines up with the unit boundary.
    """
    if rule is IndentRule.STRICT:
        return tokens
    _, remainder = indent_level(tokens, style)
    return tokens[remainder:]


class Executor:
    """Parser state for one source text and one configuration.

    Args:
        source: The text that `tokens` refer to.
        config: Grammar variant to parse with.
    """

    def __init__(self, source: str, config: ParserConfig = DEFAULT_PARSER_CONFIG):
        self.source = source
        self.config = config

    def markdown_tree(self, tokens: Tokens) -> MarkdownTree:
        return MarkdownTree(root=self.block_tree(TokenSlice.of(tokens)))

    # Block tree

    def block_tree(self, tokens: Tokens, depth: int = 0) -> BlockTree:
        """Parse tokens into a sequence of blocks."""
        items: list[BlockItem] = []
        rest = trim_start(TokenSlice.of(tokens), TokenKind.BREAK)

        while rest:
            production = self.not_paragraph(rest, depth) or self.paragraph(rest, depth)
            items.append(production.item)
            rest = trim_start(production.rest, TokenKind.BREAK)

        return BlockTree(tuple(items))

    def not_paragraph(self, tokens: Tokens, depth: int = 0) -> Production | None:
        for production in (self.headline, self.bullet_list, self.ordered_list, self.blockquote):
            result = production(tokens, depth)
            if result is not None:
                return result
        return None

    def paragraph(self, tokens: Tokens, depth: int = 0) -> Production:
        if self.config.paragraph_ending is ParagraphEnding.HARD_BREAK:
            content, rest = split_paragraph(tokens)
        else:
            content, rest = self.read_until_block_item(tokens)
        return Production(Paragraph(self.inline_tree(content)), rest)

    def headline(self, tokens: Tokens, depth: int = 0) -> Production | None:
        """Parse a headline such as ``"## Title"``.

        Up to six ``#`` marks followed by a space make a headline of that level;
        anything else fails. The content is read according to
        `ParserConfig.headline_ending`.
        """
        tokens = trim_whitespace(tokens)
        level = headline_level(tokens)
        if not level:
            return None

        content = trim_start(tokens[level:], TokenKind.SPACE)
        ending = self.config.headline_ending

        if ending is HeadlineEnding.SOFT_BREAK:
            body, rest = split_line(content, trim_breaks=True)
        elif ending is HeadlineEnding.ALLOW_SOFT_BREAK:
            body, rest = self.read_until_block_item(content)
        else:
            body, rest = split_paragraph(content)

        return Production(Headline(level, self.inline_tree(body)), rest)

    def bullet_list(self, tokens: Tokens, depth: int = 0) -> Production | None:
        return self._list(tokens, depth, bullet_marker_length, BulletList)

    def ordered_list(self, tokens: Tokens, depth: int = 0) -> Production | None:
        return self._list(tokens, depth, self.ordered_marker_length, OrderedList)

    def _list(
        self,
        tokens: Tokens,
        depth: int,
        marker_length: Callable[[Tokens], int],
        build: Callable[[ListTree], BlockItem],
    ) -> Production | None:
        if depth >= self.config.max_nesting_depth:
            return None

        style = self.config.list_indent_style
        rule = self.config.list_indent_rule
        items: list[ListItem] = []
        rest = tokens

        while rest:
            aligned = align_indent(rest, style, rule)
            length = marker_length(aligned)
            if not length:
                break

            body, new_rest = self.read_until_block_item(aligned[length:])
            # An empty entry ends the list
            if not body:
                break

            items.append(self.list_item(body, depth))
            rest = new_rest

        if not items:
            return None

        return Production(build(ListTree(tuple(items))), rest)

    def list_item(self, tokens: Tokens, depth: int = 0) -> ListItem:
        """Split an entry body into its label and its indented children.

        The label is made of the leading unindented lines, joined with line
        breaks. Everything from the first indented line on loses one indent
        unit and is parsed as a nested block tree.
        """
        style = self.config.list_indent_style
        label: list[InlineItem] = []
        rest = tokens

        while rest:
            line, new_rest = split_line(rest)
            if not line or indent_level(line, style)[0] != 0:
                break
            label.extend(self.inline_tree(line).items)
            label.append(Break())
            rest = new_rest

        if label:
            label.pop()

        children = self.block_tree(reduce_indent(rest, style, drop_remainder=True), depth + 1)
        return ListItem(label=InlineTree(tuple(label)), children=children.items)

    def blockquote(self, tokens: Tokens, depth: int = 0) -> Production | None:
        """Parse consecutive lines starting with ``>``.

        Each line loses its ``>``. Lines that look like the start of another
        block keep their indentation (aligned to two-space units) so nested
        markers stay in place; other lines lose their leading whitespace. The
        collected lines are parsed as a nested block tree.
        """
        if depth >= self.config.max_nesting_depth:
            return None
        if not tokens or tokens[0].kind is not TokenKind.GT:
            return None

        quoted: list[Token] = []
        rest = tokens

        while rest and rest[0].kind is TokenKind.GT:
            line, new_rest = split_line(rest[1:])

            if self.maybe_block_item(line, trim_spaces=True):
                quoted.extend(align_indent(line, QUOTE_INDENT_STYLE, IndentRule.LOOSE))
            else:
                quoted.extend(trim_whitespace(line))

            if len(line) + 1 < len(rest):
                quoted.append(rest[len(line) + 1])

            rest = new_rest

        return Production(BlockQuote(self.block_tree(quoted, depth + 1)), rest)

    # Lookahead

    def ordered_marker_length(self, tokens: Tokens) -> int:
        """Return 3 when `tokens` start with ``digits . space``, otherwise 0."""
        if (
            len(tokens) >= 3
            and tokens[0].kind is TokenKind.TEXT
            and tokens[1].kind is TokenKind.DOT
            and tokens[2].kind is TokenKind.SPACE
            and is_ascii_digits(tokens[0].text(self.source))
        ):
            return 3
        return 0

    def maybe_block_item(self, tokens: Tokens, trim_spaces: bool = False) -> bool:
        """Guess whether a line starts a new block.

        Recognizes a headline prefix, a leading ``>``, a ``- `` bullet marker
        and a ``1. `` ordered marker. Anything else continues the current block.
        """
        if trim_spaces:
            tokens = trim_whitespace(tokens)

        if headline_level(tokens):
            return True
        if not tokens:
            return False
        if tokens[0].kind is TokenKind.GT:
            return True
        return bool(bullet_marker_length(tokens) or self.ordered_marker_length(tokens))

    def read_until_block_item(self, tokens: Tokens) -> tuple[Tokens, Tokens]:
        """Read lines until a blank line or a line that looks like a new block.

        Returns:
            tuple[Tokens, Tokens]: The content with trailing breaks
                removed, and the rest with leading breaks removed.
        """
        limit = len(trim_end(tokens, TokenKind.BREAK))
        front: Tokens = tokens
        back: Tokens = []

        for index in range(limit):
            if tokens[index].kind is not TokenKind.BREAK:
                continue
            if self.maybe_block_item(_line_at(tokens, index + 1)):
                front, back = tokens[:index], tokens[index + 1 :]
                break
            if tokens[index + 1].kind is TokenKind.BREAK:
                front, back = tokens[:index], tokens[index + 2 :]
                break

        return trim_end(front, TokenKind.BREAK), trim_start(back, TokenKind.BREAK)

    # Inline tree

    def inline_tree(self, tokens: Tokens, depth: int = 0) -> InlineTree:
        """Parse tokens into inline content.

        Strong and italic spans are matched against the nearest closing
        delimiter; a single break becomes a `Break`. Everything else, including
        unterminated delimiters, is accumulated as literal text.
        """
        items: list[InlineItem] = []
        text: list[str] = []
        index = 0

        while index < len(tokens):
            result = (
                self._strong(tokens, index, depth)
                or self._italic(tokens, index, depth)
                or self._line_break(tokens, index)
            )
            if result is None:
                text.append(tokens[index].text(self.source))
                index += 1
                continue

            if text:
                items.append(Text("".join(text)))
                text = []
            item, index = result
            items.append(item)

        if text:
            items.append(Text("".join(text)))

        return InlineTree(tuple(items))

    def _strong(self, tokens: Tokens, start: int, depth: int) -> tuple[InlineItem, int] | None:
        if depth >= self.config.max_nesting_depth:
            return None
        if not _is_star(tokens, start) or not _is_star(tokens, start + 1):
            return None

        for index in range(start + 2, len(tokens) - 1):
            if _is_star(tokens, index) and _is_star(tokens, index + 1):
                content = self.inline_tree(tokens[start + 2 : index], depth + 1)
                return Strong(content), index + 2
        return None

    def _italic(self, tokens: Tokens, start: int, depth: int) -> tuple[InlineItem, int] | None:
        if depth >= self.config.max_nesting_depth:
            return None
        if not _is_star(tokens, start):
            return None

        for index in range(start + 1, len(tokens)):
            if _is_star(tokens, index):
                content = self.inline_tree(tokens[start + 1 : index], depth + 1)
                return Italic(content), index + 1
        return None

    @staticmethod
    def _line_break(tokens: Tokens, start: int) -> tuple[InlineItem, int] | None:
        if tokens[start].kind is TokenKind.BREAK:
            return Break(), start + 1
        return None


def _line_at(tokens: Tokens, start: int) -> Tokens:
    end = start
    while end < len(tokens) and tokens[end].kind is not TokenKind.BREAK:
        end += 1
    return tokens[start:end]


def _is_star(tokens: Tokens, index: int) -> bool:
    return index < len(tokens) and tokens[index].kind is TokenKind.STAR


def is_ascii_digits(text: str) -> bool:
    return text.isascii() and text.isdigit()


def headline_level(tokens: Tokens) -> int:
    """Return the level of a headline prefix, or 0 when there is none.

    Leading spaces and tabs are ignored. One to six ``#`` marks must be
    followed by a space.

    Examples:
        headline_level(lex("### Title"))  # 3
        headline_level(lex("####### Title"))  # 0
        headline_level(lex("#Title"))  # 0
    """
    tokens = trim_whitespace(tokens)
    for index, token in enumerate(tokens[: MAX_HEADLINE_LEVEL + 1]):
        if token.kind is TokenKind.POUND:
            continue
        if token.kind is TokenKind.SPACE and index > 0:
            return index
        return 0
    return 0


def bullet_marker_length(tokens: Tokens) -> int:
    """Return 2 when `tokens` start with ``- ``, otherwise 0."""
    if (
        len(tokens) >= 2
        and tokens[0].kind is TokenKind.HYPHEN
        and tokens[1].kind is TokenKind.SPACE
    ):
        return 2
    return 0


def parse_tokens(
    source: str, tokens: Tokens, config: ParserConfig | None = None
) -> MarkdownTree:
    """Parse an already lexed token stream.

    Args:
        source: The text the tokens refer to.
        tokens: Normalized tokens from `lex`.
        config: Grammar variant; defaults to `DEFAULT_PARSER_CONFIG`.

    Returns:
        MarkdownTree: The syntax tree.
    """
    executor = Executor(source, config or DEFAULT_PARSER_CONFIG)
    tree = executor.markdown_tree(tokens)
    logger.debug("Parsed %d top-level blocks", len(tree.root.items))
    return tree


def parse(text: str, config: ParserConfig | None = None) -> MarkdownTree:
    """Parse Markdown text into a syntax tree.

    The grammar is total: every input produces a tree, with anything that does
    not match a specific construct kept as paragraph text.

    Args:
        text: The Markdown source.
        config: Grammar variant; defaults to `DEFAULT_PARSER_CONFIG`.

    Returns:
        MarkdownTree: The syntax tree.

    Examples:
        parse("# Hello *World*!")
        parse("Hello\\n# World", ParserConfig(paragraph_ending=ParagraphEnding.ALLOW_SOFT_BREAK))
    """
    return parse_tokens(text, lex(text), config)
