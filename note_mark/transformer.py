"""Translate a Markdown syntax tree into an HTML element tree.

The mapping is one to one and keeps the order of the source: paragraphs become
``p``, headlines ``h1``-``h6``, lists ``ul``/``ol`` with ``li`` entries (label
first, then child blocks), blockquotes ``blockquote``, and inline strong,
italic and breaks become ``strong``, ``em`` and ``br``.
"""

from __future__ import annotations

from .elements import DocumentNode, ElementNode, ElementTag, Node, TextNode
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
    ListTree,
    MarkdownTree,
    OrderedList,
    Paragraph,
    Strong,
    Text,
)


def transform(tree: MarkdownTree) -> DocumentNode:
    """Build the element tree for a parsed document.

    Args:
        tree: Syntax tree from `note_mark.parser.parse`.

    Returns:
        DocumentNode: A fresh element tree.

    Examples:
        transform(parse("# Hello"))  # DocumentNode([ElementNode(H1, children=[TextNode("Hello")])])
    """
    return DocumentNode(root=block_tree(tree.root))


def block_tree(tree: BlockTree) -> list[Node]:
    return [block_item(item) for item in tree.items]


def block_item(item: BlockItem) -> Node:
    if isinstance(item, Paragraph):
        return ElementNode(ElementTag.P, children=inline_tree(item.content))
    if isinstance(item, Headline):
        return ElementNode(ElementTag.headline(item.level), children=inline_tree(item.content))
    if isinstance(item, BulletList):
        return ElementNode(ElementTag.UL, children=list_tree(item.tree))
    if isinstance(item, OrderedList):
        return ElementNode(ElementTag.OL, children=list_tree(item.tree))
    if isinstance(item, BlockQuote):
        return ElementNode(ElementTag.BLOCKQUOTE, children=block_tree(item.tree))
    raise TypeError(f"Unsupported block item: {item!r}")


def list_tree(tree: ListTree) -> list[Node]:
    entries: list[Node] = []
    for item in tree.items:
        children = inline_tree(item.label)
        children.extend(block_item(child) for child in item.children)
        entries.append(ElementNode(ElementTag.LI, children=children))
    return entries


def inline_tree(tree: InlineTree) -> list[Node]:
    return [inline_item(item) for item in tree.items]


def inline_item(item: InlineItem) -> Node:
    if isinstance(item, Text):
        return TextNode(item.text)
    if isinstance(item, Italic):
        return ElementNode(ElementTag.EM, children=inline_tree(item.content))
    if isinstance(item, Strong):
        return ElementNode(ElementTag.STRONG, children=inline_tree(item.content))
    if isinstance(item, Break):
        return ElementNode(ElementTag.BR)
    raise TypeError(f"Unsupported inline item: {item!r}")
