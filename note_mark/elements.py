"""HTML element tree produced from the syntax tree."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class ElementTag(Enum):
    """Supported HTML tags; each value is the tag name."""

    DIV = "div"
    SPAN = "span"
    P = "p"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"
    UL = "ul"
    OL = "ol"
    LI = "li"
    BLOCKQUOTE = "blockquote"
    A = "a"
    STRONG = "strong"
    EM = "em"
    BR = "br"

    @classmethod
    def headline(cls, level: int) -> ElementTag:
        """Return the heading tag for `level`.

        Raises:
            ValueError: If `level` is not between 1 and 6.
        """
        return cls(f"h{level}")

    @property
    def headline_level(self) -> int | None:
        """Heading level of this tag, or None when it is not a heading."""
        if self in _HEADLINES:
            return int(self.value[1])
        return None

    @property
    def is_block(self) -> bool:
        return self in _BLOCKS


_HEADLINES = frozenset(
    (ElementTag.H1, ElementTag.H2, ElementTag.H3, ElementTag.H4, ElementTag.H5, ElementTag.H6)
)
_BLOCKS = _HEADLINES | {
    ElementTag.DIV,
    ElementTag.P,
    ElementTag.UL,
    ElementTag.OL,
    ElementTag.LI,
    ElementTag.BLOCKQUOTE,
}


@dataclass
class TextNode:
    text: str


@dataclass
class ElementNode:
    """An HTML element.

    Attributes:
        tag: Tag of the element.
        id: Values of the ``id`` attribute, joined with spaces when rendered.
        classes: Values of the ``class`` attribute.
        href: Value of the ``href`` attribute, if any.
        attrs: Extra attributes as ``(name, value)`` pairs, in order.
        children: Child nodes.
    """

    tag: ElementTag
    id: list[str] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)
    href: str | None = None
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)


Node = Union[ElementNode, TextNode]


@dataclass
class DocumentNode:
    """Root of an element tree."""

    root: list[Node] = field(default_factory=list)


def is_block_node(node: Node) -> bool:
    return isinstance(node, ElementNode) and node.tag.is_block


def get_text(nodes: Iterable[Node]) -> str:
    """Flatten nodes to their concatenated text content.

    Examples:
        get_text([TextNode("Hello, "), ElementNode(ElementTag.EM, children=[TextNode("you")])])
        # "Hello, you"
    """
    parts = []
    for node in nodes:
        if isinstance(node, TextNode):
            parts.append(node.text)
        else:
            parts.append(get_text(node.children))
    return "".join(parts)
