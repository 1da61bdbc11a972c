"""Render an HTML element tree to a string."""

from __future__ import annotations

import html
from dataclasses import dataclass

from .constants import DEFAULT_WIDTH, FORMAT_INDENT
from .elements import DocumentNode, ElementNode, ElementTag, Node, TextNode, is_block_node


@dataclass(frozen=True)
class Stringifier:
    """Serialize element trees to HTML.

    Attributes:
        format: When True, top-level nodes go on separate lines and block
            children are indented. Defaults to compact output.
        width: In formatted output, a lone child at least this long is moved
            to its own indented line.

    Examples:
        Stringifier().stringify(document)
        Stringifier(format=True, width=40).stringify(document)
    """

    format: bool = False
    width: int = DEFAULT_WIDTH

    def stringify(self, document: DocumentNode) -> str:
        rendered = [self.stringify_node(node) for node in document.root]
        return ("\n" if self.format else "").join(rendered)

    def stringify_node(self, node: Node) -> str:
        if isinstance(node, TextNode):
            return html.escape(node.text, quote=False)
        return self._stringify_element(node)

    def _stringify_element(self, element: ElementNode) -> str:
        tag = element.tag.value
        if element.tag is ElementTag.BR:
            return f"<{tag}>"

        attrs = _render_attrs(element)
        rendered = [self.stringify_node(child) for child in element.children]

        if not self.format:
            inner = "".join(rendered)
        elif len(rendered) == 1:
            inner = rendered[0]
            if len(inner) >= self.width:
                inner = f"\n{_add_indent(inner)}\n"
        elif not any(is_block_node(child) for child in element.children):
            inner = "".join(rendered)
        else:
            joined = "\n".join(rendered)
            inner = f"\n{_add_indent(joined)}\n"

        return f"<{tag}{attrs}>{inner}</{tag}>"


def _render_attrs(element: ElementNode) -> str:
    attrs = []
    if element.classes:
        attrs.append(("class", " ".join(element.classes)))
    if element.id:
        attrs.append(("id", " ".join(element.id)))
    if element.href is not None:
        attrs.append(("href", element.href))
    attrs.extend(element.attrs)
    return "".join(f' {name}="{html.escape(value)}"' for name, value in attrs)


def _add_indent(text: str) -> str:
    return "\n".join(FORMAT_INDENT + line for line in text.splitlines())
