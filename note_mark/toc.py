"""Table of contents generation from an HTML element tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import DEFAULT_TOC_DEPTH
from .elements import DocumentNode, ElementNode, ElementTag, TextNode, get_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TocEntry:
    """A heading selected for the table of contents.

    Attributes:
        level: Heading level, from 1 to 6.
        anchor: Unique id attached to the heading.
        label: Flattened text of the heading.
    """

    level: int
    anchor: str
    label: str


def allocate_anchor_id(text: str, used: set[str]) -> str:
    """Reserve a unique anchor id derived from `text`.

    The first occurrence of a text keeps it unchanged. Later occurrences get the
    smallest positive integer suffix that is still free, so ``"A"``, ``"A"``,
    ``"A"`` yields ``A``, ``A1``, ``A2``. The returned id is added to `used`.

    Args:
        text: Flattened heading text.
        used: Ids already allocated in the current table of contents.

    Returns:
        str: The allocated id.

    Examples:
        used = set()
        allocate_anchor_id("Intro", used)  # "Intro"
        allocate_anchor_id("Intro", used)  # "Intro1"
    """
    candidate = text
    suffix = 0
    while candidate in used:
        suffix += 1
        candidate = f"{text}{suffix}"
    used.add(candidate)
    return candidate


@dataclass(frozen=True)
class TocMaker:
    """Build a nested list of links to the headings of a document.

    Attributes:
        depth: Deepest heading level included; 3 lists ``h1`` to ``h3``.
        ordered: Whether the lists are ``ol`` rather than ``ul``.

    Examples:
        toc = TocMaker(depth=2).make_toc(document)
    """

    depth: int = DEFAULT_TOC_DEPTH
    ordered: bool = False

    @property
    def list_tag(self) -> ElementTag:
        return ElementTag.OL if self.ordered else ElementTag.UL

    def collect_entries(self, document: DocumentNode) -> list[TocEntry]:
        """Assign anchor ids to the top-level headings of `document`.

        Headings deeper than `depth` are skipped. Each selected heading element
        gets its allocated id written to `ElementNode.id`.

        Returns:
            list[TocEntry]: Selected headings in document order.
        """
        used: set[str] = set()
        entries: list[TocEntry] = []

        for node in document.root:
            if not isinstance(node, ElementNode):
                continue
            level = node.tag.headline_level
            if level is None or level > self.depth:
                continue

            label = get_text(node.children)
            anchor = allocate_anchor_id(label, used)
            node.id = [anchor]
            entries.append(TocEntry(level, anchor, label))

        return entries

    def make_toc(self, document: DocumentNode) -> DocumentNode:
        """Build the table of contents of `document`.

        Each entry nests under the nearest preceding entry of a strictly
        shallower level; a level jump (``h1`` directly followed by ``h3``) nests
        under the first shallower heading found, without validation.

        Args:
            document: Element tree whose top-level headings are listed. The
                selected heading elements receive their anchor ids.

        Returns:
            DocumentNode: A new tree holding a single list element.
        """
        entries = self.collect_entries(document)
        logger.debug("Building table of contents from %d headings", len(entries))
        return DocumentNode(root=[self.build_list(entries)])

    def build_list(self, entries: list[TocEntry]) -> ElementNode:
        """Nest flat entries into list elements.

        Walks the entries once with a stack of open list items: entries at the
        same or a deeper level than the new one are closed, and the new entry
        is appended to the innermost remaining item's sub-list.
        """
        root = ElementNode(self.list_tag)
        stack: list[tuple[int, ElementNode]] = []

        for entry in entries:
            while stack and stack[-1][0] >= entry.level:
                stack.pop()

            link = ElementNode(
                ElementTag.A, href=f"#{entry.anchor}", children=[TextNode(entry.label)]
            )
            item = ElementNode(ElementTag.LI, children=[link])
            parent = self._sub_list(stack[-1][1]) if stack else root
            parent.children.append(item)
            stack.append((entry.level, item))

        return root

    def _sub_list(self, item: ElementNode) -> ElementNode:
        last = item.children[-1]
        if isinstance(last, ElementNode) and last.tag is self.list_tag:
            return last
        sub_list = ElementNode(self.list_tag)
        item.children.append(sub_list)
        return sub_list
