from __future__ import annotations

import pytest

from note_mark.elements import DocumentNode, ElementNode, ElementTag, TextNode, get_text
from note_mark.parser import parse
from note_mark.stringifier import Stringifier
from note_mark.toc import TocEntry, TocMaker, allocate_anchor_id
from note_mark.transformer import transform


def _document(text: str) -> DocumentNode:
    return transform(parse(text))


def _toc_html(text: str, maker: TocMaker | None = None) -> str:
    maker = maker or TocMaker()
    return Stringifier().stringify(maker.make_toc(_document(text)))


def test_allocate_anchor_id_appends_smallest_free_suffix():
    used: set[str] = set()
    assert [allocate_anchor_id("A", used) for _ in range(3)] == ["A", "A1", "A2"]
    assert used == {"A", "A1", "A2"}


def test_allocate_anchor_id_skips_taken_suffixes():
    used = {"A", "A1"}
    assert allocate_anchor_id("A", used) == "A2"


def test_allocate_anchor_id_avoids_collision_with_literal_heading():
    used: set[str] = set()
    assert allocate_anchor_id("A1", used) == "A1"
    assert allocate_anchor_id("A", used) == "A"
    assert allocate_anchor_id("A", used) == "A2"


def test_nested_toc():
    text = "# Headline1-1\n\n# Headline1-2\n\n## Headline2-1\n\n## Headline2-2\n\n# Headline1-3\n\n"
    assert _toc_html(text) == (
        '<ul><li><a href="#Headline1-1">Headline1-1</a></li>'
        '<li><a href="#Headline1-2">Headline1-2</a>'
        '<ul><li><a href="#Headline2-1">Headline2-1</a></li>'
        '<li><a href="#Headline2-2">Headline2-2</a></li></ul></li>'
        '<li><a href="#Headline1-3">Headline1-3</a></li></ul>'
    )


def test_ordered_toc():
    html = _toc_html("# A\n\n## B", TocMaker(ordered=True))
    assert html == '<ol><li><a href="#A">A</a><ol><li><a href="#B">B</a></li></ol></li></ol>'


def test_depth_limits_entries():
    html = _toc_html("# A\n\n## B\n\n### C", TocMaker(depth=2))
    assert "C" not in html
    assert '<a href="#B">B</a>' in html


def test_empty_document_yields_empty_list():
    assert _toc_html("Just text") == "<ul></ul>"


def test_headings_receive_ids():
    document = _document("# A\n\n# A\n\n## B\n\n#### Deep")
    TocMaker().make_toc(document)
    ids = [node.id for node in document.root]
    assert ids == [["A"], ["A1"], ["B"], []]


def test_headings_inside_blocks_are_ignored():
    document = _document("> # Quoted\n\n# Top")
    entries = TocMaker().collect_entries(document)
    assert entries == [TocEntry(1, "Top", "Top")]


def test_labels_flatten_inline_markup():
    entries = TocMaker().collect_entries(_document("# Hello **bold** *world*"))
    assert entries == [TocEntry(1, "Hello bold world", "Hello bold world")]


def test_level_jump_nests_under_shallower_heading():
    html = _toc_html("# A\n\n### C\n\n## B")
    assert html == (
        '<ul><li><a href="#A">A</a>'
        '<ul><li><a href="#C">C</a></li><li><a href="#B">B</a></li></ul></li></ul>'
    )


def test_first_entry_deeper_than_following_ones():
    html = _toc_html("## B\n\n# A")
    assert html == '<ul><li><a href="#B">B</a></li><li><a href="#A">A</a></li></ul>'


def test_toc_structure_matches_heading_order():
    document = _document("# X\n\n## Y\n\n## Z\n\n# W")
    toc = TocMaker().make_toc(document)
    (root,) = toc.root
    assert root.tag is ElementTag.UL
    assert get_text([root]) == "XYZW"


@pytest.mark.parametrize("depth", range(1, 7))
def test_every_depth_is_accepted(depth):
    text = "\n\n".join("#" * level + f" H{level}" for level in range(1, 7))
    entries = TocMaker(depth=depth).collect_entries(_document(text))
    assert [entry.level for entry in entries] == list(range(1, depth + 1))


def test_build_list_reuses_sub_list():
    maker = TocMaker()
    root = maker.build_list([TocEntry(1, "a", "a"), TocEntry(2, "b", "b"), TocEntry(2, "c", "c")])
    (item,) = root.children
    link, sub_list = item.children
    assert link == ElementNode(ElementTag.A, href="#a", children=[TextNode("a")])
    assert len(sub_list.children) == 2
