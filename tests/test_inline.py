from __future__ import annotations

import pytest

from note_mark.config import ParserConfig
from note_mark.lexer import lex
from note_mark.models import Break, InlineTree, Italic, Paragraph, Strong, Text
from note_mark.parser import Executor, parse


def _inline(*parts) -> InlineTree:
    return InlineTree(tuple(Text(part) if isinstance(part, str) else part for part in parts))


def _content(text: str, config: ParserConfig | None = None) -> InlineTree:
    (paragraph,) = parse(text, config).root.items
    assert isinstance(paragraph, Paragraph)
    return paragraph.content


def test_plain_text_is_one_item():
    assert _content("Hello, world!") == _inline("Hello, world!")


def test_strong():
    assert _content("This is **TEST**") == _inline("This is ", Strong(_inline("TEST")))


def test_italic():
    assert _content("*a*") == _inline(Italic(_inline("a")))


def test_mixed_emphasis():
    assert _content("a *b* **c** d") == _inline(
        "a ", Italic(_inline("b")), " ", Strong(_inline("c")), " d"
    )


def test_italic_inside_strong():
    assert _content("**a *b* c**") == _inline(
        Strong(_inline("a ", Italic(_inline("b")), " c"))
    )


def test_italic_closes_at_nearest_star():
    assert _content("*a* b*") == _inline(Italic(_inline("a")), " b*")


@pytest.mark.parametrize("text", ["*a", "a*", "a * b"])
def test_unterminated_delimiters_are_literal(text):
    assert _content(text) == _inline(text)


def test_escaped_stars_are_literal():
    assert _content("\\*a\\*") == _inline("*a*")


def test_break_inside_strong():
    assert _content("**a\nb**") == _inline(Strong(_inline("a", Break(), "b")))


def test_triple_star_does_not_fail():
    content = _content("***")
    assert content.items


def test_nesting_bound_keeps_inner_emphasis_literal():
    config = ParserConfig(max_nesting_depth=1)
    assert _content("**a *b* c**", config) == _inline(Strong(_inline("a *b* c")))


def test_zero_nesting_bound_disables_emphasis():
    config = ParserConfig(max_nesting_depth=0)
    assert _content("**a** *b*", config) == _inline("**a** *b*")


def test_inline_tree_of_empty_tokens():
    assert Executor("").inline_tree([]) == InlineTree(())


def test_inline_tree_keeps_characters_in_order():
    source = "x **y** z"
    tree = Executor(source).inline_tree(lex(source))
    assert tree == _inline("x ", Strong(_inline("y")), " z")
