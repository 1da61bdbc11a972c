import dataclasses

import pytest

from note_mark.elements import ElementNode, ElementTag, TextNode, get_text, is_block_node
from note_mark.exceptions import ConvertError, ConvertFileError, FileTooLargeError
from note_mark.lexer import lex
from note_mark.models import InlineTree, Paragraph, Text, Token, TokenKind, TokenSlice


def test_token_text_and_end():
    token = Token(TokenKind.TEXT, 2, 3)

    assert token.end == 5
    assert token.text("a bcde f") == "cde"


def test_tree_nodes_are_immutable():
    paragraph = Paragraph(InlineTree((Text("a"),)))

    with pytest.raises(dataclasses.FrozenInstanceError):
        paragraph.content = InlineTree()


def test_element_tag_headlines():
    assert ElementTag.headline(3) is ElementTag.H3
    assert ElementTag.H6.headline_level == 6
    assert ElementTag.P.headline_level is None
    with pytest.raises(ValueError):
        ElementTag.headline(7)


def test_element_tag_block_kinds():
    assert ElementTag.UL.is_block
    assert ElementTag.H2.is_block
    assert not ElementTag.STRONG.is_block
    assert not ElementTag.BR.is_block


def test_element_node_defaults_are_independent():
    first = ElementNode(ElementTag.P)
    second = ElementNode(ElementTag.P)
    first.children.append(TextNode("x"))

    assert second.children == []
    assert first.href is None


def test_is_block_node():
    assert is_block_node(ElementNode(ElementTag.LI))
    assert not is_block_node(ElementNode(ElementTag.EM))
    assert not is_block_node(TextNode("x"))


def test_get_text_flattens_nested_nodes():
    nodes = [
        TextNode("Hello, "),
        ElementNode(
            ElementTag.EM,
            children=[
                TextNode("dear "),
                ElementNode(ElementTag.STRONG, children=[TextNode("you")]),
            ],
        ),
        ElementNode(ElementTag.BR),
    ]

    assert get_text(nodes) == "Hello, dear you"


def test_file_too_large_error_is_convert_error():
    error = FileTooLargeError("doc.md", 10)

    assert isinstance(error, ConvertError)
    assert isinstance(error, ValueError)
    assert str(error) == "doc.md exceeds the maximum allowed size of 10 bytes."


def test_convert_file_error_is_convert_error():
    assert issubclass(ConvertFileError, ConvertError)

    with pytest.raises(ConvertError):
        raise ConvertFileError("cannot read doc.md")


# Token windows


def test_token_slice_shares_the_token_list():
    tokens = lex("- a\n- b")
    window = TokenSlice(tokens)
    rest = window[4:]

    assert rest.tokens is tokens
    assert rest.start == 4
    assert len(rest) == len(tokens) - 4
    assert rest == tokens[4:]


def test_token_slice_nested_slices_offset_the_cursor():
    tokens = lex("a b c d")
    inner = TokenSlice(tokens)[2:][1:3]

    assert inner.tokens is tokens
    assert inner.start == 3
    assert list(inner) == tokens[3:5]
    assert inner[:0] == []
    assert len(inner[5:1]) == 0


def test_token_slice_indexing():
    tokens = lex("a b c")
    window = TokenSlice(tokens)[1:]

    assert window[0] == tokens[1]
    assert window[-1] == tokens[-1]
    with pytest.raises(IndexError):
        window[len(window)]
    with pytest.raises(IndexError):
        window[-len(window) - 1]


def test_token_slice_rejects_extended_slicing():
    with pytest.raises(NotImplementedError):
        TokenSlice(lex("a b"))[::2]


def test_token_slice_of_wraps_once():
    tokens = lex("a b")
    window = TokenSlice.of(tokens)

    assert TokenSlice.of(window) is window
    assert window == tokens
    assert window != tokens[:1]
    assert not TokenSlice.of([])
