"""High-level Markdown to HTML conversion."""

from __future__ import annotations

from dataclasses import dataclass, field

from .config import DEFAULT_PARSER_CONFIG, NoteMarkConfig, ParserConfig
from .lexer import lex
from .parser import parse_tokens
from .stringifier import Stringifier
from .toc import TocMaker
from .transformer import transform


@dataclass(frozen=True)
class Markdown:
    """Markdown converter combining the parser, stringifier and TOC maker.

    Attributes:
        parser: Grammar variant used for every conversion.
        stringifier: Output settings.
        toc_maker: Table of contents settings.

    Examples:
        Markdown().execute("# Hello, world!")  # "<h1>Hello, world!</h1>"
        html, toc = Markdown(toc_maker=TocMaker(ordered=True)).execute_with_toc(text)
    """

    parser: ParserConfig = DEFAULT_PARSER_CONFIG
    stringifier: Stringifier = field(default_factory=Stringifier)
    toc_maker: TocMaker = field(default_factory=TocMaker)

    @classmethod
    def from_config(cls, config: NoteMarkConfig) -> Markdown:
        """Build a converter from file-level settings.

        Raises:
            ConfigError: If the settings are invalid.
        """
        return cls(
            parser=config.to_parser_config(),
            stringifier=config.to_stringifier(),
            toc_maker=config.to_toc_maker(),
        )

    def execute(self, text: str) -> str:
        """Convert Markdown text to an HTML string."""
        tree = parse_tokens(text, lex(text), self.parser)
        return self.stringifier.stringify(transform(tree))

    def execute_with_toc(self, text: str) -> tuple[str, str]:
        """Convert Markdown text and build its table of contents.

        Headings listed in the table of contents are rendered with an ``id``
        attribute that the table's links point to.

        Returns:
            tuple[str, str]: The document HTML and the table of contents HTML.

        Examples:
            html, toc = Markdown().execute_with_toc("# A\\n\\n## B")
            # toc == '<ul><li><a href="#A">A</a><ul><li><a href="#B">B</a></li></ul></li></ul>'
        """
        tree = parse_tokens(text, lex(text), self.parser)
        document = transform(tree)
        toc = self.toc_maker.make_toc(document)
        return self.stringifier.stringify(document), self.stringifier.stringify(toc)
