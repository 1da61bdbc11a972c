"""
Converts a Markdown file to HTML.
The result is written to stdout, or to the file given with --output.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import (
    ConfigError,
    HeadlineEnding,
    IndentKind,
    IndentRule,
    ParagraphEnding,
    build_config,
)
from .exceptions import ConvertFileError
from .filesystem import get_max_file_size, normalize_filepath, read_markdown, write_output
from .markdown import Markdown

__all__ = ["cli"]

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _choices(enum_type) -> click.Choice:
    return click.Choice([member.value for member in enum_type])


@click.command()
@click.version_option(package_name="note-mark")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write HTML to this file")
@click.option("--toc", is_flag=True, help="Emit a table of contents before the document")
@click.option("--toc-depth", type=int, help="Deepest heading level listed in the TOC")
@click.option("--ordered-toc/--unordered-toc", default=None, help="TOC list style")
@click.option("--format/--no-format", "format_", default=None, help="Indent the HTML output")
@click.option("--width", type=int, help="Line width for formatted output")
@click.option("--paragraph-ending", type=_choices(ParagraphEnding), help="How paragraphs end")
@click.option("--headline-ending", type=_choices(HeadlineEnding), help="How headlines end")
@click.option("--indent-rule", type=_choices(IndentRule), help="List indent rule")
@click.option("--indent-style", type=_choices(IndentKind), help="List indent style")
@click.option("--indent-size", type=int, help="Spaces per indent unit for the space style")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output: str | None = None,
    toc: bool = False,
    toc_depth: int | None = None,
    ordered_toc: bool | None = None,
    format_: bool | None = None,
    width: int | None = None,
    paragraph_ending: str | None = None,
    headline_ending: str | None = None,
    indent_rule: str | None = None,
    indent_style: str | None = None,
    indent_size: int | None = None,
    log_level: str = "WARNING",
):
    """
    Convert a Markdown file to HTML.

    Args:
        filepath: Path to the Markdown file to convert.
        output: Optional destination file; stdout is used when omitted.
        toc: Whether to emit the table of contents before the document.
        toc_depth: Deepest heading level listed in the table of contents.
        ordered_toc: Whether the table of contents uses ordered lists.
        format_: Whether to indent the HTML output.
        width: Line width used by formatted output.
        paragraph_ending: Paragraph ending rule.
        headline_ending: Headline ending rule.
        indent_rule: List indent rule.
        indent_style: List indent style.
        indent_size: Spaces per indent unit for the space style.
        log_level: Logging verbosity.

    Raises:
        click.BadParameter: If the path or configuration values are invalid.
        click.ClickException: If the file cannot be read or written.

    Examples:
        note-mark README.md --toc --toc-depth 2 -o README.html
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()), format="%(levelname)s: %(message)s"
    )

    try:
        path = normalize_filepath(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            path.parent,
            toc_depth=toc_depth,
            toc_ordered=ordered_toc,
            format=format_,
            width=width,
            paragraph_ending=paragraph_ending,
            headline_ending=headline_ending,
            list_indent_rule=indent_rule,
            list_indent_style=indent_style,
            list_indent_size=indent_size,
        )
        markdown = Markdown.from_config(config)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        text = read_markdown(path, max_file_size)
    except ConvertFileError as error:
        raise click.ClickException(str(error)) from error

    logger.info("Converting %s", path)
    if toc:
        document, table = markdown.execute_with_toc(text)
        html = f"{table}\n{document}\n"
    else:
        html = f"{markdown.execute(text)}\n"

    if output is None:
        click.echo(html, nl=False)
        return

    try:
        write_output(Path(output), html)
    except ConvertFileError as error:
        raise click.ClickException(str(error)) from error
    logger.info("Wrote %s", output)


if __name__ == "__main__":
    cli()
