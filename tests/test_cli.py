from __future__ import annotations

import textwrap
from pathlib import Path

from note_mark.cli import cli
from note_mark.filesystem import MAX_FILE_SIZE_ENV_VAR


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_prints_html(cli_runner, write_markdown):
    target = write_markdown(
        """
        # Title

        Some **bold** text.
        """
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "<h1>Title</h1><p>Some <strong>bold</strong> text.</p>\n"


def test_cli_prints_toc_before_document(cli_runner, write_markdown):
    target = write_markdown(
        """
        # Intro

        ## Details
        """
    )

    result = cli_runner.invoke(cli, [str(target), "--toc"])

    assert result.exit_code == 0
    toc, document = result.output.splitlines()
    assert toc == (
        '<ul><li><a href="#Intro">Intro</a>'
        '<ul><li><a href="#Details">Details</a></li></ul></li></ul>'
    )
    assert document == '<h1 id="Intro">Intro</h1><h2 id="Details">Details</h2>'


def test_cli_toc_options(cli_runner, write_markdown):
    target = write_markdown(
        """
        # Intro

        ## Details
        """
    )

    result = cli_runner.invoke(cli, [str(target), "--toc", "--toc-depth", "1", "--ordered-toc"])

    assert result.exit_code == 0
    assert result.output.splitlines()[0] == '<ol><li><a href="#Intro">Intro</a></li></ol>'


def test_cli_writes_output_file(cli_runner, write_markdown, tmp_path):
    target = write_markdown("# Title\n")
    output = tmp_path / "out.html"

    result = cli_runner.invoke(cli, [str(target), "-o", str(output)])

    assert result.exit_code == 0
    assert result.output == ""
    assert output.read_text(encoding="utf-8") == "<h1>Title</h1>\n"


def test_cli_format_option(cli_runner, write_markdown):
    target = write_markdown("- a\n- b\n")

    result = cli_runner.invoke(cli, [str(target), "--format"])

    assert result.exit_code == 0
    assert result.output == "<ul>\n    <li>a</li>\n    <li>b</li>\n</ul>\n"


def test_cli_width_option(cli_runner, write_markdown):
    target = write_markdown("abcdef\n")

    result = cli_runner.invoke(cli, [str(target), "--format", "--width", "3"])

    assert result.exit_code == 0
    assert result.output == "<p>\n    abcdef\n</p>\n"


def test_cli_grammar_options(cli_runner, write_markdown):
    target = write_markdown("Hello\n# World\n")

    default = cli_runner.invoke(cli, [str(target)])
    soft = cli_runner.invoke(cli, [str(target), "--paragraph-ending", "allow_soft_break"])

    assert default.output == "<p>Hello<br># World</p>\n"
    assert soft.output == "<p>Hello</p><h1>World</h1>\n"


def test_cli_headline_ending_option(cli_runner, write_markdown):
    target = write_markdown("# Title\nbody\n")

    result = cli_runner.invoke(cli, [str(target), "--headline-ending", "soft_break"])

    assert result.exit_code == 0
    assert result.output == "<h1>Title</h1><p>body</p>\n"


def test_cli_indent_options(cli_runner, tmp_path):
    target = tmp_path / "doc.md"
    target.write_text(" - a\n\t- b\n", encoding="utf-8")

    result = cli_runner.invoke(
        cli, [str(target), "--indent-rule", "loose", "--indent-style", "both"]
    )

    assert result.exit_code == 0
    assert result.output == "<ul><li>a<ul><li>b</li></ul></li></ul>\n"


def test_cli_indent_size_option(cli_runner, write_markdown):
    target = write_markdown("- a\n    - b\n")

    result = cli_runner.invoke(cli, [str(target), "--indent-size", "4"])

    assert result.exit_code == 0
    assert result.output == "<ul><li>a<ul><li>b</li></ul></li></ul>\n"


def test_cli_reads_pyproject_config(cli_runner, write_markdown, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.note-mark]
        headline_ending = "soft_break"
        """,
    )
    target = write_markdown("# Title\nbody\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "<h1>Title</h1><p>body</p>\n"


def test_cli_options_override_config(cli_runner, write_markdown, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.note-mark]
        headline_ending = "soft_break"
        """,
    )
    target = write_markdown("# Title\nbody\n")

    result = cli_runner.invoke(cli, [str(target), "--headline-ending", "hard_break"])

    assert result.exit_code == 0
    assert result.output == "<h1>Title<br>body</h1>\n"


def test_cli_rejects_invalid_config(cli_runner, write_markdown, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.note-mark]
        toc_depth = 12
        """,
    )
    target = write_markdown("# Title\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "toc_depth" in result.output


def test_cli_rejects_invalid_toc_depth(cli_runner, write_markdown):
    target = write_markdown("# Title\n")

    result = cli_runner.invoke(cli, [str(target), "--toc-depth", "0"])

    assert result.exit_code != 0
    assert "toc_depth" in result.output


def test_cli_rejects_unknown_choice(cli_runner, write_markdown):
    target = write_markdown("# Title\n")

    result = cli_runner.invoke(cli, [str(target), "--indent-rule", "sloppy"])

    assert result.exit_code != 0


def test_cli_rejects_non_markdown_file(cli_runner, tmp_path):
    target = tmp_path / "page.html"
    target.write_text("<p>hi</p>", encoding="utf-8")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "not a Markdown file" in result.output


def test_cli_rejects_missing_file(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, [str(tmp_path / "missing.md")])

    assert result.exit_code != 0


def test_cli_enforces_file_size_limit(cli_runner, write_markdown, monkeypatch):
    target = write_markdown("# " + "x" * 100 + "\n")
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "10")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "maximum allowed size" in result.output


def test_cli_rejects_invalid_size_environment(cli_runner, write_markdown, monkeypatch):
    target = write_markdown("# Title\n")
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "lots")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert MAX_FILE_SIZE_ENV_VAR in result.output


def test_cli_handles_crlf_files(cli_runner, tmp_path):
    target = tmp_path / "doc.md"
    target.write_bytes(b"# Title\r\n\r\nBody\r\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "<h1>Title</h1><p>Body</p>\n"
