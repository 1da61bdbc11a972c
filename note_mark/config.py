"""Parser configuration values and configuration file loading."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
import tomllib

from .constants import (
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_TOC_DEPTH,
    DEFAULT_WIDTH,
    MAX_HEADLINE_LEVEL,
)
from .models import TokenKind
from .stringifier import Stringifier
from .toc import TocMaker


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`toc_depth` must be between 1 and 6")
    """


class ParagraphEnding(Enum):
    """How a paragraph ends.

    Attributes:
        ALLOW_SOFT_BREAK: A single line break ends the paragraph when the next
            line looks like another block.
        HARD_BREAK: Only a blank line ends the paragraph.
    """

    ALLOW_SOFT_BREAK = "allow_soft_break"
    HARD_BREAK = "hard_break"


class HeadlineEnding(Enum):
    """How a headline ends.

    Attributes:
        SOFT_BREAK: The headline is exactly one line.
        ALLOW_SOFT_BREAK: Following lines continue the headline until one looks
            like another block.
        HARD_BREAK: Only a blank line ends the headline.
    """

    SOFT_BREAK = "soft_break"
    ALLOW_SOFT_BREAK = "allow_soft_break"
    HARD_BREAK = "hard_break"


class IndentRule(Enum):
    """Whether list indentation must match exactly (STRICT) or may be normalized (LOOSE)."""

    STRICT = "strict"
    LOOSE = "loose"


class IndentKind(Enum):
    SPACE = "space"
    TAB = "tab"
    BOTH = "both"


@dataclass(frozen=True)
class IndentStyle:
    """Unit of indentation recognized for list nesting.

    A space counts one column and a tab counts two under ``BOTH``; under
    ``SPACE`` only spaces count and under ``TAB`` only tabs count.

    Attributes:
        kind: Which whitespace characters make up an indent.
        size: Number of spaces in one unit; only meaningful for ``SPACE``.

    Examples:
        IndentStyle.space(4)
        IndentStyle.tab()
    """

    kind: IndentKind = IndentKind.SPACE
    size: int = 2

    def __post_init__(self):
        if self.kind is IndentKind.SPACE and (
            isinstance(self.size, bool) or not isinstance(self.size, int) or self.size < 1
        ):
            raise ConfigError("space indent size must be a positive integer")

    @classmethod
    def space(cls, size: int = 2) -> IndentStyle:
        return cls(IndentKind.SPACE, size)

    @classmethod
    def tab(cls) -> IndentStyle:
        return cls(IndentKind.TAB, 1)

    @classmethod
    def both(cls) -> IndentStyle:
        return cls(IndentKind.BOTH, 2)

    @classmethod
    def of(cls, kind: IndentKind, size: int = 2) -> IndentStyle:
        """Build a style from its kind; `size` is ignored unless the kind is ``SPACE``."""
        if kind is IndentKind.SPACE:
            return cls.space(size)
        if kind is IndentKind.TAB:
            return cls.tab()
        return cls.both()

    @property
    def unit(self) -> int:
        """Number of columns in one indentation unit."""
        if self.kind is IndentKind.SPACE:
            return self.size
        if self.kind is IndentKind.TAB:
            return 1
        return 2

    def columns(self, kind: TokenKind) -> int:
        """Return the column width of a token kind, or 0 when it does not indent."""
        if kind is TokenKind.SPACE and self.kind is not IndentKind.TAB:
            return 1
        if kind is TokenKind.TAB:
            if self.kind is IndentKind.TAB:
                return 1
            if self.kind is IndentKind.BOTH:
                return 2
        return 0


@dataclass(frozen=True)
class ParserConfig:
    """Grammar variant used for a single parse call.

    Attributes:
        paragraph_ending: How paragraphs end.
        headline_ending: How headlines end.
        list_indent_rule: Whether list indentation may be normalized.
        list_indent_style: Unit of indentation for nested lists.
        max_nesting_depth: Deepest list, blockquote or emphasis nesting that is
            parsed structurally; deeper content is kept as literal text.

    Examples:
        ParserConfig(headline_ending=HeadlineEnding.SOFT_BREAK)
    """

    paragraph_ending: ParagraphEnding = ParagraphEnding.HARD_BREAK
    headline_ending: HeadlineEnding = HeadlineEnding.HARD_BREAK
    list_indent_rule: IndentRule = IndentRule.STRICT
    list_indent_style: IndentStyle = IndentStyle()
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH


DEFAULT_PARSER_CONFIG = ParserConfig()


@dataclass
class NoteMarkConfig:
    """Settings for converting documents, as read from configuration files.

    Values are plain TOML-friendly primitives; use the ``to_*`` helpers to get
    the typed configuration objects consumed by the pipeline.

    Attributes:
        paragraph_ending: ``"hard_break"`` or ``"allow_soft_break"``.
        headline_ending: ``"hard_break"``, ``"allow_soft_break"`` or ``"soft_break"``.
        list_indent_rule: ``"strict"`` or ``"loose"``.
        list_indent_style: ``"space"``, ``"tab"`` or ``"both"``.
        list_indent_size: Spaces per indent unit when the style is ``"space"``.
        max_nesting_depth: Nesting bound for lists, blockquotes and emphasis.
        toc_depth: Deepest heading level listed in the table of contents.
        toc_ordered: Whether the table of contents is an ordered list.
        format: Whether HTML output is indented.
        width: Line width used by formatted output.
        max_file_size: Maximum document size in bytes.

    Examples:
        NoteMarkConfig(headline_ending="soft_break", toc_depth=2)
    """

    # Grammar
    paragraph_ending: str = ParagraphEnding.HARD_BREAK.value
    headline_ending: str = HeadlineEnding.HARD_BREAK.value
    list_indent_rule: str = IndentRule.STRICT.value
    list_indent_style: str = IndentKind.SPACE.value
    list_indent_size: int = 2
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    # Table of contents
    toc_depth: int = DEFAULT_TOC_DEPTH
    toc_ordered: bool = False

    # Output
    format: bool = False
    width: int = DEFAULT_WIDTH

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE

    def to_parser_config(self) -> ParserConfig:
        """Build the `ParserConfig` described by these settings.

        Raises:
            ConfigError: If an enumerated value is not recognized.
        """
        validate_config(self)
        return ParserConfig(
            paragraph_ending=ParagraphEnding(self.paragraph_ending),
            headline_ending=HeadlineEnding(self.headline_ending),
            list_indent_rule=IndentRule(self.list_indent_rule),
            list_indent_style=IndentStyle.of(
                IndentKind(self.list_indent_style), self.list_indent_size
            ),
            max_nesting_depth=self.max_nesting_depth,
        )

    def to_toc_maker(self) -> TocMaker:
        return TocMaker(depth=self.toc_depth, ordered=self.toc_ordered)

    def to_stringifier(self) -> Stringifier:
        return Stringifier(format=self.format, width=self.width)


def load_config(search_path: Path) -> NoteMarkConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.note-mark]`` table from `pyproject.toml` and the ``[note-mark]``
    or ``[tool.note-mark]`` table from `.note-mark.toml` when present. Returns
    default values when no configuration is found. TOML files that cannot be
    read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        NoteMarkConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "note-mark")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".note-mark.toml",
            table_paths=[("note-mark",), ("tool", "note-mark")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return NoteMarkConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> NoteMarkConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> NoteMarkConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return NoteMarkConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return NoteMarkConfig(**{key.replace("-", "_"): value for key, value in raw_config.items()})
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: NoteMarkConfig) -> None:
    """Validate a `NoteMarkConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If an enumerated setting has an unknown value, the TOC
            depth is outside 1-6, or numeric limits are non-positive.

    Examples:
        validate_config(NoteMarkConfig(toc_depth=2))
    """
    _ensure_choice("paragraph_ending", config.paragraph_ending, ParagraphEnding)
    _ensure_choice("headline_ending", config.headline_ending, HeadlineEnding)
    _ensure_choice("list_indent_rule", config.list_indent_rule, IndentRule)
    _ensure_choice("list_indent_style", config.list_indent_style, IndentKind)

    _ensure_integers(
        {
            "list_indent_size": config.list_indent_size,
            "max_nesting_depth": config.max_nesting_depth,
            "toc_depth": config.toc_depth,
            "width": config.width,
            "max_file_size": config.max_file_size,
        }
    )
    _ensure_positive(
        {
            "list_indent_size": config.list_indent_size,
            "max_nesting_depth": config.max_nesting_depth,
            "width": config.width,
            "max_file_size": config.max_file_size,
        }
    )

    if not 1 <= config.toc_depth <= MAX_HEADLINE_LEVEL:
        raise ConfigError(f"`toc_depth` must be between 1 and {MAX_HEADLINE_LEVEL}")

    for key in ("toc_ordered", "format"):
        if not isinstance(getattr(config, key), bool):
            raise ConfigError(f"`{key}` must be a boolean")


def apply_overrides(config: NoteMarkConfig, **overrides: object) -> NoteMarkConfig:
    """Apply override values to a `NoteMarkConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set
            to None are ignored.

    Returns:
        NoteMarkConfig: New configuration with the overrides applied, or the
        original configuration when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `NoteMarkConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> NoteMarkConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None
            values are ignored.

    Returns:
        NoteMarkConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), toc_depth=2, format=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_choice(key: str, value: object, choices: type[Enum]) -> None:
    allowed = [member.value for member in choices]
    if value not in allowed:
        raise ConfigError(f"`{key}` must be one of: {', '.join(allowed)}")


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
