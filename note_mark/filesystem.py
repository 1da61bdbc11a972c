"""Filesystem helpers for note-mark."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import TextIO

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS
from .exceptions import ConvertFileError, FileTooLargeError

MAX_FILE_SIZE_ENV_VAR = "NOTE_MARK_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["NOTE_MARK_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def normalize_filepath(raw_path: str) -> Path:
    """Resolve and validate a Markdown filepath.

    Args:
        raw_path: User-supplied path to a Markdown file (absolute or relative).

    Returns:
        Path: Absolute path to the Markdown file.

    Raises:
        ValueError: If the path does not exist, is not a regular file, or uses
            an unsupported extension.

    Examples:
        normalize_filepath("docs/README.md")
    """
    path = Path(raw_path).expanduser()

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    if resolved.suffix.lower() not in MARKDOWN_EXTENSIONS:
        error_message = f"{resolved} is not a Markdown file.\n"
        error_message += f"Supported extensions are: {', '.join(MARKDOWN_EXTENSIONS)}"
        raise ValueError(error_message)

    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a regular file.

    Raises:
        IOError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        FileTooLargeError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        raise FileTooLargeError(filepath, max_size)


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Raises:
        IOError: If the path is missing, inaccessible, or not a file.
    """
    try:
        return open(filepath, "r", encoding="UTF-8", newline="")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def read_markdown(filepath: Path, max_file_size: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Read a Markdown document after checking its size.

    Line endings are kept as they are in the file, so ``"\\r\\n"`` reaches the
    lexer untouched.

    Args:
        filepath: Path to the document.
        max_file_size: Maximum size in bytes.

    Returns:
        str: The document text.

    Raises:
        ConvertFileError: If the file is too large, cannot be read, or is not
            valid UTF-8.
    """
    try:
        enforce_file_size(collect_file_stat(filepath), max_file_size, filepath)
        with safe_read(filepath) as handle:
            return handle.read()
    except FileTooLargeError as error:
        raise ConvertFileError(str(error)) from error
    except UnicodeDecodeError as error:
        raise ConvertFileError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except IOError as error:
        raise ConvertFileError(str(error)) from error


def write_output(filepath: Path, text: str):
    """Atomically write `text` to `filepath`.

    The content goes to a temporary file in the same directory first, which
    then replaces the target.

    Raises:
        ConvertFileError: If the file cannot be written.
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            # Keep the permissions of an existing target
            permissions = stat.S_IMODE(filepath.stat().st_mode) if filepath.exists() else 0o644
            os.chmod(tmp_file.name, permissions)

        os.replace(temp_path, filepath)
    except OSError as error:
        raise ConvertFileError(f"Error writing {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
