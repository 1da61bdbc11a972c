"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class ConvertError(ValueError):
    """Base class for conversion-related errors.

    The markup grammar itself never fails; these errors describe problems with
    the document source, such as limits or unreadable files. Catching it also
    catches read and write failures.
    """


class FileTooLargeError(ConvertError):
    """Raised when a document exceeds the configured maximum size.

    Args:
        path: Path of the offending document.
        limit: Maximum allowed size in bytes.
    """

    def __init__(self, path: Path, limit: int):
        self.path = path
        self.limit = limit
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"{self.path} exceeds the maximum allowed size of {self.limit} bytes."


class ConvertFileError(ConvertError):
    """Raised when reading or writing a document fails."""
