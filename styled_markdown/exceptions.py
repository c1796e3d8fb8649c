"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class FilesystemError(OSError):
    """Base class for errors raised by the filesystem boundary helpers.

    Carries a human-readable message; the offending path is kept on the
    instance for callers that want to report it separately.
    """


class ReadFailure(FilesystemError):
    """Raised when a file or directory cannot be read.

    Args:
        path: Path that could not be read.
        reason: Underlying error or explanation.
    """

    def __init__(self, path: Path, reason: object):
        self.path = path
        self.reason = reason
        super().__init__(f"Error reading {path}: {reason}")


class NotADirectory(FilesystemError):
    """Raised when a path given for enumeration is not a directory.

    Args:
        path: Path that was expected to be a directory.
    """

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"{path} is not a directory.")


class HighlightFailure(RuntimeError):
    """Raised when a single code line cannot be highlighted.

    Never escapes the highlighter: the line falls back to plain text.

    Args:
        line_number: One-based index of the line inside its code block.
        reason: Underlying error raised by the lexer.
    """

    def __init__(self, line_number: int, reason: object):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Could not highlight line {line_number}: {reason}")
