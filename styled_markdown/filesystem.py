"""Filesystem helpers for styled-markdown.

These are the only places where the package touches the filesystem, and they
only read.
"""

from __future__ import annotations

import os
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, MARKDOWN_EXTENSIONS, MAX_FILE_SIZE_ENV_VAR
from .exceptions import NotADirectory, ReadFailure


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["STYLED_MARKDOWN_MAX_FILE_SIZE"] = "204800"
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


def _list_entries(directory: Path) -> list[Path]:
    if not directory.is_dir():
        raise NotADirectory(directory)
    try:
        return list(directory.iterdir())
    except OSError as error:
        raise ReadFailure(directory, error) from error


def list_markdown_files(directory: Path) -> list[str]:
    """List the Markdown files directly inside a directory.

    Args:
        directory: Directory to enumerate.

    Returns:
        list[str]: File names (not paths) whose extension is ``md`` or
            ``markdown`` in any case, sorted lexicographically.

    Raises:
        NotADirectory: If `directory` is not a directory.
        ReadFailure: If the directory cannot be enumerated.

    Examples:
        list_markdown_files(Path("docs"))  # ["a.MD", "b.md"]
    """
    return sorted(
        entry.name
        for entry in _list_entries(Path(directory))
        if entry.suffix.lower() in MARKDOWN_EXTENSIONS and entry.is_file()
    )


def list_subdirectories(directory: Path) -> list[str]:
    """List the immediate subdirectories of a directory.

    Args:
        directory: Directory to enumerate.

    Returns:
        list[str]: Directory names, sorted lexicographically.

    Raises:
        NotADirectory: If `directory` is not a directory.
        ReadFailure: If the directory cannot be enumerated.
    """
    return sorted(entry.name for entry in _list_entries(Path(directory)) if entry.is_dir())


def load_markdown_file(filepath: Path, max_file_size: int | None = None) -> str:
    """Read a Markdown file as UTF-8 text.

    Args:
        filepath: Path to the file.
        max_file_size: Maximum size in bytes; None uses the default limit.
            The ``STYLED_MARKDOWN_MAX_FILE_SIZE`` environment variable takes
            precedence over both.

    Returns:
        str: File content.

    Raises:
        ReadFailure: If the file is missing, inaccessible, not valid UTF-8,
            larger than the size limit, or the size limit is misconfigured.

    Examples:
        content = load_markdown_file(Path("README.md"))
    """
    filepath = Path(filepath)
    try:
        limit = get_max_file_size(default=max_file_size or DEFAULT_MAX_FILE_SIZE)
    except ValueError as error:
        raise ReadFailure(filepath, error) from error

    try:
        size = filepath.stat().st_size
    except OSError as error:
        raise ReadFailure(filepath, error) from error

    if size > limit:
        raise ReadFailure(filepath, f"file exceeds the maximum allowed size of {limit} bytes")

    try:
        with open(filepath, "r", encoding="UTF-8") as file:
            return file.read()
    except UnicodeDecodeError as error:
        raise ReadFailure(filepath, f"invalid UTF-8 sequence: {error}") from error
    except OSError as error:
        raise ReadFailure(filepath, error) from error
