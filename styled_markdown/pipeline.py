"""Markdown text in, styled `Document` out."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .config import RenderConfig
from .events import iter_events
from .filesystem import load_markdown_file
from .interpreter import interpret
from .models import Document, RenderContext


def render_markdown(
    content: str,
    is_dark_mode: bool = False,
    config: RenderConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> Document:
    """Render markdown text into a styled document.

    Performs no I/O. Rendering the same content in the same mode twice gives
    equal documents.

    Args:
        content: Markdown text.
        is_dark_mode: Whether colors are resolved for a dark background.
        config: Rendering configuration; defaults to `RenderConfig()`.
        warn: Optional callback for non-fatal problems.

    Returns:
        Document: Blocks in source order; empty for empty content.

    Examples:
        document = render_markdown("# Title", is_dark_mode=False)
        document[0].text  # "Title"
    """
    context = RenderContext(is_dark_mode=is_dark_mode)
    return interpret(iter_events(content), context, config, warn)


def render_file(
    filepath: Path,
    is_dark_mode: bool | None = None,
    config: RenderConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> Document:
    """Load a markdown file and render it.

    Args:
        filepath: Path to the markdown file.
        is_dark_mode: Color mode; None uses `config.dark_mode`.
        config: Rendering configuration; defaults to `RenderConfig()`.
        warn: Optional callback for non-fatal problems.

    Returns:
        Document: Rendered document.

    Raises:
        ReadFailure: If the file cannot be read, decoded, or is too large.
    """
    config = config or RenderConfig()
    if is_dark_mode is None:
        is_dark_mode = config.dark_mode
    content = load_markdown_file(filepath, max_file_size=config.max_file_size)
    return render_markdown(content, is_dark_mode, config, warn)
