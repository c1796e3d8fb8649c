"""
styled-markdown: Markdown to styled document model.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    styled-markdown render README.md --dark
    styled-markdown ls docs

Library Usage:
    from styled_markdown import render_markdown

    document = render_markdown("# Title\n\nSome *text*.", is_dark_mode=True)
    for block in document:
        print(block)
"""

from .colors import blockquote_color, code_background, heading_color, link_color, normal_color
from .config import ConfigError, RenderConfig
from .events import iter_events
from .exceptions import FilesystemError, HighlightFailure, NotADirectory, ReadFailure
from .filesystem import list_markdown_files, list_subdirectories, load_markdown_file
from .highlight import highlight_code
from .interpreter import EventInterpreter, interpret
from .models import (
    Block,
    BlockQuote,
    CodeBlock,
    Color,
    Document,
    Fragment,
    Heading,
    HighlightedLine,
    LinkRun,
    ListItem,
    Paragraph,
    RenderContext,
    Rule,
    TextFormat,
    TextRun,
)
from .pipeline import render_file, render_markdown

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "render_markdown",
    "render_file",
    "interpret",
    "iter_events",
    "highlight_code",
    "EventInterpreter",
    # Colors
    "heading_color",
    "normal_color",
    "code_background",
    "blockquote_color",
    "link_color",
    # Data models
    "Block",
    "BlockQuote",
    "CodeBlock",
    "Color",
    "Document",
    "Fragment",
    "Heading",
    "HighlightedLine",
    "LinkRun",
    "ListItem",
    "Paragraph",
    "RenderContext",
    "Rule",
    "TextFormat",
    "TextRun",
    # Files
    "list_markdown_files",
    "list_subdirectories",
    "load_markdown_file",
    # Configuration
    "RenderConfig",
    # Exceptions
    "ConfigError",
    "FilesystemError",
    "HighlightFailure",
    "NotADirectory",
    "ReadFailure",
    # Version
    "__version__",
]
