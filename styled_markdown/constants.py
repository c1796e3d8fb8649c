"""Constants used across the styled-markdown package."""

from __future__ import annotations

# Files
MARKDOWN_EXTENSIONS = (".md", ".markdown")
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
MAX_FILE_SIZE_ENV_VAR = "STYLED_MARKDOWN_MAX_FILE_SIZE"

# Rendering defaults
DEFAULT_BULLET_MARKER = "• "
DEFAULT_DARK_CODE_STYLE = "monokai"
DEFAULT_LIGHT_CODE_STYLE = "friendly"
FALLBACK_CODE_STYLE = "default"

# Configuration discovery
CONFIG_TABLE = "styled-markdown"
CONFIG_DOTFILE = ".styled-markdown.toml"
