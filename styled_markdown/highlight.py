"""Line-by-line syntax highlighting of code blocks with Pygments.

A code block is lexed once, as a lazily consumed token stream, so lexer state
(open strings, comments, nested scopes) carries from one line to the next.
Each call to `CodeHighlighter.highlight_lines` starts from a fresh stream.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from functools import lru_cache

from pygments.lexer import Lexer
from pygments.lexers import find_lexer_class, get_all_lexers
from pygments.lexers.special import TextLexer
from pygments.style import StyleMeta
from pygments.styles import get_style_by_name
from pygments.token import Token, _TokenType
from pygments.util import ClassNotFound

from .colors import normal_color
from .config import RenderConfig
from .constants import FALLBACK_CODE_STYLE
from .exceptions import HighlightFailure
from .models import Color, Fragment, HighlightedLine

logger = logging.getLogger(__name__)

TokenLine = list[tuple[_TokenType, str]]

_LEXER_OPTIONS = {"stripnl": False, "ensurenl": True}


def split_code_lines(code: str) -> list[str]:
    """Split code block text into lines.

    Only newlines separate lines. Blank lines are kept, a trailing newline
    does not add an empty last line, and a carriage return before a newline
    is dropped.

    Args:
        code: Raw code block text.

    Returns:
        list[str]: Lines without their line terminators.

    Examples:
        split_code_lines("a\\n\\nb\\n")  # ["a", "", "b"]
        split_code_lines("")  # []
    """
    if not code:
        return []
    lines = code.split("\n")
    if code.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@lru_cache(maxsize=None)
def _syntax_index() -> tuple[dict[str, str], dict[str, str]]:
    extensions: dict[str, str] = {}
    aliases: dict[str, str] = {}
    for name, lexer_aliases, filenames, _mimetypes in get_all_lexers():
        for pattern in filenames:
            extension = pattern[2:]
            if pattern.startswith("*.") and extension and not any(c in extension for c in "*?["):
                extensions.setdefault(extension, name)
        for alias in lexer_aliases:
            aliases.setdefault(alias, name)
    return extensions, aliases


def find_lexer(language: str | None) -> Lexer:
    """Return a fresh lexer for a code block language hint.

    The hint is matched case-sensitively against file extensions first. Lexer
    aliases are tried second so that names like ``rust`` work as well as the
    ``rs`` extension. Anything else gets the plain text lexer.

    Args:
        language: Language hint from the fence info string, or None.

    Returns:
        Lexer: Lexer configured to keep leading and trailing blank lines.

    Examples:
        find_lexer("rs").name  # "Rust"
        find_lexer("foolang").name  # "Text only"
    """
    if language:
        extensions, aliases = _syntax_index()
        lexer_name = extensions.get(language) or aliases.get(language)
        if lexer_name is not None:
            lexer_class = find_lexer_class(lexer_name)
            if lexer_class is not None:
                return lexer_class(**_LEXER_OPTIONS)
        logger.debug("No lexer for %r, using plain text", language)
    return TextLexer(**_LEXER_OPTIONS)


@lru_cache(maxsize=None)
def get_code_style(name: str) -> StyleMeta:
    """Return the Pygments style class called `name`.

    Unknown names fall back to the Pygments default style.
    """
    try:
        return get_style_by_name(name)
    except ClassNotFound:
        logger.warning("Unknown code style %r, using %r", name, FALLBACK_CODE_STYLE)
        return get_style_by_name(FALLBACK_CODE_STYLE)


def _style_color(style: StyleMeta, ttype: _TokenType) -> Color | None:
    value = style.style_for_token(ttype)["color"]
    if not value:
        return None
    try:
        return Color.from_hex(value)
    except ValueError:
        return None


class CodeHighlighter:
    """Highlight the lines of code blocks with one lexer and one style.

    Args:
        lexer: Pygments lexer used for every block.
        style: Pygments style class resolving token colors.
        fallback_color: Color of lines that cannot be highlighted.
        warn: Optional callback receiving a message for every failed line.
    """

    def __init__(
        self,
        lexer: Lexer,
        style: StyleMeta,
        fallback_color: Color,
        warn: Callable[[str], None] | None = None,
    ):
        self.lexer = lexer
        self.style = style
        self.fallback_color = fallback_color
        self.warn = warn
        self.default_color = _style_color(style, Token) or fallback_color
        self._colors: dict[_TokenType, Color] = {}

    def highlight_lines(self, lines: Sequence[str]) -> tuple[HighlightedLine, ...]:
        """Highlight `lines` as one code block.

        A line that fails to highlight, or whose tokens do not spell it out
        exactly, becomes a single fragment in the fallback color. Lexing then
        resumes with fresh state on the next line.

        Args:
            lines: Lines of one code block, without terminators.

        Returns:
            tuple[HighlightedLine, ...]: One entry per input line.
        """
        highlighted: list[HighlightedLine] = []
        token_lines = self._iter_token_lines(lines)

        for index, line in enumerate(lines):
            try:
                tokens = self._next_token_line(token_lines, line, index + 1)
            except HighlightFailure as failure:
                logger.debug("%s", failure)
                if self.warn is not None:
                    self.warn(f"Warning: {failure}")
                highlighted.append(self._plain_line(line))
                token_lines = self._iter_token_lines(lines[index + 1 :])
                continue
            highlighted.append(self._colorize(tokens))

        return tuple(highlighted)

    def _next_token_line(
        self, token_lines: Iterator[TokenLine], line: str, line_number: int
    ) -> TokenLine:
        try:
            tokens = next(token_lines)
        except StopIteration as error:
            raise HighlightFailure(line_number, "lexer produced too few lines") from error
        except Exception as error:
            raise HighlightFailure(line_number, error) from error
        # Pygments rewrites lone carriage returns and drops a leading BOM.
        if "".join(text for _, text in tokens) != line:
            raise HighlightFailure(line_number, "lexer output does not match the line")
        return tokens

    def _iter_token_lines(self, lines: Sequence[str]) -> Iterator[TokenLine]:
        if not lines:
            return
        source = "\n".join(lines) + "\n"
        current: TokenLine = []
        for ttype, value in self.lexer.get_tokens(source):
            *complete, rest = value.split("\n")
            for part in complete:
                if part:
                    current.append((ttype, part))
                yield current
                current = []
            if rest:
                current.append((ttype, rest))
        if current:
            yield current

    def _colorize(self, tokens: TokenLine) -> HighlightedLine:
        return HighlightedLine(tuple(Fragment(text, self._color(ttype)) for ttype, text in tokens))

    def _color(self, ttype: _TokenType) -> Color:
        color = self._colors.get(ttype)
        if color is None:
            color = _style_color(self.style, ttype) or self.default_color
            self._colors[ttype] = color
        return color

    def _plain_line(self, line: str) -> HighlightedLine:
        if not line:
            return HighlightedLine()
        return HighlightedLine((Fragment(line, self.fallback_color),))


def highlight_code(
    code: str,
    language: str | None,
    is_dark_mode: bool,
    config: RenderConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> tuple[HighlightedLine, ...]:
    """Highlight a code block.

    Args:
        code: Raw code block text.
        language: Language hint; unknown or empty hints use plain text.
        is_dark_mode: Selects the dark or light code style.
        config: Rendering configuration naming the code styles.
        warn: Optional callback for lines that could not be highlighted.

    Returns:
        tuple[HighlightedLine, ...]: Exactly one entry per line of `code`.

    Examples:
        lines = highlight_code("fn main() {}\\n", "rust", is_dark_mode=True)
    """
    config = config or RenderConfig()
    highlighter = CodeHighlighter(
        find_lexer(language),
        get_code_style(config.code_style(is_dark_mode)),
        fallback_color=normal_color(is_dark_mode),
        warn=warn,
    )
    return highlighter.highlight_lines(split_code_lines(code))
