"""Data models for styled-markdown."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


@dataclass(frozen=True)
class Color:
    """An opaque RGB color.

    Attributes:
        r: Red channel, 0-255.
        g: Green channel, 0-255.
        b: Blue channel, 0-255.

    Examples:
        Color(255, 175, 135).hex  # "#ffaf87"
        Color.from_hex("f8f8f2")
    """

    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Build a color from a ``rrggbb`` or ``#rrggbb`` string.

        Raises:
            ValueError: If `value` is not a six-digit hex color.
        """
        digits = value.lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


class FormatKind(Enum):
    """Inline formatting modes.

    Attributes:
        NORMAL: Plain text.
        HEADING: Heading text; carries a level.
        STRONG: Bold text.
        EMPHASIS: Italic text.
        CODE: Inline code.
        LINK: Link text; carries a URL.
    """

    NORMAL = auto()
    HEADING = auto()
    STRONG = auto()
    EMPHASIS = auto()
    CODE = auto()
    LINK = auto()


@dataclass(frozen=True)
class TextFormat:
    """The single active inline format.

    Only one format is active at a time, so combined styles such as bold
    italic collapse to whichever style was entered last.

    Attributes:
        kind: Formatting mode.
        level: Heading level, set only for `FormatKind.HEADING`.
        url: Link target, set only for `FormatKind.LINK`.
    """

    kind: FormatKind = FormatKind.NORMAL
    level: int | None = None
    url: str | None = None

    @classmethod
    def heading(cls, level: int) -> TextFormat:
        return cls(FormatKind.HEADING, level=level)

    @classmethod
    def link(cls, url: str) -> TextFormat:
        return cls(FormatKind.LINK, url=url)


NORMAL = TextFormat(FormatKind.NORMAL)
STRONG = TextFormat(FormatKind.STRONG)
EMPHASIS = TextFormat(FormatKind.EMPHASIS)
CODE = TextFormat(FormatKind.CODE)


@dataclass(frozen=True)
class TextRun:
    """A piece of text rendered with one format."""

    text: str
    format: TextFormat = NORMAL


# Emitted on hard line breaks in place of a dedicated spacing block.
LINE_BREAK = TextRun("\n", NORMAL)


@dataclass(frozen=True)
class Fragment:
    """A highlighted slice of a code line."""

    text: str
    color: Color


@dataclass(frozen=True)
class HighlightedLine:
    """One line of a code block as ordered colored fragments.

    A blank source line has no fragments.
    """

    fragments: tuple[Fragment, ...] = ()

    @property
    def text(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    color: Color


@dataclass(frozen=True)
class Paragraph:
    runs: tuple[TextRun, ...]

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class CodeBlock:
    language: str
    lines: tuple[HighlightedLine, ...]


@dataclass(frozen=True)
class ListItem:
    text: str


@dataclass(frozen=True)
class BlockQuote:
    runs: tuple[TextRun, ...]

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class LinkRun:
    text: str
    url: str
    color: Color


@dataclass(frozen=True)
class Rule:
    pass


Block = Union[Heading, Paragraph, CodeBlock, ListItem, BlockQuote, LinkRun, Rule]


@dataclass(frozen=True)
class Document:
    """Ordered blocks of a rendered markdown document, in source order."""

    blocks: tuple[Block, ...] = ()

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def __getitem__(self, index: int) -> Block:
        return self.blocks[index]


@dataclass(frozen=True)
class RenderContext:
    """Per-call rendering parameters.

    Attributes:
        is_dark_mode: Whether colors are resolved for a dark background.
    """

    is_dark_mode: bool = False


class ContainerKind(Enum):
    """Containers that decide which block closes a group of inline runs.

    Attributes:
        PARAGRAPH: Top-level runs become a `Paragraph`.
        LIST_ITEM: Runs inside a list item become a `ListItem`.
        BLOCK_QUOTE: Runs inside a block quote become a `BlockQuote`.
    """

    PARAGRAPH = auto()
    LIST_ITEM = auto()
    BLOCK_QUOTE = auto()


@dataclass
class InterpreterState:
    """Mutable state of the event interpreter while walking one document.

    Attributes:
        current_format: Format applied to `current_text` when it is flushed.
        current_text: Text accumulated since the last flush.
        in_code_block: Whether text events belong to a code block.
        code_buffer: Raw text of the open code block.
        code_language: Language hint of the open code block, empty when absent.
    """

    current_format: TextFormat = NORMAL
    current_text: str = ""
    in_code_block: bool = False
    code_buffer: str = ""
    code_language: str = ""
