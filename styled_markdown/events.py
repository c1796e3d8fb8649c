"""Structural markdown events produced from the markdown-it-py token stream.

markdown-it-py emits a flat list of block tokens whose ``inline`` tokens carry
their own children. This module walks that list and yields one ordered stream
of start/end/text events, which is all the interpreter needs to know about
markdown syntax.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from functools import lru_cache
from typing import Union

from markdown_it import MarkdownIt
from markdown_it.token import Token


class TagKind(Enum):
    """Kinds of container elements that open and close in the event stream."""

    HEADING = auto()
    PARAGRAPH = auto()
    CODE_BLOCK = auto()
    LIST = auto()
    LIST_ITEM = auto()
    EMPHASIS = auto()
    STRONG = auto()
    BLOCK_QUOTE = auto()
    LINK = auto()


@dataclass(frozen=True)
class Tag:
    """A container element.

    Attributes:
        kind: Element kind.
        level: Heading level, only for `TagKind.HEADING`.
        language: Language hint, only for `TagKind.CODE_BLOCK`; empty when
            the block is indented or has no info string.
        url: Link target, only for `TagKind.LINK`.
    """

    kind: TagKind
    level: int | None = None
    language: str | None = None
    url: str | None = None

    @classmethod
    def heading(cls, level: int) -> Tag:
        return cls(TagKind.HEADING, level=level)

    @classmethod
    def code_block(cls, language: str = "") -> Tag:
        return cls(TagKind.CODE_BLOCK, language=language)

    @classmethod
    def link(cls, url: str) -> Tag:
        return cls(TagKind.LINK, url=url)


@dataclass(frozen=True)
class StartTag:
    tag: Tag


@dataclass(frozen=True)
class EndTag:
    tag: Tag


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class InlineCode:
    text: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class ThematicBreak:
    pass


@dataclass(frozen=True)
class OtherEvent:
    """Anything the parser reports that carries no structure we render.

    Attributes:
        name: markdown-it-py token type, e.g. ``"html_block"``.
    """

    name: str


MarkdownEvent = Union[
    StartTag, EndTag, Text, InlineCode, SoftBreak, HardBreak, ThematicBreak, OtherEvent
]

_CONTAINER_TOKENS = {
    "paragraph": TagKind.PARAGRAPH,
    "bullet_list": TagKind.LIST,
    "ordered_list": TagKind.LIST,
    "list_item": TagKind.LIST_ITEM,
    "blockquote": TagKind.BLOCK_QUOTE,
    "em": TagKind.EMPHASIS,
    "strong": TagKind.STRONG,
}


@lru_cache(maxsize=None)
def get_parser() -> MarkdownIt:
    """Return the shared CommonMark parser.

    Built once per process; parsing does not mutate it.
    """
    return MarkdownIt("commonmark")


def iter_events(content: str) -> Iterator[MarkdownEvent]:
    """Yield the structural events of a markdown document in source order.

    Args:
        content: Markdown text.

    Returns:
        Iterator[MarkdownEvent]: Events in document order.

    Examples:
        list(iter_events("# Title"))
        # [StartTag(Tag.heading(1)), Text("Title"), EndTag(Tag.heading(1))]
    """
    for token in get_parser().parse(content):
        yield from _block_events(token)


def fence_language(info: str) -> str:
    """Extract the language hint from a fence info string.

    Only the first word counts, so ```` ```rust ignore ```` gives ``"rust"``.
    """
    words = info.split(maxsplit=1)
    return words[0] if words else ""


def _block_events(token: Token) -> Iterator[MarkdownEvent]:
    if token.type == "inline":
        for child in token.children or ():
            yield from _inline_events(child)
    elif token.type in ("heading_open", "heading_close"):
        tag = Tag.heading(int(token.tag[1:]))
        yield StartTag(tag) if token.nesting == 1 else EndTag(tag)
    elif token.type in ("fence", "code_block"):
        tag = Tag.code_block(fence_language(token.info) if token.type == "fence" else "")
        yield StartTag(tag)
        if token.content:
            yield Text(token.content)
        yield EndTag(tag)
    elif token.type == "hr":
        yield ThematicBreak()
    elif token.type.startswith("paragraph_") and token.hidden:
        # Tight list items hide their paragraphs.
        return
    else:
        yield _container_event(token)


def _inline_events(token: Token) -> Iterator[MarkdownEvent]:
    if token.type in ("text", "text_special"):
        yield Text(token.content)
    elif token.type == "code_inline":
        yield InlineCode(token.content)
    elif token.type == "softbreak":
        yield SoftBreak()
    elif token.type == "hardbreak":
        yield HardBreak()
    elif token.type == "link_open":
        yield StartTag(Tag.link(str(token.attrGet("href") or "")))
    elif token.type == "link_close":
        yield EndTag(Tag(TagKind.LINK))
    elif token.type == "image":
        # The alt text is kept as ordinary inline content.
        yield OtherEvent("image_open")
        for child in token.children or ():
            yield from _inline_events(child)
        yield OtherEvent("image_close")
    else:
        yield _container_event(token)


def _container_event(token: Token) -> MarkdownEvent:
    name, _, suffix = token.type.rpartition("_")
    kind = _CONTAINER_TOKENS.get(name)
    if kind is None or suffix not in ("open", "close"):
        return OtherEvent(token.type)
    tag = Tag(kind)
    return StartTag(tag) if suffix == "open" else EndTag(tag)
