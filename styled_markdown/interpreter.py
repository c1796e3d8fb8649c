"""Interpretation of markdown events into styled blocks.

The interpreter is a small state machine. Text accumulates under the current
format until a format change or a structural boundary flushes it, so every
run in the output carries exactly one format and no run is ever empty.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .colors import heading_color, link_color
from .config import RenderConfig
from .document import DocumentBuilder
from .events import (
    EndTag,
    HardBreak,
    InlineCode,
    MarkdownEvent,
    SoftBreak,
    StartTag,
    Tag,
    TagKind,
    Text,
    ThematicBreak,
)
from .highlight import highlight_code
from .models import (
    CODE,
    EMPHASIS,
    LINE_BREAK,
    NORMAL,
    STRONG,
    CodeBlock,
    ContainerKind,
    Document,
    FormatKind,
    Heading,
    InterpreterState,
    LinkRun,
    RenderContext,
    Rule,
    TextFormat,
    TextRun,
)

_STYLE_FORMATS = {TagKind.EMPHASIS: EMPHASIS, TagKind.STRONG: STRONG}
_CONTAINERS = {
    TagKind.LIST_ITEM: ContainerKind.LIST_ITEM,
    TagKind.BLOCK_QUOTE: ContainerKind.BLOCK_QUOTE,
}


class EventInterpreter:
    """Consume markdown events and build a `Document`.

    Args:
        context: Rendering parameters for this document.
        config: Rendering configuration; defaults to `RenderConfig()`.
        warn: Optional callback for non-fatal problems such as code lines
            that could not be highlighted.

    Examples:
        interpreter = EventInterpreter(RenderContext(is_dark_mode=True))
        for event in iter_events("# Title"):
            interpreter.feed(event)
        document = interpreter.finish()
    """

    def __init__(
        self,
        context: RenderContext,
        config: RenderConfig | None = None,
        warn: Callable[[str], None] | None = None,
    ):
        self.context = context
        self.config = config or RenderConfig()
        self.warn = warn
        self.state = InterpreterState()
        self._builder = DocumentBuilder()

    def feed(self, event: MarkdownEvent) -> None:
        """Apply one event. Unknown events are ignored."""
        if isinstance(event, StartTag):
            self._start(event.tag)
        elif isinstance(event, EndTag):
            self._end(event.tag)
        elif isinstance(event, Text):
            if self.state.in_code_block:
                self.state.code_buffer += event.text
            else:
                self.state.current_text += event.text
        elif isinstance(event, InlineCode):
            self.flush()
            self._builder.add_run(TextRun(event.text, CODE))
        elif isinstance(event, SoftBreak):
            self.state.current_text += " "
        elif isinstance(event, HardBreak):
            self.flush()
            self._builder.add_run(LINE_BREAK)
        elif isinstance(event, ThematicBreak):
            self.flush()
            self._builder.add_block(Rule())

    def finish(self) -> Document:
        """Flush pending text and return the finished document."""
        self.flush()
        return self._builder.build()

    def flush(self) -> None:
        """Emit the accumulated text under the current format and clear it."""
        text = self.state.current_text
        if not text:
            return
        self.state.current_text = ""

        current_format = self.state.current_format
        dark = self.context.is_dark_mode
        if current_format.kind is FormatKind.HEADING:
            level = current_format.level or 1
            self._builder.add_block(Heading(level, text, heading_color(level, dark)))
        elif current_format.kind is FormatKind.LINK:
            self._builder.add_block(LinkRun(text, current_format.url or "", link_color(dark)))
        else:
            self._builder.add_run(TextRun(text, current_format))

    def flush_and_transition(self, new_format: TextFormat) -> None:
        """Flush, then make `new_format` the current format."""
        self.flush()
        self.state.current_format = new_format

    def _boundary(self) -> None:
        self.flush()
        self._builder.close_runs()

    def _start(self, tag: Tag) -> None:
        kind = tag.kind
        if kind is TagKind.HEADING:
            self._boundary()
            self.flush_and_transition(TextFormat.heading(tag.level or 1))
        elif kind is TagKind.PARAGRAPH:
            self.flush()
        elif kind is TagKind.CODE_BLOCK:
            self._boundary()
            self.state.in_code_block = True
            self.state.code_buffer = ""
            self.state.code_language = tag.language or ""
        elif kind is TagKind.LIST:
            self._boundary()
        elif kind in _CONTAINERS:
            self._boundary()
            self._builder.open_container(_CONTAINERS[kind])
            if kind is TagKind.LIST_ITEM:
                self.state.current_text = self.config.bullet_marker
        elif kind in _STYLE_FORMATS:
            self.flush_and_transition(_STYLE_FORMATS[kind])
        elif kind is TagKind.LINK:
            self.flush_and_transition(TextFormat.link(tag.url or ""))

    def _end(self, tag: Tag) -> None:
        kind = tag.kind
        if kind is TagKind.HEADING:
            self.flush_and_transition(NORMAL)
            self._builder.close_runs()
        elif kind in (TagKind.PARAGRAPH, TagKind.LIST):
            self._boundary()
        elif kind is TagKind.CODE_BLOCK:
            self._finish_code_block()
        elif kind in _CONTAINERS:
            self._boundary()
            self._builder.close_container(_CONTAINERS[kind])
        elif kind in _STYLE_FORMATS or kind is TagKind.LINK:
            self.flush_and_transition(NORMAL)

    def _finish_code_block(self) -> None:
        state = self.state
        if state.code_buffer:
            lines = highlight_code(
                state.code_buffer,
                state.code_language,
                self.context.is_dark_mode,
                config=self.config,
                warn=self.warn,
            )
            self._builder.add_block(CodeBlock(state.code_language, lines))
        state.in_code_block = False
        state.code_buffer = ""


def interpret(
    events: Iterable[MarkdownEvent],
    context: RenderContext,
    config: RenderConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> Document:
    """Run a complete event stream through a fresh `EventInterpreter`.

    Args:
        events: Markdown events in document order.
        context: Rendering parameters.
        config: Rendering configuration.
        warn: Optional callback for non-fatal problems.

    Returns:
        Document: Blocks in source order.
    """
    interpreter = EventInterpreter(context, config, warn)
    for event in events:
        interpreter.feed(event)
    return interpreter.finish()
