"""Renderers that turn a `Document` into output.

The document model never draws anything itself; these collaborators do.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import fields, is_dataclass

import click

from .colors import blockquote_color, code_background, normal_color
from .models import (
    Block,
    BlockQuote,
    CodeBlock,
    Color,
    Document,
    FormatKind,
    Heading,
    LinkRun,
    ListItem,
    Paragraph,
    Rule,
    TextFormat,
    TextRun,
)

_BLOCK_TYPES = {
    Heading: "heading",
    Paragraph: "paragraph",
    CodeBlock: "code_block",
    ListItem: "list_item",
    BlockQuote: "block_quote",
    LinkRun: "link",
    Rule: "rule",
}

RULE_WIDTH = 40


def document_to_dict(document: Document) -> list[dict[str, object]]:
    """Convert a document into JSON-serializable data.

    Colors become ``#rrggbb`` strings and every block gets a ``type`` key.

    Examples:
        json.dumps(document_to_dict(render_markdown("# Title")))
    """
    return [{"type": _BLOCK_TYPES[type(block)], **_to_plain(block)} for block in document]


def _to_plain(value: object) -> object:
    if isinstance(value, Color):
        return value.hex
    if isinstance(value, TextFormat):
        plain: dict[str, object] = {"kind": value.kind.name.lower()}
        if value.level is not None:
            plain["level"] = value.level
        if value.url is not None:
            plain["url"] = value.url
        return plain
    if is_dataclass(value):
        return {field.name: _to_plain(getattr(value, field.name)) for field in fields(value)}
    if isinstance(value, tuple):
        return [_to_plain(item) for item in value]
    return value


class TerminalRenderer:
    """Draw documents as ANSI-styled terminal text.

    Args:
        is_dark_mode: Whether the terminal background is dark.
        echo: Line printer; defaults to `click.echo`.
    """

    def __init__(self, is_dark_mode: bool = False, echo: Callable[[str], None] | None = None):
        self.is_dark_mode = is_dark_mode
        self.echo = echo or click.echo
        self._drawers: dict[type, Callable[..., None]] = {
            Heading: self.draw_heading,
            Paragraph: self.draw_paragraph,
            CodeBlock: self.draw_code_block,
            ListItem: self.draw_list_item,
            BlockQuote: self.draw_block_quote,
            LinkRun: self.draw_link,
            Rule: self.draw_rule,
        }

    def draw(self, document: Document) -> None:
        for block in document:
            self.draw_block(block)

    def draw_block(self, block: Block) -> None:
        self._drawers[type(block)](block)

    def draw_heading(self, block: Heading) -> None:
        self.echo(click.style(block.text, fg=block.color.as_tuple(), bold=True))
        self.echo("")

    def draw_paragraph(self, block: Paragraph) -> None:
        self.echo(self._style_runs(block.runs))
        self.echo("")

    def draw_code_block(self, block: CodeBlock) -> None:
        background = code_background(self.is_dark_mode).as_tuple()
        for line in block.lines:
            styled = "".join(
                click.style(fragment.text, fg=fragment.color.as_tuple(), bg=background)
                for fragment in line.fragments
            )
            self.echo(styled or click.style(" ", bg=background))
        self.echo("")

    def draw_list_item(self, block: ListItem) -> None:
        self.echo(block.text)

    def draw_block_quote(self, block: BlockQuote) -> None:
        bar = click.style("│ ", fg=blockquote_color(self.is_dark_mode).as_tuple())
        for line in self._style_runs(block.runs).split("\n"):
            self.echo(bar + line)
        self.echo("")

    def draw_link(self, block: LinkRun) -> None:
        text = click.style(block.text, fg=block.color.as_tuple(), underline=True)
        self.echo(f"{text} ({block.url})")

    def draw_rule(self, block: Rule) -> None:
        self.echo(click.style("─" * RULE_WIDTH, fg=normal_color(self.is_dark_mode).as_tuple()))

    def _style_runs(self, runs: tuple[TextRun, ...]) -> str:
        return "".join(self._style_run(run) for run in runs)

    def _style_run(self, run: TextRun) -> str:
        kind = run.format.kind
        if kind is FormatKind.STRONG:
            return click.style(run.text, bold=True)
        if kind is FormatKind.EMPHASIS:
            return click.style(run.text, italic=True)
        if kind is FormatKind.CODE:
            return click.style(
                run.text,
                fg=normal_color(self.is_dark_mode).as_tuple(),
                bg=code_background(self.is_dark_mode).as_tuple(),
            )
        return run.text
