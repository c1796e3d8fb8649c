"""End-to-end rendering of markdown text into documents."""

import textwrap

import pytest

from styled_markdown.colors import heading_color, link_color
from styled_markdown.config import RenderConfig
from styled_markdown.models import (
    CODE,
    EMPHASIS,
    LINE_BREAK,
    NORMAL,
    STRONG,
    BlockQuote,
    CodeBlock,
    Heading,
    HighlightedLine,
    LinkRun,
    ListItem,
    Paragraph,
    Rule,
    TextRun,
)
from styled_markdown.pipeline import render_file, render_markdown


def _md(text: str) -> str:
    return textwrap.dedent(text).lstrip()


@pytest.mark.parametrize("dark", [False, True])
def test_empty_content_renders_empty_document(dark: bool):
    assert len(render_markdown("", dark)) == 0


def test_single_heading():
    document = render_markdown("# Title", False)

    assert document.blocks == (Heading(1, "Title", heading_color(1, False)),)


@pytest.mark.parametrize("dark", [False, True])
def test_bold_normal_italic_runs(dark: bool):
    document = render_markdown("**bold** and *italic*", dark)

    assert document.blocks == (
        Paragraph(
            (
                TextRun("bold", STRONG),
                TextRun(" and ", NORMAL),
                TextRun("italic", EMPHASIS),
            )
        ),
    )


def test_rust_code_block_keeps_blank_line():
    document = render_markdown("```rust\nfn main() {}\n\n```\n", True)

    (block,) = document.blocks
    assert isinstance(block, CodeBlock)
    assert block.language == "rust"
    assert len(block.lines) == 2
    assert block.lines[0].text == "fn main() {}"
    assert block.lines[1] == HighlightedLine()


def test_unknown_language_falls_back_without_error():
    document = render_markdown("```foolang\nlet x = 1\n```\n", False)

    (block,) = document.blocks
    assert block.language == "foolang"
    assert [line.text for line in block.lines] == ["let x = 1"]
    assert len(block.lines[0].fragments) == 1


def test_code_block_starting_with_byte_order_mark_keeps_every_line():
    document = render_markdown("```python\n\ufeffx = 1\ny\n```\n", True)

    (block,) = document.blocks
    assert [line.text for line in block.lines] == ["\ufeffx = 1", "y"]


def test_indented_code_block():
    document = render_markdown("    print('hi')\n", False)

    (block,) = document.blocks
    assert block.language == ""
    assert block.lines[0].text == "print('hi')"


def test_document_order_follows_source():
    content = _md(
        """
        # Notes

        Intro with `code` and a [link](https://example.com).

        - first
        - second

        > quoted *text*

        ***

        ## End
        """
    )

    document = render_markdown(content, False)

    assert document.blocks == (
        Heading(1, "Notes", heading_color(1, False)),
        Paragraph((TextRun("Intro with "), TextRun("code", CODE), TextRun(" and a "))),
        LinkRun("link", "https://example.com", link_color(False)),
        Paragraph((TextRun("."),)),
        ListItem("• first"),
        ListItem("• second"),
        BlockQuote((TextRun("quoted "), TextRun("text", EMPHASIS))),
        Rule(),
        Heading(2, "End", heading_color(2, False)),
    )


def test_nested_and_ordered_lists_are_flat_items():
    content = _md(
        """
        1. outer
           - inner
        2. next
        """
    )

    document = render_markdown(content, False)

    assert document.blocks == (
        ListItem("• outer"),
        ListItem("• inner"),
        ListItem("• next"),
    )


def test_loose_list_item_keeps_bullet_on_first_paragraph():
    content = _md(
        """
        - first

          more
        """
    )

    document = render_markdown(content, False)

    assert document.blocks == (ListItem("• first"), ListItem("more"))


def test_block_quote_paragraphs_are_captured():
    content = _md(
        """
        > one
        >
        > two
        """
    )

    document = render_markdown(content, True)

    assert document.blocks == (
        BlockQuote((TextRun("one"),)),
        BlockQuote((TextRun("two"),)),
    )


def test_block_quote_code_stays_in_flat_sequence():
    content = _md(
        """
        > intro
        > ```
        > code
        > ```
        """
    )

    document = render_markdown(content, False)

    assert document[0] == BlockQuote((TextRun("intro"),))
    assert isinstance(document[1], CodeBlock)
    assert document[1].lines[0].text == "code"


def test_soft_and_hard_breaks():
    document = render_markdown("one\ntwo  \nthree", False)

    assert document.blocks == (
        Paragraph((TextRun("one two"), LINE_BREAK, TextRun("three"))),
    )


def test_bold_italic_keeps_only_innermost_style():
    document = render_markdown("***both***", False)

    (block,) = document.blocks
    assert len(block.runs) == 1
    assert block.runs[0].text == "both"
    assert block.runs[0].format in (STRONG, EMPHASIS)


def test_heading_with_emphasis_splits_heading():
    document = render_markdown("# Big *deal*", False)

    assert document.blocks == (
        Heading(1, "Big ", heading_color(1, False)),
        Paragraph((TextRun("deal", EMPHASIS),)),
    )


def test_html_is_ignored():
    document = render_markdown("<div>\nraw\n</div>\n\ntext", False)

    assert document.blocks == (Paragraph((TextRun("text"),)),)


def test_image_alt_text_is_rendered_as_text():
    document = render_markdown("![a cat](cat.png)", False)

    assert document.blocks == (Paragraph((TextRun("a cat"),)),)


def test_rendering_is_idempotent():
    content = "# T\n\n```python\nx = '''\ny\n'''\n```\n\n- a *b*\n"

    assert render_markdown(content, True) == render_markdown(content, True)
    assert render_markdown(content, False) == render_markdown(content, False)


def test_dark_mode_changes_colors_only():
    light = render_markdown("# Title", False)
    dark = render_markdown("# Title", True)

    assert light[0].text == dark[0].text
    assert light[0].color != dark[0].color


def test_render_file_uses_config_dark_mode(tmp_path):
    path = tmp_path / "doc.md"
    path.write_text("# Title\n", encoding="utf-8")

    document = render_file(path, config=RenderConfig(dark_mode=True))

    assert document.blocks == (Heading(1, "Title", heading_color(1, True)),)


def test_render_file_explicit_mode_wins(tmp_path):
    path = tmp_path / "doc.md"
    path.write_text("# Title\n", encoding="utf-8")

    document = render_file(path, is_dark_mode=False, config=RenderConfig(dark_mode=True))

    assert document[0].color == heading_color(1, False)
