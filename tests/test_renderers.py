import json

import click

from styled_markdown.colors import heading_color, link_color
from styled_markdown.models import Color, Document, Rule
from styled_markdown.pipeline import render_markdown
from styled_markdown.renderers import RULE_WIDTH, TerminalRenderer, document_to_dict


def _draw(content: str, dark: bool = False) -> list[str]:
    lines: list[str] = []
    TerminalRenderer(is_dark_mode=dark, echo=lines.append).draw(render_markdown(content, dark))
    return [click.unstyle(line) for line in lines]


def test_document_to_dict_heading():
    document = render_markdown("# Title", False)

    assert document_to_dict(document) == [
        {"type": "heading", "level": 1, "text": "Title", "color": heading_color(1, False).hex}
    ]


def test_document_to_dict_runs_and_links():
    document = render_markdown("**a** [b](https://x.test)", True)

    assert document_to_dict(document) == [
        {
            "type": "paragraph",
            "runs": [
                {"text": "a", "format": {"kind": "strong"}},
                {"text": " ", "format": {"kind": "normal"}},
            ],
        },
        {"type": "link", "text": "b", "url": "https://x.test", "color": link_color(True).hex},
    ]


def test_document_to_dict_code_block_is_json_serializable():
    document = render_markdown("```python\nx = 1\n\n```\n", False)

    data = json.loads(json.dumps(document_to_dict(document)))

    assert data[0]["type"] == "code_block"
    assert data[0]["language"] == "python"
    assert [
        "".join(fragment["text"] for fragment in line["fragments"]) for line in data[0]["lines"]
    ] == ["x = 1", ""]
    assert all(
        fragment["color"].startswith("#")
        for line in data[0]["lines"]
        for fragment in line["fragments"]
    )


def test_document_to_dict_rule():
    assert document_to_dict(Document((Rule(),))) == [{"type": "rule"}]


def test_terminal_renderer_draws_every_block():
    content = "# Title\n\ntext *em*\n\n- item\n\n> quote\n\n[link](https://x.test)\n\n***\n"

    lines = _draw(content)

    assert lines == [
        "Title",
        "",
        "text em",
        "",
        "• item",
        "│ quote",
        "",
        "link (https://x.test)",
        "─" * RULE_WIDTH,
    ]


def test_terminal_renderer_code_lines():
    lines = _draw("```\na\n\nb\n```\n", dark=True)

    assert lines == ["a", " ", "b", ""]


def test_terminal_renderer_keeps_color_codes():
    lines: list[str] = []
    TerminalRenderer(echo=lines.append).draw(render_markdown("# Title", False))

    assert lines[0] != "Title"
    assert click.unstyle(lines[0]) == "Title"


def test_color_tuple():
    assert Color(1, 2, 3).as_tuple() == (1, 2, 3)
