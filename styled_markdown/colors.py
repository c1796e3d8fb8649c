"""Semantic color roles resolved for light and dark backgrounds.

Every function here is pure: the same role and mode always give the same
color, so they are safe to call from any number of render passes.
"""

from __future__ import annotations

from .models import Color

# (light, dark) pairs
_HEADING_COLORS = {
    1: (Color(180, 85, 20), Color(255, 175, 135)),
    2: (Color(100, 80, 175), Color(200, 175, 255)),
    3: (Color(35, 120, 175), Color(135, 215, 255)),
    4: (Color(50, 140, 90), Color(175, 255, 200)),
    5: (Color(175, 80, 50), Color(255, 200, 175)),
}
_DEFAULT_HEADING_COLOR = (Color(60, 60, 60), Color(220, 220, 220))

_NORMAL_COLOR = (Color(32, 32, 32), Color(220, 220, 220))
_CODE_BACKGROUND = (Color(245, 245, 245), Color(45, 45, 45))
_BLOCKQUOTE_COLOR = (Color(70, 130, 180), Color(100, 160, 200))
_LINK_COLOR = (Color(0, 0, 238), Color(100, 149, 237))


def _pick(pair: tuple[Color, Color], dark: bool) -> Color:
    light_color, dark_color = pair
    return dark_color if dark else light_color


def heading_color(level: int, dark: bool) -> Color:
    """Return the color of a heading.

    Levels 1 to 5 have their own entry; level 6 and anything outside 1..6
    share the gray default.

    Args:
        level: Heading level.
        dark: Whether the background is dark.

    Returns:
        Color: Heading foreground color.

    Examples:
        heading_color(1, dark=False)  # Color(180, 85, 20)
        heading_color(9, dark=True)  # Color(220, 220, 220)
    """
    return _pick(_HEADING_COLORS.get(level, _DEFAULT_HEADING_COLOR), dark)


def normal_color(dark: bool) -> Color:
    """Return the body text color."""
    return _pick(_NORMAL_COLOR, dark)


def code_background(dark: bool) -> Color:
    """Return the background color of inline code and code blocks."""
    return _pick(_CODE_BACKGROUND, dark)


def blockquote_color(dark: bool) -> Color:
    """Return the accent color of block quotes."""
    return _pick(_BLOCKQUOTE_COLOR, dark)


def link_color(dark: bool) -> Color:
    """Return the color of link text."""
    return _pick(_LINK_COLOR, dark)
