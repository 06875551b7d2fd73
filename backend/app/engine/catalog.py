"""Color catalog — frequency-ranked color metadata for a grid.

The naming heuristic is deliberately coarse: channel dominance first, then a
few high-channel combinations, then a hex fallback. Output parity with the
web charts depends on reproducing it exactly.
"""

from __future__ import annotations

from collections.abc import Sequence

from app.engine.color import parse_hex
from app.engine.palette import count_colors, rank_colors
from app.models.chart import ColorInfo
from app.utils.math_helpers import round_half_up

# Channel thresholds for the secondary hues.
_CHANNEL_HIGH = 200
_CHANNEL_LOW = 100

_YARN_BLACK = "Black yarn"
_YARN_WHITE = "White yarn"
_YARN_GENERIC = "Matching yarn color"


def color_name(hex_color: str) -> str:
    r, g, b = parse_hex(hex_color)

    if r == g == b:
        if r == 0:
            return "Black"
        if r == 255:
            return "White"
        return f"Gray {round_half_up(r / 255 * 100)}%"

    if r > g and r > b:
        return "Red"
    if g > r and g > b:
        return "Green"
    if b > r and b > g:
        return "Blue"
    if r > _CHANNEL_HIGH and g > _CHANNEL_HIGH and b < _CHANNEL_LOW:
        return "Yellow"
    if r > _CHANNEL_HIGH and g < _CHANNEL_LOW and b > _CHANNEL_HIGH:
        return "Magenta"
    if r < _CHANNEL_LOW and g > _CHANNEL_HIGH and b > _CHANNEL_HIGH:
        return "Cyan"

    return f"Color {hex_color}"


def yarn_suggestion(hex_color: str) -> str:
    rgb = parse_hex(hex_color)
    if rgb == (0, 0, 0):
        return _YARN_BLACK
    if rgb == (255, 255, 255):
        return _YARN_WHITE
    return _YARN_GENERIC


def catalog(grid: Sequence[Sequence[str]]) -> list[ColorInfo]:
    """One ``ColorInfo`` per distinct color, most used first, ties in scan order."""
    return [
        ColorInfo(
            hex=hex_color,
            name=color_name(hex_color),
            count=count,
            yarn_suggestion=yarn_suggestion(hex_color),
        )
        for hex_color, count in rank_colors(count_colors(grid))
    ]
