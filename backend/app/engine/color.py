"""Color helpers — hex parsing/formatting, grid validation and contrast ink.

Colors travel through the engine as canonical lowercase ``#rrggbb`` strings.
Two colors are equal iff their canonical strings are equal.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from app.engine.errors import InvalidGridError

# ITU-R BT.601 luma weights.
_LUMA_R = 0.299
_LUMA_G = 0.587
_LUMA_B = 0.114
# Sequence numbers flip to black ink above this normalized luminance.
_INK_THRESHOLD = 0.5

BLACK = "#000000"
WHITE = "#ffffff"

_HEX_DIGITS = frozenset("0123456789abcdef")


def parse_hex(color: str) -> tuple[int, int, int]:
    """Parse ``#rgb`` / ``#rrggbb`` (any case) to an (r, g, b) triple."""
    if not isinstance(color, str):
        raise InvalidGridError(f"Color must be a string, got {type(color).__name__}")
    value = color.strip().lower()
    if not value.startswith("#"):
        raise InvalidGridError(f"Invalid color {color!r}")
    value = value[1:]
    if len(value) == 3:
        value = value[0] * 2 + value[1] * 2 + value[2] * 2
    if len(value) != 6 or not set(value) <= _HEX_DIGITS:
        raise InvalidGridError(f"Invalid color {color!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def to_hex(rgb: Sequence[int]) -> str:
    r, g, b = (int(c) for c in rgb[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


def normalize_hex(color: str) -> str:
    return to_hex(parse_hex(color))


def normalize_grid(grid: Sequence[Sequence[str]]) -> list[list[str]]:
    """Validate rectangularity and canonicalise every color.

    Always returns a new grid, so callers may mutate the result freely.
    """
    rows = [list(row) for row in grid]
    if rows:
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise InvalidGridError(
                    f"Grid is not rectangular: row {i} has {len(row)} cells, expected {width}"
                )
    return [[normalize_hex(c) for c in row] for row in rows]


def require_non_empty(grid: Sequence[Sequence[str]]) -> None:
    if not grid or not grid[0]:
        raise InvalidGridError("Grid is empty")


def grid_to_array(grid: Sequence[Sequence[str]]) -> NDArray[np.int64]:
    """HxWx3 integer array of a canonical color grid."""
    if not grid or not grid[0]:
        return np.zeros((len(grid), 0, 3), dtype=np.int64)
    return np.array([[parse_hex(c) for c in row] for row in grid], dtype=np.int64)


def array_to_grid(arr: NDArray) -> list[list[str]]:
    """Inverse of ``grid_to_array``; extra channels (alpha) are ignored."""
    return [[to_hex(px) for px in row] for row in arr]


def luminance(color: str) -> float:
    """Perceived lightness 0-1 (ITU-R BT.601)."""
    r, g, b = parse_hex(color)
    return (_LUMA_R * r + _LUMA_G * g + _LUMA_B * b) / 255.0


def contrast_ink(color: str) -> str:
    """Black or white, whichever reads on top of ``color``."""
    return BLACK if luminance(color) > _INK_THRESHOLD else WHITE
