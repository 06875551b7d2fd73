"""Palette reduction — frequency-ranked palette plus nearest-color remap.

The palette is the ``effective_cap`` most frequent colors of the grid, and
every cell is remapped to the palette entry with the smallest squared RGB
distance. Ties go to the earlier (more frequent) palette entry.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from app.engine.color import grid_to_array, parse_hex

logger = logging.getLogger(__name__)

# The palette never shrinks below two colors.
_MIN_PALETTE = 2


def count_colors(grid: Sequence[Sequence[str]]) -> dict[str, int]:
    """Occurrences per color, keyed in first-encountered (row-major) order."""
    counts: dict[str, int] = {}
    for row in grid:
        for color in row:
            counts[color] = counts.get(color, 0) + 1
    return counts


def rank_colors(counts: dict[str, int]) -> list[tuple[str, int]]:
    """Sort by count descending; ``sorted`` is stable so ties keep scan order."""
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def effective_cap(max_colors: int, distinct_count: int) -> int:
    """Palette size actually targeted: damped by half the natural color count."""
    return max(_MIN_PALETTE, min(max_colors, distinct_count // 2))


def select_palette(grid: Sequence[Sequence[str]], max_colors: int) -> list[str]:
    counts = count_colors(grid)
    if not counts:
        return []
    cap = effective_cap(max_colors, len(counts))
    return [color for color, _ in rank_colors(counts)[:cap]]


def nearest_indices(pixels: NDArray, palette: NDArray) -> NDArray[np.intp]:
    """Index of the closest palette row for every pixel row.

    ``argmin`` returns the first minimum, which gives the palette-order tie break.
    """
    diff = pixels[:, None, :3].astype(np.int64) - palette[None, :, :3].astype(np.int64)
    dist = np.einsum("nkc,nkc->nk", diff, diff)
    return np.argmin(dist, axis=1)


def nearest_color(color: str, palette: Sequence[str]) -> str:
    if not palette:
        raise ValueError("Palette is empty")
    target = np.array([parse_hex(color)], dtype=np.int64)
    entries = np.array([parse_hex(c) for c in palette], dtype=np.int64)
    return palette[int(nearest_indices(target, entries)[0])]


def reduce_colors(
    grid: Sequence[Sequence[str]],
    max_colors: int,
    detailed_mode: bool = False,
) -> list[list[str]]:
    """Quantize ``grid`` onto its dominant colors.

    In detailed mode the grid is returned unchanged (as a copy), even if it has
    more distinct colors than ``max_colors``.
    """
    if detailed_mode:
        return [list(row) for row in grid]

    palette = select_palette(grid, max_colors)
    if not palette:
        return [list(row) for row in grid]

    arr = grid_to_array(grid)
    height, width = arr.shape[0], arr.shape[1]
    entries = np.array([parse_hex(c) for c in palette], dtype=np.int64)
    indices = nearest_indices(arr.reshape(-1, 3), entries).reshape(height, width)

    logger.debug(
        "Reduced %dx%d grid to %d palette colors (requested %d)",
        width, height, len(palette), max_colors,
    )
    return [[palette[i] for i in row] for row in indices.tolist()]
