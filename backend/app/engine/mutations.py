"""Chart edits.

Every edit flattens the chart to a color grid, changes the grid, and rebuilds
the chart from scratch, so run lengths and the catalog always agree with the
cells. The palette reducer is not re-run: a color introduced by hand becomes
a regular catalog entry even if that exceeds the original cap.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from app.engine.chart_builder import build_chart
from app.engine.color import normalize_grid, normalize_hex
from app.engine.errors import EditOutOfRangeError
from app.models.chart import Chart

logger = logging.getLogger(__name__)


def _flatten(chart: Chart) -> list[list[str]]:
    # Charts may arrive from clients: ragged rows raise InvalidGridError here.
    return normalize_grid(chart.to_grid())


def _rebuild(chart: Chart, grid: list[list[str]]) -> Chart:
    return build_chart(grid, max_colors=chart.max_colors, grid_size=chart.grid_size)


def recolor_cell(chart: Chart, row: int, col: int, new_color: str) -> Chart:
    """Return a new chart with cell (row, col) set to ``new_color``."""
    grid = _flatten(chart)
    height = len(grid)
    width = len(grid[0]) if grid else 0
    if not (0 <= row < height and 0 <= col < width):
        raise EditOutOfRangeError(f"Cell ({row}, {col}) is outside a {width}x{height} chart")
    old = grid[row][col]
    grid[row][col] = normalize_hex(new_color)
    logger.debug("Recolor (%d, %d) %s -> %s", row, col, old, grid[row][col])
    return _rebuild(chart, grid)


def replace_color(chart: Chart, old_color: str, new_color: str) -> Chart:
    """Return a new chart with every ``old_color`` cell set to ``new_color``.

    Matching is exact on the canonical hex. An absent ``old_color`` still
    yields a freshly built, identical chart.
    """
    return apply_color_map(chart, {old_color: new_color})


def apply_color_map(chart: Chart, mapping: Mapping[str, str]) -> Chart:
    """Replace colors in one pass; each cell is looked up once, so swaps work."""
    grid = remap_grid(_flatten(chart), mapping)
    logger.debug("Color map applied: %s", dict(mapping))
    return _rebuild(chart, grid)


def remap_grid(grid: list[list[str]], mapping: Mapping[str, str]) -> list[list[str]]:
    """Grid-level counterpart of ``apply_color_map``; ``grid`` must already be canonical."""
    table = {normalize_hex(k): normalize_hex(v) for k, v in mapping.items()}
    return [[table.get(color, color) for color in row] for row in grid]
