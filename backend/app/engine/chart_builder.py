"""Chart builder — run-length encode each row and pair it with a fresh catalog."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.engine.catalog import catalog
from app.engine.color import normalize_grid, require_non_empty
from app.engine.errors import ChartGenerationError, InvalidGridError
from app.models.chart import Cell, Chart, GridSize

logger = logging.getLogger(__name__)


def build_row(row: Sequence[str]) -> tuple[Cell, ...]:
    """Cells for one row; the run counter restarts at every color change."""
    cells: list[Cell] = []
    current_color: str | None = None
    sequence_number = 0
    for color in row:
        if color != current_color:
            current_color = color
            sequence_number = 1
        else:
            sequence_number += 1
        cells.append(Cell(color=color, sequence_number=sequence_number))
    return tuple(cells)


def build_cells(grid: Sequence[Sequence[str]]) -> tuple[tuple[Cell, ...], ...]:
    # Rows are independent: runs never carry over a row boundary.
    return tuple(build_row(row) for row in grid)


def grid_size_of(grid: Sequence[Sequence[str]]) -> GridSize:
    require_non_empty(grid)
    return GridSize(width=len(grid[0]), height=len(grid))


def build_chart(
    grid: Sequence[Sequence[str]],
    max_colors: int,
    grid_size: GridSize | None = None,
) -> Chart:
    """Build a complete ``Chart`` from a color grid.

    The grid is validated and canonicalised first; malformed input raises
    ``InvalidGridError``. Any other failure while building surfaces as
    ``ChartGenerationError`` and no chart is returned.
    """
    pixels = normalize_grid(grid)
    actual = grid_size_of(pixels)
    if grid_size is not None and grid_size != actual:
        raise InvalidGridError(
            f"Grid is {actual.width}x{actual.height}, expected "
            f"{grid_size.width}x{grid_size.height}"
        )

    try:
        cells = build_cells(pixels)
        colors = catalog(pixels)
        chart = Chart(
            cells=cells,
            colors=tuple(colors),
            grid_size=actual,
            max_colors=max_colors,
        )
    except Exception as e:
        logger.error("Chart generation failed: %s", e)
        raise ChartGenerationError() from e

    logger.debug(
        "Built %dx%d chart with %d colors", actual.width, actual.height, len(chart.colors)
    )
    return chart
