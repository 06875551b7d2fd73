"""S0.02 — Grid Validation.

Check rectangularity, canonicalise colors and pin the grid size.
"""

from __future__ import annotations

from app.engine.chart_builder import grid_size_of
from app.engine.color import normalize_grid
from app.engine.context import ChartContext
from app.engine.errors import InvalidGridError
from app.engine.registry import Phase, stage


@stage(
    id="S0.02",
    phase=Phase.SAMPLING,
    dependencies=["S0.01"],
)
def grid_validation(ctx: ChartContext) -> None:
    ctx.grid = normalize_grid(ctx.grid)
    actual = grid_size_of(ctx.grid)
    if ctx.grid_size is not None and ctx.grid_size != actual:
        raise InvalidGridError(
            f"Grid is {actual.width}x{actual.height}, expected "
            f"{ctx.grid_size.width}x{ctx.grid_size.height}"
        )
    ctx.grid_size = actual
