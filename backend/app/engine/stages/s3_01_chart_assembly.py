"""S3.01 — Chart Assembly.

Run-length encode the rows and attach a catalog computed from the same grid.
"""

from __future__ import annotations

from app.engine.chart_builder import build_chart
from app.engine.context import ChartContext
from app.engine.registry import Phase, stage


@stage(
    id="S3.01",
    phase=Phase.ASSEMBLY,
    dependencies=["S0.02", "S2.01", "S2.02"],
)
def chart_assembly(ctx: ChartContext) -> None:
    ctx.chart = build_chart(ctx.grid, max_colors=ctx.max_colors, grid_size=ctx.grid_size)
