"""S2.02 — Color Overrides.

Apply the caller's persistent old → new color substitutions.
"""

from __future__ import annotations

from app.engine.context import ChartContext
from app.engine.mutations import remap_grid
from app.engine.registry import Phase, stage


@stage(
    id="S2.02",
    phase=Phase.QUANTIZE,
    dependencies=["S2.01"],
)
def color_overrides(ctx: ChartContext) -> None:
    ctx.grid = remap_grid(ctx.grid, ctx.color_overrides)
