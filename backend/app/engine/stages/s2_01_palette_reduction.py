"""S2.01 — Palette Reduction.

Quantize onto the most frequent colors. Skipped in detailed mode.
"""

from __future__ import annotations

import logging

from app.engine.context import ChartContext
from app.engine.palette import reduce_colors
from app.engine.registry import Phase, stage

logger = logging.getLogger(__name__)


@stage(
    id="S2.01",
    phase=Phase.QUANTIZE,
    dependencies=["S0.02", "S1.01"],
)
def palette_reduction(ctx: ChartContext) -> None:
    before = ctx.distinct_colors
    ctx.grid = reduce_colors(ctx.grid, ctx.max_colors)
    logger.debug("Palette: %d -> %d colors", before, ctx.distinct_colors)
