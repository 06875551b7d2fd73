"""S1.01 — Outline.

Optional silhouette mode: threshold BT.601 gray into black and white.
"""

from __future__ import annotations

from app.engine.context import ChartContext
from app.engine.registry import Phase, stage
from app.imaging.resample import to_outline


@stage(
    id="S1.01",
    phase=Phase.PREPROCESS,
    dependencies=["S0.02"],
)
def outline(ctx: ChartContext) -> None:
    ctx.grid = to_outline(ctx.grid, ctx.config.outline_threshold)
