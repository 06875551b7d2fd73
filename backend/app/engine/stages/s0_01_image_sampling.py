"""S0.01 — Image Sampling.

Decode the uploaded image and resample it to the requested grid size.
"""

from __future__ import annotations

from app.engine.context import ChartContext
from app.engine.errors import InvalidGridError
from app.engine.registry import Phase, stage
from app.imaging.resample import resample


@stage(
    id="S0.01",
    phase=Phase.SAMPLING,
)
def image_sampling(ctx: ChartContext) -> None:
    if ctx.grid_size is None:
        raise InvalidGridError("Grid size is required to sample an image")
    ctx.grid = resample(ctx.image_bytes, ctx.grid_size, ctx.config)
