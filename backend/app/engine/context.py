"""ChartContext — the mutable state object flowing through one generation run.

Inputs are set by the caller; stages replace ``grid`` as they go and the
assembly stage sets ``chart``. The context is private to a single run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.engine.config import PipelineConfig
from app.models.chart import Chart, ColorGrid, GridSize


@dataclass
class ChartContext:
    """Shared state for a single chart generation."""

    # Source: either encoded image bytes (decoded by the sampling stage) or a ready grid
    image_bytes: bytes | None = None
    grid: ColorGrid = field(default_factory=list)
    # Target dimensions; derived from ``grid`` when it is supplied directly
    grid_size: GridSize | None = None

    max_colors: int = 6
    detailed_mode: bool = False
    outline: bool = False
    # old hex -> new hex, applied after palette reduction
    color_overrides: dict[str, str] = field(default_factory=dict)

    config: PipelineConfig = field(default_factory=PipelineConfig)

    # --- Output ---
    chart: Chart | None = None

    # --- Pipeline metadata ---
    completed_stages: list[str] = field(default_factory=list)
    skipped_stages: set[str] = field(default_factory=set)

    @property
    def has_image(self) -> bool:
        return self.image_bytes is not None

    @property
    def distinct_colors(self) -> int:
        return len({c for row in self.grid for c in row})
