"""Pipeline configuration — controls image sampling and grid-size suggestion."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PipelineConfig:
    """Tunables for the sampling side of chart generation."""

    # Outline mode: BT.601 gray below this becomes black, otherwise white
    outline_threshold: int = 100

    # Grid-size suggestion
    suggest_min_size: int = 10
    suggest_max_size: int = 80
    suggest_pixels_per_cell: int = 20

    # Resampling filter name (Pillow Image.Resampling member)
    resample_filter: str = "BILINEAR"
