"""Image sampling — decode an upload and resample it onto the chart grid.

This is the default implementation of the ``resample(image_bytes, grid_size)``
capability the pipeline depends on. The chart engine itself only ever sees
the resulting color grid.
"""

from __future__ import annotations

import io
import logging

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from app.engine.color import BLACK, WHITE, array_to_grid, grid_to_array
from app.engine.config import PipelineConfig
from app.engine.errors import ImageProcessingError, UploadRejectedError
from app.models.chart import ColorGrid, GridSize
from app.utils.math_helpers import clamp, round_half_up

logger = logging.getLogger(__name__)

_LUMA = np.array([0.299, 0.587, 0.114])


def validate_upload(content_type: str, size: int, max_bytes: int) -> None:
    if not content_type or not content_type.startswith("image/"):
        raise UploadRejectedError("Please select a valid image file (JPEG, PNG, GIF, etc.)")
    if size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise UploadRejectedError(
            f"File size too large. Please select an image smaller than {limit_mb}MB."
        )


def load_image(image_bytes: bytes) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        logger.warning("Image decode failed: %s", e)
        raise ImageProcessingError("Failed to load image") from e
    return img


def image_to_rgba(img: Image.Image, grid_size: GridSize, resample_filter: str = "BILINEAR") -> NDArray[np.uint8]:
    """Resize to exactly ``grid_size`` and return an HxWx4 array."""
    filt = getattr(Image.Resampling, resample_filter.upper())
    resized = img.convert("RGBA").resize((grid_size.width, grid_size.height), resample=filt)
    return np.array(resized)


def resample(
    image_bytes: bytes,
    grid_size: GridSize,
    config: PipelineConfig | None = None,
) -> ColorGrid:
    """Decode ``image_bytes`` and sample it onto a ``grid_size`` color grid.

    Alpha is dropped: a transparent pixel contributes whatever RGB it carries.
    """
    config = config or PipelineConfig()
    img = load_image(image_bytes)
    rgba = image_to_rgba(img, grid_size, config.resample_filter)
    logger.debug(
        "Resampled %dx%d image to %dx%d grid",
        img.width, img.height, grid_size.width, grid_size.height,
    )
    return array_to_grid(rgba[:, :, :3])


def to_outline(grid: ColorGrid, threshold: int = 100) -> ColorGrid:
    """Silhouette conversion: dark cells become black, everything else white."""
    arr = grid_to_array(grid)
    if arr.size == 0:
        return [list(row) for row in grid]
    gray = arr @ _LUMA
    return [[BLACK if g < threshold else WHITE for g in row] for row in gray.tolist()]


def image_dimensions(image_bytes: bytes) -> tuple[int, int]:
    img = load_image(image_bytes)
    return img.width, img.height


def suggest_grid_size(
    image_width: int,
    image_height: int,
    config: PipelineConfig | None = None,
) -> GridSize:
    """Grid size proportional to the image, roughly one cell per 20 source pixels."""
    config = config or PipelineConfig()
    lo, hi = config.suggest_min_size, config.suggest_max_size
    step = config.suggest_pixels_per_cell

    aspect = image_width / image_height
    if aspect > 1:
        width = clamp(round_half_up(image_width / step), lo, hi)
        height = clamp(round_half_up(width / aspect), lo, hi)
    else:
        height = clamp(round_half_up(image_height / step), lo, hi)
        width = clamp(round_half_up(height * aspect), lo, hi)

    return GridSize(width=width, height=height)
