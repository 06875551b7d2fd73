"""Chart endpoints — generate, edit, export and summarise crochet charts."""

from __future__ import annotations

import base64
import binascii
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from app.config import Settings
from app.dependencies import get_settings
from app.engine.chart_builder import build_chart
from app.engine.errors import UploadRejectedError
from app.engine.mutations import recolor_cell, replace_color
from app.engine.pipeline import generate_chart, generate_chart_from_image
from app.export.formats import EXPORT_FORMATS, export_chart
from app.export.raster import RasterLayout
from app.export.statistics import chart_statistics
from app.imaging.resample import image_dimensions, suggest_grid_size, validate_upload
from app.models.chart import Chart, ChartStatistics, GridSize
from app.models.requests import (
    ChartRequest,
    GenerateFromImageRequest,
    GenerateRequest,
    RecolorRequest,
    ReplaceColorRequest,
)

router = APIRouter(prefix="/charts")
logger = logging.getLogger(__name__)


def _max_colors(requested: int | None, settings: Settings) -> int:
    value = settings.default_max_colors if requested is None else requested
    if not settings.min_max_colors <= value <= settings.max_max_colors:
        raise HTTPException(
            status_code=422,
            detail=f"maxColors must be between {settings.min_max_colors} and {settings.max_max_colors}",
        )
    return value


def _check_grid_size(size: GridSize, settings: Settings, minimum: int = 1) -> None:
    lo, hi = minimum, settings.max_grid_size
    if not (lo <= size.width <= hi and lo <= size.height <= hi):
        raise HTTPException(status_code=422, detail=f"Grid size must be between {lo} and {hi} on each side")


def _canonical(chart: Chart) -> Chart:
    """Re-derive a client-supplied chart so its catalog matches its cells."""
    return build_chart(chart.to_grid(), max_colors=chart.max_colors, grid_size=chart.grid_size)


def _decode_image(data: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise UploadRejectedError("imageBase64 is not valid base64") from e


@router.post("", response_model=Chart)
async def create_chart(req: GenerateRequest, settings: Settings = Depends(get_settings)) -> Chart:
    max_colors = _max_colors(req.max_colors, settings)
    if req.pixels:
        _check_grid_size(GridSize(width=max(len(req.pixels[0]), 1), height=len(req.pixels)), settings)
    return generate_chart(
        req.pixels,
        max_colors=max_colors,
        detailed_mode=req.detailed_mode,
        color_overrides=req.color_overrides,
    )


@router.post("/image", response_model=Chart)
async def create_chart_from_image(
    req: GenerateFromImageRequest,
    settings: Settings = Depends(get_settings),
) -> Chart:
    image_bytes = _decode_image(req.image_base64)
    validate_upload(req.content_type, len(image_bytes), settings.max_upload_bytes)

    grid_size = req.grid_size
    if grid_size is None:
        grid_size = suggest_grid_size(*image_dimensions(image_bytes))
    _check_grid_size(grid_size, settings, minimum=settings.min_grid_size)

    logger.info(
        "Image chart requested: %d bytes -> %dx%d, detailed=%s outline=%s",
        len(image_bytes), grid_size.width, grid_size.height, req.detailed_mode, req.outline,
    )
    return generate_chart_from_image(
        image_bytes,
        grid_size=grid_size,
        max_colors=_max_colors(req.max_colors, settings),
        detailed_mode=req.detailed_mode,
        outline=req.outline,
        color_overrides=req.color_overrides,
    )


@router.post("/recolor", response_model=Chart)
async def recolor(req: RecolorRequest) -> Chart:
    return recolor_cell(req.chart, req.row, req.col, req.color)


@router.post("/replace", response_model=Chart)
async def replace(req: ReplaceColorRequest) -> Chart:
    return replace_color(req.chart, req.old_color, req.new_color)


@router.post("/statistics", response_model=ChartStatistics)
async def statistics(req: ChartRequest) -> ChartStatistics:
    return chart_statistics(_canonical(req.chart))


@router.post("/export/{fmt}")
async def export(fmt: str, req: ChartRequest, settings: Settings = Depends(get_settings)) -> Response:
    if fmt.lower() not in EXPORT_FORMATS:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown export format {fmt!r}; expected one of {sorted(EXPORT_FORMATS)}",
        )
    chart = _canonical(req.chart)
    layout = RasterLayout(
        cell_size=settings.export_cell_size,
        padding=settings.export_padding,
        legend_height=settings.export_legend_height,
    )
    body, export_format = export_chart(chart, fmt, layout)
    return Response(
        content=body,
        media_type=export_format.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_format.filename(chart)}"'},
    )
