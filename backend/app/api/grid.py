"""POST /api/grid-size/suggest — grid dimensions proportional to a source image."""

from __future__ import annotations

from fastapi import APIRouter

from app.imaging.resample import suggest_grid_size
from app.models.chart import GridSize
from app.models.requests import SuggestGridRequest

router = APIRouter()


@router.post("/grid-size/suggest", response_model=GridSize)
async def suggest(req: SuggestGridRequest) -> GridSize:
    return suggest_grid_size(req.width, req.height)
