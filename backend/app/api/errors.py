"""Map chart engine exceptions onto HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.engine.errors import (
    GENERATION_FAILED_MESSAGE,
    ChartGenerationError,
    EditOutOfRangeError,
    ImageProcessingError,
    InvalidGridError,
    UploadRejectedError,
)

logger = logging.getLogger(__name__)


def _detail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidGridError)
    async def invalid_grid(request: Request, exc: InvalidGridError) -> JSONResponse:
        return _detail(422, str(exc))

    @app.exception_handler(EditOutOfRangeError)
    async def out_of_range(request: Request, exc: EditOutOfRangeError) -> JSONResponse:
        return _detail(422, str(exc))

    @app.exception_handler(UploadRejectedError)
    async def upload_rejected(request: Request, exc: UploadRejectedError) -> JSONResponse:
        return _detail(400, str(exc))

    @app.exception_handler(ImageProcessingError)
    async def image_failed(request: Request, exc: ImageProcessingError) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
        return _detail(400, str(exc))

    @app.exception_handler(ChartGenerationError)
    async def generation_failed(request: Request, exc: ChartGenerationError) -> JSONResponse:
        logger.error("%s %s: %s", request.method, request.url.path, exc.__cause__ or exc)
        return _detail(500, GENERATION_FAILED_MESSAGE)
