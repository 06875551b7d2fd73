"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.crochetchart_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="crochetchart",
        description="Image to crochet chart engine — palette reduction, run-length rows, stitch instructions",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all stage modules to trigger registration
    _register_stages()

    from app.api.errors import register_error_handlers
    from app.api.router import api_router

    register_error_handlers(app)
    app.include_router(api_router)

    return app


def _register_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    from app.engine.pipeline import load_stages

    count = load_stages()
    logging.getLogger(__name__).debug("%d pipeline stages registered", count)


app = create_app()
