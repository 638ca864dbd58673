"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shapesight import __version__
from shapesight.config import settings
from shapesight.engine.registry import register_transforms

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.shapesight_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="ShapeSight",
        description="Geometric shape detection for raster images",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all transform modules so @transform decorators fire
    register_transforms()

    from shapesight.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
