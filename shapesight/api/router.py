"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from shapesight.api import detect, evaluate, gallery, health

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(detect.router)
api_router.include_router(gallery.router)
api_router.include_router(evaluate.router)
