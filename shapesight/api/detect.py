"""POST /api/detect — shape detection on an uploaded image."""

from __future__ import annotations

import asyncio
import logging

import numpy as np
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from numpy.typing import NDArray

from shapesight.config import Settings
from shapesight.dependencies import get_settings
from shapesight.engine.pipeline import DetectionError, create_pipeline, detect_shapes
from shapesight.models.requests import DetectRequest
from shapesight.models.shapes import DetectionResult
from shapesight.utils.image_loader import ImageDecodeError, decode_base64_image
from shapesight.utils.rendering import render_overlay

logger = logging.getLogger(__name__)

router = APIRouter()


def _decode_request(req: DetectRequest, settings: Settings) -> NDArray[np.uint8]:
    # Base64 inflates by 4/3
    approx_bytes = len(req.image) * 3 // 4
    if approx_bytes > settings.max_image_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Image exceeds {settings.max_image_bytes} bytes",
        )
    try:
        return decode_base64_image(req.image, req.name)
    except ImageDecodeError as e:
        logger.info("Rejected upload %s: %s", req.name or "<unnamed>", e)
        raise HTTPException(status_code=400, detail=str(e)) from e


def run_detection(pixels: NDArray[np.uint8]) -> DetectionResult:
    height, width = pixels.shape[:2]
    return detect_shapes(pixels, width, height, pipeline=create_pipeline())


def _detect_and_render(pixels: NDArray[np.uint8]) -> bytes:
    return render_overlay(pixels, run_detection(pixels))


async def run_in_worker(fn, *args):
    """Run blocking detection work off the event loop."""
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, fn, *args)
    except DetectionError as e:
        logger.error("%s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e


@router.post("/detect", response_model=DetectionResult)
async def detect(req: DetectRequest, settings: Settings = Depends(get_settings)) -> DetectionResult:
    pixels = _decode_request(req, settings)
    return await run_in_worker(run_detection, pixels)


@router.post("/detect/overlay")
async def detect_overlay(req: DetectRequest, settings: Settings = Depends(get_settings)) -> Response:
    pixels = _decode_request(req, settings)
    png = await run_in_worker(_detect_and_render, pixels)
    return Response(content=png, media_type="image/png")
