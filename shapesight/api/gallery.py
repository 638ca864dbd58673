"""GET /api/gallery — built-in test images."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from shapesight.api.detect import run_detection, run_in_worker
from shapesight.gallery import UnknownSampleError, get_all_sample_names, render_sample
from shapesight.models.responses import GalleryResponse
from shapesight.models.shapes import DetectionResult
from shapesight.utils.image_loader import encode_png

router = APIRouter(prefix="/gallery")


def _sample_or_404(name: str):
    try:
        return render_sample(name)
    except UnknownSampleError:
        raise HTTPException(status_code=404, detail=f"Unknown test image: {name}") from None


@router.get("", response_model=GalleryResponse)
async def list_images() -> GalleryResponse:
    return GalleryResponse(images=get_all_sample_names())


@router.get("/{name}")
async def get_image(name: str) -> Response:
    return Response(content=encode_png(_sample_or_404(name)), media_type="image/png")


@router.get("/{name}/detect", response_model=DetectionResult)
async def detect_image(name: str) -> DetectionResult:
    return await run_in_worker(run_detection, _sample_or_404(name))
