"""Pipeline orchestrator — runs transforms in dependency order and assembles results."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Union

import numpy as np
from numpy.typing import NDArray

from shapesight.engine.config import PipelineConfig
from shapesight.engine.context import ComponentData, PipelineContext
from shapesight.engine.registry import Layer, TransformRegistry, get_registry, register_transforms
from shapesight.models.shapes import BoundingBox, DetectedShape, DetectionResult, Point

logger = logging.getLogger(__name__)

PixelSource = Union[bytes, bytearray, memoryview, Sequence[int], NDArray[np.uint8]]


class DetectionError(RuntimeError):
    """One or more transforms failed while detecting shapes."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        detail = "; ".join(f"{tid}: {msg}" for tid, msg in sorted(self.errors.items()))
        super().__init__(f"Detection failed: {detail}")


class Pipeline:
    """Orchestrates the detection transforms."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: PipelineContext) -> PipelineContext:
        """Run the full pipeline on the given context."""
        start = time.perf_counter()

        skip_ids = self._adaptive_gate(ctx)

        all_specs = self.registry.all()
        requested = {s.id for s in all_specs} - skip_ids
        ordered = self.registry.resolve_order(requested) if requested else []

        logger.info(
            "Pipeline: %d transforms queued (%d skipped) for %dx%d image",
            len(ordered),
            len(skip_ids),
            ctx.width,
            ctx.height,
        )

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
                elapsed = (time.perf_counter() - t0) * 1000
                logger.debug("  %s completed in %.1fms", spec.id, elapsed)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d/%d transforms, %d components in %.0fms",
            len(ctx.completed_transforms),
            len(ordered),
            ctx.num_components,
            total,
        )
        return ctx

    def run_layer(self, ctx: PipelineContext, layer: Layer) -> PipelineContext:
        """Run only transforms in a specific layer."""
        specs = self.registry.get_layer(layer)
        for spec in specs:
            try:
                spec.fn(ctx)
                ctx.completed_transforms.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
        return ctx

    def _adaptive_gate(self, ctx: PipelineContext) -> set[str]:
        """Transforms to skip for this image.

        A zero-sized image has nothing to binarize or label, so every
        transform is skipped and the result is deterministically empty.
        """
        if ctx.is_empty:
            return {s.id for s in self.registry.all()}
        return set()


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for a pipeline over all registered detection transforms."""
    register_transforms()
    return Pipeline(config=config)


def to_rgba_array(pixels: PixelSource, width: int, height: int) -> NDArray[np.uint8]:
    """View a row-major RGBA buffer as an (height, width, 4) uint8 array."""
    if width < 0 or height < 0:
        raise ValueError(f"Image dimensions must be non-negative, got {width}x{height}")

    if isinstance(pixels, np.ndarray):
        arr = np.asarray(pixels, dtype=np.uint8)
    elif isinstance(pixels, (bytes, bytearray, memoryview)):
        arr = np.frombuffer(pixels, dtype=np.uint8)
    else:
        arr = np.asarray(pixels, dtype=np.uint8)

    expected = width * height * 4
    if arr.size != expected:
        raise ValueError(
            f"Pixel buffer has {arr.size} samples, expected {expected} for {width}x{height} RGBA"
        )
    return arr.reshape(height, width, 4)


def _to_detected_shape(comp: ComponentData) -> DetectedShape:
    min_x, min_y, _, _ = comp.bbox
    cx, cy = comp.centroid
    return DetectedShape(
        type=comp.features["shape_type"],
        confidence=comp.features["confidence"],
        bounding_box=BoundingBox(x=min_x, y=min_y, width=comp.width, height=comp.height),
        center=Point(x=cx, y=cy),
        area=comp.area,
    )


def detect_shapes(
    pixels: PixelSource,
    width: int,
    height: int,
    config: PipelineConfig | None = None,
    pipeline: Pipeline | None = None,
) -> DetectionResult:
    """Detect shapes in one RGBA image.

    Args:
        pixels: Row-major RGBA samples, 4 bytes per pixel, top row first.
            An (height, width, 4) uint8 array is accepted as well.
        width: Image width in pixels.
        height: Image height in pixels.
        config: Thresholds for a fresh pipeline; ignored when ``pipeline`` is given.
        pipeline: Pipeline to reuse across calls.

    Returns:
        Shapes in discovery order, with wall-clock processing time.

    Raises:
        ValueError: The buffer does not hold width*height RGBA samples.
        DetectionError: A transform failed, so the result would be incomplete.
    """
    start = time.perf_counter()
    pipeline = pipeline or create_pipeline(config)

    arr = to_rgba_array(pixels, width, height)
    ctx = PipelineContext(
        pixels=arr,
        config=pipeline.config,
        visited=bytearray(width * height),
    )
    pipeline.run(ctx)

    # Every transform feeds the final shapes, so any failure voids the result
    if ctx.errors:
        raise DetectionError(ctx.errors)

    shapes = [_to_detected_shape(c) for c in ctx.components]
    elapsed = (time.perf_counter() - start) * 1000

    return DetectionResult(
        shapes=shapes,
        processing_time_ms=elapsed,
        image_width=width,
        image_height=height,
    )
