"""T0.01 — Luminance Binarization. ★

lum = 0.2126·R + 0.7152·G + 0.0722·B (BT.709). Foreground iff lum < 250.
Alpha is ignored.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from shapesight.engine.context import PipelineContext
from shapesight.engine.registry import Layer, transform


def luminance(pixels: NDArray[np.uint8], weights: tuple[float, float, float]) -> NDArray[np.float64]:
    """Per-pixel luminance of an (h, w, 4) RGBA array."""
    rgb = pixels[..., :3].astype(np.float64)
    wr, wg, wb = weights
    return wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]


def binarize(
    pixels: NDArray[np.uint8],
    threshold: float = 250.0,
    weights: tuple[float, float, float] = (0.2126, 0.7152, 0.0722),
) -> NDArray[np.bool_]:
    """Foreground mask: True where the pixel is darker than ``threshold``."""
    if pixels.size == 0:
        return np.zeros(pixels.shape[:2], dtype=bool)
    return luminance(pixels, weights) < threshold


@transform(
    id="T0.01",
    layer=Layer.BINARIZATION,
    description="Threshold BT.709 luminance into a foreground mask",
)
def binarization(ctx: PipelineContext) -> None:
    cfg = ctx.config
    ctx.mask = binarize(ctx.pixels, cfg.luminance_threshold, cfg.luminance_weights)
