"""T1.02 — Boundary Extraction. ★

A member pixel is on the outline iff one of its 8 in-bounds neighbors is
background. Neighbors past the image edge are skipped, so a shape touching
the border has no outline along that border.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import binary_erosion

from shapesight.engine.context import ComponentData, PipelineContext
from shapesight.engine.registry import Layer, transform

_EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)


def edge_map(mask: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Foreground pixels touching in-bounds background (8-neighborhood).

    Erosion with border_value=1 treats outside-the-image as foreground, so
    image edges never make a pixel an edge pixel.
    """
    if mask.size == 0:
        return np.zeros(mask.shape, dtype=bool)
    interior = binary_erosion(mask, structure=_EIGHT_CONNECTED, border_value=1)
    return mask & ~interior


def component_boundary(comp: ComponentData, edges: NDArray[np.bool_]) -> list[tuple[int, int]]:
    """Subset of the component's pixels flagged in ``edges``, in discovery order."""
    if not comp.pixels:
        return []
    pts = np.asarray(comp.pixels, dtype=np.intp)
    flags = edges[pts[:, 1], pts[:, 0]].tolist()
    return [p for p, on_edge in zip(comp.pixels, flags) if on_edge]


@transform(
    id="T1.02",
    layer=Layer.SEGMENTATION,
    dependencies=["T1.01"],
    description="Select outline pixels of each component",
)
def boundary_extraction(ctx: PipelineContext) -> None:
    if not ctx.components:
        return
    edges = edge_map(ctx.mask)
    for comp in ctx.components:
        comp.boundary = component_boundary(comp, edges)
