"""T1.01 — Connected Component Labeling. ★★

Row-major scan + explicit-stack flood fill over 8-connected foreground
pixels. Components smaller than the minimum area are dropped as noise.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from shapesight.engine.context import ComponentData, PipelineContext
from shapesight.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


def neighbor_offsets(width: int) -> tuple[int, ...]:
    """Flat-index offsets of the 8 neighbors: 4 axis-aligned, then 4 diagonal."""
    return (-1, 1, -width, width, -width - 1, -width + 1, width - 1, width + 1)


def label_components(
    mask: NDArray[np.bool_],
    visited: bytearray,
    min_area: int = 20,
) -> list[ComponentData]:
    """Flood-fill every unvisited foreground pixel, in row-major seed order.

    ``visited`` is marked in place, one byte per pixel. A pixel is marked when
    it is pushed, so no pixel enters the stack twice.
    """
    height, width = mask.shape
    total = width * height
    fg = mask.ravel().tolist()
    offsets = neighbor_offsets(width)
    components: list[ComponentData] = []

    for seed in np.flatnonzero(mask).tolist():
        if visited[seed]:
            continue
        visited[seed] = 1
        stack = [seed]

        min_y, min_x = divmod(seed, width)
        max_x, max_y = min_x, min_y
        sum_x = sum_y = 0
        members: list[tuple[int, int]] = []

        while stack:
            cur = stack.pop()
            cy, cx = divmod(cur, width)
            members.append((cx, cy))
            sum_x += cx
            sum_y += cy
            if cx < min_x:
                min_x = cx
            elif cx > max_x:
                max_x = cx
            if cy < min_y:
                min_y = cy
            elif cy > max_y:
                max_y = cy

            for off in offsets:
                ni = cur + off
                if ni < 0 or ni >= total or visited[ni]:
                    continue
                ny, nx = divmod(ni, width)
                # Offset wrapped around a row edge
                if abs(nx - cx) > 1 or abs(ny - cy) > 1:
                    continue
                if fg[ni]:
                    visited[ni] = 1
                    stack.append(ni)

        if len(members) < min_area:
            continue

        components.append(
            ComponentData(
                id=len(components),
                pixels=members,
                bbox=(min_x, min_y, max_x, max_y),
                sum_x=sum_x,
                sum_y=sum_y,
            )
        )

    return components


@transform(
    id="T1.01",
    layer=Layer.SEGMENTATION,
    dependencies=["T0.01"],
    description="Label 8-connected foreground components (iterative flood fill)",
)
def component_labeling(ctx: PipelineContext) -> None:
    if ctx.mask is None:
        raise ValueError("component labeling needs a binary mask (T0.01)")
    if len(ctx.visited) != ctx.mask.size:
        ctx.visited = bytearray(ctx.mask.size)
    ctx.components = label_components(ctx.mask, ctx.visited, ctx.config.min_component_area)
    logger.debug("Labeled %d components (min area %d)", ctx.num_components, ctx.config.min_component_area)
