"""T2.01 — Convex Hull. ★★

Monotone chain over the component's outline pixels. A component with no
outline (nothing touches in-bounds background) falls back to all its pixels.
"""

from __future__ import annotations

from shapesight.engine.context import PipelineContext
from shapesight.engine.registry import Layer, transform
from shapesight.utils.geometry import monotone_chain_hull


@transform(
    id="T2.01",
    layer=Layer.GEOMETRY,
    dependencies=["T1.02"],
    description="Build the convex hull of each component outline",
)
def convex_hull(ctx: PipelineContext) -> None:
    for comp in ctx.components:
        comp.hull = monotone_chain_hull(comp.boundary or comp.pixels)
