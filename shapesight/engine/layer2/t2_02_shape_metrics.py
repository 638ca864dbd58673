"""T2.02 — Shape Metrics. ★★

area = pixel count, perimeter = outline pixel count,
circularity = 4π·area/perimeter² (disk → 1),
solidity = area / hull_area (star ≪ 1, convex ≈ 1).
"""

from __future__ import annotations

import math

from shapesight.engine.context import ComponentData, PipelineContext, ShapeMetrics
from shapesight.engine.registry import Layer, transform
from shapesight.utils.geometry import polygon_area


def compute_metrics(comp: ComponentData) -> ShapeMetrics:
    area = comp.area
    # No outline means no visible background anywhere; approximate a square's
    perimeter = len(comp.boundary) or math.sqrt(area) * 4

    hull = comp.hull
    # Degenerate hull fills its own area, so solidity stays defined
    hull_area = polygon_area(hull) if len(hull) >= 3 else area

    circularity = (4 * math.pi * area) / (perimeter * perimeter) if perimeter > 0 else 0.0
    solidity = area / hull_area if hull_area > 0 else 0.0

    return ShapeMetrics(
        area=area,
        perimeter=perimeter,
        circularity=circularity,
        hull_area=hull_area,
        solidity=solidity,
        hull_vertex_count=len(hull),
        aspect_ratio=comp.width / comp.height,
    )


@transform(
    id="T2.02",
    layer=Layer.GEOMETRY,
    dependencies=["T2.01"],
    description="Compute area, perimeter, circularity, hull area and solidity",
)
def shape_metrics(ctx: PipelineContext) -> None:
    for comp in ctx.components:
        comp.features["metrics"] = compute_metrics(comp)
