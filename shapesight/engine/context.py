"""PipelineContext — the per-call arena flowing through all detection transforms.

Per-component results → ComponentData (boundary, hull, features)
Per-image state → PipelineContext (pixels, mask, visited, components)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from shapesight.engine.config import PipelineConfig

Pixel = tuple[int, int]


@dataclass(frozen=True)
class ShapeMetrics:
    """Scalar geometry of one component, the input to classification."""

    area: int
    perimeter: float
    circularity: float
    hull_area: float
    solidity: float
    hull_vertex_count: int
    aspect_ratio: float


@dataclass
class ComponentData:
    """One 8-connected foreground region discovered by a single flood fill."""

    id: int
    # Member pixels as (x, y), in flood-fill discovery order
    pixels: list[Pixel] = field(default_factory=list)
    # Bounding box: (min_x, min_y, max_x, max_y), inclusive
    bbox: tuple[int, int, int, int] = (0, 0, 0, 0)
    # Coordinate sums accumulated during the fill
    sum_x: int = 0
    sum_y: int = 0
    # Member pixels with at least one in-bounds background neighbor
    boundary: list[Pixel] = field(default_factory=list)
    # Convex hull vertices, no repeated closing vertex
    hull: list[Pixel] = field(default_factory=list)
    # Computed metrics and classification go here
    features: dict[str, Any] = field(default_factory=dict)

    @property
    def area(self) -> int:
        return len(self.pixels)

    @property
    def centroid(self) -> tuple[float, float]:
        if not self.pixels:
            return (0.0, 0.0)
        return (self.sum_x / self.area, self.sum_y / self.area)

    @property
    def width(self) -> int:
        return self.bbox[2] - self.bbox[0] + 1

    @property
    def height(self) -> int:
        return self.bbox[3] - self.bbox[1] + 1


@dataclass
class PipelineContext:
    """Shared state for one detection call. Never reused across images."""

    # RGBA pixels, shape (height, width, 4)
    pixels: NDArray[np.uint8] = field(
        default_factory=lambda: np.zeros((0, 0, 4), dtype=np.uint8)
    )
    # Thresholds for binarization and segmentation
    config: PipelineConfig = field(default_factory=PipelineConfig)
    # Foreground mask, shape (height, width); set by binarization
    mask: NDArray[np.bool_] | None = None
    # Flat visited flags, one byte per pixel; written once per pixel by labeling
    visited: bytearray = field(default_factory=bytearray)
    # Components above the minimum area, in discovery order
    components: list[ComponentData] = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def num_components(self) -> int:
        return len(self.components)
