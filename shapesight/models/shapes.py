"""Detection output model — what the pipeline hands to renderers and evaluators."""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class ShapeType(str, enum.Enum):
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    RECTANGLE = "rectangle"
    PENTAGON = "pentagon"
    STAR = "star"


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class BoundingBox(BaseModel):
    """Inclusive pixel extent: width = max_x - min_x + 1."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int
    height: int

    @property
    def max_x(self) -> int:
        return self.x + self.width - 1

    @property
    def max_y(self) -> int:
        return self.y + self.height - 1

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.max_x and self.y <= y <= self.max_y


class DetectedShape(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ShapeType
    confidence: float = Field(..., gt=0.0, le=0.99)
    bounding_box: BoundingBox
    center: Point
    area: int


class DetectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Discovery order: row-major position of each shape's first pixel
    shapes: list[DetectedShape] = Field(default_factory=list)
    processing_time_ms: float = 0.0
    image_width: int = 0
    image_height: int = 0

    @property
    def shape_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for shape in self.shapes:
            counts[shape.type.value] = counts.get(shape.type.value, 0) + 1
        return counts
