"""Ground truth and scoring models for the evaluation harness."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shapesight.models.shapes import BoundingBox, ShapeType


class ExpectedShape(BaseModel):
    type: ShapeType
    bounding_box: BoundingBox | None = None


class ImageEvaluation(BaseModel):
    name: str
    expected: dict[str, int] = Field(default_factory=dict)
    detected: dict[str, int] = Field(default_factory=dict)
    matched: int = 0
    precision: float = 0.0
    recall: float = 0.0
    f1: float = 0.0
    mean_confidence: float = 0.0
    # Mean IoU of type-matched boxes; None when ground truth has no boxes
    mean_iou: float | None = None
    processing_time_ms: float = 0.0


class EvaluationReport(BaseModel):
    images: list[ImageEvaluation] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    precision: float = 0.0
    recall: float = 0.0
    f1: float = 0.0
    total_time_ms: float = 0.0
