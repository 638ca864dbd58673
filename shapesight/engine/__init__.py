"""ShapeSight detection engine."""

from shapesight.engine.registry import transform, Layer, get_registry, register_transforms
from shapesight.engine.context import ComponentData, PipelineContext, ShapeMetrics
from shapesight.engine.pipeline import DetectionError, Pipeline, create_pipeline, detect_shapes

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "register_transforms",
    "ComponentData",
    "PipelineContext",
    "ShapeMetrics",
    "DetectionError",
    "Pipeline",
    "create_pipeline",
    "detect_shapes",
]
