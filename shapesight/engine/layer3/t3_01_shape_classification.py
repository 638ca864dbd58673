"""T3.01 — Shape Classification. ★★★

Ordered decision table over (hull vertices, circularity, solidity, aspect);
first matching rule wins:
  circ > 0.7 AND solidity > 0.8 AND hull > 8   → circle
  hull == 3                                    → triangle
  hull == 4                                    → rectangle
  hull == 5                                    → pentagon
  hull >= 8 AND solidity < 0.8                 → star
  hull >= 6 AND solidity > 0.9                 → circle
  hull >= 6                                    → star if solidity < 0.75 else pentagon
  ELSE                                         → rectangle
Confidence is reset to 0.5 when not a positive finite number, then capped at 0.99.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from shapesight.engine.context import PipelineContext, ShapeMetrics
from shapesight.engine.registry import Layer, transform
from shapesight.models.shapes import ShapeType

_CIRCLE_CIRCULARITY = 0.7
_CIRCLE_SOLIDITY = 0.8
_CIRCLE_MIN_HULL = 8  # strictly greater

_STAR_MIN_HULL = 8
_STAR_SOLIDITY = 0.8
_POLYGON_MIN_HULL = 6
_ROUND_POLYGON_SOLIDITY = 0.9
_STAR_OR_PENTAGON_SPLIT = 0.75

_FALLBACK_CONFIDENCE = 0.5
_MAX_CONFIDENCE = 0.99


def _cap(limit: float, value: float) -> float:
    """min(limit, value) where a NaN value propagates instead of losing to limit."""
    if math.isnan(value) or value < limit:
        return value
    return limit


def _aspect_score(aspect_ratio: float) -> float:
    return 1 - abs(1 - aspect_ratio)


@dataclass(frozen=True)
class Rule:
    name: str
    applies: Callable[[ShapeMetrics], bool]
    shape: Callable[[ShapeMetrics], ShapeType]
    confidence: Callable[[ShapeMetrics], float]


DECISION_TABLE: tuple[Rule, ...] = (
    Rule(
        "round",
        lambda m: (
            m.circularity > _CIRCLE_CIRCULARITY
            and m.solidity > _CIRCLE_SOLIDITY
            and m.hull_vertex_count > _CIRCLE_MIN_HULL
        ),
        lambda m: ShapeType.CIRCLE,
        lambda m: 0.7 + _cap(0.29, m.circularity - 0.7),
    ),
    Rule(
        "three-corner",
        lambda m: m.hull_vertex_count == 3,
        lambda m: ShapeType.TRIANGLE,
        lambda m: 0.7 + _cap(0.29, m.solidity),
    ),
    Rule(
        "four-corner",
        lambda m: m.hull_vertex_count == 4,
        lambda m: ShapeType.RECTANGLE,
        lambda m: 0.6 + _cap(0.39, _aspect_score(m.aspect_ratio) * 0.6 + m.solidity * 0.4),
    ),
    Rule(
        "five-corner",
        lambda m: m.hull_vertex_count == 5,
        lambda m: ShapeType.PENTAGON,
        lambda m: 0.65 + _cap(0.34, m.solidity),
    ),
    Rule(
        "concave-many-corner",
        lambda m: m.hull_vertex_count >= _STAR_MIN_HULL and m.solidity < _STAR_SOLIDITY,
        lambda m: ShapeType.STAR,
        lambda m: 0.6 + _cap(0.39, _STAR_SOLIDITY - m.solidity),
    ),
    Rule(
        "solid-many-corner",
        lambda m: m.hull_vertex_count >= _POLYGON_MIN_HULL and m.solidity > _ROUND_POLYGON_SOLIDITY,
        lambda m: ShapeType.CIRCLE,
        lambda m: 0.6 + _cap(0.39, m.circularity),
    ),
    Rule(
        "many-corner",
        lambda m: m.hull_vertex_count >= _POLYGON_MIN_HULL,
        lambda m: ShapeType.STAR if m.solidity < _STAR_OR_PENTAGON_SPLIT else ShapeType.PENTAGON,
        lambda m: 0.55 + _cap(0.44, m.solidity),
    ),
    Rule(
        "degenerate",
        lambda m: True,
        lambda m: ShapeType.RECTANGLE,
        lambda m: 0.5 + _cap(0.49, m.solidity),
    ),
)


def normalize_confidence(confidence: float) -> float:
    if not math.isfinite(confidence) or confidence <= 0:
        confidence = _FALLBACK_CONFIDENCE
    return min(confidence, _MAX_CONFIDENCE)


def match_rule(metrics: ShapeMetrics) -> Rule:
    for rule in DECISION_TABLE:
        if rule.applies(metrics):
            return rule
    # Unreachable: the last rule always applies
    return DECISION_TABLE[-1]


def classify(metrics: ShapeMetrics) -> tuple[ShapeType, float]:
    """Map a metric bundle to (shape type, confidence in (0, 0.99])."""
    rule = match_rule(metrics)
    return rule.shape(metrics), normalize_confidence(rule.confidence(metrics))


@transform(
    id="T3.01",
    layer=Layer.CLASSIFICATION,
    dependencies=["T2.02"],
    description="Classify each component with the ordered decision table",
)
def shape_classification(ctx: PipelineContext) -> None:
    for comp in ctx.components:
        shape_type, confidence = classify(comp.features["metrics"])
        comp.features["shape_type"] = shape_type
        comp.features["confidence"] = confidence
