"""Evaluation harness — score detection results against ground truth.

Scoring is by shape-type multiset: for each type, min(detected, expected)
shapes count as matched. When ground truth carries boxes, detections are
paired greedily per type by bounding-box IoU.
"""

from __future__ import annotations

import json
import logging
import time
from collections import Counter
from collections.abc import Callable, Iterable
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import box

from shapesight.engine.pipeline import Pipeline, create_pipeline, detect_shapes
from shapesight.models.evaluation import EvaluationReport, ExpectedShape, ImageEvaluation
from shapesight.models.shapes import BoundingBox, DetectedShape, DetectionResult

logger = logging.getLogger(__name__)

GroundTruth = dict[str, list[ExpectedShape]]
ImageLoader = Callable[[str], NDArray[np.uint8]]


def load_ground_truth(path: str | Path) -> GroundTruth:
    """Read ground truth JSON keyed by image name.

    Each entry is a list of shapes, either ``"circle"`` or
    ``{"type": "circle", "bounding_box": {"x": .., "y": .., "width": .., "height": ..}}``.
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    truth: GroundTruth = {}
    for name, shapes in raw.items():
        truth[name] = [
            ExpectedShape(type=s) if isinstance(s, str) else ExpectedShape.model_validate(s)
            for s in shapes
        ]
    return truth


def box_iou(a: BoundingBox, b: BoundingBox) -> float:
    pa = box(a.x, a.y, a.x + a.width, a.y + a.height)
    pb = box(b.x, b.y, b.x + b.width, b.y + b.height)
    union = pa.union(pb).area
    if union <= 0:
        return 0.0
    return float(pa.intersection(pb).area / union)


def _mean_iou(detected: list[DetectedShape], expected: list[ExpectedShape]) -> float | None:
    boxed = [e for e in expected if e.bounding_box is not None]
    if not boxed:
        return None
    unused = list(detected)
    scores: list[float] = []
    for exp in boxed:
        candidates = [d for d in unused if d.type == exp.type]
        if not candidates:
            scores.append(0.0)
            continue
        best = max(candidates, key=lambda d: box_iou(d.bounding_box, exp.bounding_box))
        scores.append(box_iou(best.bounding_box, exp.bounding_box))
        unused.remove(best)
    return float(np.mean(scores))


def _f1(precision: float, recall: float) -> float:
    if precision + recall <= 0:
        return 0.0
    return 2 * precision * recall / (precision + recall)


def evaluate_image(name: str, result: DetectionResult, expected: list[ExpectedShape]) -> ImageEvaluation:
    exp_counts = Counter(e.type.value for e in expected)
    det_counts = Counter(result.shape_counts)
    matched = sum(min(det_counts[t], n) for t, n in exp_counts.items())

    n_detected = len(result.shapes)
    n_expected = len(expected)
    # An empty image with nothing detected is a perfect score
    precision = matched / n_detected if n_detected else float(n_expected == 0)
    recall = matched / n_expected if n_expected else float(n_detected == 0)

    confidences = [s.confidence for s in result.shapes]
    return ImageEvaluation(
        name=name,
        expected=dict(exp_counts),
        detected=dict(det_counts),
        matched=matched,
        precision=precision,
        recall=recall,
        f1=_f1(precision, recall),
        mean_confidence=float(np.mean(confidences)) if confidences else 0.0,
        mean_iou=_mean_iou(list(result.shapes), expected),
        processing_time_ms=result.processing_time_ms,
    )


def run_evaluation(
    names: Iterable[str],
    loader: ImageLoader,
    ground_truth: GroundTruth,
    pipeline: Pipeline | None = None,
) -> EvaluationReport:
    """Detect shapes in each named image and score it against ground truth."""
    start = time.perf_counter()
    pipeline = pipeline or create_pipeline()

    images: list[ImageEvaluation] = []
    skipped: list[str] = []
    for name in names:
        if name not in ground_truth:
            logger.warning("No ground truth for %s, skipping", name)
            skipped.append(name)
            continue
        pixels = loader(name)
        height, width = pixels.shape[:2]
        result = detect_shapes(pixels, width, height, pipeline=pipeline)
        evaluation = evaluate_image(name, result, ground_truth[name])
        logger.info(
            "%s: %d/%d matched (precision %.2f, recall %.2f)",
            name,
            evaluation.matched,
            sum(evaluation.expected.values()),
            evaluation.precision,
            evaluation.recall,
        )
        images.append(evaluation)

    matched = sum(e.matched for e in images)
    detected = sum(sum(e.detected.values()) for e in images)
    expected = sum(sum(e.expected.values()) for e in images)
    precision = matched / detected if detected else float(expected == 0)
    recall = matched / expected if expected else float(detected == 0)

    return EvaluationReport(
        images=images,
        skipped=skipped,
        precision=precision,
        recall=recall,
        f1=_f1(precision, recall),
        total_time_ms=(time.perf_counter() - start) * 1000,
    )
