"""Tests for text reports and overlay rendering."""

from shapesight.engine.pipeline import detect_shapes
from shapesight.models.shapes import BoundingBox, DetectedShape, DetectionResult, Point, ShapeType
from shapesight.utils.image_loader import decode_image
from shapesight.utils.rendering import format_result_text, render_overlay
from tests.conftest import square_image


def _result(shapes):
    return DetectionResult(shapes=shapes, processing_time_ms=1.234, image_width=60, image_height=60)


def test_text_report_for_empty_result():
    text = format_result_text(_result([]))
    assert text.splitlines() == [
        "Processing Time: 1.23ms",
        "Shapes Found: 0",
        "No shapes detected.",
    ]


def test_text_report_lists_shapes():
    shape = DetectedShape(
        type=ShapeType.CIRCLE,
        confidence=0.85,
        bounding_box=BoundingBox(x=1, y=2, width=10, height=10),
        center=Point(x=6.0, y=7.5),
        area=78,
    )
    lines = format_result_text(_result([shape])).splitlines()
    assert lines[1] == "Shapes Found: 1"
    assert lines[2:] == [
        "Detected Shapes:",
        "- Circle",
        "  Confidence: 85.0%",
        "  Center: (6.0, 7.5)",
        "  Area: 78.0px²",
    ]


def test_overlay_is_png_of_same_size():
    pixels = square_image()
    result = detect_shapes(pixels, 60, 60)
    png = render_overlay(pixels, result)
    assert png.startswith(b"\x89PNG")
    assert decode_image(png).ndim == 3


def test_overlay_without_shapes():
    pixels = square_image()
    png = render_overlay(pixels, _result([]))
    assert png.startswith(b"\x89PNG")
