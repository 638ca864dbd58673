"""Built-in test images, drawn procedurally, each with its ground truth.

Every image is a white RGBA canvas with filled shapes. Straight edges are
kept at 0°, 45° or 90° where possible so the hull corners are exact.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Optional

import numpy as np
from numpy.typing import NDArray
from skimage.draw import disk, polygon, rectangle

from shapesight.models.evaluation import ExpectedShape
from shapesight.models.shapes import BoundingBox, ShapeType

Canvas = tuple[int, int]  # (height, width)
Drawing = tuple[Optional[ShapeType], NDArray[np.bool_]]

_WHITE = (255, 255, 255, 255)
_INKS = (
    (40, 40, 40, 255),
    (200, 30, 45, 255),
    (30, 90, 200, 255),
    (20, 140, 60, 255),
)


class UnknownSampleError(KeyError):
    """No built-in test image has this name."""


def _blank(canvas: Canvas) -> NDArray[np.bool_]:
    return np.zeros(canvas, dtype=bool)


def _disk(canvas: Canvas, cx: int, cy: int, radius: float) -> NDArray[np.bool_]:
    mask = _blank(canvas)
    rr, cc = disk((cy, cx), radius, shape=canvas)
    mask[rr, cc] = True
    return mask


def _box(canvas: Canvas, x0: int, y0: int, x1: int, y1: int) -> NDArray[np.bool_]:
    """Filled axis-aligned rectangle, corners inclusive."""
    mask = _blank(canvas)
    rr, cc = rectangle((y0, x0), end=(y1, x1), shape=canvas)
    mask[rr, cc] = True
    return mask


def _peak(canvas: Canvas, cx: int, top: int, bottom: int) -> NDArray[np.bool_]:
    """Isosceles triangle with 45° sides: apex at (cx, top), base on row ``bottom``."""
    yy, xx = np.mgrid[: canvas[0], : canvas[1]]
    return (yy >= top) & (yy <= bottom) & (np.abs(xx - cx) <= yy - top)


def _house(canvas: Canvas, cx: int, top: int, half: int, bottom: int) -> NDArray[np.bool_]:
    """Pentagon: square body under a 45° roof whose apex is at (cx, top)."""
    yy, xx = np.mgrid[: canvas[0], : canvas[1]]
    return (np.abs(xx - cx) <= half) & (yy <= bottom) & (yy >= top + np.abs(xx - cx))


def _star(canvas: Canvas, cx: float, cy: float, outer: float, inner: float, points: int = 5) -> NDArray[np.bool_]:
    xs, ys = [], []
    for i in range(points * 2):
        r = outer if i % 2 == 0 else inner
        angle = -math.pi / 2 + i * math.pi / points
        xs.append(cx + r * math.cos(angle))
        ys.append(cy + r * math.sin(angle))
    mask = _blank(canvas)
    rr, cc = polygon(ys, xs, shape=canvas)
    mask[rr, cc] = True
    return mask


def _circle(canvas: Canvas = (200, 200)) -> list[Drawing]:
    return [(ShapeType.CIRCLE, _disk(canvas, 100, 100, 50))]


def _square(canvas: Canvas = (200, 200)) -> list[Drawing]:
    return [(ShapeType.RECTANGLE, _box(canvas, 60, 60, 139, 139))]


def _wide_rectangle(canvas: Canvas = (200, 240)) -> list[Drawing]:
    return [(ShapeType.RECTANGLE, _box(canvas, 40, 70, 199, 129))]


def _triangle(canvas: Canvas = (200, 200)) -> list[Drawing]:
    return [(ShapeType.TRIANGLE, _peak(canvas, 100, 60, 150))]


def _pentagon(canvas: Canvas = (200, 200)) -> list[Drawing]:
    return [(ShapeType.PENTAGON, _house(canvas, 100, 30, 60, 160))]


def _star5(canvas: Canvas = (200, 200)) -> list[Drawing]:
    return [(ShapeType.STAR, _star(canvas, 100, 105, 80, 32))]


def _mixed(canvas: Canvas = (200, 360)) -> list[Drawing]:
    return [
        (ShapeType.RECTANGLE, _box(canvas, 20, 20, 79, 79)),
        (ShapeType.TRIANGLE, _peak(canvas, 180, 25, 85)),
        (ShapeType.CIRCLE, _disk(canvas, 290, 140, 35)),
    ]


def _speckled(canvas: Canvas = (200, 200)) -> list[Drawing]:
    specks = _box(canvas, 5, 5, 7, 7) | _box(canvas, 185, 10, 188, 13) | _box(canvas, 10, 180, 11, 181)
    # Specks are below the minimum area; they are ink without ground truth
    return [
        (ShapeType.RECTANGLE, _box(canvas, 50, 50, 149, 149)),
        (None, specks),
    ]


def _blank_page(canvas: Canvas = (120, 160)) -> list[Drawing]:
    return [(None, _blank(canvas))]


_SAMPLES: dict[str, Callable[[], list[Drawing]]] = {
    "circle.png": _circle,
    "square.png": _square,
    "wide_rectangle.png": _wide_rectangle,
    "triangle.png": _triangle,
    "pentagon.png": _pentagon,
    "star.png": _star5,
    "mixed_shapes.png": _mixed,
    "speckled_square.png": _speckled,
    "blank.png": _blank_page,
}


def get_all_sample_names() -> list[str]:
    return list(_SAMPLES)


def _drawings(name: str) -> list[Drawing]:
    try:
        builder = _SAMPLES[name]
    except KeyError:
        raise UnknownSampleError(name) from None
    return builder()


def _bbox_of(mask: NDArray[np.bool_]) -> BoundingBox:
    ys, xs = np.nonzero(mask)
    x0, y0 = int(xs.min()), int(ys.min())
    return BoundingBox(x=x0, y=y0, width=int(xs.max()) - x0 + 1, height=int(ys.max()) - y0 + 1)


def render_sample(name: str) -> NDArray[np.uint8]:
    """RGBA pixels of a built-in test image."""
    drawings = _drawings(name)
    canvas = drawings[0][1].shape
    pixels = np.empty((*canvas, 4), dtype=np.uint8)
    pixels[...] = _WHITE
    for i, (_, mask) in enumerate(drawings):
        pixels[mask] = _INKS[i % len(_INKS)]
    return pixels


def expected_shapes(name: str) -> list[ExpectedShape]:
    return [
        ExpectedShape(type=shape_type, bounding_box=_bbox_of(mask))
        for shape_type, mask in _drawings(name)
        if shape_type is not None
    ]


def sample_ground_truth() -> dict[str, list[ExpectedShape]]:
    """Ground truth for every built-in image, keyed by image name."""
    return {name: expected_shapes(name) for name in _SAMPLES}
