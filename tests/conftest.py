"""Shared test fixtures — synthetic RGBA images drawn on a white canvas."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray
from skimage.draw import disk

WHITE = (255, 255, 255, 255)
INK = (30, 30, 30, 255)


def blank_image(width: int, height: int) -> NDArray[np.uint8]:
    img = np.empty((height, width, 4), dtype=np.uint8)
    img[...] = WHITE
    return img


def paint(img: NDArray[np.uint8], mask: NDArray[np.bool_], color=INK) -> NDArray[np.uint8]:
    img[mask] = color
    return img


def square_mask(width: int, height: int, x0: int, y0: int, side: int) -> NDArray[np.bool_]:
    mask = np.zeros((height, width), dtype=bool)
    mask[y0 : y0 + side, x0 : x0 + side] = True
    return mask


def disk_mask(width: int, height: int, cx: int, cy: int, radius: float) -> NDArray[np.bool_]:
    mask = np.zeros((height, width), dtype=bool)
    rr, cc = disk((cy, cx), radius, shape=(height, width))
    mask[rr, cc] = True
    return mask


def triangle_mask(width: int, height: int, cx: int, top: int, bottom: int) -> NDArray[np.bool_]:
    """Isosceles triangle with 45° sides, so every edge is an exact pixel line."""
    yy, xx = np.mgrid[:height, :width]
    return (yy >= top) & (yy <= bottom) & (np.abs(xx - cx) <= yy - top)


def square_image(side: int = 40, margin: int = 10) -> NDArray[np.uint8]:
    size = side + 2 * margin
    return paint(blank_image(size, size), square_mask(size, size, margin, margin, side))


def disk_image(radius: int = 20, margin: int = 10) -> NDArray[np.uint8]:
    size = 2 * (radius + margin)
    return paint(blank_image(size, size), disk_mask(size, size, size // 2, size // 2, radius))


def triangle_image(half_base: int = 30, margin: int = 10) -> NDArray[np.uint8]:
    width = 2 * (half_base + margin) + 1
    height = half_base + 2 * margin + 1
    return paint(
        blank_image(width, height),
        triangle_mask(width, height, width // 2, margin, margin + half_base),
    )


@pytest.fixture
def square_pixels() -> NDArray[np.uint8]:
    return square_image()


@pytest.fixture
def disk_pixels() -> NDArray[np.uint8]:
    return disk_image()


@pytest.fixture
def triangle_pixels() -> NDArray[np.uint8]:
    return triangle_image()


@pytest.fixture
def blank_pixels() -> NDArray[np.uint8]:
    return blank_image(64, 48)
