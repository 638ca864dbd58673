"""Tests for Layer 0: luminance binarization."""

import numpy as np
import pytest

from shapesight.engine.layer0.t0_01_binarization import binarize, luminance


def _px(*colors):
    return np.array([list(colors)], dtype=np.uint8)


def test_luminance_weights():
    lum = luminance(_px((255, 0, 0, 255), (0, 255, 0, 255), (0, 0, 255, 255)), (0.2126, 0.7152, 0.0722))
    assert lum[0].tolist() == pytest.approx([0.2126 * 255, 0.7152 * 255, 0.0722 * 255])


def test_near_white_threshold():
    mask = binarize(_px((249, 249, 249, 255), (251, 251, 251, 255), (255, 255, 255, 255)))
    assert mask[0].tolist() == [True, False, False]


def test_colored_pixels_are_foreground():
    mask = binarize(_px((0, 255, 0, 255), (255, 255, 0, 255), (255, 0, 0, 255), (0, 0, 255, 255)))
    assert mask.all()


def test_alpha_is_ignored():
    # Transparent black still counts as dark ink
    mask = binarize(_px((0, 0, 0, 0), (255, 255, 255, 0)))
    assert mask[0].tolist() == [True, False]


def test_custom_threshold():
    pixels = _px((128, 128, 128, 255))
    assert binarize(pixels)[0, 0]
    assert not binarize(pixels, threshold=100.0)[0, 0]


def test_empty_input():
    mask = binarize(np.zeros((0, 0, 4), dtype=np.uint8))
    assert mask.shape == (0, 0)
    assert mask.dtype == bool
