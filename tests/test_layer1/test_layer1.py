"""Tests for Layer 1: component labeling and boundary extraction."""

import numpy as np
import pytest

from shapesight.engine.layer1.t1_01_component_labeling import label_components, neighbor_offsets
from shapesight.engine.layer1.t1_02_boundary_extraction import component_boundary, edge_map


def _label(mask, min_area=20):
    visited = bytearray(mask.size)
    return label_components(mask, visited, min_area), visited


def test_neighbor_offsets():
    assert neighbor_offsets(10) == (-1, 1, -10, 10, -11, -9, 9, 11)


def test_separate_squares_in_row_major_order():
    mask = np.zeros((30, 30), dtype=bool)
    mask[15:20, 2:7] = True  # lower left
    mask[3:8, 20:25] = True  # upper right, seeded first
    comps, _ = _label(mask)
    assert [c.id for c in comps] == [0, 1]
    assert comps[0].bbox == (20, 3, 24, 7)
    assert comps[1].bbox == (2, 15, 6, 19)


def test_diagonal_neighbors_connect():
    mask = np.eye(6, dtype=bool)
    comps, _ = _label(mask, min_area=1)
    assert len(comps) == 1
    assert comps[0].area == 6


def test_no_wraparound_between_rows():
    # Last column of row 0 and first column of row 1 are adjacent in flat
    # index space but not in the image.
    mask = np.zeros((4, 5), dtype=bool)
    mask[0, 4] = True
    mask[1, 0] = True
    comps, _ = _label(mask, min_area=1)
    assert len(comps) == 2


def test_no_diagonal_wraparound():
    mask = np.zeros((4, 5), dtype=bool)
    mask[1, 4] = True  # flat 9
    mask[3, 0] = True  # flat 15 = 9 + width + 1
    mask[1, 0] = True  # flat 5 = 9 - width + 1
    comps, _ = _label(mask, min_area=1)
    assert len(comps) == 3


def test_min_area_boundary():
    mask = np.zeros((20, 40), dtype=bool)
    mask[2, 0:19] = True  # 19 pixels
    mask[10, 0:20] = True  # 20 pixels
    comps, _ = _label(mask)
    assert len(comps) == 1
    assert comps[0].area == 20
    assert comps[0].id == 0


def test_discarded_components_are_still_visited():
    mask = np.zeros((10, 10), dtype=bool)
    mask[1:3, 1:3] = True
    comps, visited = _label(mask)
    assert comps == []
    flat = mask.ravel()
    assert all(visited[i] == (1 if flat[i] else 0) for i in range(mask.size))


def test_bbox_and_centroid():
    mask = np.zeros((20, 20), dtype=bool)
    mask[4:9, 2:12] = True
    (comp,), _ = _label(mask)
    assert comp.bbox == (2, 4, 11, 8)
    assert comp.width == 10
    assert comp.height == 5
    assert comp.area == 50
    assert comp.centroid == pytest.approx((6.5, 6.0))


def test_pixels_are_unique_members():
    mask = np.zeros((12, 12), dtype=bool)
    mask[2:10, 3:9] = True
    (comp,), _ = _label(mask)
    assert len(set(comp.pixels)) == comp.area == 48
    assert all(mask[y, x] for x, y in comp.pixels)


def test_square_outline():
    mask = np.zeros((9, 9), dtype=bool)
    mask[2:7, 2:7] = True
    (comp,), _ = _label(mask, min_area=1)
    boundary = component_boundary(comp, edge_map(mask))
    assert len(boundary) == 16
    assert all(x in (2, 6) or y in (2, 6) for x, y in boundary)


def test_boundary_keeps_discovery_order():
    mask = np.zeros((9, 9), dtype=bool)
    mask[2:7, 2:7] = True
    (comp,), _ = _label(mask, min_area=1)
    boundary = component_boundary(comp, edge_map(mask))
    on_edge = set(boundary)
    assert boundary == [p for p in comp.pixels if p in on_edge]


def test_full_image_has_no_outline():
    mask = np.ones((6, 6), dtype=bool)
    (comp,), _ = _label(mask, min_area=1)
    assert component_boundary(comp, edge_map(mask)) == []


def test_image_edge_does_not_count_as_background():
    mask = np.zeros((10, 10), dtype=bool)
    mask[0:4, 0:4] = True
    (comp,), _ = _label(mask, min_area=1)
    boundary = component_boundary(comp, edge_map(mask))
    # Only the row y=3 and column x=3 face background
    assert len(boundary) == 7
    assert set(boundary) == {(x, 3) for x in range(4)} | {(3, y) for y in range(4)}


def test_empty_edge_map():
    assert edge_map(np.zeros((0, 0), dtype=bool)).shape == (0, 0)
