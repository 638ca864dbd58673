"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

from collections.abc import Sequence

Point = tuple[float, float]


def cross(o: Sequence[float], a: Sequence[float], b: Sequence[float]) -> float:
    """Z component of (a - o) × (b - o). Positive = left turn (CCW, y up)."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def monotone_chain_hull(points: Sequence[Point]) -> list[Point]:
    """Andrew's monotone chain convex hull.

    Collinear points are dropped (pop on cross <= 0). The result has no
    repeated closing vertex. Inputs of 0 or 1 points are returned as-is,
    without dedup.
    """
    if len(points) <= 1:
        return list(points)

    pts = sorted(points)

    lower: list[Point] = []
    for p in pts:
        while len(lower) >= 2 and cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: list[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    # Each chain ends where the other starts
    return lower[:-1] + upper[:-1]


def signed_area(polygon: Sequence[Point]) -> float:
    """Shoelace formula over an open vertex list (last vertex wraps to first)."""
    n = len(polygon)
    total = 0.0
    for i in range(n):
        x0, y0 = polygon[i]
        x1, y1 = polygon[(i + 1) % n]
        total += x0 * y1 - x1 * y0
    return total / 2


def polygon_area(polygon: Sequence[Point]) -> float:
    """Unsigned shoelace area; winding direction does not matter."""
    return abs(signed_area(polygon))


def winding_direction(polygon: Sequence[Point]) -> int:
    """Return 1 for CCW, -1 for CW, 0 if degenerate."""
    sa = signed_area(polygon)
    if sa > 0:
        return 1
    elif sa < 0:
        return -1
    return 0
