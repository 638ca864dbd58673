"""Result rendering — text report and annotated overlay image."""

from __future__ import annotations

import io

import matplotlib

matplotlib.use("Agg")
import matplotlib.patches as mpatches
import matplotlib.patheffects as pe
import matplotlib.pyplot as plt
import numpy as np
from numpy.typing import NDArray

from shapesight.models.shapes import DetectionResult, ShapeType

# One color per shape type
_PALETTE = {
    ShapeType.CIRCLE: "#e6194b",
    ShapeType.TRIANGLE: "#3cb44b",
    ShapeType.RECTANGLE: "#4363d8",
    ShapeType.PENTAGON: "#f58231",
    ShapeType.STAR: "#911eb4",
}

_DPI = 100


def format_result_text(result: DetectionResult) -> str:
    """Human-readable report: timing, count, then one block per shape."""
    lines = [
        f"Processing Time: {result.processing_time_ms:.2f}ms",
        f"Shapes Found: {len(result.shapes)}",
    ]
    if not result.shapes:
        lines.append("No shapes detected.")
        return "\n".join(lines)

    lines.append("Detected Shapes:")
    for shape in result.shapes:
        lines.append(f"- {shape.type.value.capitalize()}")
        lines.append(f"  Confidence: {shape.confidence * 100:.1f}%")
        lines.append(f"  Center: ({shape.center.x:.1f}, {shape.center.y:.1f})")
        lines.append(f"  Area: {shape.area:.1f}px²")
    return "\n".join(lines)


def render_overlay(pixels: NDArray[np.uint8], result: DetectionResult) -> bytes:
    """Draw bounding boxes, centers and labels over the image; return PNG bytes."""
    height, width = pixels.shape[:2]
    fig = plt.figure(figsize=(max(width, 1) / _DPI, max(height, 1) / _DPI), dpi=_DPI)
    try:
        ax = fig.add_axes([0, 0, 1, 1])
        ax.imshow(pixels, extent=[-0.5, width - 0.5, height - 0.5, -0.5], interpolation="nearest")
        ax.set_xlim(-0.5, width - 0.5)
        ax.set_ylim(height - 0.5, -0.5)
        ax.axis("off")

        stroke = [pe.withStroke(linewidth=2, foreground="white")]
        for shape in result.shapes:
            color = _PALETTE[shape.type]
            box = shape.bounding_box
            ax.add_patch(
                mpatches.Rectangle(
                    (box.x - 0.5, box.y - 0.5),
                    box.width,
                    box.height,
                    fill=False,
                    edgecolor=color,
                    linewidth=1.5,
                )
            )
            ax.plot(shape.center.x, shape.center.y, marker="+", color=color, markersize=8)
            ax.text(
                box.x,
                box.y - 2,
                f"{shape.type.value} {shape.confidence * 100:.0f}%",
                color=color,
                fontsize=8,
                va="bottom",
                path_effects=stroke,
            )

        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=_DPI)
        return buf.getvalue()
    finally:
        plt.close(fig)
