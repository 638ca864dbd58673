"""Pipeline configuration — binarization and segmentation knobs."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PipelineConfig:
    """Controls how pixels become components.

    Classification thresholds are not configurable; they live next to the
    decision table in the classification transform.
    """

    # ITU-R BT.709 luma coefficients (R, G, B)
    luminance_weights: tuple[float, float, float] = (0.2126, 0.7152, 0.0722)
    # Pixels darker than this are foreground; near-white is background
    luminance_threshold: float = 250.0

    # Components with fewer pixels are treated as noise and dropped
    min_component_area: int = 20
