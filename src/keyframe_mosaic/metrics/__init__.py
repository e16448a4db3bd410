"""
Metrics Module
==============

Pixel distances and the sampled scene-change metric.

This module provides:
    - ChannelDistance: Selectable per-pixel distance strategy
    - pixel_distances: Vectorized per-pixel distance
    - SampleMetric: Sparse-lattice dissimilarity used for keyframe selection
"""

from keyframe_mosaic.metrics.distance import (
    MAX_PIXEL_DISTANCE,
    ChannelDistance,
    pixel_distances,
)
from keyframe_mosaic.metrics.sampling import SampleMetric, sample_coordinates

__all__ = [
    "MAX_PIXEL_DISTANCE",
    "ChannelDistance",
    "pixel_distances",
    "SampleMetric",
    "sample_coordinates",
]
