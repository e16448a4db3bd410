"""
keyframe-mosaic
===============

Reconstructs a frame sequence as a mosaic of its own keyframes.

Each frame is redrawn by tiling small regions copied from a curated set
of representative frames, chosen earlier from the same sequence by
scene-change detection.

Components:
    - metrics: Pixel distances and the sampled scene-change metric
    - selection: Threshold-driven keyframe scan
    - bank: Dual-resolution keyframe cache
    - render: Tile matching and mosaic compositing
    - io: Frame sources and image stores
    - pipeline: select -> build -> render orchestration

Example:
    from keyframe_mosaic import KeyframeBank, KeyframeSelector, MosaicRenderer

    keyframes = KeyframeSelector(threshold=24.0).select(frames)
    bank = KeyframeBank.build(keyframes, resolution=18, scale=2)
    output = MosaicRenderer().render(frames[0], bank)
"""

__version__ = "0.1.0"

from keyframe_mosaic.bank import KeyframeBank
from keyframe_mosaic.metrics import ChannelDistance, SampleMetric
from keyframe_mosaic.models import Frame, Keyframe
from keyframe_mosaic.render import MosaicRenderer, TileMatcher
from keyframe_mosaic.selection import KeyframeSelector

__all__ = [
    "__version__",
    "ChannelDistance",
    "SampleMetric",
    "KeyframeSelector",
    "KeyframeBank",
    "TileMatcher",
    "MosaicRenderer",
    "Frame",
    "Keyframe",
]
