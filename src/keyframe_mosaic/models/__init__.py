"""
Data Models
===========

Typed records passed between the stages of keyframe-mosaic.

Models:
    - Frame: Immutable decoded frame with its source position
    - Keyframe: Reference + render copies of a selected frame
    - Cell: Clipped grid cell in frame coordinates
    - RunSummary: Counters returned by the pipeline
"""

from keyframe_mosaic.models.frame import Frame
from keyframe_mosaic.models.keyframe import Keyframe
from keyframe_mosaic.models.cell import Cell
from keyframe_mosaic.models.summary import RunSummary

__all__ = [
    "Frame",
    "Keyframe",
    "Cell",
    "RunSummary",
]
