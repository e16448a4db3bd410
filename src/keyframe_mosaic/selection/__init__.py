"""
Selection Module
================

Scene-change keyframe selection.
"""

from keyframe_mosaic.selection.selector import KeyframeSelector

__all__ = [
    "KeyframeSelector",
]
