"""
Bank Module
===========

Dual-resolution keyframe cache.
"""

from keyframe_mosaic.bank.keyframe_bank import KeyframeBank

__all__ = [
    "KeyframeBank",
]
