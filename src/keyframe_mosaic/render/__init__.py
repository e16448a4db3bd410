"""
Render Module
=============

Tile matching and mosaic compositing.

This module provides:
    - TileMatcher: Exhaustive cell-to-keyframe nearest-neighbor search
    - MosaicRenderer: Grid partitioning and output compositing
    - grid_cells: Clipped grid geometry for a frame
"""

from keyframe_mosaic.render.tile_matcher import TileMatcher
from keyframe_mosaic.render.mosaic_renderer import MosaicRenderer, grid_cells

__all__ = [
    "TileMatcher",
    "MosaicRenderer",
    "grid_cells",
]
