"""
Mosaic Renderer
===============

Reconstructs a frame by tiling regions of matched keyframes.

Grid Geometry (per frame, from its own dimensions):
    origin_x = round(gx / RESOLUTION * cols)
    origin_y = round(gy / RESOLUTION * rows)
    width    = min(X_STEP, cols - origin_x)
    height   = min(Y_STEP, rows - origin_y)

Rounding is half-away-from-zero. Edge cells are clipped, never padded.
Grid positions whose clipped extent is empty are skipped.

Compositing:
    The output canvas is (cols * SCALE, rows * SCALE), zero-filled.
    For each cell the matched keyframe's render image contributes its
    top-left (width * SCALE, height * SCALE) region, pasted at
    (origin_x * SCALE, origin_y * SCALE) and clipped to the canvas.

Design Rules:
    - Stateless: each render() call depends only on (frame, bank)
    - The bank is only read, never written
"""

import logging
import math
from typing import Iterator, Optional

import numpy as np

from keyframe_mosaic.bank.keyframe_bank import KeyframeBank
from keyframe_mosaic.models.cell import Cell
from keyframe_mosaic.models.frame import Frame
from keyframe_mosaic.render.tile_matcher import TileMatcher


logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def grid_cells(
    cols: int,
    rows: int,
    resolution: int,
    x_step: int,
    y_step: int,
) -> Iterator[Cell]:
    """
    Enumerate the clipped cells of a frame's reconstruction grid.

    Cells are yielded row by row. Empty cells are omitted.

    Args:
        cols: Frame width
        rows: Frame height
        resolution: Grid cells per axis
        x_step: Nominal cell width
        y_step: Nominal cell height

    Yields:
        Cells lying fully inside the frame
    """
    for gy in range(resolution):
        y = _round_half_up(gy / resolution * rows)
        height = min(y_step, rows - y)
        for gx in range(resolution):
            x = _round_half_up(gx / resolution * cols)
            width = min(x_step, cols - x)
            if width <= 0 or height <= 0:
                continue
            yield Cell(grid_x=gx, grid_y=gy, x=x, y=y, width=width, height=height)


class MosaicRenderer:
    """
    Grid-based frame reconstructor.

    Example:
        renderer = MosaicRenderer()
        output = renderer.render(frame, bank)
    """

    def __init__(self, matcher: Optional[TileMatcher] = None) -> None:
        """
        Initialize the renderer.

        Args:
            matcher: Cell matcher to use. Defaults to TileMatcher().
        """
        self.matcher = matcher if matcher is not None else TileMatcher()

    def cells(self, frame: Frame, bank: KeyframeBank) -> Iterator[Cell]:
        """Enumerate the grid cells of a frame for a given bank."""
        return grid_cells(frame.cols, frame.rows, bank.resolution, bank.x_step, bank.y_step)

    def match_grid(self, frame: Frame, bank: KeyframeBank) -> np.ndarray:
        """
        Choose a keyframe for every grid cell without compositing.

        Args:
            frame: Frame to reconstruct
            bank: Built keyframe bank

        Returns:
            (RESOLUTION, RESOLUTION) int array of bank indices, indexed
            [grid_y, grid_x]; -1 marks skipped empty cells
        """
        layout = np.full((bank.resolution, bank.resolution), -1, dtype=np.int64)
        for cell in self.cells(frame, bank):
            cell_pixels = frame.pixels[cell.slices()]
            layout[cell.grid_y, cell.grid_x] = self.matcher.find_closest(cell_pixels, bank)
        return layout

    def render(self, frame: Frame, bank: KeyframeBank) -> np.ndarray:
        """
        Reconstruct a frame from keyframe tiles.

        Args:
            frame: Frame to reconstruct
            bank: Built keyframe bank

        Returns:
            uint8 image of shape (rows * SCALE, cols * SCALE, 3)
        """
        scale = bank.scale
        canvas = np.zeros((frame.rows * scale, frame.cols * scale, 3), dtype=np.uint8)

        for cell in self.cells(frame, bank):
            cell_pixels = frame.pixels[cell.slices()]
            closest = self.matcher.find_closest(cell_pixels, bank)
            _, tile = bank.lookup(closest)

            # slicing clips the destination at the canvas edge
            region = canvas[cell.slices(scale)]
            copy_h, copy_w = region.shape[:2]
            region[:] = tile[:copy_h, :copy_w]

        return canvas
