"""
Grid Cell Model
===============

Rectangular region of a frame belonging to the RESOLUTION x RESOLUTION
reconstruction grid.

Cells are clipped, never padded: at the right and bottom edges width and
height may be smaller than the grid step.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Cell:
    """
    One grid cell in frame coordinates.

    Attributes:
        grid_x: Column of the cell in the grid
        grid_y: Row of the cell in the grid
        x: Left edge in pixels
        y: Top edge in pixels
        width: Clipped width in pixels (> 0)
        height: Clipped height in pixels (> 0)
    """

    grid_x: int
    grid_y: int
    x: int
    y: int
    width: int
    height: int

    def slices(self, scale: int = 1) -> tuple:
        """Return (row_slice, col_slice) for this cell, magnified by scale."""
        return (
            slice(self.y * scale, (self.y + self.height) * scale),
            slice(self.x * scale, (self.x + self.width) * scale),
        )
