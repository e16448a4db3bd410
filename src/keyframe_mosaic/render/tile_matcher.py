"""
Tile Matcher
============

Exhaustive nearest-neighbor search of a frame cell against every
reference image in a KeyframeBank.

Matching Rules:
    - Only the cell's actual extent is compared; edge cells that are
      smaller than the grid step are matched against the top-left
      sub-region of each reference image
    - Distance is the sum of per-pixel distances over that extent
    - The search starts from the theoretical maximum distance
      (width * height * 765) with index 0, and only a strictly smaller
      distance replaces the current best, so ties keep the earliest index

The search is vectorized over the bank's stacked references; it returns
the same index a sequential scan would.
"""

import logging

import numpy as np

from keyframe_mosaic.bank.keyframe_bank import KeyframeBank
from keyframe_mosaic.errors import InvalidArgumentError
from keyframe_mosaic.metrics.distance import (
    MAX_PIXEL_DISTANCE,
    ChannelDistance,
    pixel_distances,
)


logger = logging.getLogger(__name__)


class TileMatcher:
    """
    Full-pixel cell-to-keyframe matcher.

    Attributes:
        distance: Per-pixel distance strategy
    """

    def __init__(self, distance: ChannelDistance = ChannelDistance.SUMMED) -> None:
        self.distance = ChannelDistance(distance)

    def distances(self, cell_pixels: np.ndarray, bank: KeyframeBank) -> np.ndarray:
        """
        Compute the distance from a cell to every keyframe in the bank.

        Args:
            cell_pixels: Cell image, shape (height, width, 3)
            bank: Built keyframe bank

        Returns:
            int64 array of length len(bank)

        Raises:
            InvalidArgumentError: If the cell is not a 3-channel image or
                is larger than the reference images
        """
        if cell_pixels.ndim != 3 or cell_pixels.shape[2] != 3:
            raise InvalidArgumentError(
                f"Cell must be a (height, width, 3) image, got shape {cell_pixels.shape}"
            )

        height, width = cell_pixels.shape[:2]
        if width > bank.x_step or height > bank.y_step:
            raise InvalidArgumentError(
                f"Cell {width}x{height} exceeds reference size "
                f"{bank.x_step}x{bank.y_step}"
            )

        references = bank.references[:, :height, :width, :]
        per_pixel = pixel_distances(references, cell_pixels[np.newaxis], self.distance)
        return per_pixel.reshape(len(bank), -1).sum(axis=1)

    def find_closest(self, cell_pixels: np.ndarray, bank: KeyframeBank) -> int:
        """
        Find the bank index whose reference image best matches a cell.

        Args:
            cell_pixels: Cell image, shape (height, width, 3)
            bank: Built keyframe bank

        Returns:
            Index of the closest keyframe (earliest on ties)

        Raises:
            InvalidArgumentError: If the cell cannot fit the reference extent
        """
        distances = self.distances(cell_pixels, bank)

        height, width = cell_pixels.shape[:2]
        best_distance = width * height * MAX_PIXEL_DISTANCE

        # argmin returns the first minimum, which is the sequential
        # strict-less-than winner unless nothing beats the starting bound
        closest = int(np.argmin(distances))
        if distances[closest] >= best_distance:
            return 0
        return closest
