"""
Frame Data Model
================

Internal frame representation shared by every stage of the pipeline.

A Frame wraps a decoded image as a read-only numpy array together with
its position in the source sequence.

Design Rules:
    - Pixels are always (rows, cols, 3) uint8
    - The wrapped array is an owned, read-only copy of the input
    - Does NOT decode or encode image files (see keyframe_mosaic.io)
"""

from dataclasses import dataclass

import numpy as np

from keyframe_mosaic.errors import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class Frame:
    """
    Immutable frame from a FrameSource.

    Attributes:
        index: 0-based position of the frame in its source sequence
        pixels: Image data, shape (rows, cols, 3), dtype uint8
    """

    index: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        """Validate shape and dtype, then freeze the pixel buffer."""
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray):
            raise InvalidArgumentError(
                f"Frame {self.index}: pixels must be a numpy array, "
                f"got {type(pixels).__name__}"
            )
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise InvalidArgumentError(
                f"Frame {self.index}: expected (rows, cols, 3) pixels, "
                f"got shape {pixels.shape}"
            )
        if pixels.dtype != np.uint8:
            raise InvalidArgumentError(
                f"Frame {self.index}: expected uint8 pixels, got {pixels.dtype}"
            )
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise InvalidArgumentError(f"Frame {self.index}: image is empty")

        frozen = np.array(pixels, copy=True)
        frozen.flags.writeable = False
        object.__setattr__(self, "pixels", frozen)

    @property
    def rows(self) -> int:
        """Image height in pixels."""
        return self.pixels.shape[0]

    @property
    def cols(self) -> int:
        """Image width in pixels."""
        return self.pixels.shape[1]

    def __repr__(self) -> str:
        """Compact repr that doesn't dump the pixel data."""
        return f"Frame(index={self.index}, cols={self.cols}, rows={self.rows})"
