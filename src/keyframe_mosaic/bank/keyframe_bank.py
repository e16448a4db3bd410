"""
Keyframe Bank
=============

Immutable, index-addressed store of keyframes at two resolutions.

Grid geometry is derived once from the FIRST keyframe:
    X_STEP = ceil(cols / RESOLUTION)
    Y_STEP = ceil(rows / RESOLUTION)

Every keyframe, whatever its native size, is then bilinearly resized to:
    reference: (X_STEP, Y_STEP)                  -> tile matching
    render:    (X_STEP * SCALE, Y_STEP * SCALE)  -> output compositing

Design Rules:
    - Built once, never mutated (all arrays are read-only)
    - Safe to share between readers once build() has returned
    - Index = selection order
"""

import logging
from typing import Iterator, Sequence, Tuple

import cv2
import numpy as np

from keyframe_mosaic.errors import EmptyInputError, OutOfRangeError
from keyframe_mosaic.models.frame import Frame
from keyframe_mosaic.models.keyframe import Keyframe


logger = logging.getLogger(__name__)


def _ceil_div(value: int, divisor: int) -> int:
    return -(-value // divisor)


def _frozen(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


class KeyframeBank:
    """
    Frozen collection of dual-resolution keyframes.

    Use KeyframeBank.build() rather than the constructor.

    Attributes:
        resolution: Grid cells per axis used to derive the steps
        scale: Render magnification
        x_step: Reference width (grid cell width)
        y_step: Reference height (grid cell height)
        references: Stacked reference images, shape (N, Y_STEP, X_STEP, 3)
    """

    def __init__(
        self,
        keyframes: Sequence[Keyframe],
        resolution: int,
        scale: int,
        x_step: int,
        y_step: int,
    ) -> None:
        if not keyframes:
            raise EmptyInputError("KeyframeBank requires at least one keyframe")

        self._keyframes: Tuple[Keyframe, ...] = tuple(keyframes)
        self.resolution = resolution
        self.scale = scale
        self.x_step = x_step
        self.y_step = y_step
        self.references = _frozen(np.stack([kf.reference for kf in self._keyframes]))

    @classmethod
    def build(
        cls,
        keyframes: Sequence[Frame],
        resolution: int = 18,
        scale: int = 2,
    ) -> "KeyframeBank":
        """
        Resize selected keyframes into a bank.

        Args:
            keyframes: Selected frames, in selection order
            resolution: Grid cells per axis. Must be >= 1.
            scale: Render magnification. Must be >= 1.

        Returns:
            Frozen KeyframeBank with one entry per input frame

        Raises:
            EmptyInputError: If `keyframes` is empty
        """
        if resolution < 1:
            raise ValueError("resolution must be >= 1")
        if scale < 1:
            raise ValueError("scale must be >= 1")
        if not keyframes:
            raise EmptyInputError("Cannot build a KeyframeBank from zero keyframes")

        first = keyframes[0]
        x_step = _ceil_div(first.cols, resolution)
        y_step = _ceil_div(first.rows, resolution)
        reference_size = (x_step, y_step)
        render_size = (x_step * scale, y_step * scale)

        entries = []
        for frame in keyframes:
            pixels = np.ascontiguousarray(frame.pixels)
            reference = cv2.resize(pixels, reference_size, interpolation=cv2.INTER_LINEAR)
            render = cv2.resize(pixels, render_size, interpolation=cv2.INTER_LINEAR)
            entries.append(
                Keyframe(
                    source_index=frame.index,
                    reference=_frozen(reference),
                    render=_frozen(render),
                )
            )

        logger.info(
            f"KeyframeBank built: {len(entries)} keyframes, "
            f"reference={x_step}x{y_step}, render={render_size[0]}x{render_size[1]}"
        )
        return cls(entries, resolution=resolution, scale=scale, x_step=x_step, y_step=y_step)

    def __len__(self) -> int:
        return len(self._keyframes)

    def __iter__(self) -> Iterator[Keyframe]:
        return iter(self._keyframes)

    @property
    def size(self) -> int:
        """Number of keyframes in the bank."""
        return len(self._keyframes)

    def keyframe(self, index: int) -> Keyframe:
        """
        Get the full Keyframe record at an index.

        Raises:
            OutOfRangeError: If index is not in [0, size)
        """
        if not 0 <= index < len(self._keyframes):
            raise OutOfRangeError(
                f"Keyframe index {index} out of range [0, {len(self._keyframes)})"
            )
        return self._keyframes[index]

    def lookup(self, index: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Get the (reference, render) images at an index.

        Args:
            index: Bank index in [0, size)

        Returns:
            Tuple of (reference, render) read-only arrays

        Raises:
            OutOfRangeError: If index is not in [0, size)
        """
        entry = self.keyframe(index)
        return entry.reference, entry.render

    def __repr__(self) -> str:
        return (
            f"KeyframeBank(size={len(self._keyframes)}, "
            f"step={self.x_step}x{self.y_step}, scale={self.scale})"
        )
