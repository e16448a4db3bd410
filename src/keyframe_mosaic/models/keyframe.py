"""
Keyframe Data Model
===================

A keyframe is a frame chosen to represent a run of visually similar
frames. It is stored twice:

    - reference: small (X_STEP x Y_STEP) copy used for tile matching
    - render:    magnified (X_STEP*SCALE x Y_STEP*SCALE) copy used to
                 paint the output canvas

Both images are derived once by KeyframeBank.build and are read-only.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Keyframe:
    """
    Dual-resolution keyframe held by a KeyframeBank.

    Attributes:
        source_index: Index of the originating frame in its source
        reference: Reference image, shape (Y_STEP, X_STEP, 3)
        render: Render image, shape (Y_STEP*SCALE, X_STEP*SCALE, 3)
    """

    source_index: int
    reference: np.ndarray
    render: np.ndarray

    def __repr__(self) -> str:
        ref_h, ref_w = self.reference.shape[:2]
        ren_h, ren_w = self.render.shape[:2]
        return (
            f"Keyframe(source_index={self.source_index}, "
            f"reference={ref_w}x{ref_h}, render={ren_w}x{ren_h})"
        )
