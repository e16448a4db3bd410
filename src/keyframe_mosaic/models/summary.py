"""
Run Summary
===========

Result record returned by MosaicPipeline.run.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RunSummary:
    """
    Outcome of one pipeline run.

    Attributes:
        keyframe_count: Keyframes in the bank used for rendering
        rendered_count: Frames rendered during this run
        skipped_count: Frames skipped because an output already existed
        elapsed_seconds: Wall-clock time of the whole run
    """

    keyframe_count: int
    rendered_count: int
    skipped_count: int
    elapsed_seconds: float

    def to_dict(self) -> dict:
        """Export as dictionary for logging/serialization."""
        return {
            "keyframe_count": self.keyframe_count,
            "rendered_count": self.rendered_count,
            "skipped_count": self.skipped_count,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
        }
