"""
Keyframe Selector
=================

Single-pass scene-change scan over an ordered frame sequence.

Algorithm:
    1. The first frame is always a keyframe.
    2. Each later frame is compared against the most recently selected
       keyframe (not against its immediate predecessor).
    3. If the score is strictly greater than the threshold the frame is
       selected and becomes the new comparison anchor.

Comparing against the last keyframe means slow drifts accumulate until
they cross the threshold, while a run of near-identical frames collapses
to a single keyframe.

Design Rules:
    - Deterministic: same frames + threshold -> same selection
    - Output preserves input order
    - Persistence is the caller's concern and never affects selection
"""

import logging
from typing import Iterable, Iterator, List, Optional

from keyframe_mosaic.errors import EmptyInputError
from keyframe_mosaic.metrics.sampling import SampleMetric
from keyframe_mosaic.models.frame import Frame


logger = logging.getLogger(__name__)


class KeyframeSelector:
    """
    Threshold-driven keyframe picker.

    Attributes:
        threshold: Minimum score (exclusive) that marks a scene change
        metric: Dissimilarity metric used for comparisons

    Example:
        selector = KeyframeSelector(threshold=24.0)
        keyframes = selector.select(frames)
    """

    def __init__(
        self,
        threshold: float = 24.0,
        metric: Optional[SampleMetric] = None,
    ) -> None:
        """
        Initialize the selector.

        Args:
            threshold: Scene-change threshold. Must be >= 0.
            metric: Metric to use. Defaults to SampleMetric().
        """
        if threshold < 0:
            raise ValueError("threshold must be >= 0")

        self.threshold = threshold
        self.metric = metric if metric is not None else SampleMetric()

        logger.info(
            f"KeyframeSelector initialized: threshold={threshold}, "
            f"density={self.metric.sampling_density}, "
            f"distance={self.metric.distance.value}"
        )

    def iter_select(self, frames: Iterable[Frame]) -> Iterator[Frame]:
        """
        Lazily yield keyframes while scanning frames in order.

        Frames are pulled one at a time, so a directory-backed source is
        never loaded into memory in full.

        Args:
            frames: Ordered frames to scan

        Yields:
            Selected keyframes, in input order

        Raises:
            EmptyInputError: If `frames` yields nothing
        """
        iterator = iter(frames)
        try:
            last_selected = next(iterator)
        except StopIteration:
            raise EmptyInputError("Cannot select keyframes from an empty sequence") from None

        yield last_selected
        scanned = 1
        selected = 1

        for frame in iterator:
            scanned += 1
            score = self.metric.compare(last_selected, frame)
            if score > self.threshold:
                selected += 1
                logger.debug(
                    f"Keyframe {selected - 1}: frame {frame.index} "
                    f"(score={score:.2f})"
                )
                last_selected = frame
                yield frame

        logger.info(
            f"Selected {selected} keyframes from {scanned} frames "
            f"({100.0 * selected / scanned:.1f}%)"
        )

    def select(self, frames: Iterable[Frame]) -> List[Frame]:
        """
        Select keyframes from a frame sequence.

        Args:
            frames: Ordered frames to scan

        Returns:
            Selected frames; always starts with the first input frame

        Raises:
            EmptyInputError: If `frames` is empty
        """
        return list(self.iter_select(frames))
