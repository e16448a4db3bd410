"""
Mosaic Pipeline
===============

Orchestrates a full reconstruction run:

    select keyframes -> build bank -> render each frame

Stages:
    1. Refresh (optional): clear the keyframe and output stores
    2. Selection: scan the frame source, persisting each keyframe as it
       is chosen (or reload cached keyframes when configured)
    3. Bank: resize the keyframes once into a frozen KeyframeBank
    4. Render: reconstruct every frame not yet present in the output
       store, persisting each result

Resume Behavior:
    Without refresh, rendering starts at the number of outputs already
    stored, so an interrupted run continues where it stopped.

Design Rules:
    - No module-level state: sources, stores and the bank are passed in
    - Storage failures propagate; nothing is retried
    - Timing is logged for diagnostics only
"""

import logging
import time
from typing import List, Optional

from keyframe_mosaic.bank.keyframe_bank import KeyframeBank
from keyframe_mosaic.config import Settings
from keyframe_mosaic.io.sources import FrameSource, iter_frames
from keyframe_mosaic.io.stores import ImageStore
from keyframe_mosaic.metrics.sampling import SampleMetric
from keyframe_mosaic.models.frame import Frame
from keyframe_mosaic.models.summary import RunSummary
from keyframe_mosaic.render.mosaic_renderer import MosaicRenderer
from keyframe_mosaic.render.tile_matcher import TileMatcher
from keyframe_mosaic.selection.selector import KeyframeSelector


logger = logging.getLogger(__name__)


class MosaicPipeline:
    """
    End-to-end keyframe mosaic runner.

    Attributes:
        selector: Keyframe selector
        renderer: Mosaic renderer
        resolution: Grid cells per axis
        scale: Output magnification
        reuse_cached: Reload stored keyframes instead of re-selecting

    Example:
        pipeline = MosaicPipeline.from_settings(settings)
        summary = pipeline.run(source, keyframe_store, output_store)
    """

    def __init__(
        self,
        selector: Optional[KeyframeSelector] = None,
        renderer: Optional[MosaicRenderer] = None,
        resolution: int = 18,
        scale: int = 2,
        reuse_cached: bool = False,
    ) -> None:
        self.selector = selector if selector is not None else KeyframeSelector()
        self.renderer = renderer if renderer is not None else MosaicRenderer()
        self.resolution = resolution
        self.scale = scale
        self.reuse_cached = reuse_cached

    @classmethod
    def from_settings(cls, settings: Settings) -> "MosaicPipeline":
        """Build a pipeline from loaded settings."""
        distance = settings.metric.distance
        metric = SampleMetric(
            sampling_density=settings.metric.sampling_density,
            distance=distance,
        )
        return cls(
            selector=KeyframeSelector(threshold=settings.selection.threshold, metric=metric),
            renderer=MosaicRenderer(TileMatcher(distance=distance)),
            resolution=settings.mosaic.resolution,
            scale=settings.mosaic.scale,
            reuse_cached=settings.selection.reuse_cached,
        )

    def select_keyframes(
        self,
        source: FrameSource,
        keyframe_store: Optional[ImageStore] = None,
    ) -> List[Frame]:
        """
        Pick keyframes from a source, persisting each one as it is chosen.

        Args:
            source: Ordered frames
            keyframe_store: Optional sink for the selected keyframes

        Returns:
            Selected keyframes in selection order

        Raises:
            EmptyInputError: If the source holds no frames
            StorageError: If persisting a keyframe fails
        """
        logger.info(f"Picking keyframes from {len(source)} frames...")

        keyframes: List[Frame] = []
        for position, keyframe in enumerate(self.selector.iter_select(iter_frames(source))):
            keyframes.append(keyframe)
            if keyframe_store is not None:
                keyframe_store.persist(position, keyframe.pixels)

        return keyframes

    def load_cached_keyframes(self, keyframe_store: ImageStore) -> List[Frame]:
        """Reload previously persisted keyframes from a store."""
        images = keyframe_store.load_all()
        logger.info(f"Loaded {len(images)} cached keyframes")
        return [Frame(index=index, pixels=image) for index, image in enumerate(images)]

    def build_bank(self, keyframes: List[Frame]) -> KeyframeBank:
        """Resize keyframes into a frozen bank."""
        logger.info("Resizing keyframes...")
        return KeyframeBank.build(keyframes, resolution=self.resolution, scale=self.scale)

    def render_frames(
        self,
        source: FrameSource,
        bank: KeyframeBank,
        output_store: ImageStore,
        start: int = 0,
    ) -> int:
        """
        Render frames from `start` onward and persist the results.

        Args:
            source: Ordered frames
            bank: Built keyframe bank
            output_store: Sink for rendered images
            start: First frame index to render

        Returns:
            Number of frames rendered
        """
        total = len(source)
        logger.info(f"Rendering frames {start}..{total - 1}")

        rendered = 0
        for frame in iter_frames(source, start=start):
            began = time.perf_counter()
            output = self.renderer.render(frame, bank)
            output_store.persist(frame.index, output)
            rendered += 1

            logger.debug(
                f"Rendered frame {frame.index}/{total} "
                f"in {time.perf_counter() - began:.3f}s"
            )
            if rendered % 50 == 0:
                logger.info(f"Rendered {frame.index + 1}/{total} frames")

        logger.info("Render complete.")
        return rendered

    def run(
        self,
        source: FrameSource,
        keyframe_store: ImageStore,
        output_store: ImageStore,
        refresh: bool = False,
    ) -> RunSummary:
        """
        Execute the full pipeline.

        Args:
            source: Ordered frames
            keyframe_store: Keyframe cache
            output_store: Rendered output sink
            refresh: Clear both stores and render from scratch

        Returns:
            RunSummary with counters and elapsed time

        Raises:
            EmptyInputError: If the source holds no frames
            StorageError: If a store operation fails
        """
        began = time.perf_counter()

        if refresh:
            logger.info("Clearing old files...")
            output_store.clear()
            keyframe_store.clear()
        else:
            logger.info("Continuing from last run...")

        if self.reuse_cached and not refresh and keyframe_store.count() > 0:
            keyframes = self.load_cached_keyframes(keyframe_store)
        else:
            if not refresh:
                # stale keyframes from an earlier selection would outlive this one
                keyframe_store.clear()
            keyframes = self.select_keyframes(source, keyframe_store)

        bank = self.build_bank(keyframes)

        start = output_store.count()
        logger.info(f"Found {start} already rendered frames.")
        rendered = self.render_frames(source, bank, output_store, start=start)

        summary = RunSummary(
            keyframe_count=len(bank),
            rendered_count=rendered,
            skipped_count=min(start, len(source)),
            elapsed_seconds=time.perf_counter() - began,
        )
        logger.info(f"Run summary: {summary.to_dict()}")
        return summary
