"""
Frame Sources
=============

Ordered, index-addressed frame providers consumed by the pipeline.

Implementations:
    - InMemoryFrameSource: wraps already-decoded arrays (tests, embedding)
    - DirectoryFrameSource: sorted image files in a directory, decoded
      lazily with OpenCV on each get()

Design Rules:
    - Indices are stable and 0-based
    - Out-of-range indices raise FrameNotFoundError
    - This is the ONLY place that decodes image files
"""

import logging
from pathlib import Path
from typing import Iterator, List, Protocol, Sequence, Union

import cv2
import numpy as np

from keyframe_mosaic.errors import FrameNotFoundError, ImageReadError
from keyframe_mosaic.models.frame import Frame


logger = logging.getLogger(__name__)


class FrameSource(Protocol):
    """
    Protocol for ordered frame providers.

    All implementations expose a length and index-based access.
    """

    def __len__(self) -> int:
        ...

    def get(self, index: int) -> Frame:
        """
        Get the frame at a position.

        Raises:
            FrameNotFoundError: If index is not in [0, len)
        """
        ...


def iter_frames(source: FrameSource, start: int = 0) -> Iterator[Frame]:
    """Yield frames from `start` to the end of a source, in order."""
    for index in range(start, len(source)):
        yield source.get(index)


def read_image(path: Union[str, Path]) -> np.ndarray:
    """
    Decode an image file to a BGR array.

    Args:
        path: Image file path

    Returns:
        BGR image as np.ndarray (H, W, 3), dtype=uint8

    Raises:
        ImageReadError: If the file is missing or cannot be decoded
    """
    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise ImageReadError(f"Failed to decode image: {path}")
    return image


class InMemoryFrameSource:
    """Frame source backed by a list of decoded images."""

    def __init__(self, images: Sequence[np.ndarray]) -> None:
        self._frames: List[Frame] = [
            Frame(index=index, pixels=np.asarray(image))
            for index, image in enumerate(images)
        ]

    def __len__(self) -> int:
        return len(self._frames)

    def get(self, index: int) -> Frame:
        if not 0 <= index < len(self._frames):
            raise FrameNotFoundError(
                f"Frame index {index} out of range [0, {len(self._frames)})"
            )
        return self._frames[index]


class DirectoryFrameSource:
    """
    Frame source backed by image files in a directory.

    Files are matched with a glob pattern and ordered by name, so
    zero-padded names (0000.png, 0001.png, ...) give sequence order.

    Attributes:
        directory: Directory holding the frames
        pattern: Glob pattern for frame files
    """

    def __init__(self, directory: Union[str, Path], pattern: str = "*.png") -> None:
        self.directory = Path(directory)
        self.pattern = pattern
        self._paths: List[Path] = sorted(self.directory.glob(pattern))

        logger.info(f"Found {len(self._paths)} frames in {self.directory} ({pattern})")

    @property
    def paths(self) -> List[Path]:
        """Frame file paths, in sequence order."""
        return list(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def get(self, index: int) -> Frame:
        if not 0 <= index < len(self._paths):
            raise FrameNotFoundError(
                f"Frame index {index} out of range [0, {len(self._paths)}) "
                f"in {self.directory}"
            )
        return Frame(index=index, pixels=read_image(self._paths[index]))
