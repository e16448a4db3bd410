"""
Image Stores
============

Sinks for selected keyframes and rendered outputs.

Implementations:
    - InMemoryImageStore: dict-backed, for tests and embedding
    - DirectoryImageStore: zero-padded image files written with OpenCV

File Naming:
    <prefix><index padded to `digits`><extension>
    e.g. keyframes -> 0000.png, outputs -> render0000.png

Design Rules:
    - persist() raises StorageError on failure; callers never retry
    - Stores hold copies; later mutation of the caller's array has no effect
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Protocol, Union

import cv2
import numpy as np

from keyframe_mosaic.errors import StorageError
from keyframe_mosaic.io.sources import read_image


logger = logging.getLogger(__name__)


class ImageStore(Protocol):
    """Protocol for indexed image sinks."""

    def persist(self, index: int, image: np.ndarray) -> None:
        """
        Durably record an image under an index.

        Raises:
            StorageError: If the image could not be stored
        """
        ...

    def count(self) -> int:
        """Number of images currently stored."""
        ...

    def clear(self) -> int:
        """Remove all stored images and return how many were removed."""
        ...

    def load_all(self) -> List[np.ndarray]:
        """Load stored images in index order."""
        ...


class InMemoryImageStore:
    """Image store backed by a dict."""

    def __init__(self) -> None:
        self._images: Dict[int, np.ndarray] = {}

    def persist(self, index: int, image: np.ndarray) -> None:
        self._images[index] = np.array(image, copy=True)

    def get(self, index: int) -> np.ndarray:
        return self._images[index]

    def count(self) -> int:
        return len(self._images)

    def clear(self) -> int:
        cleared = len(self._images)
        self._images.clear()
        return cleared

    def load_all(self) -> List[np.ndarray]:
        return [self._images[index] for index in sorted(self._images)]


class DirectoryImageStore:
    """
    Image store writing one file per index into a directory.

    Attributes:
        directory: Target directory (created on first write)
        prefix: File name prefix
        digits: Zero-padding width of the index
        extension: File extension, including the dot
    """

    def __init__(
        self,
        directory: Union[str, Path],
        prefix: str = "",
        digits: int = 4,
        extension: str = ".png",
    ) -> None:
        self.directory = Path(directory)
        self.prefix = prefix
        self.digits = digits
        self.extension = extension

    @property
    def glob_pattern(self) -> str:
        return f"{self.prefix}*{self.extension}"

    def path_for(self, index: int) -> Path:
        """File path an index is stored under."""
        return self.directory / f"{self.prefix}{index:0{self.digits}d}{self.extension}"

    def paths(self) -> List[Path]:
        """Stored file paths, in index order."""
        if not self.directory.is_dir():
            return []

        pattern = re.compile(
            rf"{re.escape(self.prefix)}(\d{{{self.digits},}}){re.escape(self.extension)}"
        )
        indexed = []
        for path in self.directory.glob(self.glob_pattern):
            match = pattern.fullmatch(path.name)
            if match:
                indexed.append((int(match.group(1)), path))
        return [path for _, path in sorted(indexed)]

    def persist(self, index: int, image: np.ndarray) -> None:
        """
        Write an image to disk.

        Args:
            index: Sequence index used for the file name
            image: BGR image, (H, W, 3) uint8

        Raises:
            StorageError: If the directory cannot be created or the
                encoder refuses the image
        """
        path = self.path_for(index)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            written = cv2.imwrite(str(path), np.ascontiguousarray(image))
        except (OSError, cv2.error) as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

        if not written:
            raise StorageError(f"Failed to write {path}: encoder returned False")

        logger.debug(f"Wrote {path}")

    def count(self) -> int:
        return len(self.paths())

    def clear(self) -> int:
        """
        Delete every stored image file.

        Returns:
            Number of files removed

        Raises:
            StorageError: If a file cannot be removed
        """
        logger.info(f"Clearing {self.directory / self.glob_pattern}")

        removed = 0
        for path in self.paths():
            try:
                path.unlink()
            except OSError as e:
                raise StorageError(f"Failed to remove {path}: {e}") from e
            removed += 1

        logger.info(f"Directory cleared ({removed} files)")
        return removed

    def load_all(self) -> List[np.ndarray]:
        return [read_image(path) for path in self.paths()]
