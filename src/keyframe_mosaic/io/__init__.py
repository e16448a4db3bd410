"""
I/O Module
==========

Frame sources and image stores: the collaborators the core consumes.

Example:
    from keyframe_mosaic.io import DirectoryFrameSource, DirectoryImageStore

    source = DirectoryFrameSource("./src/frames", pattern="*.png")
    keyframes = DirectoryImageStore("./src/keyframes")
    outputs = DirectoryImageStore("./output", prefix="render")
"""

from keyframe_mosaic.io.sources import (
    DirectoryFrameSource,
    FrameSource,
    InMemoryFrameSource,
    iter_frames,
    read_image,
)
from keyframe_mosaic.io.stores import (
    DirectoryImageStore,
    ImageStore,
    InMemoryImageStore,
)

__all__ = [
    "FrameSource",
    "InMemoryFrameSource",
    "DirectoryFrameSource",
    "iter_frames",
    "read_image",
    "ImageStore",
    "InMemoryImageStore",
    "DirectoryImageStore",
]
