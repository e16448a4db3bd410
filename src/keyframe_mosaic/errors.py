"""
Error Types
===========

Exception hierarchy for keyframe-mosaic.

Every error raised by the core derives from MosaicError so callers can
catch the whole family at one boundary (the CLI does exactly that).
The concrete types also subclass the closest builtin so that generic
`ValueError` / `IndexError` handlers keep working.

Design Rules:
    - Core errors propagate immediately; nothing is caught-and-continued
    - No retry logic lives in the core
"""


class MosaicError(Exception):
    """Base class for all keyframe-mosaic errors."""
    pass


class InvalidArgumentError(MosaicError, ValueError):
    """Raised when a geometric precondition is violated."""
    pass


class OutOfRangeError(MosaicError, IndexError):
    """Raised when an index lookup falls outside a collection."""
    pass


class FrameNotFoundError(OutOfRangeError):
    """Raised when a FrameSource has no frame at the requested index."""
    pass


class EmptyInputError(MosaicError, ValueError):
    """Raised when selection or bank construction receives zero frames."""
    pass


class ImageReadError(MosaicError):
    """Raised when an image file cannot be decoded."""
    pass


class StorageError(MosaicError):
    """Raised when an image store fails to persist or clear images."""
    pass
