"""High-level inpainting entry points."""

from .batch import BatchInpainter, ImageMetadata
from .inpaint import GDFMM

__all__ = [
    "BatchInpainter",
    "ImageMetadata",
    "GDFMM",
]
