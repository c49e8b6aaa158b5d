"""Image output for rendered pixel buffers.

Components:
    export: Float to 8-bit quantisation and PNG encoding via Pillow
"""

from .export import ImageExportError, image_to_uint8, read_png, write_png

__all__ = [
    "ImageExportError",
    "image_to_uint8",
    "read_png",
    "write_png",
]
