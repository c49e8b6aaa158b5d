"""PNG export of rendered pixel buffers.

Pixel buffers are row-major RGB bytes, top row first. Float images in [0, 1]
are quantised with round-half-up, so 0.5 / 255 maps to 1 and 1.0 to 255.

Example:
    >>> import numpy as np
    >>> from toy_raytracer.output.export import image_to_uint8, write_png
    >>> image = np.zeros((2, 3, 3), dtype=np.float32)
    >>> write_png("black.png", 3, 2, image_to_uint8(image).tobytes())
"""

from __future__ import annotations

import os

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

BYTES_PER_PIXEL = 3


class ImageExportError(RuntimeError):
    """Raised when an image cannot be encoded or written."""


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Quantise a float image to 8 bits per channel.

    Args:
        image: Image array of shape (H, W, 3). Values are clamped to [0, 1].

    Returns:
        uint8 array of the same shape holding round(255 * value).
    """
    clipped = np.clip(np.asarray(image, dtype=np.float64), 0.0, 1.0)
    return np.floor(clipped * 255.0 + 0.5).astype(np.uint8)


def write_png(path: str | os.PathLike[str], width: int, height: int, pixels: bytes) -> None:
    """Encode an RGB pixel buffer as an 8-bit PNG file.

    Args:
        path: Output file path.
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Row-major RGB bytes, width * height * 3 long.

    Raises:
        ValueError: If the buffer length does not match the dimensions.
        ImageExportError: If the file cannot be encoded or written.
    """
    data = bytes(pixels)
    expected = width * height * BYTES_PER_PIXEL
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if len(data) != expected:
        raise ValueError(
            f"Pixel buffer has {len(data)} bytes, expected {expected} for a "
            f"{width}x{height} RGB image"
        )

    try:
        pil_image = PILImage.frombytes("RGB", (width, height), data)
        pil_image.save(path, format="PNG")
    except (OSError, ValueError) as e:
        raise ImageExportError(f"Failed to write PNG to {os.fspath(path)}: {e}") from e


def read_png(path: str | os.PathLike[str]) -> tuple[int, int, bytes]:
    """Decode a PNG file into an RGB pixel buffer.

    Returns:
        Tuple of (width, height, pixels) in the layout accepted by write_png.

    Raises:
        ImageExportError: If the file cannot be read or decoded.
    """
    try:
        with PILImage.open(path) as pil_image:
            rgb = pil_image.convert("RGB")
            width, height = rgb.size
            return width, height, rgb.tobytes()
    except OSError as e:
        raise ImageExportError(f"Failed to read PNG from {os.fspath(path)}: {e}") from e
