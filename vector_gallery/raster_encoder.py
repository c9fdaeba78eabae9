"""
raster_encoder.py - Lay out a pixel vector as a grayscale raster and encode it.

SQUARE INFERENCE
----------------
Vectors carry no shape information.  When the caller does not pass
dimensions, the image is assumed square with side floor(sqrt(n)):

    n = 25  ->  5 x 5, every value used
    n = 24  ->  4 x 4, the last 8 values are dropped

Dropping the tail is the dataset's documented behaviour, not a bug.  A
DimensionMismatchWarning records that it happened.

ENCODING
--------
Each intensity is replicated into R, G and B with alpha 255 and the
RGBA grid is written as PNG (lossless) through matplotlib's imsave.
Cells with no source pixel are explicitly opaque black.
"""

import base64
import io
import logging
import math
import warnings
from dataclasses import dataclass
from typing import Optional

import matplotlib.image as mpimg
import numpy as np

from vector_gallery.errors import DimensionMismatchWarning, RasterContextError

logger = logging.getLogger(__name__)

PNG_MIME = "image/png"


@dataclass(frozen=True)
class RasterImage:
    """A width x height grayscale raster plus its PNG encoding."""
    width: int
    height: int
    pixels: np.ndarray    # uint8, length width * height, row-major
    encoded: bytes        # PNG bytes

    @property
    def data_uri(self) -> str:
        """The PNG as a ``data:`` URI, ready for an <img src=...>."""
        payload = base64.b64encode(self.encoded).decode("ascii")
        return f"data:{PNG_MIME};base64,{payload}"


def infer_dimensions(n: int) -> tuple[int, int]:
    """
    Return the square (side, side) used for an n-pixel vector.

    Emits DimensionMismatchWarning when n is not a perfect square.
    """
    side = math.isqrt(n)
    if side * side != n:
        warnings.warn(
            f"Vector of length {n} is not a perfect square; "
            f"using {side}x{side} and dropping {n - side * side} pixel(s).",
            DimensionMismatchWarning,
            stacklevel=2,
        )
    return side, side


def layout_pixels(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Place grayscale *pixels* row-major into an opaque RGBA grid.

    Parameters
    ----------
    pixels : np.ndarray
        Flat intensity array.  Extra values beyond width * height are ignored.
    width, height : int
        Raster dimensions.

    Returns
    -------
    np.ndarray
        uint8 array of shape (height, width, 4).
    """
    area = width * height
    count = min(pixels.size, area)

    gray = np.zeros(area, dtype=np.uint8)
    gray[:count] = pixels[:count]

    rgba = np.zeros((height, width, 4), dtype=np.uint8)
    rgba[..., :3] = gray.reshape(height, width, 1)
    rgba[..., 3] = 255
    return rgba


def encode_png(rgba: np.ndarray) -> bytes:
    """
    Encode an RGBA uint8 grid as PNG bytes.

    The in-memory buffer is the encoding surface; it is closed on every
    exit path.

    Raises
    ------
    RasterContextError
        If the grid is empty or the encoder fails.
    """
    height, width = rgba.shape[:2]
    if width <= 0 or height <= 0:
        raise RasterContextError(
            f"Cannot acquire a {width}x{height} encoding surface."
        )

    with io.BytesIO() as buf:
        try:
            mpimg.imsave(buf, rgba, format="png")
        except (ValueError, OSError, MemoryError) as exc:
            raise RasterContextError(f"PNG encoding failed: {exc}") from exc
        return buf.getvalue()


def encode_raster(
    pixels: np.ndarray,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> RasterImage:
    """
    Lay out a pixel vector and encode it as a PNG raster.

    Parameters
    ----------
    pixels : np.ndarray
        Flat uint8 intensities (see vector_gallery.vector_decoder).
    width, height : int, optional
        Explicit dimensions.  When both are given they are used as-is,
        with no check against the vector length.  A missing dimension
        defaults to floor(sqrt(n)).

    Returns
    -------
    RasterImage

    Raises
    ------
    RasterContextError
        If the raster has no area or cannot be encoded.
    """
    pixels = np.clip(np.asarray(pixels), 0, 255).astype(np.uint8).ravel()

    if width is None and height is None:
        width, height = infer_dimensions(pixels.size)
    elif width is None or height is None:
        side = math.isqrt(pixels.size)
        width = side if width is None else width
        height = side if height is None else height

    if width <= 0 or height <= 0:
        raise RasterContextError(
            f"Cannot acquire a {width}x{height} encoding surface."
        )

    rgba = layout_pixels(pixels, width, height)
    encoded = encode_png(rgba)

    logger.debug(
        "Encoded %dx%d raster from %d pixel(s) (%d bytes).",
        width, height, pixels.size, len(encoded),
    )
    return RasterImage(
        width=width,
        height=height,
        pixels=rgba[..., 0].ravel(),
        encoded=encoded,
    )
