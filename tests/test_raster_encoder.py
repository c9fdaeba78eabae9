"""Tests for vector_gallery/raster_encoder.py."""

import base64
import io
import struct
import warnings
from unittest.mock import patch

import matplotlib.image as mpimg
import numpy as np
import pytest

from vector_gallery.errors import DimensionMismatchWarning, RasterContextError
from vector_gallery.raster_encoder import (
    encode_png,
    encode_raster,
    infer_dimensions,
    layout_pixels,
)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _png_size(png: bytes) -> tuple[int, int]:
    """Read (width, height) from the IHDR chunk."""
    return struct.unpack(">II", png[16:24])


def _decode_png(png: bytes) -> np.ndarray:
    """Decode PNG bytes back to a uint8 RGBA array."""
    rgba = mpimg.imread(io.BytesIO(png), format="png")
    return np.round(rgba * 255).astype(np.uint8)


class TestInferDimensions:
    def test_perfect_square(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert infer_dimensions(25) == (5, 5)

    def test_non_square_warns(self):
        with pytest.warns(DimensionMismatchWarning):
            assert infer_dimensions(24) == (4, 4)


class TestLayoutPixels:
    def test_gray_replicated_and_opaque(self):
        rgba = layout_pixels(np.array([7, 8, 9, 10], dtype=np.uint8), 2, 2)
        assert rgba.shape == (2, 2, 4)
        np.testing.assert_array_equal(rgba[0, 1], [8, 8, 8, 255])
        np.testing.assert_array_equal(rgba[1, 0], [9, 9, 9, 255])

    def test_missing_cells_are_opaque_black(self):
        rgba = layout_pixels(np.array([200], dtype=np.uint8), 2, 2)
        np.testing.assert_array_equal(rgba[..., 3], 255)
        np.testing.assert_array_equal(rgba.reshape(-1, 4)[1:, :3], 0)

    def test_extra_pixels_ignored(self):
        rgba = layout_pixels(np.arange(10, dtype=np.uint8), 3, 3)
        assert rgba.shape == (3, 3, 4)
        assert rgba[2, 2, 0] == 8


class TestEncodeRaster:
    def test_square_vector_uses_all_values(self):
        pixels = np.arange(25, dtype=np.uint8) * 10
        raster = encode_raster(pixels)
        assert (raster.width, raster.height) == (5, 5)
        np.testing.assert_array_equal(raster.pixels, pixels)

    def test_non_square_vector_drops_tail(self):
        pixels = np.arange(24, dtype=np.uint8)
        with pytest.warns(DimensionMismatchWarning):
            raster = encode_raster(pixels)
        assert (raster.width, raster.height) == (4, 4)
        assert raster.pixels.size == 16
        np.testing.assert_array_equal(raster.pixels, pixels[:16])

    def test_explicit_dimensions_used_directly(self):
        raster = encode_raster(np.array([10, 20, 30], dtype=np.uint8), width=2, height=2)
        assert (raster.width, raster.height) == (2, 2)
        np.testing.assert_array_equal(raster.pixels, [10, 20, 30, 0])

    def test_explicit_rectangle(self):
        raster = encode_raster(np.arange(6, dtype=np.uint8), width=3, height=2)
        assert _png_size(raster.encoded) == (3, 2)

    def test_one_missing_dimension_falls_back_to_side(self):
        raster = encode_raster(np.arange(16, dtype=np.uint8), width=2)
        assert (raster.width, raster.height) == (2, 4)

    def test_pixel_count_never_exceeds_area(self):
        raster = encode_raster(np.arange(100, dtype=np.uint8), width=3, height=3)
        assert raster.pixels.size == 9

    def test_png_is_lossless(self):
        pixels = np.array([0, 64, 128, 255], dtype=np.uint8)
        raster = encode_raster(pixels)
        assert raster.encoded.startswith(PNG_SIGNATURE)
        assert _png_size(raster.encoded) == (2, 2)
        decoded = _decode_png(raster.encoded)
        np.testing.assert_array_equal(decoded[..., 0].ravel(), pixels)
        np.testing.assert_array_equal(decoded[..., 1].ravel(), pixels)
        np.testing.assert_array_equal(decoded[..., 3], 255)

    def test_data_uri_round_trips_encoded_bytes(self):
        raster = encode_raster(np.zeros(4, dtype=np.uint8))
        prefix = "data:image/png;base64,"
        assert raster.data_uri.startswith(prefix)
        assert base64.b64decode(raster.data_uri[len(prefix):]) == raster.encoded

    def test_empty_vector_has_no_surface(self):
        with pytest.raises(RasterContextError):
            encode_raster(np.empty(0, dtype=np.uint8))

    def test_non_positive_dimensions_raise(self):
        with pytest.raises(RasterContextError):
            encode_raster(np.arange(4, dtype=np.uint8), width=0, height=2)

    def test_encoder_failure_becomes_raster_context_error(self):
        with patch("vector_gallery.raster_encoder.mpimg.imsave", side_effect=OSError("no surface")):
            with pytest.raises(RasterContextError, match="no surface"):
                encode_raster(np.arange(4, dtype=np.uint8))


class TestEncodePng:
    def test_empty_grid_raises(self):
        with pytest.raises(RasterContextError):
            encode_png(np.zeros((0, 3, 4), dtype=np.uint8))
