"""
errors.py - Exception and warning types raised by the decode pipeline.

Failures are scoped to a single row: nothing here aborts a whole batch.
The warnings are informational and are captured per row by
vector_gallery.sample_assembler rather than shown to the end user.
"""


class GalleryError(Exception):
    """Base class for decode pipeline errors."""


class RowFormatError(GalleryError, ValueError):
    """A data line cannot be split into a vector and a label."""

    def __init__(self, message: str, line_number: int = 0, line: str = ""):
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class RasterContextError(GalleryError, RuntimeError):
    """No encoding surface could be acquired for a raster."""


class NumericParseWarning(UserWarning):
    """A vector token is not an integer and was replaced with 0."""


class DimensionMismatchWarning(UserWarning):
    """A vector is not a perfect square; its tail was dropped."""
