"""
vector_decoder.py - Turn a comma-separated vector string into pixels.

Every token becomes one grayscale intensity in [0, 255].  Bad tokens are
not fatal: they decode to 0 and emit a NumericParseWarning.
"""

import logging
import re
import warnings

import numpy as np

from vector_gallery.errors import NumericParseWarning

logger = logging.getLogger(__name__)

PIXEL_MIN = 0
PIXEL_MAX = 255

# Leading signed base-10 integer, so "12.0" reads as 12.
_INT_PREFIX = re.compile(r"(?P<sign>[+-]?)(?P<digits>\d+)")


def parse_token(token: str) -> int:
    """
    Parse one vector token into a clamped intensity.

    Parameters
    ----------
    token : str
        Raw token, surrounding whitespace allowed.

    Returns
    -------
    int
        Value in [PIXEL_MIN, PIXEL_MAX].  Unparseable tokens give 0.
    """
    match = _INT_PREFIX.match(token.strip())
    if match is None:
        warnings.warn(
            f"Could not parse pixel token {token!r}; using 0.",
            NumericParseWarning,
            stacklevel=2,
        )
        return 0

    # Anything past three significant digits is out of range; int() would
    # also refuse very long digit strings.
    digits = match.group("digits").lstrip("0") or "0"
    if len(digits) > 3:
        return PIXEL_MIN if match.group("sign") == "-" else PIXEL_MAX

    value = int(match.group("sign") + digits)
    return min(PIXEL_MAX, max(PIXEL_MIN, value))


def decode_vector(vector_text: str) -> np.ndarray:
    """
    Decode a comma-separated vector into a flat uint8 pixel array.

    Parameters
    ----------
    vector_text : str
        Tokens separated by commas, e.g. ``"0, 12,255"``.

    Returns
    -------
    np.ndarray
        1-D uint8 array with one element per token, in original order.
        Empty (or whitespace-only) input gives an empty array.
    """
    if not vector_text.strip():
        return np.empty(0, dtype=np.uint8)

    tokens = vector_text.split(",")
    pixels = np.fromiter((parse_token(t) for t in tokens), dtype=np.uint8, count=len(tokens))
    logger.debug("Decoded %d pixel(s).", pixels.size)
    return pixels
