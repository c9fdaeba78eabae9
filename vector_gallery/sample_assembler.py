"""
sample_assembler.py - Build display-ready gallery samples from raw rows.

Each row is decoded independently, so rows can be spread across a
thread pool; results are always returned in original row order.
"""

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from vector_gallery.errors import RasterContextError
from vector_gallery.raster_encoder import RasterImage, encode_raster
from vector_gallery.row_parser import RawRow
from vector_gallery.vector_decoder import decode_vector

logger = logging.getLogger(__name__)

PREVIEW_TOKENS = 7
PREVIEW_MARKER = "..."
ON_ERROR_CHOICES = ("placeholder", "omit")


@dataclass(frozen=True)
class Sample:
    """One decoded gallery entry."""
    id: int
    vector: str
    vector_preview: str
    label: str
    image: Optional[RasterImage] = None
    error: Optional[str] = None   # set when the image could not be rendered

    @property
    def ok(self) -> bool:
        return self.image is not None


def vector_preview(vector_text: str) -> str:
    """
    First PREVIEW_TOKENS raw tokens joined by ", " plus the marker.

    The marker is appended even when the vector is shorter than
    PREVIEW_TOKENS.
    """
    tokens = vector_text.split(",")[:PREVIEW_TOKENS]
    return ", ".join(tokens) + PREVIEW_MARKER


def build_sample(index: int, row: RawRow) -> Sample:
    """
    Decode one row into a Sample.

    A RasterContextError does not propagate: the sample comes back with
    ``image=None`` and the error message so it can be shown as a
    placeholder.
    """
    preview = vector_preview(row.vector_text)
    try:
        image = encode_raster(decode_vector(row.vector_text))
    except RasterContextError as exc:
        logger.warning("Row %d (line %d): %s", index, row.line_number, exc)
        return Sample(
            id=index,
            vector=row.vector_text,
            vector_preview=preview,
            label=row.label_text,
            error=str(exc),
        )

    return Sample(
        id=index,
        vector=row.vector_text,
        vector_preview=preview,
        label=row.label_text,
        image=image,
    )


def assemble_samples(
    rows: list[RawRow],
    limit: Optional[int] = 5,
    max_workers: Optional[int] = None,
    on_error: str = "placeholder",
) -> list[Sample]:
    """
    Turn the first *limit* rows into Samples with ids 0..count-1.

    Parameters
    ----------
    rows : list[RawRow]
        Parsed rows, in file order.
    limit : int, optional
        Maximum number of samples.  None keeps every row.
    max_workers : int, optional
        Decode rows on a thread pool of this size when > 1.
    on_error : str
        "placeholder" keeps failed rasters as image-less samples;
        "omit" drops them and renumbers the remaining ids densely.

    Returns
    -------
    list[Sample]
    """
    if on_error not in ON_ERROR_CHOICES:
        raise ValueError(
            f"Unknown on_error '{on_error}'. Choose from: {list(ON_ERROR_CHOICES)}"
        )
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got limit={limit}.")

    selected = list(rows) if limit is None else list(rows)[:limit]

    if max_workers is not None and max_workers > 1 and len(selected) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            samples = list(pool.map(build_sample, range(len(selected)), selected))
    else:
        samples = [build_sample(i, row) for i, row in enumerate(selected)]

    if on_error == "omit":
        kept = [s for s in samples if s.ok]
        samples = [dataclasses.replace(s, id=i) for i, s in enumerate(kept)]

    logger.debug("Assembled %d sample(s) from %d row(s).", len(samples), len(selected))
    return samples
