"""
pipeline.py - Quasi-CSV to gallery orchestrator.

Runs the four decode stages in order:

    parse_rows -> decode_vector -> encode_raster -> assemble_samples

over an in-memory text blob and returns a GalleryReport.  Reading the
blob from disk or the network happens before this, in the caller
(load_text is provided for the file case).

Per-row problems never abort the batch.  Malformed lines are skipped,
failed rasters become placeholders (or are omitted), and decode
warnings are counted in the report and logged at DEBUG only.
"""

import logging
import time
import warnings
from dataclasses import dataclass, field
from typing import Optional, Union

from vector_gallery.config import CONFIG
from vector_gallery.errors import (
    DimensionMismatchWarning,
    NumericParseWarning,
    RowFormatError,
)
from vector_gallery.row_parser import parse_rows
from vector_gallery.sample_assembler import Sample, assemble_samples

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass
class GalleryReport:
    """Aggregate report produced at the end of a decode run."""
    rows_parsed: int = 0
    rows_skipped: int = 0
    rendered: int = 0
    failed: int = 0
    numeric_warnings: int = 0
    dimension_warnings: int = 0
    elapsed_s: float = 0.0
    samples: list[Sample] = field(default_factory=list)
    row_errors: list[RowFormatError] = field(default_factory=list)

    def summary(self) -> str:
        lines = [
            "=" * 50,
            "GALLERY SUMMARY",
            "=" * 50,
            f"Rows parsed          : {self.rows_parsed}",
            f"Rows skipped         : {self.rows_skipped}",
            f"Samples rendered     : {self.rendered}",
            f"Samples failed       : {self.failed}",
            f"Bad pixel tokens     : {self.numeric_warnings}",
            f"Non-square vectors   : {self.dimension_warnings}",
            f"Total time           : {self.elapsed_s:.2f}s",
        ]
        if self.row_errors:
            lines.append("\nSkipped rows:")
            for err in self.row_errors:
                lines.append(f"  - {err}")
        failed = [s for s in self.samples if not s.ok]
        if failed:
            lines.append("\nFailed samples:")
            for s in failed:
                lines.append(f"  - sample {s.id} ({s.label}): {s.error}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

def load_text(path: str, encoding: str = "utf-8") -> str:
    """Read a quasi-CSV file from disk."""
    with open(path, "r", encoding=encoding) as f:
        return f.read()


def _as_text(blob: Union[str, bytes]) -> str:
    if isinstance(blob, str):
        return blob
    if isinstance(blob, (bytes, bytearray)):
        return bytes(blob).decode("utf-8")
    raise TypeError(
        f"Expected a text blob (str or UTF-8 bytes), got {type(blob).__name__}."
    )


# ---------------------------------------------------------------------------
# Core pipeline
# ---------------------------------------------------------------------------

def build_gallery(
    blob: Union[str, bytes],
    limit: Optional[int] = None,
    max_workers: Optional[int] = None,
    on_error: Optional[str] = None,
) -> GalleryReport:
    """
    Decode a quasi-CSV blob into gallery samples.

    Parameters
    ----------
    blob : str or bytes
        Header line followed by data lines.  Bytes are decoded as UTF-8.
    limit : int, optional
        Maximum number of samples.  Defaults to config value.
    max_workers : int, optional
        Thread pool size for per-row decoding.  Defaults to config value.
    on_error : str, optional
        "placeholder" or "omit".  Defaults to config value.

    Returns
    -------
    GalleryReport
        Samples plus counters for skipped rows, failures and warnings.

    Raises
    ------
    TypeError
        If *blob* is not text at all.
    """
    gallery_cfg = CONFIG["gallery"]
    limit = limit if limit is not None else gallery_cfg["limit"]
    max_workers = max_workers if max_workers is not None else gallery_cfg["max_workers"]
    on_error = on_error or gallery_cfg["on_error"]

    text = _as_text(blob)
    report = GalleryReport()
    start = time.time()

    rows, row_errors = parse_rows(text)
    report.rows_parsed = len(rows)
    report.rows_skipped = len(row_errors)
    report.row_errors = row_errors

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        samples = assemble_samples(
            rows, limit=limit, max_workers=max_workers, on_error=on_error,
        )

    for w in caught:
        if issubclass(w.category, NumericParseWarning):
            report.numeric_warnings += 1
        elif issubclass(w.category, DimensionMismatchWarning):
            report.dimension_warnings += 1
        else:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)
            continue
        logger.debug("%s: %s", w.category.__name__, w.message)

    report.samples = samples
    report.rendered = sum(1 for s in samples if s.ok)
    # Omitted samples are not in the list, so count against the rows selected.
    selected = len(rows) if limit is None else min(limit, len(rows))
    report.failed = selected - report.rendered
    report.elapsed_s = time.time() - start

    logger.info(
        "Gallery built: %d sample(s) from %d row(s), %d skipped, %d failed.",
        len(samples), report.rows_parsed, report.rows_skipped, report.failed,
    )
    return report
