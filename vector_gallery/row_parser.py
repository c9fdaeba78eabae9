"""
row_parser.py - Split a quasi-CSV blob into raw (vector, label) rows.

The dataset format is NOT standard CSV.  Each data line looks like

    "12,40,255,...,7",Cataract

i.e. the pixel vector is wrapped in double quotes and contains commas,
while the label that follows is unquoted.  The csv module cannot be
used here because labels may themselves contain commas.

SPLIT RULES
-----------
1. Line starts with a quote: the vector ends at the first '",' after
   position 0.  If there is none, the vector ends at the LAST quote on
   the line and the label starts two characters later.
2. Line has no leading quote: split at the last comma.

The header line is always dropped.  These heuristics are kept exactly
as the dataset tooling defines them, surprising cases included.
"""

import logging
from dataclasses import dataclass

from vector_gallery.errors import RowFormatError

logger = logging.getLogger(__name__)

QUOTE = '"'


@dataclass(frozen=True)
class RawRow:
    """One data line split into its vector and label substrings."""
    vector_text: str
    label_text: str
    line_number: int = 0   # 1-based position in the blob (header is line 1)


def parse_line(line: str, line_number: int = 0) -> RawRow:
    """
    Split a single data line into a RawRow.

    Parameters
    ----------
    line : str
        One data line, without its line terminator.
    line_number : int
        Position of the line in the blob, for error reporting.

    Returns
    -------
    RawRow

    Raises
    ------
    RowFormatError
        If the line has neither a leading quote nor any comma.
    """
    if line.startswith(QUOTE):
        boundary = line.find('",', 1)
        if boundary != -1:
            return RawRow(line[1:boundary], line[boundary + 2:].strip(), line_number)

        # An unterminated quote leaves an empty vector; the raster stage
        # reports it.
        last_quote = line.rfind(QUOTE)
        return RawRow(line[1:last_quote], line[last_quote + 2:].strip(), line_number)

    last_comma = line.rfind(",")
    if last_comma == -1:
        raise RowFormatError(
            f"Line {line_number}: no quote or comma to split on",
            line_number=line_number,
            line=line,
        )
    return RawRow(line[:last_comma], line[last_comma + 1:].strip(), line_number)


def parse_rows(text: str) -> tuple[list[RawRow], list[RowFormatError]]:
    """
    Parse a header + rows blob into ordered RawRows.

    Malformed lines are skipped and returned alongside the good rows so
    that one bad line never aborts the batch.

    Parameters
    ----------
    text : str
        Full file contents.  The first line is the header.

    Returns
    -------
    rows : list[RawRow]
        One entry per well-formed data line, in file order.
    errors : list[RowFormatError]
        One entry per skipped line.
    """
    lines = text.strip().splitlines()
    if len(lines) < 2:
        return [], []

    rows: list[RawRow] = []
    errors: list[RowFormatError] = []

    for line_number, line in enumerate(lines[1:], start=2):
        try:
            rows.append(parse_line(line, line_number))
        except RowFormatError as exc:
            logger.warning("Skipping malformed row: %s", exc)
            errors.append(exc)

    logger.debug("Parsed %d row(s), skipped %d.", len(rows), len(errors))
    return rows, errors
