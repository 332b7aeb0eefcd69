"""Flat text export of histograms."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt

logger = logging.getLogger(__name__)


def format_histogram(histogram: npt.ArrayLike) -> str:
    """Render bin values in index order, each followed by a single space.

    Values are written in full positional form (1234567, not 1.23457e+06) with
    the shortest digits that read back to the same number.
    """
    values = np.asarray(histogram).ravel()
    if not np.issubdtype(values.dtype, np.floating):
        values = values.astype(np.float64)
    return "".join(f"{np.format_float_positional(v, trim='-')} " for v in values)


def write_histogram(histogram: npt.ArrayLike, filename: str | Path) -> None:
    """Write a histogram to a text file, truncating any existing content.

    Args:
        histogram: Bin values to write.
        filename: Destination path.
    """
    path = Path(filename)
    with path.open("w") as f:
        f.write(format_histogram(histogram))
    logger.debug(f"Wrote {np.asarray(histogram).size} bins to {path}")


def output_histogram(histogram: npt.ArrayLike, stream: TextIO | None = None) -> None:
    """Write a histogram to a stream (stdout by default)."""
    out = stream if stream is not None else sys.stdout
    out.write(format_histogram(histogram))


def read_histogram(filename: str | Path) -> npt.NDArray[np.float32]:
    """Read a histogram written by `write_histogram`.

    Args:
        filename: Path to a file of whitespace-separated numbers.

    Returns:
        Bin values as float32.

    Raises:
        ValueError: If a token is not a number.
    """
    path = Path(filename)
    tokens = path.read_text().split()
    try:
        values = [float(t) for t in tokens]
    except ValueError as e:
        msg = f"Malformed histogram file {path}: {e}"
        raise ValueError(msg) from e
    return np.array(values, dtype=np.float32)
