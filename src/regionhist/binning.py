"""Fixed-width binning of scalar value sequences."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from .models import RangeViolation

logger = logging.getLogger(__name__)

# Bin widths below this are treated as a collapsed range
_DEGENERATE_WIDTH = 1e-6


class RangeError(ValueError):
    """A sample fell outside the declared histogram range.

    Attributes:
        violation: Diagnostic details of the first offending sample.
    """

    def __init__(self, violation: RangeViolation):
        self.violation = violation
        super().__init__(violation.describe())


def bin_width(num_bins: int, range_min: float, range_max: float) -> float:
    """Width of each bin, computed in floating point."""
    return (float(range_max) - float(range_min)) / float(num_bins)


def _native_bounds(dtype: np.dtype[Any], range_min: Any, range_max: Any) -> tuple[Any, Any]:
    """Express the range bounds in the values' own dtype.

    Floating samples are compared against bounds rounded to their precision, so a
    float32 sample equal to float32(range_max) counts as the maximum. Integer
    bounds are kept as given so an out-of-type bound can't wrap around.
    """
    if np.issubdtype(dtype, np.floating):
        return dtype.type(range_min), dtype.type(range_max)
    return np.asarray(range_min), np.asarray(range_max)


def scalar_histogram(
    values: npt.ArrayLike,
    num_bins: int,
    range_min: Any,
    range_max: Any,
) -> npt.NDArray[np.float32]:
    """Count values into equal-width bins over [range_min, range_max].

    Values exactly equal to range_max land in the last bin; this is tested in
    the values' own dtype so the top of a bounded integer type (255 for uint8)
    is handled without any epsilon margin.

    A collapsed range (bin width ~0) yields all zeros without raising.

    Args:
        values: Scalar samples, any shape (flattened, order is irrelevant).
        num_bins: Number of bins (>= 1).
        range_min: Inclusive lower bound of the range.
        range_max: Inclusive upper bound of the range.

    Returns:
        Histogram of length num_bins (float32 counts).

    Raises:
        ValueError: If num_bins < 1.
        RangeError: If a sample maps outside [0, num_bins).
    """
    if num_bins < 1:
        msg = f"num_bins must be >= 1, got {num_bins}"
        raise ValueError(msg)

    bins = np.zeros(num_bins, dtype=np.float32)
    data = np.asarray(values).ravel()
    low, high = _native_bounds(data.dtype, range_min, range_max)

    width = bin_width(num_bins, low, high)
    if abs(width) < _DEGENERATE_WIDTH:
        logger.debug(f"Degenerate range [{range_min}, {range_max}], returning empty histogram")
        return bins

    if data.size == 0:
        return bins

    at_max = data == high
    with np.errstate(invalid="ignore"):
        inside = (data >= low) & (data <= high)
        positions = np.floor((data.astype(np.float64) - float(low)) / width)

    if not inside.all():
        first = int(np.argmin(inside))
        position = positions[first]
        violation = RangeViolation(
            value=float(data[first]),
            index=first,
            range_min=float(low),
            range_max=float(high),
            num_bins=num_bins,
            bin_index=int(position) if np.isfinite(position) else None,
            bin_width=width,
            num_values=int(data.size),
        )
        raise RangeError(violation)

    # In-range samples can only round onto the upper edge, never past it
    counted = np.clip(positions[~at_max], 0, num_bins - 1).astype(np.int64)
    bins += np.bincount(counted, minlength=num_bins).astype(np.float32)
    bins[-1] += np.count_nonzero(at_max)
    return bins
