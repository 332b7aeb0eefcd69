"""Pydantic models for regions and binning diagnostics."""

from __future__ import annotations

from typing import Any

import numpy.typing as npt
from pydantic import BaseModel, Field


class Region(BaseModel):
    """Axis-aligned rectangle in pixel coordinates.

    Attributes:
        x: Column of the top-left corner.
        y: Row of the top-left corner.
        width: Number of columns covered.
        height: Number of rows covered.
    """
    x: int = Field(ge=0)
    y: int = Field(ge=0)
    width: int = Field(ge=1)
    height: int = Field(ge=1)

    @classmethod
    def full(cls, image: npt.NDArray[Any]) -> Region:
        """Region covering the whole image."""
        return cls(x=0, y=0, width=image.shape[1], height=image.shape[0])

    def slices(self) -> tuple[slice, slice]:
        """Return the (rows, cols) slice pair selecting this region."""
        return slice(self.y, self.y + self.height), slice(self.x, self.x + self.width)

    def fits(self, shape: tuple[int, ...]) -> bool:
        """Check whether the region lies inside an array of the given shape."""
        return self.y + self.height <= shape[0] and self.x + self.width <= shape[1]

    @property
    def area(self) -> int:
        return self.width * self.height


class RangeViolation(BaseModel):
    """Diagnostic record for a sample that falls outside the declared range.

    Attributes:
        value: The offending sample.
        index: Position of the sample in the value sequence.
        range_min: Declared lower bound.
        range_max: Declared upper bound.
        num_bins: Requested bin count.
        bin_index: Bin the sample mapped to (None when the position is not finite).
        bin_width: Width of each bin.
        num_values: Length of the value sequence.
        channel: Channel being binned, when known.
    """
    value: float
    index: int = Field(ge=0)
    range_min: float
    range_max: float
    num_bins: int = Field(ge=1)
    bin_index: int | None = None
    bin_width: float
    num_values: int = Field(ge=0)
    channel: int | None = None

    def describe(self) -> str:
        """Human readable multi-line description."""
        lines = [
            f"Can't write to bin {self.bin_index}!",
            f"There are {self.num_values} values.",
            f"Range min {self.range_min}",
            f"Range max {self.range_max}",
            f"values[i] (i = {self.index}) = {self.value}",
            f"Bin width {self.bin_width} ({self.num_bins} bins)",
        ]
        if self.channel is not None:
            lines.append(f"Channel {self.channel}")
        return "\n".join(lines)

