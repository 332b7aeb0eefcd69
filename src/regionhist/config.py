#!/usr/bin/env python3
"""Configuration dataclass for region histogram computation."""

from __future__ import annotations

from dataclasses import dataclass

from .models import Region


@dataclass
class HistogramConfig:
    """Shared settings for computing region signatures."""

    # Binning
    bins_per_channel: int = 16
    range_min: float | None = None  # None = lowest value of the component type
    range_max: float | None = None  # None = highest value of the component type

    # Region (None = whole image)
    region: Region | None = None

    # Parallelism (None = sequential, one channel at a time)
    num_workers: int | None = None

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        if self.bins_per_channel < 1:
            msg = f"bins_per_channel must be >= 1, got {self.bins_per_channel}"
            raise ValueError(msg)
        if (
            self.range_min is not None
            and self.range_max is not None
            and self.range_min > self.range_max
        ):
            msg = f"range_min must not exceed range_max, got [{self.range_min}, {self.range_max}]"
            raise ValueError(msg)
        if self.num_workers is not None and self.num_workers < 1:
            msg = f"num_workers must be >= 1, got {self.num_workers}"
            raise ValueError(msg)
