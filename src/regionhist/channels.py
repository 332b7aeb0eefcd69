"""Per-channel histograms of image regions, concatenated into one signature."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Protocol

import numpy as np
import numpy.typing as npt

from .binning import RangeError, scalar_histogram
from .config import HistogramConfig
from .models import Region
from .numeric import resolve_range

logger = logging.getLogger(__name__)

_SCALAR_NDIM = 2
_MULTICHANNEL_NDIM = 3


class ImageSource(Protocol):
    """Protocol for reading channel values out of an image."""

    def channel_count(self, image: Any) -> int:
        """Number of components per pixel (>= 1)."""
        ...

    def extract_channel(self, image: Any, index: int) -> Any:
        """Return channel `index` as a single-channel image."""
        ...

    def values_in_region(self, scalar_image: Any, region: Region | None) -> npt.NDArray[Any]:
        """Return every pixel value of the region exactly once, in any order.

        Args:
            scalar_image: Single-channel image from extract_channel.
            region: Rectangle to read, or None for the whole image.
        """
        ...


class NumpyImageSource:
    """Image source for H x W and H x W x C numpy arrays."""

    def channel_count(self, image: npt.NDArray[Any]) -> int:
        if image.ndim == _SCALAR_NDIM:
            return 1
        if image.ndim == _MULTICHANNEL_NDIM:
            return int(image.shape[2])
        msg = f"Expected a 2D or 3D image array, got shape {image.shape}"
        raise ValueError(msg)

    def extract_channel(self, image: npt.NDArray[Any], index: int) -> npt.NDArray[Any]:
        count = self.channel_count(image)
        if not 0 <= index < count:
            msg = f"Channel {index} out of range for image with {count} channels"
            raise ValueError(msg)
        if image.ndim == _SCALAR_NDIM:
            return image
        return image[:, :, index]

    def values_in_region(
        self, scalar_image: npt.NDArray[Any], region: Region | None
    ) -> npt.NDArray[Any]:
        if region is None:
            return scalar_image.ravel()
        if not region.fits(scalar_image.shape):
            msg = f"Region {region} exceeds image bounds {scalar_image.shape[:2]}"
            raise ValueError(msg)
        rows, cols = region.slices()
        return scalar_image[rows, cols].ravel()


def _bin_channel(
    channel: int,
    values: npt.NDArray[Any],
    num_bins: int,
    range_min: Any,
    range_max: Any,
) -> npt.NDArray[np.float32]:
    """Histogram one channel, tagging range errors with the channel index."""
    try:
        return scalar_histogram(values, num_bins, range_min, range_max)
    except RangeError as e:
        violation = e.violation.model_copy(update={"channel": channel})
        raise RangeError(violation) from e


def channel_histograms(  # noqa: PLR0913
    image: Any,
    region: Region | None,
    bins_per_channel: int,
    range_min: Any = None,
    range_max: Any = None,
    source: ImageSource | None = None,
    num_workers: int | None = None,
) -> list[npt.NDArray[np.float32]]:
    """Compute one histogram per channel with a shared bin count and range.

    Args:
        image: Multi-channel image understood by `source`.
        region: Rectangle to histogram, or None for the whole image.
        bins_per_channel: Bins in each channel's histogram.
        range_min: Shared lower bound (None = from the component dtype).
        range_max: Shared upper bound (None = from the component dtype).
        source: Channel reader; defaults to NumpyImageSource.
        num_workers: Threads used to bin channels concurrently (None/1 = sequential).

    Returns:
        Per-channel histograms in ascending channel order.

    Raises:
        RangeError: If any channel has a sample outside the range. The
            violation records the channel; no partial result is returned.
    """
    src = source if source is not None else NumpyImageSource()
    count = src.channel_count(image)
    if count < 1:
        msg = f"Image must have at least one channel, got {count}"
        raise ValueError(msg)

    channel_values = [
        np.asarray(src.values_in_region(src.extract_channel(image, c), region))
        for c in range(count)
    ]

    if range_min is None or range_max is None:
        range_min, range_max = resolve_range(channel_values[0].dtype, range_min, range_max)

    worker = partial(
        _bin_channel, num_bins=bins_per_channel, range_min=range_min, range_max=range_max
    )

    if num_workers is None or num_workers <= 1 or count == 1:
        return [worker(c, values) for c, values in enumerate(channel_values)]

    logger.debug(f"Binning {count} channels with {num_workers} workers")
    with ThreadPoolExecutor(max_workers=num_workers) as pool:
        return list(pool.map(worker, range(count), channel_values))


def concatenated_histogram(  # noqa: PLR0913
    image: Any,
    region: Region | None,
    bins_per_channel: int,
    range_min: Any = None,
    range_max: Any = None,
    source: ImageSource | None = None,
    num_workers: int | None = None,
) -> npt.NDArray[np.float32]:
    """Concatenate per-channel histograms of a region into one signature.

    Segment k (length bins_per_channel) belongs to channel k. See
    `channel_histograms` for the arguments.

    Returns:
        Signature of length channels * bins_per_channel.
    """
    histograms = channel_histograms(
        image, region, bins_per_channel, range_min, range_max, source, num_workers
    )
    return np.concatenate(histograms)


def compute_signature(
    image: Any, cfg: HistogramConfig, source: ImageSource | None = None
) -> npt.NDArray[np.float32]:
    """Compute a region signature using the settings in `cfg`."""
    cfg.validate()
    return concatenated_histogram(
        image,
        cfg.region,
        cfg.bins_per_channel,
        cfg.range_min,
        cfg.range_max,
        source=source,
        num_workers=cfg.num_workers,
    )


def split_signature(
    signature: npt.ArrayLike, bins_per_channel: int
) -> list[npt.NDArray[np.float32]]:
    """Split a concatenated signature back into per-channel histograms.

    Raises:
        ValueError: If the signature length is not a multiple of bins_per_channel.
    """
    data = np.asarray(signature, dtype=np.float32).ravel()
    if bins_per_channel < 1 or data.size % bins_per_channel != 0:
        msg = f"Signature of length {data.size} can't be split into {bins_per_channel}-bin segments"
        raise ValueError(msg)
    return list(data.reshape(-1, bins_per_channel))
