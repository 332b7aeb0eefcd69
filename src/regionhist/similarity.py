#!/usr/bin/env python3
"""Histogram intersection similarity."""

from __future__ import annotations

import logging
from typing import Protocol

import numpy as np
import numpy.typing as npt

logger = logging.getLogger(__name__)

_BATCH_NDIM = 2


class SimilarityMetric(Protocol):
    """Protocol defining the interface for histogram similarity metrics."""

    def compute_similarity(self, hist1: npt.ArrayLike, hist2: npt.ArrayLike) -> float:
        """Compare two histograms.

        Args:
            hist1: Reference histogram.
            hist2: Histogram to compare against the reference.

        Returns:
            Similarity score (higher = more similar).
        """
        ...

    def compute_batch_similarity(
        self, reference: npt.ArrayLike, candidates: npt.ArrayLike
    ) -> npt.NDArray[np.float32]:
        """Compare one reference histogram against many candidates.

        Args:
            reference: Reference histogram (bins,)
            candidates: Candidate histograms (N, bins)

        Returns:
            Array of similarities (N,)
        """
        ...


def histogram_intersection(hist1: npt.ArrayLike, hist2: npt.ArrayLike) -> float:
    """Normalized intersection of two histograms.

    Computes sum(min(hist1, hist2)) / sum(hist1). The normalization uses the
    first histogram only, so hist1 acts as the reference distribution and the
    score is not symmetric when the masses differ.

    Histograms of different lengths are a usage error: it is logged and the
    neutral score 0.0 is returned so a batch of comparisons can continue.

    Args:
        hist1: Reference histogram.
        hist2: Compared histogram.

    Returns:
        Score in [0, 1] for non-negative counts; nan if hist1 has no mass.
    """
    h1 = np.asarray(hist1, dtype=np.float64).ravel()
    h2 = np.asarray(hist2, dtype=np.float64).ravel()

    if h1.size != h2.size:
        logger.error(f"Histograms must be the same size! ({h1.size} vs {h2.size})")
        return 0.0

    total = h1.sum()
    if total == 0:
        logger.warning("Reference histogram has zero mass, intersection is undefined")

    intersection = np.minimum(h1, h2).sum()
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(intersection) / total)


def batch_histogram_intersection(
    reference: npt.ArrayLike, candidates: npt.ArrayLike
) -> npt.NDArray[np.float32]:
    """Vectorized intersection of one reference against a stack of candidates.

    Args:
        reference: Reference histogram (bins,)
        candidates: Candidate histograms (N, bins)

    Returns:
        Scores (N,), each normalized by the reference mass. Zeros if the
        candidate width does not match the reference.
    """
    ref = np.asarray(reference, dtype=np.float64).ravel()
    cands = np.asarray(candidates, dtype=np.float64)
    if cands.ndim == 1 and cands.size == 0:
        return np.zeros(0, dtype=np.float32)
    if cands.ndim != _BATCH_NDIM:
        cands = np.atleast_2d(cands)

    if cands.shape[1] != ref.size:
        logger.error(
            f"Histograms must be the same size! (reference {ref.size}, candidates {cands.shape[1]})"
        )
        return np.zeros(cands.shape[0], dtype=np.float32)

    total = ref.sum()
    if total == 0:
        logger.warning("Reference histogram has zero mass, intersection is undefined")

    intersections = np.minimum(cands, ref).sum(axis=1)
    with np.errstate(divide="ignore", invalid="ignore"):
        return (intersections / total).astype(np.float32)


class IntersectionSimilarity:
    """Histogram intersection as a metric object.

    Scores are normalized by the first (reference) histogram's mass.
    """

    def compute_similarity(self, hist1: npt.ArrayLike, hist2: npt.ArrayLike) -> float:
        return histogram_intersection(hist1, hist2)

    def compute_batch_similarity(
        self, reference: npt.ArrayLike, candidates: npt.ArrayLike
    ) -> npt.NDArray[np.float32]:
        return batch_histogram_intersection(reference, candidates)
