"""Numeric traits for pixel component types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True)
class ComponentTraits:
    """Properties of a pixel component dtype.

    Attributes:
        dtype: The component dtype.
        is_integral: Whether values are integers (or bools).
        min_value: Smallest intensity value of the type.
        max_value: Largest intensity value of the type.
    """

    dtype: np.dtype[Any]
    is_integral: bool
    min_value: int | float
    max_value: int | float


def component_traits(dtype: npt.DTypeLike) -> ComponentTraits:
    """Look up the traits of a component dtype.

    Integral types report their representable bounds. Floating types report
    the normalized intensity range [0.0, 1.0].

    Args:
        dtype: Any numpy dtype-like (np.uint8, "float32", an array's dtype, ...).

    Returns:
        ComponentTraits for the dtype.

    Raises:
        TypeError: If the dtype is not boolean, integral or floating.
    """
    dt = np.dtype(dtype)
    if dt.kind == "b":
        return ComponentTraits(dt, True, 0, 1)
    if dt.kind in "ui":
        info = np.iinfo(dt)
        return ComponentTraits(dt, True, int(info.min), int(info.max))
    if dt.kind == "f":
        return ComponentTraits(dt, False, 0.0, 1.0)
    msg = f"Unsupported pixel component type: {dt}"
    raise TypeError(msg)


def default_range(dtype: npt.DTypeLike) -> tuple[int | float, int | float]:
    """Default (range_min, range_max) for a component dtype."""
    traits = component_traits(dtype)
    return traits.min_value, traits.max_value


def resolve_range(
    dtype: npt.DTypeLike, range_min: Any = None, range_max: Any = None
) -> tuple[Any, Any]:
    """Fill whichever range bound is None from the dtype's default range."""
    low, high = default_range(dtype)
    return (
        low if range_min is None else range_min,
        high if range_max is None else range_max,
    )
