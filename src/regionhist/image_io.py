"""Image loading via OpenCV."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import cv2
import numpy as np
import numpy.typing as npt

logger = logging.getLogger(__name__)


def load_image(path: str | Path) -> npt.NDArray[Any]:
    """Load an image with its native depth and channel count.

    Uses cv2.IMREAD_UNCHANGED, so 16-bit data and alpha channels are kept.
    Color channels come back in OpenCV's BGR(A) order.

    Args:
        path: Image file path.

    Returns:
        H x W or H x W x C array.

    Raises:
        FileNotFoundError: If the file is missing or can't be decoded.
    """
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        msg = f"Could not read image: {path}"
        raise FileNotFoundError(msg)
    logger.debug(f"Loaded {path}: shape={img.shape}, dtype={img.dtype}")
    return np.asarray(img)
