"""Colour reduction: quantise every 8-bit sample into buckets of a fixed width."""

from __future__ import annotations

import math

import numpy as np

__all__ = ["color_reduce", "color_reduce_inplace", "color_reduce_mask"]


def _check_div(div: int) -> int:
    div = int(div)
    if div < 1:
        raise ValueError("div must be a positive integer")
    return div


def _as_uint8(image) -> np.ndarray:
    arr = np.asarray(image)
    if arr.dtype != np.uint8:
        raise ValueError("colour reduction applies to 8-bit images only")
    return arr


def _reduced(arr: np.ndarray, div: int) -> np.ndarray:
    values = arr.astype(np.int64)
    # The sample is stored back into a byte, so results past 255 wrap around.
    return ((values // div * div + div // 2) & 0xFF).astype(np.uint8)


def color_reduce(image, div: int = 64) -> np.ndarray:
    """Return a copy with each sample replaced by the centre of its bucket of width *div*."""
    div = _check_div(div)
    return _reduced(_as_uint8(image), div)


def color_reduce_inplace(image: np.ndarray, div: int = 64) -> None:
    """Reduce the colours of *image* in place."""
    div = _check_div(div)
    if not isinstance(image, np.ndarray):
        raise TypeError("in-place reduction needs a numpy array")
    arr = _as_uint8(image)
    arr[...] = _reduced(arr, div)


def color_reduce_mask(image, div: int = 64) -> np.ndarray:
    """Reduce colours with a bit mask, rounding *div* to the nearest power of two.

    *div* must fit in a byte (1..255).
    """
    div = _check_div(div)
    if div > 255:
        raise ValueError("div must be at most 255")
    arr = _as_uint8(image)
    shift = int(math.log(div) / math.log(2.0) + 0.5)
    mask = (0xFF << shift) & 0xFF
    half = div >> 1
    values = arr.astype(np.int64)
    return (((values & mask) + half) & 0xFF).astype(np.uint8)