"""Neighbourhood and pixel filters: sharpening, normalisation, noise, blending, blur."""

from __future__ import annotations

import random

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

__all__ = ["sharpen", "normalize_rgb", "salt", "blend", "box_blur"]


def _fill_value(border, channels: int | None):
    values = list(np.atleast_1d(np.asarray(border, dtype=np.float64)))
    if channels is None:
        return values[0]
    values = (values + [0.0] * channels)[:channels]
    return np.asarray(values)


def sharpen(image, center: int = 5, border=0) -> np.ndarray:
    """Sharpen with a cross-shaped kernel: *center* times the pixel minus its four neighbours.

    Results saturate to 0..255. The outermost rows and columns are set to *border*,
    which is a scalar or a per-channel sequence (missing channels are zero).
    """
    arr = np.asarray(image)
    if arr.dtype != np.uint8 or arr.ndim not in (2, 3):
        raise ValueError("sharpen expects an 8-bit 2-D or 3-D image")
    src = arr.astype(np.int64)
    out = np.zeros_like(arr)
    if arr.shape[0] > 2 and arr.shape[1] > 2:
        core = (
            center * src[1:-1, 1:-1]
            - src[1:-1, :-2]
            - src[1:-1, 2:]
            - src[:-2, 1:-1]
            - src[2:, 1:-1]
        )
        out[1:-1, 1:-1] = np.clip(core, 0, 255).astype(np.uint8)
    fill = _fill_value(border, arr.shape[2] if arr.ndim == 3 else None)
    fill = np.clip(np.rint(fill), 0, 255).astype(np.uint8)
    if out.size:
        out[0] = fill
        out[-1] = fill
        out[:, 0] = fill
        out[:, -1] = fill
    return out


def normalize_rgb(image) -> np.ndarray:
    """Scale each pixel so its channels are fractions of their sum, times 255.

    Black pixels (sum zero) stay black.
    """
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"expected an image of shape (rows, cols, 3), got {arr.shape}")
    values = arr.astype(np.float64)
    total = values.sum(axis=2, keepdims=True)
    scaled = np.zeros_like(values)
    np.divide(values, total, out=scaled, where=total > 0)
    return np.clip(np.trunc(scaled * 255.0), 0, 255).astype(np.uint8)


_EVEN_COLOR = (255, 0, 255)
_ODD_COLOR = (0, 255, 0)


def salt(image, n: int, rng: random.Random | None = None) -> np.ndarray:
    """Return a copy with ``n + 1`` randomly placed dots.

    Dots alternate between white and black on grayscale images, and between
    magenta and green on colour images.
    """
    arr = np.asarray(image)
    if arr.ndim not in (2, 3) or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError("salt needs a non-empty 2-D or 3-D image")
    rng = rng if rng is not None else random.Random()
    out = arr.copy()
    rows, cols = arr.shape[:2]
    colour = arr.ndim == 3 and arr.shape[2] == 3
    for j in range(n + 1):
        x = rng.randrange(cols)
        y = rng.randrange(rows)
        even = j % 2 == 0
        if colour:
            out[y, x] = _EVEN_COLOR if even else _ODD_COLOR
        else:
            out[y, x] = 255 if even else 0
    return out


def blend(first, first_weight: float, second, second_weight: float) -> np.ndarray:
    """Return the weighted sum of two images, rounded and saturated to 8 bits."""
    a = np.asarray(first)
    b = np.asarray(second)
    if a.shape != b.shape:
        raise ValueError(f"image shapes differ: {a.shape} and {b.shape}")
    total = first_weight * a.astype(np.float64) + second_weight * b.astype(np.float64)
    return np.clip(np.rint(total), 0, 255).astype(np.uint8)


def box_blur(image, size: int = 5) -> np.ndarray:
    """Average each pixel over a *size* x *size* window, reflecting at the edges."""
    size = int(size)
    if size < 1:
        raise ValueError("size must be at least 1")
    arr = np.asarray(image)
    if arr.ndim not in (2, 3) or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError("box_blur needs a non-empty 2-D or 3-D image")
    before = size // 2
    after = size - 1 - before
    pad = [(before, after), (before, after)] + [(0, 0)] * (arr.ndim - 2)
    padded = np.pad(arr.astype(np.float64), pad, mode="reflect")
    windows = sliding_window_view(padded, (size, size), axis=(0, 1))
    mean = windows.mean(axis=(-2, -1))
    if arr.dtype == np.uint8:
        return np.clip(np.rint(mean), 0, 255).astype(np.uint8)
    return mean.astype(arr.dtype)