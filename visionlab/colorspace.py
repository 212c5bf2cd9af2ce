"""Colour-space conversions for 8-bit BGR images held as numpy arrays."""

from __future__ import annotations

import numpy as np

__all__ = ["bgr_to_hsv", "hsv_to_bgr", "bgr_to_gray", "split_channels"]


def _three_channel(image) -> np.ndarray:
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"expected an image of shape (rows, cols, 3), got {arr.shape}")
    return arr


def _round_to_uint8(values: np.ndarray) -> np.ndarray:
    return np.clip(np.floor(values + 0.5), 0, 255).astype(np.uint8)


def bgr_to_hsv(image) -> np.ndarray:
    """Convert a BGR image to HSV with hue in 0..179 and saturation/value in 0..255."""
    arr = _three_channel(image).astype(np.float64)
    b, g, r = arr[..., 0], arr[..., 1], arr[..., 2]
    v = arr.max(axis=2)
    diff = v - arr.min(axis=2)

    s = np.zeros_like(v)
    np.divide(diff * 255.0, v, out=s, where=v > 0)

    safe = np.where(diff > 0, diff, 1.0)
    h = np.where(
        v == r,
        60.0 * (g - b) / safe,
        np.where(v == g, 120.0 + 60.0 * (b - r) / safe, 240.0 + 60.0 * (r - g) / safe),
    )
    h = np.where(diff > 0, h, 0.0)
    h = np.where(h < 0, h + 360.0, h)
    hue = np.floor(h / 2.0 + 0.5) % 180

    return np.stack(
        [hue.astype(np.uint8), _round_to_uint8(s), _round_to_uint8(v)], axis=2
    )


def hsv_to_bgr(image) -> np.ndarray:
    """Convert an HSV image (hue 0..179, saturation/value 0..255) back to BGR."""
    arr = _three_channel(image).astype(np.float64)
    hue = arr[..., 0] * 2.0
    s = arr[..., 1] / 255.0
    v = arr[..., 2] / 255.0

    def component(n: float) -> np.ndarray:
        k = (n + hue / 60.0) % 6.0
        weight = np.clip(np.minimum(np.minimum(k, 4.0 - k), 1.0), 0.0, None)
        return (v - v * s * weight) * 255.0

    return np.stack(
        [_round_to_uint8(component(1)), _round_to_uint8(component(3)), _round_to_uint8(component(5))],
        axis=2,
    )


def bgr_to_gray(image) -> np.ndarray:
    """Convert a BGR image to a single-channel luminance image."""
    arr = _three_channel(image).astype(np.float64)
    luma = 0.114 * arr[..., 0] + 0.587 * arr[..., 1] + 0.299 * arr[..., 2]
    return _round_to_uint8(luma)


def split_channels(image) -> list[np.ndarray]:
    """Return the channels of an image as separate two-dimensional arrays."""
    arr = np.asarray(image)
    if arr.ndim == 2:
        return [arr.copy()]
    if arr.ndim != 3:
        raise ValueError(f"expected a 2-D or 3-D image, got {arr.ndim} dimensions")
    return [arr[..., k].copy() for k in range(arr.shape[2])]