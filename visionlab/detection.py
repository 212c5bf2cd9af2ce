"""Colour detection: HSV segmentation, colour-distance masks and blob tracking."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from visionlab.colorspace import bgr_to_hsv, split_channels

__all__ = [
    "threshold",
    "detect_hs_color",
    "apply_mask",
    "color_distance",
    "ColorDetector",
    "in_range",
    "morphology_open",
    "centroid",
    "HsvRange",
    "Detection",
    "ColorTracker",
]

_ON = 255


def threshold(channel, thresh: float, inverse: bool = False) -> np.ndarray:
    """Binary threshold: 255 where the value exceeds *thresh* (or does not, if *inverse*)."""
    arr = np.asarray(channel)
    above = arr > thresh
    selected = ~above if inverse else above
    return np.where(selected, _ON, 0).astype(np.uint8)


def detect_hs_color(image, min_hue: float, max_hue: float, min_sat: float, max_sat: float) -> np.ndarray:
    """Return a mask of the pixels of a BGR image whose hue and saturation fall in range.

    When *min_hue* is not below *max_hue* the hue range wraps around zero.
    """
    hue, sat, _ = split_channels(bgr_to_hsv(image))

    below_max = threshold(hue, max_hue, inverse=True)
    above_min = threshold(hue, min_hue)
    if min_hue < max_hue:
        hue_mask = below_max & above_min
    else:
        hue_mask = below_max | above_min

    sat_mask = threshold(sat, max_sat, inverse=True) & threshold(sat, min_sat)
    return hue_mask & sat_mask


def apply_mask(image, mask) -> np.ndarray:
    """Return a copy of *image* that is black wherever *mask* is zero."""
    arr = np.asarray(image)
    selector = np.asarray(mask)
    if selector.shape != arr.shape[:2]:
        raise ValueError(f"mask shape {selector.shape} does not match image shape {arr.shape[:2]}")
    out = np.zeros_like(arr)
    keep = selector != 0
    out[keep] = arr[keep]
    return out


def color_distance(color1, color2) -> int:
    """Return the city-block distance between two colours."""
    a = np.asarray(color1, dtype=np.int64)
    b = np.asarray(color2, dtype=np.int64)
    if a.shape != b.shape:
        raise ValueError("colours must have the same number of components")
    return int(np.abs(a - b).sum())


class ColorDetector:
    """Marks the pixels lying closer than a threshold to a target BGR colour."""

    def __init__(self, target=(0, 0, 0), max_distance: int = 100):
        if len(target) != 3:
            raise ValueError("target must have three components")
        self.target = tuple(int(c) for c in target)
        self.max_distance = max(int(max_distance), 0)

    def distance_to_target(self, color) -> int:
        """Return the city-block distance from *color* to the target colour."""
        return color_distance(color, self.target)

    def process(self, image) -> np.ndarray:
        """Return a mask, 255 where a pixel is within the distance threshold."""
        arr = np.asarray(image)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"expected an image of shape (rows, cols, 3), got {arr.shape}")
        diff = np.abs(arr.astype(np.int64) - np.asarray(self.target, dtype=np.int64))
        return np.where(diff.sum(axis=2) < self.max_distance, _ON, 0).astype(np.uint8)


def in_range(image, lower, upper) -> np.ndarray:
    """Return a mask, 255 where every channel lies within [lower, upper] inclusive."""
    arr = np.asarray(image)
    lo = np.asarray(lower, dtype=np.float64)
    hi = np.asarray(upper, dtype=np.float64)
    if arr.ndim == 2:
        lo = lo.ravel()[0] if lo.ndim else lo
        hi = hi.ravel()[0] if hi.ndim else hi
        inside = (arr >= lo) & (arr <= hi)
    elif arr.ndim == 3:
        if lo.size != arr.shape[2] or hi.size != arr.shape[2]:
            raise ValueError("bounds must have one value per channel")
        inside = ((arr >= lo) & (arr <= hi)).all(axis=2)
    else:
        raise ValueError(f"expected a 2-D or 3-D image, got {arr.ndim} dimensions")
    return np.where(inside, _ON, 0).astype(np.uint8)


def _window_reduce(arr: np.ndarray, size: int, fill, reducer) -> np.ndarray:
    anchor = size // 2
    pad = ((anchor, size - 1 - anchor), (anchor, size - 1 - anchor))
    padded = np.pad(arr, pad, mode="constant", constant_values=fill)
    windows = sliding_window_view(padded, (size, size))
    return reducer(windows, axis=(-2, -1))


def morphology_open(mask, size: int = 5) -> np.ndarray:
    """Erode then dilate a single-channel image with a *size* x *size* square."""
    size = int(size)
    if size < 1:
        raise ValueError("size must be at least 1")
    arr = np.asarray(mask)
    if arr.ndim != 2:
        raise ValueError("morphology applies to single-channel images only")
    if np.issubdtype(arr.dtype, np.integer):
        info = np.iinfo(arr.dtype)
        high, low = info.max, info.min
    else:
        high, low = np.inf, -np.inf
    eroded = _window_reduce(arr, size, high, np.min)
    return _window_reduce(eroded, size, low, np.max).astype(arr.dtype)


def centroid(mask) -> tuple[float, int, int] | None:
    """Return ``(area, x, y)`` from the raw image moments, or None for an empty mask.

    The area is the zeroth moment, i.e. the sum of pixel values; the coordinates
    are truncated to integers.
    """
    arr = np.asarray(mask, dtype=np.float64)
    if arr.ndim != 2:
        raise ValueError("moments apply to single-channel images only")
    m00 = arr.sum()
    if m00 == 0:
        return None
    rows, cols = np.indices(arr.shape)
    m10 = (arr * cols).sum()
    m01 = (arr * rows).sum()
    return float(m00), int(m10 / m00), int(m01 / m00)


@dataclass(frozen=True)
class HsvRange:
    """Inclusive bounds on hue, saturation and value."""

    min_h: int = 0
    max_h: int = 0
    min_s: int = 0
    max_s: int = 0
    min_v: int = 0
    max_v: int = 0

    @property
    def lower(self) -> tuple[int, int, int]:
        return (self.min_h, self.min_s, self.min_v)

    @property
    def upper(self) -> tuple[int, int, int]:
        return (self.max_h, self.max_s, self.max_v)


@dataclass(frozen=True)
class Detection:
    """A tracked blob: its code, label, centroid and zeroth moment."""

    code: str
    label: str
    x: int
    y: int
    area: float


class ColorTracker:
    """Finds a colour blob in an HSV image and reports where it is."""

    def __init__(self, hsv_range: HsvRange, code: str, label: str, min_area: float = 5000):
        self.hsv_range = hsv_range
        self.code = code
        self.label = label
        self.min_area = min_area

    def process(self, hsv_image) -> Detection | None:
        """Return the blob detected in *hsv_image*, or None if its area is too small."""
        mask = in_range(hsv_image, self.hsv_range.lower, self.hsv_range.upper)
        mask = morphology_open(mask, 5)
        found = centroid(mask)
        if found is None:
            return None
        area, x, y = found
        if area <= self.min_area:
            return None
        return Detection(self.code, self.label, x, y, area)