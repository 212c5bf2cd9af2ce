"""Intensity histograms, their plots, lookup tables and contrast stretching."""

from __future__ import annotations

import numpy as np

__all__ = [
    "histogram",
    "histogram_image",
    "histogram_plot",
    "color_histograms",
    "apply_lookup",
    "inversion_lut",
    "stretch",
]

BINS = 256
_PEAK_FRACTION = 0.9


def _bin_counts(channel: np.ndarray) -> np.ndarray:
    values = np.asarray(channel).ravel()
    if values.dtype == np.uint8:
        counts = np.bincount(values, minlength=BINS)
    else:
        values = values[(values >= 0) & (values < BINS)]
        counts = np.bincount(np.floor(values).astype(np.int64), minlength=BINS)
    return counts.astype(np.float32)


def histogram(image) -> np.ndarray:
    """Return the 256-bin histogram of the first channel of an image."""
    arr = np.asarray(image)
    if arr.ndim == 3:
        arr = arr[..., 0]
    elif arr.ndim != 2:
        raise ValueError(f"expected a 2-D or 3-D image, got {arr.ndim} dimensions")
    return _bin_counts(arr)


def color_histograms(image) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return the blue, green and red histograms of a BGR image."""
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] < 3:
        raise ValueError(f"expected a colour image, got shape {arr.shape}")
    return tuple(_bin_counts(arr[..., k]) for k in range(3))


def _bar_heights(hist) -> tuple[np.ndarray, list[tuple[int, int]]]:
    values = np.asarray(hist, dtype=np.float64).ravel()
    if values.size == 0:
        raise ValueError("histogram is empty")
    top = _PEAK_FRACTION * values.size
    peak = int(top)
    max_val = values.max()
    bars = [
        (int(i), int(values[i] * peak / max_val)) for i in np.flatnonzero(values > 0)
    ]
    return values, bars


def _draw_bars(canvas: np.ndarray, bars, size: int, zoom: int, width: int, value) -> None:
    bottom = size * zoom
    for index, intensity in bars:
        top = max((size - intensity) * zoom, 0)
        left = index * zoom
        canvas[top:bottom, left:left + width] = value


def _check_zoom(zoom: int) -> None:
    if zoom < 1:
        raise ValueError("zoom must be at least 1")


def histogram_image(hist, zoom: int = 1) -> np.ndarray:
    """Draw a histogram as black bars on a white square grayscale image.

    The tallest bin reaches 90 % of the image height.
    """
    _check_zoom(zoom)
    values, bars = _bar_heights(hist)
    size = values.size
    canvas = np.full((size * zoom, size * zoom), 255, dtype=np.uint8)
    _draw_bars(canvas, bars, size, zoom, zoom, 0)
    return canvas


def histogram_plot(hist, zoom: int = 1, color=(0, 0, 0)) -> np.ndarray:
    """Draw a histogram as one-pixel coloured lines on a white BGR image."""
    _check_zoom(zoom)
    if len(color) != 3:
        raise ValueError("color must have three components")
    values, bars = _bar_heights(hist)
    size = values.size
    canvas = np.full((size * zoom, size * zoom, 3), 255, dtype=np.uint8)
    _draw_bars(canvas, bars, size, zoom, 1, np.asarray(color, dtype=np.uint8))
    return canvas


def apply_lookup(image, lookup) -> np.ndarray:
    """Map every 8-bit pixel value through a 256-entry lookup table."""
    arr = np.asarray(image)
    if arr.dtype != np.uint8:
        raise ValueError("lookup tables apply to 8-bit images only")
    table = np.asarray(lookup).ravel()
    if table.size != BINS:
        raise ValueError(f"lookup table must have {BINS} entries, got {table.size}")
    return table[arr]


def inversion_lut() -> np.ndarray:
    """Return the lookup table that maps each value v to 255 - v."""
    return (255 - np.arange(BINS)).astype(np.uint8)


def stretch(image, min_value: float = 0) -> np.ndarray:
    """Stretch the intensity range so that bins above *min_value* span 0..255."""
    hist = histogram(image)
    above = np.flatnonzero(hist > min_value)
    if above.size:
        imin, imax = int(above[0]), int(above[-1])
    else:
        imin, imax = BINS, -1

    levels = np.arange(BINS)
    span = imax - imin
    if span > 0:
        scaled = np.rint(255.0 * (levels - imin) / span)
    else:
        scaled = np.zeros(BINS)
    lut = np.where(levels < imin, 0, np.where(levels > imax, 255, scaled))
    return apply_lookup(image, lut.astype(np.uint8))