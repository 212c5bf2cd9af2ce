# visionlab

A small toolkit of classic image-processing operations on NumPy arrays.
Images are `uint8` arrays in BGR channel order (height × width × 3) or
single-channel grayscale (height × width).

## Modules

- **`visionlab.histogram`**: `histogram` gives the 256-bin histogram of the
  first channel of an image; `color_histograms` gives the blue, green and red
  histograms. `histogram_image` draws a histogram as black bars on a white
  square grayscale image, and `histogram_plot` as one-pixel coloured lines on
  a white BGR image; in both the tallest bin reaches 90 % of the height.
  `apply_lookup` maps an 8-bit image through a 256-entry table,
  `inversion_lut` returns the table `v -> 255 - v`, and `stretch` spreads the
  bins holding more than `min_value` pixels over 0..255.
- **`visionlab.colorspace`**: `bgr_to_hsv` (hue 0..179, saturation and value
  0..255), `hsv_to_bgr`, `bgr_to_gray` and `split_channels`.
- **`visionlab.colorreduce`**: `color_reduce` replaces each sample by the
  centre of its bucket of width `div` (default 64); `color_reduce_inplace`
  does the same to an array in place; `color_reduce_mask` uses a bit mask,
  rounding `div` (1..255) to the nearest power of two.
- **`visionlab.filters`**: `sharpen` (cross-shaped kernel, `center` times the
  pixel minus its four neighbours, saturated, outer rows and columns set to
  `border`), `normalize_rgb`, `salt` (places `n + 1` alternating dots: white
  and black on grayscale, magenta and green on colour images), `blend` (a
  weighted sum of two images, saturated to 8 bits) and `box_blur` (mean over
  a square window, reflecting at the edges).
- **`visionlab.detection`**: `threshold`, `detect_hs_color` (hue and
  saturation mask; the hue range wraps around zero when `min_hue` is not
  below `max_hue`), `apply_mask`, `color_distance` (city-block distance),
  `ColorDetector` (marks pixels closer than `max_distance` to a target
  colour), `in_range`, `morphology_open`, `centroid`, and `ColorTracker`,
  which opens an `in_range` mask of an `HsvRange` with a 5 × 5 square and
  returns a `Detection` (code, label, centroid, area) when the mask's zeroth
  moment exceeds `min_area` (default 5000).
- **`visionlab.serial_link`**: `SerialLink`, an 8N1 serial connection used as
  a context manager. An integer port names `COM<n>`; a string is passed to
  pyserial as given and may be a pyserial URL. `send` returns the number of
  bytes written, or 0 when the port is closed.
- **`visionlab.cli`**: `load_image` and `save_image` read and write image
  files as BGR or grayscale arrays, and `main` runs the command line.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using the library

```python
from visionlab.cli import load_image, save_image
from visionlab.histogram import histogram, histogram_image, stretch
from visionlab.colorreduce import color_reduce
from visionlab.filters import sharpen

gray = load_image("photo.jpg", True)

hist = histogram(gray)                    # 256 bin counts
save_image(histogram_image(hist, 2), "hist.png")
save_image(stretch(gray, 21), "stretched.png")

colour = load_image("photo.jpg", False)
save_image(color_reduce(colour, 64), "reduced.png")
save_image(sharpen(colour, 5, 0), "sharpened.png")
```

Tracking a colour and sending its code over a serial port:

```python
from visionlab.cli import load_image
from visionlab.colorspace import bgr_to_hsv
from visionlab.detection import ColorTracker, HsvRange
from visionlab.serial_link import SerialLink

tracker = ColorTracker(HsvRange(22, 24, 206, 235, 126, 200), "D", "Amarillo")
found = tracker.process(bgr_to_hsv(load_image("frame.png")))
if found is not None:
    with SerialLink(5, 9600) as link:
        link.send(found.code)
```

## Command line

```
visionlab --help
```

Subcommands:

- `histogram IMAGE [--output FILE] [--zoom N]`: prints each bin count of the
  grayscale image and the total, and optionally writes a plot.
- `stretch IMAGE OUTPUT [--min-value V] [--histogram FILE] [--zoom N]`:
  writes the contrast-stretched grayscale image, and optionally a plot of
  its histogram.
- `invert IMAGE OUTPUT [--gray]`: inverts the image through a lookup table.
- `salt IMAGE OUTPUT [--count N] [--seed S] [--gray]`: sprinkles random dots
  (the count defaults to 96789).
- `detect IMAGE OUTPUT [--target B G R] [--distance D]`: writes a mask of the
  pixels close to the target colour (default white, distance 100).
- `track IMAGE [--port PORT] [--baud BAUD]`: looks for twelve calibrated
  colours in the image and prints `code label x y` for each one found; with
  `--port`, each code is also sent to the serial port (default 9600 baud).

The command exits with status 1 and a message on standard error when a file
cannot be read or written or an argument is invalid.

## What it does not do

The package works on still images only. It does not capture from cameras or
read video files, it opens no windows to display results, and it has no
interactive calibration of colour ranges: the ranges used by `track` are
fixed, and other ranges are set by building an `HsvRange` in code.