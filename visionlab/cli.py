"""Command-line front end: histograms, stretching, lookup tables, noise and colour detection."""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

import numpy as np
from PIL import Image

from visionlab.colorspace import bgr_to_hsv
from visionlab.detection import ColorDetector, ColorTracker, HsvRange
from visionlab.filters import salt
from visionlab.histogram import (
    apply_lookup,
    histogram,
    histogram_image,
    inversion_lut,
    stretch,
)
from visionlab.serial_link import SerialLink

__all__ = ["load_image", "save_image", "main"]

DEFAULT_SALT_COUNT = 96789

# Calibrated colour ranges: (code, label, min H, max H, min S, max S, min V, max V).
_TRACKED_COLORS = (
    ("s", ".", 0, 180, 0, 255, 0, 19),
    ("C", "Rojo", 0, 180, 221, 255, 114, 156),
    ("c", "Rosa", 164, 180, 201, 226, 165, 215),
    ("D", "Amarillo", 22, 24, 206, 235, 126, 200),
    ("d", "Lila", 121, 133, 55, 109, 83, 126),
    ("E", "Celeste", 101, 116, 118, 155, 101, 134),
    ("F", "Guinda", 0, 4, 188, 242, 70, 100),
    ("f", "Cobalto", 106, 121, 151, 211, 0, 78),
    ("G", "Naranja", 4, 9, 214, 255, 139, 254),
    ("g", "Purpura", 153, 165, 143, 201, 68, 95),
    ("A", "Verde", 67, 79, 170, 255, 46, 76),
    ("a", "V.Limon", 29, 37, 143, 206, 105, 143),
)


def load_image(path, gray: bool = False) -> np.ndarray:
    """Read an image file as an 8-bit BGR array, or a single-channel array if *gray*."""
    with Image.open(Path(path)) as img:
        if gray:
            return np.asarray(img.convert("L"), dtype=np.uint8).copy()
        rgb = np.asarray(img.convert("RGB"), dtype=np.uint8)
    return rgb[..., ::-1].copy()


def save_image(image, path) -> None:
    """Write a grayscale or BGR 8-bit array to an image file; the format follows the suffix."""
    arr = np.asarray(image)
    if arr.dtype != np.uint8:
        raise ValueError("only 8-bit images can be saved")
    if arr.ndim == 2:
        Image.fromarray(arr, mode="L").save(Path(path))
    elif arr.ndim == 3 and arr.shape[2] == 3:
        Image.fromarray(np.ascontiguousarray(arr[..., ::-1]), mode="RGB").save(Path(path))
    else:
        raise ValueError(f"cannot save an image of shape {arr.shape}")


def _trackers() -> list[ColorTracker]:
    return [
        ColorTracker(HsvRange(min_h, max_h, min_s, max_s, min_v, max_v), code, label)
        for code, label, min_h, max_h, min_s, max_s, min_v, max_v in _TRACKED_COLORS
    ]


def _cmd_histogram(args) -> int:
    image = load_image(args.image, gray=True)
    hist = histogram(image)
    for value, count in enumerate(hist):
        print(f"value {value} = {int(count)}")
    print(f"total {int(hist.sum())}")
    if args.output:
        save_image(histogram_image(hist, args.zoom), args.output)
    return 0


def _cmd_stretch(args) -> int:
    image = load_image(args.image, gray=True)
    result = stretch(image, args.min_value)
    save_image(result, args.output)
    if args.histogram:
        save_image(histogram_image(histogram(result), args.zoom), args.histogram)
    return 0


def _cmd_invert(args) -> int:
    image = load_image(args.image, gray=args.gray)
    save_image(apply_lookup(image, inversion_lut()), args.output)
    return 0


def _cmd_salt(args) -> int:
    image = load_image(args.image, gray=args.gray)
    rng = random.Random(args.seed)
    print(f"n = {args.count}")
    save_image(salt(image, args.count, rng), args.output)
    return 0


def _cmd_detect(args) -> int:
    image = load_image(args.image)
    detector = ColorDetector(tuple(args.target), args.distance)
    save_image(detector.process(image), args.output)
    return 0


def _report(detections, link: SerialLink | None) -> None:
    for found in detections:
        print(f"{found.code} {found.label} {found.x} {found.y}")
        if link is not None:
            link.send(found.code)


def _cmd_track(args) -> int:
    hsv = bgr_to_hsv(load_image(args.image))
    detections = [d for d in (t.process(hsv) for t in _trackers()) if d is not None]
    if args.port is None:
        _report(detections, None)
        return 0
    port = int(args.port) if args.port.isdigit() else args.port
    with SerialLink(port, args.baud) as link:
        _report(detections, link)
    return 0


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="visionlab", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("histogram", help="print the histogram of a grayscale image")
    p.add_argument("image")
    p.add_argument("--output", help="write a plot of the histogram here")
    p.add_argument("--zoom", type=int, default=1)
    p.set_defaults(func=_cmd_histogram)

    p = sub.add_parser("stretch", help="stretch the contrast of a grayscale image")
    p.add_argument("image")
    p.add_argument("output")
    p.add_argument("--min-value", type=float, default=0)
    p.add_argument("--histogram", help="write a plot of the stretched histogram here")
    p.add_argument("--zoom", type=int, default=1)
    p.set_defaults(func=_cmd_stretch)

    p = sub.add_parser("invert", help="invert an image through a lookup table")
    p.add_argument("image")
    p.add_argument("output")
    p.add_argument("--gray", action="store_true")
    p.set_defaults(func=_cmd_invert)

    p = sub.add_parser("salt", help="sprinkle random dots over an image")
    p.add_argument("image")
    p.add_argument("output")
    p.add_argument("--count", type=int, default=DEFAULT_SALT_COUNT)
    p.add_argument("--seed", type=int)
    p.add_argument("--gray", action="store_true")
    p.set_defaults(func=_cmd_salt)

    p = sub.add_parser("detect", help="mask pixels close to a target colour")
    p.add_argument("image")
    p.add_argument("output")
    p.add_argument("--target", type=int, nargs=3, default=[255, 255, 255], metavar=("B", "G", "R"))
    p.add_argument("--distance", type=int, default=100)
    p.set_defaults(func=_cmd_detect)

    p = sub.add_parser("track", help="find calibrated colours and report their codes")
    p.add_argument("image")
    p.add_argument("--port", help="serial port number or device to send codes to")
    p.add_argument("--baud", type=int, default=9600)
    p.set_defaults(func=_cmd_track)

    return parser


def main(argv=None) -> int:
    """Run the command line and return its exit status."""
    args = _parser().parse_args(argv)
    try:
        return args.func(args)
    except (OSError, ValueError) as err:
        print(f"visionlab: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())