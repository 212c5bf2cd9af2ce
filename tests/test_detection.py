import numpy as np
import pytest

from visionlab.detection import (
    ColorDetector,
    ColorTracker,
    Detection,
    HsvRange,
    apply_mask,
    centroid,
    color_distance,
    detect_hs_color,
    in_range,
    morphology_open,
    threshold,
)


def test_threshold_binary():
    channel = np.array([0, 10, 11, 255], dtype=np.uint8)
    assert threshold(channel, 10).tolist() == [0, 0, 255, 255]


def test_threshold_inverse_is_complement():
    channel = np.arange(256, dtype=np.uint8).reshape(16, 16)
    plain = threshold(channel, 100).astype(int)
    inverse = threshold(channel, 100, inverse=True).astype(int)
    assert (plain + inverse).tolist() == [[255] * 16] * 16


def _patch_image():
    image = np.zeros((4, 4, 3), dtype=np.uint8)
    image[:2] = (0, 0, 255)  # red
    image[2:] = (0, 255, 0)  # green
    return image


def test_detect_hs_color_wrapping_hue():
    mask = detect_hs_color(_patch_image(), 160, 5, 25, 255)
    assert mask[:2].tolist() == [[255] * 4] * 2
    assert mask[2:].tolist() == [[0] * 4] * 2


def test_detect_hs_color_saturation_limit_excludes():
    mask = detect_hs_color(_patch_image(), 160, 5, 25, 150)
    assert not mask.any()


def test_apply_mask_keeps_only_masked_pixels():
    image = np.full((3, 3, 3), 7, dtype=np.uint8)
    mask = np.zeros((3, 3), dtype=np.uint8)
    mask[1, 1] = 255
    out = apply_mask(image, mask)
    assert out[1, 1].tolist() == [7, 7, 7]
    assert out.sum() == image[1, 1].sum()


def test_apply_mask_shape_mismatch():
    with pytest.raises(ValueError):
        apply_mask(np.zeros((3, 3, 3)), np.zeros((2, 2)))


def test_color_distance_properties():
    a, b = (10, 200, 30), (250, 5, 60)
    assert color_distance(a, a) == 0
    assert color_distance(a, b) == color_distance(b, a)
    assert color_distance(a, b) <= color_distance(a, (0, 0, 0)) + color_distance((0, 0, 0), b)


def test_color_detector_white_target():
    image = np.zeros((2, 2, 3), dtype=np.uint8)
    image[0, 0] = (255, 255, 255)
    detector = ColorDetector((255, 255, 255), 100)
    mask = detector.process(image)
    assert mask[0, 0] == 255
    assert mask.sum() == 255
    assert detector.distance_to_target((255, 255, 255)) == 0


def test_color_detector_negative_distance_clamps():
    detector = ColorDetector((0, 0, 0), -5)
    assert detector.max_distance == 0
    assert not detector.process(np.zeros((2, 2, 3), dtype=np.uint8)).any()


def test_in_range_inclusive():
    image = np.array([[[10, 20, 30], [11, 20, 30]]], dtype=np.uint8)
    mask = in_range(image, (0, 20, 30), (10, 20, 30))
    assert mask[0, 0] == 255
    assert mask[0, 1] == 0


def test_in_range_bad_bounds():
    with pytest.raises(ValueError):
        in_range(np.zeros((2, 2, 3)), (0, 0), (1, 1))


def test_morphology_open_removes_speck_keeps_block():
    mask = np.zeros((20, 20), dtype=np.uint8)
    mask[1, 1] = 255
    mask[8:15, 8:15] = 255
    opened = morphology_open(mask, 5)
    assert opened[1, 1] == 0
    assert np.array_equal(opened[8:15, 8:15], mask[8:15, 8:15])
    assert opened.sum() == mask[8:15, 8:15].sum()


def test_morphology_open_full_mask_unchanged():
    mask = np.full((6, 6), 255, dtype=np.uint8)
    assert np.array_equal(morphology_open(mask, 5), mask)


def test_centroid_of_block():
    mask = np.zeros((10, 10), dtype=np.uint8)
    mask[2:5, 6:9] = 255
    area, x, y = centroid(mask)
    assert (x, y) == (7, 3)
    assert area == float(mask.sum())


def test_centroid_empty():
    assert centroid(np.zeros((3, 3))) is None


def test_tracker_finds_patch():
    hsv = np.zeros((40, 40, 3), dtype=np.uint8)
    hsv[10:19, 20:29] = (22, 220, 150)
    tracker = ColorTracker(HsvRange(22, 24, 206, 235, 126, 200), "D", "Amarillo")
    found = tracker.process(hsv)
    assert isinstance(found, Detection)
    assert (found.code, found.label) == ("D", "Amarillo")
    assert (found.x, found.y) == (24, 14)


def test_tracker_small_area_ignored():
    hsv = np.zeros((40, 40, 3), dtype=np.uint8)
    hsv[10:19, 20:29] = (22, 220, 150)
    tracker = ColorTracker(HsvRange(22, 24, 206, 235, 126, 200), "D", "Amarillo", min_area=10**9)
    assert tracker.process(hsv) is None


def test_hsv_range_bounds():
    rng = HsvRange(1, 2, 3, 4, 5, 6)
    assert rng.lower == (1, 3, 5)
    assert rng.upper == (2, 4, 6)