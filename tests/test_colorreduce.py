import numpy as np
import pytest

from visionlab.colorreduce import color_reduce, color_reduce_inplace, color_reduce_mask


def _sample_image():
    return np.arange(256, dtype=np.uint8).reshape(16, 16)


def test_color_reduce_pinned_values():
    image = np.array([[0, 63, 64, 255]], dtype=np.uint8)
    assert color_reduce(image, 64).tolist() == [[32, 32, 96, 224]]


@pytest.mark.parametrize("div", [2, 16, 22, 64, 128])
def test_color_reduce_values_are_bucket_centres(div):
    result = color_reduce(_sample_image(), div)
    allowed = {(k * div + div // 2) & 0xFF for k in range(256 // div + 1)}
    assert set(np.unique(result).tolist()) <= allowed


def test_color_reduce_keeps_input_and_shape():
    image = np.random.default_rng(1).integers(0, 256, (5, 7, 3), dtype=np.uint8)
    original = image.copy()
    result = color_reduce(image, 32)
    assert np.array_equal(image, original)
    assert result.shape == image.shape
    assert result.dtype == np.uint8


def test_color_reduce_is_idempotent():
    once = color_reduce(_sample_image(), 64)
    assert np.array_equal(color_reduce(once, 64), once)


def test_inplace_matches_copy():
    image = np.random.default_rng(2).integers(0, 256, (4, 6, 3), dtype=np.uint8)
    expected = color_reduce(image, 22)
    assert color_reduce_inplace(image, 22) is None
    assert np.array_equal(image, expected)


def test_inplace_rejects_non_array():
    with pytest.raises(TypeError):
        color_reduce_inplace([[1, 2, 3]], 4)


@pytest.mark.parametrize("div", [2, 4, 16, 64, 128])
def test_mask_equals_division_for_powers_of_two(div):
    image = _sample_image()
    assert np.array_equal(color_reduce_mask(image, div), color_reduce(image, div))


def test_mask_keeps_input():
    image = _sample_image()
    original = image.copy()
    color_reduce_mask(image, 64)
    assert np.array_equal(image, original)


@pytest.mark.parametrize("func", [color_reduce, color_reduce_mask])
def test_zero_div_rejected(func):
    with pytest.raises(ValueError):
        func(_sample_image(), 0)


def test_mask_div_must_fit_in_byte():
    with pytest.raises(ValueError):
        color_reduce_mask(_sample_image(), 256)


def test_non_uint8_rejected():
    with pytest.raises(ValueError):
        color_reduce(np.zeros((2, 2), dtype=np.float32), 64)