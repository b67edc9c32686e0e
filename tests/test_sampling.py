import numpy as np
import pytest
from PIL import Image

from asciicanvas.sampling import adjust_contrast, downsample, glyph_indices, grid_rows, luminance


def test_luminance_weights():
    samples = np.array([[[255, 0, 0], [0, 255, 0], [0, 0, 255], [10, 200, 30]]], dtype=np.uint8)
    result = luminance(samples)
    np.testing.assert_allclose(result[0], [76.245, 149.685, 29.07, 0.299 * 10 + 0.587 * 200 + 0.114 * 30])


def test_luminance_grey_is_exact():
    levels = np.arange(256, dtype=np.uint8)
    samples = np.repeat(levels[None, :, None], 3, axis=2)
    np.testing.assert_array_equal(luminance(samples)[0], levels.astype(np.float64))


def test_contrast_one_is_identity():
    values = np.linspace(0.0, 255.0, 511)
    np.testing.assert_array_equal(adjust_contrast(values, 1.0), values)


def test_contrast_clamps():
    result = adjust_contrast(np.array([0.0, 64.0, 128.0, 192.0, 255.0]), 4.0)
    np.testing.assert_array_equal(result, [0.0, 0.0, 128.0, 255.0, 255.0])


def test_contrast_below_one_flattens():
    result = adjust_contrast(np.array([0.0, 255.0]), 0.5)
    np.testing.assert_array_equal(result, [64.0, 191.5])


def test_glyph_indices_boundaries():
    indices = glyph_indices(np.array([0.0, 255.0]), 10)
    assert indices.tolist() == [9, 0]


@pytest.mark.parametrize("contrast", [0.1, 0.5, 1.0, 2.0, 3.0])
def test_glyph_indices_never_denser_for_brighter(contrast):
    adjusted = adjust_contrast(np.arange(256, dtype=np.float64), contrast)
    indices = glyph_indices(adjusted, 70)
    assert np.all(np.diff(indices) <= 0)
    assert indices.min() >= 0
    assert indices.max() <= 69


def test_grid_rows():
    assert grid_rows(120, 800, 600) == 45
    assert grid_rows(10, 1000, 10) == 1
    assert grid_rows(1, 1, 1) == 1


def test_downsample_shape_and_average():
    img = Image.new("RGB", (4, 2))
    pixels = img.load()
    for y in range(2):
        pixels[0, y] = (0, 0, 0)
        pixels[1, y] = (0, 0, 0)
        pixels[2, y] = (200, 100, 50)
        pixels[3, y] = (200, 100, 50)
    samples = downsample(img, 2, 1)
    assert samples.shape == (1, 2, 3)
    assert samples.dtype == np.uint8
    assert samples[0, 0].tolist() == [0, 0, 0]
    assert samples[0, 1].tolist() == [200, 100, 50]
