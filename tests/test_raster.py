"""Tests for distbake.raster.

Run:
    pytest tests/test_raster.py -v
"""

import numpy as np
import pytest
from PIL import Image

from distbake.raster import RasterError, aspect_ratio, open_image, rasterize, save_grayscale


def test_rasterize_pads_by_radius():
    img = Image.new("L", (40, 20), 255)
    source, size = rasterize(img, 80, 3)
    assert size == (80, 40)
    assert source.shape == (40 + 6, 80 + 6)
    assert source.dtype == np.uint8


def test_padding_repeats_border():
    img = Image.new("L", (10, 10), 255)
    img.paste(0, (0, 0, 5, 10))
    source, _ = rasterize(img, 10, 2)
    assert np.all(source[:, :2] == 0)
    assert np.all(source[:, -2:] == 255)


def test_transparent_background_is_white():
    img = Image.new("RGBA", (8, 8), (0, 0, 0, 0))
    img.paste((0, 0, 0, 255), (2, 2, 6, 6))
    source, _ = rasterize(img, 8, 1)
    assert source[0, 0] == 255
    assert source[4, 4] == 0


def test_aspect_ratio():
    assert aspect_ratio(Image.new("L", (300, 100))) == 3.0


def test_open_image_missing(tmp_path):
    with pytest.raises(RasterError):
        open_image(str(tmp_path / "missing.png"))


def test_open_image_not_an_image(tmp_path):
    path = tmp_path / "junk.png"
    path.write_text("not a png")
    with pytest.raises(RasterError):
        open_image(str(path))


def test_save_grayscale_is_lossless(tmp_path):
    buffer = np.arange(200, dtype=np.uint8).reshape(10, 20)
    path = tmp_path / "field.png"
    save_grayscale(buffer, str(path))

    with Image.open(path) as img:
        assert img.mode == "L"
        np.testing.assert_array_equal(np.array(img), buffer)


def test_transparent_background_is_black_when_negated():
    img = Image.new("RGBA", (8, 8), (0, 0, 0, 0))
    img.paste((255, 255, 255, 255), (2, 2, 6, 6))
    source, _ = rasterize(img, 8, 1, negate=True)
    assert source[0, 0] == 0
    assert source[4, 4] == 255
