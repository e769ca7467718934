"""Tests for image export.

Tests cover:
- Gamma encoding of single channels and whole buffers
- ASCII P3 serialization
- PPM and PNG writers, including write failures
"""

import logging
import math

import numpy as np
import pytest
from PIL import Image as PILImage

from pathtracer.preview.export import (
    encode_ppm,
    image_to_uint8,
    save_image,
    save_png,
    save_ppm,
    to_int,
)


class TestToInt:
    """Tests for to_int."""

    @pytest.mark.parametrize(
        "value, expected",
        [(0.0, 0), (1.0, 255), (0.5, 186), (-0.5, 0), (3.0, 255), (math.inf, 255)],
    )
    def test_known_values(self, value, expected):
        """Test the encoding of reference values."""
        assert to_int(value) == expected

    def test_nan_is_black(self):
        """Test that NaN channels encode as zero."""
        assert to_int(math.nan) == 0

    def test_range_and_monotonicity(self):
        """Test that the encoding stays in [0, 255] and never decreases."""
        values = [to_int(x) for x in np.linspace(-0.5, 1.5, 501)]
        assert all(0 <= v <= 255 for v in values)
        assert values == sorted(values)

    def test_matches_formula(self):
        """Test int(x ** (1 / 2.2) * 255 + 0.5) inside the unit range."""
        for x in np.linspace(0.0, 1.0, 101):
            assert to_int(float(x)) == int(float(x) ** (1.0 / 2.2) * 255 + 0.5)


class TestImageToUint8:
    """Tests for image_to_uint8."""

    def test_matches_scalar_encoding(self):
        """Test the vectorized encoding against to_int."""
        rng = np.random.default_rng(0)
        image = rng.uniform(-0.2, 1.2, size=(6, 5, 3))
        image[0, 0, 0] = np.nan

        encoded = image_to_uint8(image)

        assert encoded.dtype == np.uint8
        assert encoded.shape == (6, 5, 3)
        expected = np.vectorize(lambda x: to_int(float(x)))(image)
        np.testing.assert_array_equal(encoded, expected)


class TestEncodePPM:
    """Tests for encode_ppm."""

    def test_header_and_body(self):
        """Test the exact text of a 2x1 image."""
        image = np.array([[[1.0, 0.0, 0.0], [0.0, 0.0, 1.0]]])
        assert encode_ppm(image) == "P3\n2 1\n255\n255 0 0 0 0 255 "

    def test_header_lists_width_then_height(self):
        """Test the dimension order for a tall image."""
        image = np.zeros((3, 2, 3))
        assert encode_ppm(image).startswith("P3\n2 3\n255\n")

    def test_row_major_order(self):
        """Test that rows are written one after another."""
        image = np.zeros((2, 2, 3))
        image[1, 0] = 1.0
        body = encode_ppm(image).split("\n", 3)[3]
        assert body == "0 0 0 0 0 0 255 255 255 0 0 0 "

    def test_one_triple_per_pixel(self):
        """Test the token count of the body."""
        image = np.full((4, 5, 3), 0.5)
        body = encode_ppm(image).split("\n", 3)[3]
        assert len(body.split()) == 4 * 5 * 3


class TestSavePPM:
    """Tests for save_ppm."""

    def test_writes_file(self, tmp_path):
        """Test a successful write."""
        path = tmp_path / "image.ppm"
        image = np.full((2, 3, 3), 0.25)

        assert save_ppm(image, path) is True
        assert path.read_text(encoding="ascii") == encode_ppm(image)

    def test_failure_is_logged_not_raised(self, tmp_path, caplog):
        """Test that an unwritable path returns False and logs an error."""
        path = tmp_path / "missing" / "image.ppm"

        with caplog.at_level(logging.ERROR, logger="pathtracer.preview.export"):
            assert save_ppm(np.zeros((1, 1, 3)), path) is False

        assert not path.exists()
        assert any("Could not write image" in record.message for record in caplog.records)


class TestSavePNG:
    """Tests for save_png."""

    def test_round_trip(self, tmp_path):
        """Test that the PNG holds the gamma-encoded pixels."""
        path = tmp_path / "image.png"
        image = np.random.default_rng(3).uniform(0.0, 1.0, size=(4, 6, 3))

        assert save_png(image, path) is True
        with PILImage.open(path) as loaded:
            assert loaded.mode == "RGB"
            assert loaded.size == (6, 4)
            np.testing.assert_array_equal(np.asarray(loaded), image_to_uint8(image))

    def test_failure_is_logged_not_raised(self, tmp_path, caplog):
        """Test that an unwritable path returns False."""
        path = tmp_path / "missing" / "image.png"
        with caplog.at_level(logging.ERROR, logger="pathtracer.preview.export"):
            assert save_png(np.zeros((1, 1, 3)), path) is False
        assert caplog.records


class TestSaveImage:
    """Tests for save_image format selection."""

    @pytest.mark.parametrize("name", ["out.png", "out.PNG"])
    def test_png_suffix(self, tmp_path, name):
        """Test that a .png suffix writes PNG."""
        path = tmp_path / name
        assert save_image(np.zeros((2, 2, 3)), path)
        assert path.read_bytes().startswith(b"\x89PNG")

    @pytest.mark.parametrize("name", ["out.ppm", "out", "out.txt"])
    def test_other_suffixes_write_ppm(self, tmp_path, name):
        """Test that anything else writes P3."""
        path = tmp_path / name
        assert save_image(np.zeros((2, 2, 3)), str(path))
        assert path.read_text().startswith("P3\n")
