"""Tests for packing pixel buffers into raster rows."""

import pytest

from ql_label.exceptions import BrotherQLRasterError
from ql_label.raster import BitmapPage, TwoColorPage, pack_grayscale, pack_grayscale_normal, pack_grayscale_wide, pack_rgb_two_color

WHITE = 255
BLACK = 0


class TestPackGrayscale:
    """Test grayscale packing."""

    def test_all_white(self):
        page = pack_grayscale_normal(128, 3, bytes([WHITE]) * 720 * 3)
        assert page.height == 3
        assert page.row_length == 90
        assert all(row == b"\x00" * 90 for row in page)

    def test_all_black(self):
        page = pack_grayscale_normal(128, 2, bytes([BLACK]) * 720 * 2)
        assert all(row == b"\xFF" * 90 for row in page)

    def test_wide_rows(self):
        page = pack_grayscale_wide(128, 1, bytes([WHITE]) * 1296)
        assert page.row_length == 162

    def test_threshold_is_inclusive(self):
        """Pixels equal to the threshold are printed, brighter ones aren't."""
        pixels = bytes([100, 101] + [WHITE] * 6)
        page = pack_grayscale(100, 8, 1, pixels)
        assert page.rows[0] == b"\x01"

    def test_rows_are_mirrored(self):
        """The first byte holds the last 8 pixels, the rightmost pixel in the top bit."""
        pixels = bytearray([WHITE] * 16)
        pixels[15] = BLACK
        assert pack_grayscale(128, 16, 1, bytes(pixels)).rows[0] == b"\x80\x00"

        pixels = bytearray([WHITE] * 16)
        pixels[0] = BLACK
        assert pack_grayscale(128, 16, 1, bytes(pixels)).rows[0] == b"\x00\x01"

    def test_rows_follow_the_lines(self):
        pixels = bytes([BLACK] * 8 + [WHITE] * 8)
        page = pack_grayscale(128, 8, 2, pixels)
        assert page.rows == (b"\xFF", b"\x00")

    def test_width_must_be_multiple_of_8(self):
        with pytest.raises(BrotherQLRasterError):
            pack_grayscale(128, 12, 1, bytes(12))

    def test_size_mismatch(self):
        with pytest.raises(BrotherQLRasterError):
            pack_grayscale_normal(128, 2, bytes(720))


class TestPackTwoColor:
    """Test splitting RGB buffers into black and red planes."""

    def test_red_and_black_pixels(self):
        rgb = bytearray([WHITE] * 8 * 3)
        rgb[0:3] = bytes([255, 0, 0])
        rgb[3:6] = bytes([0, 0, 0])
        page = pack_rgb_two_color(8, 1, bytes(rgb))
        assert page.red.rows[0] == b"\x01"
        assert page.black.rows[0] == b"\x02"

    def test_dark_red_is_black(self):
        """Not red enough for the red plane, dark enough for the black one."""
        rgb = bytes([150, 0, 0]) + bytes([WHITE] * 7 * 3)
        page = pack_rgb_two_color(8, 1, rgb)
        assert page.red.rows[0] == b"\x00"
        assert page.black.rows[0] == b"\x01"

    def test_white_is_unprinted(self):
        page = pack_rgb_two_color(720, 1, bytes([WHITE]) * 720 * 3)
        assert page.black.rows[0] == b"\x00" * 90
        assert page.red.rows[0] == b"\x00" * 90

    def test_size_mismatch(self):
        with pytest.raises(BrotherQLRasterError):
            pack_rgb_two_color(8, 1, bytes(8))


class TestPages:
    """Test the page containers."""

    def test_rows_must_have_equal_length(self):
        with pytest.raises(BrotherQLRasterError):
            BitmapPage([b"\x00" * 90, b"\x00" * 89])

    def test_planes_must_have_equal_shape(self):
        with pytest.raises(BrotherQLRasterError):
            TwoColorPage(BitmapPage([b"\x00"] * 2), BitmapPage([b"\x00"] * 3))

    def test_interleaved_starts_with_black(self):
        page = TwoColorPage(BitmapPage([b"\x01", b"\x02"]), BitmapPage([b"\x10", b"\x20"]))
        assert page.interleaved() == [b"\x01", b"\x10", b"\x02", b"\x20"]
        assert page.height == 2
