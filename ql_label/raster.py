"""
Conversion of pixel buffers into the 1 bit per pixel raster rows the
QL printers expect.

A raster row holds one line of the label across the print head, 8 pixels
per byte. The device consumes the rows mirrored: the first byte of a row
holds the *last* 8 pixels of the source line, with the rightmost pixel in
the most significant bit. The packers below bake that mapping in, so their
input is the label as it should look on paper.
"""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .exceptions import BrotherQLRasterError
from .models import NORMAL_BYTES_PER_ROW, WIDE_BYTES_PER_ROW

logger = logging.getLogger(__name__)

NORMAL_PIXEL_WIDTH = NORMAL_BYTES_PER_ROW * 8
WIDE_PIXEL_WIDTH = WIDE_BYTES_PER_ROW * 8

RED_MIN, OTHER_MAX = 200, 100
BLACK_MAX_BRIGHTNESS = 128


@dataclass(frozen=True)
class BitmapPage:
    """One page of raster rows. All rows have the same length."""

    rows: tuple[bytes, ...]

    def __init__(self, rows: Sequence[bytes]) -> None:
        rows = tuple(bytes(row) for row in rows)
        if len({len(row) for row in rows}) > 1:
            raise BrotherQLRasterError("All rows of a page must have the same length, got lengths {}".format(sorted({len(row) for row in rows})))
        object.__setattr__(self, "rows", rows)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def row_length(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.rows)


@dataclass(frozen=True)
class TwoColorPage:
    """A black and a red bit-plane of identical shape, printed on black/red tape."""

    black: BitmapPage
    red: BitmapPage

    def __post_init__(self) -> None:
        if (self.black.height, self.black.row_length) != (self.red.height, self.red.row_length):
            fmt = "Black and red planes don't have the same dimensions: {} vs {}."
            raise BrotherQLRasterError(fmt.format((self.black.height, self.black.row_length), (self.red.height, self.red.row_length)))

    @property
    def height(self) -> int:
        return self.black.height

    @property
    def row_length(self) -> int:
        return self.black.row_length

    def interleaved(self) -> list[bytes]:
        """Black and red rows alternating, black first. Twice as many rows as the page is high."""
        rows = []
        for black_row, red_row in zip(self.black.rows, self.red.rows):
            rows.append(black_row)
            rows.append(red_row)
        return rows


def _check_size(width: int, height: int, data: bytes, bytes_per_pixel: int) -> None:
    if width % 8:
        raise BrotherQLRasterError(f"Pixel width must be a multiple of 8, got {width}")
    if len(data) != width * height * bytes_per_pixel:
        fmt = "Pixel data size {} doesn't match {}x{}x{}"
        raise BrotherQLRasterError(fmt.format(len(data), width, height, bytes_per_pixel))


def pack_grayscale(threshold: int, width: int, height: int, pixels: bytes) -> BitmapPage:
    """
    Pack an 8 bit grayscale buffer (row-major, `width` x `height`) into a
    bitmap page. Pixels at or below `threshold` are printed.
    """
    _check_size(width, height, pixels, 1)
    rows = []
    for y in range(height):
        row = bytearray(width // 8)
        for x in range(width // 8):
            index = (1 + y) * width - (1 + x) * 8
            byte = 0
            for i, pixel in enumerate(pixels[index : index + 8]):
                if not pixel > threshold:
                    byte |= 1 << i
            row[x] = byte
        rows.append(bytes(row))
    return BitmapPage(rows)


def pack_grayscale_normal(threshold: int, height: int, pixels: bytes) -> BitmapPage:
    """Grayscale page for the 720 pin models, 90 bytes per row."""
    return pack_grayscale(threshold, NORMAL_PIXEL_WIDTH, height, pixels)


def pack_grayscale_wide(threshold: int, height: int, pixels: bytes) -> BitmapPage:
    """Grayscale page for the 1296 pin models (QL-10xx/11xx), 162 bytes per row."""
    return pack_grayscale(threshold, WIDE_PIXEL_WIDTH, height, pixels)


def is_red_pixel(r: int, g: int, b: int) -> bool:
    return r > RED_MIN and g < OTHER_MAX and b < OTHER_MAX


def is_black_pixel(r: int, g: int, b: int) -> bool:
    return (r + g + b) // 3 < BLACK_MAX_BRIGHTNESS and not is_red_pixel(r, g, b)


def pack_rgb_two_color(width: int, height: int, rgb: bytes) -> TwoColorPage:
    """
    Split an RGB buffer (3 bytes per pixel) into a black and a red plane.

    Red: R > 200 and G, B < 100. Black: average brightness below 128 and not red.
    Everything else stays unprinted on both planes.

    :raises BrotherQLRasterError: if `rgb` isn't exactly width * height * 3 bytes.
    """
    _check_size(width, height, rgb, 3)
    black_rows, red_rows = [], []
    for y in range(height):
        black_row = bytearray(width // 8)
        red_row = bytearray(width // 8)
        for x in range(width // 8):
            index = (1 + y) * width - (1 + x) * 8
            for i in range(8):
                offset = (index + i) * 3
                r, g, b = rgb[offset : offset + 3]
                if is_red_pixel(r, g, b):
                    red_row[x] |= 1 << i
                elif is_black_pixel(r, g, b):
                    black_row[x] |= 1 << i
        black_rows.append(bytes(black_row))
        red_rows.append(bytes(red_row))
    logger.debug("two color page: %d rows of %d bytes", height, width // 8)
    return TwoColorPage(BitmapPage(black_rows), BitmapPage(red_rows))
