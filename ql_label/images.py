"""
Pillow images to printable pages.

The image is brought to the geometry of the installed media (rotated,
scaled to the printable width of continuous tape or checked against the
size of a die-cut label) and placed on a canvas as wide as the print head,
shifted left by the unprinted pins on the right. The packers in
:py:mod:`ql_label.raster` then turn the canvas into raster rows.
"""

import logging
from typing import IO

from PIL import Image

from .config import Config
from .exceptions import BrotherQLRasterError
from .raster import BitmapPage, TwoColorPage, pack_grayscale, pack_rgb_two_color

logger = logging.getLogger(__name__)

ROTATIONS = ("auto", "0", "90", "180", "270")
DEFAULT_THRESHOLD = 70.0

WHITE = 255


def threshold_from_percent(percent: float) -> int:
    """Gray value at or below which a pixel is printed, `percent` of full white."""
    return min(255, max(0, int(percent / 100.0 * 255)))


def open_image(image: Image.Image | str | IO[bytes]) -> Image.Image:
    if isinstance(image, Image.Image):
        return image
    try:
        return Image.open(image)
    except OSError as e:
        raise BrotherQLRasterError(f"Can't read image {image}: {e}") from e


def flatten(im: Image.Image, red: bool) -> Image.Image:
    """Drop transparency (onto white) and convert to RGB for two color printing, grayscale otherwise."""
    if im.mode.endswith("A") or (im.mode == "P" and "transparency" in im.info):
        # place in front of white background and get rid of transparency
        im = im.convert("RGBA")
        bg = Image.new("RGB", im.size, (WHITE, WHITE, WHITE))
        bg.paste(im, mask=im.split()[-1])
        im = bg
    return im.convert("RGB" if red else "L")


def fit_to_media(im: Image.Image, config: Config, rotate: str = "auto") -> Image.Image:
    """
    Rotate and scale `im` for the media of `config` and place it on a
    canvas as wide as the print head of the model.

    :param str rotate: 'auto' or the counterclockwise angle as string, see :py:data:`ROTATIONS`.
    :raises BrotherQLRasterError: if a die-cut label image has the wrong size.
    """
    spec = config.media.spec
    printable_width, printable_length = spec.printable_size
    device_pixel_width = config.model.pixel_width
    right_margin_dots = spec.pins_right + config.model.additional_offset_r

    if config.high_resolution:
        dots_expected = (printable_width * 2, printable_length * 2)
    else:
        dots_expected = (printable_width, printable_length)

    if spec.is_continuous:
        if rotate not in ("auto", "0"):
            im = im.rotate(int(rotate), expand=True)
        if config.high_resolution:
            im = im.resize((im.size[0] // 2, im.size[1]))
        if im.size[0] != printable_width:
            hsize = int((printable_width / im.size[0]) * im.size[1])
            logger.warning("Resizing the image from %s to %s", im.size, (printable_width, hsize))
            im = im.resize((printable_width, hsize), Image.Resampling.LANCZOS)
        height = im.size[1]
    else:
        if rotate == "auto":
            if im.size == (dots_expected[1], dots_expected[0]):
                im = im.rotate(90, expand=True)
        elif rotate != "0":
            im = im.rotate(int(rotate), expand=True)
        if im.size != dots_expected:
            raise BrotherQLRasterError("Bad image dimensions: %s. Expecting: %s." % (im.size, dots_expected))
        if config.high_resolution:
            im = im.resize((im.size[0] // 2, im.size[1]))
        height = dots_expected[1]

    left = device_pixel_width - im.size[0] - right_margin_dots
    if left < 0:
        raise BrotherQLRasterError(f"Image is {-left} pixels too wide for the {config.model.identifier}")
    new_im = Image.new(im.mode, (device_pixel_width, height), (WHITE,) * len(im.mode))
    new_im.paste(im, (left, 0))
    return new_im


def image_to_page(image: Image.Image | str | IO[bytes], config: Config, threshold: float = DEFAULT_THRESHOLD, rotate: str = "auto") -> BitmapPage | TwoColorPage:
    """
    Convert an image (instance, filename or file handle) to one page for `config`.

    With two color printing enabled the page has a red plane of the red
    pixels, otherwise pixels darker than `threshold` percent are printed.
    """
    im = flatten(open_image(image), red=config.two_colors)
    im = fit_to_media(im, config, rotate)
    width, height = im.size
    logger.debug("Image placed on a %dx%d canvas", width, height)
    if config.two_colors:
        return pack_rgb_two_color(width, height, im.tobytes())
    return pack_grayscale(threshold_from_percent(threshold), width, height, im.tobytes())
