"""
Byte sequences of the QL raster command language. Pure functions, no I/O.
"""

import logging
import struct

from .config import Config

logger = logging.getLogger(__name__)

INVALIDATE_BYTES = 400

COLOR_BLACK = 0x01
COLOR_RED = 0x02

# Various mode (ESC i M)
VARIOUS_AUTO_CUT = 0b0100_0000
# Expanded mode (ESC i K)
EXPANDED_TWO_COLOR = 0b0000_0001
EXPANDED_CUT_AT_END = 0b0000_1000
EXPANDED_HIGH_RESOLUTION = 0b0100_0000
# Print information (ESC i z) valid flags
PI_KIND = 0x02
PI_WIDTH = 0x04
PI_LENGTH = 0x08
PI_QUALITY = 0x40
PI_RECOVER = 0x80


def invalidate() -> bytes:
    """clear command buffer"""
    return b"\x00" * INVALIDATE_BYTES


def initialize() -> bytes:
    """Flush any partial command, then reset."""
    return invalidate() + b"\x1B\x40"  # ESC @


def request_status() -> bytes:
    """Status Information Request"""
    return initialize() + b"\x1B\x69\x53"  # ESC i S


def switch_mode() -> bytes:
    """
    Switch dynamic command mode
    Switch to the raster mode on the printers that support
    the mode change (others are in raster mode already).
    """
    return b"\x1B\x69\x61\x01"  # ESC i a


def automatic_status(notify: bool = True) -> bytes:
    """The printer sends status frames on its own (phase changes, completion) unless disabled."""
    return b"\x1B\x69\x21" + bytes([0 if notify else 1])  # ESC i !


def compression(compress: bool) -> bytes:
    return b"\x4D" + bytes([compress << 1])  # M


def feed(dots: bytes) -> bytes:
    """Feed amount, `dots` already encoded as 2 bytes little-endian."""
    return b"\x1B\x69\x64" + dots  # ESC i d


def various_mode(auto_cut: bool) -> bytes:
    return b"\x1B\x69\x4D" + bytes([VARIOUS_AUTO_CUT if auto_cut else 0x00])  # ESC i M


def cut_every(n: int) -> bytes:
    return b"\x1B\x69\x41" + bytes([n & 0xFF])  # ESC i A


def expanded_mode(two_color: bool, cut_at_end: bool, high_resolution: bool) -> bytes:
    flags = 0x00
    if two_color:
        flags |= EXPANDED_TWO_COLOR
    if cut_at_end:
        flags |= EXPANDED_CUT_AT_END
    if high_resolution:
        flags |= EXPANDED_HIGH_RESOLUTION
    return b"\x1B\x69\x4B" + bytes([flags])  # ESC i K


def build_mode_commands(config: Config) -> bytes:
    """
    Feed, auto cut and expanded mode settings of `config`. The cutter
    commands are left out for models without a cutter, the expanded mode
    for models that don't know it.

    :raises BrotherQLConfigError: if the feed doesn't suit the media.
    """
    model = config.model
    data = feed(config.media.check_feed_dots(config.feed))
    if model.cutting:
        data += various_mode(config.auto_cut_enabled)
        data += cut_every(config.auto_cut if config.auto_cut_enabled else 1)
    else:
        logger.debug("%s has no cutter, skipping auto cut", model.identifier)
    if model.expanded_mode:
        data += expanded_mode(config.two_colors, config.cut_at_end, config.high_resolution)
    else:
        logger.debug("%s has no expanded mode, skipping it", model.identifier)
    logger.debug("mode commands: %s", data.hex(" "))
    return data


def build_media_header(config: Config, raster_count: int, is_first_page: bool) -> bytes:
    """Print information command (ESC i z) for a page of `raster_count` rows."""
    spec = config.media.spec
    valid_flags = PI_RECOVER | PI_KIND | PI_WIDTH | PI_LENGTH
    if config.high_quality:
        valid_flags |= PI_QUALITY

    data = b"\x1B\x69\x7A"  # ESC i z
    data += bytes([valid_flags, spec.media_type, spec.width_mm, spec.length_mm or 0])
    data += struct.pack("<L", raster_count)
    data += b"\x00\x00" if is_first_page else b"\x01\x00"
    return data


def raster_row(row: bytes, color: int | None = None) -> bytes:
    """One raster line; `color` selects the plane on two color pages."""
    if color is None:
        header = b"\x67\x00"  # g
    else:
        header = b"\x77" + bytes([color])  # w
    return header + bytes([len(row)]) + row


def print_page(last_page: bool = True) -> bytes:
    if last_page:
        return b"\x1A"  # 0x1A = ^Z = SUB; print and eject
    return b"\x0C"  # 0x0C = FF = Form Feed; print, keep receiving
