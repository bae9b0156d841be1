"""
Static table of the label media (DK rolls) the QL printers accept.

Every :py:class:`Media` member carries a :py:class:`MediaSpec` with the
physical and geometric properties of the roll. The printer reports the
installed media in its status frame as width, type, length and a color
byte which :py:meth:`Media.from_status_bytes` maps back to a member.
"""

import logging
import struct
from dataclasses import dataclass
from enum import Enum

from .form_factor import FormFactor
from ..exceptions import BrotherQLConfigError, BrotherQLUnknownMedia

logger = logging.getLogger(__name__)

# Number of pins of the print head on the 62mm-wide models.
PRINT_HEAD_PINS = 720

# Color byte at offset 25 of the status frame. Not documented by Brother,
# observed to be 0x81 with black/red DK-22251 tape installed.
COLOR_STANDARD = 0x01
COLOR_BLACK_RED = 0x81

MIN_MAX_FEED = (35, 1500)
DEFAULT_CONTINUOUS_FEED = 35
# Unprintable dots at the leading and the trailing edge of a die-cut label.
DIE_CUT_EDGE_DOTS = 35


@dataclass(frozen=True)
class MediaSpec:
    # Numeric media id, unique per media.
    id: int
    # Short name used on the command line. Eg. '62' or '62x29'.
    identifier: str
    form_factor: FormFactor
    width_mm: int
    # Width of the tape in dots (at 300dpi).
    width_dots: int
    # Width of the printable area in dots.
    printable_dots: int
    # Unprinted pins on the right side of the head.
    pins_right: int
    length_mm: int | None = None
    length_dots: int | None = None
    two_color: bool = False

    @property
    def media_type(self) -> int:
        return self.form_factor.media_type

    @property
    def color_code(self) -> int:
        return COLOR_BLACK_RED if self.two_color else COLOR_STANDARD

    @property
    def margin_dots(self) -> int:
        return (self.width_dots - self.printable_dots) // 2

    @property
    def pins_effective(self) -> int:
        return self.printable_dots

    @property
    def pins_left(self) -> int:
        return PRINT_HEAD_PINS - self.printable_dots - self.pins_right

    @property
    def printable_size(self) -> tuple[int, int]:
        """Printable (width, length) in dots. The length of continuous tape is 0 (unbounded)."""
        if self.is_continuous:
            return self.printable_dots, 0
        if self.form_factor == FormFactor.ROUND_DIE_CUT:
            return self.printable_dots, self.printable_dots
        return self.printable_dots, self.length_dots - 2 * DIE_CUT_EDGE_DOTS

    @property
    def is_continuous(self) -> bool:
        return self.form_factor == FormFactor.CONTINUOUS

    @property
    def status_bytes(self) -> tuple[int, int, int, int]:
        """(width, type, length, color) as reported by the printer with this media installed."""
        return self.width_mm, self.media_type, self.length_mm or 0, self.color_code

    @property
    def description(self) -> str:
        if self.is_continuous:
            descr = "%d mm endless" % self.width_mm
        elif self.form_factor == FormFactor.ROUND_DIE_CUT:
            descr = "%d mm diameter, round" % self.width_mm
        else:
            descr = "%d x %d mm^2" % (self.width_mm, self.length_mm)
        if self.two_color:
            descr += ", black/red/white"
        return descr


def _continuous(id: int, identifier: str, width_mm: int, width_dots: int, printable_dots: int, pins_right: int, two_color: bool = False) -> MediaSpec:
    return MediaSpec(id, identifier, FormFactor.CONTINUOUS, width_mm, width_dots, printable_dots, pins_right, two_color=two_color)


def _die_cut(id: int, identifier: str, size_mm: tuple[int, int], size_dots: tuple[int, int], printable_dots: int, pins_right: int, form_factor: FormFactor = FormFactor.DIE_CUT) -> MediaSpec:
    return MediaSpec(id, identifier, form_factor, size_mm[0], size_dots[0], printable_dots, pins_right, length_mm=size_mm[1], length_dots=size_dots[1])


class Media(Enum):
    CONTINUOUS_12 = _continuous(257, "12", 12, 142, 106, 29)
    CONTINUOUS_29 = _continuous(258, "29", 29, 342, 306, 6)
    CONTINUOUS_38 = _continuous(264, "38", 38, 449, 413, 12)
    CONTINUOUS_50 = _continuous(262, "50", 50, 590, 554, 12)
    CONTINUOUS_54 = _continuous(261, "54", 54, 636, 590, 0)
    CONTINUOUS_62 = _continuous(259, "62", 62, 732, 696, 12)
    CONTINUOUS_62_RED = _continuous(263, "62red", 62, 732, 696, 12, two_color=True)

    DIE_CUT_17X54 = _die_cut(269, "17x54", (17, 54), (201, 636), 165, 0)
    DIE_CUT_17X87 = _die_cut(270, "17x87", (17, 87), (201, 1026), 165, 0)
    DIE_CUT_23X23 = _die_cut(370, "23x23", (23, 23), (272, 272), 202, 42)
    DIE_CUT_29X42 = _die_cut(358, "29x42", (29, 42), (342, 495), 306, 6)
    DIE_CUT_29X90 = _die_cut(271, "29x90", (29, 90), (342, 1061), 306, 6)
    DIE_CUT_38X90 = _die_cut(272, "38x90", (38, 90), (449, 1061), 413, 12)
    DIE_CUT_39X48 = _die_cut(367, "39x48", (39, 48), (461, 565), 425, 6)
    DIE_CUT_52X29 = _die_cut(374, "52x29", (52, 29), (614, 341), 578, 0)
    DIE_CUT_60X86 = _die_cut(383, "60x86", (60, 86), (708, 1024), 672, 18)
    DIE_CUT_62X29 = _die_cut(274, "62x29", (62, 29), (732, 341), 696, 12)
    DIE_CUT_62X100 = _die_cut(275, "62x100", (62, 100), (732, 1179), 696, 12)
    DIE_CUT_12_DIA = _die_cut(362, "d12", (12, 12), (142, 142), 94, 113, FormFactor.ROUND_DIE_CUT)
    DIE_CUT_24_DIA = _die_cut(363, "d24", (24, 24), (284, 284), 236, 42, FormFactor.ROUND_DIE_CUT)
    DIE_CUT_58_DIA = _die_cut(273, "d58", (58, 58), (688, 688), 618, 51, FormFactor.ROUND_DIE_CUT)

    @property
    def spec(self) -> MediaSpec:
        return self.value

    @property
    def identifier(self) -> str:
        return self.value.identifier

    @property
    def default_feed_dots(self) -> int:
        return DEFAULT_CONTINUOUS_FEED if self.spec.is_continuous else 0

    def check_feed_dots(self, feed: int) -> bytes:
        """
        Validates a feed amount for this media and returns it encoded
        as the 2 byte little-endian argument of the ESC i d command.

        :raises BrotherQLConfigError: Continuous tape needs 35-1500 dots, die-cut labels exactly 0.
        """
        if self.spec.is_continuous:
            low, high = MIN_MAX_FEED
            if not low <= feed <= high:
                raise BrotherQLConfigError(f"Feed for {self.identifier} must be between {low} and {high} dots, got {feed}")
        elif feed != 0:
            raise BrotherQLConfigError(f"Feed for die-cut media {self.identifier} must be 0, got {feed}")
        return struct.pack("<H", feed)

    @staticmethod
    def from_id(media_id: int) -> "Media":
        for media in Media:
            if media.spec.id == media_id:
                return media
        raise BrotherQLUnknownMedia(f"No media with id {media_id}")

    @staticmethod
    def from_identifier(identifier: str) -> "Media":
        for media in Media:
            if media.identifier == identifier.lower():
                return media
        raise BrotherQLUnknownMedia(f"Media '{identifier}' not implemented.")

    @staticmethod
    def from_status_bytes(width: int, media_type: int, length: int, color: int) -> "Media | None":
        """
        Identify the installed media from the status frame.

        Returns None if nothing matches, which callers must not confuse
        with 'no media' or 'printer offline'.
        """
        if media_type == FormFactor.CONTINUOUS.media_type:
            candidates = [media for media in Media if media.spec.is_continuous and media.spec.width_mm == width]
            for media in candidates:
                if media.spec.two_color == (color == COLOR_BLACK_RED):
                    return media
            if candidates:
                return candidates[0]
        elif media_type == FormFactor.DIE_CUT.media_type:
            for media in Media:
                if media.spec.form_factor.is_die_cut and (media.spec.width_mm, media.spec.length_mm) == (width, length):
                    return media
        logger.debug("Unknown media: width %d, type %02X, length %d, color %02X", width, media_type, length, color)
        return None

    @staticmethod
    def identifiers() -> list[str]:
        return [media.identifier for media in Media]
