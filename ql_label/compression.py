import logging

import packbits

from .models import NORMAL_BYTES_PER_ROW

logger = logging.getLogger(__name__)

RASTER_ROW_LENGTH = NORMAL_BYTES_PER_ROW
# Literal run header followed by the whole row.
MAX_PACKED_LENGTH = RASTER_ROW_LENGTH + 1


def pack_bits(row: bytes) -> bytes:
    """
    TIFF PackBits compression of a single 90 byte raster row.

    Rows of any other length are returned unchanged. If compressing makes
    the row longer than the raw data, the row is sent as one literal run
    instead, so the result never exceeds 91 bytes.
    """
    row = bytes(row)
    if len(row) != RASTER_ROW_LENGTH:
        return row
    packed = packbits.encode(row)
    if len(packed) > RASTER_ROW_LENGTH:
        logger.debug("compression grew the row to %d bytes, sending it uncompressed", len(packed))
        return bytes([RASTER_ROW_LENGTH - 1]) + row
    return packed
