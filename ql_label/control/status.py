import logging
from dataclasses import dataclass

from .constants import RESP_BYTE_NAMES, STATUS_FRAME_LENGTH, STATUS_HEADER, Notification, Phase, StatusType
from .errors import ErrorCondition
from ..exceptions import BrotherQLMediaMismatch, BrotherQLNoMediaInstalled, BrotherQLStatusError
from ..media import Media
from ..models import Model, Models
from ..utils.hex import hex_format

logger = logging.getLogger(__name__)


def is_status_frame(data: bytes) -> bool:
    """True if `data` is a complete status frame, anything else means 'not ready yet'."""
    return len(data) == STATUS_FRAME_LENGTH and bytes(data).startswith(STATUS_HEADER)


@dataclass(frozen=True)
class Status:
    """
    Snapshot of the printer state decoded from one 32 byte status frame.

    Codes the firmware reports but we don't know are kept: `model` is None
    for an unknown model code, `media` is None if the installed media could
    not be identified and the enums fall back to their UNKNOWN / WAITING
    members. The raw codes are available next to the decoded values.
    """

    model: Model | None
    model_code: int
    error: ErrorCondition
    media: Media | None
    media_width: int
    media_type: int
    media_length: int
    color: int
    mode: int
    sequence_id: int
    status_type: StatusType
    status_code: int
    phase: Phase
    phase_code: int
    phase_number: int
    notification: Notification
    notification_code: int

    @staticmethod
    def from_bytes(data: bytes) -> "Status":
        data = bytes(data)

        if len(data) != STATUS_FRAME_LENGTH:
            raise BrotherQLStatusError("Status frame must be %d bytes, got %d: %s" % (STATUS_FRAME_LENGTH, len(data), hex_format(data)))

        for i, byte_name in enumerate(RESP_BYTE_NAMES):
            logger.debug("Byte %2d %24s %02X", i, byte_name + ":", data[i])

        error = ErrorCondition.from_bytes(data[8], data[9])
        if not error.is_clear():
            logger.error("Error: %s", error)

        media = Media.from_status_bytes(data[10], data[11], data[17], data[25])

        status = Status(
            model=Models.from_code(data[4]),
            model_code=data[4],
            error=error,
            media=media,
            media_width=data[10],
            media_type=data[11],
            media_length=data[17],
            color=data[25],
            mode=data[15],
            sequence_id=data[14],
            status_type=StatusType.from_code(data[18]),
            status_code=data[18],
            phase=Phase.from_code(data[19]),
            phase_code=data[19],
            phase_number=(data[20] << 8) | data[21],
            notification=Notification.from_code(data[22]),
            notification_code=data[22],
        )
        logger.debug("Status type: %s, phase: %s, media: %s", status.status_type.name, status.phase.name, media.name if media else None)
        return status

    @property
    def has_error(self) -> bool:
        return self.status_type == StatusType.ERROR_OCCURRED or not self.error.is_clear()

    @property
    def is_ready(self) -> bool:
        """The printer waits for data and reports no error."""
        return self.phase == Phase.RECEIVING and not self.has_error

    def check_media(self, expected: Media) -> None:
        """
        :raises BrotherQLNoMediaInstalled: No media could be identified from the status.
        :raises BrotherQLMediaMismatch: A different media than `expected` is installed.
        """
        if self.media is None:
            raise BrotherQLNoMediaInstalled(expected)
        if self.media != expected:
            raise BrotherQLMediaMismatch(expected, self.media)
