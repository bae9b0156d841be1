from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    # Error information 1 (byte 8)
    NO_MEDIA = "No media when printing"
    END_OF_MEDIA = "End of media (die-cut size only)"
    CUTTER_JAM = "Tape cutter jam"
    PRINTER_IN_USE = "Main unit in use"
    PRINTER_OFFLINE = "Printer turned off"
    # Error information 2 (byte 9)
    INVALID_MEDIA = "Replace media error"
    BUFFER_FULL = "Expansion buffer full error"
    COMMUNICATION_ERROR = "Transmission / Communication error"
    COVER_OPEN = "Cover opened while printing"
    FEED_MEDIA_FAIL = "Media cannot be fed"
    SYSTEM_ERROR = "System error"
    # Anything else, including no error at all.
    UNKNOWN = "Unknown error"


# Bit masks, checked in order. The printer only ever sets one of them.
ERROR_INFORMATION_1 = (
    (0b0000_0001, ErrorKind.NO_MEDIA),
    (0b0000_0010, ErrorKind.END_OF_MEDIA),
    (0b0000_0100, ErrorKind.CUTTER_JAM),
    (0b0001_0000, ErrorKind.PRINTER_IN_USE),
    (0b0010_0000, ErrorKind.PRINTER_OFFLINE),
)

ERROR_INFORMATION_2 = (
    (0b0000_0001, ErrorKind.INVALID_MEDIA),
    (0b0000_0010, ErrorKind.BUFFER_FULL),
    (0b0000_0100, ErrorKind.COMMUNICATION_ERROR),
    (0b0001_0000, ErrorKind.COVER_OPEN),
    (0b0100_0000, ErrorKind.FEED_MEDIA_FAIL),
    (0b1000_0000, ErrorKind.SYSTEM_ERROR),
)


@dataclass(frozen=True)
class ErrorCondition:
    """Decoded error information bytes of a status frame. The raw bytes are kept."""

    kind: ErrorKind
    error_info_1: int = 0
    error_info_2: int = 0

    @staticmethod
    def from_bytes(error_info_1: int, error_info_2: int) -> "ErrorCondition":
        for flags, error_info in ((ERROR_INFORMATION_1, error_info_1), (ERROR_INFORMATION_2, error_info_2)):
            for mask, kind in flags:
                if error_info & mask:
                    return ErrorCondition(kind, error_info_1, error_info_2)
        return ErrorCondition(ErrorKind.UNKNOWN, error_info_1, error_info_2)

    def is_clear(self) -> bool:
        """True only for the genuine 'no error' state, not for unrecognized error codes."""
        return self.kind == ErrorKind.UNKNOWN and self.error_info_1 == 0 and self.error_info_2 == 0

    def __str__(self) -> str:
        if self.is_clear():
            return "No error"
        if self.kind == ErrorKind.UNKNOWN:
            return "Unknown error (%02X %02X)" % (self.error_info_1, self.error_info_2)
        return self.kind.value


NO_ERROR = ErrorCondition(ErrorKind.UNKNOWN, 0, 0)
