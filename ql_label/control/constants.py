from enum import IntEnum

STATUS_FRAME_LENGTH = 32
# Print head mark, size, fixed 'B'
STATUS_HEADER = b"\x80\x20\x42"


class StatusType(IntEnum):
    REPLY_TO_STATUS_REQUEST = 0x00
    PRINTING_COMPLETED = 0x01
    ERROR_OCCURRED = 0x02
    TURNED_OFF = 0x04
    NOTIFICATION = 0x05
    PHASE_CHANGE = 0x06
    UNKNOWN = -1

    @staticmethod
    def from_code(code: int) -> "StatusType":
        try:
            return StatusType(code)
        except ValueError:
            return StatusType.UNKNOWN


class Phase(IntEnum):
    RECEIVING = 0x00
    PRINTING = 0x01
    # Any other phase code, the raw value stays in the status.
    WAITING = -1

    @staticmethod
    def from_code(code: int) -> "Phase":
        try:
            return Phase(code)
        except ValueError:
            return Phase.WAITING


class Notification(IntEnum):
    NOT_AVAILABLE = 0x00
    COOLING_STARTED = 0x03
    COOLING_FINISHED = 0x04
    UNKNOWN = -1

    @staticmethod
    def from_code(code: int) -> "Notification":
        try:
            return Notification(code)
        except ValueError:
            return Notification.UNKNOWN


RESP_BYTE_NAMES = [
    "Print head mark",
    "Size",
    "Fixed (B=0x42)",
    "Series code",
    "Model code",
    "Fixed (0=0x30)",
    "Fixed (0x00 or 0=0x30)",
    "Fixed (0x00)",
    "Error information 1",
    "Error information 2",
    "Media width",
    "Media type",
    "Fixed (0x00)",
    "Fixed (0x00)",
    "Sequence id",
    "Mode",
    "Fixed (0x00)",
    "Media length",
    "Status type",
    "Phase type",
    "Phase number (high)",
    "Phase number (low)",
    "Notification number",
    "Reserved",
    "Reserved",
    "Tape color",
    "Text color",
    "Reserved",
    "Reserved",
    "Reserved",
    "Reserved",
    "Reserved",
]
