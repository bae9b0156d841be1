from dataclasses import dataclass
from enum import Enum

from .exceptions import BrotherQLUnknownModel

BROTHER_VENDOR_ID = 0x04F9

NORMAL_BYTES_PER_ROW = 90
WIDE_BYTES_PER_ROW = 162


@dataclass(frozen=True)
class Model:
    """
    This class represents a printer model. All specifics of a certain model
    and the opcodes it supports should be contained in this class.
    """

    # A string identifier given to each model implemented. Eg. 'QL-500'.
    identifier: str
    # Minimum and maximum number of rows or 'dots' that can be printed.
    # Together with the dpi this gives the minimum and maximum length
    # for continuous tape printing.
    min_max_length_dots: tuple[int, int]
    # USB product id, the vendor is always Brother.
    product_id: int
    # Model code reported in byte 4 of the status frame.
    model_code: int
    number_bytes_per_row: int = NORMAL_BYTES_PER_ROW
    # The required additional offset from the right side
    additional_offset_r: int = 0
    # Support for the 'mode setting' opcode
    mode_setting: bool = True
    # Model has a cutting blade to automatically cut labels
    cutting: bool = True
    # Model has support for the 'expanded mode' opcode.
    # (So far, all models that have cutting support do).
    expanded_mode: bool = True
    # Model has support for compressing the transmitted raster data.
    # Some models with only USB connectivity don't support compression.
    compression: bool = True
    # Support for two color printing (black/red/white)
    # available only on some newer models.
    two_color: bool = False

    @property
    def name(self) -> str:
        return self.identifier

    @property
    def pixel_width(self) -> int:
        return self.number_bytes_per_row * 8

    @property
    def is_wide(self) -> bool:
        return self.number_bytes_per_row == WIDE_BYTES_PER_ROW


class Models(Enum):
    QL500 = Model("QL-500", (295, 11811), 0x2015, 0x4F, compression=False, mode_setting=False, expanded_mode=False, cutting=False)
    QL550 = Model("QL-550", (295, 11811), 0x2016, 0x4F, compression=False, mode_setting=False)
    QL560 = Model("QL-560", (295, 11811), 0x2027, 0x31, compression=False, mode_setting=False)
    QL570 = Model("QL-570", (150, 11811), 0x2028, 0x32, compression=False, mode_setting=False)
    QL580N = Model("QL-580N", (150, 11811), 0x2029, 0x33)
    QL600 = Model("QL-600", (150, 11811), 0x20C0, 0x47)
    QL650TD = Model("QL-650TD", (295, 11811), 0x201B, 0x51)
    QL700 = Model("QL-700", (150, 11811), 0x2042, 0x35, compression=False, mode_setting=False)
    QL710W = Model("QL-710W", (150, 11811), 0x2043, 0x36)
    QL720NW = Model("QL-720NW", (150, 11811), 0x2044, 0x37)
    QL800 = Model("QL-800", (150, 11811), 0x209B, 0x38, two_color=True, compression=False)
    QL810W = Model("QL-810W", (150, 11811), 0x209C, 0x39, two_color=True)
    QL820NWB = Model("QL-820NWB", (150, 11811), 0x209D, 0x41, two_color=True)
    QL1050 = Model("QL-1050", (295, 35433), 0x2020, 0x50, number_bytes_per_row=WIDE_BYTES_PER_ROW, additional_offset_r=44)
    QL1060N = Model("QL-1060N", (295, 35433), 0x202A, 0x34, number_bytes_per_row=WIDE_BYTES_PER_ROW, additional_offset_r=44)
    QL1100 = Model("QL-1100", (301, 35434), 0x20A7, 0x43, number_bytes_per_row=WIDE_BYTES_PER_ROW, additional_offset_r=44)
    QL1110NWB = Model("QL-1110NWB", (301, 35434), 0x20A8, 0x44, number_bytes_per_row=WIDE_BYTES_PER_ROW, additional_offset_r=44)
    QL1115NWB = Model("QL-1115NWB", (301, 35434), 0x20AB, 0x45, number_bytes_per_row=WIDE_BYTES_PER_ROW, additional_offset_r=44)

    @staticmethod
    def from_identifier(identifier: str) -> Model:
        try:
            return Models[identifier.upper().replace("-", "")].value
        except (KeyError, AttributeError):
            raise BrotherQLUnknownModel(f"Model '{identifier}' not implemented.")

    @staticmethod
    def from_code(code: int) -> Model | None:
        """Model reported in a status frame, None for codes we don't know."""
        for model in Models:
            if model.value.model_code == code:
                return model.value
        return None

    @staticmethod
    def identifiers() -> list[str]:
        return [model.value.identifier for model in Models]
