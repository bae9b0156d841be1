from .catalog import COLOR_BLACK_RED, COLOR_STANDARD, Media, MediaSpec
from .form_factor import FormFactor
