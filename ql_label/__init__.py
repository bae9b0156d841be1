from .config import Config
from .images import image_to_page
from .media import Media
from .models import Model, Models
from .printer import BrotherQLPrinter, PrinterState
from .raster import BitmapPage, TwoColorPage, pack_grayscale, pack_grayscale_normal, pack_grayscale_wide, pack_rgb_two_color

__version__ = "0.1.0"
