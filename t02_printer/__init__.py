"""
Phomemo T02 thermal printer protocol

Converts images into the ESC/POS raster stream the 50mm T02 understands.
"""

from .commands import feed_lines, init_printer, raster_header, set_justification
from .constants import (
    DEFAULT_FEED_LINES,
    DPI,
    MAX_LINES_PER_BLOCK,
    WIDTH_BYTES,
    WIDTH_DOTS,
)
from .errors import ConversionError, InputError, ParameterError, T02ProtocolError, TransportError
from .image_source import load_image
from .image_transform import convert_image
from .print_data import assemble, generate_print_data, hex_dump, iter_blocks
from .printer_models import Justification, MonochromeBitmap, PrintMode, PrintResponse, RasterImage

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_FEED_LINES", "DPI", "MAX_LINES_PER_BLOCK", "WIDTH_BYTES", "WIDTH_DOTS",
    "ConversionError", "InputError", "ParameterError", "T02ProtocolError", "TransportError",
    "Justification", "MonochromeBitmap", "PrintMode", "PrintResponse", "RasterImage",
    "assemble", "convert_image", "feed_lines", "generate_print_data", "hex_dump",
    "init_printer", "iter_blocks", "load_image", "raster_header", "set_justification",
]
