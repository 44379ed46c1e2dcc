"""
Image conversion for the T02 print head

Any Pillow image (or RasterImage) is flattened onto white, converted to
grayscale, resized to the printer's 384-dot width with its aspect ratio
kept, inverted, thresholded and packed into a 1-bit bitmap.
"""

import logging
from typing import Tuple, Union

from PIL import Image

from .constants import THRESHOLD, WIDTH_DOTS
from .errors import ConversionError
from .printer_models import MonochromeBitmap, RasterImage

logger = logging.getLogger(__name__)

# 255 marks a printed dot once the grayscale sample is inverted and thresholded
_PRINT_LUT = [255 if 255 - value >= THRESHOLD else 0 for value in range(256)]

SourceImage = Union[Image.Image, RasterImage]


def target_size(width: int, height: int) -> Tuple[int, int]:
    """Printer-width size for a source image, height rounded down"""
    return WIDTH_DOTS, height * WIDTH_DOTS // width


def to_grayscale(image: Image.Image) -> Image.Image:
    """Single-channel copy of ``image`` with transparency composited on white

    Uses Pillow's ITU-R 601-2 luma transform for color sources. 16-bit and
    float samples are scaled from 0-65535 down to 0-255.
    """
    if image.mode == "L":
        return image
    if image.mode.startswith("I;16"):
        image = image.convert("I")
    if image.mode in ("I", "F"):
        # 16-bit samples; convert("L") would clip them at 255
        image = image.point(lambda v: v * (255 / 65535))
    if image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info:
        rgba = image.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        image = Image.alpha_composite(background, rgba)
    return image.convert("L")


def pack_bits(samples: bytes, width: int, height: int) -> bytes:
    """Threshold inverted grayscale rows and pack them MSB first

    Each row is padded to a whole byte with zero bits.
    """
    if width <= 0 or height < 0 or len(samples) != width * height:
        raise ConversionError(f"Cannot pack {len(samples)} samples as {width}x{height}")
    if height == 0:
        return b""
    gray = Image.frombytes("L", (width, height), bytes(samples))
    return gray.point(_PRINT_LUT, "1").tobytes()


def convert_image(image: SourceImage) -> MonochromeBitmap:
    """Convert ``image`` to a printer-width monochrome bitmap"""
    if isinstance(image, RasterImage):
        image = image.to_pil()
    if not isinstance(image, Image.Image):
        raise ConversionError(f"Unsupported image type: {type(image).__name__}")

    source_width, source_height = image.size
    if source_width <= 0 or source_height <= 0:
        raise ConversionError(f"Image has no pixels: {source_width}x{source_height}")

    width, height = target_size(source_width, source_height)
    logger.debug(f"Converting {source_width}x{source_height} image to {width}x{height}")

    if height == 0:
        return MonochromeBitmap(width=width, height=0, data=b"")

    try:
        gray = to_grayscale(image)
        if gray.size != (width, height):
            gray = gray.resize((width, height), Image.LANCZOS)
        data = pack_bits(gray.tobytes(), width, height)
    except (OSError, ValueError) as e:
        raise ConversionError(f"Cannot convert image: {e}") from e

    return MonochromeBitmap(width=width, height=height, data=data)
