"""
Test images for checking printer output and alignment
"""

from typing import Callable, Dict

from PIL import Image, ImageDraw

from .constants import WIDTH_DOTS

BLACK = 0
WHITE = 255


def _blank(height: int, fill: int = WHITE) -> Image.Image:
    return Image.new("L", (WIDTH_DOTS, height), color=fill)


def _fill(draw: ImageDraw.ImageDraw, x: int, y: int, width: int, height: int):
    # Pillow rectangles include their end coordinates
    draw.rectangle([x, y, x + width - 1, y + height - 1], fill=BLACK)


def solid_black(height: int = 100) -> Image.Image:
    return _blank(height, BLACK)


def solid_white(height: int = 100) -> Image.Image:
    return _blank(height, WHITE)


def single_line() -> Image.Image:
    return _blank(1, BLACK)


def checkerboard(height: int = 100, square: int = 8) -> Image.Image:
    img = _blank(height)
    draw = ImageDraw.Draw(img)
    for y in range(0, height, square):
        for x in range(0, WIDTH_DOTS, square):
            if (x // square + y // square) % 2 == 0:
                _fill(draw, x, y, square, square)
    return img


def vertical_stripes(height: int = 50, stripe: int = 8) -> Image.Image:
    img = _blank(height)
    draw = ImageDraw.Draw(img)
    for x in range(0, WIDTH_DOTS, stripe * 2):
        _fill(draw, x, 0, stripe, height)
    return img


def large_image(height: int = 300, spacing: int = 10, bar: int = 2) -> Image.Image:
    """Taller than one raster block, with a bar every ``spacing`` lines"""
    img = _blank(height)
    draw = ImageDraw.Draw(img)
    for y in range(0, height, spacing):
        _fill(draw, 0, y, WIDTH_DOTS, min(bar, height - y))
    return img


def create_test_label(height: int = 200) -> Image.Image:
    """384x200 label (50mm x 26mm) with a border, rules and a checker band"""
    img = _blank(height)
    draw = ImageDraw.Draw(img)

    draw.rectangle([5, 5, WIDTH_DOTS - 6, height - 6], outline=BLACK, width=2)

    for y in range(30, 100, 15):
        _fill(draw, 20, y, 344, 2)

    square = 8
    for y in range(120, 180, square):
        for x in range(20, 364, square):
            if (x // square + y // square) % 2 == 0:
                _fill(draw, x, y, square, square)

    return img


FIXTURES: Dict[str, Callable[[], Image.Image]] = {
    "solid_black.png": solid_black,
    "solid_white.png": solid_white,
    "checkerboard.png": checkerboard,
    "vertical_stripes.png": vertical_stripes,
    "test_label.png": create_test_label,
    "single_line.png": single_line,
    "large_image.png": large_image,
}
