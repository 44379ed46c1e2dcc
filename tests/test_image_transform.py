from PIL import Image
import pytest

from conftest import make_gray_image
from t02_printer.errors import ConversionError
from t02_printer.image_transform import convert_image, pack_bits, target_size, to_grayscale
from t02_printer.printer_models import MonochromeBitmap, RasterImage
from t02_printer import patterns


def test_solid_black_converts_to_all_ff(black_image):
    bitmap = convert_image(black_image)
    assert bitmap.width == 384
    assert bitmap.height == 100
    assert bitmap.bytes_per_row == 48
    assert len(bitmap.data) == 48 * 100
    assert set(bitmap.data) == {0xFF}


def test_solid_white_converts_to_all_zero(white_image):
    bitmap = convert_image(white_image)
    assert bitmap.width == 384
    assert set(bitmap.data) == {0x00}


@pytest.mark.parametrize("size", [(200, 100), (100, 50), (800, 400), (384, 200), (10000, 100), (7, 3)])
def test_width_is_always_printer_width(size):
    bitmap = convert_image(make_gray_image(*size, 128))
    assert bitmap.width == 384
    assert bitmap.bytes_per_row == 48


@pytest.mark.parametrize("size, expected_height", [
    ((200, 100), 192),
    ((384, 200), 200),
    ((1000, 333), 127),   # 127.87 rounds down
    ((10000, 100), 3),
    ((3, 1), 128),
])
def test_height_scales_with_floor(size, expected_height):
    assert target_size(*size) == (384, expected_height)
    assert convert_image(make_gray_image(*size, 255)).height == expected_height


def test_very_short_wide_image_gives_empty_bitmap():
    bitmap = convert_image(make_gray_image(1000, 1, 0))
    assert bitmap.height == 0
    assert bitmap.data == b""


def test_mid_gray_is_not_printed():
    # 255 - 128 = 127, below the threshold
    assert set(convert_image(make_gray_image(384, 4, 128)).data) == {0x00}


def test_dark_gray_is_printed():
    # 255 - 127 = 128, at the threshold
    assert set(convert_image(make_gray_image(384, 4, 127)).data) == {0xFF}


def test_bits_are_packed_msb_first():
    img = make_gray_image(384, 2, 255)
    img.putpixel((0, 0), 0)
    img.putpixel((15, 1), 0)
    bitmap = convert_image(img)
    assert bitmap.row(0)[0] == 0x80
    assert bitmap.row(0)[1:] == bytes(47)
    assert bitmap.row(1)[1] == 0x01


def test_left_half_black_image():
    img = make_gray_image(384, 10, 255)
    img.paste(0, (0, 0, 192, 10))
    bitmap = convert_image(img)
    for y in range(10):
        assert bitmap.row(y) == b"\xff" * 24 + b"\x00" * 24


def test_checkerboard_pattern_survives_conversion():
    bitmap = convert_image(patterns.checkerboard(16))
    assert bitmap.row(0) == b"\xff\x00" * 24
    assert bitmap.row(7) == b"\xff\x00" * 24
    assert bitmap.row(8) == b"\x00\xff" * 24


def test_color_image_uses_luminance():
    red = Image.new("RGB", (384, 2), (255, 0, 0))
    yellow = Image.new("RGB", (384, 2), (255, 255, 0))
    assert set(convert_image(red).data) == {0xFF}
    assert set(convert_image(yellow).data) == {0x00}


def test_transparent_pixels_are_treated_as_white():
    img = Image.new("RGBA", (384, 5), (0, 0, 0, 0))
    assert set(convert_image(img).data) == {0x00}


def test_opaque_rgba_black_is_printed():
    img = Image.new("RGBA", (384, 5), (0, 0, 0, 255))
    assert set(convert_image(img).data) == {0xFF}


def test_one_bit_source_image():
    img = Image.new("1", (384, 3), 0)
    assert set(convert_image(img).data) == {0xFF}


@pytest.mark.parametrize("mode, value, expected", [
    ("I;16", 20000, 0xFF),
    ("I;16", 60000, 0x00),
    ("I", 20000, 0xFF),
    ("I", 60000, 0x00),
    ("F", 20000.0, 0xFF),
    ("F", 60000.0, 0x00),
])
def test_sixteen_bit_samples_are_scaled(mode, value, expected):
    img = Image.new(mode, (384, 2), value)
    assert set(convert_image(img).data) == {expected}


def test_sixteen_bit_grayscale_range():
    gray = to_grayscale(Image.new("I;16", (4, 1), 65535))
    assert gray.mode == "L"
    assert gray.getpixel((0, 0)) == 255
    assert to_grayscale(Image.new("I;16", (4, 1), 0)).getpixel((0, 0)) == 0


def test_raster_image_source():
    raster = RasterImage(width=384, height=3, samples=bytes(384 * 3))
    bitmap = convert_image(raster)
    assert bitmap.height == 3
    assert set(bitmap.data) == {0xFF}


def test_upscaled_raster_image_source():
    raster = RasterImage(width=2, height=1, samples=bytes([0, 0]))
    bitmap = convert_image(raster)
    assert (bitmap.width, bitmap.height) == (384, 192)
    assert set(bitmap.data) == {0xFF}


def test_zero_size_image_raises_conversion_error():
    with pytest.raises(ConversionError) as excinfo:
        convert_image(Image.new("L", (0, 0)))
    assert excinfo.value.kind == "conversion"


def test_unsupported_source_raises_conversion_error():
    with pytest.raises(ConversionError):
        convert_image(b"not an image")


def test_to_grayscale_keeps_gray_images():
    img = make_gray_image(10, 10, 42)
    assert to_grayscale(img) is img


def test_pack_bits_pads_row_with_zero_bits():
    packed = pack_bits(bytes(10 * 2), 10, 2)
    assert packed == b"\xff\xc0\xff\xc0"


def test_pack_bits_rejects_mismatched_samples():
    with pytest.raises(ConversionError):
        pack_bits(bytes(5), 10, 1)


def test_pack_bits_into_bitmap():
    bitmap = MonochromeBitmap(width=10, height=1, data=pack_bits(bytes([0] * 9 + [255]), 10, 1))
    assert bitmap.bytes_per_row == 2
    assert bitmap.data == b"\xff\x80"
