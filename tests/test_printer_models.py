from PIL import Image
import pytest
from pydantic import ValidationError

from t02_printer.printer_models import MonochromeBitmap, PrintResponse, RasterImage


def test_raster_image_requires_one_sample_per_pixel():
    with pytest.raises(ValidationError):
        RasterImage(width=2, height=2, samples=b"\x00\x00\x00")


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-1, 5)])
def test_raster_image_requires_positive_size(width, height):
    with pytest.raises(ValidationError):
        RasterImage(width=width, height=height, samples=b"")


def test_raster_image_sample_lookup():
    raster = RasterImage(width=3, height=2, samples=bytes([0, 1, 2, 3, 4, 5]))
    assert raster.sample(0, 0) == 0
    assert raster.sample(2, 1) == 5


def test_raster_image_from_pil_converts_to_gray():
    raster = RasterImage.from_pil(Image.new("RGB", (4, 3), (255, 255, 255)))
    assert (raster.width, raster.height) == (4, 3)
    assert raster.samples == b"\xff" * 12


def test_raster_image_to_pil():
    image = RasterImage(width=2, height=1, samples=b"\x00\x80").to_pil()
    assert image.mode == "L"
    assert image.size == (2, 1)
    assert image.getpixel((1, 0)) == 0x80


def test_raster_image_is_immutable():
    raster = RasterImage(width=1, height=1, samples=b"\x00")
    with pytest.raises(ValidationError):
        raster.width = 2


def test_bitmap_bytes_per_row_rounds_up():
    assert MonochromeBitmap(width=384, height=0, data=b"").bytes_per_row == 48
    assert MonochromeBitmap(width=10, height=1, data=b"\x00\x00").bytes_per_row == 2
    assert MonochromeBitmap(width=8, height=1, data=b"\x00").bytes_per_row == 1


def test_bitmap_checks_data_length():
    with pytest.raises(ValidationError):
        MonochromeBitmap(width=384, height=2, data=bytes(48))


def test_bitmap_rows_slice():
    data = bytes([1] * 48 + [2] * 48 + [3] * 48)
    bitmap = MonochromeBitmap(width=384, height=3, data=data)
    assert bitmap.row(1) == bytes([2] * 48)
    assert bitmap.rows(1, 2) == bytes([2] * 48 + [3] * 48)
    assert bitmap.rows(3, 0) == b""


def test_bitmap_rows_out_of_range():
    bitmap = MonochromeBitmap(width=384, height=1, data=bytes(48))
    with pytest.raises(IndexError):
        bitmap.rows(0, 2)


def test_print_response_defaults():
    response = PrintResponse(success=True, message="Printed")
    assert response.bytes_sent == 0
    assert response.error_kind is None
