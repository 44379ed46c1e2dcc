from enum import IntEnum
from typing import Optional

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Justification(IntEnum):
    LEFT = 0
    CENTER = 1
    RIGHT = 2


class PrintMode(IntEnum):
    NORMAL = 0
    DOUBLE_WIDTH = 1
    DOUBLE_HEIGHT = 2
    QUADRUPLE = 3


class RasterImage(BaseModel):
    """Decoded 8-bit grayscale pixels, row-major, no alpha"""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0, description="Width in pixels")
    height: int = Field(..., gt=0, description="Height in pixels")
    samples: bytes = Field(..., description="One grayscale byte per pixel")

    @model_validator(mode="after")
    def _check_sample_count(self):
        expected = self.width * self.height
        if len(self.samples) != expected:
            raise ValueError(
                f"Expected {expected} samples for {self.width}x{self.height}, got {len(self.samples)}"
            )
        return self

    def sample(self, x: int, y: int) -> int:
        return self.samples[y * self.width + x]

    def to_pil(self) -> Image.Image:
        return Image.frombytes("L", (self.width, self.height), self.samples)

    @classmethod
    def from_pil(cls, image: Image.Image) -> "RasterImage":
        gray = image.convert("L")
        return cls(width=gray.width, height=gray.height, samples=gray.tobytes())


class MonochromeBitmap(BaseModel):
    """1-bit packed bitmap, MSB first, 1 = print (black)"""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., gt=0, description="Width in dots")
    height: int = Field(..., ge=0, description="Height in lines")
    data: bytes = Field(..., description="Packed rows, bytes_per_row each")

    @model_validator(mode="after")
    def _check_data_length(self):
        expected = self.bytes_per_row * self.height
        if len(self.data) != expected:
            raise ValueError(
                f"Expected {expected} bytes for {self.width}x{self.height} bitmap, got {len(self.data)}"
            )
        return self

    @property
    def bytes_per_row(self) -> int:
        return (self.width + 7) // 8

    def row(self, y: int) -> bytes:
        return self.rows(y, 1)

    def rows(self, start: int, count: int) -> bytes:
        """Contiguous bytes for lines [start, start + count)"""
        if start < 0 or count < 0 or start + count > self.height:
            raise IndexError(f"Rows {start}..{start + count} outside bitmap of {self.height} lines")
        begin = start * self.bytes_per_row
        return self.data[begin:begin + count * self.bytes_per_row]


class PrintResponse(BaseModel):
    success: bool
    message: str
    bytes_sent: int = 0
    error_kind: Optional[str] = None  # parameter, conversion, input, transport
