"""
ESC/POS command encoding for the T02 printer

Every function returns an immutable ``bytes`` sequence determined only by
its arguments.
"""

from .constants import ESC, GS
from .errors import ParameterError
from .printer_models import Justification, PrintMode


def init_printer() -> bytes:
    """ESC @ - reset the printer to its power-on state"""
    return bytes([ESC, 0x40])


def set_justification(position: Justification) -> bytes:
    """ESC a n - horizontal alignment applied to the raster that follows"""
    return bytes([ESC, 0x61, Justification(position).value])


def feed_lines(lines: int) -> bytes:
    """ESC d n - feed the paper ``lines`` lines"""
    if isinstance(lines, bool) or not isinstance(lines, int):
        raise ParameterError(f"feed lines must be an integer, got {lines!r}")
    if not 0 <= lines <= 255:
        raise ParameterError(f"feed lines out of range (0-255): {lines}")
    return bytes([ESC, 0x64, lines])


def raster_header(width_bytes: int, lines: int, mode: PrintMode = PrintMode.NORMAL) -> bytes:
    """GS v 0 m xL xH yL yH - header for a raster bit image block

    Width (in bytes) and line count are little-endian 16-bit values. The
    caller keeps ``lines`` within the per-block limit.
    """
    return bytes([
        GS, 0x76, 0x30, PrintMode(mode).value,
        width_bytes & 0xFF, (width_bytes >> 8) & 0xFF,
        lines & 0xFF, (lines >> 8) & 0xFF,
    ])
