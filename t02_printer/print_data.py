"""
Print stream assembly for the T02 printer

Layout of a stream:

    ESC @                       initialize
    ESC a 1                     center justification
    GS v 0 ... + rows           one block per 255 lines
    ESC d n                     feed
"""

import logging
from typing import Iterator, Optional, Tuple

from .commands import feed_lines as cmd_feed_lines
from .commands import init_printer, raster_header, set_justification
from .constants import DEFAULT_FEED_LINES, MAX_LINES_PER_BLOCK, WIDTH_BYTES
from .image_transform import SourceImage, convert_image
from .printer_models import Justification, MonochromeBitmap, PrintMode

logger = logging.getLogger(__name__)


def iter_blocks(bitmap: MonochromeBitmap) -> Iterator[Tuple[int, int]]:
    """Yield ``(start_line, line_count)`` for each raster block"""
    current_line = 0
    while current_line < bitmap.height:
        block_lines = min(bitmap.height - current_line, MAX_LINES_PER_BLOCK)
        yield current_line, block_lines
        current_line += block_lines


def assemble(bitmap: MonochromeBitmap, feed_lines: Optional[int] = None) -> bytes:
    """Frame an already converted bitmap with the T02 command sequence"""
    if feed_lines is None:
        feed_lines = DEFAULT_FEED_LINES
    # Validated first so a bad value never leaves a half-built stream behind
    footer = cmd_feed_lines(feed_lines)

    output = bytearray()
    output += init_printer()
    output += set_justification(Justification.CENTER)

    blocks = 0
    for start_line, block_lines in iter_blocks(bitmap):
        output += raster_header(WIDTH_BYTES, block_lines, PrintMode.NORMAL)
        output += bitmap.rows(start_line, block_lines)
        blocks += 1

    output += footer
    logger.debug(f"Assembled {len(output)} bytes: {bitmap.height} lines in {blocks} block(s)")
    return bytes(output)


def generate_print_data(image: SourceImage, feed_lines: Optional[int] = None) -> bytes:
    """Complete print stream for ``image``, ready for a transport

    ``feed_lines`` defaults to DEFAULT_FEED_LINES when None.
    """
    if feed_lines is None:
        feed_lines = DEFAULT_FEED_LINES
    cmd_feed_lines(feed_lines)

    bitmap = convert_image(image)
    return assemble(bitmap, feed_lines)


def hex_dump(data: bytes, limit: Optional[int] = 100) -> str:
    """Offset-prefixed hex listing, 16 bytes per line"""
    if limit is not None:
        data = data[:limit]
    lines = []
    for offset in range(0, len(data), 16):
        chunk = data[offset:offset + 16]
        lines.append(f"{offset:04x}: " + " ".join(f"{b:02x}" for b in chunk))
    return "\n".join(lines)
