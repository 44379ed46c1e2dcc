"""
T02 printer facade
Assembles print streams and hands them to a transport
"""

import logging
from typing import Optional

from .constants import DEFAULT_FEED_LINES
from .errors import T02ProtocolError
from .image_transform import SourceImage
from .print_data import generate_print_data
from .printer_models import PrintResponse
from .transport import PrinterDevice

logger = logging.getLogger(__name__)


class T02Printer:
    """Prints images on a Phomemo T02 through any PrinterDevice"""

    def __init__(self, device: Optional[PrinterDevice], feed_lines: int = DEFAULT_FEED_LINES,
                 simulate: bool = False):
        self.device = device
        self.feed_lines = feed_lines
        self.simulate = simulate

        if self.simulate:
            logger.info("🧪 Running in SIMULATION MODE - no actual printing")
        elif device is None:
            raise ValueError("A device is required unless simulating")
        else:
            logger.info(f"🖨️ Printer configured: {device.name}")

    async def print_image(self, image: SourceImage, feed_lines: Optional[int] = None) -> PrintResponse:
        """Print ``image`` and report the outcome

        Nothing is sent when the stream cannot be assembled.
        """
        if feed_lines is None:
            feed_lines = self.feed_lines

        try:
            logger.info("⚙️ Generating print data...")
            data = generate_print_data(image, feed_lines=feed_lines)
            logger.info(f"✓ Generated {len(data)} bytes")
        except T02ProtocolError as e:
            logger.error(f"❌ Failed to generate data: {e}")
            return PrintResponse(success=False, message=str(e), error_kind=e.kind)

        if self.simulate:
            logger.info(f"🧪 SIMULATION complete: {len(data)} bytes not sent")
            return PrintResponse(success=True, message="Simulated print", bytes_sent=0)

        return await self.send(data)

    async def send(self, data: bytes) -> PrintResponse:
        """Write an already assembled stream to the device"""
        try:
            async with self.device:
                await self.device.write(data)
        except T02ProtocolError as e:
            logger.error(f"❌ Failed to send: {e}")
            return PrintResponse(success=False, message=str(e), error_kind=e.kind)

        logger.info(f"✅ Sent {len(data)} bytes to {self.device.name}")
        return PrintResponse(success=True, message="Printed", bytes_sent=len(data))
