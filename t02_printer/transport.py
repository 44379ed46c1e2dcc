"""
Transports that carry an assembled print stream to the T02

Each device exposes the same async interface (open, write, close) and can be
used as an async context manager. Failures are raised as TransportError.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from bleak import BleakClient, BleakScanner
from bleak.exc import BleakError

from .constants import (
    BLE_CHUNK_DELAY,
    BLE_CHUNK_SIZE,
    BLE_SETTLE_TIME,
    NOTIFY_CHARACTERISTIC,
    PRINTER_NAME_MARKERS,
    STATUS_CHARACTERISTIC,
    WRITE_CHARACTERISTIC,
)
from .errors import TransportError

logger = logging.getLogger(__name__)


class PrinterDevice:
    """Base for byte sinks; subclasses implement the three coroutines"""

    name = "device"

    async def open(self):
        pass

    async def write(self, data: bytes):
        raise NotImplementedError

    async def close(self):
        pass

    async def __aenter__(self):
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()


class BluetoothDevice(PrinterDevice):
    def __init__(self, address: str, chunk_size: int = BLE_CHUNK_SIZE,
                 chunk_delay: float = BLE_CHUNK_DELAY, settle_time: float = BLE_SETTLE_TIME):
        self.address = address
        self.name = address
        self.chunk_size = chunk_size
        self.chunk_delay = chunk_delay
        self.settle_time = settle_time
        self.with_response = True
        self.client = BleakClient(address)

    async def open(self):
        logger.info(f"🔌 Connecting to {self.address}...")
        try:
            await self.client.connect()
        except (BleakError, asyncio.TimeoutError) as e:
            raise TransportError(f"Cannot connect to {self.address}: {e}") from e

        characteristic = self.client.services.get_characteristic(WRITE_CHARACTERISTIC)
        if characteristic is None:
            await self.client.disconnect()
            raise TransportError(f"{self.address} has no write characteristic {WRITE_CHARACTERISTIC}")
        # Acknowledged writes only when the printer supports them
        self.with_response = "write" in characteristic.properties
        logger.debug(f"Write characteristic properties: {characteristic.properties}")

        for uuid in (NOTIFY_CHARACTERISTIC, STATUS_CHARACTERISTIC):
            try:
                await self.client.start_notify(uuid, self._notification_handler)
            except BleakError as e:
                logger.warning(f"⚠️ No notifications on {uuid}: {e}")
        logger.info("✓ Connected")

    async def close(self):
        if self.client.is_connected:
            await self.client.disconnect()
            logger.info("🔌 Disconnected")

    async def write(self, data: bytes):
        """Send ``data`` in small GATT writes, pausing between each

        Waits ``settle_time`` after the last chunk so the printer can finish
        before the connection is closed.
        """
        total = len(data)
        logger.info(f"📤 Sending {total} bytes in {self.chunk_size}-byte chunks...")
        sent = 0
        try:
            while sent < total:
                chunk = data[sent:sent + self.chunk_size]
                await self.client.write_gatt_char(WRITE_CHARACTERISTIC, chunk, response=self.with_response)
                sent += len(chunk)
                if sent % 1000 == 0 or sent == total:
                    logger.info(f"ℹ️ Sent {sent}/{total} bytes ({sent * 100 // total}%)")
                await asyncio.sleep(self.chunk_delay)
        except BleakError as e:
            raise TransportError(f"Write failed after {sent}/{total} bytes: {e}") from e

        if self.settle_time:
            logger.info("⏳ Giving printer time to process...")
            await asyncio.sleep(self.settle_time)

    def _notification_handler(self, sender, data: bytearray):
        logger.debug(f"BLE notification from {sender}: {bytes(data).hex()}")


class SerialDevice(PrinterDevice):
    """Bluetooth serial (RFCOMM) or USB device node"""

    def __init__(self, path: Union[str, Path], settle_time: float = 2.0):
        self.path = str(path)
        self.name = self.path
        self.settle_time = settle_time

    async def write(self, data: bytes):
        await asyncio.to_thread(self._write_all, data)
        if self.settle_time:
            logger.info("⏳ Giving printer time to process...")
            await asyncio.sleep(self.settle_time)

    def _write_all(self, data: bytes):
        logger.info(f"📤 Opening {self.path}...")
        # O_NOCTTY keeps the device from becoming our controlling terminal
        flags = os.O_WRONLY | getattr(os, "O_NOCTTY", 0)
        try:
            fd = os.open(self.path, flags)
        except OSError as e:
            raise TransportError(f"Cannot open {self.path}: {e.strerror or e}") from e

        try:
            written = os.write(fd, data)
        except OSError as e:
            raise TransportError(f"Write to {self.path} failed: {e.strerror or e}") from e
        finally:
            os.close(fd)

        if written != len(data):
            raise TransportError(f"Only wrote {written} of {len(data)} bytes")
        logger.info(f"✓ Sent {written} bytes")


class FileDevice(PrinterDevice):
    """Writes the stream to a regular file instead of a printer"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.name = str(self.path)

    async def write(self, data: bytes):
        try:
            self.path.write_bytes(data)
        except OSError as e:
            raise TransportError(f"Cannot write {self.path}: {e}") from e
        logger.info(f"✓ Wrote {len(data)} bytes to {self.path}")


def is_printer_name(name: Optional[str]) -> bool:
    return bool(name) and any(marker in name.upper() for marker in PRINTER_NAME_MARKERS)


def find_serial_devices(dev_dir: Union[str, Path] = "/dev") -> List[str]:
    """Candidate serial device paths, printer-named ones first"""
    dev_dir = Path(dev_dir)
    try:
        names = sorted(
            entry.name for entry in dev_dir.iterdir()
            if entry.name.startswith(("cu.", "tty."))
        )
    except OSError as e:
        raise TransportError(f"Cannot list {dev_dir}: {e}") from e

    likely = [n for n in names if is_printer_name(n)]
    others = [n for n in names if not is_printer_name(n)]
    return [str(dev_dir / n) for n in likely + others]


async def discover_printer(timeout: float = 10.0) -> Optional[str]:
    """Scan for a BLE device named like a T02; returns its address"""
    logger.info(f"🔍 Scanning for T02 printer ({timeout:.0f}s)...")
    try:
        devices = await BleakScanner.discover(timeout=timeout)
    except BleakError as e:
        raise TransportError(f"Bluetooth scan failed: {e}") from e

    for device in devices:
        logger.debug(f"Discovered: {device.name or 'unnamed'} ({device.address})")
        if is_printer_name(device.name):
            logger.info(f"✓ Found T02 printer: {device.name} ({device.address})")
            return device.address

    logger.warning("❌ No T02 printer found")
    return None
