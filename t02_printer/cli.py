"""
T02 printer command-line tool

    t02-print find [--ble]                  find T02 devices
    t02-print print IMAGE DEVICE [FEED]     print over a serial device node
    t02-print bt IMAGE [FEED] [--address]   print over Bluetooth LE
    t02-print demo DEVICE [--delay]         print every test pattern
    t02-print create OUTPUT                 write a 384x200 test label
    t02-print debug IMAGE [OUTPUT]          dump the generated stream
"""

import argparse
import asyncio
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .config import PrinterSettings
from .errors import T02ProtocolError
from .image_source import load_image
from .print_data import generate_print_data, hex_dump
from .printer import T02Printer
from .patterns import FIXTURES, create_test_label
from .transport import BluetoothDevice, SerialDevice, discover_printer, find_serial_devices, is_printer_name

logger = logging.getLogger("t02_printer")

DEFAULT_DEBUG_OUTPUT = os.path.join(tempfile.gettempdir(), "t02_protocol_output.bin")
RULE = "=" * 60
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def cmd_find(args, settings: PrinterSettings) -> int:
    print("🔍 Searching for T02 printer...")
    print("\nSerial devices:")
    try:
        devices = find_serial_devices(args.dev_dir)
    except T02ProtocolError as e:
        logger.error(f"❌ {e}")
        devices = []
    if not devices:
        print("  ❌ No serial devices found")
        print("\n💡 Tips:")
        print("  1. Turn on your T02 printer")
        print("  2. Pair with the 'T02' device in your Bluetooth settings")
        print("  3. Wait a few seconds and try again")
    for path in devices:
        print(f"  ✓ {path}")
    likely = [path for path in devices if is_printer_name(Path(path).name)]
    if likely:
        print(f"\n📌 Recommended: {likely[0]}")

    if args.ble:
        try:
            address = asyncio.run(discover_printer(args.timeout))
        except T02ProtocolError as e:
            logger.error(f"❌ {e}")
            address = None
        print(f"\n📡 Bluetooth LE: {address or 'not found'}")
        return 0 if address or devices else 1
    return 0 if devices else 1


def _print_with(device, image_path: str, feed_lines: int, simulate: bool) -> bool:
    print(RULE)
    print(f"Printing: {Path(image_path).name}")
    print(RULE)
    try:
        image = load_image(image_path)
    except T02ProtocolError as e:
        logger.error(f"❌ {e}")
        return False

    printer = T02Printer(device, feed_lines=feed_lines, simulate=simulate)
    response = asyncio.run(printer.print_image(image))
    if response.success:
        print("\n  ✨ Check your printer for output.")
    return response.success


def cmd_print(args, settings: PrinterSettings) -> int:
    feed = settings.feed_lines if args.feed is None else args.feed
    device = SerialDevice(args.device, settle_time=settings.settle_time)
    return 0 if _print_with(device, args.image, feed, settings.simulation_mode) else 1


def cmd_bt(args, settings: PrinterSettings) -> int:
    feed = settings.feed_lines if args.feed is None else args.feed
    address = args.address or settings.ble_address
    if not address and not settings.simulation_mode:
        try:
            address = asyncio.run(discover_printer(args.timeout))
        except T02ProtocolError as e:
            logger.error(f"❌ {e}")
            return 1
        if not address:
            return 1

    device = None
    if address:
        device = BluetoothDevice(address, chunk_size=settings.chunk_size,
                                 chunk_delay=settings.chunk_delay,
                                 settle_time=settings.ble_settle_time)
    return 0 if _print_with(device, args.image, feed, settings.simulation_mode) else 1


def cmd_demo(args, settings: PrinterSettings) -> int:
    print(RULE)
    print("T02 PRINTER DEMO")
    print(RULE)

    device_path = args.device or settings.device_path
    if not device_path and not settings.simulation_mode:
        logger.error("❌ demo requires a device (argument or T02_DEVICE)")
        return 1
    device = SerialDevice(device_path, settle_time=settings.settle_time) if device_path else None
    printer = T02Printer(device, feed_lines=settings.feed_lines, simulate=settings.simulation_mode)
    results = []
    for index, (filename, factory) in enumerate(FIXTURES.items()):
        if index:
            print(f"\n  ⏳ Waiting {args.delay:g} seconds before next print...")
            time.sleep(args.delay)
        print(f"\nTest: {filename}")
        response = asyncio.run(printer.print_image(factory()))
        results.append((filename, response.success))

    passed = sum(1 for _, ok in results if ok)
    print(f"\n{RULE}\nDEMO COMPLETE\n{RULE}")
    print(f"\nResults: {passed}/{len(results)} printed successfully")
    for filename, ok in results:
        print(f"  {'✓' if ok else '✗'} {filename}")
    return 0 if passed == len(results) else 1


def cmd_create(args, settings: PrinterSettings) -> int:
    print("🎨 Creating test image...")
    image = create_test_label()
    try:
        image.save(args.output, format="PNG")
    except (OSError, ValueError) as e:
        logger.error(f"❌ Failed to save image: {e}")
        return 1
    print(f"  ✓ Created test image: {args.output}")
    print(f"  📏 Size: {image.width}x{image.height} pixels (50mm x 26mm)")
    return 0


def cmd_debug(args, settings: PrinterSettings) -> int:
    print("🔍 Debug Protocol Generation")
    print(RULE)
    try:
        image = load_image(args.image)
        print(f"  📥 Image: {image.width}x{image.height} pixels")
        data = generate_print_data(image, feed_lines=settings.feed_lines)
    except T02ProtocolError as e:
        logger.error(f"❌ {e}")
        return 1
    print(f"  ✓ Generated {len(data)} bytes\n")
    print(f"First {min(100, len(data))} bytes:")
    print(hex_dump(data, 100))
    print()

    output = Path(args.output or DEFAULT_DEBUG_OUTPUT)
    try:
        output.write_bytes(data)
    except OSError as e:
        logger.error(f"❌ Cannot write {output}: {e}")
        return 1
    print(f"  ✓ Wrote to: {output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="t02-print", description="Phomemo T02 printer tool")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    find = sub.add_parser("find", help="Find T02 devices")
    find.add_argument("--ble", action="store_true", help="Also scan Bluetooth LE")
    find.add_argument("--timeout", type=float, default=10.0)
    find.add_argument("--dev-dir", default="/dev", help=argparse.SUPPRESS)
    find.set_defaults(func=cmd_find)

    prt = sub.add_parser("print", help="Print an image over a serial device")
    prt.add_argument("image")
    prt.add_argument("device")
    prt.add_argument("feed", type=int, nargs="?")
    prt.set_defaults(func=cmd_print)

    bt = sub.add_parser("bt", help="Print an image over Bluetooth LE")
    bt.add_argument("image")
    bt.add_argument("feed", type=int, nargs="?")
    bt.add_argument("--address", help="Printer address (scans when omitted)")
    bt.add_argument("--timeout", type=float, default=10.0)
    bt.set_defaults(func=cmd_bt)

    demo = sub.add_parser("demo", help="Print every test pattern")
    demo.add_argument("device", nargs="?", help="Defaults to T02_DEVICE")
    demo.add_argument("--delay", type=float, default=3.0)
    demo.set_defaults(func=cmd_demo)

    create = sub.add_parser("create", help="Create a test label image")
    create.add_argument("output")
    create.set_defaults(func=cmd_create)

    debug = sub.add_parser("debug", help="Dump the generated print stream")
    debug.add_argument("image")
    debug.add_argument("output", nargs="?")
    debug.set_defaults(func=cmd_debug)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = PrinterSettings.from_env()
    except ValidationError as e:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error(f"❌ Invalid T02_* settings: {e}")
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format=LOG_FORMAT
    )
    return args.func(args, settings)

