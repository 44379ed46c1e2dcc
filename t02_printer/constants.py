"""
Phomemo T02 hardware parameters and ESC/POS command bytes
"""

# Printer geometry (50mm paper at 203 DPI)
WIDTH_DOTS = 384
WIDTH_BYTES = WIDTH_DOTS // 8
DPI = 203

# A single GS v 0 command cannot describe more than 255 lines
MAX_LINES_PER_BLOCK = 255

DEFAULT_FEED_LINES = 4

# Inverted samples at or above this value are printed
THRESHOLD = 128

ESC = 0x1B
GS = 0x1D

# BLE GATT characteristics exposed by the printer
NOTIFY_CHARACTERISTIC = "0000ff01-0000-1000-8000-00805f9b34fb"
WRITE_CHARACTERISTIC = "0000ff02-0000-1000-8000-00805f9b34fb"
STATUS_CHARACTERISTIC = "0000ff03-0000-1000-8000-00805f9b34fb"

# Conservative BLE write size (default MTU payload) and pause between writes
BLE_CHUNK_SIZE = 20
BLE_CHUNK_DELAY = 0.05
# Time the printer needs to finish the job before the link is dropped
BLE_SETTLE_TIME = 5.0

PRINTER_NAME_MARKERS = ("T02", "PHOMEMO")
