"""
Runtime settings for the T02 tools, read from T02_* environment variables
"""

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from .constants import BLE_CHUNK_DELAY, BLE_CHUNK_SIZE, BLE_SETTLE_TIME, DEFAULT_FEED_LINES


class PrinterSettings(BaseModel):
    feed_lines: int = Field(DEFAULT_FEED_LINES, ge=0, le=255, description="Lines fed after each print")
    device_path: Optional[str] = Field(None, description="Serial device node, e.g. /dev/cu.T02")
    ble_address: Optional[str] = Field(None, description="BLE address or CoreBluetooth UUID")
    simulation_mode: bool = Field(False, description="Assemble streams without sending them")
    chunk_size: int = Field(BLE_CHUNK_SIZE, gt=0, le=512, description="Bytes per BLE write")
    chunk_delay: float = Field(BLE_CHUNK_DELAY, ge=0, description="Seconds between BLE writes")
    settle_time: float = Field(2.0, ge=0, description="Seconds to wait after a serial write")
    ble_settle_time: float = Field(BLE_SETTLE_TIME, ge=0, description="Seconds to wait after the last BLE write")
    log_level: str = Field("INFO", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def known_level(cls, value: str) -> str:
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown logging level {value!r}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PrinterSettings":
        env = os.environ if environ is None else environ
        values = {
            "device_path": env.get("T02_DEVICE"),
            "ble_address": env.get("T02_BLE_ADDRESS"),
            "simulation_mode": env.get("T02_SIMULATION_MODE", "false").lower() == "true",
            "log_level": env.get("T02_LOG_LEVEL", "INFO").upper(),
        }
        # Unset numeric values fall back to the field defaults
        for field, name in (("feed_lines", "T02_FEED_LINES"),
                            ("chunk_size", "T02_BLE_CHUNK_SIZE"),
                            ("chunk_delay", "T02_BLE_CHUNK_DELAY"),
                            ("settle_time", "T02_SETTLE_TIME"),
                            ("ble_settle_time", "T02_BLE_SETTLE_TIME")):
            if env.get(name):
                values[field] = env[name]
        return cls(**values)
