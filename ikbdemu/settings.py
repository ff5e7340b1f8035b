"""Persistent user settings kept in one flash-sized sector."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

SECTOR_SIZE = 4096
PAGE_SIZE = 256
SETTINGS_VERSION = 1

_LAYOUT = struct.Struct("<BbBB")


def _int8(value: int) -> int:
    return ((value + 128) & 0xFF) - 128


@dataclass
class Settings:
    """User settings: mouse speed -7..8, mouse or joystick 0, joystick sources.

    ``joy_device`` bit 0 and bit 1 select a D-sub (1) or USB (0) joystick.
    """

    version: int = SETTINGS_VERSION
    mouse_speed: int = 0
    mouse_enabled: int = 0
    joy_device: int = 0

    def to_bytes(self) -> bytes:
        """Encode the settings in their stored layout."""
        return _LAYOUT.pack(
            self.version & 0xFF,
            _int8(self.mouse_speed),
            self.mouse_enabled & 0xFF,
            self.joy_device & 0xFF,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "Settings":
        """Decode settings from the start of ``data``."""
        return cls(*_LAYOUT.unpack_from(data))


class NVSettings:
    """Settings backed by a sector file, or by memory when no path is given."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else None
        self.sector = bytearray(b"\xff" * SECTOR_SIZE)
        self.settings = Settings()
        self.read()

    def _load_sector(self) -> bytes:
        if self.path is not None and self.path.exists():
            data = self.path.read_bytes()[:SECTOR_SIZE]
            return data + b"\xff" * (SECTOR_SIZE - len(data))
        return bytes(self.sector)

    def read(self) -> None:
        """Load the settings, resetting and saving defaults if none are valid."""
        self.sector = bytearray(self._load_sector())
        settings = Settings.from_bytes(self.sector)
        if settings.version != SETTINGS_VERSION:
            self.settings = Settings()
            self.write()
        else:
            self.settings = settings

    def write(self) -> None:
        """Erase the sector and program the settings page into it."""
        page = self.settings.to_bytes().ljust(PAGE_SIZE, b"\x00")
        self.sector = bytearray(page + b"\xff" * (SECTOR_SIZE - PAGE_SIZE))
        if self.path is not None:
            self.path.write_bytes(bytes(self.sector))