"""Frame buffer and command stream for an SSD1306 OLED display on I2C."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)

Transport = Callable[[int, bytes], None]

# Five column bytes per glyph, least significant bit at the top, for ' ' .. '~'.
_GLYPHS = """
0000000000 00005F0000 0007000700 147F147F14 242A7F2A12 2313086462 3649562050 0008070300
001C224100 0041221C00 2A1C7F1C2A 08083E0808 0080703000 0808080808 0000606000 2010080402
3E5149453E 00427F4000 7249494946 2141494D33 1814127F10 2745454539 3C4A494931 4121110907
3649494936 464949291E 0000140000 0040340000 0008142241 1414141414 0041221408 0201590906
3E415D594E 7C1211127C 7F49494936 3E41414122 7F4141413E 7F49494941 7F09090901 3E41415173
7F0808087F 00417F4100 2040413F01 7F08142241 7F40404040 7F021C027F 7F0408107F 3E4141413E
7F09090906 3E4151215E 7F09192946 2649494932 03017F0103 3F4040403F 1F2040201F 3F4038403F
6314081463 0304780403 6159494D43 007F414141 0204081020 004141417F 0402010204 4040404040
0003070800 2054547840 7F28444438 3844444428 384444287F 3854545418 00087E0902 18A4A49C78
7F08040478 00447D4000 2040403D00 7F10284400 00417F4000 7C04780478 7C08040478 3844444438
FC18242418 18242418FC 7C08040408 4854545424 04043F4424 3C4040207C 1C2040201C 3C4030403C
4428102844 4C9090907C 4464544C44 0008364100 0000770000 0041360800 0201020402
"""

# A font is a header of (height, width) followed by the glyph columns.
FONT_8X5 = bytes((8, 5)) + bytes.fromhex(_GLYPHS)

_FIRST_CHAR = 0x20
_LAST_CHAR = ord("~")
_COMMAND_PREFIX = 0x00
_DATA_PREFIX = 0x40


class Command(enum.IntEnum):
    """SSD1306 command bytes."""

    SET_CONTRAST = 0x81
    SET_ENTIRE_ON = 0xA4
    SET_NORM_INV = 0xA6
    SET_DISP = 0xAE
    SET_MEM_ADDR = 0x20
    SET_COL_ADDR = 0x21
    SET_PAGE_ADDR = 0x22
    SET_DISP_START_LINE = 0x40
    SET_SEG_REMAP = 0xA0
    SET_MUX_RATIO = 0xA8
    SET_COM_OUT_DIR = 0xC0
    SET_DISP_OFFSET = 0xD3
    SET_COM_PIN_CFG = 0xDA
    SET_DISP_CLK_DIV = 0xD5
    SET_PRECHARGE = 0xD9
    SET_VCOM_DESEL = 0xDB
    SET_CHARGE_PUMP = 0x8D


def _discard(address: int, data: bytes) -> None:
    pass


class Display:
    """A monochrome display whose frame buffer is one byte per 8-pixel column.

    ``transport(address, data)`` performs an I2C write; it may raise OSError,
    which is logged and otherwise ignored.
    """

    def __init__(
        self,
        width: int = 128,
        height: int = 64,
        address: int = 0x3C,
        transport: Optional[Transport] = None,
        external_vcc: bool = False,
    ) -> None:
        self.width = width
        self.height = height
        self.pages = height // 8
        self.address = address
        self.external_vcc = external_vcc
        self._transport = transport if transport is not None else _discard
        self.buffer = bytearray(self.pages * self.width)
        for value in self._startup_commands():
            self._command(value)

    def _startup_commands(self) -> Iterator[int]:
        """Yield the power-up configuration, panel off first and on last."""
        wide = self.width > 2 * self.height
        settings = [
            (Command.SET_DISP | 0x00, ()),
            (Command.SET_MEM_ADDR, (0x00,)),  # horizontal addressing
            (Command.SET_DISP_START_LINE | 0x00, ()),
            (Command.SET_SEG_REMAP | 0x01, ()),
            (Command.SET_MUX_RATIO, (self.height - 1,)),
            (Command.SET_COM_OUT_DIR | 0x08, ()),
            (Command.SET_DISP_OFFSET, (0x00,)),
            (Command.SET_COM_PIN_CFG, (0x02 if wide else 0x12,)),
            (Command.SET_DISP_CLK_DIV, (0x80,)),
            (Command.SET_PRECHARGE, (0x22 if self.external_vcc else 0xF1,)),
            (Command.SET_VCOM_DESEL, (0x30,)),
            (Command.SET_CONTRAST, (0xFF,)),
            (Command.SET_ENTIRE_ON, ()),
            (Command.SET_NORM_INV, ()),
            (Command.SET_CHARGE_PUMP, (0x10 if self.external_vcc else 0x14,)),
            (Command.SET_DISP | 0x01, ()),
        ]
        for command, arguments in settings:
            yield int(command)
            yield from arguments

    def _send(self, data: bytes, name: str) -> None:
        try:
            self._transport(self.address, data)
        except OSError as exc:
            logger.error("[%s] write failed: %s", name, exc)

    def _command(self, value: int) -> None:
        self._send(bytes((_COMMAND_PREFIX, value & 0xFF)), "ssd1306_write")

    def power_off(self) -> None:
        """Switch the panel off."""
        self._command(Command.SET_DISP | 0x00)

    def power_on(self) -> None:
        """Switch the panel on."""
        self._command(Command.SET_DISP | 0x01)

    def contrast(self, value: int) -> None:
        """Set the contrast, 0..255."""
        self._command(Command.SET_CONTRAST)
        self._command(value)

    def invert(self, inverted) -> None:
        """Invert the display if the low bit of ``inverted`` is set."""
        self._command(Command.SET_NORM_INV | (int(inverted) & 1))

    def clear(self) -> None:
        """Blank the frame buffer."""
        self.buffer[:] = bytes(len(self.buffer))

    def draw_pixel(self, x: int, y: int) -> None:
        """Light one pixel; coordinates off the display are ignored."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return
        page, bit = divmod(y, 8)
        self.buffer[x + self.width * page] |= 1 << bit

    def draw_line(self, x1: int, y1: int, x2: int, y2: int) -> None:
        """Draw a straight line, stepping one pixel per column."""
        if x1 > x2:
            x1, y1, x2, y2 = x2, y2, x1, y1
        if x1 == x2:
            for y in range(min(y1, y2), max(y1, y2) + 1):
                self.draw_pixel(x1, y)
            return
        slope = (y2 - y1) / (x2 - x1)
        for x in range(x1, x2 + 1):
            self.draw_pixel(x, int(slope * (x - x1) + y1))

    def draw_square(self, x: int, y: int, width: int, height: int) -> None:
        """Fill a rectangle of ``width`` by ``height`` pixels."""
        for dx in range(width):
            for dy in range(height):
                self.draw_pixel(x + dx, y + dy)

    def draw_empty_square(self, x: int, y: int, width: int, height: int) -> None:
        """Draw the outline of a rectangle."""
        right, bottom = x + width, y + height
        self.draw_line(x, y, right, y)
        self.draw_line(x, bottom, right, bottom)
        self.draw_line(x, y, x, bottom)
        self.draw_line(right, y, right, bottom)

    def draw_char(self, x: int, y: int, scale: int, char: str, font: bytes = FONT_8X5) -> None:
        """Draw one printable ASCII character; other characters are skipped."""
        code = ord(char)
        if not _FIRST_CHAR <= code <= _LAST_CHAR:
            return
        height, width = font[0], font[1]
        start = 2 + (code - _FIRST_CHAR) * width
        for i, column in enumerate(font[start:start + width]):
            for j in range(height):
                if column >> j & 1:
                    self.draw_square(x + i * scale, y + j * scale, scale, scale)

    def draw_string(self, x: int, y: int, scale: int, text: str, font: bytes = FONT_8X5) -> None:
        """Draw ``text`` left to right, one font-height advance per character."""
        advance = font[0] * scale
        for position, char in enumerate(text):
            self.draw_char(x + position * advance, y, scale, char, font)

    def show(self) -> None:
        """Send the whole frame buffer to the panel."""
        offset = 32 if self.width == 64 else 0
        addressing = (
            Command.SET_COL_ADDR, offset, self.width - 1 + offset,
            Command.SET_PAGE_ADDR, 0, self.pages - 1,
        )
        for value in addressing:
            self._command(value)
        self._send(bytes((_DATA_PREFIX,)) + bytes(self.buffer), "ssd1306_show")