"""CPU register set of the 6301 with condition-code flags and a register command."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

_MASKS = {
    "a": 0xFF,
    "b": 0xFF,
    "ix": 0xFFFF,
    "sp": 0xFFFF,
    "pc": 0xFFFF,
    "iy": 0xFFFF,
    "raw_ccr": 0xFF,
}

_HEX = re.compile(r"\s*(?:0[xX])?([0-9a-fA-F]+)")

_HELP = "Register commands:\n r p|a|b|c|d|x|y|s val   - modify register\n"


class CCRFlag(enum.IntFlag):
    """Condition code register bits."""

    C = 0x01
    V = 0x02
    Z = 0x04
    N = 0x08
    I = 0x10  # noqa: E741
    H = 0x20
    X = 0x40
    S = 0x80


@dataclass
class Registers:
    """Accumulators, index, stack pointer, program counter and condition codes."""

    a: int = 0
    b: int = 0
    ix: int = 0
    sp: int = 0
    pc: int = 0
    iy: int = 0
    raw_ccr: int = 0
    stack_min: Optional[int] = None
    stack_max: Optional[int] = None

    def __setattr__(self, name: str, value) -> None:
        mask = _MASKS.get(name)
        if mask is not None:
            value &= mask
        super().__setattr__(name, value)

    @property
    def d(self) -> int:
        """The double accumulator A:B."""
        return (self.a << 8) | self.b

    @d.setter
    def d(self, value: int) -> None:
        self.a = (value >> 8) & 0xFF
        self.b = value

    @property
    def ccr(self) -> int:
        """The condition codes as the CPU reads them: the two high bits read as one."""
        return self.raw_ccr | 0xC0

    @ccr.setter
    def ccr(self, value: int) -> None:
        self.raw_ccr = value

    def get_flag(self, flag: CCRFlag) -> bool:
        """Return whether ``flag`` is set."""
        return bool(self.raw_ccr & flag)

    def set_flag(self, flag: CCRFlag, value) -> None:
        """Set ``flag`` if ``value`` is true, clear it otherwise."""
        if value:
            self.raw_ccr |= flag
        else:
            self.raw_ccr &= ~flag & 0xFF

    def set_sp(self, value: int) -> int:
        """Set the stack pointer, warning if it leaves the configured limits."""
        if self.stack_min is not None and value <= self.stack_min:
            logger.warning("sp:%04x, min:%04x", self.sp, self.stack_min)
        elif self.stack_max is not None and value > self.stack_max:
            logger.warning("sp:%04x, max:%04x", self.sp, self.stack_max)
        self.sp = value
        return self.sp

    def set_register(self, name: str, value: int) -> None:
        """Set a register by its one-letter name: p, a, b, c, d, x, y or s."""
        if name == "s":
            self.set_sp(value)
            return
        attribute = {
            "p": "pc",
            "a": "a",
            "b": "b",
            "c": "ccr",
            "d": "d",
            "x": "ix",
            "y": "iy",
        }.get(name)
        if attribute is None:
            raise ValueError(f"unknown register {name!r}")
        setattr(self, attribute, value)

    def format(self) -> str:
        """Return a one-line dump of every register and flag."""
        flags = "".join(
            letter if self.get_flag(flag) else letter.lower()
            for letter, flag in (
                ("H", CCRFlag.H),
                ("I", CCRFlag.I),
                ("N", CCRFlag.N),
                ("Z", CCRFlag.Z),
                ("V", CCRFlag.V),
                ("C", CCRFlag.C),
            )
        )
        return (
            f"PC={self.pc:04x} A:B={self.a:02x}{self.b:02x} X={self.ix:04x}"
            f" SP={self.sp:04x} CCR={self.ccr:02x}(11{flags})"
        )

    def command(self, args: Sequence[str]) -> Optional[str]:
        """Run a register command; return its output, or None if it is not one."""
        if not args or not args[0]:
            return None
        verb = args[0][0]
        if verb == "r":
            if len(args) > 2 and args[1]:
                match = _HEX.match(args[2])
                if match:
                    try:
                        self.set_register(args[1][0], int(match.group(1), 16))
                    except ValueError:
                        pass
            return self.format()
        if verb == "h":
            return _HELP
        return None