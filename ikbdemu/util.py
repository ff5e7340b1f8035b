"""Bit rotation and time arithmetic helpers."""

from dataclasses import dataclass

_MASK32 = 0xFFFFFFFF
_NSEC_PER_SEC = 1_000_000_000


@dataclass(frozen=True)
class Timespec:
    """A point or span of time in whole seconds plus nanoseconds."""

    sec: int = 0
    nsec: int = 0


def rotr(data: int, bits: int) -> int:
    """Rotate a 32-bit value right by ``bits`` places."""
    data &= _MASK32
    bits %= 32
    return ((data >> bits) | (data << (32 - bits))) & _MASK32


def rotl(data: int, bits: int) -> int:
    """Rotate a 32-bit value left by ``bits`` places."""
    data &= _MASK32
    bits %= 32
    return ((data << bits) | (data >> (32 - bits))) & _MASK32


def timespec_diff(start: Timespec, end: Timespec) -> Timespec:
    """Return ``end - start``, borrowing a second when nanoseconds underflow."""
    nsec = end.nsec - start.nsec
    if nsec < 0:
        return Timespec(end.sec - start.sec - 1, _NSEC_PER_SEC + nsec)
    return Timespec(end.sec - start.sec, nsec)