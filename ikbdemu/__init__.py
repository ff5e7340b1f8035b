"""Atari ST keyboard controller parts: HD6301 peripherals, mouse, HID input, settings, display and serial link."""

__version__ = "0.1.0"