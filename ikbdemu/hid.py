"""Translation of USB keyboard, mouse and joystick input into IKBD state."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .keymap import st_key_from_hid
from .mouse import AtariSTMouse
from .ui import (
    JOY0_DOWN,
    JOY0_FIRE,
    JOY0_LEFT,
    JOY0_RIGHT,
    JOY0_UP,
    JOY1_DOWN,
    JOY1_FIRE,
    JOY1_LEFT,
    JOY1_RIGHT,
    JOY1_UP,
    UserInterface,
)

logger = logging.getLogger(__name__)

# Scroll Lock switches between mouse and joystick 0.
TOGGLE_MOUSE_MODE = 71

ATARI_LSHIFT = 42
ATARI_RSHIFT = 54
ATARI_ALT = 56
ATARI_CTRL = 29

NUM_KEYS = 128
KEYS_PER_REPORT = 6

# Keyboard report modifier bits
MODIFIER_LEFTCTRL = 0x01
MODIFIER_LEFTSHIFT = 0x02
MODIFIER_LEFTALT = 0x04
MODIFIER_LEFTGUI = 0x08
MODIFIER_RIGHTCTRL = 0x10
MODIFIER_RIGHTSHIFT = 0x20
MODIFIER_RIGHTALT = 0x40
MODIFIER_RIGHTGUI = 0x80

# HID usages
USAGE_PAGE_GENERIC_DCTRL = 0x01
USAGE_PAGE_BUTTON = 0x09
USAGE_X = 0x30
USAGE_Y = 0x31

MOUSE_BUTTON_LEFT = 0x01
MOUSE_BUTTON_RIGHT = 0x02

_JOY1_PINS = (JOY1_UP, JOY1_DOWN, JOY1_LEFT, JOY1_RIGHT)
_JOY0_PINS = (JOY0_UP, JOY0_DOWN, JOY0_LEFT, JOY0_RIGHT)

Gpio = Callable[[int], bool]
Report = Optional[Sequence["ReportItem"]]


class DeviceType(enum.Enum):
    """Kinds of USB HID device the emulator makes use of."""

    KEYBOARD = "keyboard"
    MOUSE = "mouse"
    JOYSTICK = "joystick"


@dataclass(frozen=True)
class ReportItem:
    """One decoded field of a HID report; ``value`` is the raw unsigned field."""

    usage_page: int
    usage: int
    value: int
    bit_size: int = 8
    is_input: bool = True

    @property
    def signed_value(self) -> int:
        """The value sign-extended from ``bit_size`` bits."""
        mask = (1 << self.bit_size) - 1
        raw = self.value & mask
        if raw & (1 << (self.bit_size - 1)):
            return raw - (1 << self.bit_size)
        return raw

    def is_button(self) -> bool:
        return self.usage_page == USAGE_PAGE_BUTTON and self.is_input

    def is_axis(self) -> bool:
        return (
            self.usage_page == USAGE_PAGE_GENERIC_DCTRL
            and self.usage in (USAGE_X, USAGE_Y)
            and self.is_input
        )


@dataclass(frozen=True)
class KeyboardReport:
    """A boot-protocol keyboard report: modifier bits and up to six key codes."""

    modifier: int = 0
    keycodes: Tuple[int, ...] = field(default_factory=tuple)


class HidInput:
    """Holds key, mouse button and joystick state as the IKBD reads it."""

    def __init__(self, ui: UserInterface, mouse: Optional[AtariSTMouse] = None) -> None:
        self.ui = ui
        self.mouse = mouse if mouse is not None else AtariSTMouse()
        self.devices: Dict[int, DeviceType] = {}
        self.key_states: List[int] = [0] * NUM_KEYS
        self.mouse_state = 0
        self.joystick_state = 0

    def _count(self, device_type: DeviceType) -> int:
        return sum(1 for kind in self.devices.values() if kind is device_type)

    def _notify(self) -> None:
        self.ui.usb_connect_state(
            self._count(DeviceType.KEYBOARD),
            self._count(DeviceType.MOUSE),
            self._count(DeviceType.JOYSTICK),
        )

    def mount(self, address: int, device_type: DeviceType) -> None:
        """Record a newly connected device at ``address``."""
        logger.info("A %s device (address %d) is mounted", device_type.value, address)
        self.devices[address] = DeviceType(device_type)
        self._notify()

    def unmount(self, address: int) -> None:
        """Forget the device at ``address``."""
        device_type = self.devices.pop(address, None)
        if device_type is not None:
            logger.info("A %s device (address %d) is unmounted", device_type.value, address)
        self._notify()

    def force_usb_mouse(self) -> None:
        """Enable the mouse in place of joystick 0."""
        self.ui.mouse_enabled = True

    @property
    def mouse_enabled(self) -> bool:
        """Whether the mouse, rather than joystick 0, is enabled."""
        return bool(self.ui.mouse_enabled)

    @property
    def mouse_buttons(self) -> int:
        """Button bits: bit 1 left mouse / joystick 0 fire, bit 0 right / joystick 1 fire."""
        return self.mouse_state

    @property
    def joystick(self) -> int:
        """Joystick directions: joystick 0 in the low nibble, joystick 1 in the high."""
        return self.joystick_state

    def handle_keyboard(self, report: KeyboardReport) -> None:
        """Update key states from one keyboard report."""
        st_keys = set()
        for code in report.keycodes[:KEYS_PER_REPORT]:
            if 0 < code < NUM_KEYS:
                st_keys.add(st_key_from_hid(code))
                if code == TOGGLE_MOUSE_MODE:
                    self.ui.mouse_enabled = not self.ui.mouse_enabled
        for key in range(1, NUM_KEYS):
            self.key_states[key] = 1 if key in st_keys else 0

        modifier = report.modifier
        self.key_states[ATARI_LSHIFT] = 1 if modifier & MODIFIER_LEFTSHIFT else 0
        self.key_states[ATARI_RSHIFT] = 1 if modifier & MODIFIER_RIGHTSHIFT else 0
        self.key_states[ATARI_CTRL] = (
            1 if modifier & (MODIFIER_LEFTCTRL | MODIFIER_RIGHTCTRL) else 0
        )
        self.key_states[ATARI_ALT] = (
            1 if modifier & (MODIFIER_LEFTALT | MODIFIER_RIGHTALT) else 0
        )

    def handle_mouse(self, items: Optional[Iterable[ReportItem]]) -> None:
        """Apply a mouse report (None if none is ready) to buttons and motion."""
        x = 0
        y = 0
        if items is not None:
            buttons = 0
            for item in items:
                if item.is_button():
                    buttons |= (1 if item.value else 0) << (item.usage - 1)
                elif item.is_axis():
                    if item.usage == USAGE_X:
                        x = item.signed_value
                    else:
                        y = item.signed_value
            self.mouse_state = (self.mouse_state & 0xFD) | (
                2 if buttons & MOUSE_BUTTON_LEFT else 0
            )
            self.mouse_state = (self.mouse_state & 0xFE) | (
                1 if buttons & MOUSE_BUTTON_RIGHT else 0
            )
        accel = 1.0 + self.ui.mouse_speed * 0.1
        self.mouse.set_speed(int(x * accel), int(y * accel))

    @staticmethod
    def _usb_joystick(items: Report, axis: int, button: int) -> Tuple[bool, int, int]:
        if items is None:
            return False, axis, button
        for item in items:
            if item.is_button():
                button |= item.value
            elif item.is_axis():
                bit = 2 if item.usage == USAGE_X else 0
                # Up and left read below 0x80, down and right above it.
                axis &= ~(0x3 << bit) & 0xFF
                if item.value < 0x80:
                    axis |= 1 << bit
                elif item.value > 0x80:
                    axis |= 1 << (bit + 1)
        return True, axis, button

    @staticmethod
    def _gpio_axis(gpio: Gpio, pins: Sequence[int], axis: int) -> int:
        for bit, pin in enumerate(pins):
            if not gpio(pin):
                axis |= 1 << bit
        return axis

    def handle_joystick(
        self,
        gpio: Gpio,
        usb_reports: Optional[Mapping[int, Report]] = None,
    ) -> None:
        """Read both joysticks from D-sub lines or USB reports.

        ``gpio(pin)`` returns the line level (low means pressed); ``usb_reports``
        maps a joystick's address to its report, absent or None when not ready.
        """
        usb_reports = usb_reports or {}
        axis = 0
        button = 0
        joystick_addresses = sorted(
            address
            for address, kind in self.devices.items()
            if kind is DeviceType.JOYSTICK
        )
        next_joystick = 0

        for joystick in (1, 0):
            if self.ui.joystick & (1 << joystick):
                if joystick == 1:
                    self.mouse_state = (self.mouse_state & 0xFE) | (0 if gpio(JOY1_FIRE) else 1)
                    axis = self._gpio_axis(gpio, _JOY1_PINS, axis)
                    self.joystick_state &= 0x0F
                    self.joystick_state = (self.joystick_state | (axis << 4)) & 0xFF
                elif not self.ui.mouse_enabled:
                    self.mouse_state = (self.mouse_state & 0xFD) | (0 if gpio(JOY0_FIRE) else 2)
                    axis = self._gpio_axis(gpio, _JOY0_PINS, axis)
                    self.joystick_state &= 0xF0
                    self.joystick_state |= axis
            elif next_joystick < len(joystick_addresses):
                address = joystick_addresses[next_joystick]
                ready, axis, button = self._usb_joystick(usb_reports.get(address), axis, button)
                if ready:
                    if joystick == 0:
                        if not self.ui.mouse_enabled:
                            self.mouse_state = (self.mouse_state & 0xFD) | (2 if button else 0)
                            self.joystick_state &= 0xF0
                            self.joystick_state |= axis
                    else:
                        self.mouse_state = (self.mouse_state & 0xFE) | (1 if button else 0)
                        self.joystick_state &= 0x0F
                        self.joystick_state = (self.joystick_state | (axis << 4)) & 0xFF
                next_joystick += 1

    def reset(self) -> None:
        """Release every key."""
        self.key_states = [0] * NUM_KEYS

    def keydown(self, code: int) -> int:
        """Return 1 if the ST key ``code`` is down, 0 otherwise or if out of range."""
        if 0 <= code < NUM_KEYS:
            return self.key_states[code]
        return 0