"""Front-panel user interface: status display, settings pages and buttons."""

from __future__ import annotations

import enum
import time
from collections import deque
from typing import Callable, List, Optional, Sequence, Tuple

from .display import Display
from .settings import NVSettings

# Display wiring
SSD1306_SDA = 8
SSD1306_SCL = 9
SSD1306_ADDR = 0x3C
SSD1306_WIDTH = 128
SSD1306_HEIGHT = 64

# Front-panel buttons
GPIO_BUTTON_LEFT = 18
GPIO_BUTTON_MIDDLE = 17
GPIO_BUTTON_RIGHT = 16

# Serial connection to the host computer
UART_TX = 4
UART_RX = 5

# Joystick 1 lines
JOY1_UP = 10
JOY1_DOWN = 11
JOY1_LEFT = 12
JOY1_RIGHT = 13
JOY1_FIRE = 14

# Joystick 0 lines
JOY0_UP = 19
JOY0_DOWN = 20
JOY0_LEFT = 21
JOY0_RIGHT = 22
JOY0_FIRE = 26

MOUSE_MIN = -7
MOUSE_MAX = 8
DEBOUNCE_COUNT = 10
SERIAL_LINES = 7
SERIAL_REFRESH_US = 500_000
LINE_HEIGHT = 9


def _now_us() -> int:
    return time.monotonic_ns() // 1000


class Page(enum.IntEnum):
    """Pages shown on the display, in the order the middle button cycles them."""

    MOUSE = 0
    JOY0 = 1
    JOY1 = 2
    SERIAL = 3


class Button(enum.IntEnum):
    """Front-panel buttons."""

    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


BUTTON_GPIO = {
    Button.LEFT: GPIO_BUTTON_LEFT,
    Button.MIDDLE: GPIO_BUTTON_MIDDLE,
    Button.RIGHT: GPIO_BUTTON_RIGHT,
}


class UserInterface:
    """Shows connection state and settings, and lets the buttons change them.

    ``clock`` returns microseconds; ``buttons`` returns, for each Button in
    order, whether it is currently held down.
    """

    def __init__(
        self,
        settings: Optional[NVSettings] = None,
        display: Optional[Display] = None,
        clock: Optional[Callable[[], int]] = None,
        buttons: Optional[Callable[[], Sequence[bool]]] = None,
        cpu_freq_hz: int = 250_000_000,
    ) -> None:
        self.settings = settings if settings is not None else NVSettings()
        self.display = (
            display
            if display is not None
            else Display(SSD1306_WIDTH, SSD1306_HEIGHT, SSD1306_ADDR)
        )
        self._clock = clock if clock is not None else _now_us
        self._buttons = buttons
        self.cpu_freq_hz = cpu_freq_hz
        self.page = Page.MOUSE
        self.dirty = True
        self.num_kb = 0
        self.num_mouse = 0
        self.num_joy = 0
        self.serial_lines: deque = deque(maxlen=SERIAL_LINES)
        self.screen: List[Tuple[int, int, str]] = []
        self._button_counts = [0] * len(Button)
        self._serial_tm = self._clock()

    def init(self) -> None:
        """Bring the stored mouse speed into range and start the serial refresh timer."""
        current = self.settings.settings
        current.mouse_speed = max(MOUSE_MIN, min(MOUSE_MAX, current.mouse_speed))
        self._serial_tm = self._clock()

    def usb_connect_state(self, kb: int, mouse: int, joy: int) -> None:
        """Record how many USB keyboards, mice and joysticks are connected."""
        if (self.num_kb, self.num_mouse, self.num_joy) != (kb, mouse, joy):
            self.dirty = True
        self.num_kb = kb
        self.num_mouse = mouse
        self.num_joy = joy

    @property
    def mouse_speed(self) -> int:
        """User mouse speed: 0 is standard, negative slower, positive faster."""
        return self.settings.settings.mouse_speed

    @property
    def joystick(self) -> int:
        """Joystick sources: bit 0 and bit 1 set for D-sub, clear for USB."""
        return self.settings.settings.joy_device

    @property
    def mouse_enabled(self) -> int:
        """1 when the mouse is enabled, 0 when joystick 0 replaces it."""
        return self.settings.settings.mouse_enabled

    @mouse_enabled.setter
    def mouse_enabled(self, enabled) -> None:
        self.settings.settings.mouse_enabled = int(enabled) & 0xFF
        self.settings.write()
        self.dirty = True

    def _draw(self, x: int, y: int, text: str) -> None:
        self.screen.append((x, y, text))
        self.display.draw_string(x, y, 1, text)

    def _clear(self) -> None:
        self.screen.clear()
        self.display.clear()

    def _render_serial(self) -> None:
        self._clear()
        for row, line in enumerate(self.serial_lines):
            self._draw(0, row * LINE_HEIGHT, line)
        self._draw(24, 27, "ST <-> Kbd")

    def _render_status(self) -> None:
        self._clear()
        self._draw(0, 0, f"USB Keyboard  {self.num_kb}")
        self._draw(0, 9, f"USB Mouse     {self.num_mouse}")
        self._draw(0, 18, f"USB Joystick  {self.num_joy}")
        self._draw(0, 27, "Mouse enabled" if self.mouse_enabled else "Joy 0 enabled")
        self._draw(0, 36, f"CPU: {self.cpu_freq_hz / 1_000_000.0:.2f} MHz")

    def _render_mouse(self) -> None:
        self._draw(0, 45, "Mouse speed")
        bar = ["="] * (MOUSE_MAX - MOUSE_MIN + 1)
        bar[self.mouse_speed - MOUSE_MIN] = "*"
        self._draw(0, 54, "".join(bar))

    def _render_joy(self, index: int) -> None:
        source = "DSub" if self.joystick & (1 << index) else "USB"
        self._draw(0, 54, f"Joy {index}: {source}")

    def handle_buttons(self, pressed: Sequence[bool]) -> None:
        """Debounce the button states; a press fires once until released."""
        for button, down in zip(Button, pressed):
            if down:
                # Counting one past the threshold latches until release.
                if self._button_counts[button] <= DEBOUNCE_COUNT:
                    self._button_counts[button] += 1
                    if self._button_counts[button] == DEBOUNCE_COUNT:
                        self.on_button_down(button)
            else:
                self._button_counts[button] = 0

    def _toggle_joystick(self) -> None:
        self.settings.settings.joy_device ^= 1 << (self.page - Page.JOY0)
        self.settings.write()
        self.dirty = True

    def _change_speed(self, step: int) -> None:
        speed = self.mouse_speed + step
        if MOUSE_MIN <= speed <= MOUSE_MAX:
            self.settings.settings.mouse_speed = speed
            self.settings.write()
            self.dirty = True

    def on_button_down(self, button: Button) -> None:
        """Act on a debounced press: middle changes page, left and right edit it."""
        if button == Button.MIDDLE:
            self.page = Page((self.page + 1) % len(Page))
            self.dirty = True
        elif button in (Button.LEFT, Button.RIGHT):
            if self.page == Page.MOUSE:
                self._change_speed(-1 if button == Button.LEFT else 1)
            elif self.page in (Page.JOY0, Page.JOY1):
                self._toggle_joystick()

    def update(self) -> None:
        """Poll the buttons and redraw the display if anything changed."""
        if self._buttons is not None:
            self.handle_buttons(self._buttons())
        if not self.dirty:
            return
        self.dirty = False
        if self.page == Page.SERIAL:
            now = self._clock()
            if now - self._serial_tm >= SERIAL_REFRESH_US:
                self._serial_tm = now
                self._render_serial()
            else:
                self.dirty = True
        else:
            self._render_status()
            if self.page == Page.MOUSE:
                self._render_mouse()
            else:
                self._render_joy(self.page - Page.JOY0)
        if not self.dirty:
            self.display.show()

    def serial(self, send: bool, data: int) -> None:
        """Log a byte on the serial page; sent bytes are indented to the right."""
        prefix = " " * 14 if send else ""
        self.serial_lines.append(f"{prefix}{data & 0xFF:02X}")
        if self.page == Page.SERIAL:
            self.dirty = True