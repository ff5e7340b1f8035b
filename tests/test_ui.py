import pytest

from ikbdemu.display import Display
from ikbdemu.settings import NVSettings
from ikbdemu.ui import (
    DEBOUNCE_COUNT,
    MOUSE_MAX,
    MOUSE_MIN,
    SERIAL_LINES,
    SERIAL_REFRESH_US,
    Button,
    Page,
    UserInterface,
)


class _Clock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


def _make(tmp_path=None):
    writes = []
    display = Display(transport=lambda address, data: writes.append(bytes(data)))
    clock = _Clock()
    settings = NVSettings(tmp_path / "nv.bin" if tmp_path else None)
    ui = UserInterface(settings=settings, display=display, clock=clock)
    ui.init()
    return ui, writes, clock


def _frames(writes):
    return [w for w in writes if w[0] == 0x40]


def _press(ui, button, times):
    pressed = [b == button for b in Button]
    for _ in range(times):
        ui.handle_buttons(pressed)


def test_usb_state_is_rendered():
    ui, writes, _ = _make()
    ui.usb_connect_state(2, 1, 0)
    ui.update()
    assert ui.dirty is False
    assert (0, 0, "USB Keyboard  2") in ui.screen
    assert (0, 9, "USB Mouse     1") in ui.screen
    assert len(_frames(writes)) == 1
    assert any(ui.display.buffer)


def test_unchanged_usb_state_does_not_redraw():
    ui, writes, _ = _make()
    ui.update()
    ui.usb_connect_state(0, 0, 0)
    assert ui.dirty is False
    ui.update()
    assert len(_frames(writes)) == 1


def test_debounce_fires_once():
    ui, _, _ = _make()
    _press(ui, Button.MIDDLE, DEBOUNCE_COUNT - 1)
    assert ui.page == Page.MOUSE
    _press(ui, Button.MIDDLE, 1)
    assert ui.page == Page.JOY0
    _press(ui, Button.MIDDLE, 50)
    assert ui.page == Page.JOY0
    ui.handle_buttons([False, False, False])
    _press(ui, Button.MIDDLE, DEBOUNCE_COUNT)
    assert ui.page == Page.JOY1


def test_middle_button_cycles_and_wraps():
    ui, _, _ = _make()
    seen = []
    for _ in range(len(Page)):
        ui.on_button_down(Button.MIDDLE)
        seen.append(ui.page)
    assert seen == [Page.JOY0, Page.JOY1, Page.SERIAL, Page.MOUSE]


def test_mouse_speed_is_bounded():
    ui, _, _ = _make()
    for _ in range(30):
        ui.on_button_down(Button.RIGHT)
    assert ui.mouse_speed == MOUSE_MAX
    for _ in range(30):
        ui.on_button_down(Button.LEFT)
    assert ui.mouse_speed == MOUSE_MIN


def test_speed_bar_marker_moves():
    ui, _, _ = _make()
    ui.update()
    bar_before = [t for x, y, t in ui.screen if y == 54][0]
    ui.on_button_down(Button.RIGHT)
    ui.update()
    bar_after = [t for x, y, t in ui.screen if y == 54][0]
    assert bar_before.count("*") == 1 and bar_after.count("*") == 1
    assert len(bar_before) == MOUSE_MAX - MOUSE_MIN + 1
    assert bar_after.index("*") == bar_before.index("*") + 1


@pytest.mark.parametrize("page,bit", [(Page.JOY0, 1), (Page.JOY1, 2)])
def test_joystick_page_toggles_source(page, bit):
    ui, _, _ = _make()
    ui.page = page
    ui.on_button_down(Button.LEFT)
    assert ui.joystick == bit
    ui.update()
    assert (0, 54, f"Joy {page - Page.JOY0}: DSub") in ui.screen
    ui.on_button_down(Button.RIGHT)
    assert ui.joystick == 0


def test_mouse_enabled_persists(tmp_path):
    ui, _, _ = _make(tmp_path)
    ui.mouse_enabled = True
    assert ui.mouse_enabled == 1
    assert ui.dirty is True
    assert NVSettings(tmp_path / "nv.bin").settings.mouse_enabled == 1


def test_init_clamps_stored_speed():
    ui, _, _ = _make()
    ui.settings.settings.mouse_speed = 20
    ui.init()
    assert ui.mouse_speed == MOUSE_MAX
    ui.settings.settings.mouse_speed = -20
    ui.init()
    assert ui.mouse_speed == MOUSE_MIN


def test_serial_log_format_and_length():
    ui, _, _ = _make()
    ui.serial(True, 0x1A)
    ui.serial(False, 0x1A)
    assert list(ui.serial_lines) == [" " * 14 + "1A", "1A"]
    for value in range(20):
        ui.serial(False, value)
    assert len(ui.serial_lines) == SERIAL_LINES
    assert ui.serial_lines[-1] == f"{19:02X}"


def test_serial_page_waits_for_refresh():
    ui, writes, clock = _make()
    ui.update()
    ui.page = Page.SERIAL
    ui.serial(False, 0x80)
    assert ui.dirty is True
    clock.now = SERIAL_REFRESH_US - 1
    ui.update()
    assert ui.dirty is True
    assert len(_frames(writes)) == 1
    clock.now = SERIAL_REFRESH_US
    ui.update()
    assert ui.dirty is False
    assert len(_frames(writes)) == 2
    assert (24, 27, "ST <-> Kbd") in ui.screen
    assert (0, 0, "80") in ui.screen


def test_update_polls_buttons():
    ui, _, _ = _make()
    held = [False, True, False]
    ui._buttons = lambda: held
    for _ in range(DEBOUNCE_COUNT):
        ui.update()
    assert ui.page == Page.JOY0