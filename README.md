# ikbdemu

Building blocks for emulating the Atari ST intelligent keyboard (IKBD)
controller. The package models the HD6301 on-chip peripherals and the
devices around it: the mouse encoder, USB input translation, stored
settings, a small SSD1306 OLED front panel and the serial link to the ST.

## Modules

- `ikbdemu.chip` – register offsets, bit masks and interrupt vectors of the
  HD6301, and `InternalRegisters`, the on-chip register file with
  `get_byte`/`put_byte` and big-endian `get_word`/`put_word`. Offsets
  outside the file raise `IndexError`.
- `ikbdemu.registers` – `Registers` (A, B, the double accumulator `d`, X, Y,
  SP, PC and the condition codes) and `CCRFlag`. `set_register` takes a
  one-letter name (`p a b c d x y s`) and raises `ValueError` for any other;
  `format()` returns a one-line dump; `command(args)` runs the `r` (set and
  show) and `h` (help) commands and returns their text, or `None` for
  anything else. `set_sp` logs a warning when optional `stack_min` /
  `stack_max` limits are crossed.
- `ikbdemu.timer` – `Timer`: TCSR reads and writes, OCR writes and
  `increment(ncycles)` of the free-running counter, raising the overflow
  (TOF) and output compare (OCF) flags.
- `ikbdemu.sci` – `SerialInterface`: received bytes with overrun detection,
  TRCSR/RDR/TDR access and `interrupt_pending()`. Transmitted bytes go to a
  `transmit` callable.
- `ikbdemu.symtab` – `SymbolTable` of up to 1024 symbols with names cut to
  32 characters; adding to a full table raises `SymbolTableFull`.
- `ikbdemu.mouse` – `AtariSTMouse`, which rotates the X and Y quadrature
  registers at a rate set by `set_speed(x, y)`; `update()` rotates any axis
  whose period has elapsed and `tick()` returns both registers. A clock and
  a random generator can be passed in.
- `ikbdemu.keymap` – `st_key_from_hid` and `st_key_from_pc` map USB HID key
  codes and PC scancodes (UK layout) to ST scancodes, 0 where there is none.
- `ikbdemu.hid` – `HidInput` turns `KeyboardReport`s and lists of
  `ReportItem`s into ST key states, mouse buttons, mouse motion and joystick
  bits. Devices are recorded with `mount`/`unmount` and a `DeviceType`;
  D-sub joystick lines are read through a `gpio(pin)` callable.
- `ikbdemu.settings` – `Settings` (version, mouse speed, mouse/joystick
  mode, joystick sources) and `NVSettings`, which keeps them in a 4096-byte
  sector, in a file when given a path and in memory otherwise. An invalid
  sector is replaced by defaults and written back.
- `ikbdemu.display` – `Display`, an SSD1306 frame buffer with pixel, line,
  rectangle and text drawing using the built-in 8×5 font `FONT_8X5`.
  Commands and the buffer are sent through a `transport(address, data)`
  callable; `OSError` from it is logged.
- `ikbdemu.ui` – `UserInterface`, the front panel with `Page`s (mouse,
  joystick 0, joystick 1, serial log) and three debounced `Button`s that
  cycle pages, change the mouse speed and switch joystick sources. Drawn
  text is also kept in its `screen` list.
- `ikbdemu.serialport` – `SerialPort`, a non-blocking 7812 baud 8N1 link
  built on pyserial. `open(device)` accepts a device path or a pyserial URL;
  failures and use of a closed port raise `SerialPortError`.
- `ikbdemu.util` – 32-bit `rotl`/`rotr` and `timespec_diff` on `Timespec`.

## Installation

```
pip install ikbdemu
```

## Examples

```python
from ikbdemu.chip import OCF, OCR, TCSR, InternalRegisters
from ikbdemu.keymap import st_key_from_hid
from ikbdemu.sci import SerialInterface
from ikbdemu.timer import Timer

print(st_key_from_hid(0x04))        # 30, the ST "a" key

iram = InternalRegisters()
timer = Timer(iram)
iram.put_word(OCR, 100)
timer.increment(150)
print(bool(iram[TCSR] & OCF))       # True: the counter passed the compare value

sent = []
sci = SerialInterface(iram, transmit=sent.append)
sci.receive(0x80)
print(hex(sci.read_rdr()))          # 0x80
sci.write_tdr(0xF6)
print(sent)                         # [246]
```

```python
from ikbdemu.display import Display

frames = []
display = Display(transport=lambda address, data: frames.append(data))
display.draw_string(0, 0, 1, "Hello")
display.show()
```

## What the package does not do

It does not execute HD6301 instructions and ships no keyboard ROM: the
peripherals are there for a CPU core to drive, but no core is included.
There is no command-line program or main loop tying the parts together.
USB devices are not enumerated; keyboard, mouse and joystick reports must be
decoded elsewhere and passed to `HidInput`. Hardware lines, the display bus
and clocks are reached only through the callables the classes accept.

## Running the tests

```
pip install "ikbdemu[test]"
python -m pytest
```