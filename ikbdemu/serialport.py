"""Serial link to the host computer at the keyboard controller's baud rate."""

from __future__ import annotations

from typing import Optional, Protocol

import serial

BAUD_RATE = 7812
DATA_BITS = serial.EIGHTBITS
STOP_BITS = serial.STOPBITS_ONE
PARITY = serial.PARITY_NONE

# The transmit side counts as empty below this many queued bytes, keeping the
# queue short so mouse movement is not delayed.
BUFFER_SIZE = 8


class SerialLogger(Protocol):
    def serial(self, send: bool, data: int) -> None: ...


class SerialPortError(RuntimeError):
    """Raised when the serial port cannot be opened or is used while closed."""


class SerialPort:
    """A non-blocking byte link; every byte is reported to ``ui`` if given."""

    def __init__(self, ui: Optional[SerialLogger] = None) -> None:
        self.ui = ui
        self._port: Optional[serial.SerialBase] = None

    def __enter__(self) -> "SerialPort":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        """Whether the port is open."""
        return self._port is not None and self._port.is_open

    def open(self, device: str) -> None:
        """Open ``device`` (a path or a pyserial URL) at 7812 baud, 8N1, no flow control."""
        self.close()
        try:
            self._port = serial.serial_for_url(
                device,
                baudrate=BAUD_RATE,
                bytesize=DATA_BITS,
                stopbits=STOP_BITS,
                parity=PARITY,
                timeout=0,
                rtscts=False,
                xonxoff=False,
            )
        except (serial.SerialException, OSError, ValueError) as exc:
            self._port = None
            raise SerialPortError(f"cannot open {device}: {exc}") from exc

    def close(self) -> None:
        """Close the port if it was opened."""
        if self._port is not None:
            self._port.close()
            self._port = None

    def _require_open(self) -> serial.SerialBase:
        if not self.is_open:
            raise SerialPortError("serial port is not open")
        return self._port

    def send(self, data: int) -> None:
        """Send one byte to the host."""
        port = self._require_open()
        value = data & 0xFF
        try:
            port.write(bytes((value,)))
        except serial.SerialException as exc:
            raise SerialPortError(str(exc)) from exc
        if self.ui is not None:
            self.ui.serial(True, value)

    def recv(self) -> Optional[int]:
        """Return a received byte, or None at once if nothing is waiting."""
        port = self._require_open()
        try:
            if not port.in_waiting:
                return None
            received = port.read(1)
        except serial.SerialException as exc:
            raise SerialPortError(str(exc)) from exc
        if not received:
            return None
        value = received[0]
        if self.ui is not None:
            self.ui.serial(False, value)
        return value

    def send_buf_empty(self) -> bool:
        """Whether the transmit queue is short enough to accept another byte."""
        port = self._require_open()
        try:
            return port.out_waiting < BUFFER_SIZE
        except (AttributeError, NotImplementedError, serial.SerialException):
            return True