"""Serial communication interface between the 6301 and the host computer."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .chip import ORFE, RDR, RDRF, RIE, TDR, TDRE, TIE, TRCSR, WU, InternalRegisters

logger = logging.getLogger(__name__)


class SerialInterface:
    """The SCI registers, with transmitted bytes passed to ``transmit``."""

    def __init__(
        self,
        iram: Optional[InternalRegisters] = None,
        transmit: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.iram = iram if iram is not None else InternalRegisters()
        self.transmit = transmit if transmit is not None else (lambda value: None)
        self.running = True

    def receive(self, data: int) -> None:
        """Deliver a byte from the line; sets overrun if RDR is still full."""
        trcsr = self.iram.get_byte(TRCSR)
        if trcsr & RDRF:
            logger.debug("6301 OVR SR %X->%X", trcsr, trcsr | ORFE)
            trcsr |= ORFE
        else:
            self.iram.put_byte(RDR, data)
            logger.debug("6301 RDR %X", data & 0xFF)
        self.iram.put_byte(TRCSR, trcsr | RDRF)

    def read_trcsr(self) -> int:
        """Return the transmit/receive control and status register."""
        return self.iram.get_byte(TRCSR)

    def write_trcsr(self, value: int) -> None:
        """Write the control bits; status bits 5-7 are kept as they are."""
        if value & WU:
            logger.debug("Set 6301 stand-by")
        current = self.iram.get_byte(TRCSR)
        self.iram.put_byte(TRCSR, (value & 0x1F) | (current & 0xE0))

    def read_rdr(self) -> int:
        """Return the received byte, clearing RDRF and ORFE while running."""
        if self.running:
            trcsr = self.iram.get_byte(TRCSR)
            self.iram.put_byte(TRCSR, trcsr & ~(RDRF | ORFE))
        return self.iram.get_byte(RDR)

    def write_tdr(self, value: int) -> None:
        """Send a byte and mark the transmit data register as occupied."""
        self.iram.put_byte(TDR, value)
        logger.debug("6301 TDR %X", value & 0xFF)
        self.transmit(value & 0xFF)
        self.iram.put_byte(TRCSR, self.iram.get_byte(TRCSR) & ~TDRE)

    def interrupt_pending(self) -> bool:
        """Return whether the SCI is requesting an interrupt."""
        trcsr = self.iram.get_byte(TRCSR)
        return bool((trcsr & RDRF and trcsr & RIE) or (trcsr & TDRE and trcsr & TIE))