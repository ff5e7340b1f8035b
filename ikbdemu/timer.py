"""Free-running counter and output compare of the 6301 timer."""

from __future__ import annotations

from typing import Optional

from .chip import FRC, ICF, OCF, OCR, TCSR, TOF, InternalRegisters

_READ_ONLY = ICF | OCF | TOF


class Timer:
    """The timer unit, working on the shared internal register file."""

    def __init__(self, iram: Optional[InternalRegisters] = None) -> None:
        self.iram = iram if iram is not None else InternalRegisters()
        self._tcsr_read = False

    def read_tcsr(self) -> int:
        """Read TCSR; clears TOF and arms OCF clearing if OCF was set."""
        tcsr = self.iram.get_byte(TCSR)
        if tcsr & OCF:
            self._tcsr_read = True
        self.iram.put_byte(TCSR, tcsr & ~TOF)
        return tcsr

    def write_tcsr(self, value: int) -> None:
        """Write TCSR, leaving the read-only flag bits untouched."""
        current = self.iram.get_byte(TCSR)
        self.iram.put_byte(TCSR, (current & _READ_ONLY) | (value & ~_READ_ONLY))

    def write_ocr(self, offset: int, value: int) -> None:
        """Write one byte of OCR; clears OCF if TCSR was read beforehand."""
        self.iram.put_byte(offset, value)
        if self._tcsr_read:
            self.iram.put_byte(TCSR, self.iram.get_byte(TCSR) & ~OCF)
            self._tcsr_read = False

    def increment(self, ncycles: int) -> None:
        """Advance the counter by ``ncycles``, raising TOF and OCF as needed."""
        frc_old = self.iram.get_word(FRC)
        frc_new = (frc_old + ncycles) & 0xFFFF
        ocr = self.iram.get_word(OCR)

        wrapped = frc_old > frc_new
        if wrapped:
            self.iram.put_byte(TCSR, self.iram.get_byte(TCSR) | TOF)

        if frc_new >= ocr and (frc_old < ocr or wrapped):
            self.iram.put_byte(TCSR, self.iram.get_byte(TCSR) | OCF)
            self._tcsr_read = False

        self.iram.put_word(FRC, frc_new)