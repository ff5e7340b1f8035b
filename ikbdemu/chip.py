"""HD6301 internal register map, register bits and interrupt vectors."""

NIREGS = 0x15  # number of internal registers

# Port registers
DDR1 = 0x00
DDR2 = 0x01
P1 = 0x02
P2 = 0x03
DDR3 = 0x04
DDR4 = 0x05
P3 = 0x06
P4 = 0x07

# Timer registers
TCSR = 0x08   # timer control/status
FRC = 0x09    # free-running counter (16 bits)
OCR = 0x0B    # output compare register (16 bits)
ICR = 0x0D    # input capture register (16 bits)
P3CSR = 0x0F  # port 3 control/status

# Serial communication interface registers
RMCR = 0x10   # rate/mode control
TRCSR = 0x11  # transmit/receive control/status
RDR = 0x12    # receive data
TDR = 0x13    # transmit data

RAMCR = 0x14  # RAM control

# TRCSR bits
WU = 0x01    # wake up
TE = 0x02    # transmitter enable
TIE = 0x04   # transmitter interrupt enable
RE = 0x08    # receiver enable
RIE = 0x10   # receiver interrupt enable
TDRE = 0x20  # transmit data register empty
ORFE = 0x40  # overrun/framing error
RDRF = 0x80  # receive data register full

# TCSR bits
OLVL = 0x01  # output level
IEDG = 0x02  # input edge
ETOI = 0x04  # enable timer overflow interrupt
EOCI = 0x08  # enable output compare interrupt
EICI = 0x10  # enable input capture interrupt
TOF = 0x20   # timer overflow flag
OCF = 0x40   # output compare flag
ICF = 0x80   # input capture flag

# Interrupt vectors
TRAPVECTOR = 0xFFEE
SCIVECTOR = 0xFFF0
TOFVECTOR = 0xFFF2
OCFVECTOR = 0xFFF4
ICFVECTOR = 0xFFF6
IRQVECTOR = 0xFFF8
SWIVECTOR = 0xFFFA
NMIVECTOR = 0xFFFC
RESVECTOR = 0xFFFE


class InternalRegisters:
    """The on-chip register file, addressed by byte offset; words are big-endian."""

    def __init__(self, size: int = NIREGS) -> None:
        self._data = bytearray(size)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, offset: int) -> int:
        return self.get_byte(offset)

    def __setitem__(self, offset: int, value: int) -> None:
        self.put_byte(offset, value)

    def _check(self, offset: int, width: int) -> None:
        if offset < 0 or offset + width > len(self._data):
            raise IndexError(f"internal register offset {offset:#04x} out of range")

    def get_byte(self, offset: int) -> int:
        """Return the byte at ``offset``."""
        self._check(offset, 1)
        return self._data[offset]

    def put_byte(self, offset: int, value: int) -> None:
        """Store the low 8 bits of ``value`` at ``offset``."""
        self._check(offset, 1)
        self._data[offset] = value & 0xFF

    def get_word(self, offset: int) -> int:
        """Return the 16-bit word whose high byte is at ``offset``."""
        self._check(offset, 2)
        return int.from_bytes(self._data[offset:offset + 2], "big")

    def put_word(self, offset: int, value: int) -> None:
        """Store the low 16 bits of ``value``, high byte first, at ``offset``."""
        self._check(offset, 2)
        self._data[offset:offset + 2] = (value & 0xFFFF).to_bytes(2, "big")