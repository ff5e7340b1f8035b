from ikbdemu.chip import ORFE, RDR, RDRF, RIE, TDR, TDRE, TIE, TRCSR
from ikbdemu.sci import SerialInterface


def test_receive_stores_byte_and_sets_rdrf():
    sci = SerialInterface()
    sci.receive(0x80)
    assert sci.iram.get_byte(RDR) == 0x80
    assert sci.read_trcsr() & RDRF
    assert sci.read_trcsr() & ORFE == 0


def test_second_receive_overruns_and_keeps_first_byte():
    sci = SerialInterface()
    sci.receive(0x11)
    sci.receive(0x22)
    assert sci.iram.get_byte(RDR) == 0x11
    assert sci.read_trcsr() & ORFE
    assert sci.read_trcsr() & RDRF


def test_read_rdr_clears_status_while_running():
    sci = SerialInterface()
    sci.receive(0x11)
    sci.receive(0x22)
    assert sci.read_rdr() == 0x11
    assert sci.read_trcsr() & (RDRF | ORFE) == 0
    sci.receive(0x33)
    assert sci.read_rdr() == 0x33


def test_read_rdr_when_stopped_leaves_status():
    sci = SerialInterface()
    sci.running = False
    sci.receive(0x44)
    assert sci.read_rdr() == 0x44
    assert sci.read_trcsr() & RDRF


def test_write_trcsr_keeps_status_bits():
    sci = SerialInterface()
    sci.iram.put_byte(TRCSR, RDRF | TDRE)
    sci.write_trcsr(0xFF)
    assert sci.read_trcsr() == RDRF | TDRE | 0x1F
    sci.write_trcsr(0x00)
    assert sci.read_trcsr() == RDRF | TDRE


def test_write_tdr_transmits_and_clears_tdre():
    sent = []
    sci = SerialInterface(transmit=sent.append)
    sci.iram.put_byte(TRCSR, TDRE)
    sci.write_tdr(0xF1)
    assert sent == [0xF1]
    assert sci.iram.get_byte(TDR) == 0xF1
    assert sci.read_trcsr() & TDRE == 0


def test_interrupt_pending_conditions():
    sci = SerialInterface()
    assert not sci.interrupt_pending()
    sci.iram.put_byte(TRCSR, RDRF)
    assert not sci.interrupt_pending()
    sci.iram.put_byte(TRCSR, RDRF | RIE)
    assert sci.interrupt_pending()
    sci.iram.put_byte(TRCSR, TDRE)
    assert not sci.interrupt_pending()
    sci.iram.put_byte(TRCSR, TDRE | TIE)
    assert sci.interrupt_pending()