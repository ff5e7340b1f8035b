import pytest

from ikbdemu.util import Timespec, rotl, rotr, timespec_diff


def _add(start, span):
    nsec = start.nsec + span.nsec
    return Timespec(start.sec + span.sec + nsec // 1_000_000_000, nsec % 1_000_000_000)


def test_rotr_moves_low_bit_to_top():
    assert rotr(1, 1) == 0x80000000


def test_rotl_moves_top_bit_to_bottom():
    assert rotl(0x80000000, 1) == 1


@pytest.mark.parametrize("value", [0, 1, 0x33333333, 0xDEADBEEF, 0xFFFFFFFF])
@pytest.mark.parametrize("bits", [0, 1, 5, 16, 31])
def test_rotations_are_inverse(value, bits):
    assert rotr(rotl(value, bits), bits) == value
    assert rotl(rotr(value, bits), bits) == value


@pytest.mark.parametrize("bits", [1, 3, 8, 17, 30])
def test_left_equals_complementary_right(bits):
    value = 0x12345678
    assert rotl(value, bits) == rotr(value, 32 - bits)


@pytest.mark.parametrize("bits", range(0, 32, 3))
def test_rotation_preserves_bit_count(bits):
    value = 0xA5F00F13
    assert bin(rotl(value, bits)).count("1") == bin(value).count("1")
    assert rotl(value, bits) <= 0xFFFFFFFF


def test_mouse_pattern_has_period_four():
    assert rotl(0x33333333, 4) == 0x33333333
    assert rotr(0x33333333, 4) == 0x33333333


def test_zero_rotation_is_identity():
    assert rotr(0xCAFEBABE, 0) == 0xCAFEBABE


def test_diff_without_borrow():
    start = Timespec(5, 100)
    end = Timespec(7, 400)
    result = timespec_diff(start, end)
    assert _add(start, result) == end
    assert result.sec == 2


def test_diff_with_borrow():
    start = Timespec(1, 900_000_000)
    end = Timespec(3, 100_000_000)
    result = timespec_diff(start, end)
    assert result == Timespec(1, 200_000_000)
    assert _add(start, result) == end


def test_diff_with_self_is_zero():
    point = Timespec(42, 123_456)
    assert timespec_diff(point, point) == Timespec(0, 0)


@pytest.mark.parametrize(
    "start,end",
    [
        (Timespec(0, 999_999_999), Timespec(1, 0)),
        (Timespec(10, 5), Timespec(10, 6)),
        (Timespec(3, 700), Timespec(9, 300)),
    ],
)
def test_diff_nanoseconds_stay_in_range(start, end):
    result = timespec_diff(start, end)
    assert 0 <= result.nsec < 1_000_000_000
    assert _add(start, result) == end