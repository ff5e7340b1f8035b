import pytest

from ikbdemu.keymap import st_key_from_hid, st_key_from_pc


def test_hid_letter_a():
    assert st_key_from_hid(0x04) == 30


def test_hid_space():
    assert st_key_from_hid(0x2C) == 57


@pytest.mark.parametrize("code", [0, 1, 2, 3])
def test_hid_reserved_codes_map_to_nothing(code):
    assert st_key_from_hid(code) == 0


@pytest.mark.parametrize("code", [128, 255, 1000, -1])
def test_out_of_range_codes_map_to_nothing(code):
    assert st_key_from_hid(code) == 0
    assert st_key_from_pc(code) == 0


def test_all_results_are_valid_scancodes():
    for code in range(128):
        assert 0 <= st_key_from_hid(code) < 128
        assert 0 <= st_key_from_pc(code) < 128


def test_hid_letters_are_distinct_and_present():
    letters = [st_key_from_hid(code) for code in range(0x04, 0x1E)]
    assert 0 not in letters
    assert len(set(letters)) == 26


@pytest.mark.parametrize("code", range(1, 41))
def test_pc_low_codes_pass_straight_through(code):
    assert st_key_from_pc(code) == code


@pytest.mark.parametrize("offset", range(10))
def test_hid_digits_match_pc_digits(offset):
    assert st_key_from_hid(0x1E + offset) == st_key_from_pc(2 + offset)


def test_hid_escape_matches_pc_escape():
    assert st_key_from_hid(0x29) == st_key_from_pc(1)


def test_function_keys_agree_between_tables():
    hid = [st_key_from_hid(code) for code in range(0x3A, 0x44)]
    pc = [st_key_from_pc(code) for code in range(59, 69)]
    assert hid == pc


def test_hid_high_codes_are_unmapped():
    assert all(st_key_from_hid(code) == 0 for code in range(0x65, 0x80))