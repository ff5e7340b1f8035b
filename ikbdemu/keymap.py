"""Translation of host key codes into Atari ST keyboard scancodes."""

# USB HID usage codes (UK layout) to ST scancodes, 0 where the key has no ST counterpart.
_HID_TO_ST = (
    0, 0, 0, 0, 30, 48, 46, 32, 18, 33, 34, 35, 23, 36, 37, 38,            # 0x00
    50, 49, 24, 25, 16, 19, 31, 20, 22, 47, 17, 45, 21, 44, 2, 3,          # 0x10
    4, 5, 6, 7, 8, 9, 10, 11, 28, 1, 14, 15, 57, 12, 13, 26,               # 0x20
    27, 0, 41, 39, 40, 43, 51, 52, 53, 58, 59, 60, 61, 62, 63, 64,         # 0x30
    65, 66, 67, 68, 99, 100, 0, 0, 0, 82, 71, 98, 83, 0, 97, 77,           # 0x40
    75, 80, 72, 0, 101, 102, 74, 78, 114, 109, 110, 111, 106, 107, 108, 103,  # 0x50
    104, 105, 112, 113, 96, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,               # 0x60
    0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0,                        # 0x70
)

# PC set-1 scancodes (UK layout) to ST scancodes.
_PC_TO_ST = (
    tuple(range(41))                    # Esc .. ' map straight through
    + (43, 42, 41)                      # ~, Lshift, #
    + tuple(range(44, 55))              # z .. Rshift
    + (102, 56, 57, 58)                 # N*, Alt, Space, CapsLock
    + tuple(range(59, 69))              # F1 .. F10
    + (0, 0)                            # Num, Scroll
    + (103, 104, 105, 74)               # N7 N8 N9 N-
    + (106, 107, 108, 78)               # N4 N5 N6 N+
    + (109, 110, 111, 112, 113)         # N1 N2 N3 N0 N.
    + (0, 0, 96, 99, 100)               # unused, unused, <, F11, F12
    + (0,) * 7
    + (114, 29, 101, 0, 56, 0)          # NEnter, right Ctrl, N/, Print, AltGr, unused
    + (71, 72, 98, 75, 77, 0, 80, 97, 82, 83)  # Home Up PgUp Left Right End Down PgDn Ins Del
    + (0,) * 16
)

assert len(_HID_TO_ST) == 128 and len(_PC_TO_ST) == 128


def st_key_from_hid(code: int) -> int:
    """Return the ST scancode for a USB HID key code, or 0 if there is none."""
    if 0 <= code < len(_HID_TO_ST):
        return _HID_TO_ST[code]
    return 0


def st_key_from_pc(code: int) -> int:
    """Return the ST scancode for a PC scancode, or 0 if there is none."""
    if 0 <= code < len(_PC_TO_ST):
        return _PC_TO_ST[code]
    return 0