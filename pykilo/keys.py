"""Key codes and decoding of terminal escape sequences."""

from __future__ import annotations

import enum
from typing import Callable, Optional

ESC = 0x1B


class Key(enum.IntEnum):
    """Special keys; values do not collide with byte values."""

    BACKSPACE = 127
    ARROW_LEFT = 1000
    ARROW_RIGHT = 1001
    ARROW_UP = 1002
    ARROW_DOWN = 1003
    DEL = 1004
    HOME = 1005
    END = 1006
    PAGE_UP = 1007
    PAGE_DOWN = 1008


def ctrl_key(k: str | int) -> int:
    """Return the code produced by holding Ctrl with ``k``."""
    code = ord(k) if isinstance(k, str) else k
    return code & 0x1F


_TILDE_KEYS = {
    ord("1"): Key.HOME,
    ord("3"): Key.DEL,
    ord("4"): Key.END,
    ord("5"): Key.PAGE_UP,
    ord("6"): Key.PAGE_DOWN,
    ord("7"): Key.HOME,
    ord("8"): Key.END,
}

_CSI_KEYS = {
    ord("A"): Key.ARROW_UP,
    ord("B"): Key.ARROW_DOWN,
    ord("C"): Key.ARROW_RIGHT,
    ord("D"): Key.ARROW_LEFT,
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}

_SS3_KEYS = {
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}


def decode_key(read_byte: Callable[[], Optional[int]]) -> int:
    """Read one keypress.

    ``read_byte`` returns the next input byte, or ``None`` when none arrived in
    time. The first byte is waited for; a lone or unknown escape sequence
    yields ``ESC``.
    """
    c = read_byte()
    while c is None:
        c = read_byte()
    if c != ESC:
        return c

    first = read_byte()
    if first is None:
        return ESC
    second = read_byte()
    if second is None:
        return ESC

    if first == ord("["):
        if ord("0") <= second <= ord("9"):
            third = read_byte()
            if third is None:
                return ESC
            if third == ord("~"):
                return _TILDE_KEYS.get(second, ESC)
        else:
            return _CSI_KEYS.get(second, ESC)
    elif first == ord("O"):
        return _SS3_KEYS.get(second, ESC)
    return ESC