"""Raw-mode terminal access: key input, output and window size."""

from __future__ import annotations

import fcntl
import os
import re
import struct
import termios
from typing import Optional

from pykilo.editor import CLEAR_SCREEN, CURSOR_TOP
from pykilo.keys import decode_key

GET_CURSOR_POS = b"\x1b[6n"
CURSOR_FAR_CORNER = b"\x1b[999C\x1b[999B"
ENCODING = "utf-8"
_REPORT_MAX = 31

_REPORT_RE = re.compile(rb"\s*([+-]?\d+);\s*([+-]?\d+)")

# Indices into the list returned by termios.tcgetattr.
_IFLAG, _OFLAG, _CFLAG, _LFLAG, _CC = 0, 1, 2, 3, 6


def parse_cursor_report(data: bytes) -> tuple[int, int]:
    """Parse a cursor position report (without its final ``R``) into (rows, cols)."""
    if not data.startswith(b"\x1b["):
        raise ValueError(f"not a cursor position report: {data!r}")
    match = _REPORT_RE.match(data, 2)
    if match is None:
        raise ValueError(f"malformed cursor position report: {data!r}")
    return int(match.group(1)), int(match.group(2))


class Terminal:
    """A terminal reached through an input and an output file descriptor.

    Used as a context manager it switches the input to raw mode and restores
    the previous settings on exit.
    """

    def __init__(self, in_fd: int = 0, out_fd: int = 1) -> None:
        self.in_fd = in_fd
        self.out_fd = out_fd
        self._saved: Optional[list] = None

    def __enter__(self) -> "Terminal":
        self._saved = termios.tcgetattr(self.in_fd)
        raw = [list(item) if isinstance(item, list) else item for item in self._saved]
        raw[_IFLAG] &= ~(
            termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
        )
        raw[_OFLAG] &= ~termios.OPOST
        raw[_CFLAG] |= termios.CS8
        raw[_LFLAG] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG)
        raw[_CC][termios.VMIN] = 0
        raw[_CC][termios.VTIME] = 1
        termios.tcsetattr(self.in_fd, termios.TCSAFLUSH, raw)
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._saved is not None:
            termios.tcsetattr(self.in_fd, termios.TCSAFLUSH, self._saved)
            self._saved = None

    def read_byte(self) -> Optional[int]:
        """Read one byte, or return ``None`` if none is available."""
        try:
            data = os.read(self.in_fd, 1)
        except BlockingIOError:
            return None
        return data[0] if data else None

    def read_key(self) -> int:
        """Wait for one keypress and decode it."""
        return decode_key(self.read_byte)

    def write(self, data: str | bytes) -> None:
        """Write all of ``data`` to the output."""
        if isinstance(data, str):
            data = data.encode(ENCODING, "surrogateescape")
        view = memoryview(data)
        while view:
            written = os.write(self.out_fd, view)
            view = view[written:]

    def cursor_position(self) -> tuple[int, int]:
        """Ask the terminal where the cursor is; return (rows, cols)."""
        self.write(GET_CURSOR_POS)
        report = bytearray()
        while len(report) < _REPORT_MAX:
            byte = self.read_byte()
            if byte is None or byte == ord("R"):
                break
            report.append(byte)
        return parse_cursor_report(bytes(report))

    def window_size(self) -> tuple[int, int]:
        """The window size as (rows, cols)."""
        try:
            packed = fcntl.ioctl(self.out_fd, termios.TIOCGWINSZ, bytes(8))
            rows, cols, _, _ = struct.unpack("HHHH", packed)
        except OSError:
            rows, cols = 0, 0
        if cols == 0:
            self.write(CURSOR_FAR_CORNER)
            return self.cursor_position()
        return rows, cols

    def clear(self) -> None:
        """Clear the screen and home the cursor."""
        self.write(CLEAR_SCREEN + CURSOR_TOP)