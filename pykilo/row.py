"""A single line of text together with its on-screen rendering."""

from __future__ import annotations

TAB_STOP = 4


def _expand_tabs(chars: str) -> str:
    """Replace each tab with spaces up to the next tab stop."""
    parts: list[str] = []
    column = 0
    for ch in chars:
        if ch == "\t":
            width = TAB_STOP - column % TAB_STOP
            parts.append(" " * width)
            column += width
        else:
            parts.append(ch)
            column += 1
    return "".join(parts)


class Row:
    """A line of the buffer: its raw characters and the text shown for them."""

    __slots__ = ("_chars", "_render")

    def __init__(self, chars: str = "") -> None:
        self._chars = chars
        self._render = _expand_tabs(chars)

    def __repr__(self) -> str:
        return f"Row({self._chars!r})"

    def __len__(self) -> int:
        return len(self._chars)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return self._chars == other._chars
        return NotImplemented

    @property
    def chars(self) -> str:
        return self._chars

    @property
    def render(self) -> str:
        return self._render

    def _set(self, chars: str) -> None:
        self._chars = chars
        self._render = _expand_tabs(chars)

    def cx_to_rx(self, cx: int) -> int:
        """Map a character index to the column it is drawn at."""
        rx = 0
        for ch in self._chars[:cx]:
            if ch == "\t":
                rx += (TAB_STOP - 1) - (rx % TAB_STOP)
            rx += 1
        return rx

    def insert_char(self, at: int, c: str) -> None:
        """Insert ``c`` before index ``at``; an index out of range appends."""
        if not 0 <= at <= len(self._chars):
            at = len(self._chars)
        self._set(self._chars[:at] + c + self._chars[at:])

    def append(self, s: str) -> None:
        """Add ``s`` to the end of the line."""
        self._set(self._chars + s)

    def delete_char(self, at: int) -> bool:
        """Remove the character at ``at``; return whether anything was removed."""
        if not 0 <= at < len(self._chars):
            return False
        self._set(self._chars[:at] + self._chars[at + 1:])
        return True

    def truncate(self, size: int) -> None:
        """Keep only the first ``size`` characters."""
        self._set(self._chars[:size])