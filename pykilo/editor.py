"""Editor state: the text buffer, cursor, scrolling and screen drawing."""

from __future__ import annotations

import os
import time
from typing import Callable, Optional

from pykilo.keys import ESC, Key, ctrl_key
from pykilo.row import Row

VERSION = "0.0.1"
QUIT_TIMES = 3
ENCODING = "utf-8"
STATUS_MAX = 79
MESSAGE_TIMEOUT = 5
SAVE_PROMPT = "Save as: {}"
WELCOME = f"Kilo editor -- version {VERSION}"

CRLF = "\r\n"
CLEAR_SCREEN = "\x1b[2J"
CURSOR_TOP = "\x1b[H"
ERASE_IN_LINE = "\x1b[K"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
INVERT_COLORS = "\x1b[7m"
NORMAL_COLORS = "\x1b[m"

ENTER = ord("\r")


class QuitRequested(Exception):
    """Raised when the user asks to leave the editor."""


def _char_for_key(key: int) -> str:
    """Turn an input byte into a character; high bytes are kept losslessly."""
    if 0x80 <= key <= 0xFF:
        return chr(0xDC00 + key)
    return chr(key)


class Editor:
    """The editing session.

    ``screen_rows`` and ``screen_cols`` give the terminal window size; two
    rows of it are kept for the status and message bars. ``prompt`` is asked
    for a file name when saving an unnamed buffer and returns ``None`` to abort.
    """

    def __init__(
        self,
        screen_rows: int = 24,
        screen_cols: int = 80,
        prompt: Optional[Callable[[str], Optional[str]]] = None,
    ) -> None:
        self.cx = 0
        self.cy = 0
        self.rx = 0
        self.rowoff = 0
        self.coloff = 0
        self.screen_rows = screen_rows - 2
        self.screen_cols = screen_cols
        self.rows: list[Row] = []
        self.dirty = 0
        self.filename: Optional[str] = None
        self.status_message = ""
        self.status_time = 0.0
        self.prompt = prompt
        self._quit_times = QUIT_TIMES

    # row operations

    def insert_row(self, at: int, s: str) -> None:
        """Insert a new line holding ``s`` before line ``at``."""
        if not 0 <= at <= len(self.rows):
            return
        self.rows.insert(at, Row(s))
        self.dirty += 1

    def delete_row(self, at: int) -> None:
        """Remove line ``at``."""
        if not 0 <= at < len(self.rows):
            return
        del self.rows[at]
        self.dirty += 1

    def _current_row(self) -> Optional[Row]:
        return self.rows[self.cy] if self.cy < len(self.rows) else None

    # editing

    def insert_char(self, c: str) -> None:
        """Insert ``c`` at the cursor and move past it."""
        if self.cy == len(self.rows):
            self.insert_row(len(self.rows), "")
        self.rows[self.cy].insert_char(self.cx, c)
        self.dirty += 1
        self.cx += 1

    def insert_newline(self) -> None:
        """Split the current line at the cursor."""
        if self.cx == 0:
            self.insert_row(self.cy, "")
        else:
            row = self.rows[self.cy]
            self.insert_row(self.cy + 1, row.chars[self.cx:])
            row.truncate(self.cx)
        self.cy += 1
        self.cx = 0

    def delete_char(self) -> None:
        """Delete the character left of the cursor, joining lines at column 0."""
        if self.cy == len(self.rows):
            return
        if self.cx == 0 and self.cy == 0:
            return
        row = self.rows[self.cy]
        if self.cx > 0:
            if row.delete_char(self.cx - 1):
                self.dirty += 1
            self.cx -= 1
        else:
            previous = self.rows[self.cy - 1]
            self.cx = len(previous)
            previous.append(row.chars)
            self.dirty += 1
            self.delete_row(self.cy)
            self.cy -= 1

    # file i/o

    def open(self, filename: str | os.PathLike[str]) -> None:
        """Load ``filename`` into the buffer."""
        self.filename = os.fspath(filename)
        with open(self.filename, "rb") as fh:
            text = fh.read().decode(ENCODING, "surrogateescape")
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        for line in lines:
            self.insert_row(len(self.rows), line.rstrip("\r\n"))
        self.dirty = 0

    def rows_to_string(self) -> str:
        """The buffer as text, each line ending in a newline."""
        return "".join(row.chars + "\n" for row in self.rows)

    def save(self) -> None:
        """Write the buffer to its file, asking for a name if it has none."""
        if self.filename is None:
            name = self.prompt(SAVE_PROMPT) if self.prompt is not None else None
            if name is None:
                self.set_status_message("Save aborted")
                return
            self.filename = name

        data = self.rows_to_string().encode(ENCODING, "surrogateescape")
        try:
            fd = os.open(self.filename, os.O_RDWR | os.O_CREAT, 0o644)
            with os.fdopen(fd, "wb") as fh:
                fh.truncate(len(data))
                fh.write(data)
        except OSError as exc:
            self.set_status_message(f"Can't save! I/O error: {exc.strerror or exc}")
            return
        self.dirty = 0
        self.set_status_message(f"{len(data)} bytes written to disk")

    # cursor

    def move_cursor(self, key: int) -> None:
        """Move the cursor for an arrow key, then keep it within its line."""
        row = self._current_row()
        if key == Key.ARROW_LEFT:
            if self.cx != 0:
                self.cx -= 1
            elif self.cy > 0:
                self.cy -= 1
                self.cx = len(self.rows[self.cy])
        elif key == Key.ARROW_RIGHT:
            if row is not None:
                if self.cx < len(row):
                    self.cx += 1
                elif self.cx == len(row):
                    self.cy += 1
                    self.cx = 0
        elif key == Key.ARROW_UP:
            if self.cy != 0:
                self.cy -= 1
        elif key == Key.ARROW_DOWN:
            if self.cy < len(self.rows):
                self.cy += 1

        row = self._current_row()
        row_len = len(row) if row is not None else 0
        if self.cx > row_len:
            self.cx = row_len

    def scroll(self) -> None:
        """Adjust the offsets so the cursor is on screen."""
        self.rx = 0
        if self.cy < len(self.rows):
            self.rx = self.rows[self.cy].cx_to_rx(self.cx)

        if self.cy < self.rowoff:
            self.rowoff = self.cy
        if self.cy >= self.rowoff + self.screen_rows:
            self.rowoff = self.cy - self.screen_rows + 1
        if self.rx < self.coloff:
            self.coloff = self.rx
        if self.rx >= self.coloff + self.screen_cols:
            self.coloff = self.rx - self.screen_cols + 1

    # output

    def set_status_message(self, message: str) -> None:
        """Show ``message`` in the message bar for a few seconds."""
        self.status_message = message[:STATUS_MAX]
        self.status_time = time.time()

    def draw_rows(self) -> str:
        """The text area of the screen."""
        out: list[str] = []
        for y in range(self.screen_rows):
            filerow = y + self.rowoff
            if filerow >= len(self.rows):
                if not self.rows and y == self.screen_rows // 3:
                    welcome = WELCOME[: self.screen_cols]
                    padding = (self.screen_cols - len(welcome)) // 2
                    if padding:
                        out.append("~")
                        padding -= 1
                    out.append(" " * padding)
                    out.append(welcome)
                else:
                    out.append("~")
            else:
                render = self.rows[filerow].render
                out.append(render[self.coloff: self.coloff + self.screen_cols])
            out.append(ERASE_IN_LINE)
            out.append(CRLF)
        return "".join(out)

    def draw_status_bar(self) -> str:
        """The inverted status line with file name, size and position."""
        name = self.filename if self.filename is not None else "[No Name]"
        modified = "(modified)" if self.dirty else ""
        status = f"{name[:20]} - {len(self.rows)} lines {modified}"[:STATUS_MAX]
        rstatus = f"{self.cy + 1}/{len(self.rows)}"[:STATUS_MAX]

        width = min(len(status), self.screen_cols)
        out = [INVERT_COLORS, status[:width]]
        while width < self.screen_cols:
            if self.screen_cols - width == len(rstatus):
                out.append(rstatus)
                break
            out.append(" ")
            width += 1
        out.append(NORMAL_COLORS)
        out.append(CRLF)
        return "".join(out)

    def draw_message_bar(self, now: Optional[float] = None) -> str:
        """The message line; messages older than a few seconds are hidden."""
        if now is None:
            now = time.time()
        message = self.status_message[: self.screen_cols]
        if message and now - self.status_time < MESSAGE_TIMEOUT:
            return ERASE_IN_LINE + message
        return ERASE_IN_LINE

    def refresh_screen(self, now: Optional[float] = None) -> str:
        """Everything to write to the terminal to redraw it."""
        self.scroll()
        cursor = f"\x1b[{self.cy - self.rowoff + 1};{self.rx - self.coloff + 1}H"
        return "".join(
            (
                HIDE_CURSOR,
                CURSOR_TOP,
                self.draw_rows(),
                self.draw_status_bar(),
                self.draw_message_bar(now),
                cursor,
                SHOW_CURSOR,
            )
        )

    # input

    def process_keypress(self, key: int) -> None:
        """Act on one decoded key. Raises QuitRequested to leave."""
        if key == ENTER:
            self.insert_newline()
        elif key == ctrl_key("q"):
            if self.dirty and self._quit_times > 0:
                self.set_status_message(
                    "WARNING!!! File has unsaved changes. "
                    f"Press Ctrl-Q {self._quit_times} more times to quit."
                )
                self._quit_times -= 1
                return
            raise QuitRequested
        elif key == ctrl_key("s"):
            self.save()
        elif key == Key.HOME:
            self.cx = 0
        elif key == Key.END:
            if self.cy < len(self.rows):
                self.cx = len(self.rows[self.cy])
        elif key in (Key.BACKSPACE, ctrl_key("h"), Key.DEL):
            if key == Key.DEL:
                self.move_cursor(Key.ARROW_RIGHT)
            self.delete_char()
        elif key in (Key.PAGE_UP, Key.PAGE_DOWN):
            if key == Key.PAGE_UP:
                self.cy = self.rowoff
                step = Key.ARROW_UP
            else:
                self.cy = min(self.rowoff + self.screen_rows - 1, len(self.rows))
                step = Key.ARROW_DOWN
            for _ in range(self.screen_rows):
                self.move_cursor(step)
            self.move_cursor(key)
        elif key in (Key.ARROW_UP, Key.ARROW_DOWN, Key.ARROW_LEFT, Key.ARROW_RIGHT):
            self.move_cursor(key)
        elif key in (ctrl_key("l"), ESC):
            pass
        else:
            self.insert_char(_char_for_key(key))

        self._quit_times = QUIT_TIMES