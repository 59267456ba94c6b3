import errno
import os
import termios

import pytest

from pykilo.keys import Key
from pykilo.terminal import Terminal, parse_cursor_report


@pytest.fixture
def pipes():
    in_r, in_w = os.pipe()
    out_r, out_w = os.pipe()
    opened = {in_r, in_w, out_r, out_w}

    def feed(data: bytes) -> None:
        os.write(in_w, data)
        os.close(in_w)
        opened.discard(in_w)

    def output() -> bytes:
        os.close(out_w)
        opened.discard(out_w)
        chunks = []
        while True:
            chunk = os.read(out_r, 4096)
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks)

    yield Terminal(in_r, out_w), feed, output
    for fd in opened:
        os.close(fd)


def test_parse_cursor_report():
    assert parse_cursor_report(b"\x1b[24;80") == (24, 80)


def test_parse_cursor_report_requires_escape_prefix():
    with pytest.raises(ValueError):
        parse_cursor_report(b"24;80")


def test_parse_cursor_report_requires_two_numbers():
    with pytest.raises(ValueError):
        parse_cursor_report(b"\x1b[24")


def test_read_byte_returns_bytes_then_none(pipes):
    term, feed, _ = pipes
    feed(b"ab")
    assert term.read_byte() == ord("a")
    assert term.read_byte() == ord("b")
    assert term.read_byte() is None


def test_read_key_decodes_arrow(pipes):
    term, feed, _ = pipes
    feed(b"\x1b[Ax")
    assert term.read_key() == Key.ARROW_UP
    assert term.read_key() == ord("x")


def test_read_key_decodes_tilde_sequence(pipes):
    term, feed, _ = pipes
    feed(b"\x1b[3~")
    assert term.read_key() == Key.DEL


def test_write_accepts_text_and_bytes(pipes):
    term, _, output = pipes
    term.write("hi ")
    term.write(b"there")
    assert output() == b"hi there"


def test_cursor_position_queries_and_parses(pipes):
    term, feed, output = pipes
    feed(b"\x1b[12;34R")
    assert term.cursor_position() == (12, 34)
    assert output() == b"\x1b[6n"


def test_window_size_falls_back_to_cursor_report(pipes):
    term, feed, output = pipes
    feed(b"\x1b[24;80R")
    assert term.window_size() == (24, 80)
    assert output() == b"\x1b[999C\x1b[999B\x1b[6n"


def test_window_size_bad_report_raises(pipes):
    term, feed, _ = pipes
    feed(b"garbage")
    with pytest.raises(ValueError):
        term.window_size()


def test_clear_writes_escape_sequences(pipes):
    term, _, output = pipes
    term.clear()
    assert output() == b"\x1b[2J\x1b[H"


def test_raw_mode_needs_a_terminal(pipes):
    term, feed, _ = pipes
    entered = []
    with pytest.raises(termios.error) as excinfo:
        with term:
            entered.append(True)
    assert excinfo.value.args[0] == errno.ENOTTY
    assert entered == []
    feed(b"z")
    assert term.read_byte() == ord("z")
    assert term.read_byte() is None