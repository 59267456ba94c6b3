"""The interactive editor loop and its command-line entry point."""

from __future__ import annotations

import argparse
import sys
import termios
from typing import Callable, Optional, Sequence

from pykilo.editor import Editor, QuitRequested
from pykilo.keys import ESC, Key, ctrl_key
from pykilo.terminal import Terminal

HELP_MESSAGE = "HELP: Ctrl-S = save | Ctrl-Q = quit"

_ERASE_KEYS = (Key.DEL, ctrl_key("h"), Key.BACKSPACE)
_ENTER = ord("\r")


def _is_printable(key: int) -> bool:
    return 32 <= key < 127


def prompt(
    editor: Editor,
    template: str,
    read_key: Callable[[], int],
    refresh: Callable[[], None],
) -> Optional[str]:
    """Read a line of input in the message bar.

    ``template`` is shown with the text typed so far in place of ``{}``.
    Returns the text on Enter, or ``None`` if Escape is pressed.
    """
    typed: list[str] = []
    while True:
        editor.set_status_message(template.format("".join(typed)))
        refresh()
        key = read_key()
        if key in _ERASE_KEYS:
            if typed:
                typed.pop()
        elif key == ESC:
            editor.set_status_message("")
            return None
        elif key == _ENTER:
            if typed:
                editor.set_status_message("")
                return "".join(typed)
        elif _is_printable(key):
            typed.append(chr(key))


def run(editor: Editor, terminal: Terminal) -> None:
    """Redraw and handle keys until the user quits."""

    def refresh() -> None:
        terminal.write(editor.refresh_screen())

    editor.prompt = lambda template: prompt(editor, template, terminal.read_key, refresh)
    editor.set_status_message(HELP_MESSAGE)
    while True:
        refresh()
        try:
            editor.process_keypress(terminal.read_key())
        except QuitRequested:
            terminal.clear()
            return


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the editor, optionally on a file."""
    parser = argparse.ArgumentParser(prog="pykilo", description="A small text editor.")
    parser.add_argument("filename", nargs="?", help="file to edit")
    args = parser.parse_args(argv)

    terminal = Terminal()
    error: Optional[str] = None
    try:
        with terminal:
            try:
                rows, cols = terminal.window_size()
                editor = Editor(rows, cols)
                if args.filename is not None:
                    editor.open(args.filename)
                run(editor, terminal)
            except (OSError, ValueError) as exc:
                terminal.clear()
                error = str(exc)
    except termios.error as exc:
        error = str(exc)
    if error is not None:
        print(f"pykilo: {error}", file=sys.stderr)
        return 1
    return 0