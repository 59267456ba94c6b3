# pykilo

A tiny text editor for the terminal. It puts the terminal in raw mode, draws
the screen with VT100 escape sequences, and holds the whole file in memory as
a list of rows.

## Installing

```
pip install .
```

Requires Python 3.10 or later on a POSIX system. The terminal code uses
`termios` and `fcntl`.

## Running

Open a file:

```
pykilo path/to/file.txt
```

Or start with an empty buffer; you are asked for a file name when you save:

```
pykilo
```

If the file cannot be read or the terminal cannot be set up, `pykilo` prints
`pykilo: <reason>` to standard error and exits with status 1.

## Keys

| Key                   | Action                                                   |
|-----------------------|----------------------------------------------------------|
| Arrow keys            | Move the cursor; Left/Right wrap across line ends        |
| Home / End            | Go to the start or end of the line                       |
| Page Up / Page Down   | Move one screen up or down                               |
| Enter                 | Split the line at the cursor                             |
| Backspace, Ctrl-H     | Delete the character before the cursor, or join lines    |
| Delete                | Delete the character under the cursor                    |
| Ctrl-S                | Save                                                     |
| Ctrl-Q                | Quit                                                     |
| Ctrl-L, Escape        | Ignored                                                  |

Any other key is inserted as text.

With unsaved changes, Ctrl-Q first shows a warning; pressing it three more
times in a row quits. Any other key resets the count.

When saving a buffer with no file name, a `Save as:` prompt appears in the
message bar. Type a name and press Enter, or press Escape to abort.
Backspace, Delete and Ctrl-H erase while typing.

Tabs are shown as spaces up to the next multiple of four columns. The status
bar shows the file name (up to 20 characters), the line count, `(modified)`
when there are unsaved changes, and the current line. Messages in the bottom
line disappear after five seconds.

Files are read and written as UTF-8; bytes that are not valid UTF-8 are kept
as they were. Every saved line ends in a newline.

## Using it from Python

The editing state lives in `pykilo.editor.Editor` and needs no terminal.
`refresh_screen()` returns the escape sequences for a redraw as a string
instead of writing them:

```python
from pykilo.editor import Editor
from pykilo.keys import Key

editor = Editor(screen_rows=20, screen_cols=80)
for ch in "hello":
    editor.process_keypress(ord(ch))
editor.process_keypress(Key.ARROW_LEFT)
print(editor.rows_to_string())   # "hello\n"
print(editor.cx)                 # 4
```

`process_keypress` raises `pykilo.editor.QuitRequested` when the user quits.

Other pieces:

- `pykilo.row.Row` is one line of text and its tab-expanded rendering.
- `pykilo.keys.Key`, `ctrl_key` and `decode_key` cover key codes and decoding
  of escape sequences from a byte source.
- `pykilo.terminal.Terminal` is a context manager that switches to raw mode.
  It reads keys, writes output and finds the window size.
- `pykilo.app.prompt` reads a line in the message bar. `pykilo.app.run` ties
  an editor to a terminal, and `pykilo.app.main` is the command-line entry
  point.

## What it does not do

There is no search, no syntax highlighting, no undo, and no handling of
window resizes while running. Keys are read byte by byte, so multi-byte
characters typed at the keyboard are inserted as separate bytes.

## Running the tests

```
pip install .[test]
pytest
```