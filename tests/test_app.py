import pytest

from pykilo.app import HELP_MESSAGE, prompt, run
from pykilo.editor import Editor
from pykilo.keys import ESC, Key, ctrl_key


def _keys(*items):
    codes = []
    for item in items:
        if isinstance(item, str):
            codes.extend(ord(ch) for ch in item)
        else:
            codes.append(item)
    return iter(codes).__next__


class FakeTerminal:
    def __init__(self, *keys):
        self.read_key = _keys(*keys)
        self.written = []
        self.cleared = 0

    def write(self, data):
        self.written.append(data)

    def clear(self):
        self.cleared += 1


def test_prompt_returns_typed_text_with_edits():
    editor = Editor()
    refreshes = []
    result = prompt(
        editor,
        "Name: {}",
        _keys("ab", Key.BACKSPACE, "c", "\r"),
        lambda: refreshes.append(editor.status_message),
    )
    assert result == "ac"
    assert refreshes == ["Name: ", "Name: a", "Name: ab", "Name: a", "Name: ac"]
    assert editor.status_message == ""


def test_prompt_escape_aborts():
    editor = Editor()
    result = prompt(editor, "Save as: {}", _keys("x", ESC), lambda: None)
    assert result is None
    assert editor.status_message == ""


def test_prompt_enter_on_empty_input_is_ignored():
    editor = Editor()
    result = prompt(editor, "{}", _keys("\r", "z", "\r"), lambda: None)
    assert result == "z"


def test_prompt_ignores_control_and_special_keys():
    editor = Editor()
    result = prompt(
        editor,
        "{}",
        _keys(ctrl_key("a"), Key.ARROW_UP, "k", Key.DEL, Key.DEL, "m", "\r"),
        lambda: None,
    )
    assert result == "m"


def test_run_edits_and_quits_after_warnings():
    quit_key = ctrl_key("q")
    term = FakeTerminal("hi", quit_key, quit_key, quit_key, quit_key)
    editor = Editor(10, 40)
    run(editor, term)
    assert [row.chars for row in editor.rows] == ["hi"]
    assert term.cleared == 1
    assert len(term.written) == 6
    assert "Press Ctrl-Q 1 more times to quit." in editor.status_message


def test_run_shows_help_message_first():
    term = FakeTerminal(ctrl_key("q"))
    editor = Editor(10, 60)
    run(editor, term)
    assert HELP_MESSAGE in term.written[0]
    assert term.cleared == 1


def test_run_saves_unnamed_buffer_through_prompt(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    term = FakeTerminal("x", ctrl_key("s"), "out.txt", "\r", ctrl_key("q"))
    editor = Editor(10, 40)
    run(editor, term)
    assert editor.filename == "out.txt"
    assert (tmp_path / "out.txt").read_text() == "x\n"
    assert editor.dirty == 0
    assert term.cleared == 1


def test_run_save_aborted_with_escape(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    term = FakeTerminal("x", ctrl_key("s"), ESC, ctrl_key("q"))
    editor = Editor(10, 40)
    with pytest.raises(StopIteration):
        run(editor, term)
    assert editor.filename is None
    assert editor.status_message.startswith("WARNING!!!")
    assert list(tmp_path.iterdir()) == []