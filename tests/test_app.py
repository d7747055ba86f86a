from pathlib import Path

import pytest

from nite.app import (
    BACKSPACE,
    ENTER,
    ESCAPE,
    FIND,
    FIND_NEXT,
    GOTO_LINE,
    QUIT,
    REDO,
    REPLACE,
    REPLACE_PROMPT,
    SAVE,
    SEARCH_PROMPT,
    SELECT_ALL,
    CUT,
    PASTE,
    TAB,
    TOGGLE_SYNTAX,
    UNDO,
    InputType,
    Nite,
)
from nite.document import Key


@pytest.fixture
def editor(tmp_path):
    return Nite(rows=10, cols=40, config_path=tmp_path / ".niteconfig")


def type_text(editor, text):
    for ch in text:
        assert editor.handle_key(ch) is True


class FakeScreen:
    def __init__(self, keys, rows=6, cols=30):
        self._keys = iter(keys)
        self._size = (rows, cols)
        self.frames = []

    def size(self):
        return self._size

    def read_key(self):
        return next(self._keys, None)

    def draw(self, rows, cursor):
        self.frames.append((rows, cursor))


def test_typing_inserts_characters(editor):
    type_text(editor, "hi")
    assert editor.document.lines == ["hi"]
    assert editor.document.dirty is True


def test_enter_splits_line(editor):
    type_text(editor, "ab")
    editor.handle_key(Key.LEFT)
    editor.handle_key(ENTER)
    assert editor.document.lines == ["a", "b"]
    assert (editor.document.cursor_y, editor.document.cursor_x) == (1, 0)


def test_quit_returns_false(editor):
    assert editor.handle_key(QUIT) is False


def test_status_line_shows_name_and_width(editor):
    status = editor.status_line()
    assert status.startswith("[Nite_V1] [No Name]")
    assert len(status) == editor.cols
    type_text(editor, "x")
    assert "(modified)" in editor.status_line()


def test_status_line_truncates(tmp_path):
    small = Nite(rows=5, cols=8, config_path=tmp_path / "missing")
    assert small.status_line() == "[Nite_V1] [No Name]"[:8]


def test_open_file_and_prev(editor, tmp_path):
    first = tmp_path / "one.txt"
    second = tmp_path / "two.txt"
    first.write_text("alpha\nbeta\n")
    second.write_text("gamma")
    editor.open_file(first)
    assert editor.document.lines == ["alpha", "beta"]
    editor.open_file(second)
    assert editor.document.lines == ["gamma"]
    editor.open_file("prev")
    assert editor.filename == str(first)
    assert editor.document.lines == ["alpha", "beta"]
    with pytest.raises(IndexError):
        editor.open_file("prev")


def test_open_missing_file_keeps_name(editor, tmp_path):
    missing = tmp_path / "nope.txt"
    with pytest.raises(FileNotFoundError):
        editor.open_file(missing)
    assert editor.filename == str(missing)


def test_save_round_trip(editor, tmp_path):
    target = tmp_path / "doc.txt"
    target.write_text("hello\n")
    editor.open_file(target)
    type_text(editor, "X")
    editor.handle_key(SAVE)
    assert target.read_text() == "Xhello\n"
    assert editor.document.dirty is False


def test_goto_line(editor):
    editor.document.lines = [f"line {n}" for n in range(30)]
    for key in (GOTO_LINE, "2", "0", ENTER):
        editor.handle_key(key)
    assert editor.document.cursor_y == 19
    assert editor.waiting_for_input is False
    assert editor.row_offset <= 19 < editor.row_offset + editor.rows - 1


def test_goto_line_invalid_and_clamped(editor):
    editor.document.lines = ["a", "b", "c"]
    for key in (GOTO_LINE, "x", ENTER):
        editor.handle_key(key)
    assert editor.document.cursor_y == 0
    for key in (GOTO_LINE, "9", "9", ENTER):
        editor.handle_key(key)
    assert editor.document.cursor_y == len(editor.document.lines) - 1


def test_search_and_find_next(editor):
    line = "foo bar foo"
    editor.document.lines = [line]
    for key in (FIND, "f", "o", "o", ENTER):
        editor.handle_key(key)
    assert editor.search.active is True
    assert editor.document.cursor_x == 0
    editor.handle_key(FIND_NEXT)
    assert editor.document.cursor_x == line.rindex("foo")
    assert editor.document.selected_text() == "foo"


def test_escape_cancels_search_prompt(editor):
    editor.handle_key(FIND)
    assert editor.status_prompt == SEARCH_PROMPT
    editor.handle_key("a")
    editor.handle_key(BACKSPACE)
    assert editor.status_input == ""
    editor.handle_key(ESCAPE)
    assert editor.waiting_for_input is False
    assert editor.search.active is False


def test_replace_all_and_undo(editor):
    editor.document.lines = ["foo bar foo"]
    for key in (FIND, "f", "o", "o", ENTER, REPLACE, "b", "a", "z", ENTER):
        editor.handle_key(key)
    assert editor.document.lines == ["baz bar baz"]
    assert editor.message == "Replaced 2 occurrences."
    editor.handle_key(UNDO)
    assert editor.document.lines == ["foo bar foo"]


def test_replace_without_query_asks_for_search_first(editor):
    editor.document.lines = ["abc"]
    editor.handle_key(REPLACE)
    assert editor.status_prompt == SEARCH_PROMPT
    editor.handle_key("q")
    editor.handle_key(ENTER)
    assert editor.status_prompt == REPLACE_PROMPT
    assert editor.input_type is InputType.REPLACE
    editor.handle_key("z")
    editor.handle_key(ENTER)
    assert editor.message == "No occurrences found."
    assert editor.document.lines == ["abc"]


def test_config_sets_tab_size_and_highlighting(tmp_path):
    config = tmp_path / ".niteconfig"
    config.write_text("tabSize = 2\nsyntaxHighlighting = true\n")
    editor = Nite(rows=10, cols=40, config_path=config)
    assert editor.syntax_highlighting is True
    editor.handle_key(TAB)
    assert editor.document.lines == ["  "]
    editor.handle_key(TOGGLE_SYNTAX)
    assert editor.syntax_highlighting is False


def test_open_config_file(tmp_path):
    config = tmp_path / ".niteconfig"
    config.write_text("tabSize = 3\n")
    editor = Nite(config_path=config)
    editor.open_file("config")
    assert editor.filename == str(config)
    assert editor.document.lines == ["tabSize = 3"]


def test_open_file_from_path_expands_tabs(editor, tmp_path):
    source = tmp_path / "tabs.txt"
    source.write_text("\tx\n")
    editor.open_file_from_path(source)
    assert editor.document.lines == [" " * editor.document.tab_size + "x"]
    assert editor.current_file == str(source)


def test_open_file_from_path_missing_shows_prompt(editor, tmp_path):
    editor.open_file_from_path(tmp_path / "absent.txt")
    assert editor.waiting_for_input is True
    assert editor.status_prompt.startswith("Error: Could not open file")
    assert editor.document.lines == [""]
    editor.handle_key(ENTER)
    assert editor.waiting_for_input is False


def test_browser_opens_selected_file(editor, tmp_path, monkeypatch):
    (tmp_path / "note.txt").write_text("content\n")
    monkeypatch.chdir(tmp_path)
    editor.toggle_file_navigator()
    assert editor.in_file_browser_mode is True
    editor.handle_key(Key.DOWN)
    editor.handle_key(ENTER)
    assert editor.in_file_browser_mode is False
    assert editor.document.lines == ["content"]


def test_browser_escape_leaves_document(editor, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    type_text(editor, "keep")
    editor.toggle_file_navigator()
    editor.handle_key(ESCAPE)
    assert editor.in_file_browser_mode is False
    assert editor.document.lines == ["keep"]


def test_select_all_cut_paste(editor):
    type_text(editor, "abc")
    editor.handle_key(SELECT_ALL)
    editor.handle_key(CUT)
    assert editor.document.lines == [""]
    editor.handle_key(PASTE)
    assert editor.document.lines == ["abc"]


def test_shift_movement_selects(editor):
    type_text(editor, "abc")
    editor.handle_key((Key.LEFT, True))
    editor.handle_key((Key.LEFT, True))
    assert editor.document.selected_text() == "bc"


def test_scroll_keeps_cursor_visible(editor):
    editor.document.lines = [str(n) for n in range(50)]
    for _ in range(25):
        editor.handle_key(Key.DOWN)
    y = editor.document.cursor_y
    assert y == 25
    assert editor.row_offset <= y < editor.row_offset + editor.rows - 1


def test_run_draws_frames(tmp_path):
    editor = Nite(config_path=tmp_path / "missing")
    screen = FakeScreen(["h", QUIT], rows=6, cols=30)
    editor.run(screen)
    assert len(screen.frames) == 2
    rows, cursor = screen.frames[-1]
    assert len(rows) == 6
    assert all(len(text) == 30 and len(attrs) == 30 for text, attrs in rows)
    assert rows[0][0].startswith("1 | h")
    assert rows[1][0].startswith("~ | ")
    assert cursor == (0, len("1 | h"))


def test_process_status_input_none_resets(editor):
    editor.start_status_input("Prompt: ", InputType.NONE)
    editor.handle_key("a")
    assert editor.status_line().startswith("Prompt: a")
    editor.process_status_input()
    assert editor.waiting_for_input is False
    assert editor.input_type is InputType.NONE


def test_run_stops_when_keys_run_out(tmp_path):
    editor = Nite(config_path=tmp_path / "missing")
    screen = FakeScreen(["a", "b"], rows=4, cols=20)
    editor.run(screen)
    assert editor.document.lines == ["ab"]
    assert (editor.rows, editor.cols) == screen.size()