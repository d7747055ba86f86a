"""The editor: screen layout, status-bar prompts, key dispatch and file handling."""

from __future__ import annotations

import itertools
import logging
import re
import sys
from enum import Enum, auto
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence, Union

from nite.commands import Search, redo, replace_all, undo
from nite.config import FOREGROUND_INTENSITY, EditorConfig, load_config
from nite.cxx_highlight import PLAIN, highlight_line
from nite.document import Document, Key
from nite.navigator import FileNavigator, NavKey

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".niteconfig"
EDITOR_TAG = "[Nite_V1] "
NO_NAME = "[No Name]"
GOTO_PROMPT = "Enter line number to scroll to: "
SEARCH_PROMPT = "Search: "
REPLACE_PROMPT = "Replace all with: "
OPEN_ERROR_PROMPT = "Error: Could not open file. Press any key to continue..."

ESCAPE = "\x1b"
ENTER = "\r"
TAB = "\t"
BACKSPACE = "\b"
DELETE_WORD = "\x7f"
SELECT_ALL = "\x01"
COPY = "\x03"
FIND = "\x06"
GOTO_LINE = "\x07"
FIND_NEXT = "\x0e"
OPEN_BROWSER = "\x0f"
QUIT = "\x11"
RELOAD = "\x12"
SAVE = "\x13"
TOGGLE_SYNTAX = "\x14"
PASTE = "\x16"
CUT = "\x18"
REDO = "\x19"
UNDO = "\x1a"
REPLACE = "C-h"
DELETE_SELECTION = "C-."

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Row = tuple[str, list[int]]
Frame = tuple[list[Row], Optional[tuple[int, int]]]


class InputType(Enum):
    """What a status-bar prompt is collecting."""

    NONE = auto()
    OPEN_FILE = auto()
    GOTO_LINE = auto()
    SEARCH = auto()
    REPLACE = auto()


class _Screen(Protocol):
    def size(self) -> tuple[int, int]: ...

    def read_key(self) -> Any: ...

    def draw(self, rows: list[Row], cursor: Optional[tuple[int, int]]) -> None: ...


def _default_config_path() -> Path:
    if sys.argv and sys.argv[0]:
        return Path(sys.argv[0]).resolve().parent / CONFIG_FILENAME
    return Path.cwd() / CONFIG_FILENAME


def _split_lines(content: str) -> list[str]:
    if not content:
        return []
    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()
    return lines


def _is_printable(key: Any) -> bool:
    return isinstance(key, str) and len(key) == 1 and " " <= key <= "~"


def _movement(key: Any) -> tuple[Optional[Key], bool]:
    if isinstance(key, tuple) and len(key) == 2 and isinstance(key[0], int):
        try:
            return Key(key[0]), bool(key[1])
        except ValueError:
            return None, False
    if isinstance(key, Key):
        return key, False
    return None, False


class Nite:
    """The editor state and its reaction to each key press."""

    def __init__(
        self,
        rows: int = 24,
        cols: int = 80,
        config_path: Optional[Union[str, Path]] = None,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self.config_path = Path(config_path) if config_path is not None else _default_config_path()
        self.config = EditorConfig()
        self.syntax_highlighting = False
        self.document = Document()
        self._reload_config()

        self.row_offset = 0
        self.col_offset = 0
        self.skip_horizontal_scroll = False
        self.filename = ""
        self.file_stack: list[str] = []
        self.search = Search()

        self.waiting_for_input = False
        self.status_prompt = ""
        self.status_input = ""
        self.input_type = InputType.NONE
        self.message = ""
        self._replace_pending = False

        self.in_file_browser_mode = False
        self.navigator: Optional[FileNavigator] = None
        self.current_file = ""
        self.is_modified = False
        self._screen: Optional[_Screen] = None

    # --- configuration -------------------------------------------------

    def _reload_config(self) -> None:
        try:
            self.config = load_config(self.config_path, self.config)
        except OSError:
            logger.warning("Could not open %s file.", CONFIG_FILENAME)
        self.syntax_highlighting = self.config.syntax_highlighting
        self.document.tab_size = self.config.tab_size

    # --- status bar ----------------------------------------------------

    def status_line(self) -> str:
        """Return the bottom line of the screen, exactly ``cols`` wide."""
        if self.waiting_for_input:
            status = self.status_prompt + self.status_input
        elif self.message:
            status = self.message
        else:
            doc = self.document
            status = EDITOR_TAG + (self.filename or NO_NAME)
            if doc.dirty:
                status += " (modified)"
            if doc.has_selection:
                status += " (text selected)"
            status += f" | Row: {doc.cursor_y + 1} | Col: {doc.cursor_x + 1}"
            if self.search.active:
                status += f' | Searching: "{self.search.query}"'
        return status[: self.cols].ljust(self.cols)

    def start_status_input(self, prompt: str, kind: InputType) -> None:
        """Show ``prompt`` in the status bar and collect typed input for ``kind``."""
        self.waiting_for_input = True
        self.status_prompt = prompt
        self.status_input = ""
        self.input_type = kind

    def _clear_status_input(self) -> None:
        self.waiting_for_input = False
        self.status_prompt = ""
        self.status_input = ""
        self.input_type = InputType.NONE

    def process_status_input(self) -> None:
        """Act on the text typed at the prompt, then close the prompt."""
        kind, text = self.input_type, self.status_input
        self._clear_status_input()

        if kind is InputType.OPEN_FILE:
            if text:
                try:
                    self.open_file(text)
                except (OSError, IndexError) as exc:
                    self.message = str(exc)
        elif kind is InputType.GOTO_LINE:
            match = _LEADING_INT.match(text)
            if match is not None:
                self.scroll_to_line(int(match.group(1)) - 1)
        elif kind is InputType.SEARCH:
            replace_next = self._replace_pending
            self._replace_pending = False
            if text:
                self.search.query = text
                self.search.active = True
                self.search.last_search_line = -1
                self.search.last_search_pos = -1
                self.search.find_next(self.document)
                if replace_next:
                    self.start_status_input(REPLACE_PROMPT, InputType.REPLACE)
        elif kind is InputType.REPLACE:
            count = replace_all(self.document, self.search.query, text)
            self.message = (
                f"Replaced {count} occurrences." if count else "No occurrences found."
            )

    # --- scrolling -----------------------------------------------------

    def _scroll_horizontally(self) -> None:
        if self.skip_horizontal_scroll:
            self.skip_horizontal_scroll = False
            return
        x = self.document.cursor_x
        if x < self.col_offset:
            self.col_offset = x
        if x >= self.col_offset + self.cols:
            self.col_offset = x - self.cols + 1

    def scroll(self) -> None:
        """Move the visible window so the cursor is on screen."""
        y = self.document.cursor_y
        if y < self.row_offset:
            self.row_offset = y
        if y >= self.row_offset + self.rows - 1:
            self.row_offset = y - self.rows + 2
        self._scroll_horizontally()

    def scroll_to_line(self, line_number: int) -> None:
        """Put the cursor on ``line_number`` (clamped), about a third down the screen."""
        line_number = max(0, min(len(self.document.lines) - 1, line_number))
        self.row_offset = max(0, line_number - self.rows // 3)
        self.document.cursor_y = line_number
        self._scroll_horizontally()

    # --- files ---------------------------------------------------------

    def open_file(self, fname: Union[str, Path]) -> None:
        """Open a file; ``config`` opens the config file, ``prev`` the previous file.

        Raises ``IndexError`` when there is no previous file and ``OSError``
        when the file cannot be read (the name is kept for saving).
        """
        name = str(fname)
        if name == "config":
            target = str(self.config_path)
        elif name == "prev":
            if len(self.file_stack) < 2:
                raise IndexError("No previous file to open.")
            self.file_stack.pop()
            target = self.file_stack[-1]
        else:
            target = name

        if name != "prev" and (not self.file_stack or self.file_stack[-1] != target):
            self.file_stack.append(target)
        self.filename = target

        with open(target, encoding="utf-8", errors="replace") as handle:
            content = handle.read()

        doc = self.document
        doc.lines = _split_lines(content) or [""]
        doc.dirty = False
        doc.has_selection = False
        doc.cursor_x = doc.cursor_y = 0

    def open_file_from_path(self, path: Union[str, Path]) -> None:
        """Load a file chosen in the browser, expanding tabs to spaces."""
        doc = self.document
        doc.lines = []
        doc.cursor_x = doc.cursor_y = 0
        doc.has_selection = False
        self.row_offset = self.col_offset = 0

        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                content = handle.read()
        except OSError:
            doc.lines = [""]
            self.start_status_input(OPEN_ERROR_PROMPT, InputType.NONE)
            return

        spaces = " " * self.document.tab_size
        doc.lines = [line.replace("\t", spaces) for line in _split_lines(content)] or [""]
        self.current_file = str(path)
        self.filename = str(path)
        self.is_modified = False

    def save_file(self) -> None:
        """Write every line followed by a newline; raises ``OSError`` on failure."""
        if not self.filename:
            return
        with open(self.filename, "w", encoding="utf-8") as handle:
            handle.write("".join(f"{line}\n" for line in self.document.lines))
        self.document.dirty = False

    def toggle_file_navigator(self) -> None:
        """Switch to the file browser, starting in the working directory."""
        self.in_file_browser_mode = True
        self.navigator = FileNavigator(Path.cwd(), self.rows, self.cols)

    # --- keys ----------------------------------------------------------

    def _handle_browser_key(self, key: Any) -> None:
        navigator = self.navigator
        assert navigator is not None
        move, _ = _movement(key)
        if move is Key.UP:
            navigator.handle_input(NavKey.UP)
        elif move is Key.DOWN:
            navigator.handle_input(NavKey.DOWN)
        elif key == ENTER:
            if not navigator.handle_input(NavKey.RETURN):
                selected = navigator.selected_file()
                self.in_file_browser_mode = False
                if selected is not None:
                    self.open_file_from_path(selected)
        elif key == ESCAPE:
            self.in_file_browser_mode = False

    def _handle_status_key(self, key: Any) -> None:
        if key == ESCAPE:
            if self.input_type is InputType.SEARCH:
                self.search.active = False
            self._replace_pending = False
            self._clear_status_input()
        elif key == ENTER:
            self.process_status_input()
        elif key == BACKSPACE:
            self.status_input = self.status_input[:-1]
        elif _is_printable(key):
            self.status_input += key

    def _start_replace(self) -> None:
        if self.search.query:
            self.start_status_input(REPLACE_PROMPT, InputType.REPLACE)
        else:
            self._replace_pending = True
            self.start_status_input(SEARCH_PROMPT, InputType.SEARCH)

    def _resize(self) -> None:
        if self._screen is not None:
            self.rows, self.cols = self._screen.size()
        self._reload_config()

    def handle_key(self, key: Any) -> bool:
        """React to one key; returns False when the editor should quit.

        A key is a one-character string, a movement ``Key``, a
        ``(Key, shift)`` pair, or one of ``REPLACE`` and ``DELETE_SELECTION``.
        """
        if self.in_file_browser_mode and self.navigator is not None:
            self._handle_browser_key(key)
            return True
        if self.waiting_for_input:
            self._handle_status_key(key)
            self.scroll()
            return True

        self.message = ""
        doc = self.document
        move, shift = _movement(key)

        if move is not None:
            doc.move_cursor_key(move, shift, self.rows - 2)
        elif key == UNDO:
            undo(doc)
        elif key == REDO:
            redo(doc)
        elif key == CUT:
            doc.cut_selection()
        elif key == COPY:
            doc.copy_selection()
        elif key == PASTE:
            doc.paste()
        elif key == SELECT_ALL:
            doc.select_all()
        elif key == FIND:
            self.start_status_input(SEARCH_PROMPT, InputType.SEARCH)
        elif key == REPLACE:
            self._start_replace()
        elif key == FIND_NEXT:
            self.search.find_next(doc)
        elif key == ESCAPE:
            doc.cancel_selection()
        elif key == TAB:
            doc.insert_tab()
        elif key == ENTER:
            doc.insert_new_line()
        elif key == BACKSPACE:
            doc.delete_char()
        elif key == DELETE_WORD:
            doc.delete_word()
            self.skip_horizontal_scroll = False
        elif key == SAVE:
            try:
                self.save_file()
            except OSError:
                self.message = f"Error opening file for saving: {self.filename}"
        elif key == OPEN_BROWSER:
            self.toggle_file_navigator()
        elif key == DELETE_SELECTION:
            doc.delete_selection()
        elif key == QUIT:
            return False
        elif key == GOTO_LINE:
            self.start_status_input(GOTO_PROMPT, InputType.GOTO_LINE)
        elif key == RELOAD:
            self._resize()
        elif key == TOGGLE_SYNTAX:
            self.syntax_highlighting = not self.syntax_highlighting
        elif _is_printable(key):
            doc.insert_char(key)

        self.scroll()
        return True

    # --- drawing -------------------------------------------------------

    def _frame(self) -> Frame:
        if self.in_file_browser_mode and self.navigator is not None:
            rows = [(text, [attr] * len(text)) for text, attr in self.navigator.render()]
            return rows, None

        doc = self.document
        scheme = self.config.scheme
        number_width = len(str(max(1, len(doc.lines))))
        gutter = number_width + 3
        visible_width = max(0, self.cols - gutter)

        rows: list[Row] = []
        for y in range(self.rows - 1):
            file_row = y + self.row_offset
            if file_row < len(doc.lines):
                line = doc.lines[file_row]
                number = str(file_row + 1)
                content = line[self.col_offset : self.col_offset + visible_width]
                attrs = highlight_line(
                    line, scheme, self.col_offset, visible_width, self.syntax_highlighting
                )
                if doc.has_selection:
                    for i in range(len(content)):
                        if doc.is_position_selected(file_row, self.col_offset + i):
                            attrs[i] = scheme.highlight | scheme.default
            else:
                number, content, attrs = "~", "", []
            text = f"{number.rjust(number_width)} | {content}".ljust(self.cols)[: self.cols]
            row_attrs = ([PLAIN] * gutter + attrs)[: len(text)]
            row_attrs += [PLAIN] * (len(text) - len(row_attrs))
            rows.append((text, row_attrs))

        status = self.status_line()
        rows.append((status, [PLAIN] * len(status)))
        cursor = (doc.cursor_y - self.row_offset, doc.cursor_x - self.col_offset + gutter)
        return rows, cursor

    def run(self, screen: _Screen) -> None:
        """Draw and read keys from ``screen`` until quit or until it yields None."""
        self._screen = screen
        self.rows, self.cols = screen.size()
        try:
            self.scroll()
            screen.draw(*self._frame())
            while True:
                key = screen.read_key()
                if key is None or not self.handle_key(key):
                    break
                screen.draw(*self._frame())
        finally:
            self._screen = None


def _curses_color(bits: int) -> int:
    # Console attributes order blue, green, red; curses orders red, green, blue.
    return ((bits >> 2) & 1) | (bits & 2) | ((bits & 1) << 2)


class _CursesScreen:
    def __init__(self, stdscr: Any, curses: Any) -> None:
        self._stdscr = stdscr
        self._curses = curses
        self._pairs: dict[int, int] = {}
        self._colors = curses.has_colors()
        if self._colors:
            curses.start_color()

    def size(self) -> tuple[int, int]:
        rows, cols = self._stdscr.getmaxyx()
        return rows, cols

    def read_key(self) -> Any:
        curses = self._curses
        try:
            key = self._stdscr.get_wch()
        except curses.error:
            return ""
        if isinstance(key, str):
            return {"\n": ENTER, "\x7f": BACKSPACE, "\x08": REPLACE}.get(key, key)
        special = {
            curses.KEY_UP: Key.UP,
            curses.KEY_DOWN: Key.DOWN,
            curses.KEY_LEFT: Key.LEFT,
            curses.KEY_RIGHT: Key.RIGHT,
            curses.KEY_HOME: Key.HOME,
            curses.KEY_END: Key.END,
            curses.KEY_PPAGE: Key.PAGE_UP,
            curses.KEY_NPAGE: Key.PAGE_DOWN,
            curses.KEY_SR: (Key.UP, True),
            curses.KEY_SF: (Key.DOWN, True),
            curses.KEY_SLEFT: (Key.LEFT, True),
            curses.KEY_SRIGHT: (Key.RIGHT, True),
            curses.KEY_SHOME: (Key.HOME, True),
            curses.KEY_SEND: (Key.END, True),
            curses.KEY_BACKSPACE: BACKSPACE,
            curses.KEY_DC: DELETE_WORD,
            curses.KEY_ENTER: ENTER,
            curses.KEY_RESIZE: RELOAD,
        }
        return special.get(key, "")

    def _attribute(self, value: int) -> int:
        curses = self._curses
        attr = curses.A_BOLD if value & FOREGROUND_INTENSITY else curses.A_NORMAL
        if not self._colors:
            return attr
        fg = _curses_color(value & 7)
        bg = _curses_color((value >> 4) & 7)
        pair = 1 + fg + bg * 8
        if pair >= curses.COLOR_PAIRS:
            return attr
        if pair not in self._pairs:
            curses.init_pair(pair, fg, bg)
            self._pairs[pair] = curses.color_pair(pair)
        return attr | self._pairs[pair]

    def draw(self, rows: list[Row], cursor: Optional[tuple[int, int]]) -> None:
        curses = self._curses
        for y, (text, attrs) in enumerate(rows):
            x = 0
            for value, group in itertools.groupby(zip(text, attrs), key=lambda pair: pair[1]):
                chunk = "".join(ch for ch, _ in group)
                try:
                    self._stdscr.addstr(y, x, chunk, self._attribute(value))
                except curses.error:
                    pass
                x += len(chunk)
        try:
            if cursor is None:
                curses.curs_set(0)
            else:
                curses.curs_set(1)
                self._stdscr.move(*cursor)
        except curses.error:
            pass
        self._stdscr.refresh()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the editor on a file, in the file browser (``explorer``) or empty."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        import curses
    except ImportError:
        print("nite needs a terminal with curses support.", file=sys.stderr)
        return 1

    def session(stdscr: Any) -> None:
        curses.raw()
        curses.noecho()
        stdscr.keypad(True)
        try:
            curses.set_escdelay(25)
        except (AttributeError, curses.error):
            pass
        screen = _CursesScreen(stdscr, curses)
        rows, cols = screen.size()
        editor = Nite(rows, cols)
        if args:
            if args[0] == "explorer":
                editor.toggle_file_navigator()
            else:
                try:
                    editor.open_file(args[0])
                except (OSError, IndexError):
                    editor.message = f"Error opening file: {editor.filename or args[0]}"
        editor.run(screen)

    curses.wrapper(session)
    return 0