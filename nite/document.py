"""The editable text of one file: cursor, selection, clipboard and edit history."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional

from nite.config import DEFAULT_TAB_SIZE


class ActionType(Enum):
    """Kinds of edit recorded for undo and redo."""

    INSERT_CHAR = "insert_char"
    DELETE_CHAR = "delete_char"
    INSERT_LINE = "insert_line"
    DELETE_LINE = "delete_line"
    INSERT_STRING = "insert_string"
    DELETE_SELECTION = "delete_selection"
    REPLACE_ALL = "replace_all"


@dataclass
class Action:
    """One recorded edit and the state needed to reverse it."""

    kind: ActionType
    cursor_x: int = 0
    cursor_y: int = 0
    text: str = ""
    old_text: str = ""
    sel_start_x: int = 0
    sel_start_y: int = 0
    sel_end_x: int = 0
    sel_end_y: int = 0


class Key(IntEnum):
    """Console scan codes of the cursor movement keys."""

    HOME = 71
    UP = 72
    PAGE_UP = 73
    LEFT = 75
    RIGHT = 77
    END = 79
    DOWN = 80
    PAGE_DOWN = 81


def _clipboard_lines(text: str) -> list[str]:
    """Split text the way line-by-line reading does: no empty tail after a final newline."""
    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return parts


@dataclass
class Document:
    """Lines of text together with the cursor, selection and undo history."""

    lines: list[str] = field(default_factory=lambda: [""])
    tab_size: int = DEFAULT_TAB_SIZE
    cursor_x: int = 0
    cursor_y: int = 0
    dirty: bool = False
    has_selection: bool = False
    selection_start_x: int = 0
    selection_start_y: int = 0
    selection_end_x: int = 0
    selection_end_y: int = 0
    undo_stack: list[Action] = field(default_factory=list)
    redo_stack: list[Action] = field(default_factory=list)
    clipboard: Optional[str] = None

    def _record(self, action: Action) -> None:
        self.undo_stack.append(action)
        self.redo_stack.clear()

    # --- editing -------------------------------------------------------

    def insert_char(self, c: str) -> None:
        """Insert one character at the cursor, replacing any selection."""
        if self.has_selection:
            self.delete_selection()
        if self.cursor_y >= len(self.lines):
            self.lines.extend([""] * (self.cursor_y + 1 - len(self.lines)))

        self._record(Action(ActionType.INSERT_CHAR, self.cursor_x, self.cursor_y, text=c))
        line = self.lines[self.cursor_y]
        self.lines[self.cursor_y] = line[: self.cursor_x] + c + line[self.cursor_x :]
        self.cursor_x += 1
        self.dirty = True

    def insert_tab(self) -> None:
        """Insert ``tab_size`` spaces."""
        for _ in range(self.tab_size):
            self.insert_char(" ")

    def delete_char(self) -> None:
        """Delete the character before the cursor, joining lines at a line start."""
        if self.has_selection:
            self.delete_selection()
            return
        if self.cursor_y >= len(self.lines):
            return

        if self.cursor_x > 0:
            line = self.lines[self.cursor_y]
            deleted = line[self.cursor_x - 1]
            self._record(
                Action(ActionType.DELETE_CHAR, self.cursor_x, self.cursor_y, old_text=deleted)
            )
            self.lines[self.cursor_y] = line[: self.cursor_x - 1] + line[self.cursor_x :]
            self.cursor_x -= 1
        elif self.cursor_y > 0:
            previous_length = len(self.lines[self.cursor_y - 1])
            removed = self.lines[self.cursor_y]
            self._record(
                Action(ActionType.DELETE_LINE, self.cursor_x, self.cursor_y, old_text=removed)
            )
            self.lines[self.cursor_y - 1] += removed
            del self.lines[self.cursor_y]
            self.cursor_y -= 1
            self.cursor_x = previous_length

        self.dirty = True

    def delete_word(self) -> None:
        """Delete the spaces and then the word before the cursor."""
        if self.has_selection:
            self.delete_selection()
            return
        if self.cursor_y >= len(self.lines):
            return

        while self.cursor_x > 0 and self.lines[self.cursor_y][self.cursor_x - 1] == " ":
            self.delete_char()
        while self.cursor_x > 0 and self.lines[self.cursor_y][self.cursor_x - 1] != " ":
            self.delete_char()

    def insert_new_line(self) -> None:
        """Split the current line at the cursor."""
        if self.has_selection:
            self.delete_selection()
        if self.cursor_y >= len(self.lines):
            self.lines.extend([""] * (self.cursor_y + 1 - len(self.lines)))

        current = self.lines[self.cursor_y]
        self.cursor_x = min(self.cursor_x, len(current))
        tail = current[self.cursor_x :]
        self.lines[self.cursor_y] = current[: self.cursor_x]
        self.lines.insert(self.cursor_y + 1, tail)

        self._record(Action(ActionType.INSERT_LINE, self.cursor_x, self.cursor_y, text=tail))
        self.cursor_y += 1
        self.cursor_x = 0
        self.dirty = True

    # --- selection -----------------------------------------------------

    def start_selection(self) -> None:
        """Begin an empty selection at the cursor."""
        self.has_selection = True
        self.selection_start_x = self.selection_end_x = self.cursor_x
        self.selection_start_y = self.selection_end_y = self.cursor_y

    def update_selection(self) -> None:
        """Move the selection end to the cursor."""
        if self.has_selection:
            self.selection_end_x = self.cursor_x
            self.selection_end_y = self.cursor_y

    def cancel_selection(self) -> None:
        """Drop the selection."""
        self.has_selection = False

    def normalized_selection(self) -> tuple[int, int, int, int]:
        """Return ``(start_x, start_y, end_x, end_y)`` with the start first in the text."""
        start = (self.selection_start_y, self.selection_start_x)
        end = (self.selection_end_y, self.selection_end_x)
        (sy, sx), (ey, ex) = sorted((start, end))
        return sx, sy, ex, ey

    def is_position_selected(self, row: int, col: int) -> bool:
        """Whether the character at ``row``/``col`` lies inside the selection."""
        if not self.has_selection:
            return False
        sx, sy, ex, ey = self.normalized_selection()
        if row < sy or row > ey:
            return False
        if row == sy and col < sx:
            return False
        if row == ey and col >= ex:
            return False
        return True

    def selected_text(self) -> str:
        """Return the selected text, lines joined with ``\\n``."""
        if not self.has_selection:
            return ""
        sx, sy, ex, ey = self.normalized_selection()
        pieces: list[str] = []
        for y, line in enumerate(self.lines[sy : ey + 1], start=sy):
            line_start = sx if y == sy else 0
            line_end = ex if y == ey else len(line)
            if line_start < len(line):
                pieces.append(line[line_start:line_end])
            if y < ey:
                pieces.append("\n")
        return "".join(pieces)

    def delete_selection(self) -> None:
        """Remove the selected text and put the cursor at its start."""
        if not self.has_selection:
            return
        sx, sy, ex, ey = self.normalized_selection()
        action = Action(
            ActionType.DELETE_SELECTION,
            sel_start_x=sx,
            sel_start_y=sy,
            sel_end_x=ex,
            sel_end_y=ey,
            old_text=self.selected_text(),
        )

        if sy == ey:
            line = self.lines[sy]
            self.lines[sy] = line[:sx] + line[ex:]
        else:
            first_part = self.lines[sy][:sx]
            last_part = ""
            if ey < len(self.lines) and ex <= len(self.lines[ey]):
                last_part = self.lines[ey][ex:]
            self.lines[sy] = first_part + last_part
            del self.lines[sy + 1 : ey + 1]
        self.cursor_x, self.cursor_y = sx, sy

        self._record(action)
        self.has_selection = False
        self.dirty = True

    def select_all(self) -> None:
        """Select the whole document and move the cursor to its end."""
        self.has_selection = True
        self.selection_start_x = 0
        self.selection_start_y = 0
        self.selection_end_x = len(self.lines[-1]) if self.lines else 0
        self.selection_end_y = max(0, len(self.lines) - 1)
        self.cursor_x = self.selection_end_x
        self.cursor_y = self.selection_end_y

    # --- clipboard -----------------------------------------------------

    def copy_selection(self) -> Optional[str]:
        """Put the selected text on the clipboard and return it."""
        if not self.has_selection:
            return None
        self.clipboard = self.selected_text()
        return self.clipboard

    def cut_selection(self) -> Optional[str]:
        """Copy the selection to the clipboard, then delete it."""
        if not self.has_selection:
            return None
        text = self.copy_selection()
        self.delete_selection()
        return text

    def paste(self, text: Optional[str] = None) -> None:
        """Insert ``text`` (the clipboard when omitted) at the cursor."""
        if self.has_selection:
            self.delete_selection()
        if text is None:
            text = self.clipboard
        if text is None:
            return

        action = Action(ActionType.INSERT_STRING, self.cursor_x, self.cursor_y, text=text)
        for index, line in enumerate(_clipboard_lines(text)):
            if index:
                self.insert_new_line()
            for c in line:
                if c == "\t":
                    self.insert_tab()
                else:
                    self.insert_char(c)

        self._record(action)
        self.dirty = True

    # --- movement ------------------------------------------------------

    def move_cursor_key(self, key: int, with_shift: bool = False, page_size: int = 1) -> None:
        """Move the cursor for a movement key, extending the selection with shift."""
        if not with_shift and self.has_selection:
            self.cancel_selection()
        if with_shift and not self.has_selection:
            self.start_selection()

        try:
            key = Key(key)
        except ValueError:
            key = None

        count = len(self.lines)
        if key is Key.LEFT:
            if self.cursor_x > 0:
                self.cursor_x -= 1
            elif self.cursor_y > 0:
                self.cursor_y -= 1
                self.cursor_x = len(self.lines[self.cursor_y])
        elif key is Key.RIGHT:
            if self.cursor_y < count:
                if self.cursor_x < len(self.lines[self.cursor_y]):
                    self.cursor_x += 1
                elif self.cursor_y + 1 < count:
                    self.cursor_y += 1
                    self.cursor_x = 0
        elif key is Key.UP:
            if self.cursor_y > 0:
                self.cursor_y -= 1
                self.cursor_x = min(self.cursor_x, len(self.lines[self.cursor_y]))
        elif key is Key.DOWN:
            if self.cursor_y + 1 < count:
                self.cursor_y += 1
                self.cursor_x = min(self.cursor_x, len(self.lines[self.cursor_y]))
        elif key is Key.HOME:
            self.cursor_x = 0
        elif key is Key.END:
            if self.cursor_y < count:
                self.cursor_x = len(self.lines[self.cursor_y])
        elif key is Key.PAGE_UP:
            self.cursor_y = max(0, self.cursor_y - page_size)
            if self.cursor_y < count:
                self.cursor_x = min(self.cursor_x, len(self.lines[self.cursor_y]))
        elif key is Key.PAGE_DOWN:
            self.cursor_y = min(count - 1, self.cursor_y + page_size)
            if 0 <= self.cursor_y < count:
                self.cursor_x = min(self.cursor_x, len(self.lines[self.cursor_y]))

        if with_shift:
            self.update_selection()