"""Search, replace-all and the undo/redo history applied to a document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from nite.document import Action, ActionType, Document


def _split_lines(text: str) -> list[str]:
    """Split text line by line; a final newline does not start an empty line."""
    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return parts


def _replace_every(line: str, needle: str, replacement: str) -> str:
    if not needle:
        return line
    return line.replace(needle, replacement)


def _select_match(document: Document, row: int, col: int, length: int) -> None:
    document.cursor_y = row
    document.cursor_x = col
    document.has_selection = True
    document.selection_start_x = col
    document.selection_start_y = row
    document.selection_end_x = col + length
    document.selection_end_y = row


@dataclass
class Search:
    """An incremental text search that remembers its last match."""

    query: str = ""
    last_search_line: int = -1
    last_search_pos: int = -1
    active: bool = False

    def _found(self, document: Document, row: int, col: int) -> bool:
        _select_match(document, row, col, len(self.query))
        self.last_search_line = row
        self.last_search_pos = col
        return True

    def find_next(self, document: Document) -> bool:
        """Select the next match after the cursor, wrapping to the top.

        Returns whether a match was found; the cursor stays put otherwise.
        """
        if not self.query:
            return False

        lines = document.lines
        start_line = document.cursor_y
        start_pos = document.cursor_x

        if (
            self.last_search_line == start_line
            and self.last_search_pos == start_pos
            and start_line < len(lines)
            and start_pos < len(lines[start_line])
        ):
            start_pos += 1

        for row in range(start_line, len(lines)):
            col = lines[row].find(self.query, start_pos if row == start_line else 0)
            if col != -1:
                return self._found(document, row, col)

        for row in range(min(start_line + 1, len(lines))):
            col = lines[row].find(self.query)
            if col == -1:
                continue
            if row < start_line or col < start_pos:
                return self._found(document, row, col)

        return False


def replace_all(document: Document, query: str, replacement: str) -> int:
    """Replace every occurrence of ``query`` and return how many were replaced."""
    count = 0
    if query:
        for index, line in enumerate(document.lines):
            hits = line.count(query)
            if hits:
                document.lines[index] = line.replace(query, replacement)
                count += hits

    if count:
        document.undo_stack.append(
            Action(ActionType.REPLACE_ALL, text=replacement, old_text=query)
        )
        document.redo_stack.clear()
        document.dirty = True

    document.cancel_selection()
    return count


def _undo_delete_selection(document: Document, action: Action) -> None:
    lines = document.lines
    if not 0 <= action.sel_start_y < len(lines):
        return

    if action.sel_start_y == action.sel_end_y:
        line = lines[action.sel_start_y]
        lines[action.sel_start_y] = (
            line[: action.sel_start_x] + action.old_text + line[action.sel_start_x :]
        )
    else:
        original = lines[action.sel_start_y]
        first_part = original[: action.sel_start_x]
        last_part = original[action.sel_start_x :]
        restored = _split_lines(action.old_text)
        if not restored:
            return
        lines[action.sel_start_y] = first_part + restored[0]
        for offset, text in enumerate(restored[1:], start=1):
            lines.insert(action.sel_start_y + offset, text)
        lines[action.sel_start_y + len(restored) - 1] += last_part

    document.cursor_x = action.sel_end_x
    document.cursor_y = action.sel_end_y
    document.selection_start_x = action.sel_start_x
    document.selection_start_y = action.sel_start_y
    document.selection_end_x = action.sel_end_x
    document.selection_end_y = action.sel_end_y
    document.has_selection = True


def undo(document: Document) -> Optional[Action]:
    """Reverse the latest edit, move it to the redo stack and return it."""
    if not document.undo_stack:
        return None

    document.cancel_selection()
    action = document.undo_stack.pop()
    lines = document.lines
    x, y = action.cursor_x, action.cursor_y
    kind = action.kind

    if kind is ActionType.INSERT_CHAR:
        if 0 <= y < len(lines) and 0 < x <= len(lines[y]):
            lines[y] = lines[y][: x - 1] + lines[y][x:]
            document.cursor_x, document.cursor_y = x - 1, y
    elif kind is ActionType.DELETE_CHAR:
        if 0 <= y < len(lines) and 0 < x <= len(lines[y]):
            lines[y] = lines[y][: x - 1] + action.old_text + lines[y][x - 1 :]
            document.cursor_x, document.cursor_y = x, y
    elif kind is ActionType.INSERT_LINE:
        if 0 <= y < len(lines) - 1:
            lines[y] += lines[y + 1]
            del lines[y + 1]
            document.cursor_x, document.cursor_y = x, y
    elif kind is ActionType.DELETE_LINE:
        if 0 <= y < len(lines):
            current = lines[y]
            lines[y] = current[:x]
            lines.insert(y + 1, action.old_text + current[x:])
            document.cursor_x, document.cursor_y = 0, y + 1
    elif kind is ActionType.INSERT_STRING:
        document.cursor_x, document.cursor_y = x, y
    elif kind is ActionType.DELETE_SELECTION:
        _undo_delete_selection(document, action)
    elif kind is ActionType.REPLACE_ALL:
        for index, line in enumerate(lines):
            lines[index] = _replace_every(line, action.text, action.old_text)

    document.redo_stack.append(action)
    return action


def redo(document: Document) -> Optional[Action]:
    """Apply the latest undone edit again, move it to the undo stack and return it."""
    if not document.redo_stack:
        return None

    document.cancel_selection()
    action = document.redo_stack.pop()
    lines = document.lines
    x, y = action.cursor_x, action.cursor_y
    kind = action.kind

    if kind is ActionType.INSERT_CHAR:
        if 0 <= y < len(lines) and 0 <= x <= len(lines[y]):
            lines[y] = lines[y][:x] + action.text + lines[y][x:]
            document.cursor_x, document.cursor_y = x + 1, y
    elif kind is ActionType.DELETE_CHAR:
        if 0 <= y < len(lines) and 0 < x <= len(lines[y]):
            lines[y] = lines[y][: x - 1] + lines[y][x:]
            document.cursor_x, document.cursor_y = x - 1, y
    elif kind is ActionType.INSERT_LINE:
        if 0 <= y < len(lines):
            current = lines[y]
            lines[y] = current[:x]
            lines.insert(y + 1, action.text + current[x:])
            document.cursor_x, document.cursor_y = 0, y + 1
    elif kind is ActionType.DELETE_LINE:
        if 0 < y < len(lines):
            lines[y - 1] += lines[y]
            del lines[y]
            document.cursor_x, document.cursor_y = x, y - 1
    elif kind is ActionType.INSERT_STRING:
        document.cursor_x, document.cursor_y = x, y
    elif kind is ActionType.DELETE_SELECTION:
        if 0 <= action.sel_start_y < len(lines):
            document.selection_start_x = action.sel_start_x
            document.selection_start_y = action.sel_start_y
            document.selection_end_x = action.sel_end_x
            document.selection_end_y = action.sel_end_y
            document.has_selection = True
            document.delete_selection()
    elif kind is ActionType.REPLACE_ALL:
        for index, line in enumerate(lines):
            lines[index] = _replace_every(line, action.old_text, action.text)

    document.undo_stack.append(action)
    return action