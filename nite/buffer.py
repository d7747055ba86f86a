"""A plain line buffer with mode tracking and simple file loading and saving."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union


class BufferMode(Enum):
    """Editing mode of a buffer."""

    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"


@dataclass
class Buffer:
    """Text stored as a list of lines; always holds at least one line."""

    lines: list[str] = field(default_factory=lambda: [""])
    mode: BufferMode = BufferMode.NORMAL

    def init_buffer(self) -> None:
        """Reset to a single empty line in normal mode."""
        self.lines = [""]
        self.mode = BufferMode.NORMAL

    def load_file(self, path: Union[str, Path]) -> None:
        """Read the file's lines; an unreadable file gives an empty buffer."""
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                content = handle.read()
        except OSError:
            self.lines = [""]
            return

        lines = content.split("\n") if content else []
        if content.endswith("\n"):
            lines.pop()
        self.lines = lines or [""]

    def save_file(self, path: Union[str, Path]) -> None:
        """Write the lines joined by newlines, without a trailing newline.

        Nothing is written when the file cannot be opened.
        """
        try:
            with open(path, "w", encoding="utf-8") as handle:
                handle.write("\n".join(self.lines))
        except OSError:
            return

    def insert_char(self, row: int, col: int, c: str) -> None:
        """Insert ``c`` on ``row``, clamping ``col`` to the line; bad rows are ignored."""
        if not 0 <= row < len(self.lines):
            return
        line = self.lines[row]
        col = max(0, min(col, len(line)))
        self.lines[row] = line[:col] + c + line[col:]

    def delete_char(self, row: int, col: int) -> None:
        """Delete the character at ``row``/``col``; out-of-range positions are ignored."""
        if not 0 <= row < len(self.lines):
            return
        line = self.lines[row]
        if not 0 <= col < len(line):
            return
        self.lines[row] = line[:col] + line[col + 1 :]

    def get_line(self, row: int) -> str:
        """Return the line at ``row``, or an empty string when out of range."""
        if not 0 <= row < len(self.lines):
            return ""
        return self.lines[row]