"""A keyboard-driven file browser shown in place of the editor."""

from __future__ import annotations

import os
from enum import Enum, auto
from pathlib import Path
from typing import Optional, Union

from nite.config import (
    BACKGROUND_BLUE,
    FOREGROUND_BLUE,
    FOREGROUND_GREEN,
    FOREGROUND_INTENSITY,
    FOREGROUND_RED,
)

DIRECTORY_COLOR = FOREGROUND_BLUE | FOREGROUND_INTENSITY
FILE_COLOR = FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE
SELECTED_COLOR = FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE | BACKGROUND_BLUE
BAR_COLOR = FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE | BACKGROUND_BLUE

TITLE_PREFIX = " File Browser: "
HELP_LINE = " [↑/↓] Navigate  [Enter] Open/Enter  [Esc] Cancel "


class NavKey(Enum):
    """Keys the file browser reacts to."""

    UP = auto()
    DOWN = auto()
    RETURN = auto()
    ESCAPE = auto()


def _starting_directory(initial_path: Optional[Union[str, Path]]) -> Path:
    if initial_path is None or str(initial_path) == "":
        return Path.cwd()
    try:
        candidate = Path(os.path.abspath(initial_path))
        if candidate.is_dir():
            return candidate
    except (OSError, ValueError):
        pass
    return Path.cwd()


class FileNavigator:
    """Lists a directory, keeps a selection and scrolls it within the screen."""

    def __init__(
        self,
        initial_path: Optional[Union[str, Path]] = None,
        rows: int = 24,
        cols: int = 80,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self.selected_index = 0
        self.scroll_offset = 0
        self.entries: list[Path] = []
        self.current_directory = _starting_directory(initial_path)
        self.refresh_entries()

    def refresh_entries(self) -> None:
        """Re-read the current directory: directories first, then files, by name."""
        current = self.current_directory
        entries: list[Path] = []
        if current.parent != current:
            entries.append(current.parent)
        with os.scandir(current) as listing:
            entries.extend(Path(entry.path) for entry in listing)
        entries.sort(key=lambda path: (not path.is_dir(), path.name))
        self.entries = entries

        if self.selected_index >= len(entries):
            self.selected_index = max(0, len(entries) - 1)
        if self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index
        elif self.selected_index >= self.scroll_offset + self.rows - 1:
            self.scroll_offset = self.selected_index - (self.rows - 1) + 1

    def _title(self) -> str:
        directory = str(self.current_directory)
        title = f"{TITLE_PREFIX}{directory} "
        if len(title) > self.cols:
            keep = max(0, self.cols - 20)
            tail = directory[len(directory) - keep :] if keep else ""
            title = f"{TITLE_PREFIX}...{tail} "
        return title

    def _display_name(self, entry: Path) -> str:
        name = ".." if entry == self.current_directory.parent else entry.name
        if entry.is_dir():
            name += "/"
        if len(name) > self.cols - 4:
            name = name[: max(0, self.cols - 7)] + "..."
        return name

    def render(self) -> list[tuple[str, int]]:
        """Return the screen as ``(text, attribute)`` rows, each ``cols`` wide."""
        screen: list[tuple[str, int]] = [(self._title().ljust(self.cols), BAR_COLOR)]

        for row in range(self.rows - 2):
            index = row + self.scroll_offset
            if index >= len(self.entries):
                screen.append((" " * self.cols, FILE_COLOR))
                continue
            entry = self.entries[index]
            selected = index == self.selected_index
            text = ("> " if selected else "  ") + self._display_name(entry)
            if selected:
                attribute = SELECTED_COLOR
            else:
                attribute = DIRECTORY_COLOR if entry.is_dir() else FILE_COLOR
            screen.append((text.ljust(self.cols), attribute))

        screen.append((HELP_LINE.ljust(self.cols), BAR_COLOR))
        return screen

    def handle_input(self, key: object) -> bool:
        """React to a key; returns False when the browser should close."""
        if key is NavKey.UP:
            if self.selected_index > 0:
                self.selected_index -= 1
                if self.selected_index < self.scroll_offset:
                    self.scroll_offset = self.selected_index
            return True

        if key is NavKey.DOWN:
            if self.selected_index < len(self.entries) - 1:
                self.selected_index += 1
                if self.selected_index >= self.scroll_offset + self.rows - 2:
                    self.scroll_offset = self.selected_index - (self.rows - 2) + 1
            return True

        if key is NavKey.RETURN:
            if 0 <= self.selected_index < len(self.entries):
                selected = self.entries[self.selected_index]
                if not selected.is_dir():
                    return False
                self.current_directory = selected
                self.selected_index = 0
                self.scroll_offset = 0
                self.refresh_entries()
            return True

        if key is NavKey.ESCAPE:
            return False

        return True

    def selected_file(self) -> Optional[Path]:
        """Return the selected entry if it is a file, else None."""
        if 0 <= self.selected_index < len(self.entries):
            selected = self.entries[self.selected_index]
            if not selected.is_dir():
                return selected
        return None