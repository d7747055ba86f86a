"""Minimal directory listing with relative directory changes."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class FileEntry:
    """A name in a directory and whether it is itself a directory."""

    name: str
    is_directory: bool


class FileBrowser:
    """Tracks a current directory and lists what it holds."""

    def __init__(self, root_path: Union[str, Path]) -> None:
        self.current_path = str(root_path)

    def list_files(self) -> list[FileEntry]:
        """Return the entries of the current directory in listing order."""
        with os.scandir(self.current_path) as listing:
            return [FileEntry(entry.name, entry.is_dir()) for entry in listing]

    def change_directory(self, directory: Union[str, Path]) -> None:
        """Move into ``directory`` relative to the current one.

        Raises ``NotADirectoryError`` if the target is not an existing directory.
        """
        target = Path(self.current_path) / directory
        if not target.is_dir():
            raise NotADirectoryError(f"Invalid directory: {target}")
        self.current_path = str(target)