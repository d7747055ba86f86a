"""RGB colours rendered as 24-bit ANSI terminal escape codes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Optional, TextIO

RESET_FOREGROUND = "\033[39m"


@dataclass(frozen=True)
class Color:
    """An RGB colour; each component is expected in the range 0-255."""

    r: int = 0
    g: int = 0
    b: int = 0

    def ansi_code(self) -> str:
        """Return the escape sequence that sets this foreground colour."""
        return f"\033[38;2;{self.r};{self.g};{self.b}m"

    def __str__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b})"


def set_foreground_color(color: Color, stream: Optional[TextIO] = None) -> None:
    """Write the escape sequence for ``color`` to ``stream`` (stdout by default)."""
    (stream if stream is not None else sys.stdout).write(color.ansi_code())


def reset_color(stream: Optional[TextIO] = None) -> None:
    """Restore the terminal's default foreground colour."""
    (stream if stream is not None else sys.stdout).write(RESET_FOREGROUND)