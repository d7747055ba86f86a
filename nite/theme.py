"""RGB colour themes read from ``<name>.nitetheme`` files."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from nite.colors import Color

FALLBACK_COLOR = Color(255, 255, 255)
THEME_SUFFIX = ".nitetheme"

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LEADING_INT = re.compile(r"[ \t\n\r\f\v]*([+-]?\d+)")


@dataclass
class Theme:
    """A mapping of element names to colours."""

    colors: dict[str, Color] = field(default_factory=dict)

    def get_color(self, element_name: str) -> Color:
        """Return the element's colour, or white if the theme lacks it."""
        return self.colors.get(element_name, FALLBACK_COLOR)


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid colour component: {text!r}")
    number = int(match.group(1))
    if not _INT_MIN <= number <= _INT_MAX:
        raise ValueError(f"colour component out of range: {text!r}")
    return number


def _split_entry(line: str) -> Optional[tuple[str, str, str, str]]:
    element, sep, rest = line.partition("=")
    if not sep:
        return None
    red, sep, rest = rest.partition(",")
    if not sep:
        return None
    green, sep, blue = rest.partition(",")
    if not sep or not blue:
        return None
    return element, red, green, blue


def parse_theme(lines: Iterable[str]) -> Theme:
    """Build a theme from ``element=r,g,b`` lines; malformed lines are skipped.

    Raises ``ValueError`` when a component is not a number.
    """
    colors: dict[str, Color] = {}
    for raw in lines:
        entry = _split_entry(raw.rstrip("\n"))
        if entry is None:
            continue
        element, red, green, blue = entry
        colors[element] = Color(_to_int(red), _to_int(green), _to_int(blue))
    return Theme(colors)


def load_theme(theme_name: str, assets_dir: Union[str, Path] = "assets") -> Theme:
    """Read ``<assets_dir>/<theme_name>.nitetheme``; raises ``OSError`` if missing."""
    path = Path(assets_dir) / f"{theme_name}{THEME_SUFFIX}"
    with open(path, encoding="utf-8", errors="replace") as handle:
        return parse_theme(handle)