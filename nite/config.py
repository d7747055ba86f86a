"""Editor configuration: console colour attributes, colour scheme and settings."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Iterable, Optional, Union

logger = logging.getLogger(__name__)

FOREGROUND_BLUE = 0x0001
FOREGROUND_GREEN = 0x0002
FOREGROUND_RED = 0x0004
FOREGROUND_INTENSITY = 0x0008
BACKGROUND_BLUE = 0x0010
BACKGROUND_GREEN = 0x0020
BACKGROUND_RED = 0x0040
BACKGROUND_INTENSITY = 0x0080

DEFAULT_TAB_SIZE = 4
MIN_TAB_SIZE = 1
MAX_TAB_SIZE = 8

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_LEADING_INT = re.compile(r"[+-]?\d+")

COLOR_MAP: dict[str, int] = {
    "black": 0,
    "dark_blue": FOREGROUND_BLUE,
    "dark_green": FOREGROUND_GREEN,
    "dark_cyan": FOREGROUND_GREEN | FOREGROUND_BLUE,
    "dark_red": FOREGROUND_RED,
    "dark_magenta": FOREGROUND_RED | FOREGROUND_BLUE,
    "dark_yellow": FOREGROUND_RED | FOREGROUND_GREEN,
    "gray": FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE,
    "light_gray": FOREGROUND_INTENSITY,
    "blue": FOREGROUND_BLUE | FOREGROUND_INTENSITY,
    "green": FOREGROUND_GREEN | FOREGROUND_INTENSITY,
    "cyan": FOREGROUND_GREEN | FOREGROUND_BLUE | FOREGROUND_INTENSITY,
    "red": FOREGROUND_RED | FOREGROUND_INTENSITY,
    "magenta": FOREGROUND_RED | FOREGROUND_BLUE | FOREGROUND_INTENSITY,
    "yellow": FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_INTENSITY,
    "white": FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE | FOREGROUND_INTENSITY,
    "bg_black": 0,
    "bg_dark_blue": BACKGROUND_BLUE,
    "bg_dark_green": BACKGROUND_GREEN,
    "bg_dark_cyan": BACKGROUND_GREEN | BACKGROUND_BLUE,
    "bg_dark_red": BACKGROUND_RED,
    "bg_dark_magenta": BACKGROUND_RED | BACKGROUND_BLUE,
    "bg_dark_yellow": BACKGROUND_RED | BACKGROUND_GREEN,
    "bg_gray": BACKGROUND_RED | BACKGROUND_GREEN | BACKGROUND_BLUE,
    "bg_blue": BACKGROUND_BLUE | BACKGROUND_INTENSITY,
    "bg_green": BACKGROUND_GREEN | BACKGROUND_INTENSITY,
    "bg_cyan": BACKGROUND_GREEN | BACKGROUND_BLUE | BACKGROUND_INTENSITY,
    "bg_red": BACKGROUND_RED | BACKGROUND_INTENSITY,
    "bg_magenta": BACKGROUND_RED | BACKGROUND_BLUE | BACKGROUND_INTENSITY,
    "bg_yellow": BACKGROUND_RED | BACKGROUND_GREEN | BACKGROUND_INTENSITY,
    "bg_white": BACKGROUND_RED | BACKGROUND_GREEN | BACKGROUND_BLUE | BACKGROUND_INTENSITY,
    "bg_light_gray": BACKGROUND_INTENSITY,
}


def color_attribute(name: str) -> int:
    """Return the console attribute for a colour name (case-insensitive)."""
    try:
        return COLOR_MAP[name.lower()]
    except KeyError:
        raise KeyError(f"unknown colour name: {name!r}") from None


@dataclass(frozen=True)
class ColorScheme:
    """Console attributes used for each syntax category and the selection."""

    default: int = FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_BLUE
    type: int = FOREGROUND_GREEN
    type_modifier: int = FOREGROUND_GREEN | FOREGROUND_INTENSITY
    cast: int = FOREGROUND_GREEN | FOREGROUND_BLUE
    control_flow: int = FOREGROUND_RED | FOREGROUND_GREEN
    operator: int = FOREGROUND_RED | FOREGROUND_BLUE
    memory_management: int = FOREGROUND_BLUE | FOREGROUND_INTENSITY
    exception_handling: int = FOREGROUND_RED | FOREGROUND_INTENSITY
    oop: int = FOREGROUND_BLUE | FOREGROUND_INTENSITY
    template: int = FOREGROUND_GREEN | FOREGROUND_BLUE | FOREGROUND_INTENSITY
    namespace: int = FOREGROUND_BLUE
    coroutine: int = FOREGROUND_BLUE | FOREGROUND_RED | FOREGROUND_INTENSITY
    concept: int = FOREGROUND_RED | FOREGROUND_GREEN | FOREGROUND_INTENSITY
    boolean_literal: int = FOREGROUND_GREEN | FOREGROUND_INTENSITY
    null: int = FOREGROUND_RED
    preprocessor: int = FOREGROUND_BLUE | FOREGROUND_GREEN
    misc: int = FOREGROUND_BLUE | FOREGROUND_RED
    highlight: int = BACKGROUND_BLUE | BACKGROUND_RED | BACKGROUND_INTENSITY


_SCHEME_KEYS = frozenset(f.name for f in fields(ColorScheme))


@dataclass(frozen=True)
class EditorConfig:
    """Colour scheme plus the syntax highlighting switch and tab size."""

    scheme: ColorScheme = field(default_factory=ColorScheme)
    syntax_highlighting: bool = False
    tab_size: int = DEFAULT_TAB_SIZE


def _parse_tab_size(value: str) -> int:
    match = _LEADING_INT.match(value)
    if match is None:
        logger.warning("Invalid tabSize value: %s", value)
        return DEFAULT_TAB_SIZE
    number = int(match.group())
    if not _INT_MIN <= number <= _INT_MAX:
        logger.warning("tabSize value out of range: %s", value)
        return DEFAULT_TAB_SIZE
    if not MIN_TAB_SIZE <= number <= MAX_TAB_SIZE:
        logger.warning("Invalid tabSize value. Must be between 1 and 8.")
        return DEFAULT_TAB_SIZE
    return number


def parse_config(lines: Iterable[str], base: Optional[EditorConfig] = None) -> EditorConfig:
    """Apply ``key = value`` lines to ``base`` and return the resulting config."""
    config = base if base is not None else EditorConfig()
    colors: dict[str, int] = {}
    syntax = config.syntax_highlighting
    tab_size = config.tab_size

    for raw in lines:
        words = raw.split("#", 1)[0].split()
        if len(words) < 3 or words[1] != "=":
            continue
        key, value = words[0].lower(), words[2].lower()

        if value in COLOR_MAP and key in _SCHEME_KEYS:
            colors[key] = COLOR_MAP[value]
        elif key == "syntaxhighlighting":
            if value == "true":
                syntax = True
            elif value == "false":
                syntax = False
            else:
                logger.warning("Invalid value for syntaxhighlighting in config.")
        elif key == "tabsize":
            tab_size = _parse_tab_size(value)

    return replace(
        config,
        scheme=replace(config.scheme, **colors),
        syntax_highlighting=syntax,
        tab_size=tab_size,
    )


def load_config(
    path: Union[str, Path], base: Optional[EditorConfig] = None
) -> EditorConfig:
    """Read a config file; raises ``OSError`` if it cannot be opened."""
    with open(path, encoding="utf-8", errors="replace") as handle:
        return parse_config(handle, base)