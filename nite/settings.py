"""Plain ``key=value`` editor settings with built-in defaults."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, str] = {
    "theme": "default",
    "tabSize": "4",
    "showLineNumbers": "true",
}


@dataclass
class Settings:
    """String settings read from a config file."""

    values: dict[str, str] = field(default_factory=dict)

    def apply_defaults(self) -> None:
        """Set the built-in values for theme, tab size and line numbers."""
        self.values.update(DEFAULTS)

    def load(self, path: Union[str, Path]) -> None:
        """Read ``key=value`` lines; fall back to the defaults if the file cannot be read."""
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                for raw in handle:
                    key, sep, value = raw.rstrip("\n").partition("=")
                    if sep and value:
                        self.values[key] = value
        except OSError:
            logger.error("Failed to open config file: %s", path)
            self.apply_defaults()

    def get(self, key: str) -> str:
        """Return the value for ``key``, or an empty string when unset."""
        return self.values.get(key, "")