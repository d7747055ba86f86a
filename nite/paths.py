"""Small helpers for absolute paths, lexical normalisation and existence checks."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def get_absolute_path(rel_path: PathLike) -> str:
    """Return ``rel_path`` made absolute against the working directory, unnormalised."""
    return str(Path(rel_path).absolute())


def normalize_path(path: PathLike) -> str:
    """Return the path with ``.``, ``..`` and doubled separators removed lexically.

    An empty path stays empty and a trailing separator is kept.
    """
    text = os.fspath(path)
    if not text:
        return ""
    normal = os.path.normpath(text)
    separators = (os.sep, os.altsep) if os.altsep else (os.sep,)
    if text.endswith(separators) and normal != "." and not normal.endswith(separators):
        normal += os.sep
    return normal


def file_exists(path: PathLike) -> bool:
    """Whether anything exists at ``path``; unusable paths count as missing."""
    try:
        return Path(path).exists()
    except (OSError, ValueError):
        return False