"""A small curses text editor with C++ highlighting, undo/redo, search and a file browser."""

__version__ = "0.1.0"
__all__ = ["__version__"]