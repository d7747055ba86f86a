[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nite"
version = "0.1.0"
description = "Nimble Interactive Text Editor: a small curses text editor with C++ syntax highlighting, undo/redo and a file browser"
requires-python = ">=3.10"
dependencies = []
keywords = ["editor", "text-editor", "terminal", "curses", "syntax-highlighting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nite = "nite.app:main"

[tool.hatch.build.targets.wheel]
packages = ["nite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
