# nite

A nimble interactive text editor for the terminal, built on `curses`. It edits
plain text files, can highlight C++ keywords, operators, strings and comments,
keeps an undo/redo history, searches and replaces, and has a built-in file
browser.

## Installation

```
pip install .
```

The editor needs Python's `curses` module. Where it is missing, `nite` prints
an error and exits with status 1.

## Usage

```
nite                # start with an empty buffer
nite path/to/file   # open a file
nite config         # open the .niteconfig file
nite explorer       # start in the file browser
```

If the file given cannot be read, the editor starts empty and shows an error
in the status bar; the name is kept, so saving creates the file.

### Keys

| Key                  | Action                                          |
|----------------------|-------------------------------------------------|
| Ctrl+S               | Save (every line is written followed by a newline) |
| Ctrl+O               | Open a file with the file browser               |
| Ctrl+Q               | Quit                                            |
| Ctrl+Z / Ctrl+Y      | Undo / redo                                     |
| Ctrl+X / Ctrl+C / Ctrl+V | Cut / copy / paste                          |
| Ctrl+A               | Select all                                      |
| Ctrl+F               | Search (type the query in the status bar)       |
| Ctrl+N               | Find next match, wrapping to the top            |
| Ctrl+H               | Replace all occurrences of the search query     |
| Ctrl+G               | Go to a line number                             |
| Ctrl+T               | Toggle syntax highlighting                      |
| Ctrl+R               | Re-read the screen size and reload the configuration |
| Arrows, Home, End, PgUp, PgDn | Move the cursor                        |
| Shift+arrows, Shift+Home/End | Extend the selection                    |
| Tab                  | Insert tab-size spaces                          |
| Backspace            | Delete the character before the cursor          |
| Delete               | Delete the word before the cursor               |
| Esc                  | Cancel the selection or the status-bar prompt   |

In the file browser, use the up and down arrows to move, Enter to open a file
or enter a directory (`..` is the parent), and Esc to go back to the editor.
Files opened from the browser have their tabs expanded to spaces.

## Configuration

On start-up, and on Ctrl+R, `nite` reads `.niteconfig` from the directory that
holds the `nite` program. Each line is `key = value`, with spaces around the
`=`; `#` starts a comment. Keys and values are case-insensitive.

```
syntaxhighlighting = true
tabsize = 4
type = green
control_flow = dark_yellow
highlight = bg_magenta
```

Syntax highlighting is off unless the config turns it on. `tabsize` must be
between 1 and 8; other values fall back to 4. Colour keys are `default`,
`type`, `type_modifier`, `cast`, `control_flow`, `operator`,
`memory_management`, `exception_handling`, `oop`, `template`, `namespace`,
`coroutine`, `concept`, `boolean_literal`, `null`, `preprocessor`, `misc` and
`highlight`. Colour names are `black`, `gray`, `light_gray`, `white`, and
`blue`, `green`, `cyan`, `red`, `magenta`, `yellow` with or without a `dark_`
prefix; each also exists with a `bg_` prefix for backgrounds.

## Library use

The pieces are usable on their own:

```python
from nite.document import Document
from nite.commands import Search, replace_all, undo, redo
from nite.config import load_config, parse_config
from nite.cxx_highlight import highlight_line

doc = Document()
for ch in "hello":
    doc.insert_char(ch)
undo(doc)                      # doc.lines == ["hell"]
replace_all(doc, "l", "L")     # returns 2; doc.lines == ["heLL"]

search = Search(query="L")
search.find_next(doc)          # selects the next match

config = parse_config(["tabsize = 2", "syntaxhighlighting = true"])
attrs = highlight_line("int x = 0;", config.scheme)  # one attribute per character
```

Other modules:

- `nite.navigator.FileNavigator` lists a directory (directories first) and
  reacts to `NavKey` presses; `render()` returns the browser screen as rows.
- `nite.browser.FileBrowser` lists a directory as `FileEntry` items and changes
  into sub-directories, raising `NotADirectoryError` for a bad target.
- `nite.buffer.Buffer` is a plain line buffer with `BufferMode`, loading and
  saving files without a trailing newline.
- `nite.settings.Settings` reads `key=value` files with defaults for `theme`,
  `tabSize` and `showLineNumbers`.
- `nite.theme` reads `element=r,g,b` lines into a `Theme` of `nite.colors.Color`
  values; `Color.ansi_code()` gives the 24-bit ANSI escape sequence.
- `nite.paths` has `get_absolute_path`, `normalize_path` and `file_exists`.

## What it does not do

- Cut, copy and paste use a clipboard inside the editor, not the system
  clipboard.
- The editor itself uses the `.niteconfig` colour scheme; the RGB themes,
  `Settings` and `Buffer` are library pieces the editor does not load.
- There is one file open at a time, with no split views and no key bindings
  beyond those listed above.