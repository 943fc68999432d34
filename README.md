# wayboomer

A zoom-and-annotate viewer for screenshots. Pipe a full-screen capture into it
and you get a borderless window the size of the capture, placed on one of your
monitors. In it you can zoom, pan, draw, shine a flashlight and take a
screenshot of the view. Give it an image file instead and it opens as an
ordinary resizable 1080×720 image viewer.

## Installation

```
pip install .
```

This installs the `wayboomer` command. The only dependency is `pygame`.

## Usage

Boomer mode, which shows a capture of the screen:

```
grim - | wayboomer
```

Image viewer mode:

```
wayboomer < image.png
```

The image is read from standard input and its format is detected from its
first bytes: PNG, JPEG, WebP or BMP. Anything else is rejected with an error.
Whether a detected format can actually be decoded depends on the image support
of the installed pygame.

Standard input being a regular file (`< image.png`) selects image viewer mode;
a pipe selects boomer mode.

### Options

| Option | Meaning |
| --- | --- |
| `-h`, `--help` | Show usage and exit. |
| `-v`, `--version` | Show version and exit. |
| `-lmm <int>`, `--leftmost-monitor <int>` | Monitor to place the window on in boomer mode (0–4). |
| `-sd <path>`, `--screenshot-dir <path>` | Existing folder to save screenshots in. |
| `-bg <RRGGBBAA>`, `--background <RRGGBBAA>` | Background colour as an 8-digit hex value. |

Unknown arguments are ignored. A missing or invalid option value prints an
error and the usage text to standard error and exits with status 1.

Without `-lmm`, the window goes on the only monitor, or on the second one when
there are several. A monitor number that does not exist falls back to monitor 0.

### Controls

| Input | Action |
| --- | --- |
| Left mouse drag | Pan |
| Mouse wheel | Zoom around the cursor (0.25× to 20×) |
| Right mouse drag | Draw a freehand line |
| `F` | Toggle the flashlight |
| `Ctrl` + mouse wheel | Resize the flashlight while it is on (radius 20 to 600) |
| `S` | Copy the window contents to the clipboard as PNG (needs `wl-copy`) |
| `Ctrl` + `S` | Save the window contents as a PNG file |
| `0` | Reset zoom, pan and flashlight, and clear the drawings |
| `Q` / `Esc` | Quit |

Zooming is disabled while drawing. Lines are kept in image coordinates, so they
follow the image when you pan and zoom.

If no screenshot directory is given, screenshots are saved under
`$XDG_PICTURES_DIR`. Without that variable they go to the first of
`$HOME/Pictures`, `$HOME/pictures`, `$HOME/Images` or `$HOME/images` that
exists, and otherwise to `$HOME`. Each file is named
`wayboomer_screenshot_<number>.png`. Screenshot failures are logged and the
viewer keeps running.

## Limitations

- The boomer-mode window is borderless but not kept on top of other windows
  and not transparent.
- There is no way to choose the drawing colour or thickness from the command
  line; they are fixed in `wayboomer.config.Configuration`.