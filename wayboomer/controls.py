"""Keyboard and mouse handling: panning, zooming, flashlight, screenshots."""

from __future__ import annotations

import io
import logging
import os
import random
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .config import Args, Configuration, State  # noqa: E402
from .draw import Sketch  # noqa: E402

logger = logging.getLogger(__name__)

_PICTURE_SUBDIRS = ("Pictures", "pictures", "Images", "images")
_NONCE_MIN = 1000000
_NONCE_MAX = 99999999


class ScreenshotError(Exception):
    """A screenshot could not be produced, saved or handed to the clipboard."""


@dataclass(frozen=True)
class InputSnapshot:
    """The input state of one frame."""

    mouse_pos: tuple[float, float] = (0.0, 0.0)
    mouse_delta: tuple[float, float] = (0.0, 0.0)
    wheel: float = 0.0
    left_down: bool = False
    right_down: bool = False
    ctrl_down: bool = False
    reset_pressed: bool = False
    flashlight_pressed: bool = False
    screenshot_down: bool = False


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


def reset(state: State, sketch: Sketch) -> None:
    """Restore the initial view and remove every stroke."""
    state.reset()
    sketch.clear()


def pan(state: State, delta: Sequence[float], left_down: bool) -> None:
    """Move the view by the mouse movement while the left button is held."""
    if left_down:
        state.pan = (state.pan[0] + delta[0], state.pan[1] + delta[1])


def zoom_at(
    state: State, configuration: Configuration, mouse_pos: Sequence[float], wheel: float
) -> None:
    """Zoom by the wheel movement, keeping the image point under the mouse fixed."""
    if wheel == 0:
        return
    prev_zoom = state.zoom
    world = (
        (mouse_pos[0] - state.pan[0]) / prev_zoom,
        (mouse_pos[1] - state.pan[1]) / prev_zoom,
    )
    state.zoom = _clamp(
        state.zoom + wheel * configuration.zoom_step,
        configuration.zoom_min,
        configuration.zoom_max,
    )
    state.pan = (
        mouse_pos[0] - world[0] * state.zoom,
        mouse_pos[1] - world[1] * state.zoom,
    )


def toggle_flashlight(state: State) -> None:
    """Switch the flashlight on or off."""
    state.flashlight_enabled = not state.flashlight_enabled


def resize_flashlight(state: State, configuration: Configuration, wheel: float) -> None:
    """Shrink the flashlight for positive wheel movement, grow it for negative."""
    if not state.flashlight_enabled or wheel == 0:
        return
    state.flashlight_radius = _clamp(
        state.flashlight_radius - wheel * configuration.flashlight_radius_step,
        configuration.flashlight_radius_min,
        configuration.flashlight_radius_max,
    )


def resolve_screenshot_folder(
    screenshot_folder: str | None, environ: Mapping[str, str] | None = None
) -> str:
    """Pick the folder screenshots are saved in.

    The explicit folder wins, then XDG_PICTURES_DIR, then a picture folder
    inside HOME, then HOME itself.
    """
    if environ is None:
        environ = os.environ
    if screenshot_folder is not None:
        return screenshot_folder
    folder = environ.get("XDG_PICTURES_DIR")
    if folder is not None:
        return folder
    home = environ.get("HOME")
    if home is None:
        raise ScreenshotError("Could not find XDG_PICTURES_DIR or HOME environment variable")
    for name in _PICTURE_SUBDIRS:
        candidate = f"{home}/{name}"
        if os.path.isdir(candidate):
            return candidate
    return home


def screenshot_path(folder: str, nonce: int) -> str:
    """Return the file path of a screenshot with the given nonce."""
    return f"{folder}/wayboomer_screenshot_{nonce}.png"


def encode_png(surface: pygame.Surface) -> bytes:
    """Encode the surface as PNG bytes."""
    buffer = io.BytesIO()
    try:
        pygame.image.save(surface, buffer, "screenshot.png")
    except pygame.error as exc:
        raise ScreenshotError("Failed to generate PNG image") from exc
    return buffer.getvalue()


def save_screenshot(png: bytes, folder: str) -> str:
    """Write the PNG bytes to a new randomly named file in folder and return its path."""
    nonce = random.SystemRandom().randint(_NONCE_MIN, _NONCE_MAX)
    path = screenshot_path(folder, nonce)
    try:
        with open(path, "wb") as handle:
            handle.write(png)
    except OSError as exc:
        raise ScreenshotError(f"Failed to save screenshot to {path}") from exc
    return path


def copy_to_clipboard(png: bytes) -> None:
    """Hand the PNG bytes to wl-copy."""
    try:
        subprocess.run(["wl-copy"], input=png, check=False)
    except OSError as exc:
        raise ScreenshotError(
            "Failed to open pipe to wl-copy, is wl-copy installed?"
        ) from exc


def _take_screenshot(
    surface: pygame.Surface, args: Args, to_file: bool
) -> None:
    png = encode_png(surface)
    if to_file:
        save_screenshot(png, resolve_screenshot_folder(args.screenshot_folder))
    else:
        copy_to_clipboard(png)


def handle_inputs(
    state: State,
    configuration: Configuration,
    args: Args,
    sketch: Sketch,
    inputs: InputSnapshot,
    surface: pygame.Surface,
) -> None:
    """Apply one frame of input to the state, the sketch and the screenshot actions."""
    if inputs.reset_pressed:
        reset(state, sketch)

    pan(state, inputs.mouse_delta, inputs.left_down)

    if not state.is_drawing and not inputs.ctrl_down:
        zoom_at(state, configuration, inputs.mouse_pos, inputs.wheel)

    if inputs.flashlight_pressed:
        toggle_flashlight(state)
    if inputs.ctrl_down:
        resize_flashlight(state, configuration, inputs.wheel)

    if inputs.screenshot_down:
        try:
            _take_screenshot(surface, args, inputs.ctrl_down)
        except ScreenshotError as exc:
            logger.error("%s", exc)

    sketch.update(state, configuration, inputs.right_down, inputs.mouse_pos)