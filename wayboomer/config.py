"""Configuration defaults, command-line arguments and the viewer's mutable state."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import NamedTuple


class Color(NamedTuple):
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255


BLACK = Color(0, 0, 0, 255)
RED = Color(230, 41, 55, 255)


@dataclass
class Configuration:
    """Tunable settings of the viewer."""

    window_title: str = "wayland-boomer"
    window_width: int = 1080
    window_height: int = 720
    background_color: Color = BLACK
    zoom_min: float = 0.25
    zoom_max: float = 20.0
    zoom_step: float = 0.2
    flashlight_radius_min: float = 20.0
    flashlight_radius_max: float = 600.0
    flashlight_radius_step: float = 20.0
    draw_color: Color = RED
    draw_thickness: float = 3.5


@dataclass
class Args:
    """Values taken from the command line."""

    program_name: str | None = None
    leftmost_monitor: int = -1
    screenshot_folder: str | None = None


@dataclass
class State:
    """What changes while the viewer runs: view transform, flashlight, drawing."""

    pan: tuple[float, float] = (0.0, 0.0)
    zoom: float = 1.0
    flashlight_enabled: bool = False
    flashlight_radius: float = 100.0
    is_drawing: bool = False

    def reset(self) -> None:
        """Return every field to its initial value."""
        for field in fields(self):
            setattr(self, field.name, field.default)