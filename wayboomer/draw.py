"""Freehand annotation lines kept in image coordinates."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass, field

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .config import Configuration, State  # noqa: E402

Point = tuple[float, float]

_CURVE_DIVISIONS = 24


def to_texture_coords(point: Sequence[float], pan: Sequence[float], zoom: float) -> Point:
    """Map a screen position to image coordinates."""
    return ((point[0] - pan[0]) / zoom, (point[1] - pan[1]) / zoom)


def to_screen_coords(point: Sequence[float], pan: Sequence[float], zoom: float) -> Point:
    """Map an image position to screen coordinates."""
    return (point[0] * zoom + pan[0], point[1] * zoom + pan[1])


def quadratic_control(p0: Sequence[float], p1: Sequence[float], p2: Sequence[float]) -> Point:
    """Control point of the quadratic curve from p0 to p2 that passes through p1."""
    return (
        2.0 * p1[0] - (p0[0] + p2[0]) * 0.5,
        2.0 * p1[1] - (p0[1] + p2[1]) * 0.5,
    )


def bezier_points(
    p0: Sequence[float], ctrl: Sequence[float], p2: Sequence[float], segments: int
) -> list[Point]:
    """Sample a quadratic Bezier curve into segments + 1 points, ends included."""
    if segments < 1:
        raise ValueError("segments must be at least 1")
    points = []
    for step in range(segments + 1):
        t = step / segments
        a, b, c = (1 - t) ** 2, 2 * (1 - t) * t, t * t
        points.append(
            (
                a * p0[0] + b * ctrl[0] + c * p2[0],
                a * p0[1] + b * ctrl[1] + c * p2[1],
            )
        )
    return points


@dataclass
class Line:
    """One stroke: its half-width in image units and the points it passes through."""

    thickness: float
    points: list[Point] = field(default_factory=list)


@dataclass
class Sketch:
    """All strokes drawn over the image."""

    lines: list[Line] = field(default_factory=list)

    def begin(self, thickness: float) -> Line:
        """Start a new stroke."""
        line = Line(thickness=thickness)
        self.lines.append(line)
        return line

    def add_point(self, point: Sequence[float]) -> None:
        """Append a point to the current stroke."""
        if not self.lines:
            raise ValueError("no stroke has been started")
        self.lines[-1].points.append((float(point[0]), float(point[1])))

    def clear(self) -> None:
        """Remove every stroke."""
        self.lines.clear()

    def update(
        self,
        state: State,
        configuration: Configuration,
        right_down: bool,
        mouse_pos: Sequence[float],
    ) -> None:
        """Extend or finish the stroke according to the right mouse button."""
        if not right_down:
            state.is_drawing = False
            return
        if not state.is_drawing:
            self.begin(configuration.draw_thickness / state.zoom)
            state.is_drawing = True
        self.add_point(to_texture_coords(mouse_pos, state.pan, state.zoom))

    def render(self, surface: pygame.Surface, state: State, configuration: Configuration) -> None:
        """Draw every stroke onto the surface with the current view transform."""
        color = tuple(configuration.draw_color)
        for line in self.lines:
            points = [to_screen_coords(p, state.pan, state.zoom) for p in line.points]
            if not points:
                continue

            radius = line.thickness * state.zoom
            width = max(1, round(radius * 2.0))

            if len(points) == 1:
                pygame.draw.circle(surface, color, points[0], radius)
                continue

            if len(points) == 2:
                pygame.draw.line(surface, color, points[0], points[1], width)
                pygame.draw.circle(surface, color, points[1], radius)
                continue

            pygame.draw.circle(surface, color, points[0], radius)
            for p0, p1, p2 in zip(points, points[1:], points[2:]):
                curve = bezier_points(p0, quadratic_control(p0, p1, p2), p2, _CURVE_DIVISIONS)
                pygame.draw.lines(surface, color, False, curve, width)
            pygame.draw.circle(surface, color, points[-1], radius)