"""The viewer's main loop."""

from __future__ import annotations

import io
import logging
import math
import os
import sys
from collections.abc import Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .args import ArgumentError, parse_args, usage  # noqa: E402
from .config import State  # noqa: E402
from .controls import InputSnapshot, handle_inputs  # noqa: E402
from .draw import Sketch  # noqa: E402
from .image import ImageInputError, read_image_input  # noqa: E402
from .window import create_window  # noqa: E402

logger = logging.getLogger(__name__)

_FPS = 60
_DIM = (25, 25, 25)
_HOLE_KEY = (255, 0, 255)


def apply_flashlight(
    surface: pygame.Surface, center: Sequence[float], radius: float
) -> None:
    """Darken every pixel of the surface outside the circle around center."""
    dark = surface.copy()
    dark.set_alpha(None)
    dark.fill(_DIM, special_flags=pygame.BLEND_RGB_MULT)
    pygame.draw.circle(dark, _HOLE_KEY, (center[0], center[1]), radius)
    dark.set_colorkey(_HOLE_KEY)
    surface.blit(dark, (0, 0))


def _draw_view(
    target: pygame.Surface, image: pygame.Surface, pan: Sequence[float], zoom: float
) -> None:
    target_w, target_h = target.get_size()
    image_w, image_h = image.get_size()
    left = max(0.0, -pan[0] / zoom)
    top = max(0.0, -pan[1] / zoom)
    right = min(float(image_w), (target_w - pan[0]) / zoom)
    bottom = min(float(image_h), (target_h - pan[1]) / zoom)
    x0, y0 = math.floor(left), math.floor(top)
    x1, y1 = math.ceil(right), math.ceil(bottom)
    if x1 <= x0 or y1 <= y0:
        return
    region = image.subsurface((x0, y0, x1 - x0, y1 - y0))
    size = (max(1, round((x1 - x0) * zoom)), max(1, round((y1 - y0) * zoom)))
    target.blit(
        pygame.transform.scale(region, size),
        (round(pan[0] + x0 * zoom), round(pan[1] + y0 * zoom)),
    )


def _collect_inputs() -> InputSnapshot | None:
    """Drain the event queue; None means the viewer should close."""
    wheel = 0.0
    reset_pressed = False
    flashlight_pressed = False
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return None
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_q, pygame.K_ESCAPE):
                return None
            if event.key == pygame.K_0:
                reset_pressed = True
            elif event.key == pygame.K_f:
                flashlight_pressed = True
        elif event.type == pygame.MOUSEWHEEL:
            wheel += event.y

    keys = pygame.key.get_pressed()
    buttons = pygame.mouse.get_pressed()
    return InputSnapshot(
        mouse_pos=pygame.mouse.get_pos(),
        mouse_delta=pygame.mouse.get_rel(),
        wheel=wheel,
        left_down=buttons[0],
        right_down=buttons[2],
        ctrl_down=bool(keys[pygame.K_LCTRL] or keys[pygame.K_RCTRL]),
        reset_pressed=reset_pressed,
        flashlight_pressed=flashlight_pressed,
        screenshot_down=bool(keys[pygame.K_s]),
    )


def main(argv: list[str] | None = None) -> int:
    """Run the viewer on the image given on standard input."""
    if argv is None:
        argv = sys.argv
    program_name = argv[0] if argv else "wayboomer"
    try:
        args, configuration = parse_args(argv)
    except ArgumentError as exc:
        sys.stderr.write(f"Error: {exc}\n\n")
        sys.stderr.write(usage(program_name))
        return 1

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        image_input = read_image_input()
    except ImageInputError as exc:
        logger.error("%s", exc)
        return 1

    try:
        image = pygame.image.load(
            io.BytesIO(image_input.data), f"image{image_input.extension}"
        )
    except pygame.error:
        logger.error("Could not load image from memory")
        return 1

    pygame.init()
    try:
        screen = create_window(image.get_size(), image_input.was_file, configuration, args)
        image = image.convert()
        target = pygame.Surface(image.get_size())
        state = State()
        sketch = Sketch()
        clock = pygame.time.Clock()
        pygame.mouse.get_rel()

        while True:
            inputs = _collect_inputs()
            if inputs is None:
                break
            handle_inputs(state, configuration, args, sketch, inputs, screen)

            background = tuple(configuration.background_color)
            target.fill(background)
            _draw_view(target, image, state.pan, state.zoom)
            sketch.render(target, state, configuration)
            if state.flashlight_enabled:
                apply_flashlight(target, inputs.mouse_pos, state.flashlight_radius)

            screen.fill(background)
            screen.blit(target, (0, 0))
            pygame.display.flip()
            clock.tick(_FPS)
    finally:
        pygame.quit()
    return 0