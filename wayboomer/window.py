"""Creating the viewer window."""

from __future__ import annotations

import logging
import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .config import Args, Configuration  # noqa: E402

logger = logging.getLogger(__name__)


def choose_monitor_index(monitor_count: int, leftmost_monitor: int) -> int:
    """Pick the monitor the window origin is placed on.

    A non-negative user choice wins; otherwise the only monitor, or the
    second one when there are several.
    """
    if leftmost_monitor >= 0:
        return leftmost_monitor
    return 0 if monitor_count == 1 else 1


def window_size(
    image_size: tuple[int, int], was_file: bool, configuration: Configuration
) -> tuple[int, int]:
    """Window size: the configured size for files, the image size for screenshots."""
    width, height = image_size
    if width <= 0 or height <= 0:
        raise ValueError("image dimensions must be positive")
    if was_file:
        return configuration.window_width, configuration.window_height
    return width, height


def create_window(
    image_size: tuple[int, int], was_file: bool, configuration: Configuration, args: Args
) -> pygame.Surface:
    """Open the display window and return its surface."""
    size = window_size(image_size, was_file, configuration)
    pygame.display.init()

    flags = pygame.RESIZABLE
    display_index = 0
    if not was_file:
        flags |= pygame.NOFRAME
        desktops = pygame.display.get_desktop_sizes()
        logger.info("Monitor count: %d", len(desktops))
        for index, (width, height) in enumerate(desktops):
            logger.info("Monitor %d: (%dx%d)", index, width, height)
        display_index = choose_monitor_index(len(desktops), args.leftmost_monitor)
        if display_index >= len(desktops):
            logger.warning("Monitor %d does not exist, using monitor 0", display_index)
            display_index = 0

    surface = pygame.display.set_mode(size, flags, display=display_index)
    pygame.display.set_caption(configuration.window_title)
    return surface