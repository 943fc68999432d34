"""Reading the image to show from standard input."""

from __future__ import annotations

import io
import logging
import os
import stat
import sys
from dataclasses import dataclass
from typing import BinaryIO

logger = logging.getLogger(__name__)

_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", ".png"),
    (b"\xff\xd8", ".jpg"),
    (b"WEBP", ".webp"),
    (b"BM", ".bmp"),
)


class ImageInputError(Exception):
    """The input could not be read or is not a supported image."""


@dataclass(frozen=True)
class ImageInput:
    """Raw image bytes, the detected extension and whether they came from a regular file."""

    data: bytes
    extension: str
    was_file: bool


def detect_image_extension(data: bytes) -> str | None:
    """Return the file extension matching the data's signature, or None."""
    return next((ext for signature, ext in _SIGNATURES if data.startswith(signature)), None)


def _is_regular_file(stream: BinaryIO) -> bool:
    try:
        return stat.S_ISREG(os.fstat(stream.fileno()).st_mode)
    except (OSError, AttributeError, ValueError, io.UnsupportedOperation):
        return False


def read_image_input(stream: BinaryIO | None = None) -> ImageInput:
    """Read all bytes from the stream (stdin by default) and identify the image format."""
    if stream is None:
        stream = sys.stdin.buffer

    logger.warning("If this is the last message you see, you're probably doing something wrong.")
    logger.warning("You are meant to provide an image via stdin.")
    logger.warning("Do: grim - | wayland-boomer")
    logger.warning("Or: wayland-boomer < image.png")

    was_file = _is_regular_file(stream)
    try:
        data = stream.read()
    except OSError as exc:
        raise ImageInputError("Could not read from stdin") from exc

    extension = detect_image_extension(data)
    if extension is None:
        raise ImageInputError(
            "Could not detect image. Either you didn't provide a valid image "
            "or the image format is not supported."
        )
    return ImageInput(data=data, extension=extension, was_file=was_file)