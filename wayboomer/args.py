"""Command-line parsing."""

from __future__ import annotations

import os
import re
import sys
from importlib.metadata import PackageNotFoundError, version

from .config import Args, Color, Configuration

MAX_MONITORS = 5

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(
    r"\s*(?P<sign>[+-]?)(?:0[xX](?=[0-9a-fA-F]))?(?P<digits>[0-9a-fA-F]*)"
)


class ArgumentError(ValueError):
    """A command-line option is missing its value or has an invalid one."""


def _program_version() -> str:
    try:
        return version("wayboomer")
    except PackageNotFoundError:
        return "unknown"


def usage(program_name: str) -> str:
    """Return the usage text for the given program name."""
    pad = " " * max(len(program_name), 1)
    lines = [
        "Usage: ",
        f"  grim - | {program_name} [options]                        Boomer Mode",
        f"  {program_name} [options] < image.[png|jpg|webp|bmp]      Image Viewer Mode",
        "Options:",
        f"  -h,             --help                    {pad} Show this message and exit.",
        f"  -v,             --version                 {pad} Show version and exit.",
        f"  -lmm <int>,     --leftmost-monitor <int>  {pad} Monitor to place the window origin on.",
        f"  -sd <path>,     --screenshot-dir <path>   {pad} Folder to save screenshots in.",
        f"  -bg <rgba hex>, --background <rgba hex>   {pad} Background color.",
    ]
    return "\n".join(lines) + "\n"


def parse_leftmost_monitor(value: str) -> int:
    """Parse a monitor index; leading digits count, anything unparsable is 0."""
    match = _INT_PREFIX.match(value)
    number = int(match.group(1)) if match else 0
    if not 0 <= number < MAX_MONITORS:
        raise ArgumentError(
            "Invalid value for -lmm/--leftmost-monitor. "
            "It has to be a number between 0 and your monitor count -1."
        )
    return number


def parse_background(value: str) -> Color:
    """Parse an eight-character RRGGBBAA hex string into a colour."""
    match = _HEX_PREFIX.match(value)
    digits = match.group("digits") if match else ""
    number = int(digits, 16) if digits else 0
    if match and match.group("sign") == "-" and number:
        number = -number
    if number < 0 or number > 0xFFFFFFFF or len(value) != 8:
        raise ArgumentError(
            "Invalid value for -bg/--background. It has to be a hex value of form RRGGBBAA."
        )
    return Color(
        r=(number >> 24) & 0xFF,
        g=(number >> 16) & 0xFF,
        b=(number >> 8) & 0xFF,
        a=number & 0xFF,
    )


def parse_args(argv: list[str] | None = None) -> tuple[Args, Configuration]:
    """Parse the full argument vector, program name first.

    Help and version requests print to stdout and raise SystemExit(0).
    Unknown arguments are ignored.
    """
    if argv is None:
        argv = sys.argv
    if not argv:
        raise ArgumentError("The argument vector must hold the program name.")

    program_name, *rest = argv
    args = Args(program_name=program_name)
    configuration = Configuration()

    tokens = iter(rest)

    def value_for(option: str) -> str:
        value = next(tokens, None)
        if value is None:
            raise ArgumentError(f"Missing value for {option}.")
        return value

    for token in tokens:
        if token in ("-h", "--help"):
            sys.stdout.write(usage(program_name))
            raise SystemExit(0)
        if token in ("-v", "--version"):
            sys.stdout.write(f"Version: {_program_version()}\n")
            raise SystemExit(0)
        if token in ("-lmm", "--leftmost-monitor"):
            args.leftmost_monitor = parse_leftmost_monitor(value_for("-lmm/--leftmost-monitor"))
        elif token in ("-sd", "--screenshot-dir"):
            folder = value_for("-sd/--screenshot-dir")
            if not os.path.isdir(folder):
                raise ArgumentError(
                    "Invalid value for -sd/--screenshot-dir. The directory does not exist."
                )
            args.screenshot_folder = folder
        elif token in ("-bg", "--background"):
            configuration.background_color = parse_background(value_for("-bg/--background"))

    return args, configuration