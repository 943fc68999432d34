"""Zoom, pan, draw on and spotlight an image read from standard input."""

__version__ = "0.1.0"