"""Exception types raised by Sparkler."""

from __future__ import annotations


class SparklerError(Exception):
    """Base class for unrecoverable Sparkler failures."""


class CoordinateOverflowError(SparklerError, OverflowError):
    """A particle position does not fit the screen coordinate type."""

    def __init__(self, x: float, y: float) -> None:
        super().__init__(f"position ({x}, {y}) cannot be converted to a screen cell")
        self.x = x
        self.y = y


class TerminalSizeError(SparklerError):
    """Terminal dimensions are unavailable or too small for a show."""


class RendererError(SparklerError):
    """The terminal backend could not be initialised."""
