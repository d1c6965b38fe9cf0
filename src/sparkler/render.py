"""Terminal output: frame buffer, diffing and the curses backend."""

from __future__ import annotations

from typing import Any, Iterable, Protocol
import curses
import logging

import pygame

from .errors import RendererError, TerminalSizeError
from .particles import Pixel
from .utils import MIN_HEIGHT, Position, Size

logger = logging.getLogger(__name__)

DEFAULT_COLOR = -1
CUBE_BASE = 16


class Viewport:
    """Fixed-size buffer of the cells to paint this frame."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cells: dict[Position, Pixel] = {}

    def contains(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def draw_pixels(self, pixels: Iterable[Pixel]) -> None:
        """Queue pixels for the next render; off-screen ones are dropped."""
        for pixel in pixels:
            if self.contains(pixel.position):
                self.cells[pixel.position] = pixel

    def clear(self) -> None:
        self.cells = {}


class RenderTarget(Protocol):
    def draw(self, pixel: Pixel) -> None: ...

    def erase(self, position: Position) -> None: ...

    def flush(self) -> None: ...


class Renderer:
    """Paints only what changed since the previous frame."""

    def __init__(self, target: RenderTarget) -> None:
        self.target = target
        self.previous: dict[Position, Pixel] = {}

    def render(self, viewport: Viewport) -> None:
        """Push the viewport to the target and reset it for the next frame."""
        current = viewport.cells
        for position in sorted(self.previous.keys() - current.keys()):
            self.target.erase(position)
        for position, pixel in current.items():
            if self.previous.get(position) != pixel:
                self.target.draw(pixel)
        self.target.flush()
        self.previous = current
        viewport.clear()


def _cube_level(channel: int) -> int:
    if channel < 48:
        return 0
    if channel < 115:
        return 1
    return (channel - 35) // 40


def xterm_index(color: pygame.Color) -> int:
    """Nearest entry of the 6x6x6 cube in the xterm 256-color palette."""
    return CUBE_BASE + 36 * _cube_level(color.r) + 6 * _cube_level(color.g) + _cube_level(color.b)


def basic_index(color: pygame.Color) -> int:
    """Nearest of the eight standard curses colors."""
    return (color.r >= 128) | (color.g >= 128) << 1 | (color.b >= 128) << 2


class CursesTarget:
    """Draws pixels onto a curses window."""

    def __init__(self, window: Any) -> None:
        self.window = window
        self.height, self.width = window.getmaxyx()
        self.has_colors = False
        self.palette_size = 0
        self._pairs: dict[tuple[int, int], int] = {}
        try:
            self._setup()
        except curses.error as exc:
            raise RendererError(f"could not prepare terminal: {exc}") from exc

    def _setup(self) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal cannot hide the cursor")
        self.window.nodelay(True)
        self.window.keypad(True)
        curses.set_escdelay(25)

        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
            self.has_colors = True
            self.palette_size = curses.COLORS
        self.window.erase()
        logger.info("Terminal %dx%d, %d colors", self.width, self.height, self.palette_size)

    def _color_index(self, color: pygame.Color | None) -> int:
        if color is None:
            return DEFAULT_COLOR
        if self.palette_size >= 256:
            return xterm_index(color)
        return basic_index(color)

    def _attr(self, pixel: Pixel) -> int:
        if not self.has_colors:
            return 0
        key = (self._color_index(pixel.fg), self._color_index(pixel.bg))
        pair = self._pairs.get(key)
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return 0
            curses.init_pair(pair, *key)
            self._pairs[key] = pair
        return curses.color_pair(pair)

    def _is_corner(self, position: Position) -> bool:
        # Writing the last cell scrolls the window.
        return position == (self.width - 1, self.height - 1)

    def draw(self, pixel: Pixel) -> None:
        if self._is_corner(pixel.position):
            return
        x, y = pixel.position
        try:
            self.window.addstr(y, x, pixel.glyph, self._attr(pixel))
        except curses.error:
            logger.debug("Could not draw %r at %s", pixel.glyph, pixel.position)

    def erase(self, position: Position) -> None:
        if self._is_corner(position):
            return
        x, y = position
        try:
            self.window.addstr(y, x, " ")
        except curses.error:
            logger.debug("Could not erase %s", position)

    def flush(self) -> None:
        self.window.noutrefresh()
        curses.doupdate()


def terminal_size(window: Any) -> Size:
    """Return ``(width, height)`` of the window, failing if it cannot host a show."""
    try:
        height, width = window.getmaxyx()
    except curses.error as exc:
        raise TerminalSizeError(f"could not read terminal size: {exc}") from exc
    if width < 1 or height < MIN_HEIGHT:
        raise TerminalSizeError(f"terminal {width}x{height} is too small, need at least {MIN_HEIGHT} rows")
    return width, height
