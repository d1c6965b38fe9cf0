"""Fixed-rate tick source and keyboard input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Protocol, Union

import pygame

ESCAPE = 27
NO_KEY = -1


@dataclass(slots=True, frozen=True)
class Tick:
    """Advance the show by one frame."""


@dataclass(slots=True, frozen=True)
class KeyPress:
    """A key read from the terminal."""

    code: int


Event = Union[Tick, KeyPress]


class FrameClock(Protocol):
    def tick(self, framerate: int = 0) -> int: ...


def read_keys(window: Any) -> Iterator[KeyPress]:
    """Drain pending key presses from a non-blocking curses window."""
    while True:
        code = window.getch()
        if code == NO_KEY:
            return
        yield KeyPress(code)


def events(fps: int, window: Any, clock: FrameClock | None = None) -> Iterator[Event]:
    """Yield pending key presses, then one tick per frame, forever."""
    clock = pygame.time.Clock() if clock is None else clock
    while True:
        yield from read_keys(window)
        clock.tick(fps)
        yield Tick()
