"""Firework entities and how they are launched."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union
import logging
import random

import pygame

from .errors import TerminalSizeError
from .particles import Explosion, Pixel
from .utils import (
    ASCENT_SPEED_RANGE,
    LIFETIME_MS_RANGE,
    TRAIL_GLYPH,
    Governor,
    Position,
    Size,
    random_color,
    spawn_band,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Ascending:
    """Still climbing towards the detonation row."""


@dataclass(slots=True)
class Exploding:
    """Detonated; the burst lives on until the firework expires."""

    explosion: Explosion


Phase = Union[Ascending, Exploding]


@dataclass(slots=True, eq=False)
class Firework:
    """A single rocket: one trail cell on the way up, a burst at the top."""

    position: Position
    target: Position
    lifetime_ms: int
    governor: Governor
    color: pygame.Color
    phase: Phase = field(default_factory=Ascending)

    @property
    def explosion(self) -> Explosion | None:
        if isinstance(self.phase, Exploding):
            return self.phase.explosion
        return None

    @property
    def expired(self) -> bool:
        return self.lifetime_ms <= 0

    def pixels(self) -> list[Pixel]:
        """Cells to draw for this firework this frame."""
        if isinstance(self.phase, Exploding):
            return self.phase.explosion.snapshot()
        return [Pixel(TRAIL_GLYPH, self.position, fg=self.color)]

    def fly(self, tick_rate: int, rng: random.Random) -> None:
        """Advance one tick: climb a row, detonate, or animate the burst."""
        if not self.governor.ready(tick_rate):
            return

        x, y = self.position
        if self.target[1] < y:
            self.position = (x, y - 1)
        elif isinstance(self.phase, Exploding):
            self.phase.explosion.fly(tick_rate)
        else:
            self.phase = Exploding(Explosion.create(self.target, rng))


def spawn_firework(rng: random.Random, size: Size) -> Firework:
    """Launch a firework from the bottom row of a ``size`` terminal."""
    width, height = size
    top, bottom = spawn_band(height)
    if width < 1 or bottom <= top:
        raise TerminalSizeError(f"terminal {width}x{height} is too small to launch fireworks")

    x = rng.randrange(0, width)
    target_y = rng.randrange(top, bottom)
    firework = Firework(
        position=(x, height - 1),
        target=(x, target_y),
        lifetime_ms=rng.randrange(*LIFETIME_MS_RANGE),
        governor=Governor(speed=rng.randrange(*ASCENT_SPEED_RANGE)),
        color=random_color(rng),
    )
    logger.debug("Spawned firework at column %d aiming for row %d", x, target_y)
    return firework
