"""Burst particles and the explosion that owns them."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
import math
import random

import pygame
from pygame.math import Vector2

from .errors import CoordinateOverflowError
from .utils import (
    EXPLOSION_LIFE_RANGE,
    MAX_COORD,
    MAX_R,
    PARTICLE_COUNT_RANGE,
    PARTICLE_GLYPH,
    Governor,
    Position,
    clamp,
    random_color,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Pixel:
    """A single renderable terminal cell."""

    glyph: str
    position: Position
    fg: pygame.Color | None = None
    bg: pygame.Color | None = None


def sample_burst_offset(rng: random.Random, max_radius: float = MAX_R) -> Vector2:
    """Draw a point uniformly from a disk of ``max_radius`` around the origin.

    The radius is ``max_radius * sqrt(u)`` so that points are spread evenly by
    area rather than bunched up near the centre.
    """
    angle = math.tau * rng.random()
    radius = max_radius * math.sqrt(rng.random())
    return Vector2(radius * math.cos(angle), radius * math.sin(angle))


def to_screen_pos(vec: Vector2) -> Position:
    """Truncate a float position to a screen cell, refusing anything that does not fit."""
    if not (math.isfinite(vec.x) and math.isfinite(vec.y)):
        raise CoordinateOverflowError(vec.x, vec.y)
    x, y = int(vec.x), int(vec.y)
    if not (0 <= x <= MAX_COORD and 0 <= y <= MAX_COORD):
        raise CoordinateOverflowError(vec.x, vec.y)
    return (x, y)


def burst_target(origin: Position, offset: Vector2) -> Position:
    """Cell a particle launched from ``origin`` is aimed at, saturated to the screen range."""
    x = clamp(origin[0] + offset.x, 0, MAX_COORD)
    y = clamp(origin[1] + offset.y, 0, MAX_COORD)
    return (int(x), int(y))


@dataclass(slots=True)
class Explosion:
    """Radial burst of particles around a detonation point."""

    origin: Position
    pixels: list[tuple[Pixel, Position]]
    life: int
    governor: Governor = field(default_factory=lambda: Governor(speed=1))

    @classmethod
    def create(cls, origin: Position, rng: random.Random) -> Explosion:
        """Build a fresh burst centred on ``origin``."""
        count = rng.randrange(*PARTICLE_COUNT_RANGE)
        pixels = []
        for _ in range(count):
            pixel = Pixel(PARTICLE_GLYPH, origin, fg=random_color(rng))
            target = burst_target(origin, sample_burst_offset(rng))
            pixels.append((pixel, target))
        life = rng.randrange(*EXPLOSION_LIFE_RANGE)
        logger.debug("Explosion at %s with %d particles, life %d", origin, count, life)
        return cls(origin=origin, pixels=pixels, life=life)

    @property
    def spent(self) -> bool:
        return self.life == 0

    def snapshot(self) -> list[Pixel]:
        """Copies of the live particles for this frame."""
        return [replace(pixel) for pixel, _ in self.pixels]

    def fly(self, tick_rate: int) -> None:
        """Advance the burst by one tick.

        A particle already sitting on its target has no direction and stays put
        instead of being stepped along a zero-length vector.
        """
        if self.spent:
            return
        if not self.governor.ready(tick_rate):
            return

        self.life -= 1
        if self.life == 0:
            self.pixels.clear()
            return

        speed = float(self.governor.speed)
        for pixel, target in self.pixels:
            current = Vector2(pixel.position)
            offset = current - Vector2(target)
            if offset.length_squared() == 0:
                # Sitting on the target: no direction to step along.
                continue
            moved = current + offset.normalize() * speed
            moved.x = max(moved.x, 0.0)
            moved.y = max(moved.y, 0.0)
            pixel.position = to_screen_pos(moved)
