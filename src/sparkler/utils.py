"""Shared constants and utility helpers for Sparkler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import random

import pygame

FPS = 20
MAX_FIREWORKS = 10

# Burst radius in cells.
MAX_R = 10.0

# Screen coordinates are unsigned 16-bit.
MAX_COORD = 65535

TRAIL_GLYPH = "#"
PARTICLE_GLYPH = "*"

PARTICLE_COUNT_RANGE = (3, 10)
EXPLOSION_LIFE_RANGE = (2, 7)
ASCENT_SPEED_RANGE = (1, 10)
LIFETIME_MS_RANGE = (1000, 2000)

# Detonation rows are drawn from [TARGET_TOP, height - TARGET_BOTTOM_MARGIN).
TARGET_TOP = 8
TARGET_BOTTOM_MARGIN = 3
MIN_HEIGHT = TARGET_TOP + TARGET_BOTTOM_MARGIN + 1

Position = Tuple[int, int]
Size = Tuple[int, int]


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp a value into a closed interval."""
    return max(minimum, min(maximum, value))


def random_color(rng: random.Random) -> pygame.Color:
    """Return an opaque color with each channel drawn from [0, 255)."""
    return pygame.Color(rng.randrange(0, 255), rng.randrange(0, 255), rng.randrange(0, 255))


def spawn_band(height: int) -> tuple[int, int]:
    """Half-open row range a detonation target may be drawn from."""
    return TARGET_TOP, height - TARGET_BOTTOM_MARGIN


@dataclass(slots=True)
class Governor:
    """Frame divider shared by everything that moves.

    Each tick adds the tick rate to ``speed_target``; once it reaches ``speed``
    the entity gets one unit of motion and the accumulator starts over.
    """

    speed: int
    speed_target: int = 0

    def ready(self, tick_rate: int) -> bool:
        """Accumulate one tick and report whether a motion step is due."""
        self.speed_target += tick_rate
        if self.speed <= self.speed_target:
            self.speed_target = 0
            return True
        return False
