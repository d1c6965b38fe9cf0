"""The show loop: spawning, ticking and culling fireworks."""

from __future__ import annotations

from typing import Callable, Iterable
import logging
import random

from .errors import TerminalSizeError
from .events import ESCAPE, Event, KeyPress, Tick
from .firework import Firework, spawn_firework
from .particles import Pixel
from .render import Renderer, Viewport
from .settings import ShowSettings
from .utils import Size

logger = logging.getLogger(__name__)


class FireworkShow:
    """Owns every active firework and advances them once per tick."""

    def __init__(
        self,
        settings: ShowSettings,
        rng: random.Random,
        size_provider: Callable[[], Size],
    ) -> None:
        self.settings = settings
        self.rng = rng
        self.size_provider = size_provider
        self.fireworks: list[Firework] = []
        self.frames = 0

    def spawn(self) -> Firework | None:
        """Launch one firework sized to the current terminal."""
        try:
            firework = spawn_firework(self.rng, self.size_provider())
        except TerminalSizeError as exc:
            logger.warning("Skipping launch: %s", exc)
            return None
        self.fireworks.append(firework)
        return firework

    def tick(self) -> list[Pixel]:
        """Advance the show one frame and return the cells to draw."""
        if len(self.fireworks) < self.settings.max_fireworks:
            self.spawn()

        dead: list[int] = []
        batch: list[Pixel] = []
        for index, firework in enumerate(self.fireworks):
            firework.lifetime_ms -= self.settings.frame_interval_ms
            if firework.expired:
                dead.append(index)
            firework.fly(self.settings.fps, self.rng)
            batch.extend(firework.pixels())

        self.cull(dead)
        self.frames += 1
        return batch

    def cull(self, dead: Iterable[int]) -> None:
        """Drop the fireworks at the given indices, keeping the rest in order."""
        dead_set = set(dead)
        if not dead_set:
            return
        self.fireworks = [f for i, f in enumerate(self.fireworks) if i not in dead_set]
        logger.debug("Culled %d fireworks, %d active", len(dead_set), len(self.fireworks))

    def run(self, events: Iterable[Event], viewport: Viewport, renderer: Renderer) -> int:
        """Consume events until Escape is pressed."""
        logger.info("Show started at %d fps", self.settings.fps)
        for event in events:
            if isinstance(event, KeyPress):
                if event.code == ESCAPE:
                    break
                continue
            if isinstance(event, Tick):
                viewport.draw_pixels(self.tick())
                renderer.render(viewport)
        logger.info("Show stopped after %d frames", self.frames)
        return 0
