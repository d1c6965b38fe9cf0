from __future__ import annotations

import random

import pygame

from sparkler.events import ESCAPE, KeyPress, Tick
from sparkler.firework import Firework
from sparkler.particles import Pixel
from sparkler.render import Renderer, Viewport
from sparkler.settings import ShowSettings
from sparkler.show import FireworkShow
from sparkler.utils import Governor, Position, Size


def _firework(lifetime_ms: int, x: int = 10) -> Firework:
    return Firework(
        position=(x, 30),
        target=(x, 10),
        lifetime_ms=lifetime_ms,
        governor=Governor(speed=5),
        color=pygame.Color(1, 2, 3),
    )


def _show(max_fireworks: int = 10, size: Size = (80, 40), seed: int = 0) -> FireworkShow:
    return FireworkShow(ShowSettings(fps=20, max_fireworks=max_fireworks), random.Random(seed), lambda: size)


class RecordingTarget:
    def __init__(self) -> None:
        self.frames: list[list[Pixel]] = []
        self._pending: list[Pixel] = []

    def draw(self, pixel: Pixel) -> None:
        self._pending.append(pixel)

    def erase(self, position: Position) -> None:
        pass

    def flush(self) -> None:
        self.frames.append(self._pending)
        self._pending = []


def test_frame_interval_follows_fps() -> None:
    assert ShowSettings().frame_interval_ms == 50
    assert ShowSettings(fps=10).frame_interval_ms == 100


def test_expired_fireworks_are_culled_in_order() -> None:
    show = _show(max_fireworks=3)
    keep = _firework(2000, x=3)
    show.fireworks = [_firework(50, x=1), _firework(-10, x=2), keep]
    show.tick()
    assert show.fireworks == [keep]
    assert keep.lifetime_ms == 1950


def test_survivors_keep_spawn_order() -> None:
    show = _show(max_fireworks=4)
    first, doomed, last = _firework(2000, x=1), _firework(40, x=2), _firework(1500, x=3)
    show.fireworks = [first, doomed, last]
    show.tick()
    # One new launch joins at the back because the cap was not reached.
    assert show.fireworks[:2] == [first, last]
    assert len(show.fireworks) == 3


def test_expiring_firework_is_still_drawn_on_its_last_frame() -> None:
    show = _show(max_fireworks=1)
    show.fireworks = [_firework(50, x=7)]
    batch = show.tick()
    assert [pixel.position for pixel in batch] == [(7, 29)]
    assert show.fireworks == []


def test_spawn_cap_is_respected() -> None:
    show = _show(max_fireworks=2, seed=9)
    counts = []
    for _ in range(200):
        show.tick()
        counts.append(len(show.fireworks))
    assert max(counts) <= 2
    assert counts[0] == 1
    assert counts[1] == 2


def test_launches_one_firework_per_tick_below_cap() -> None:
    show = _show(max_fireworks=10, seed=1)
    for expected in range(1, 6):
        show.tick()
        assert len(show.fireworks) == expected


def test_same_seed_same_show() -> None:
    a, b = _show(seed=5), _show(seed=5)
    for _ in range(60):
        assert a.tick() == b.tick()


def test_tiny_terminal_skips_launch() -> None:
    show = _show(size=(80, 5))
    assert show.tick() == []
    assert show.fireworks == []


def test_run_renders_each_tick_until_escape() -> None:
    show = _show(seed=3)
    target = RecordingTarget()
    stream = [Tick(), KeyPress(ord("a")), Tick(), KeyPress(ESCAPE), Tick()]
    status = show.run(iter(stream), Viewport(80, 40), Renderer(target))
    assert status == 0
    assert show.frames == 2
    assert len(target.frames) == 2
    assert len(show.fireworks) == 2
