from __future__ import annotations

from itertools import islice

from sparkler.events import ESCAPE, KeyPress, Tick, events, read_keys


class FakeWindow:
    def __init__(self, keys: list[int]) -> None:
        self.keys = list(keys)

    def getch(self) -> int:
        return self.keys.pop(0) if self.keys else -1


class FakeClock:
    def __init__(self) -> None:
        self.calls: list[int] = []

    def tick(self, framerate: int = 0) -> int:
        self.calls.append(framerate)
        return 1000 // framerate


def test_read_keys_drains_pending_input() -> None:
    window = FakeWindow([ord("x"), ESCAPE])
    assert list(read_keys(window)) == [KeyPress(ord("x")), KeyPress(ESCAPE)]
    assert list(read_keys(window)) == []


def test_events_interleave_keys_and_ticks() -> None:
    window = FakeWindow([ord("q")])
    clock = FakeClock()
    stream = list(islice(events(20, window, clock), 4))
    assert stream == [KeyPress(ord("q")), Tick(), Tick(), Tick()]
    assert clock.calls == [20, 20, 20]
