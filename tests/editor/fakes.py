"""Manually fired timers for deterministic debounce tests."""

from __future__ import annotations

from typing import Callable


class FakeTimer:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        """Run the callback even if cancelled, as a timer racing its cancel would."""
        self.callback()


class FakeTimers:
    def __init__(self) -> None:
        self.created: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.created.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.created[-1]

    def fire_all(self) -> None:
        for timer in list(self.created):
            timer.fire()
