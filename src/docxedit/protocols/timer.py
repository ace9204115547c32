"""Protocol for the timers used to debounce validation."""

import threading
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class Timer(Protocol):
    """A one-shot timer that can be cancelled before it fires.

    ``threading.Timer`` satisfies this structurally; tests substitute a
    manually fired fake.
    """

    def start(self) -> None:
        """Arm the timer."""
        ...

    def cancel(self) -> None:
        """Stop the timer if it has not fired yet."""
        ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


def threading_timer(delay: float, callback: Callable[[], None]) -> Timer:
    """Default factory: a daemon ``threading.Timer``."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer
