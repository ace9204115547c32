"""Debounced XML validation tagged with the entry it was issued for."""

import logging
import threading
from typing import Callable, Generic, Optional, TypeVar

from docxedit.checker import validate
from docxedit.models import ValidationResult
from docxedit.protocols import Timer, TimerFactory, threading_timer

logger = logging.getLogger(__name__)

TagT = TypeVar("TagT")


class DebouncedValidator(Generic[TagT]):
    """Run validation only after a quiet period since the last request.

    Every ``schedule`` call cancels the pending run and arms a new one.
    Each run carries the tag it was scheduled with, so the receiver can
    discard results for an entry that is no longer active.
    """

    def __init__(
        self,
        delay: float,
        deliver: Callable[[TagT, ValidationResult], None],
        timer_factory: Optional[TimerFactory] = None,
    ):
        """Initialize the validator.

        Args:
            delay: Quiet period in seconds
            deliver: Called with (tag, result) when a run completes
            timer_factory: Creates timers; defaults to daemon threading.Timer
        """
        self.delay = delay
        self._deliver = deliver
        self._timer_factory = timer_factory or threading_timer
        self._lock = threading.Lock()
        self._pending: Optional[Timer] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        """True while a validation run is armed and has not fired."""
        with self._lock:
            return self._pending is not None

    def schedule(self, tag: TagT, text: str) -> None:
        """(Re)schedule validation of text on behalf of tag."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            self._generation += 1
            generation = self._generation
            timer = self._timer_factory(self.delay, lambda: self._fire(generation, tag, text))
            self._pending = timer
        timer.start()

    def cancel(self) -> None:
        """Cancel the pending run, if any."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self._generation += 1

    def _fire(self, generation: int, tag: TagT, text: str) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Skipping superseded validation for {tag}")
                return
            self._pending = None

        self._deliver(tag, validate(text))
