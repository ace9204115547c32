"""Protocol definitions for pluggable components."""

from docxedit.protocols.timer import Timer, TimerFactory, threading_timer

__all__ = ["Timer", "TimerFactory", "threading_timer"]
