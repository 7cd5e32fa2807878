"""Live screen queries and pattern waits."""

from .observer import Observer, WaitHandle
from .screen import PatternSource, Screen, resolve_pattern
from .screen_observer import ScreenObserver

__all__ = [
    "Observer",
    "WaitHandle",
    "Screen",
    "ScreenObserver",
    "PatternSource",
    "resolve_pattern",
]
