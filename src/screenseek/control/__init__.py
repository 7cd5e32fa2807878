"""Control layer: observing a live screen."""

from .screen import Observer, Screen, ScreenObserver, WaitHandle

__all__ = ["Observer", "Screen", "ScreenObserver", "WaitHandle"]
