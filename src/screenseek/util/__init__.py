"""Utilities: clocks, stop watch and image export."""

from .clock import Clock, SystemClock, VirtualClock
from .image_exporter import ImageExporter
from .stop_watch import StopWatch

__all__ = [
    "Clock",
    "SystemClock",
    "VirtualClock",
    "ImageExporter",
    "StopWatch",
]
