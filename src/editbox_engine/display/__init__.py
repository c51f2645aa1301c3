"""Displayed-text projection, measurement and scrolling."""

from .metrics import CellWidthMetrics, FixedWidthMetrics, TextMetrics
from .projector import DisplayProjector
from .scroll import ScrollWindow

__all__ = [
    "CellWidthMetrics",
    "FixedWidthMetrics",
    "TextMetrics",
    "DisplayProjector",
    "ScrollWindow",
]
