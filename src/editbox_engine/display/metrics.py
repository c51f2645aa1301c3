"""Text measurement collaborators."""

from __future__ import annotations

from typing import Protocol

from wcwidth import wcswidth, wcwidth


class TextMetrics(Protocol):
    """Measures displayed text; must be deterministic for a given font."""

    def width(self, text: str) -> float:
        ...


class FixedWidthMetrics:
    """Every code point advances by the same amount."""

    def __init__(self, char_width: float = 1.0) -> None:
        if char_width <= 0:
            raise ValueError("char_width must be positive")
        self.char_width = char_width

    def width(self, text: str) -> float:
        return len(text) * self.char_width


class CellWidthMetrics:
    """Terminal cell widths: wide CJK glyphs take two cells, combining marks none."""

    def width(self, text: str) -> float:
        cells = wcswidth(text)
        if cells >= 0:
            return float(cells)
        # Non-printable code points report -1; count them as zero width.
        return float(sum(max(0, wcwidth(ch)) for ch in text))


__all__ = ["CellWidthMetrics", "FixedWidthMetrics", "TextMetrics"]
