"""Projection of buffer text into what is actually drawn."""

from __future__ import annotations

from typing import List, Optional

from .metrics import TextMetrics


class DisplayProjector:
    """Derives displayed text and its pixel geometry."""

    def __init__(self, metrics: TextMetrics, *, password_char: str = "") -> None:
        self.metrics = metrics
        self.password_char = password_char

    def project(self, text: str) -> str:
        if self.password_char:
            return self.password_char * len(text)
        return text

    def width(self, displayed: str) -> float:
        return self.metrics.width(displayed) if displayed else 0.0

    def offsets(self, displayed: str) -> List[float]:
        """Pixel position of every boundary: ``offsets[i] == width(displayed[:i])``."""

        return [self.width(displayed[:index]) for index in range(len(displayed) + 1)]

    def fits(self, text: str, visible_width: Optional[float]) -> bool:
        if visible_width is None:
            return True
        return self.width(self.project(text)) <= visible_width

    def fitting_prefix(self, text: str, visible_width: Optional[float]) -> int:
        """Length of the longest prefix of ``text`` whose projection fits."""

        if visible_width is None:
            return len(text)
        offsets = self.offsets(self.project(text))
        length = len(text)
        while length > 0 and offsets[length] > visible_width:
            length -= 1
        return length


__all__ = ["DisplayProjector"]
