"""Caret and selection anchors tied to a text buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Range = Tuple[int, int]  # (low, high), low <= high


@dataclass(slots=True)
class SelectionModel:
    """Two unordered anchors; ``sel_end`` is the active one and holds the caret."""

    sel_start: int = 0
    sel_end: int = 0

    @property
    def caret(self) -> int:
        return self.sel_end

    @property
    def low(self) -> int:
        return min(self.sel_start, self.sel_end)

    @property
    def high(self) -> int:
        return max(self.sel_start, self.sel_end)

    @property
    def selected_range(self) -> Range:
        return (self.low, self.high)

    @property
    def selected_chars(self) -> int:
        return self.high - self.low

    @property
    def has_selection(self) -> bool:
        return self.sel_start != self.sel_end

    def select(self, start: int, end: int) -> None:
        self.sel_start = start
        self.sel_end = end

    def collapse(self, index: int) -> None:
        self.sel_start = index
        self.sel_end = index

    def extend_to(self, index: int) -> None:
        """Move the active anchor, keeping the other one fixed."""

        self.sel_end = index

    def clamp(self, length: int) -> None:
        self.sel_start = max(0, min(self.sel_start, length))
        self.sel_end = max(0, min(self.sel_end, length))


__all__ = ["Range", "SelectionModel"]
