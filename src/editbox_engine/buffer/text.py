"""Authoritative text storage addressed by code point index."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TextBuffer:
    """Single-line text storage.

    Every editing helper is pure: it returns the candidate text and leaves
    the stored text alone. Only ``commit`` replaces the stored value, which
    keeps the build-candidate / validate / commit protocol in one place
    (the edit session).
    """

    _text: str = ""
    version: int = 0

    @property
    def text(self) -> str:
        return self._text

    def length(self) -> int:
        return len(self._text)

    def __len__(self) -> int:
        return len(self._text)

    def substring(self, low: int, high: int) -> str:
        low, high = self._bounds(low, high)
        return self._text[low:high]

    def insert_at(self, index: int, run: str) -> str:
        """Return the text with ``run`` inserted before ``index``."""

        return self.replace_range(index, index, run)

    def delete_range(self, low: int, high: int) -> str:
        """Return the text with ``[low, high)`` removed."""

        return self.replace_range(low, high, "")

    def replace_range(self, low: int, high: int, run: str) -> str:
        low, high = self._bounds(low, high)
        return self._text[:low] + run + self._text[high:]

    def commit(self, text: str) -> bool:
        """Adopt ``text``; returns ``True`` when the stored value changed."""

        if text == self._text:
            return False
        self._text = text
        self.version += 1
        return True

    def _bounds(self, low: int, high: int) -> tuple[int, int]:
        if low > high:
            low, high = high, low
        size = len(self._text)
        return max(0, min(low, size)), max(0, min(high, size))


__all__ = ["TextBuffer"]
