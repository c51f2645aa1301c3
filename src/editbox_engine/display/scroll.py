"""Crop window and hit-testing over the displayed text."""

from __future__ import annotations

from typing import List, Optional, Tuple

from editbox_engine.config import Alignment

from .projector import DisplayProjector


class ScrollWindow:
    """Tracks the first visible code point when the text may outgrow the box.

    ``visible_width`` of ``None`` means the host never measured the box: the
    whole text is treated as visible and the crop stays at zero.
    """

    def __init__(
        self,
        projector: DisplayProjector,
        *,
        visible_width: Optional[float] = None,
        alignment: Alignment = Alignment.LEFT,
        limit_width: bool = False,
    ) -> None:
        self.projector = projector
        self.visible_width = visible_width
        self.alignment = Alignment(alignment)
        self.limit_width = limit_width
        self.crop = 0

    @property
    def scrolls(self) -> bool:
        return self.visible_width is not None and not self.limit_width

    def reset(self) -> None:
        self.crop = 0

    def follow_caret(self, displayed: str, caret: int) -> int:
        """Scroll the minimal amount that keeps ``caret`` inside the window."""

        if not self.scrolls:
            self.crop = 0
            return self.crop
        assert self.visible_width is not None
        offsets = self.projector.offsets(displayed)
        crop = max(0, min(self.crop, len(displayed)))
        if caret < crop:
            crop = caret
        while crop < caret and offsets[caret] - offsets[crop] > self.visible_width:
            crop += 1
        # Pull the window back while the whole tail fits, so shrinking text
        # never leaves blank space on the right.
        while crop > 0 and offsets[-1] - offsets[crop - 1] <= self.visible_width:
            crop -= 1
        self.crop = crop
        return crop

    def alignment_offset(self, text_width: float) -> float:
        if self.visible_width is None or self.crop:
            return 0.0
        spare = self.visible_width - text_width
        if spare <= 0 or self.alignment is Alignment.LEFT:
            return 0.0
        if self.alignment is Alignment.CENTER:
            return spare / 2
        return spare

    def find_caret_position(self, displayed: str, x: float) -> int:
        """Nearest code point boundary to the pixel offset ``x``.

        ``x`` is relative to the left edge of the text area. A boundary wins
        when ``x`` lies at or before the midpoint of the character that
        follows it, so ties resolve towards the earlier boundary.
        """

        if not displayed:
            return 0
        offsets = self.projector.offsets(displayed)
        crop = min(self.crop, len(displayed))
        absolute = x - self.alignment_offset(offsets[-1]) + offsets[crop]
        for index in range(len(displayed)):
            if absolute <= (offsets[index] + offsets[index + 1]) / 2:
                return index
        return len(displayed)

    def caret_x(self, displayed: str, caret: int) -> float:
        """Pixel position of ``caret`` relative to the text area."""

        offsets = self.projector.offsets(displayed)
        caret = max(0, min(caret, len(displayed)))
        crop = min(self.crop, len(displayed))
        return self.alignment_offset(offsets[-1]) + offsets[caret] - offsets[crop]

    def visible_range(self, displayed: str) -> Tuple[int, int]:
        """``[start, end)`` slice of ``displayed`` that fits in the window."""

        start = min(self.crop, len(displayed))
        if self.visible_width is None:
            return start, len(displayed)
        offsets: List[float] = self.projector.offsets(displayed)
        end = start
        while end < len(displayed) and offsets[end + 1] - offsets[start] <= self.visible_width:
            end += 1
        return start, end


__all__ = ["ScrollWindow"]
