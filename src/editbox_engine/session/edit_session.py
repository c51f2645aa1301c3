"""Edit session: applies editing intents atomically across the buffer layers.

Every mutating intent follows the same protocol:

1. build a candidate text (and caret/selection) without touching state,
2. validate it against the length limit, the validator and the width limit,
3. commit it in one step, or discard it and leave everything unchanged.

Two intents deliberately bend step 2. ``set_text`` clears the text instead of
rejecting a mismatch, and shrinking edits (deleting, truncating) always
commit so the user can edit their way out of a state the validator dislikes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from editbox_engine.buffer import (
    Clipboard,
    InvalidPatternError,
    LocalClipboard,
    Range,
    SelectionModel,
    TextBuffer,
    TextValidator,
)
from editbox_engine.config import Alignment, EditBoxConfig, normalize_password_char
from editbox_engine.display import (
    DisplayProjector,
    FixedWidthMetrics,
    ScrollWindow,
    TextMetrics,
)
from editbox_engine.runtime import telemetry

from .events import (
    CARET_POSITION_CHANGED,
    RETURN_OR_UNFOCUSED,
    RETURN_PRESSED,
    TEXT_CHANGED,
    EditEvents,
)

DEFAULT_LOGGER_NAME = "editbox_engine.session"


@dataclass(frozen=True, slots=True)
class Candidate:
    """Prospective state computed before validation."""

    text: str
    sel_start: int
    sel_end: int
    label: str


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of an intent.

    ``status`` is one of ``committed``, ``moved``, ``copied``, ``submitted``,
    ``noop``, ``rejected`` or ``read_only``.
    """

    committed: bool
    status: str = "committed"
    reason: Optional[str] = None


@dataclass(slots=True)
class SessionMirror:
    """Host-friendly snapshot of everything a renderer needs."""

    text: str
    displayed_text: str
    visible_text: str
    visible_start: int
    caret: int
    caret_x: float
    selection: Range
    crop_position: int
    placeholder: str
    suffix: str
    read_only: bool


READ_ONLY = EditResult(committed=False, status="read_only")


def _noop(reason: Optional[str] = None) -> EditResult:
    return EditResult(committed=False, status="noop", reason=reason)


def _single_line(text: str) -> str:
    return text.replace("\r\n", "").replace("\r", "").replace("\n", "")


def word_begin(displayed: str, index: int) -> int:
    """Start of the word left of ``index``: skip whitespace, then the word."""

    pos = index
    while pos > 0 and displayed[pos - 1].isspace():
        pos -= 1
    while pos > 0 and not displayed[pos - 1].isspace():
        pos -= 1
    return pos


def word_end(displayed: str, index: int) -> int:
    """End of the word right of ``index``: skip whitespace, then the word."""

    pos = index
    size = len(displayed)
    while pos < size and displayed[pos].isspace():
        pos += 1
    while pos < size and not displayed[pos].isspace():
        pos += 1
    return pos


class EditSession:
    """Owns text, caret, selection and crop state for one edit box."""

    def __init__(
        self,
        config: Optional[EditBoxConfig] = None,
        *,
        metrics: Optional[TextMetrics] = None,
        clipboard: Optional[Clipboard] = None,
        events: Optional[EditEvents] = None,
        logger_name: Optional[str] = None,
    ) -> None:
        config = config or EditBoxConfig()
        self.events = events or EditEvents()
        self.clipboard: Clipboard = clipboard or LocalClipboard()
        self.default_text = config.default_text
        self._logger_name = logger_name or DEFAULT_LOGGER_NAME
        self._buffer = TextBuffer()
        self._selection = SelectionModel()
        self._validator = TextValidator(config.validator)
        self._projector = DisplayProjector(
            metrics or FixedWidthMetrics(), password_char=config.password_char
        )
        self._scroll = ScrollWindow(
            self._projector,
            alignment=config.alignment,
            limit_width=config.limit_width,
        )
        self._max_chars = config.max_chars
        self._read_only = config.read_only
        self._suffix = config.suffix
        self._width = config.width
        self._displayed = ""
        self._refresh_visible_width()
        if config.initial_text:
            self.set_text(config.initial_text)

    # --- State accessors ------------------------------------------------------
    @property
    def text(self) -> str:
        return self._buffer.text

    @property
    def displayed_text(self) -> str:
        return self._displayed

    @property
    def caret(self) -> int:
        return self._selection.caret

    @property
    def sel_start(self) -> int:
        return self._selection.sel_start

    @property
    def sel_end(self) -> int:
        return self._selection.sel_end

    @property
    def selected_range(self) -> Range:
        return self._selection.selected_range

    @property
    def selected_chars(self) -> int:
        return self._selection.selected_chars

    @property
    def has_selection(self) -> bool:
        return self._selection.has_selection

    def get_selected_text(self) -> str:
        low, high = self._selection.selected_range
        return self._buffer.substring(low, high)

    @property
    def crop_position(self) -> int:
        return self._scroll.crop

    @property
    def max_chars(self) -> int:
        return self._max_chars

    @property
    def password_char(self) -> str:
        return self._projector.password_char

    @property
    def input_validator(self) -> str:
        return self._validator.pattern

    @property
    def read_only(self) -> bool:
        return self._read_only

    @property
    def limit_width(self) -> bool:
        return self._scroll.limit_width

    @property
    def alignment(self) -> Alignment:
        return self._scroll.alignment

    @property
    def suffix(self) -> str:
        return self._suffix

    @property
    def width(self) -> Optional[float]:
        return self._width

    @property
    def visible_width(self) -> Optional[float]:
        return self._scroll.visible_width

    @property
    def version(self) -> int:
        return self._buffer.version

    # --- Text intents ---------------------------------------------------------
    def insert_character(self, char: str) -> EditResult:
        """Insert one code point at the caret, replacing any selection."""

        if len(char) != 1:
            raise ValueError("insert_character expects exactly one code point")
        return self._insert_run(char, label="insert_character")

    def insert_text(self, run: str) -> EditResult:
        """Insert ``run`` as one unit; the whole run is accepted or rejected."""

        if not run:
            return _noop()
        return self._insert_run(run, label="insert_text")

    def set_text(self, text: str, *, caret: Optional[int] = None) -> EditResult:
        """Replace the whole text.

        The text is cut from the tail to honour the length and width limits.
        A result the validator rejects is replaced by the empty string. The
        caret lands at the end unless ``caret`` is given.
        """

        candidate = text
        if self._max_chars and len(candidate) > self._max_chars:
            candidate = candidate[: self._max_chars]
        candidate = self._fit_width(candidate)
        if not self._validator.matches(candidate):
            telemetry.record_event(
                "edit.cleared",
                level="debug",
                data={"pattern": self._validator.pattern, "length": len(candidate)},
                logger_name=self._logger_name,
            )
            candidate = ""
        index = len(candidate) if caret is None else max(0, min(caret, len(candidate)))
        return self._commit(Candidate(candidate, index, index, "set_text"))

    def delete_selected_characters(self) -> EditResult:
        if self._read_only:
            return READ_ONLY
        if not self._selection.has_selection:
            return _noop("no_selection")
        low, high = self._selection.selected_range
        return self._shrink(self._buffer.delete_range(low, high), low, "delete_selection")

    def backspace(self) -> EditResult:
        if self._read_only:
            return READ_ONLY
        if self._selection.has_selection:
            return self.delete_selected_characters()
        caret = self.caret
        if caret == 0:
            return _noop()
        return self._shrink(self._buffer.delete_range(caret - 1, caret), caret - 1, "backspace")

    def delete_forward(self) -> EditResult:
        if self._read_only:
            return READ_ONLY
        if self._selection.has_selection:
            return self.delete_selected_characters()
        caret = self.caret
        if caret >= len(self._buffer):
            return _noop()
        return self._shrink(self._buffer.delete_range(caret, caret + 1), caret, "delete_forward")

    # --- Caret and selection intents -------------------------------------------
    def move_caret_left(self, extend: bool = False) -> EditResult:
        if self._selection.has_selection and not extend:
            edge = self._selection.low
            return self._move(edge, edge)
        return self._move_caret_to(max(0, self.caret - 1), extend)

    def move_caret_right(self, extend: bool = False) -> EditResult:
        if self._selection.has_selection and not extend:
            edge = self._selection.high
            return self._move(edge, edge)
        return self._move_caret_to(min(len(self._buffer), self.caret + 1), extend)

    def move_caret_word_begin(self, extend: bool = False) -> EditResult:
        # Scans the displayed text: a masked password reads as a single word.
        return self._move_caret_to(word_begin(self._displayed, self.caret), extend)

    def move_caret_word_end(self, extend: bool = False) -> EditResult:
        return self._move_caret_to(word_end(self._displayed, self.caret), extend)

    def move_caret_home(self, extend: bool = False) -> EditResult:
        return self._move_caret_to(0, extend)

    def move_caret_end(self, extend: bool = False) -> EditResult:
        return self._move_caret_to(len(self._buffer), extend)

    def set_caret_position(self, index: int) -> EditResult:
        index = max(0, min(index, len(self._buffer)))
        return self._move(index, index)

    def select_text(self, start: int = 0, length: Optional[int] = None) -> EditResult:
        """Select ``length`` code points from ``start``; ``None`` runs to the end."""

        size = len(self._buffer)
        start = max(0, min(start, size))
        end = size if length is None else min(start + max(0, length), size)
        return self._move(start, end)

    def select_all(self) -> EditResult:
        return self.select_text(0)

    def clear_selection(self) -> EditResult:
        return self._move(self.caret, self.caret)

    def extend_selection_to(self, index: int) -> EditResult:
        index = max(0, min(index, len(self._buffer)))
        return self._move(self._selection.sel_start, index)

    def find_caret_position(self, x: float) -> int:
        return self._scroll.find_caret_position(self._displayed, x)

    # --- Clipboard intents ----------------------------------------------------
    def copy(self) -> EditResult:
        if not self._selection.has_selection:
            return _noop("no_selection")
        self.clipboard.write(self.get_selected_text())
        return EditResult(committed=False, status="copied")

    def cut(self) -> EditResult:
        copied = self.copy()
        if copied.status != "copied" or self._read_only:
            return copied
        return self.delete_selected_characters()

    def paste(self) -> EditResult:
        """Insert the clipboard text as one run.

        Line breaks are dropped. When the result would exceed the length
        limit (or the width limit), the run is cut down to what still fits
        rather than rejected, and only then validated; a run the validator
        rejects is discarded as a whole.
        """

        if self._read_only:
            return READ_ONLY
        run = _single_line(self.clipboard.read() or "")
        if not run:
            telemetry.record_event(
                "clipboard.empty", level="debug", logger_name=self._logger_name
            )
            return _noop("clipboard_empty")

        low, high = self._selection.selected_range
        if self._max_chars:
            kept = len(self._buffer) - (high - low)
            run = run[: max(0, self._max_chars - kept)]
            if not run:
                return self._reject("paste", "max_chars")
        if self._scroll.limit_width:
            with telemetry.span(
                "edit::paste_fit",
                logger_name=self._logger_name,
                component="edit_session",
                metadata={"requested": len(run)},
            ) as handle:
                while run and not self._projector.fits(
                    self._buffer.replace_range(low, high, run), self.visible_width
                ):
                    run = run[:-1]
                handle.note("fitted", kept=len(run))
            if not run:
                return self._reject("paste", "width")
        return self._insert_run(run, label="paste")

    # --- Notifications without state change ------------------------------------
    def submit(self) -> EditResult:
        self.events.emit(RETURN_PRESSED, self.text)
        self.events.emit(RETURN_OR_UNFOCUSED, self.text)
        return EditResult(committed=False, status="submitted")

    def notify_unfocused(self) -> None:
        self.events.emit(RETURN_OR_UNFOCUSED, self.text)

    # --- Configuration --------------------------------------------------------
    def set_input_validator(self, pattern: str) -> bool:
        """Swap the validator; returns ``False`` and keeps the old one on a bad pattern."""

        try:
            self._validator.set_pattern(pattern)
        except InvalidPatternError as exc:
            telemetry.record_event(
                "validator.invalid",
                level="warning",
                data={"pattern": pattern, "reason": exc.reason},
                logger_name=self._logger_name,
            )
            return False
        if not self._validator.matches(self.text):
            self.set_text("")
        return True

    def set_maximum_characters(self, max_chars: int) -> EditResult:
        if max_chars < 0:
            raise ValueError("max_chars cannot be negative")
        self._max_chars = max_chars
        if max_chars and len(self._buffer) > max_chars:
            return self._recommit(self.text[:max_chars], "max_chars")
        return _noop()

    def set_password_character(self, password_char: Optional[str]) -> EditResult:
        self._projector.password_char = normalize_password_char(password_char)
        return self._recommit(self._fit_width(self.text), "password_char")

    def limit_text_width(self, limit: bool = True) -> EditResult:
        self._scroll.limit_width = limit
        self._scroll.reset()
        return self._recommit(self._fit_width(self.text), "limit_width")

    def set_width(self, width: Optional[float]) -> EditResult:
        if width is not None and width < 0:
            raise ValueError("width cannot be negative")
        self._width = width
        self._refresh_visible_width()
        return self._recommit(self._fit_width(self.text), "resize")

    def set_suffix(self, suffix: str) -> EditResult:
        self._suffix = suffix
        self._refresh_visible_width()
        return self._recommit(self._fit_width(self.text), "suffix")

    def set_alignment(self, alignment: Alignment | str) -> None:
        self._scroll.alignment = Alignment(alignment)

    def set_read_only(self, read_only: bool = True) -> None:
        self._read_only = read_only

    def set_default_text(self, text: str) -> None:
        self.default_text = text

    def mirror(self) -> SessionMirror:
        start, end = self._scroll.visible_range(self._displayed)
        return SessionMirror(
            text=self.text,
            displayed_text=self._displayed,
            visible_text=self._displayed[start:end],
            visible_start=start,
            caret=self.caret,
            caret_x=self._scroll.caret_x(self._displayed, self.caret),
            selection=self._selection.selected_range,
            crop_position=self._scroll.crop,
            placeholder="" if self.text else self.default_text,
            suffix=self._suffix,
            read_only=self._read_only,
        )

    # --- Protocol internals ---------------------------------------------------
    def _insert_run(self, run: str, *, label: str) -> EditResult:
        if self._read_only:
            return READ_ONLY
        low, high = self._selection.selected_range
        candidate = self._buffer.replace_range(low, high, run)
        reason = self._rejection_reason(candidate)
        if reason is not None:
            return self._reject(label, reason)
        caret = low + len(run)
        return self._commit(Candidate(candidate, caret, caret, label))

    def _rejection_reason(self, candidate: str) -> Optional[str]:
        if self._max_chars and len(candidate) > self._max_chars:
            return "max_chars"
        if not self._validator.matches(candidate):
            return "validator"
        if self._scroll.limit_width and not self._projector.fits(
            candidate, self.visible_width
        ):
            return "width"
        return None

    def _reject(self, label: str, reason: str) -> EditResult:
        telemetry.record_event(
            "edit.rejected",
            level="debug",
            data={"intent": label, "reason": reason},
            logger_name=self._logger_name,
        )
        return EditResult(committed=False, status="rejected", reason=reason)

    def _shrink(self, text: str, caret: int, label: str) -> EditResult:
        if not self._validator.matches(text):
            telemetry.record_event(
                "edit.unvalidated_shrink",
                level="debug",
                data={"intent": label, "pattern": self._validator.pattern},
                logger_name=self._logger_name,
            )
        return self._commit(Candidate(text, caret, caret, label))

    def _recommit(self, text: str, label: str) -> EditResult:
        """Commit ``text`` keeping the current anchors, clamped to its length."""

        if text != self.text and not self._validator.matches(text):
            telemetry.record_event(
                "edit.unvalidated_shrink",
                level="debug",
                data={"intent": label, "pattern": self._validator.pattern},
                logger_name=self._logger_name,
            )
        size = len(text)
        return self._commit(
            Candidate(
                text,
                min(self._selection.sel_start, size),
                min(self._selection.sel_end, size),
                label,
            )
        )

    def _commit(self, candidate: Candidate) -> EditResult:
        size = len(candidate.text)
        sel_start = max(0, min(candidate.sel_start, size))
        sel_end = max(0, min(candidate.sel_end, size))
        displayed = self._projector.project(candidate.text)
        caret_before = self.caret
        with telemetry.span(
            f"edit::{candidate.label}",
            logger_name=self._logger_name,
            component="edit_session",
            metadata={"length": size, "caret": sel_end},
        ):
            changed = self._buffer.commit(candidate.text)
            self._selection.select(sel_start, sel_end)
            self._displayed = displayed
            self._scroll.follow_caret(displayed, sel_end)
        if changed:
            self.events.emit(TEXT_CHANGED, self.text)
        if self.caret != caret_before:
            self.events.emit(CARET_POSITION_CHANGED, self.caret)
        return EditResult(committed=True, status="committed")

    def _move(self, sel_start: int, sel_end: int) -> EditResult:
        caret_before = self.caret
        self._selection.select(sel_start, sel_end)
        self._selection.clamp(len(self._buffer))
        self._scroll.follow_caret(self._displayed, self.caret)
        if self.caret != caret_before:
            self.events.emit(CARET_POSITION_CHANGED, self.caret)
        return EditResult(committed=True, status="moved")

    def _move_caret_to(self, index: int, extend: bool) -> EditResult:
        if extend:
            return self._move(self._selection.sel_start, index)
        return self._move(index, index)

    def _fit_width(self, text: str) -> str:
        if not self._scroll.limit_width:
            return text
        return text[: self._projector.fitting_prefix(text, self.visible_width)]

    def _refresh_visible_width(self) -> None:
        if self._width is None:
            self._scroll.visible_width = None
            return
        suffix_width = self._projector.width(self._suffix)
        self._scroll.visible_width = max(0.0, self._width - suffix_width)


__all__ = [
    "Candidate",
    "EditResult",
    "EditSession",
    "READ_ONLY",
    "SessionMirror",
    "word_begin",
    "word_end",
]
