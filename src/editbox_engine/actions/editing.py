"""Editing actions bound to keys; each forwards to one edit session intent."""

from __future__ import annotations

from typing import TYPE_CHECKING

from editbox_engine.session import EditResult, EditSession

if TYPE_CHECKING:  # pragma: no cover
    from editbox_engine.keymaps.registry import ResolutionMatch


def move_left(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_left()


def move_right(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_right()


def extend_left(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_left(extend=True)


def extend_right(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_right(extend=True)


def word_left(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_word_begin()


def word_right(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_word_end()


def extend_word_left(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_word_begin(extend=True)


def extend_word_right(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_word_end(extend=True)


def move_home(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_home()


def move_end(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_end()


def extend_home(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_home(extend=True)


def extend_end(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.move_caret_end(extend=True)


def backspace(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.backspace()


def delete_forward(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.delete_forward()


def select_all(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.select_all()


def copy_selection(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.copy()


def cut_selection(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.cut()


def paste_clipboard(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.paste()


def submit(session: EditSession, match: ResolutionMatch) -> EditResult:
    del match
    return session.submit()


__all__ = [
    "move_left",
    "move_right",
    "extend_left",
    "extend_right",
    "word_left",
    "word_right",
    "extend_word_left",
    "extend_word_right",
    "move_home",
    "move_end",
    "extend_home",
    "extend_end",
    "backspace",
    "delete_forward",
    "select_all",
    "copy_selection",
    "cut_selection",
    "paste_clipboard",
    "submit",
]
