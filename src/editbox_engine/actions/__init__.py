"""Editing verbs the default keymap binds to keys."""

from .editing import (
    backspace,
    copy_selection,
    cut_selection,
    delete_forward,
    extend_end,
    extend_home,
    extend_left,
    extend_right,
    extend_word_left,
    extend_word_right,
    move_end,
    move_home,
    move_left,
    move_right,
    paste_clipboard,
    select_all,
    submit,
    word_left,
    word_right,
)

__all__ = [
    "backspace",
    "copy_selection",
    "cut_selection",
    "delete_forward",
    "extend_end",
    "extend_home",
    "extend_left",
    "extend_right",
    "extend_word_left",
    "extend_word_right",
    "move_end",
    "move_home",
    "move_left",
    "move_right",
    "paste_clipboard",
    "select_all",
    "submit",
    "word_left",
    "word_right",
]
