"""Built-in keymap for a single-line edit box."""

from __future__ import annotations

from typing import Iterable, Sequence

from editbox_engine.actions import editing

from .models import ActionRef, Binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(id="caret.left", handler=editing.move_left, description="Move caret left"),
    ActionRef(id="caret.right", handler=editing.move_right, description="Move caret right"),
    ActionRef(
        id="caret.extend_left",
        handler=editing.extend_left,
        description="Grow or shrink the selection to the left",
    ),
    ActionRef(
        id="caret.extend_right",
        handler=editing.extend_right,
        description="Grow or shrink the selection to the right",
    ),
    ActionRef(
        id="caret.word_left",
        handler=editing.word_left,
        description="Jump to the previous word start",
    ),
    ActionRef(
        id="caret.word_right",
        handler=editing.word_right,
        description="Jump to the next word end",
    ),
    ActionRef(
        id="caret.extend_word_left",
        handler=editing.extend_word_left,
        description="Select to the previous word start",
    ),
    ActionRef(
        id="caret.extend_word_right",
        handler=editing.extend_word_right,
        description="Select to the next word end",
    ),
    ActionRef(id="caret.home", handler=editing.move_home, description="Move caret to start"),
    ActionRef(id="caret.end", handler=editing.move_end, description="Move caret to end"),
    ActionRef(
        id="caret.extend_home",
        handler=editing.extend_home,
        description="Select to the start of the text",
    ),
    ActionRef(
        id="caret.extend_end",
        handler=editing.extend_end,
        description="Select to the end of the text",
    ),
    ActionRef(
        id="edit.backspace",
        handler=editing.backspace,
        description="Delete the selection or the character before the caret",
    ),
    ActionRef(
        id="edit.delete",
        handler=editing.delete_forward,
        description="Delete the selection or the character after the caret",
    ),
    ActionRef(id="edit.submit", handler=editing.submit, description="Report return pressed"),
    ActionRef(id="selection.all", handler=editing.select_all, description="Select all text"),
    ActionRef(
        id="clipboard.copy",
        handler=editing.copy_selection,
        description="Copy the selection",
    ),
    ActionRef(
        id="clipboard.cut",
        handler=editing.cut_selection,
        description="Cut the selection",
    ),
    ActionRef(
        id="clipboard.paste",
        handler=editing.paste_clipboard,
        description="Paste clipboard text at the caret",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding.on("left", "caret.left"),
    Binding.on("right", "caret.right"),
    Binding.on("shift+left", "caret.extend_left"),
    Binding.on("shift+right", "caret.extend_right"),
    Binding.on("ctrl+left", "caret.word_left"),
    Binding.on("ctrl+right", "caret.word_right"),
    Binding.on("ctrl+shift+left", "caret.extend_word_left"),
    Binding.on("ctrl+shift+right", "caret.extend_word_right"),
    Binding.on("home", "caret.home"),
    Binding.on("end", "caret.end"),
    Binding.on("shift+home", "caret.extend_home"),
    Binding.on("shift+end", "caret.extend_end"),
    Binding.on("backspace", "edit.backspace"),
    Binding.on("delete", "edit.delete"),
    Binding.on("enter", "edit.submit"),
    Binding.on("return", "edit.submit"),
    Binding.on("ctrl+a", "selection.all"),
    Binding.on("ctrl+c", "clipboard.copy"),
    Binding.on("ctrl+x", "clipboard.cut"),
    Binding.on("ctrl+v", "clipboard.paste"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and bindings.

    ``exclude_bindings`` names binding ids (``"editbox.ctrl+a"``) to leave
    out; ``extra_bindings`` are registered afterwards and may override
    defaults when ``replace`` is set.
    """

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
