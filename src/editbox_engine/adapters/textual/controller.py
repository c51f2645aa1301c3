"""Minimal Textual adapter that wires an EditBox into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from editbox_engine.session import EVENT_NAMES, SessionMirror
from editbox_engine.widget import EditBox, InputResult, KeyInput

# Textual names that differ from the default keymap tokens.
_KEY_ALIASES = {
    "ctrl+h": "backspace",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[SessionMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


def split_key(key: str) -> Tuple[str, Tuple[str, ...]]:
    """Split Textual's ``"ctrl+shift+left"`` into ``("left", ("ctrl", "shift"))``."""

    key = _KEY_ALIASES.get(key, key)
    parts = key.split("+")
    if len(parts) == 1 or not parts[-1]:
        return key, ()
    return parts[-1], tuple(parts[:-1])


class TextualEditBoxAdapter:
    """Bridges Textual key/mouse/focus events to an ``EditBox``."""

    def __init__(self, edit_box: EditBox, hooks: TextualUIHooks) -> None:
        self.edit_box = edit_box
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_view()

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        is_printable: bool = False,
    ) -> InputResult:
        """Dispatch a Textual key event: bound keys first, then typed text."""

        name, modifiers = split_key(key)
        stroke = KeyInput(key=name, modifiers=modifiers, text=character)
        self._log_state("key ->", key=key, character=character)
        if self.edit_box.can_handle_key_press(stroke):
            result = self.edit_box.key_pressed(stroke)
        elif is_printable and character:
            result = self.edit_box.text_entered(character)
        else:
            result = InputResult(consumed=False, status="unbound")
        self._after_input(result)
        return result

    def handle_mouse_down(self, x: float, *, shift: bool = False) -> InputResult:
        result = self.edit_box.left_mouse_pressed(x, shift=shift)
        self._after_input(result)
        return result

    def handle_mouse_move(self, x: float) -> InputResult:
        result = self.edit_box.mouse_moved(x)
        if result.consumed:
            self._after_input(result)
        return result

    def handle_mouse_up(self) -> None:
        self.edit_box.left_mouse_released()

    def handle_focus(self, focused: bool) -> None:
        self.edit_box.set_focused(focused)
        self._refresh_view()

    def resize(self, width: float) -> None:
        self.edit_box.session.set_width(width)
        self._refresh_view()

    def _after_input(self, result: InputResult) -> None:
        status = result.reason or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_view()
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            reason=result.reason,
        )

    def _subscribe_events(self) -> None:
        events = self.edit_box.events
        for event in EVENT_NAMES:
            events.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.edit_box.session.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.edit_box.session
        return {
            "caret": session.caret,
            "selection": session.selected_range,
            "crop": session.crop_position,
            "length": len(session.text),
            "version": session.version,
            "focused": self.edit_box.focused,
        }


__all__ = ["TextualEditBoxAdapter", "TextualUIHooks", "split_key"]
