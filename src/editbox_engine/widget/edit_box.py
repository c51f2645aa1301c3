"""Widget-facing controller that turns raw input into edit session intents."""

from __future__ import annotations

import time
import unicodedata
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from editbox_engine.buffer import Clipboard
from editbox_engine.config import EditBoxConfig
from editbox_engine.display import TextMetrics
from editbox_engine.keymaps import KeymapRegistry, KeyStroke, load_default_keymaps
from editbox_engine.runtime import telemetry
from editbox_engine.session import EditEvents, EditResult, EditSession


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to the edit box."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def token(self) -> str:
        return KeyStroke(self.key, self.modifiers).token


@dataclass(frozen=True, slots=True)
class InputResult:
    """Result returned from every ``EditBox`` input handler."""

    consumed: bool
    status: str = "ok"
    reason: Optional[str] = None

    @classmethod
    def from_edit(cls, result: EditResult) -> "InputResult":
        return cls(consumed=True, status=result.status, reason=result.reason)


def is_control_character(char: str) -> bool:
    # Only Cc; format characters such as ZWJ and bidi marks are text.
    return unicodedata.category(char) == "Cc"


class EditBox:
    """Single-line edit box composed around an owned ``EditSession``.

    The box keeps only input bookkeeping (focus, enabled state, drag and
    double-click tracking); all text state lives in ``session``.
    """

    def __init__(
        self,
        config: Optional[EditBoxConfig] = None,
        *,
        metrics: Optional[TextMetrics] = None,
        clipboard: Optional[Clipboard] = None,
        events: Optional[EditEvents] = None,
        keymaps: Optional[KeymapRegistry] = None,
        clock: Callable[[], float] = time.monotonic,
        logger_name: Optional[str] = None,
    ) -> None:
        config = config or EditBoxConfig()
        self.session = EditSession(
            config,
            metrics=metrics,
            clipboard=clipboard,
            events=events,
            logger_name=logger_name,
        )
        if keymaps is None:
            keymaps = KeymapRegistry(logger_name="editbox_engine.keymaps")
            load_default_keymaps(keymaps)
        self.keymaps = keymaps
        self.double_click_ms = config.double_click_ms
        self.enabled = True
        self.focused = False
        self._clock = clock
        self._dragging = False
        self._last_press: Optional[float] = None

    @property
    def events(self) -> EditEvents:
        return self.session.events

    @property
    def dragging(self) -> bool:
        return self._dragging

    # --- Keyboard -------------------------------------------------------------
    def can_handle_key_press(self, key: KeyInput) -> bool:
        return self.enabled and self.keymaps.resolve(key.token) is not None

    def key_pressed(self, key: KeyInput) -> InputResult:
        if not self.enabled:
            return InputResult(consumed=False, status="disabled")
        match = self.keymaps.resolve(key.token)
        if match is None:
            return InputResult(consumed=False, status="unbound")
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.session, match)
        if isinstance(outcome, EditResult):
            return InputResult.from_edit(outcome)
        return InputResult(consumed=True)

    def text_entered(self, text: str) -> InputResult:
        """Insert typed text; control characters are left to ``key_pressed``."""

        if not self.enabled:
            return InputResult(consumed=False, status="disabled")
        printable = "".join(ch for ch in text if not is_control_character(ch))
        if not printable:
            return InputResult(consumed=False, status="ignored")
        if len(printable) == 1:
            return InputResult.from_edit(self.session.insert_character(printable))
        return InputResult.from_edit(self.session.insert_text(printable))

    # --- Mouse ----------------------------------------------------------------
    def left_mouse_pressed(self, x: float, *, shift: bool = False) -> InputResult:
        """Place the caret under ``x``; a quick second press selects everything."""

        if not self.enabled:
            return InputResult(consumed=False, status="disabled")
        self.set_focused(True)
        now = self._clock()
        last, self._last_press = self._last_press, now
        if last is not None and (now - last) * 1000 <= self.double_click_ms:
            self._last_press = None
            self._dragging = False
            return InputResult.from_edit(self.session.select_all())

        index = self.session.find_caret_position(x)
        self._dragging = True
        if shift:
            return InputResult.from_edit(self.session.extend_selection_to(index))
        return InputResult.from_edit(self.session.set_caret_position(index))

    def mouse_moved(self, x: float) -> InputResult:
        if not self._dragging:
            return InputResult(consumed=False, status="idle")
        index = self.session.find_caret_position(x)
        return InputResult.from_edit(self.session.extend_selection_to(index))

    def left_mouse_released(self) -> None:
        self._dragging = False

    # --- Focus ----------------------------------------------------------------
    def set_focused(self, focused: bool) -> None:
        if focused == self.focused:
            return
        self.focused = focused
        if not focused:
            self._dragging = False
            self.session.notify_unfocused()

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        if not enabled:
            self.set_focused(False)


__all__ = ["EditBox", "InputResult", "KeyInput", "is_control_character"]
