"""Notification bus for committed edit session transitions."""

from __future__ import annotations

from typing import Callable, Dict

TEXT_CHANGED = "edit.text_changed"
CARET_POSITION_CHANGED = "edit.caret_position_changed"
RETURN_PRESSED = "edit.return_pressed"
RETURN_OR_UNFOCUSED = "edit.return_or_unfocused"

EVENT_NAMES = (
    TEXT_CHANGED,
    CARET_POSITION_CHANGED,
    RETURN_PRESSED,
    RETURN_OR_UNFOCUSED,
)

Listener = Callable[[object], None]


class EditEvents:
    """Minimal event bus; listeners run synchronously in subscription order."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it again."""

        if event not in EVENT_NAMES:
            raise KeyError(f"Unknown edit event '{event}'")
        listeners = self._subscribers.setdefault(event, [])
        listeners.append(callback)

        def unsubscribe() -> None:
            if callback in listeners:
                listeners.remove(callback)

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


__all__ = [
    "CARET_POSITION_CHANGED",
    "EVENT_NAMES",
    "EditEvents",
    "Listener",
    "RETURN_OR_UNFOCUSED",
    "RETURN_PRESSED",
    "TEXT_CHANGED",
]
