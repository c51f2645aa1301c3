"""Clipboard providers used by copy, cut and paste."""

from __future__ import annotations

from typing import Optional, Protocol

import pyperclip

from editbox_engine.runtime import telemetry


class Clipboard(Protocol):
    """External clipboard the edit session reads from and writes to."""

    def read(self) -> Optional[str]:
        """Return the clipboard text, or ``None`` when nothing is available."""
        ...

    def write(self, text: str) -> None:
        """Replace the clipboard text; failures are dropped silently."""
        ...


class LocalClipboard:
    """In-process clipboard, shared by every session that holds it."""

    def __init__(self, text: str = "") -> None:
        self._text = text

    def read(self) -> Optional[str]:
        return self._text or None

    def write(self, text: str) -> None:
        self._text = text


class SystemClipboard:
    """Clipboard backed by the operating system through pyperclip."""

    def __init__(self, *, logger_name: Optional[str] = None) -> None:
        self._logger_name = logger_name

    def read(self) -> Optional[str]:
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            self._unavailable("read", exc)
            return None
        return text or None

    def write(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            self._unavailable("write", exc)

    def _unavailable(self, operation: str, exc: Exception) -> None:
        telemetry.record_event(
            "clipboard.unavailable",
            level="warning",
            data={"operation": operation, "reason": str(exc)},
            logger_name=self._logger_name,
        )


__all__ = ["Clipboard", "LocalClipboard", "SystemClipboard"]
