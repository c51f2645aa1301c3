"""Executable Textual app that hosts an edit box."""

from __future__ import annotations

import argparse
import os
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the demo runs
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use editbox_engine.adapters.textual.app"
    ) from exc

from editbox_engine.buffer import SystemClipboard, Validators
from editbox_engine.config import Alignment, EditBoxConfig
from editbox_engine.display import CellWidthMetrics
from editbox_engine.session import SessionMirror
from editbox_engine.widget import EditBox

from .controller import TextualEditBoxAdapter, TextualUIHooks

VALIDATOR_PRESETS = {
    "all": Validators.ALL,
    "int": Validators.INT,
    "uint": Validators.UINT,
    "float": Validators.FLOAT,
}


def render_mirror(mirror: SessionMirror, *, focused: bool) -> Text:
    """Render the visible slice with the selection reversed and the caret underlined."""

    if not mirror.text and mirror.placeholder and not focused:
        return Text(mirror.placeholder, style="dim italic")

    start = mirror.visible_start
    low, high = mirror.selection
    rendered = Text()
    for offset, char in enumerate(mirror.visible_text):
        index = start + offset
        style = ""
        if low <= index < high:
            style = "reverse"
        elif focused and index == mirror.caret:
            style = "underline"
        rendered.append(char, style=style)
    if focused and mirror.caret == start + len(mirror.visible_text):
        rendered.append(" ", style="reverse")
    if mirror.suffix:
        rendered.append(mirror.suffix, style="dim")
    return rendered


class EditBoxView(Static, can_focus=True):
    """Focusable Textual widget that renders and drives one ``EditBox``."""

    DEFAULT_CSS = """
	EditBoxView {
		height: 3;
		border: round $accent;
		padding: 0 1;
	}
	"""

    def __init__(self, edit_box: EditBox, hooks: TextualUIHooks, **kwargs: Any) -> None:
        super().__init__("", **kwargs)
        self.edit_box = edit_box
        self._hooks = hooks
        self.adapter: TextualEditBoxAdapter | None = None

    def on_mount(self) -> None:
        user_update = self._hooks.update_view

        def update_view(mirror: SessionMirror) -> None:
            self.update(render_mirror(mirror, focused=self.edit_box.focused))
            user_update(mirror)

        self._hooks.update_view = update_view
        self.adapter = TextualEditBoxAdapter(self.edit_box, self._hooks)
        self.adapter.resize(self.content_size.width)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(self.content_size.width)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        result = self.adapter.handle_textual_key(
            event.key, character=event.character, is_printable=event.is_printable
        )
        if result.consumed:
            event.stop()
            event.prevent_default()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        if self.adapter:
            self.capture_mouse()
            self.adapter.handle_mouse_down(event.x - self.gutter.left, shift=event.shift)

    def on_mouse_move(self, event: events.MouseMove) -> None:
        if self.adapter and self.edit_box.dragging:
            self.adapter.handle_mouse_move(event.x - self.gutter.left)

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self.adapter:
            self.release_mouse()
            self.adapter.handle_mouse_up()

    def on_focus(self, event: events.Focus) -> None:
        if self.adapter:
            self.adapter.handle_focus(True)

    def on_blur(self, event: events.Blur) -> None:
        if self.adapter:
            self.adapter.handle_focus(False)


class EditBoxApp(App[None]):
    """Minimal Textual UI embedding the edit box engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#event-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, config: Optional[EditBoxConfig] = None) -> None:
        super().__init__()
        self.edit_box = EditBox(
            config or EditBoxConfig(),
            metrics=CellWidthMetrics(),
            clipboard=SystemClipboard(),
        )
        self._status_widget: Static | None = None
        self._event_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        hooks = TextualUIHooks(
            update_view=lambda mirror: None,
            update_status=self._update_status,
            handle_event=self._handle_event,
        )
        with Vertical():
            yield EditBoxView(self.edit_box, hooks, id="edit-box")
        self._status_widget = Static("", id="status-line")
        self._event_widget = Static("", id="event-line")
        yield self._status_widget
        yield self._event_widget
        yield Footer()

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            session = self.edit_box.session
            self._status_widget.update(
                f"{status} | caret {session.caret} | crop {session.crop_position}"
            )

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if self._event_widget:
            self._event_widget.update(f"{name}: {payload!r}")


def _env(key: str, fallback: str) -> str:
    return os.environ.get(f"EDITBOX_ENGINE_{key}", fallback)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the edit box Textual demo.")
    parser.add_argument("--text", default=_env("TEXT", ""), help="Initial text")
    parser.add_argument(
        "--placeholder", default=_env("PLACEHOLDER", "Type here"), help="Default text"
    )
    parser.add_argument(
        "--max-chars",
        type=int,
        default=int(_env("MAX_CHARS", "0")),
        help="Maximum number of characters (0 for unlimited)",
    )
    parser.add_argument("--password-char", default="", help="Mask text with this character")
    parser.add_argument(
        "--validator",
        default=_env("VALIDATOR", "all"),
        help="Preset (all, int, uint, float) or a regular expression",
    )
    parser.add_argument(
        "--alignment",
        choices=[alignment.value for alignment in Alignment],
        default="left",
    )
    parser.add_argument("--suffix", default="", help="Cosmetic trailing text")
    parser.add_argument(
        "--limit-width",
        action="store_true",
        help="Reject input wider than the box instead of scrolling",
    )
    parser.add_argument("--read-only", action="store_true")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> EditBoxConfig:
    return EditBoxConfig(
        initial_text=args.text,
        default_text=args.placeholder,
        max_chars=args.max_chars,
        password_char=args.password_char,
        validator=VALIDATOR_PRESETS.get(args.validator, args.validator),
        alignment=Alignment(args.alignment),
        suffix=args.suffix,
        limit_width=args.limit_width,
        read_only=args.read_only,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    EditBoxApp(config_from_args(args)).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
