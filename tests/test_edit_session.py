from __future__ import annotations

from typing import Any, List, Optional, Tuple

import pytest

from editbox_engine.buffer import LocalClipboard, Validators
from editbox_engine.config import Alignment, EditBoxConfig
from editbox_engine.display import FixedWidthMetrics
from editbox_engine.runtime import telemetry
from editbox_engine.session import (
    CARET_POSITION_CHANGED,
    EVENT_NAMES,
    RETURN_OR_UNFOCUSED,
    RETURN_PRESSED,
    TEXT_CHANGED,
    EditSession,
)

CHAR_WIDTH = 10


def make_session(
    *, clipboard: Optional[Any] = None, **config: Any
) -> EditSession:
    return EditSession(
        EditBoxConfig(**config),
        metrics=FixedWidthMetrics(CHAR_WIDTH),
        clipboard=clipboard if clipboard is not None else LocalClipboard(),
    )


def record(session: EditSession) -> List[Tuple[str, object]]:
    seen: List[Tuple[str, object]] = []
    for event in EVENT_NAMES:
        session.events.subscribe(
            event, lambda payload, name=event: seen.append((name, payload))
        )
    return seen


def assert_invariants(session: EditSession) -> None:
    size = len(session.text)
    low, high = session.selected_range
    assert 0 <= low <= high <= size
    assert 0 <= session.caret <= size
    assert session.caret == session.sel_end
    assert len(session.displayed_text) == size
    assert 0 <= session.crop_position <= size


def test_rejected_insert_has_no_side_effects() -> None:
    session = make_session(validator="^[0-9]*$", max_chars=3)
    session.set_text("12")
    events = record(session)

    result = session.insert_character("a")

    assert result.committed is False
    assert result.status == "rejected"
    assert result.reason == "validator"
    assert session.text == "12"
    assert session.caret == 2
    assert events == []

    accepted = session.insert_character("3")
    assert accepted.committed is True
    assert session.text == "123"
    assert events == [(TEXT_CHANGED, "123"), (CARET_POSITION_CHANGED, 3)]

    over_limit = session.insert_character("4")
    assert over_limit.reason == "max_chars"
    assert session.text == "123"


def test_insert_replaces_selection_and_collapses() -> None:
    session = make_session(initial_text="hello")
    session.select_text(1, 3)

    session.insert_character("X")

    assert session.text == "hXo"
    assert session.caret == 2
    assert session.selected_range == (2, 2)


def test_insert_length_and_caret_arithmetic() -> None:
    session = make_session(initial_text="abcdef")
    session.select_text(2, 2)
    before = len(session.text)

    session.insert_text("XYZ")

    assert len(session.text) == before + 3 - 2
    assert session.caret == 2 + 3
    assert session.text == "abXYZef"


def test_set_text_round_trip_with_code_points() -> None:
    session = make_session()

    session.set_text("héllo 🙂")

    assert session.text == "héllo 🙂"
    assert session.caret == 7
    assert session.selected_chars == 0


def test_set_text_clears_on_validator_mismatch() -> None:
    session = make_session(validator=Validators.UINT)
    session.set_text("42")

    result = session.set_text("12a")

    assert result.committed is True
    assert session.text == ""
    assert session.caret == 0


def test_set_text_truncates_before_matching() -> None:
    session = make_session(max_chars=3)
    session.set_text("12345")
    assert session.text == "123"

    strict = make_session(max_chars=3, validator="[0-9]{5}")
    strict.set_text("12345")
    assert strict.text == ""


def test_set_text_honours_explicit_caret() -> None:
    session = make_session()

    session.set_text("abc", caret=1)
    assert session.caret == 1

    session.set_text("abcd", caret=99)
    assert session.caret == 4


def test_set_text_without_change_is_silent() -> None:
    session = make_session(initial_text="abc")
    events = record(session)

    session.set_text("abc")

    assert events == []


def test_delete_selected_characters_is_idempotent() -> None:
    session = make_session(initial_text="hello")
    session.select_text(1, 2)

    first = session.delete_selected_characters()
    second = session.delete_selected_characters()

    assert first.committed is True
    assert session.text == "hlo"
    assert session.caret == 1
    assert second.committed is False
    assert second.reason == "no_selection"
    assert session.text == "hlo"


def test_shrinking_commits_even_when_validator_disagrees() -> None:
    session = make_session(validator="[0-9]{3}")
    session.set_text("123")
    session.select_text(0, 1)

    result = session.delete_selected_characters()

    assert result.committed is True
    assert session.text == "23"


def test_backspace_and_delete_forward() -> None:
    session = make_session(initial_text="abc")

    session.backspace()
    assert session.text == "ab"
    assert session.caret == 2

    session.set_caret_position(0)
    assert session.backspace().status == "noop"

    session.delete_forward()
    assert session.text == "b"
    assert session.caret == 0

    session.move_caret_end()
    assert session.delete_forward().status == "noop"
    assert session.text == "b"


def test_backspace_removes_selection() -> None:
    session = make_session(initial_text="abcdef")
    session.select_text(1, 3)

    session.backspace()

    assert session.text == "aef"
    assert session.caret == 1


def test_unshifted_arrow_collapses_to_selection_edge() -> None:
    session = make_session(initial_text="hello")
    session.select_text(1, 3)
    assert session.caret == 4

    session.move_caret_left()
    assert session.caret == 1
    assert session.has_selection is False

    session.select_text(1, 3)
    session.move_caret_right()
    assert session.caret == 4
    assert session.has_selection is False


def test_shift_arrows_grow_and_shrink_from_fixed_anchor() -> None:
    session = make_session()
    session.set_text("hello", caret=2)

    session.move_caret_right(extend=True)
    session.move_caret_right(extend=True)
    assert (session.sel_start, session.sel_end) == (2, 4)
    assert session.get_selected_text() == "ll"

    for _ in range(3):
        session.move_caret_left(extend=True)
    assert (session.sel_start, session.sel_end) == (2, 1)
    assert session.selected_range == (1, 2)
    assert session.get_selected_text() == "e"
    assert session.caret == 1


def test_caret_movement_clamps_at_edges() -> None:
    session = make_session(initial_text="ab")
    events = record(session)

    session.move_caret_right()
    session.move_caret_home()
    session.move_caret_left()

    assert session.caret == 0
    assert events == [(CARET_POSITION_CHANGED, 0)]


def test_word_navigation() -> None:
    session = make_session()
    session.set_text("foo bar", caret=0)

    session.move_caret_word_end()
    assert session.caret == 3
    session.move_caret_word_end()
    assert session.caret == 7

    session.move_caret_word_begin()
    assert session.caret == 4
    session.move_caret_word_begin()
    assert session.caret == 0


def test_word_navigation_extends_selection() -> None:
    session = make_session()
    session.set_text("foo bar", caret=0)

    session.move_caret_word_end(extend=True)

    assert session.get_selected_text() == "foo"


def test_password_masking_keeps_real_text() -> None:
    session = make_session(password_char="*", initial_text="abc")

    assert session.displayed_text == "***"
    session.select_all()
    assert session.get_selected_text() == "abc"

    session.set_password_character(None)
    assert session.displayed_text == "abc"


def test_masked_text_reads_as_one_word() -> None:
    session = make_session(password_char="*")
    session.set_text("foo bar", caret=0)

    session.move_caret_word_end()

    assert session.caret == 7


def test_select_text_clamps() -> None:
    session = make_session(initial_text="hello")

    session.select_text(3)
    assert session.selected_range == (3, 5)

    session.select_text(10, 2)
    assert session.selected_range == (5, 5)

    session.select_text(1, 100)
    assert session.selected_range == (1, 5)
    assert session.caret == 5


def test_copy_cut_and_paste() -> None:
    clipboard = LocalClipboard()
    session = make_session(clipboard=clipboard, initial_text="hello world")
    session.select_text(0, 5)

    copied = session.copy()
    assert copied.status == "copied"
    assert clipboard.read() == "hello"
    assert session.text == "hello world"

    session.cut()
    assert session.text == " world"
    assert session.caret == 0

    session.set_caret_position(6)
    session.paste()
    assert session.text == " worldhello"
    assert session.caret == 11


def test_paste_replaces_selection_and_drops_line_breaks() -> None:
    session = make_session(clipboard=LocalClipboard("1\n2"), initial_text="abcd")
    session.select_text(1, 2)

    session.paste()

    assert session.text == "a12d"
    assert session.caret == 3


def test_paste_fills_to_max_chars() -> None:
    session = make_session(clipboard=LocalClipboard("12345"), max_chars=5)
    session.set_text("abc")

    result = session.paste()

    assert result.committed is True
    assert session.text == "abc12"
    assert session.caret == 5


def test_paste_rejected_as_a_whole_by_validator() -> None:
    session = make_session(clipboard=LocalClipboard("3a"), validator=Validators.UINT)
    session.set_text("12")
    events = record(session)

    result = session.paste()

    assert result.reason == "validator"
    assert session.text == "12"
    assert events == []


def test_paste_with_full_budget_is_rejected() -> None:
    session = make_session(clipboard=LocalClipboard("x"), max_chars=2)
    session.set_text("ab")

    assert session.paste().reason == "max_chars"


def test_unavailable_clipboard_is_a_noop() -> None:
    class BrokenClipboard:
        def read(self) -> Optional[str]:
            return None

        def write(self, text: str) -> None:
            del text

    session = make_session(clipboard=BrokenClipboard(), initial_text="abc")

    result = session.paste()

    assert result.status == "noop"
    assert result.reason == "clipboard_empty"
    assert session.text == "abc"


def test_read_only_blocks_user_edits() -> None:
    clipboard = LocalClipboard("zz")
    session = make_session(clipboard=clipboard, read_only=True, initial_text="abc")

    assert session.insert_character("x").status == "read_only"
    assert session.backspace().status == "read_only"
    assert session.paste().status == "read_only"

    session.select_all()
    assert session.cut().status == "copied"
    assert clipboard.read() == "abc"
    assert session.text == "abc"

    session.set_text("programmatic")
    assert session.text == "programmatic"


def test_limit_width_rejects_wide_candidates() -> None:
    session = make_session(width=30, limit_width=True)

    session.set_text("abcdef")
    assert session.text == "abc"

    session.set_caret_position(1)
    result = session.insert_character("d")
    assert result.reason == "width"
    assert session.text == "abc"
    assert session.caret == 1


def test_suffix_narrows_visible_width() -> None:
    session = make_session(width=40, suffix="x", limit_width=True)

    session.set_text("abcdef")

    assert session.visible_width == 30
    assert session.text == "abc"


def test_enabling_width_limit_truncates() -> None:
    session = make_session(width=20, initial_text="abcdef")
    assert session.crop_position > 0

    session.limit_text_width(True)

    assert session.text == "ab"
    assert session.crop_position == 0


def test_scroll_window_follows_caret_and_backfills() -> None:
    session = make_session(width=30)

    session.set_text("abcdefgh")
    assert session.crop_position == 5

    session.move_caret_home()
    assert session.crop_position == 0

    session.move_caret_end()
    assert session.crop_position == 5

    for _ in range(3):
        session.backspace()
    assert session.text == "abcde"
    assert session.crop_position == 2

    mirror = session.mirror()
    assert mirror.visible_text == "cde"
    assert mirror.visible_start == 2
    assert mirror.caret_x == 30


def test_find_caret_position_nearest_boundary() -> None:
    session = make_session(initial_text="abc")

    assert session.find_caret_position(24) == 2
    assert session.find_caret_position(25) == 2
    assert session.find_caret_position(26) == 3
    assert session.find_caret_position(-5) == 0
    assert session.find_caret_position(100) == 3
    assert make_session().find_caret_position(12) == 0


def test_find_caret_position_accounts_for_crop() -> None:
    session = make_session(width=30, initial_text="abcdefgh")
    assert session.crop_position == 5

    assert session.find_caret_position(0) == 5
    assert session.find_caret_position(12) == 6


def test_find_caret_position_accounts_for_alignment() -> None:
    right = make_session(width=100, alignment=Alignment.RIGHT, initial_text="abc")
    assert right.find_caret_position(70) == 0
    assert right.find_caret_position(95) == 2

    center = make_session(width=100, alignment="center", initial_text="abc")
    assert center.find_caret_position(51) == 2


def test_invalid_validator_pattern_keeps_previous_state() -> None:
    session = make_session(validator=Validators.UINT, initial_text="12")

    assert session.set_input_validator("(") is False
    assert session.input_validator == Validators.UINT
    assert session.text == "12"
    assert session.insert_character("a").reason == "validator"


def test_new_validator_clears_mismatching_text() -> None:
    session = make_session(initial_text="abc")

    assert session.set_input_validator(Validators.UINT) is True
    assert session.text == ""


def test_maximum_characters_truncates_existing_text() -> None:
    session = make_session(initial_text="hello")
    events = record(session)

    session.set_maximum_characters(3)

    assert session.text == "hel"
    assert (TEXT_CHANGED, "hel") in events
    with pytest.raises(ValueError):
        session.set_maximum_characters(-1)


def test_insert_character_requires_single_code_point() -> None:
    session = make_session()

    with pytest.raises(ValueError):
        session.insert_character("ab")


def test_submit_reports_current_text() -> None:
    session = make_session(initial_text="done")
    events = record(session)

    result = session.submit()

    assert result.status == "submitted"
    assert events == [(RETURN_PRESSED, "done"), (RETURN_OR_UNFOCUSED, "done")]


def test_placeholder_only_shows_for_empty_text() -> None:
    session = make_session(default_text="Search")

    assert session.mirror().placeholder == "Search"
    session.insert_character("a")
    assert session.mirror().placeholder == ""


def test_invariants_hold_across_mixed_operations() -> None:
    session = make_session(width=40, max_chars=12, clipboard=LocalClipboard("xyz"))
    steps = [
        lambda: session.set_text("hello world"),
        lambda: session.move_caret_word_begin(extend=True),
        lambda: session.insert_character("W"),
        lambda: session.select_text(2, 4),
        session.cut,
        session.move_caret_end,
        session.paste,
        lambda: session.select_text(0),
        lambda: session.move_caret_left(extend=True),
        session.backspace,
        lambda: session.set_caret_position(50),
        session.delete_forward,
        lambda: session.set_password_character("•"),
        lambda: session.set_width(10),
        lambda: session.set_text(""),
        session.delete_selected_characters,
    ]

    for step in steps:
        step()
        assert_invariants(session)


def test_paste_fitting_notes_kept_length(monkeypatch: pytest.MonkeyPatch) -> None:
    notes: List[Tuple[str, Any]] = []
    monkeypatch.setattr(
        telemetry.SpanHandle,
        "note",
        lambda handle, message, **extra: notes.append((message, extra)),
    )
    session = make_session(
        clipboard=LocalClipboard("12345"), width=40, limit_width=True
    )
    session.set_text("ab")

    session.paste()

    assert session.text == "ab12"
    assert notes == [("fitted", {"kept": 2})]
