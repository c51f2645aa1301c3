"""Edit session orchestration and change notifications."""

from .edit_session import (
    Candidate,
    EditResult,
    EditSession,
    READ_ONLY,
    SessionMirror,
    word_begin,
    word_end,
)
from .events import (
    CARET_POSITION_CHANGED,
    EVENT_NAMES,
    RETURN_OR_UNFOCUSED,
    RETURN_PRESSED,
    TEXT_CHANGED,
    EditEvents,
)

__all__ = [
    "Candidate",
    "EditResult",
    "EditSession",
    "READ_ONLY",
    "SessionMirror",
    "word_begin",
    "word_end",
    "CARET_POSITION_CHANGED",
    "EVENT_NAMES",
    "RETURN_OR_UNFOCUSED",
    "RETURN_PRESSED",
    "TEXT_CHANGED",
    "EditEvents",
]
