"""Text storage, selection anchors, validation and clipboard access."""

from .clipboard import Clipboard, LocalClipboard, SystemClipboard
from .selection import Range, SelectionModel
from .text import TextBuffer
from .validation import InvalidPatternError, TextValidator, Validators

__all__ = [
    "Clipboard",
    "LocalClipboard",
    "SystemClipboard",
    "Range",
    "SelectionModel",
    "TextBuffer",
    "InvalidPatternError",
    "TextValidator",
    "Validators",
]
