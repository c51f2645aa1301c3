"""Edit box configuration and constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from editbox_engine.buffer.validation import Validators

DEFAULT_DOUBLE_CLICK_MS = 500


class Alignment(str, Enum):
    """Horizontal placement of text that fits inside the edit box."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def normalize_password_char(value: Optional[str]) -> str:
    """Map the "disabled" spellings (``None``, ``""``, ``"\\0"``) to ``""``."""

    if value is None or value == "\0":
        return ""
    if len(value) > 1:
        raise ValueError("password_char must be a single character")
    return value


@dataclass
class EditBoxConfig:
    """Initial properties applied to a new edit session."""

    initial_text: str = ""
    max_chars: int = 0
    password_char: str = ""
    limit_width: bool = False
    read_only: bool = False
    validator: str = Validators.ALL
    alignment: Alignment = Alignment.LEFT
    suffix: str = ""
    default_text: str = ""
    width: Optional[float] = None
    double_click_ms: int = DEFAULT_DOUBLE_CLICK_MS

    def __post_init__(self) -> None:
        if self.max_chars < 0:
            raise ValueError("max_chars cannot be negative")
        if self.width is not None and self.width < 0:
            raise ValueError("width cannot be negative")
        if self.double_click_ms < 0:
            raise ValueError("double_click_ms cannot be negative")
        self.password_char = normalize_password_char(self.password_char)
        self.alignment = Alignment(self.alignment)


__all__ = [
    "Alignment",
    "DEFAULT_DOUBLE_CLICK_MS",
    "EditBoxConfig",
    "normalize_password_char",
]
