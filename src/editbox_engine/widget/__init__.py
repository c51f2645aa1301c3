"""Input-facing edit box controller."""

from .edit_box import EditBox, InputResult, KeyInput, is_control_character

__all__ = ["EditBox", "InputResult", "KeyInput", "is_control_character"]
