"""UI-agnostic single-line edit box engine."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "display",
    "keymaps",
    "runtime",
    "session",
    "widget",
]

__version__ = "0.1.0"
