"""Textual host integration.

The controller is importable without Textual installed; ``app`` needs it.
"""

from .controller import TextualEditBoxAdapter, TextualUIHooks, split_key

__all__ = ["TextualEditBoxAdapter", "TextualUIHooks", "split_key"]
